# =============================================================================
# Server-Sent Events — Framing and Incremental Decoding
# =============================================================================
#
# Wire format, one frame per event:
#
#   event: step
#   data: {"name": "...", "status": "running", ...}
#   <blank line>
#
# The workflow stream sends `step` frames, then `result` and `done`, or
# a single terminal `error` frame.
#
# SSEDecoder is the reading side for Python clients of POST /workflow; the
# API tests decode the stream with it. Feed it whatever chunks the transport
# delivers; it returns the frames completed so far and keeps any trailing
# partial frame buffered for the next read.
# =============================================================================

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def format_sse(event: str, data: Any) -> str:
    """Serialise one named event as an SSE frame."""
    return f"event: {event}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


@dataclass
class SSEMessage:
    event: str
    data: Any


class SSEDecoder:
    """Incremental SSE parser tolerant of frames split across reads."""

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, chunk: str) -> list[SSEMessage]:
        self._buffer += chunk.replace("\r\n", "\n")
        *frames, self._buffer = self._buffer.split("\n\n")
        messages = []
        for frame in frames:
            message = _parse_frame(frame)
            if message is not None:
                messages.append(message)
        return messages

    @property
    def pending(self) -> str:
        """Buffered text of the incomplete trailing frame."""
        return self._buffer


def _parse_frame(frame: str) -> SSEMessage | None:
    event = "message"
    data_lines: list[str] = []
    for line in frame.split("\n"):
        if line.startswith("event:"):
            event = line[len("event:"):].strip()
        elif line.startswith("data:"):
            data_lines.append(line[len("data:"):].lstrip())

    if not data_lines:
        return None

    raw = "\n".join(data_lines)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        data = raw
    return SSEMessage(event=event, data=data)
