# =============================================================================
# Unit Tests — SSE Framing and Decoding
# =============================================================================

from app.services.sse import SSEDecoder, format_sse


class TestFormatSSE:

    def test_frame_layout(self):
        assert format_sse("done", {}) == "event: done\ndata: {}\n\n"

    def test_non_ascii_kept_verbatim(self):
        frame = format_sse("step", {"name": "[Počet podlaží] Porovnanie"})
        assert "Počet podlaží" in frame


class TestSSEDecoder:

    def test_single_frame(self):
        messages = SSEDecoder().feed(format_sse("step", {"status": "running"}))
        assert len(messages) == 1
        assert messages[0].event == "step"
        assert messages[0].data == {"status": "running"}

    def test_frame_split_across_reads(self):
        frame = format_sse("result", [{"name": "Počet podlaží"}])
        decoder = SSEDecoder()

        assert decoder.feed(frame[:15]) == []
        assert decoder.pending == frame[:15]

        messages = decoder.feed(frame[15:])
        assert [m.event for m in messages] == ["result"]
        assert messages[0].data == [{"name": "Počet podlaží"}]
        assert decoder.pending == ""

    def test_several_frames_in_one_read(self):
        chunk = (
            format_sse("step", {"n": 1})
            + format_sse("step", {"n": 2})
            + format_sse("done", {})
        )
        messages = SSEDecoder().feed(chunk)
        assert [(m.event, m.data) for m in messages] == [
            ("step", {"n": 1}), ("step", {"n": 2}), ("done", {}),
        ]

    def test_trailing_partial_frame_is_buffered(self):
        decoder = SSEDecoder()
        messages = decoder.feed(format_sse("step", {"n": 1}) + "event: do")
        assert len(messages) == 1
        assert decoder.pending == "event: do"

    def test_crlf_line_endings(self):
        messages = SSEDecoder().feed('event: error\r\ndata: {"message": "x"}\r\n\r\n')
        assert messages[0].event == "error"
        assert messages[0].data == {"message": "x"}

    def test_non_json_data_returned_raw(self):
        messages = SSEDecoder().feed("data: hello\n\n")
        assert messages[0].event == "message"
        assert messages[0].data == "hello"

    def test_comment_only_frame_ignored(self):
        assert SSEDecoder().feed(": keep-alive\n\n") == []
