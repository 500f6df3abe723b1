# =============================================================================
# LLM Providers — Completions and Tool Calls
# =============================================================================
#
# One `complete()` surface over two SDKs, used by the comparison judges
# (comparator, classifier, discrepancy explanation) and by the chat
# endpoint. Chat also offers the model tools and reads back the tool the
# model picked. Document search is not here; it is bound to OpenAI vector
# stores and lives in file_search.py.
#
#   LLMProvider (Protocol)
#   ├── OpenAICompatibleProvider  system prompt as the first message,
#   │                             tools as "function" definitions
#   └── AnthropicProvider         system prompt as a top-level kwarg,
#                                 tools with an `input_schema`
#
#   get_llm_provider()         configured singleton
#   create_provider_from_id()  fresh provider for "type/model[@base_url]"
#   chat()                     system prompt + one user message → text
# =============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolSpec:
    """A function the model may call; `parameters` is a JSON schema."""

    name: str
    description: str
    parameters: dict[str, Any]


@dataclass
class ToolCall:
    name: str
    arguments: dict[str, Any]


@dataclass
class LLMResponse:
    """Provider-neutral completion: text plus any requested tool calls."""

    content: str
    model: str
    tool_calls: list[ToolCall] = field(default_factory=list)


class LLMProvider(Protocol):

    async def complete(
        self,
        messages: list[dict[str, str]],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        tools: list[ToolSpec] | None = None,
    ) -> LLMResponse:
        """
        Generate one completion.

        Args:
            messages: {"role": "user"|"assistant", "content": str} dicts.
                The system prompt goes in `system`, never in here.
            system: System prompt.
            temperature: Sampling temperature (default from config; 0 is
                a valid override).
            max_tokens: Output cap (default from config).
            tools: Functions the model may call instead of answering.
        """
        ...


# ---------------------------------------------------------------------------
# OpenAI-Compatible
# ---------------------------------------------------------------------------


def _parse_arguments(raw: str | None) -> dict[str, Any]:
    """Tool arguments arrive as a JSON string; malformed JSON gives {}."""
    try:
        arguments = json.loads(raw or "{}")
    except json.JSONDecodeError:
        logger.warning("Unparseable tool arguments: %r", (raw or "")[:200])
        return {}
    return arguments if isinstance(arguments, dict) else {}


class OpenAICompatibleProvider:
    """
    OpenAI itself (the default, the same account that owns the vector
    stores) or any endpoint following the OpenAI chat API:

        LLM_PROVIDER=openai_compatible
        LLM_BASE_URL=https://api.deepseek.com/v1
        LLM_API_KEY=your-key
        LLM_MODEL=deepseek-chat
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
    ) -> None:
        from openai import AsyncOpenAI

        resolved_key = api_key or settings.llm_api_key or settings.openai_api_key
        if not resolved_key:
            raise ValueError(
                "No API key configured for OpenAI-compatible provider. "
                "Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )

        resolved_base_url = base_url or settings.llm_base_url
        client_kwargs: dict = {"api_key": resolved_key}
        if resolved_base_url:
            client_kwargs["base_url"] = resolved_base_url

        self._client = AsyncOpenAI(**client_kwargs)
        self._model = model or settings.llm_model

        logger.info(
            "Initialized OpenAICompatibleProvider (model=%s, base_url=%s)",
            self._model, resolved_base_url or "default",
        )

    async def complete(
        self,
        messages: list[dict[str, str]],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        tools: list[ToolSpec] | None = None,
    ) -> LLMResponse:
        all_messages: list[dict[str, str]] = []
        if system:
            all_messages.append({"role": "system", "content": system})
        all_messages.extend(messages)

        kwargs: dict = {
            "model": self._model,
            "messages": all_messages,
            "max_tokens": max_tokens or settings.llm_max_tokens,
            "temperature": (
                settings.llm_temperature if temperature is None else temperature
            ),
        }
        if tools:
            kwargs["tools"] = [
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": tool.parameters,
                    },
                }
                for tool in tools
            ]

        response = await self._client.chat.completions.create(**kwargs)

        if not response.choices:
            return LLMResponse(content="", model=response.model or self._model)

        message = response.choices[0].message
        tool_calls = [
            ToolCall(
                name=call.function.name,
                arguments=_parse_arguments(call.function.arguments),
            )
            for call in message.tool_calls or []
            if getattr(call, "function", None) is not None
        ]
        return LLMResponse(
            content=message.content or "",
            model=response.model or self._model,
            tool_calls=tool_calls,
        )


# ---------------------------------------------------------------------------
# Anthropic (Claude)
# ---------------------------------------------------------------------------


class AnthropicProvider:

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        from anthropic import AsyncAnthropic

        resolved_key = api_key or settings.llm_api_key or settings.anthropic_api_key
        if not resolved_key:
            raise ValueError(
                "No Anthropic API key configured. Set LLM_API_KEY or "
                "ANTHROPIC_API_KEY in .env"
            )

        self._client = AsyncAnthropic(api_key=resolved_key)
        self._model = model or settings.llm_model

        logger.info("Initialized AnthropicProvider (model=%s)", self._model)

    async def complete(
        self,
        messages: list[dict[str, str]],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        tools: list[ToolSpec] | None = None,
    ) -> LLMResponse:
        kwargs: dict = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens or settings.llm_max_tokens,
            "temperature": (
                settings.llm_temperature if temperature is None else temperature
            ),
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.parameters,
                }
                for tool in tools
            ]

        response = await self._client.messages.create(**kwargs)

        content = ""
        tool_calls: list[ToolCall] = []
        for block in response.content:
            if block.type == "text" and not content:
                content = block.text
            elif block.type == "tool_use":
                tool_calls.append(ToolCall(name=block.name, arguments=dict(block.input)))

        return LLMResponse(content=content, model=response.model, tool_calls=tool_calls)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

_provider: OpenAICompatibleProvider | AnthropicProvider | None = None


def get_llm_provider() -> OpenAICompatibleProvider | AnthropicProvider:
    """Configured provider, created on first use: "anthropic" or OpenAI-compatible."""
    global _provider
    if _provider is None:
        if settings.llm_provider == "anthropic":
            _provider = AnthropicProvider()
        else:
            _provider = OpenAICompatibleProvider()
    return _provider


_KNOWN_PROVIDER_TYPES = ("anthropic", "openai_compatible")


def _parse_provider_id(provider_id: str) -> tuple[str, str, str | None]:
    """
    Split "type/model[@base_url]" into its parts.

        "anthropic/claude-sonnet-4-6" → ("anthropic", "claude-sonnet-4-6", None)
        "openai_compatible/deepseek-chat@https://api.deepseek.com/v1"
            → ("openai_compatible", "deepseek-chat", "https://api.deepseek.com/v1")
    """
    provider_type, slash, rest = provider_id.partition("/")
    if not slash or not rest:
        raise ValueError(
            f"Invalid provider_id '{provider_id}', expected 'type/model[@base_url]'"
        )
    if provider_type not in _KNOWN_PROVIDER_TYPES:
        raise ValueError(
            f"Unknown provider type '{provider_type}', "
            f"expected one of {list(_KNOWN_PROVIDER_TYPES)}"
        )

    model, _, base_url = rest.partition("@")
    return provider_type, model, base_url or None


def create_provider_from_id(
    provider_id: str,
    api_key: str | None = None,
) -> OpenAICompatibleProvider | AnthropicProvider:
    """Fresh provider for the CLI's --provider flag; the singleton is untouched."""
    provider_type, model, base_url = _parse_provider_id(provider_id)
    if provider_type == "anthropic":
        return AnthropicProvider(api_key=api_key, model=model)
    return OpenAICompatibleProvider(api_key=api_key, model=model, base_url=base_url)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def chat(
    system_prompt: str,
    user_message: str,
    llm: LLMProvider | None = None,
) -> str:
    """
    Single-turn completion: system prompt + one user message → text.

    Returns "" when the provider returns no text. Transport and service
    errors propagate to the caller unchanged.
    """
    provider = llm or get_llm_provider()
    response = await provider.complete(
        messages=[{"role": "user", "content": user_message}],
        system=system_prompt,
    )
    return response.content or ""
