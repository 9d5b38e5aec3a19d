"""Helpers for reading Claude SDK messages.

SDK types are matched by class name so this module does not import them.
"""

from __future__ import annotations

import json
from typing import Any

from diffreview.agents.result import AgentUsage
from diffreview.logging import get_logger

logger = get_logger(__name__)


def get_zero_usage() -> AgentUsage:
    """Create an AgentUsage instance with all zeros."""
    return AgentUsage(
        input_tokens=0,
        output_tokens=0,
        total_cost_usd=None,
        duration_ms=0,
    )


def extract_usage(messages: list[Any]) -> AgentUsage:
    """Extract usage statistics from SDK messages.

    Searches for a ResultMessage in the message list and extracts
    token usage and timing information.

    Args:
        messages: List of messages from Claude SDK response.

    Returns:
        AgentUsage with token counts, cost, and timing.
        Returns zero usage if no ResultMessage found.
    """
    result_msg = None
    for msg in messages:
        if type(msg).__name__ == "ResultMessage":
            result_msg = msg
            break

    if result_msg is None:
        return get_zero_usage()

    usage = getattr(result_msg, "usage", None) or {}
    return AgentUsage(
        input_tokens=usage.get("input_tokens", 0),
        output_tokens=usage.get("output_tokens", 0),
        total_cost_usd=getattr(result_msg, "total_cost_usd", None),
        duration_ms=getattr(result_msg, "duration_ms", 0),
    )


def extract_text(message: Any) -> str:
    """Extract text content from an AssistantMessage.

    Args:
        message: AssistantMessage object from Claude SDK

    Returns:
        Plain text content from all text blocks, concatenated with newlines.
        Returns empty string if message has no text content.
    """
    if message is None or not hasattr(message, "content"):
        return ""

    text_parts = []
    for block in message.content:
        if type(block).__name__ == "TextBlock" and hasattr(block, "text"):
            text_parts.append(block.text)

    return "\n".join(text_parts)


def extract_all_text(messages: list[Any]) -> str:
    """Extract text from all AssistantMessage objects in a list.

    Args:
        messages: List of Message objects (may include UserMessage,
                 AssistantMessage, etc.)

    Returns:
        Combined text content from all AssistantMessage objects, separated
        by double newlines.
    """
    text_parts = []
    for msg in messages:
        if msg is None:
            continue
        if type(msg).__name__ == "AssistantMessage":
            text = extract_text(msg)
            if text:
                text_parts.append(text)

    return "\n\n".join(text_parts)


def _iter_blocks(messages: list[Any], block_type: str) -> Any:
    for msg in messages:
        content = getattr(msg, "content", None)
        if not isinstance(content, list):
            continue
        for block in content:
            if type(block).__name__ == block_type:
                yield block


def extract_tool_uses(messages: list[Any]) -> dict[str, tuple[str, dict[str, Any]]]:
    """Map tool use ids to the tool name and input the agent sent.

    Args:
        messages: List of messages from Claude SDK response.

    Returns:
        ``{tool_use_id: (tool_name, input)}`` in call order.
    """
    uses: dict[str, tuple[str, dict[str, Any]]] = {}
    for block in _iter_blocks(messages, "ToolUseBlock"):
        tool_input = getattr(block, "input", None)
        uses[getattr(block, "id", "")] = (
            getattr(block, "name", ""),
            tool_input if isinstance(tool_input, dict) else {},
        )
    return uses


def _result_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(item.get("text", ""))
            for item in content
            if isinstance(item, dict) and item.get("type") == "text"
        )
    return ""


def extract_tool_results(messages: list[Any]) -> list[tuple[str, dict[str, Any]]]:
    """Collect the JSON payloads returned by tool calls.

    Results whose tool use is unknown, or whose content is not a JSON object,
    are skipped.

    Args:
        messages: List of messages from Claude SDK response.

    Returns:
        ``(tool_name, payload)`` pairs in the order the results arrived.
    """
    uses = extract_tool_uses(messages)
    results: list[tuple[str, dict[str, Any]]] = []
    for block in _iter_blocks(messages, "ToolResultBlock"):
        tool_use_id = getattr(block, "tool_use_id", "")
        if tool_use_id not in uses:
            continue
        text = _result_text(getattr(block, "content", None))
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("tool_result_not_json", tool_use_id=tool_use_id)
            continue
        if isinstance(payload, dict):
            results.append((uses[tool_use_id][0], payload))
    return results
