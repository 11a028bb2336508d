"""
Upstream response normalization.

Maps whatever Azure OpenAI returned into the relay's stable ChatResponse,
with a stated default for every field.
"""
import math
import uuid
from typing import Any, Dict, Union

from exchange_relay.api.models.chat import ChatChoice, ChatMessage, ChatResponse, ChatUsage


def _first_choice(data: Dict[str, Any]) -> Dict[str, Any]:
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def _counter(usage: Dict[str, Any], key: str) -> Union[int, float]:
    value = usage.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    # NaN and Infinity cannot be rendered as JSON
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def normalize_chat_completion(data: Dict[str, Any], model: str) -> ChatResponse:
    """
    Build the relay response from a raw upstream completion.

    - content defaults to "" when missing at any depth
    - finish_reason is "length" only if upstream said so, otherwise "stop"
    - each usage counter defaults to 0 independently
    """
    choice = _first_choice(data)

    message = choice.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        content = ""

    finish_reason = "length" if choice.get("finish_reason") == "length" else "stop"

    usage = data.get("usage")
    if not isinstance(usage, dict):
        usage = {}

    return ChatResponse(
        request_id=str(uuid.uuid4()),
        model=model,
        choices=[
            ChatChoice(
                index=0,
                message=ChatMessage(content=content),
                finish_reason=finish_reason,
            )
        ],
        usage=ChatUsage(
            prompt_tokens=_counter(usage, "prompt_tokens"),
            completion_tokens=_counter(usage, "completion_tokens"),
            total_tokens=_counter(usage, "total_tokens"),
        ),
    )
