"""
Inbound chat request parsing and validation.

Rules are applied in order and the first failure wins, so nothing partial is
ever forwarded upstream.
"""
import json
import math
from typing import Any

from exchange_relay.api.models.chat import ChatRequest
from exchange_relay.errors import ChatValidationError


def parse_chat_body(body: bytes) -> Any:
    """Decode the raw request body as JSON."""
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError):
        raise ChatValidationError("Invalid JSON")


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but "true" is not a token budget
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_chat_request(payload: Any) -> ChatRequest:
    """
    Check a parsed body and build a ChatRequest.

    Raises:
        ChatValidationError: Naming the first field that is missing or malformed.
    """
    if not isinstance(payload, dict):
        raise ChatValidationError(
            "Request body must be a JSON object with model, messages[] and max_tokens"
        )

    model = payload.get("model")
    if not isinstance(model, str) or not model:
        raise ChatValidationError("Required field: model (deployment name) must be a non-empty string")

    messages = payload.get("messages")
    if not isinstance(messages, list) or not messages:
        raise ChatValidationError("Required field: messages[] must be a non-empty array")

    max_tokens = payload.get("max_tokens")
    if not _is_finite_number(max_tokens):
        raise ChatValidationError("Required field: max_tokens must be a finite number")

    # messages are forwarded to Azure verbatim
    return ChatRequest.model_construct(model=model, messages=messages, max_tokens=max_tokens)
