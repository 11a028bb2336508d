from .normalize import normalize_chat_completion
from .upstream import invoke_chat_completion
from .validation import parse_chat_body, validate_chat_request

__all__ = [
    "invoke_chat_completion",
    "normalize_chat_completion",
    "parse_chat_body",
    "validate_chat_request",
]
