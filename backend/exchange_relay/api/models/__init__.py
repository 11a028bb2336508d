from .chat import ChatChoice, ChatMessage, ChatRequest, ChatResponse, ChatUsage
from .error import ErrorResponse
from .manifest import ManifestDeployment, ManifestResponse, ProviderInfo

__all__ = [
    "ErrorResponse",
    "ChatRequest",
    "ChatResponse",
    "ChatChoice",
    "ChatMessage",
    "ChatUsage",
    "ManifestDeployment",
    "ManifestResponse",
    "ProviderInfo",
]
