"""
Request and response models for the chat relay endpoint.
"""
from typing import Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Validated chat request.

    - model: Azure deployment name (manifest deployments[].deploymentName)
    - messages: [{role: "system" | "user" | "assistant", content: str}], forwarded as-is
    - max_tokens: required for this relay
    """
    model: str
    messages: List[Dict[str, Any]]
    max_tokens: Union[int, float]


class ChatMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str = ""


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: Literal["stop", "length"] = "stop"


class ChatUsage(BaseModel):
    prompt_tokens: Union[int, float] = 0
    completion_tokens: Union[int, float] = 0
    total_tokens: Union[int, float] = 0


class ChatResponse(BaseModel):
    """Normalized chat completion returned to Kea."""

    model_config = ConfigDict(populate_by_name=True)

    request_id: str = Field(alias="requestId")
    model: str
    choices: List[ChatChoice]
    usage: ChatUsage
