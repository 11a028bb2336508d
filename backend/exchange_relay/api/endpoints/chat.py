"""
Chat relay endpoint.

Forwards Kea chat requests to the configured Azure OpenAI deployment.
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from exchange_relay.api.models import ChatResponse
from exchange_relay.config.settings import Settings, get_settings
from exchange_relay.controllers.chat_controller import ChatController
from exchange_relay.middleware.request_logging import REQUEST_ID_HEADER

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_controller(settings: Settings = Depends(get_settings)) -> ChatController:
    """Dependency injection for ChatController."""
    return ChatController(settings)


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    response_model=ChatResponse,
    responses={
        400: {"description": "Invalid JSON or missing model, messages[], max_tokens"},
        500: {"description": "Server misconfiguration"},
        502: {"description": "Upstream transport error"},
        504: {"description": "Upstream timed out"},
    },
)
async def relay_chat(
    request: Request,
    controller: ChatController = Depends(get_chat_controller),
) -> JSONResponse:
    """
    Relay a chat completion to Azure OpenAI.

    Body: {"model": "<deploymentName>", "messages": [...], "max_tokens": 128}.
    The body is read raw so malformed JSON gets the relay's own 400 rather
    than a schema 422. Upstream error statuses are passed through with the
    upstream error message as plain text.
    """
    body = await request.body()
    response = await controller.relay_chat(body)
    return JSONResponse(
        content=response.model_dump(by_alias=True),
        headers={REQUEST_ID_HEADER: response.request_id},
    )
