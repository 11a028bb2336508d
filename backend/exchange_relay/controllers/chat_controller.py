"""
Controller for the chat relay.

Runs the relay pipeline for one request: configuration check, request
validation, one bounded upstream call, response normalization.
"""
import logging

from exchange_relay.api.models.chat import ChatResponse
from exchange_relay.config.settings import Settings, resolve_relay_config
from exchange_relay.services.relay import (
    invoke_chat_completion,
    normalize_chat_completion,
    parse_chat_body,
    validate_chat_request,
)

logger = logging.getLogger(__name__)


class ChatController:
    """Controller for chat relay operations."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def relay_chat(self, body: bytes) -> ChatResponse:
        """
        Relay a raw chat request body to Azure OpenAI.

        Configuration is checked before the body is looked at, so a
        misconfigured relay answers 500 whatever the payload.

        Args:
            body: Raw request body

        Returns:
            Normalized ChatResponse

        Raises:
            RelayError: Any pipeline failure, mapped to an HTTP status by
                ErrorHandlingMiddleware
        """
        config = resolve_relay_config(self.settings)
        request = validate_chat_request(parse_chat_body(body))

        data = await invoke_chat_completion(request, config)
        response = normalize_chat_completion(data, request.model)

        logger.info(f"Relayed chat for deployment {request.model} as {response.request_id}")
        return response
