"""
Azure OpenAI upstream invoker.

Performs exactly one forwarded chat completion call per relay request,
bounded by the configured timeout, and classifies the outcome.
"""
import asyncio
import json
import logging
import time
from typing import Any, Dict, Tuple
from urllib.parse import quote

import aiohttp
from aiohttp import ClientTimeout

from exchange_relay.api.models.chat import ChatRequest
from exchange_relay.config.settings import RelayConfig
from exchange_relay.errors import UpstreamError, UpstreamTimeoutError, UpstreamTransportError

logger = logging.getLogger(__name__)


def build_upstream_url(config: RelayConfig, deployment: str) -> str:
    """Deployment-addressed chat completions URL."""
    return (
        f"{config.endpoint}/openai/deployments/{quote(deployment, safe='')}"
        f"/chat/completions?api-version={quote(config.api_version, safe='')}"
    )


def build_upstream_payload(request: ChatRequest) -> Dict[str, Any]:
    # The deployment lives in the URL path; never send "model" in the body.
    return {
        "messages": request.messages,
        "max_tokens": request.max_tokens,
    }


def parse_upstream_body(text: str) -> Dict[str, Any]:
    """Best-effort JSON decode; anything unusable becomes an empty object."""
    if not text:
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def extract_error_message(data: Dict[str, Any], text: str, status_code: int) -> str:
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return text or f"HTTP {status_code}"


async def _post(
    session: aiohttp.ClientSession,
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
) -> Tuple[int, bytes]:
    async with session.post(url, json=payload, headers=headers) as response:
        return response.status, await response.read()


async def invoke_chat_completion(request: ChatRequest, config: RelayConfig) -> Dict[str, Any]:
    """
    Forward a validated chat request to Azure OpenAI.

    Args:
        request: Validated ChatRequest
        config: Resolved upstream settings

    Returns:
        The upstream JSON object ({} if the body was empty or not JSON)

    Raises:
        UpstreamTimeoutError: No response within config.request_timeout_ms (504)
        UpstreamTransportError: Connection, DNS or TLS failure (502)
        UpstreamError: Non-2xx upstream status, passed through
    """
    url = build_upstream_url(config, request.model)
    headers = {
        "Content-Type": "application/json",
        "api-key": config.api_key,
    }
    timeout = config.timeout_seconds

    start_time = time.time()
    try:
        async with aiohttp.ClientSession(timeout=ClientTimeout(total=timeout)) as session:
            status_code, body = await asyncio.wait_for(
                _post(session, url, build_upstream_payload(request), headers),
                timeout=timeout,
            )
    except asyncio.TimeoutError:
        logger.warning(
            f"Upstream timed out after {config.request_timeout_ms:g} ms for deployment {request.model}"
        )
        raise UpstreamTimeoutError(
            f"Upstream request timed out after {config.request_timeout_ms:g} ms"
        )
    except (aiohttp.ClientError, OSError) as e:
        logger.warning(f"Upstream transport error for deployment {request.model}: {e!r}")
        raise UpstreamTransportError(str(e) or "Upstream error")

    # Undecodable bytes must not fail the request; they fall through to the defaults
    text = body.decode("utf-8", errors="replace")

    latency_ms = round((time.time() - start_time) * 1000, 2)
    logger.info(
        json.dumps(
            {
                "type": "upstream",
                "deployment": request.model,
                "status_code": status_code,
                "latency_ms": latency_ms,
            }
        )
    )

    data = parse_upstream_body(text)
    if not 200 <= status_code < 300:
        raise UpstreamError(extract_error_message(data, text, status_code), status_code)
    return data
