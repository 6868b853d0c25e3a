"""Shared response handling for the backend API endpoints."""

from typing import Any, Callable

import aiohttp
from loguru import logger

from ...core.exceptions import SlotBookError

ErrorFactory = Callable[[str], SlotBookError]


async def read_json(response: aiohttp.ClientResponse, error_factory: ErrorFactory) -> Any:
    """
    Read the response body as JSON exactly once.

    Args:
        response: Open aiohttp response
        error_factory: Builds the classified error for a non-JSON body

    Returns:
        Parsed JSON body

    Raises:
        SlotBookError: Whatever ``error_factory`` builds, if the body is not JSON
    """
    try:
        return await response.json()
    except (aiohttp.ContentTypeError, ValueError):
        # Server returned HTML/text instead of JSON (maintenance page, proxy error)
        error_text = await response.text()
        logger.error(
            f"Unexpected non-JSON response (status={response.status}): {error_text[:200]}..."
        )
        raise error_factory(f"Non-JSON response from backend: {response.status}")


def error_message(data: Any, default: str) -> str:
    """Pull the ``message`` field out of an error body if there is one."""
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return str(data["message"])
    return default
