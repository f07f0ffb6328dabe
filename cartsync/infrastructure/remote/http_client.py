"""
Shared httpx plumbing for the remote DummyJSON-compatible service
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from cartsync.infrastructure.utilities.exceptions import GatewayUnavailableError


class RemoteServiceClient:
    """
    Base class for remote adapters.

    Converts transport failures, timeouts, 5xx responses and malformed
    payloads into GatewayUnavailableError. Status codes the caller wants to
    interpret itself (404, unsupported-operation codes) are returned as is.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        client: Optional[httpx.AsyncClient] = None,
    ):
        # An injected client belongs to the caller and is left open
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._logger = logging.getLogger(self.__class__.__name__)

    async def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            self._logger.warning("⏱️ REMOTE TIMEOUT during %s: %s", operation, e)
            raise GatewayUnavailableError(f"Remote {operation} timed out", operation) from e
        except httpx.HTTPError as e:
            self._logger.warning("💥 REMOTE TRANSPORT ERROR during %s: %s", operation, e)
            raise GatewayUnavailableError(f"Remote {operation} failed: {e}", operation) from e

        self._logger.debug("🌐 %s %s -> %s", method, path, response.status_code)
        return response

    def _raise_for_failure(self, response: httpx.Response, operation: str) -> None:
        """Anything other than success at this point means the gateway is unusable"""
        if response.is_success:
            return
        self._logger.warning(
            "💥 REMOTE ERROR during %s: HTTP %s", operation, response.status_code
        )
        raise GatewayUnavailableError(
            f"Remote {operation} returned HTTP {response.status_code}",
            operation,
            response.status_code,
        )

    def _parse(self, response: httpx.Response, model: type[BaseModel], operation: str) -> Any:
        self._raise_for_failure(response, operation)
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._logger.warning("💥 MALFORMED REMOTE PAYLOAD during %s: %s", operation, e)
            raise GatewayUnavailableError(f"Malformed payload from remote {operation}", operation) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
