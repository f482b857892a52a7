"""
Async client for the signing endpoints.

- GET  /api/sign/{token} - signing session
- POST /api/sign/{token} - submit signature, initials and consent
"""
import logging
import httpx
from pydantic import ValidationError
from app.schemas.signature import SignSessionRead

logger = logging.getLogger(__name__)


class SignApiError(Exception):
    def __init__(self, message: str | None, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"Request failed with status {status_code}")


def _error_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("message")
    return None


class SignApiClient:
    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport)

    async def fetch_session(self, token: str) -> SignSessionRead:
        try:
            async with self._client() as client:
                response = await client.get(f"/api/sign/{token}")
        except httpx.HTTPError as e:
            raise SignApiError(str(e)) from e

        if response.is_error:
            raise SignApiError(_error_message(response), response.status_code)
        try:
            return SignSessionRead.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Malformed signing session response ({response.status_code}): {e}")
            raise SignApiError(None, response.status_code) from e

    async def submit(self, token: str, payload: dict) -> dict:
        try:
            async with self._client() as client:
                response = await client.post(f"/api/sign/{token}", json=payload)
        except httpx.HTTPError as e:
            raise SignApiError(str(e)) from e

        if response.is_error:
            logger.warning(f"Signature submission rejected ({response.status_code})")
            raise SignApiError(_error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Malformed submission response ({response.status_code}): {e}")
            raise SignApiError(None, response.status_code) from e
