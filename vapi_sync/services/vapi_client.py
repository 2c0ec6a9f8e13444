"""
HTTP client for the Vapi AI platform.

This module wraps the Vapi REST resources the service mirrors:
- Assistants (/assistant)
- Phone numbers (/phone-number)

It translates the simplified local schema into Vapi's request bodies and
turns every failure into a RemoteProviderError carrying Vapi's own status
code and message.

Design decisions:
- Fixed model/voice/call-limit defaults for new assistants live here, not
  in request input
- No retries: a failed call is surfaced to the caller immediately
- The API key is checked per call so the app can start without one
"""

from typing import Any

import httpx
import structlog

from vapi_sync.config import settings
from vapi_sync.core.exceptions import RemoteProviderError

logger = structlog.get_logger(__name__)

# ===== Assistant defaults =====
MODEL_PROVIDER = "openai"
MODEL_NAME = "chatgpt-4o-latest"
VOICE_PROVIDER = "11labs"
VOICE_ID = "DwwuoY7Uz8AP8zrY5TAo"
END_CALL_MESSAGE = "Thank you for calling. Goodbye!"
MAX_DURATION_SECONDS = 300

# ===== Phone number defaults =====
PHONE_NUMBER_PROVIDER = "vapi"
DEFAULT_AREA_CODE = "207"


def build_model_config(system_prompt: str) -> dict[str, Any]:
    """Vapi model block with a single system message."""
    return {
        "provider": MODEL_PROVIDER,
        "model": MODEL_NAME,
        "messages": [{"role": "system", "content": system_prompt}],
    }


def _error_message(response: httpx.Response) -> str:
    """
    Pull Vapi's error message out of a failed response.

    Vapi reports errors as {"message": "..."} or, for validation failures,
    {"message": ["...", "..."]}.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, list):
        message = "; ".join(str(item) for item in message)

    return message or response.text or f"Vapi API error: {response.status_code}"


class VapiClient:
    """
    Async HTTP client for Vapi assistants and phone numbers.

    Usage:
        client = VapiClient()
        try:
            assistant = await client.create_assistant(
                name="Sam",
                first_message="Hi, this is Sam.",
                system_prompt="You are Sam..."
            )
        finally:
            await client.close()

    Configuration:
        Requires VAPI_API_KEY environment variable

    Note: In FastAPI, use the get_vapi_client dependency instead of
    creating clients directly so the connection pool is shared.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None
    ):
        self.base_url = base_url or settings.vapi_base_url
        self.api_key = api_key if api_key is not None else settings.vapi_api_key
        self.timeout = timeout or settings.vapi_timeout

        self.headers = {
            "Authorization": f"Bearer {self.api_key or ''}",
            "Content-Type": "application/json",
        }

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout
        )

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Make an HTTP request to the Vapi API.

        Returns:
            Parsed JSON response ({} for an empty body)

        Raises:
            RemoteProviderError: non-2xx response (Vapi status and message),
                transport failure or missing API key (status 500)
        """
        if not self.api_key:
            raise RemoteProviderError(
                "Vapi API key not configured - set VAPI_API_KEY environment variable"
            )

        try:
            response = await self.client.request(
                method=method,
                url=endpoint,
                json=json_data
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning(
                "vapi_request_failed",
                method=method,
                endpoint=endpoint,
                status_code=e.response.status_code,
                message=message
            )
            raise RemoteProviderError(message, status_code=e.response.status_code) from e

        except httpx.TimeoutException as e:
            logger.warning("vapi_request_timeout", method=method, endpoint=endpoint)
            raise RemoteProviderError(
                f"Request to Vapi {endpoint} timed out after {self.timeout}s"
            ) from e

        except httpx.RequestError as e:
            logger.warning(
                "vapi_request_error",
                method=method,
                endpoint=endpoint,
                error_type=type(e).__name__
            )
            raise RemoteProviderError(f"Vapi request failed: {str(e)}") from e

        if not response.content:
            return {}
        return response.json()

    # ===== Assistant Endpoints =====

    async def create_assistant(
        self,
        name: str,
        first_message: str,
        system_prompt: str
    ) -> dict[str, Any]:
        """
        Create an assistant with the service's fixed model and voice setup.

        Only the name, first message and system prompt come from the caller.
        """
        payload = {
            "name": name,
            "firstMessage": first_message,
            "model": build_model_config(system_prompt),
            "voice": {
                "provider": VOICE_PROVIDER,
                "voiceId": VOICE_ID,
            },
            "endCallMessage": END_CALL_MESSAGE,
            "maxDurationSeconds": MAX_DURATION_SECONDS,
        }
        return await self._request("POST", "/assistant", json_data=payload)

    async def update_assistant(
        self,
        vapi_assistant_id: str,
        name: str | None = None,
        first_message: str | None = None,
        system_prompt: str | None = None,
        voice_provider: str | None = None,
        voice_id: str | None = None,
        end_call_message: str | None = None,
        max_duration_seconds: int | None = None
    ) -> dict[str, Any]:
        """
        Patch an assistant with only the fields that were supplied.

        The voice is replaced only when both provider and voice id are given;
        one without the other is dropped.
        """
        payload: dict[str, Any] = {}
        if name:
            payload["name"] = name
        if first_message:
            payload["firstMessage"] = first_message
        if system_prompt:
            payload["model"] = build_model_config(system_prompt)
        if voice_provider and voice_id:
            payload["voice"] = {"provider": voice_provider, "voiceId": voice_id}
        if end_call_message:
            payload["endCallMessage"] = end_call_message
        if max_duration_seconds:
            payload["maxDurationSeconds"] = max_duration_seconds

        return await self._request(
            "PATCH", f"/assistant/{vapi_assistant_id}", json_data=payload
        )

    async def get_assistant(self, vapi_assistant_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/assistant/{vapi_assistant_id}")

    async def delete_assistant(self, vapi_assistant_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/assistant/{vapi_assistant_id}")

    # ===== Phone Number Endpoints =====

    async def create_phone_number(
        self,
        name: str,
        vapi_assistant_id: str | None = None
    ) -> dict[str, Any]:
        """
        Buy a Vapi number in the default area code, optionally attached to
        an assistant.
        """
        payload: dict[str, Any] = {
            "provider": PHONE_NUMBER_PROVIDER,
            "name": name,
            "numberDesiredAreaCode": DEFAULT_AREA_CODE,
        }
        if vapi_assistant_id:
            payload["assistantId"] = vapi_assistant_id

        return await self._request("POST", "/phone-number", json_data=payload)

    async def update_phone_number(
        self,
        vapi_phone_number_id: str,
        vapi_assistant_id: str | None
    ) -> dict[str, Any]:
        """Point a number at an assistant. None detaches it."""
        return await self._request(
            "PATCH",
            f"/phone-number/{vapi_phone_number_id}",
            json_data={"assistantId": vapi_assistant_id}
        )

    async def get_phone_number(self, vapi_phone_number_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/phone-number/{vapi_phone_number_id}")

    async def delete_phone_number(self, vapi_phone_number_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/phone-number/{vapi_phone_number_id}")

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self.client.aclose()
