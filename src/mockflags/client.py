"""
Async client for the flag management API

Mirrors the calls an integration test (or a migration step) makes against
LaunchDarkly's management API, so it works against both this mock and the
real service.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8765/api/v2"


class FlagApiError(Exception):
    """Raised when the management API answers with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FlagApiClient:
    """Management API client scoped to a single project"""

    def __init__(
        self,
        project_key: str,
        api_token: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.project_key = project_key
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": api_token} if api_token else {}
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

        logger.info(f"Initialized flag API client for project: {project_key}, baseUrl: {self.base_url}")

    async def __aenter__(self) -> "FlagApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _flags_url(self, flag_key: Optional[str] = None) -> str:
        url = f"{self.base_url}/flags/{self.project_key}"
        if flag_key is not None:
            url += f"/{flag_key}"
        return url

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        raise FlagApiError(
            f"Failed to {action}: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )

    async def create_flag(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a flag from a raw LaunchDarkly flag payload"""
        response = await self._client.post(self._flags_url(), json=payload)
        self._raise_for_status(response, f"create flag '{payload.get('key')}'")
        return response.json()

    async def create_boolean_flag(self, flag_key: str, name: str, description: str) -> Dict[str, Any]:
        payload = {
            "key": flag_key,
            "name": name,
            "description": description,
            "kind": "boolean",
            "variations": [
                {"value": True, "name": "True"},
                {"value": False, "name": "False"},
            ],
            "defaults": {
                "onVariation": 1,
                "offVariation": 0,
            },
        }
        flag = await self.create_flag(payload)
        logger.info(f"Created flag '{flag_key}' successfully")
        return flag

    async def create_string_flag(
        self,
        flag_key: str,
        name: str,
        description: str,
        variations: List[str],
    ) -> Dict[str, Any]:
        payload = {
            "key": flag_key,
            "name": name,
            "description": description,
            "kind": "string",
            "variations": [{"value": value, "name": value} for value in variations],
            "defaults": {
                "onVariation": 0,
                "offVariation": 0,
            },
        }
        flag = await self.create_flag(payload)
        logger.info(f"Created string flag '{flag_key}' with {len(variations)} variations")
        return flag

    async def get_flag(self, flag_key: str) -> Dict[str, Any]:
        response = await self._client.get(self._flags_url(flag_key))
        self._raise_for_status(response, f"get flag '{flag_key}'")
        return response.json()

    async def delete_flag(self, flag_key: str) -> None:
        response = await self._client.delete(self._flags_url(flag_key))
        self._raise_for_status(response, f"delete flag '{flag_key}'")
        logger.info(f"Deleted flag '{flag_key}' successfully")

    async def archive_flag(self, flag_key: str, comment: str = "Archived - feature is now permanent") -> Dict[str, Any]:
        """Archive a flag (soft delete)"""
        response = await self._client.post(
            f"{self._flags_url(flag_key)}/archive",
            json={"comment": comment},
        )
        self._raise_for_status(response, f"archive flag '{flag_key}'")
        logger.info(f"Archived flag '{flag_key}' successfully")
        return response.json()

    async def flag_exists(self, flag_key: str) -> bool:
        response = await self._client.get(self._flags_url(flag_key))
        exists = response.is_success
        logger.debug(f"Flag '{flag_key}' exists: {exists}")
        return exists

    async def status(self) -> Dict[str, Any]:
        """Query the server's /status endpoint (served at the host root)"""
        root = httpx.URL(self.base_url).copy_with(path="/status")
        response = await self._client.get(root)
        self._raise_for_status(response, "query status")
        return response.json()
