"""Async HTTP client for the prompt library REST API."""

import logging
from typing import Any, Optional, Union

import httpx

from promptlib.core import get_settings
from promptlib.schemas import (
    FolderCreate,
    FolderResponse,
    FolderUpdate,
    PromptCreate,
    PromptResponse,
    PromptUpdate,
    TagCreate,
    TagResponse,
    TagUpdate,
)
from promptlib.selection import FilterDescriptor, to_query

logger = logging.getLogger(__name__)


class PromptLibraryClientError(Exception):
    """Raised when the API is unreachable or answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message if status_code is None else f"{status_code}: {message}")


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:500] or response.reason_phrase
    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        # FastAPI validation errors
        return "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
    return response.reason_phrase


class PromptLibraryClient:
    """
    Thin wrapper over the REST routes. Pass http_client to reuse a connection
    pool or to talk to an in-process app (httpx.ASGITransport); otherwise a
    short-lived httpx.AsyncClient is opened per call.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self._http = http_client
        self.timeout = timeout

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            if self._http is not None:
                r = await self._http.request(method, url, params=params, json=json)
                r.raise_for_status()
                return r.json()
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.request(method, url, params=params, json=json)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning("%s %s failed with %s: %s", method, path, e.response.status_code, detail)
            raise PromptLibraryClientError(detail, e.response.status_code) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise PromptLibraryClientError(
                "Prompt library API unavailable (timeout or connection error)."
            ) from e

    # -- prompts -------------------------------------------------------------

    async def list_prompts(
        self, view: Union[FilterDescriptor, dict[str, str], None] = None
    ) -> list[PromptResponse]:
        """List prompts for a FilterDescriptor (or raw query params)."""
        if view is None:
            params: dict[str, str] = {}
        elif isinstance(view, dict):
            params = view
        else:
            params = to_query(view)
        data = await self._request("GET", "/prompts", params=params or None)
        return [PromptResponse.model_validate(p) for p in data]

    async def get_prompt(self, prompt_id: str) -> PromptResponse:
        return PromptResponse.model_validate(await self._request("GET", f"/prompts/{prompt_id}"))

    async def create_prompt(self, body: PromptCreate) -> PromptResponse:
        data = await self._request("POST", "/prompts", json=body.model_dump(mode="json"))
        return PromptResponse.model_validate(data)

    async def update_prompt(self, prompt_id: str, body: PromptUpdate) -> PromptResponse:
        data = await self._request("PUT", f"/prompts/{prompt_id}", json=body.model_dump(mode="json"))
        return PromptResponse.model_validate(data)

    async def delete_prompt(self, prompt_id: str) -> None:
        await self._request("DELETE", f"/prompts/{prompt_id}")

    # -- folders -------------------------------------------------------------

    async def list_folders(self) -> list[FolderResponse]:
        return [FolderResponse.model_validate(f) for f in await self._request("GET", "/folders")]

    async def create_folder(self, body: FolderCreate) -> FolderResponse:
        data = await self._request("POST", "/folders", json=body.model_dump(mode="json"))
        return FolderResponse.model_validate(data)

    async def update_folder(self, folder_id: str, body: FolderUpdate) -> FolderResponse:
        data = await self._request(
            "PUT", f"/folders/{folder_id}", json=body.model_dump(mode="json", exclude_unset=True)
        )
        return FolderResponse.model_validate(data)

    async def delete_folder(self, folder_id: str) -> None:
        await self._request("DELETE", f"/folders/{folder_id}")

    # -- tags ----------------------------------------------------------------

    async def list_tags(self) -> list[TagResponse]:
        return [TagResponse.model_validate(t) for t in await self._request("GET", "/tags")]

    async def create_tag(self, body: TagCreate) -> TagResponse:
        data = await self._request("POST", "/tags", json=body.model_dump(mode="json"))
        return TagResponse.model_validate(data)

    async def update_tag(self, tag_id: str, body: TagUpdate) -> TagResponse:
        data = await self._request(
            "PUT", f"/tags/{tag_id}", json=body.model_dump(mode="json", exclude_unset=True)
        )
        return TagResponse.model_validate(data)

    async def delete_tag(self, tag_id: str) -> None:
        await self._request("DELETE", f"/tags/{tag_id}")
