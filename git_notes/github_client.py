"""Async HTTP client for the GitHub Git database API."""

import logging
from typing import Any, Optional

import httpx

from .config import Config
from .errors import GitHubAPIError, GitHubConnectionError, MalformedResponseError
from .models import Blob, Commit, Ref, Tree

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Client for the read-only Git object endpoints of one repository.
    
    Use as an async context manager so the underlying connection pool is
    closed when the run finishes:
    
        async with GitHubClient(config) as client:
            refs = await client.matching_refs("notes/ai")
    """
    
    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            headers=config.headers,
            timeout=config.request_timeout,
            transport=transport,
        )
    
    async def __aenter__(self) -> "GitHubClient":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.close()
    
    async def close(self) -> None:
        await self._client.aclose()
    
    async def get_json(self, path: str) -> Any:
        """
        GET a path relative to the API base URL and return the parsed JSON.
        
        Raises:
            GitHubAPIError: the API answered with a non-2xx status
            GitHubConnectionError: no response was received
            MalformedResponseError: the body is not JSON
        """
        logger.debug(f"GET {path}")
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            raise GitHubConnectionError(f"Request to {path} failed: {e}") from e
        
        if not response.is_success:
            raise GitHubAPIError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
                url=str(response.url),
            )
        
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {path} is not valid JSON") from e
    
    def _git_path(self, kind: str, name: str) -> str:
        return f"{self.config.repo_path}/git/{kind}/{name}"
    
    async def matching_refs(self, ref: str) -> list[Ref]:
        """List refs whose name starts with refs/<ref>."""
        data = await self.get_json(self._git_path("matching-refs", ref))
        if not isinstance(data, list):
            raise MalformedResponseError("matching-refs response is not a list")
        return [Ref.from_api(r) for r in data]
    
    async def get_commit(self, sha: str) -> Commit:
        return Commit.from_api(await self.get_json(self._git_path("commits", sha)))
    
    async def get_tree(self, sha: str) -> Tree:
        return Tree.from_api(await self.get_json(self._git_path("trees", sha)))
    
    async def get_blob(self, sha: str) -> Blob:
        return Blob.from_api(await self.get_json(self._git_path("blobs", sha)))
