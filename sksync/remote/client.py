# SKSYNC Version History Client
# HTTP operations against the remote skill version store

from typing import Any, Optional

import httpx

from sksync.remote.auth import BearerAuth, TokenProvider
from sksync.remote.cache import TTLCache
from sksync.remote.errors import RemoteError, error_message
from sksync.sync.models import (
    HistoryPage,
    PullResult,
    PushResult,
    RemoteStatus,
    SkillFile,
    VersionDiff,
    VersionEntry,
    VersionSource,
)

DEFAULT_URL = "https://www.skillhub.club"
DEFAULT_TIMEOUT = 30.0

SKILLS_PATH = "/api/user/skills"


class VersionHistoryClient:
    """
    Client for a skill's server-held version history.

    Every call is a single request/response; nothing is retried here.
    Non-2xx responses raise RemoteError with the server's message when it
    sends one. Only version listings, history pages and diffs are cached;
    status and pull always hit the server.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        cache: Optional[TTLCache] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Server base URL.
            token_provider: Callable returning the current access token.
            timeout: Request timeout in seconds.
            cache: Optional read cache (disabled if not provided).
            transport: Optional httpx transport (used by tests).
        """
        self._url = base_url.rstrip("/")
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=0)
        self._client = httpx.Client(
            base_url=self._url, timeout=timeout, auth=BearerAuth(token_provider), transport=transport
        )

    def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> httpx.Response:
        try:
            r = self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise RemoteError(f"Failed to {operation}: {e}") from e
        if not r.is_success:
            raise RemoteError(
                error_message(r) or f"Failed to {operation} ({r.status_code})",
                status_code=r.status_code,
            )
        return r

    def _json(self, method: str, path: str, operation: str, **kwargs: Any) -> dict[str, Any]:
        r = self._request(method, path, operation, **kwargs)
        try:
            data = r.json()
        except ValueError as e:
            raise RemoteError(f"Failed to {operation}: invalid JSON response", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise RemoteError(f"Failed to {operation}: unexpected response shape", status_code=r.status_code)
        return data

    def _parse(self, operation: str, parser, *args: Any) -> Any:
        try:
            return parser(*args)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Failed to {operation}: malformed response ({e})") from e

    def pull(self, skill_id: str, version: Optional[int] = None) -> PullResult:
        """Fetch a version's file set (latest if version is None)."""
        params = {"version": version} if version is not None else None
        data = self._json("GET", f"{SKILLS_PATH}/{skill_id}/pull", "pull skill", params=params)
        return self._parse("pull skill", PullResult.from_dict, data)

    def push(
        self,
        skill_id: str,
        files: list[SkillFile],
        change_summary: Optional[str] = None,
        *,
        source: VersionSource = VersionSource.DESKTOP,
    ) -> PushResult:
        """
        Create the next version of a skill from a full file set.

        The server assigns the version number. Always succeeds against a
        moved remote (last push wins).
        """
        body: dict[str, Any] = {
            "skill_id": skill_id,
            "files": [f.to_dict() for f in files],
            "source": source.value,
        }
        if change_summary:
            body["change_summary"] = change_summary

        data = self._json("POST", f"{SKILLS_PATH}/push", "push skill", json=body)
        self.cache.invalidate(skill_id)
        return self._parse("push skill", PushResult.from_dict, data)

    def status(self, skill_id: str) -> RemoteStatus:
        """Current version number and per-file fingerprints."""
        data = self._json("GET", f"{SKILLS_PATH}/{skill_id}/status", "get remote status")
        return self._parse("get remote status", RemoteStatus.from_dict, data)

    def list_versions(self, skill_id: str) -> list[VersionEntry]:
        """Full version history (server order, typically newest first)."""
        key = ("versions", skill_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        data = self._json("GET", f"{SKILLS_PATH}/{skill_id}/versions", "get versions")
        versions = self._parse(
            "get versions", lambda d: [VersionEntry.from_dict(v) for v in d.get("versions", [])], data
        )
        self.cache.set(key, versions)
        return versions

    def history(
        self,
        skill_id: str,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include_diff: bool = False,
    ) -> HistoryPage:
        """Paginated history, optionally with each version's diff to its predecessor."""
        key = ("history", skill_id, limit, offset, include_diff)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        params: dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        if offset:
            params["offset"] = offset
        if include_diff:
            params["include_diff"] = "true"

        data = self._json("GET", f"{SKILLS_PATH}/{skill_id}/history", "get history", params=params)
        page = self._parse("get history", HistoryPage.from_dict, data)
        self.cache.set(key, page)
        return page

    def diff(self, skill_id: str, from_version: int, to_version: int, include_content: bool = False) -> VersionDiff:
        """Per-file status between two versions (either order)."""
        key = ("diff", skill_id, from_version, to_version, include_content)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        params: dict[str, Any] = {"from": from_version, "to": to_version}
        if include_content:
            params["include_content"] = "true"

        data = self._json("GET", f"{SKILLS_PATH}/{skill_id}/diff", "get diff", params=params)
        result = self._parse("get diff", VersionDiff.from_dict, data, from_version, to_version)
        self.cache.set(key, result)
        return result

    def export(self, skill_id: str) -> bytes:
        """Download the skill's history as a Git ZIP archive."""
        r = self._request("GET", f"{SKILLS_PATH}/{skill_id}/export-git", "export skill")
        return r.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "VersionHistoryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
