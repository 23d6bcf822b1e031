# SKSYNC Test Fixtures
# Pytest fixtures for SKSYNC tests

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest
import yaml

from sksync.remote import StaticTokenProvider, TTLCache, VersionHistoryClient
from sksync.sync.orchestrator import SyncOrchestrator
from sksync.utils.hashing import content_hash

SKILL_MD = """---
name: test-skill
description: A test skill
---

# Test Skill

This is a test skill.
"""


class FakeVersionStore:
    """
    In-memory version store speaking the server's HTTP API.

    Served through httpx.MockTransport; every request is recorded.
    """

    def __init__(self, token: str = "test-token"):
        self.token = token
        self.skills: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []

    def add_version(
        self,
        skill_id: str,
        files: dict[str, str],
        *,
        source: str = "web",
        change_summary: Optional[str] = None,
    ) -> int:
        versions = self.skills.setdefault(skill_id, [])
        number = len(versions) + 1
        versions.append(
            {
                "version": number,
                "files": dict(files),
                "source": source,
                "change_summary": change_summary,
                "created_at": f"2026-01-{number:02d}T10:00:00+00:00",
            }
        )
        return number

    def files_at(self, skill_id: str, version: Optional[int] = None) -> dict[str, str]:
        versions = self.skills[skill_id]
        return versions[(version or len(versions)) - 1]["files"]

    def latest(self, skill_id: str) -> int:
        return len(self.skills[skill_id])

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def _entry(self, v: dict[str, Any]) -> dict[str, Any]:
        files = v["files"]
        return {
            "version": v["version"],
            "source": v["source"],
            "change_summary": v["change_summary"],
            "created_at": v["created_at"],
            "file_count": len(files),
            "total_size": sum(len(c.encode("utf-8")) for c in files.values()),
        }

    def _changes(self, old: dict[str, str], new: dict[str, str], include_content: bool) -> list[dict[str, Any]]:
        changes = []
        for path in sorted(set(old) | set(new)):
            if path not in old:
                change = {"filepath": path, "status": "added"}
            elif path not in new:
                change = {"filepath": path, "status": "deleted"}
            elif old[path] != new[path]:
                change = {"filepath": path, "status": "modified"}
            else:
                continue
            if include_content:
                change["old_content"] = old.get(path)
                change["new_content"] = new.get(path)
            changes.append(change)
        return changes

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "Invalid token"})

        parts = request.url.path.strip("/").split("/")
        if parts[:3] != ["api", "user", "skills"]:
            return httpx.Response(404, json={"error": "Not found"})

        if request.method == "POST" and parts[3:] == ["push"]:
            body = json.loads(request.content)
            if body["skill_id"] not in self.skills:
                return httpx.Response(404, json={"error": "Skill not found"})
            version = self.add_version(
                body["skill_id"],
                {f["filepath"]: f["content"] for f in body["files"]},
                source=body.get("source", "api"),
                change_summary=body.get("change_summary"),
            )
            return httpx.Response(200, json={"version": version})

        skill_id, action = parts[3], parts[4]
        if skill_id not in self.skills:
            return httpx.Response(404, json={"error": "Skill not found"})
        params = request.url.params
        versions = self.skills[skill_id]

        if action == "status":
            files = self.files_at(skill_id)
            return httpx.Response(
                200,
                json={
                    "version": len(versions),
                    "files": [{"filepath": p, "content_hash": content_hash(c)} for p, c in files.items()],
                },
            )

        if action == "pull":
            version = int(params.get("version", len(versions)))
            if not 1 <= version <= len(versions):
                return httpx.Response(404, json={"error": f"Version {version} not found"})
            files = self.files_at(skill_id, version)
            return httpx.Response(
                200,
                json={"version": version, "files": [{"filepath": p, "content": c} for p, c in files.items()]},
            )

        if action == "versions":
            return httpx.Response(200, json={"versions": [self._entry(v) for v in reversed(versions)]})

        if action == "history":
            limit = int(params.get("limit", 50))
            offset = int(params.get("offset", 0))
            include_diff = params.get("include_diff") == "true"
            page = []
            for v in list(reversed(versions))[offset : offset + limit]:
                entry = self._entry(v)
                if include_diff:
                    previous = versions[v["version"] - 2]["files"] if v["version"] > 1 else {}
                    entry["changes"] = self._changes(previous, v["files"], False)
                page.append(entry)
            return httpx.Response(200, json={"versions": page, "total_versions": len(versions)})

        if action == "diff":
            from_version, to_version = int(params["from"]), int(params["to"])
            changes = self._changes(
                self.files_at(skill_id, from_version),
                self.files_at(skill_id, to_version),
                params.get("include_content") == "true",
            )
            return httpx.Response(200, json={"changes": changes})

        if action == "export-git":
            return httpx.Response(200, content=b"PK\x03\x04fake-zip")

        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SKSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def skill_dir(temp_dir: Path) -> Path:
    """Create a local skill directory with a couple of files."""
    skill = temp_dir / "test-skill"
    skill.mkdir()
    (skill / "SKILL.md").write_text(SKILL_MD, encoding="utf-8")
    (skill / "scripts").mkdir()
    (skill / "scripts" / "run.sh").write_text("#!/bin/sh\necho run\n", encoding="utf-8")
    return skill


@pytest.fixture
def version_store() -> FakeVersionStore:
    """Version store holding one skill with a single version."""
    store = FakeVersionStore()
    store.add_version(
        "skill-1",
        {"SKILL.md": SKILL_MD, "scripts/run.sh": "#!/bin/sh\necho run\n"},
        change_summary="Initial version",
    )
    return store


@pytest.fixture
def client(version_store: FakeVersionStore) -> Generator[VersionHistoryClient, None, None]:
    """Client talking to the fake version store, with caching enabled."""
    with VersionHistoryClient(
        "https://skills.example.com",
        StaticTokenProvider(version_store.token),
        cache=TTLCache(60),
        transport=httpx.MockTransport(version_store.handle),
    ) as c:
        yield c


@pytest.fixture
def orchestrator(client: VersionHistoryClient) -> SyncOrchestrator:
    return SyncOrchestrator(client, platform_url="https://skills.example.com")


@pytest.fixture
def sample_config(temp_home: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "server": {
            "url": "https://skills.example.com",
            "timeout": 10,
            "token_env": "TEST_SKSYNC_TOKEN",
            "cache_ttl": 0,
        },
        "local": {
            "skills_dir": str(temp_home / ".claude" / "skills"),
            "max_depth": 8,
            "exclude": ["*.swp"],
        },
        "output": {
            "verbose": False,
            "colored": False,
            "sync_history": str(temp_home / ".config" / "sksync" / "SYNC_LOG.md"),
        },
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "sksync"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
