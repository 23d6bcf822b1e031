# Tests for sksync.sync.orchestrator
# Check, push, pull, rollback and version comparison end to end

import pytest

from sksync.output.history_log import SyncHistoryLog
from sksync.remote import RemoteError
from sksync.sync.line_diff import LineKind
from sksync.sync.meta import SyncMeta, SyncStatus, read_meta, write_meta
from sksync.sync.models import AddedFile, DeletedFile, ModifiedFile
from sksync.sync.orchestrator import SyncOrchestrator, line_diff_for


def _link(skill_dir, version=1, skill_id="skill-1"):
    write_meta(skill_dir, SyncMeta.create(skill_id, skill_dir.name, version))


class TestLineDiffFor:
    """Tests for line_diff_for."""

    def test_added_file_all_added(self):
        lines = line_diff_for(AddedFile("a", new_content="x\ny"))
        assert [d.kind for d in lines] == [LineKind.ADDED, LineKind.ADDED]

    def test_deleted_file_all_removed(self):
        lines = line_diff_for(DeletedFile("a", old_content="x"))
        assert [(d.kind, d.line) for d in lines] == [(LineKind.REMOVED, "x")]

    def test_modified_file_uses_lcs(self):
        lines = line_diff_for(ModifiedFile("a", old_content="a\nb", new_content="a\nc"))
        assert [d.kind for d in lines] == [LineKind.SAME, LineKind.REMOVED, LineKind.ADDED]

    def test_missing_content(self):
        assert line_diff_for(ModifiedFile("a")) == []
        assert line_diff_for(AddedFile("a")) == []


class TestCheck:
    """Tests for SyncOrchestrator.check."""

    def test_not_synced_without_meta_or_id(self, orchestrator, skill_dir, version_store):
        state = orchestrator.check(skill_dir)
        assert state.status is SyncStatus.NOT_SYNCED
        assert state.can_push is False
        assert version_store.requests == []

    def test_in_sync(self, orchestrator, skill_dir):
        _link(skill_dir)
        state = orchestrator.check(skill_dir)
        assert state.status is SyncStatus.IN_SYNC
        assert state.skill_id == "skill-1"
        assert state.can_push is False

    def test_local_changes(self, orchestrator, skill_dir):
        _link(skill_dir)
        (skill_dir / "SKILL.md").write_text("# Changed\n", encoding="utf-8")
        (skill_dir / "extra.md").write_text("new", encoding="utf-8")
        (skill_dir / "scripts" / "run.sh").unlink()

        state = orchestrator.check(skill_dir)

        assert state.status is SyncStatus.LOCAL_CHANGES
        assert state.compare.added == ["extra.md"]
        assert state.compare.modified == ["SKILL.md"]
        assert state.compare.deleted == ["scripts/run.sh"]
        assert state.can_push is True

    def test_remote_changes(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        version_store.add_version("skill-1", version_store.files_at("skill-1"))
        assert orchestrator.check(skill_dir).status is SyncStatus.REMOTE_CHANGES

    def test_conflict(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        version_store.add_version("skill-1", {"SKILL.md": "remote edit"})
        (skill_dir / "SKILL.md").write_text("local edit", encoding="utf-8")
        assert orchestrator.check(skill_dir).status is SyncStatus.CONFLICT

    def test_explicit_id_without_meta(self, orchestrator, skill_dir):
        state = orchestrator.check(skill_dir, "skill-1")
        assert state.status is SyncStatus.IN_SYNC
        assert state.meta is None

    def test_status_fetched_fresh(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        orchestrator.check(skill_dir)
        orchestrator.check(skill_dir)
        assert version_store.paths().count("/api/user/skills/skill-1/status") == 2

    def test_excluded_files_ignored(self, client, skill_dir):
        _link(skill_dir)
        (skill_dir / "draft.swp").write_text("tmp", encoding="utf-8")
        orchestrator = SyncOrchestrator(client, exclude=["*.swp"])
        assert orchestrator.check(skill_dir).status is SyncStatus.IN_SYNC


class TestPush:
    """Tests for SyncOrchestrator.push."""

    def test_push_creates_version(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        (skill_dir / "SKILL.md").write_text("# Changed\n", encoding="utf-8")

        result = orchestrator.push(skill_dir, "Edit skill")

        assert result.version == 2
        assert version_store.files_at("skill-1", 2)["SKILL.md"] == "# Changed\n"
        assert version_store.skills["skill-1"][1]["change_summary"] == "Edit skill"
        meta = read_meta(skill_dir)
        assert meta.version == 2
        assert meta.platform_url == "https://skills.example.com/skills/test-skill"

    def test_push_then_check_in_sync(self, orchestrator, skill_dir):
        _link(skill_dir)
        (skill_dir / "new.md").write_text("n", encoding="utf-8")
        orchestrator.push(skill_dir)
        assert orchestrator.check(skill_dir).status is SyncStatus.IN_SYNC

    def test_nothing_to_push(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        assert orchestrator.push(skill_dir) is None
        assert version_store.latest("skill-1") == 1

    def test_declined(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        (skill_dir / "SKILL.md").write_text("x", encoding="utf-8")
        seen = []

        def confirm(state):
            seen.append(state.compare.modified)
            return False

        assert orchestrator.push(skill_dir, confirm=confirm) is None
        assert seen == [["SKILL.md"]]
        assert version_store.latest("skill-1") == 1
        assert read_meta(skill_dir).version == 1

    def test_push_over_conflict_wins(self, orchestrator, skill_dir, version_store):
        _link(skill_dir)
        version_store.add_version("skill-1", {"SKILL.md": "remote edit"})
        (skill_dir / "SKILL.md").write_text("local edit", encoding="utf-8")

        result = orchestrator.push(skill_dir)

        assert result.version == 3
        assert version_store.files_at("skill-1")["SKILL.md"] == "local edit"

    def test_unlinked_directory(self, orchestrator, skill_dir):
        with pytest.raises(ValueError, match="not linked"):
            orchestrator.push(skill_dir)

    def test_push_records_history(self, client, skill_dir, temp_dir):
        log = SyncHistoryLog(temp_dir / "SYNC_LOG.md")
        orchestrator = SyncOrchestrator(client, history_log=log)
        _link(skill_dir)
        (skill_dir / "SKILL.md").write_text("x", encoding="utf-8")

        orchestrator.push(skill_dir, "Edit")

        assert "**push** `test-skill` v2 - Edit" in log.path.read_text(encoding="utf-8")


class TestPull:
    """Tests for SyncOrchestrator.pull."""

    def test_pull_into_new_directory(self, orchestrator, temp_dir):
        target = temp_dir / "pulled"
        result = orchestrator.pull(target, "skill-1", slug="my-skill")

        assert result.version == 1
        assert (target / "SKILL.md").exists()
        assert (target / "scripts" / "run.sh").exists()
        meta = read_meta(target)
        assert (meta.skill_id, meta.skill_slug, meta.version) == ("skill-1", "my-skill", 1)
        assert orchestrator.check(target).status is SyncStatus.IN_SYNC

    def test_pull_old_version_removes_stale(self, orchestrator, skill_dir, version_store):
        version_store.add_version("skill-1", {"SKILL.md": "v2", "new.md": "n"})
        orchestrator.pull(skill_dir, "skill-1")
        assert (skill_dir / "new.md").exists()
        assert not (skill_dir / "scripts" / "run.sh").exists()

        orchestrator.pull(skill_dir, "skill-1", 1)
        assert not (skill_dir / "new.md").exists()
        assert (skill_dir / "scripts" / "run.sh").exists()
        assert read_meta(skill_dir).version == 1

    def test_pull_missing_version(self, orchestrator, temp_dir):
        with pytest.raises(RemoteError, match="Version 9 not found"):
            orchestrator.pull(temp_dir / "x", "skill-1", 9)

    def test_pull_keeps_excluded_files(self, client, skill_dir, version_store):
        orchestrator = SyncOrchestrator(client, exclude=[".env", "*.swp"])
        (skill_dir / ".env").write_text("TOKEN=secret", encoding="utf-8")
        (skill_dir / "notes.swp").write_text("swap", encoding="utf-8")
        version_store.add_version("skill-1", {"SKILL.md": "v2"})

        orchestrator.pull(skill_dir, "skill-1")
        assert (skill_dir / ".env").read_text(encoding="utf-8") == "TOKEN=secret"
        assert (skill_dir / "notes.swp").exists()
        assert not (skill_dir / "scripts" / "run.sh").exists()

        orchestrator.rollback(skill_dir, "skill-1", 1, confirm=lambda v: False)
        assert (skill_dir / ".env").exists()
        assert (skill_dir / "scripts" / "run.sh").exists()


class TestRollback:
    """Tests for SyncOrchestrator.rollback."""

    def test_rollback_copies_forward(self, orchestrator, skill_dir, version_store):
        v1 = dict(version_store.files_at("skill-1", 1))
        version_store.add_version("skill-1", {"SKILL.md": "v2"})
        version_store.add_version("skill-1", {"SKILL.md": "v3"})

        result = orchestrator.rollback(skill_dir, "skill-1", 1, confirm=lambda v: True)

        assert result.version == 4
        assert version_store.files_at("skill-1", 4) == v1
        assert version_store.skills["skill-1"][3]["change_summary"] == "Rollback to version 1"
        assert version_store.files_at("skill-1", 1) == v1
        assert version_store.files_at("skill-1", 2) == {"SKILL.md": "v2"}
        assert version_store.files_at("skill-1", 3) == {"SKILL.md": "v3"}
        assert read_meta(skill_dir).version == 4
        assert orchestrator.check(skill_dir).status is SyncStatus.IN_SYNC

    def test_rollback_declined_keeps_local_copy(self, orchestrator, skill_dir, version_store):
        version_store.add_version("skill-1", {"SKILL.md": "v2"})

        assert orchestrator.rollback(skill_dir, "skill-1", 1, confirm=lambda v: False) is None
        assert version_store.latest("skill-1") == 2
        assert (skill_dir / "scripts" / "run.sh").exists()
        assert read_meta(skill_dir).version == 1


class TestCompareVersions:
    """Tests for compare_versions and compare_with_previous."""

    def test_compare_versions(self, orchestrator, version_store):
        version_store.add_version(
            "skill-1",
            {"SKILL.md": version_store.files_at("skill-1")["SKILL.md"] + "More.\n", "new.md": "a\nb"},
        )

        diffs = {d.filepath: d for d in orchestrator.compare_versions("skill-1", 1, 2)}

        assert diffs["new.md"].status == "added"
        assert [d.kind for d in diffs["new.md"].lines] == [LineKind.ADDED, LineKind.ADDED]
        assert diffs["scripts/run.sh"].status == "deleted"
        skill_lines = diffs["SKILL.md"].lines
        assert [d.line for d in skill_lines if d.kind is LineKind.ADDED] == ["More."]
        assert not any(d.kind is LineKind.REMOVED for d in skill_lines)

    def test_compare_with_previous(self, orchestrator, version_store):
        version_store.add_version("skill-1", {"SKILL.md": "v2"})
        orchestrator.compare_with_previous("skill-1", 2)
        params = version_store.requests[-1].url.params
        assert (params["from"], params["to"]) == ("1", "2")

    def test_compare_with_previous_first_version(self, orchestrator, version_store):
        assert orchestrator.compare_with_previous("skill-1", 1) == []
        params = version_store.requests[-1].url.params
        assert (params["from"], params["to"]) == ("1", "1")


class TestHistoryAndExport:
    """Tests for history and export."""

    def test_history(self, orchestrator, version_store):
        version_store.add_version("skill-1", {"SKILL.md": "v2"})
        page = orchestrator.history("skill-1", limit=1)
        assert [h.version for h in page.versions] == [2]
        assert page.total_versions == 2

    def test_export(self, orchestrator, temp_dir):
        dest = orchestrator.export("skill-1", temp_dir / "out" / "skill.zip")
        assert dest.read_bytes().startswith(b"PK")
