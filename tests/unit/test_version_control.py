"""
Unit tests for the version control engine.

Tests staging, commit, revert and revision history of LocalVcs.
"""

import pytest
from typing import List

from localvcs.version_control import (
    LocalVcs,
    Revision,
    VersionControlError,
)


@pytest.fixture
def vcs() -> LocalVcs:
    return LocalVcs()


def contents(revisions: List[Revision]) -> List[str]:
    return [r.content for r in revisions]


class TestStaging:
    """Tests for staged changes before commit."""

    def test_adding_files(self, vcs: LocalVcs) -> None:
        """Test that an added file appears only after commit."""
        vcs.add_file("file", "")
        assert not vcs.has_file("file")

        vcs.commit()
        assert vcs.has_file("file")

    def test_adding_two_files(self, vcs: LocalVcs) -> None:
        """Test adding several files in one commit."""
        vcs.add_file("file1", "")
        vcs.add_file("file2", "")
        vcs.commit()

        assert vcs.has_file("file1")
        assert vcs.has_file("file2")
        assert not vcs.has_file("unknown file")

    def test_clearing_changes_on_commit(self, vcs: LocalVcs) -> None:
        """Test that commit empties the pending change log."""
        vcs.add_file("file", "content")
        vcs.change_file("file", "new content")
        vcs.rename_file("file", "new file")
        vcs.delete_file("new file")

        assert not vcs.is_clean()

        vcs.commit()
        assert vcs.is_clean()

    def test_does_not_change_content_before_commit(self, vcs: LocalVcs) -> None:
        """Test that a staged change is invisible to queries."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.change_file("file", "new content")

        assert vcs.get_file_revision("file") == Revision("file", "content")

    def test_does_not_keep_uncommitted_changes(self, vcs: LocalVcs) -> None:
        """Test that history ignores staged changes."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.change_file("file", "new content")

        assert contents(vcs.get_file_revisions("file")) == ["content"]

    def test_staged_rename_and_delete_are_invisible(self, vcs: LocalVcs) -> None:
        """Test that staged rename and delete leave the snapshot alone."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.rename_file("file", "new file")
        vcs.delete_file("file")

        assert vcs.has_file("file")
        assert not vcs.has_file("new file")

    def test_pending_changes_in_order(self, vcs: LocalVcs) -> None:
        """Test that pending changes are reported in staging order."""
        vcs.add_file("a", "1")
        vcs.rename_file("a", "b")

        changes = vcs.pending_changes()
        assert [c.change_type.value for c in changes] == ["add", "rename"]


class TestCommit:
    """Tests for commit replay."""

    def test_changing_content(self, vcs: LocalVcs) -> None:
        """Test committing a content change."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.change_file("file", "new content")
        vcs.commit()

        assert vcs.get_file_revision("file").content == "new content"

    def test_keeping_old_versions(self, vcs: LocalVcs) -> None:
        """Test that older versions stay in the revision chain."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.change_file("file", "new content")
        vcs.commit()

        assert contents(vcs.get_file_revisions("file")) == ["new content", "content"]

    def test_content_of_unknown_file(self, vcs: LocalVcs) -> None:
        """Test that an unknown file has no revision."""
        assert vcs.get_file_revision("unknown file") is None

    def test_changing_only_one_file(self, vcs: LocalVcs) -> None:
        """Test that committing one file leaves the others untouched."""
        vcs.add_file("file1", "content1")
        vcs.add_file("file2", "content2")
        vcs.commit()

        vcs.change_file("file1", "new content")
        vcs.commit()

        assert vcs.get_file_revision("file1").content == "new content"
        assert vcs.get_file_revision("file2").content == "content2"
        assert contents(vcs.get_file_revisions("file2")) == ["content2"]

    def test_renaming(self, vcs: LocalVcs) -> None:
        """Test that rename moves the file to the new name."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.rename_file("file", "new file")
        vcs.commit()

        assert not vcs.has_file("file")
        assert vcs.has_file("new file")
        assert vcs.get_file_revision("new file").content == "content"

    def test_renaming_keeps_old_name_and_content(self, vcs: LocalVcs) -> None:
        """Test that history follows a file across a rename."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.rename_file("file", "new file")
        vcs.commit()

        revisions = vcs.get_file_revisions("new file")
        assert revisions == [
            Revision("new file", "content"),
            Revision("file", "content"),
        ]

    def test_deleting(self, vcs: LocalVcs) -> None:
        """Test that a committed delete removes the file."""
        vcs.add_file("file", "content")
        vcs.commit()

        vcs.delete_file("file")
        assert vcs.get_file_revision("file").content == "content"

        vcs.commit()
        assert not vcs.has_file("file")
        assert vcs.get_file_revision("file") is None
        assert vcs.get_file_revisions("file") == []

    def test_deleting_only_one_file(self, vcs: LocalVcs) -> None:
        """Test deleting one of two files."""
        vcs.add_file("file1", "")
        vcs.add_file("file2", "")
        vcs.commit()

        vcs.delete_file("file2")
        vcs.commit()

        assert vcs.has_file("file1")
        assert not vcs.has_file("file2")

    def test_adding_and_deleting_same_file_before_commit(self, vcs: LocalVcs) -> None:
        """Test that add followed by delete leaves nothing."""
        vcs.add_file("file", "")
        vcs.delete_file("file")
        vcs.commit()

        assert not vcs.has_file("file")

    def test_deleting_and_adding_same_file_before_commit(self, vcs: LocalVcs) -> None:
        """Test that delete followed by add starts a new history."""
        vcs.add_file("file", "old")
        vcs.commit()

        vcs.delete_file("file")
        vcs.add_file("file", "new")
        vcs.commit()

        assert vcs.has_file("file")
        assert contents(vcs.get_file_revisions("file")) == ["new"]

    def test_adding_over_existing_file_starts_new_history(self, vcs: LocalVcs) -> None:
        """Test that adding an existing name supersedes the old file."""
        vcs.add_file("file", "first")
        vcs.commit()
        vcs.change_file("file", "second")
        vcs.commit()

        vcs.add_file("file", "replacement")
        vcs.commit()

        assert contents(vcs.get_file_revisions("file")) == ["replacement"]

    def test_adding_and_changing_same_file_before_commit(self, vcs: LocalVcs) -> None:
        """Test that add and change collapse into a single revision."""
        vcs.add_file("file", "content")
        vcs.change_file("file", "new content")
        vcs.commit()

        assert vcs.get_file_revision("file").content == "new content"
        assert contents(vcs.get_file_revisions("file")) == ["new content"]

    def test_several_changes_grow_chain_by_one(self, vcs: LocalVcs) -> None:
        """Test that changes staged together add one version per commit."""
        vcs.add_file("file", "v1")
        vcs.commit()

        vcs.change_file("file", "v2")
        vcs.rename_file("file", "renamed")
        vcs.change_file("renamed", "v3")
        vcs.commit()

        assert vcs.get_file_revisions("renamed") == [
            Revision("renamed", "v3"),
            Revision("file", "v1"),
        ]

    def test_changes_to_unknown_files_are_ignored(self, vcs: LocalVcs) -> None:
        """Test that unresolved names are no-ops on commit."""
        vcs.change_file("ghost", "content")
        vcs.rename_file("ghost", "other")
        vcs.delete_file("ghost")
        vcs.commit()

        assert vcs.list_files() == []
        assert vcs.is_clean()

    def test_file_revisions(self, vcs: LocalVcs) -> None:
        """Test revision count of a new file."""
        assert vcs.get_file_revisions("file") == []

        vcs.add_file("file", "")
        vcs.commit()

        assert len(vcs.get_file_revisions("file")) == 1

    def test_empty_commit_is_harmless(self, vcs: LocalVcs) -> None:
        """Test that committing nothing changes nothing."""
        vcs.add_file("file", "content")
        assert vcs.commit() is True
        depth = vcs.history_depth

        assert vcs.commit() is False
        assert vcs.commit() is False

        assert vcs.history_depth == depth
        assert vcs.get_file_revision("file") == Revision("file", "content")

    def test_revisions_can_be_read_repeatedly(self, vcs: LocalVcs) -> None:
        """Test that reading history does not consume it."""
        vcs.add_file("file", "a")
        vcs.commit()
        vcs.change_file("file", "b")
        vcs.commit()

        assert vcs.get_file_revisions("file") == vcs.get_file_revisions("file")


class TestRevert:
    """Tests for revert."""

    def test_reverting_to_previous_version(self, vcs: LocalVcs) -> None:
        """Test that revert with nothing staged undoes the last commit."""
        vcs.add_file("file", "")
        vcs.commit()
        assert vcs.has_file("file")

        vcs.revert()
        assert not vcs.has_file("file")

    def test_reverting_restores_previous_content(self, vcs: LocalVcs) -> None:
        """Test that revert restores the previous snapshot's content."""
        vcs.add_file("file", "content")
        vcs.commit()
        vcs.change_file("file", "new content")
        vcs.commit()

        vcs.revert()

        assert vcs.get_file_revision("file").content == "content"
        assert contents(vcs.get_file_revisions("file")) == ["content"]

    def test_reverting_clears_all_pending_changes(self, vcs: LocalVcs) -> None:
        """Test that revert with staged changes only discards them."""
        vcs.add_file("file1", "")
        vcs.commit()

        vcs.add_file("file2", "")
        assert not vcs.is_clean()

        vcs.revert()
        assert vcs.is_clean()
        assert vcs.has_file("file1")

        vcs.commit()
        assert not vcs.has_file("file2")

    def test_reverting_when_no_previous_versions(self, vcs: LocalVcs) -> None:
        """Test that revert with no history never fails."""
        vcs.revert()
        assert vcs.is_clean()
        vcs.revert()
        assert vcs.is_clean()
        assert vcs.history_depth == 1

    def test_clearing_changes_after_revert_when_no_previous_versions(
        self, vcs: LocalVcs
    ) -> None:
        """Test that staged changes are dropped even without history."""
        vcs.add_file("file", "")
        assert not vcs.is_clean()

        vcs.revert()
        assert vcs.is_clean()

    def test_revert_never_removes_initial_snapshot(self) -> None:
        """Test that the seeded snapshot survives repeated reverts."""
        vcs = LocalVcs.from_files([("seed", "content")])
        vcs.add_file("file", "")
        vcs.commit()

        vcs.revert()
        vcs.revert()
        vcs.revert()

        assert vcs.list_files() == ["seed"]


class TestQueries:
    """Tests for query helpers."""

    def test_list_and_export_files(self, vcs: LocalVcs) -> None:
        """Test listing current files and exporting them."""
        vcs.add_file("b", "2")
        vcs.add_file("a", "1")
        vcs.commit()

        assert vcs.list_files() == ["a", "b"]
        assert vcs.export_files() == [("a", "1"), ("b", "2")]

    def test_snapshots_newest_first(self, vcs: LocalVcs) -> None:
        """Test iterating over committed snapshots."""
        vcs.add_file("file", "")
        vcs.commit()

        snapshots = list(vcs.snapshots())
        assert len(snapshots) == 2
        assert "file" in snapshots[0]
        assert "file" not in snapshots[1]

    def test_old_snapshot_reference_is_stable(self, vcs: LocalVcs) -> None:
        """Test that a captured snapshot is unaffected by later commits."""
        vcs.add_file("file", "content")
        vcs.commit()
        captured = vcs.current_snapshot

        vcs.change_file("file", "new content")
        vcs.commit()

        assert captured.resolve("file").content == "content"

    def test_diff_against_previous_commit(self, vcs: LocalVcs) -> None:
        """Test diff of the current snapshot against the previous one."""
        vcs.add_file("file", "content")
        vcs.commit()
        vcs.rename_file("file", "new file")
        vcs.commit()

        diff = vcs.diff()
        assert diff.count_by_type()["renamed"] == 1

    def test_diff_beyond_history_raises(self, vcs: LocalVcs) -> None:
        """Test that diffing past the initial snapshot is an error."""
        with pytest.raises(VersionControlError, match="history depth"):
            vcs.diff()


class TestConcurrency:
    """Tests for engine use from several threads."""

    def test_concurrent_staging_loses_nothing(self, vcs: LocalVcs) -> None:
        """Test that changes staged from many threads all land in one commit."""
        import threading

        def stage(i):
            vcs.add_file(f"f{i}", f"content {i}")

        threads = [threading.Thread(target=stage, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(vcs.pending_changes()) == 20
        assert vcs.commit() is True
        assert vcs.list_files() == sorted(f"f{i}" for i in range(20))
        assert vcs.history_depth == 2
        assert vcs.is_clean()

    def test_concurrent_commits_keep_history_consistent(self, vcs: LocalVcs) -> None:
        """Test that racing stage-and-commit threads publish every file."""
        import threading

        published = []

        def stage_and_commit(i):
            vcs.add_file(f"f{i}", f"content {i}")
            published.append(vcs.commit())

        threads = [
            threading.Thread(target=stage_and_commit, args=(i,)) for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(vcs.list_files()) == 20
        assert vcs.history_depth == 1 + sum(published)
        assert vcs.is_clean()

    def test_reader_snapshot_unaffected_by_concurrent_commits(
        self, vcs: LocalVcs
    ) -> None:
        """Test that a held snapshot keeps its files while others commit."""
        import threading

        vcs.add_file("base", "content")
        vcs.commit()
        held = vcs.current_snapshot

        def stage_and_commit(i):
            vcs.add_file(f"f{i}", "x")
            vcs.change_file("base", f"edit {i}")
            vcs.commit()

        threads = [
            threading.Thread(target=stage_and_commit, args=(i,)) for i in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert held.names() == ["base"]
        assert held.resolve("base").content == "content"
        assert len(vcs.list_files()) == 11
