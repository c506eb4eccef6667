"""Tests for the file change log."""

import threading

import pytest
from pydantic import ValidationError

from agent_file_tools import ChangeSet, FileChangeLog, FileModification, FileModificationType


def mod(path: str, change_type: FileModificationType) -> FileModification:
    return FileModification(path=path, type=change_type)


class TestFileModification:
    """Tests for FileModification model."""

    def test_create_modification(self):
        """Test creating a modification."""
        change = mod("src/main.py", FileModificationType.EDIT)
        assert change.path == "src/main.py"
        assert change.type == FileModificationType.EDIT
        assert str(change) == "edit: src/main.py"

    def test_type_from_string(self):
        """Test that types can be given by value."""
        change = FileModification(path="a", type="create_directory")
        assert change.type == FileModificationType.CREATE_DIRECTORY

    def test_is_frozen(self):
        """Test that modifications cannot be mutated."""
        change = mod("a.txt", FileModificationType.CREATE)
        with pytest.raises(ValidationError):
            change.path = "b.txt"


class TestFileChangeLog:
    """Tests for FileChangeLog."""

    def test_starts_empty(self):
        """Test that a new log has no changes."""
        assert FileChangeLog().get_changes() == []

    def test_same_type_recorded_once(self):
        """Test that re-recording an identical change is a no-op."""
        log = FileChangeLog()
        log.record_change(mod("a.txt", FileModificationType.CREATE))
        log.record_change(mod("a.txt", FileModificationType.CREATE))

        assert log.get_changes() == [mod("a.txt", FileModificationType.CREATE)]

    def test_different_type_replaces_entry(self):
        """Test that a new kind of change replaces the old entry."""
        log = FileChangeLog()
        log.record_change(mod("a.txt", FileModificationType.CREATE))
        log.record_change(mod("a.txt", FileModificationType.EDIT))

        assert log.get_changes() == [mod("a.txt", FileModificationType.EDIT)]

    def test_identical_change_keeps_position(self):
        """Test that re-recording does not reorder entries."""
        log = FileChangeLog()
        log.record_change(mod("a.txt", FileModificationType.CREATE))
        log.record_change(mod("b.txt", FileModificationType.CREATE))
        log.record_change(mod("a.txt", FileModificationType.CREATE))

        assert [c.path for c in log.get_changes()] == ["a.txt", "b.txt"]

    def test_replaced_change_moves_to_end(self):
        """Test that an updated entry is appended after the others."""
        log = FileChangeLog()
        log.record_change(mod("a.txt", FileModificationType.CREATE))
        log.record_change(mod("b.txt", FileModificationType.CREATE))
        log.record_change(mod("a.txt", FileModificationType.DELETE))

        assert log.get_changes() == [
            mod("b.txt", FileModificationType.CREATE),
            mod("a.txt", FileModificationType.DELETE),
        ]

    def test_get_changes_returns_copy(self):
        """Test that callers cannot mutate the log through the snapshot."""
        log = FileChangeLog()
        log.record_change(mod("a.txt", FileModificationType.CREATE))

        snapshot = log.get_changes()
        snapshot.clear()

        assert len(log) == 1

    def test_flush_changes(self):
        """Test that flushing clears all entries."""
        log = FileChangeLog([mod("a.txt", FileModificationType.CREATE)])
        log.flush_changes()

        assert log.get_changes() == []

    def test_initial_changes_are_deduplicated(self):
        """Test that changes passed to the constructor follow the same rules."""
        log = FileChangeLog(
            [
                mod("a.txt", FileModificationType.CREATE),
                mod("a.txt", FileModificationType.APPEND),
            ]
        )

        assert log.get_changes() == [mod("a.txt", FileModificationType.APPEND)]

    def test_concurrent_recording(self):
        """Test that concurrent writers keep one entry per path."""
        log = FileChangeLog()
        kinds = list(FileModificationType)

        def worker(offset: int) -> None:
            for i in range(200):
                log.record_change(mod(f"f{i % 20}.txt", kinds[(i + offset) % len(kinds)]))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        paths = [c.path for c in log.get_changes()]
        assert len(paths) == len(set(paths)) == 20


class TestChangeSet:
    """Tests for ChangeSet."""

    def test_paths(self):
        """Test listing the paths of a change set."""
        change_set = ChangeSet(
            changes=[
                mod("a.txt", FileModificationType.CREATE),
                mod("b", FileModificationType.CREATE_DIRECTORY),
            ],
            root="/tmp/project",
        )

        assert change_set.paths == ["a.txt", "b"]
        assert len(change_set) == 2
