"""
Unit tests: tasks
"""

import pytest

from buildorch.core.errors import ConfigurationError, UnknownTaskError
from buildorch.core.tasks import DeleteTask, TaskContainer


class TestDeleteTask:
    """Recursive deletion"""

    def test_deletes_directory_tree(self, tmp_path):
        """Deletes directory tree"""
        target = tmp_path / "build"
        (target / "app" / "outputs").mkdir(parents=True)
        (target / "app" / "outputs" / "app.apk").write_bytes(b"apk")

        task = DeleteTask("clean", [target])
        task.execute()

        assert not target.exists()
        assert task.executed
        assert task.deleted == [target]

    def test_absent_target_is_not_an_error(self, tmp_path):
        """Absent target is not an error"""
        task = DeleteTask("clean", [tmp_path / "missing"])
        task.execute()
        task.execute()
        assert task.executed
        assert task.deleted == []

    def test_deletes_file(self, tmp_path):
        """Deletes file"""
        target = tmp_path / "stale.txt"
        target.write_text("x", encoding="utf-8")
        DeleteTask("clean", [target]).execute()
        assert not target.exists()

    def test_targets_resolved_at_execution(self, tmp_path):
        """Targets resolved at execution"""
        holder = {"dir": tmp_path / "first"}
        task = DeleteTask("clean", [lambda: holder["dir"]])

        holder["dir"] = tmp_path / "second"
        holder["dir"].mkdir()
        (tmp_path / "first").mkdir()
        task.execute()

        assert (tmp_path / "first").exists()
        assert not (tmp_path / "second").exists()


class TestTaskContainer:
    """Task registry"""

    def test_register_and_get(self, tmp_path):
        """Register and get"""
        tasks = TaskContainer()
        task = tasks.register(DeleteTask("clean", [tmp_path]))
        assert tasks.get("clean") is task
        assert "clean" in tasks
        assert tasks.names() == ["clean"]

    def test_duplicate_rejected(self, tmp_path):
        """Duplicate rejected"""
        tasks = TaskContainer()
        tasks.register(DeleteTask("clean", [tmp_path]))
        with pytest.raises(ConfigurationError):
            tasks.register(DeleteTask("clean", [tmp_path]))

    def test_unknown_task(self):
        """Unknown task"""
        tasks = TaskContainer()
        assert tasks.find_by_name("assemble") is None
        with pytest.raises(UnknownTaskError):
            tasks.get("assemble")
