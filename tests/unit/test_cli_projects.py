"""Tests for the project CLI commands."""

import logging
import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner
from unittest.mock import patch

from projectshelf.cli.main import app
from projectshelf.managers.kv import KVManager
from projectshelf.managers.projects import ProjectStore
from projectshelf.models.project import Project


class TestCLIProjectCommands:
    """Test suite for `shelf project` commands."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def shelf(self, shelf_dir, monkeypatch):
        """A shelf the CLI finds through PROJECTSHELF_DIR."""
        monkeypatch.setenv("PROJECTSHELF_DIR", str(shelf_dir))
        return shelf_dir

    def stored(self, shelf_dir):
        store = ProjectStore(shelf_dir)
        store.load()
        return store

    def test_init(self, runner, temp_dir):
        result = runner.invoke(app, ["init", str(temp_dir)])
        assert result.exit_code == 0
        assert "Initialized shelf" in result.stdout

        result = runner.invoke(app, ["init", str(temp_dir)])
        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_not_a_shelf(self, runner, temp_dir, monkeypatch):
        monkeypatch.setenv("PROJECTSHELF_DIR", str(temp_dir))
        result = runner.invoke(app, ["project", "list"])

        assert result.exit_code == 1
        assert "shelf init" in result.stdout

    def test_list_empty(self, runner, shelf):
        result = runner.invoke(app, ["project", "list"])

        assert result.exit_code == 0
        assert "No projects found" in result.stdout

    def test_create_and_list(self, runner, shelf):
        result = runner.invoke(
            app,
            ["project", "create", "Acme", "--status", "in progress", "--website", "acme.dev"],
        )
        assert result.exit_code == 0
        assert "Created project 'Acme'" in result.stdout

        projects = self.stored(shelf).projects
        assert projects == [Project(title="Acme", status="In Progress", website="acme.dev")]

        result = runner.invoke(app, ["project", "list"])
        assert result.exit_code == 0
        assert "Acme" in result.stdout
        assert "acme.dev" in result.stdout

    def test_create_uses_default_status(self, runner, shelf):
        result = runner.invoke(app, ["project", "create", "Plain"])

        assert result.exit_code == 0
        assert self.stored(shelf).projects[0].status == "Not Started"

    def test_create_unknown_status(self, runner, shelf):
        result = runner.invoke(app, ["project", "create", "X", "--status", "Someday"])

        assert result.exit_code == 1
        assert "Unknown status" in result.stdout
        assert len(self.stored(shelf)) == 0

    def test_create_blank_title_rejected_when_required(self, runner, shelf, monkeypatch):
        monkeypatch.setenv("PROJECTSHELF_REQUIRE_TITLE", "1")
        result = runner.invoke(app, ["project", "create", "  "])

        assert result.exit_code == 1
        assert "cannot be empty" in result.stdout

    def test_create_empty_title_accepted_by_default(self, runner, shelf):
        result = runner.invoke(app, ["project", "create", ""])

        assert result.exit_code == 0
        assert result.exception is None
        assert [p.title for p in self.stored(shelf).projects] == [""]

    def test_create_empty_title_rejected_when_required(self, runner, shelf, monkeypatch):
        monkeypatch.setenv("PROJECTSHELF_REQUIRE_TITLE", "1")
        result = runner.invoke(app, ["project", "create", ""])

        assert result.exit_code == 1
        assert "cannot be empty" in result.stdout
        assert len(self.stored(shelf)) == 0

    def test_repeated_invocations_install_one_log_handler(self, runner, shelf):
        root_handlers = list(logging.getLogger().handlers)

        runner.invoke(app, ["project", "list"])
        runner.invoke(app, ["--verbose", "project", "list"])

        shelf_logger = logging.getLogger("projectshelf")
        assert sum(isinstance(h, RichHandler) for h in shelf_logger.handlers) == 1
        assert shelf_logger.level == logging.DEBUG
        assert logging.getLogger().handlers == root_handlers

    def test_list_filters(self, runner, shelf):
        store = self.stored(shelf)
        store.create(Project(title="Alpha", status="Backlog"))
        store.create(Project(title="Beta", status="Completed"))

        result = runner.invoke(app, ["project", "list", "complete"])

        assert result.exit_code == 0
        assert "Beta" in result.stdout
        assert "Alpha" not in result.stdout

    def test_show(self, runner, shelf):
        store = self.stored(shelf)
        store.create(
            Project(
                title="Acme",
                status="Paused",
                description="Waiting on **design**",
                design="figma.com/acme",
                favorite="design",
            )
        )

        result = runner.invoke(app, ["project", "show", "0"])

        assert result.exit_code == 0
        assert "Acme" in result.stdout
        assert "Paused" in result.stdout
        assert "Waiting on" in result.stdout
        assert "figma.com/acme" in result.stdout

    def test_show_bad_ref(self, runner, shelf):
        result = runner.invoke(app, ["project", "show", "3"])

        assert result.exit_code == 1
        assert "out of range" in result.stdout

    def test_edit_keeps_unspecified_fields(self, runner, shelf):
        store = self.stored(shelf)
        store.create(Project(title="Acme", status="Backlog", website="acme.dev", kanban="k"))

        result = runner.invoke(
            app, ["project", "edit", "0", "--status", "Completed", "--kanban", ""]
        )

        assert result.exit_code == 0
        assert self.stored(shelf).projects == [
            Project(title="Acme", status="Completed", website="acme.dev")
        ]

    def test_edit_by_id_prefix(self, runner, shelf):
        store = self.stored(shelf)
        store.create(Project(title="First"))
        store.create(Project(title="Second"))
        second_id = store.ids[1]

        result = runner.invoke(app, ["project", "edit", second_id, "--title", "Renamed"])

        assert result.exit_code == 0
        assert [p.title for p in self.stored(shelf).projects] == ["First", "Renamed"]

    def test_delete(self, runner, shelf):
        store = self.stored(shelf)
        for title in ("A", "B", "C"):
            store.create(Project(title=title))

        result = runner.invoke(app, ["project", "delete", "1", "--force"])

        assert result.exit_code == 0
        assert "Deleted project 'B'" in result.stdout
        assert [p.title for p in self.stored(shelf).projects] == ["A", "C"]

    def test_delete_cancelled(self, runner, shelf):
        self.stored(shelf).create(Project(title="Keep"))

        result = runner.invoke(app, ["project", "delete", "0"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert len(self.stored(shelf)) == 1

    def test_open_print(self, runner, shelf):
        self.stored(shelf).create(Project(title="Shop", url="my-shop", website="shop.com"))

        result = runner.invoke(app, ["project", "open", "0", "--print"])
        assert result.exit_code == 0
        assert "https://admin.shopify.com/store/my-shop/" in result.stdout

        result = runner.invoke(app, ["project", "open", "0", "--link", "website", "--print"])
        assert result.exit_code == 0
        assert "https://shop.com" in result.stdout

    def test_open_launches_browser(self, runner, shelf):
        self.stored(shelf).create(Project(title="Repo", repository="https://github.com/a/b"))

        with patch("projectshelf.cli.commands.projects.typer.launch") as launch:
            result = runner.invoke(app, ["project", "open", "0"])

        assert result.exit_code == 0
        launch.assert_called_once_with("https://github.com/a/b")

    def test_open_without_links(self, runner, shelf):
        self.stored(shelf).create(Project(title="Bare"))

        result = runner.invoke(app, ["project", "open", "0"])

        assert result.exit_code == 1
        assert "has no links" in result.stdout

    def test_corrupt_store_warns_and_lists_empty(self, runner, shelf):
        KVManager(shelf).set("projects", "definitely not json")

        result = runner.invoke(app, ["project", "list"])

        assert result.exit_code == 0
        assert "could not be read" in result.stdout
        assert "No projects found" in result.stdout

    def test_statuses(self, runner, shelf):
        result = runner.invoke(app, ["project", "statuses"])

        assert result.exit_code == 0
        assert "In Review" in result.stdout
        assert "Blocked" in result.stdout

    def test_status_command(self, runner, shelf):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Storage key: projects" in result.stdout
        assert "PROJECTSHELF_DIR" in result.stdout
