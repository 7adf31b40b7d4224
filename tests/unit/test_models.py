"""Tests for projectshelf data models."""

from projectshelf.models import Project, ProjectStatus, LinkKind


class TestProject:
    """Test the Project record."""

    def test_project_creation(self):
        project = Project(title="Acme")

        assert project.title == "Acme"
        assert project.status is None
        assert project.description is None
        assert project.links() == []
        assert project.quick_link() is None

    def test_legacy_link_names(self):
        """Older records used repo/github for the repository link."""
        assert Project.model_validate({"title": "a", "repo": "r"}).repository == "r"
        assert Project.model_validate({"title": "a", "github": "g"}).repository == "g"
        assert Project(title="a", repository="x").repository == "x"

    def test_links_in_display_order(self):
        project = Project(title="a", kanban="k", url="u", extra="", design="d")

        assert project.links() == [
            (LinkKind.URL, "u"),
            (LinkKind.KANBAN, "k"),
            (LinkKind.DESIGN, "d"),
        ]

    def test_quick_link_prefers_favorite(self):
        project = Project(title="a", website="w", roadmap="r", favorite=LinkKind.ROADMAP)
        assert project.quick_link() == (LinkKind.ROADMAP, "r")

    def test_quick_link_falls_back_when_favorite_empty(self):
        project = Project(title="a", website="w", favorite="backend")
        assert project.quick_link() == (LinkKind.WEBSITE, "w")

    def test_unknown_fields_are_kept(self):
        project = Project.model_validate({"title": "a", "priority": "high"})
        assert project.model_dump(exclude_none=True) == {"title": "a", "priority": "high"}

    def test_keywords(self):
        assert Project(title="a").keywords() == ["a"]
        assert Project(title="a", status="Paused").keywords() == ["a", "Paused"]

    def test_status_values(self):
        assert ProjectStatus("In Progress") is ProjectStatus.IN_PROGRESS
        assert len(ProjectStatus) == 8

    def test_second_legacy_repository_moves_to_extra(self):
        project = Project.model_validate(
            {"title": "a", "repo": "gitlab.com/a", "github": "github.com/a"}
        )

        assert project.repository == "gitlab.com/a"
        assert project.extra == "github.com/a"
        assert project.model_extra == {}
        assert (LinkKind.EXTRA, "github.com/a") in project.links()

    def test_legacy_repository_kept_when_extra_taken(self):
        project = Project.model_validate(
            {"title": "a", "repository": "r", "github": "g", "extra": "e"}
        )

        assert project.repository == "r"
        assert project.extra == "e"
        assert project.model_extra == {"github": "g"}

    def test_duplicate_legacy_repository_dropped(self):
        project = Project.model_validate({"title": "a", "repo": "r", "github": "r"})

        assert project.repository == "r"
        assert project.extra is None
        assert project.model_extra == {}
