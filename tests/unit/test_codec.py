"""Tests for encoding and decoding the stored project list."""

import json
import pytest

from projectshelf.core.codec import CorruptStateError, decode_projects, encode_projects
from projectshelf.models.project import Project


class TestCodec:
    """Test encode_projects and decode_projects."""

    def test_round_trip(self):
        entries = [
            ("id-1", Project(title="Acme", status="In Progress", description="# Hi\n\n- one")),
            ("id-2", Project(title="Ünïcode", website="example.com", favorite="website")),
            ("id-3", Project.model_validate({"title": "Extra", "custom": {"a": 1}})),
        ]

        assert decode_projects(encode_projects(entries)) == entries

    def test_encoded_format(self):
        blob = encode_projects([("id-1", Project(title="Acme", status="In Progress"))])

        assert json.loads(blob) == [{"id": "id-1", "title": "Acme", "status": "In Progress"}]

    def test_empty(self):
        assert encode_projects([]) == "[]"
        assert decode_projects("[]") == []

    def test_missing_ids_are_generated(self):
        entries = decode_projects('[{"title": "a"}, {"title": "b", "id": ""}]')

        ids = [project_id for project_id, _ in entries]
        assert all(ids)
        assert ids[0] != ids[1]

    def test_repeated_ids_get_fresh_ones(self):
        blob = '[{"id": "x", "title": "First"}, {"id": "x", "title": "Second"}]'
        entries = decode_projects(blob)

        assert [p.title for _, p in entries] == ["First", "Second"]
        assert entries[0][0] == "x"
        assert entries[1][0] != "x"

    def test_store_id_wins_over_record_id(self):
        project = Project.model_validate({"id": "stale", "title": "a"})
        blob = encode_projects([("fresh", project)])

        assert json.loads(blob) == [{"id": "fresh", "title": "a"}]

    @pytest.mark.parametrize(
        "blob",
        [
            "not json",
            '{"title": "a"}',
            '["a string"]',
            '[{"status": "Backlog"}]',
            '[{"title": 42}]',
        ],
    )
    def test_corrupt(self, blob):
        with pytest.raises(CorruptStateError):
            decode_projects(blob)

    def test_corrupt_state_is_value_error(self):
        with pytest.raises(ValueError):
            decode_projects("")
