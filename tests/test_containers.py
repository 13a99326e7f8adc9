"""Tests for research_study.containers.add_to_container."""

from research_study import ResearchStudy
from research_study.containers import add_to_container


class TestMappingContainer:

    def test_creates_missing_list(self):
        location = {"resourceType": "Location"}
        add_to_container(location, "telecom", {"system": "phone"})
        assert location["telecom"] == [{"system": "phone"}]

    def test_replaces_none(self):
        record = {"telecom": None}
        add_to_container(record, "telecom", 1)
        assert record["telecom"] == [1]

    def test_preserves_order(self):
        record = {}
        for i in range(5):
            add_to_container(record, "items", i)
        assert record["items"] == [0, 1, 2, 3, 4]

    def test_returns_stored_list(self):
        record = {"items": ["a"]}
        items = add_to_container(record, "items", "b")
        assert items is record["items"]
        assert items == ["a", "b"]


class TestAttributeContainer:

    def test_creates_list_on_study(self):
        study = ResearchStudy("s")
        assert study.arm is None
        add_to_container(study, "arm", {"name": "A"})
        assert study.arm == [{"name": "A"}]

    def test_appends_to_existing(self):
        study = ResearchStudy("s")
        add_to_container(study, "arm", {"name": "A"})
        add_to_container(study, "arm", {"name": "B"})
        assert [a["name"] for a in study.arm] == ["A", "B"]
