"""
Tests for research_study.sites_import — site list import.

Uses small CSV files written to tmp_path.
"""

import pandas as pd

from research_study import ResearchStudy, load_sites
from research_study.sites_import import read_site_rows, SiteRow


def _write_csv(tmp_path, text, name="sites.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestReadSiteRows:

    def test_normalises_columns(self):
        df = pd.DataFrame({" Site Name ": ["Foo"], "Phone": ["555"], "EMAIL": ["f@x.org"]})
        assert read_site_rows(df) == [SiteRow(name="Foo", phone="555", email="f@x.org")]

    def test_name_fallback_column(self):
        df = pd.DataFrame({"Name": ["Bar"]})
        assert read_site_rows(df) == [SiteRow(name="Bar")]

    def test_row_without_name_is_none(self):
        df = pd.DataFrame({"site_name": ["Foo", None, "  "]})
        rows = read_site_rows(df)
        assert rows[0].name == "Foo"
        assert rows[1] is None
        assert rows[2] is None


class TestLoadSites:

    def test_adds_sites_from_csv(self, tmp_path):
        path = _write_csv(tmp_path,
                          "Site Name,Phone,Email\n"
                          "Foo Clinic,555-1234,\n"
                          "Bar Hospital,,bar@example.org\n")
        study = ResearchStudy("NCT1")
        result = load_sites(study, path)
        assert result.success
        assert [s["name"] for s in result.sites] == ["Foo Clinic", "Bar Hospital"]
        assert result.sites[0]["telecom"] == [{"system": "phone", "value": "555-1234", "use": "work"}]
        assert result.sites[1]["telecom"] == [{"system": "email", "value": "bar@example.org", "use": "work"}]
        assert [r["reference"] for r in study.site] == ["#location-0", "#location-1"]

    def test_phone_kept_as_text(self, tmp_path):
        path = _write_csv(tmp_path, "name,phone\nFoo,0123456\n")
        study = ResearchStudy("x")
        result = load_sites(study, path)
        assert result.sites[0]["telecom"][0]["value"] == "0123456"

    def test_skips_rows_without_name(self, tmp_path):
        path = _write_csv(tmp_path, "site_name,phone\nFoo,1\n,2\n")
        study = ResearchStudy("x")
        result = load_sites(study, path)
        assert len(result.sites) == 1
        assert result.skipped_rows == 1
        assert result.to_dict()["summary"] == {"siteCount": 1, "skippedRows": 1}

    def test_missing_file(self, tmp_path):
        study = ResearchStudy("x")
        result = load_sites(study, str(tmp_path / "nope.csv"))
        assert not result.success
        assert "not found" in result.error
        assert study.site is None

    def test_unsupported_format(self, tmp_path):
        path = _write_csv(tmp_path, "whatever", name="sites.txt")
        result = load_sites(ResearchStudy("x"), path)
        assert not result.success
        assert "Unsupported file format" in result.to_dict()["error"]


class TestUnreadableFiles:
    """Read failures come back as success=False, the study is untouched."""

    def test_empty_csv(self, tmp_path):
        path = _write_csv(tmp_path, "")
        study = ResearchStudy("x")
        result = load_sites(study, path)
        assert not result.success
        assert result.error
        assert result.source_file == path
        assert study.site is None
        assert study.contained is None

    def test_corrupt_excel(self, tmp_path):
        path = _write_csv(tmp_path, "not really a workbook", name="sites.xlsx")
        study = ResearchStudy("x")
        result = load_sites(study, path)
        assert not result.success
        assert result.error
        assert study.site is None
