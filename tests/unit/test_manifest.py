"""Tests for manifest loading and catalog models."""
import json

import pytest

from skill_catalog.catalog import (
    AgentsMode,
    PluginManifest,
    Severity,
    ValidationReport,
    load_manifest_json,
    load_marketplace_manifest,
    load_plugin_manifest,
    normalize_ref,
)
from skill_catalog.errors import ManifestError


def test_normalize_ref():
    assert normalize_ref("./skills/csharp/api-design") == "skills/csharp/api-design"
    assert normalize_ref("skills/csharp/api-design") == "skills/csharp/api-design"
    assert normalize_ref("../outside") == "../outside"


class TestLoadManifestJson:
    """Test raw JSON loading."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError) as exc_info:
            load_manifest_json(tmp_path / "plugin.json")
        assert "not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "plugin.json"
        path.write_text('{"name": "x",}')
        with pytest.raises(ManifestError) as exc_info:
            load_manifest_json(path)
        assert "Invalid JSON syntax in plugin.json" in str(exc_info.value)
        assert exc_info.value.path == path

    def test_non_object(self, tmp_path):
        path = tmp_path / "plugin.json"
        path.write_text("[1, 2]")
        with pytest.raises(ManifestError) as exc_info:
            load_manifest_json(path)
        assert "JSON object" in str(exc_info.value)


class TestPluginManifest:
    """Test plugin.json parsing."""

    def test_array_mode(self, tmp_path):
        path = tmp_path / "plugin.json"
        path.write_text(json.dumps({
            "name": "dotnet-skills",
            "version": "1.0.0",
            "skills": ["./skills/a/b"],
            "agents": ["./agents/x"],
            "homepage": "https://example.invalid",
        }))

        manifest = load_plugin_manifest(path)

        assert manifest.agents_mode == AgentsMode.ARRAY
        assert manifest.skills == ["./skills/a/b"]
        # Unknown keys are preserved
        assert manifest.model_extra["homepage"] == "https://example.invalid"

    def test_directory_mode(self):
        manifest = PluginManifest(agents="./agents")
        assert manifest.agents_mode == AgentsMode.DIRECTORY

    def test_defaults(self):
        manifest = PluginManifest()
        assert manifest.skills == []
        assert manifest.agents is None
        assert manifest.agents_mode is None

    def test_empty_agents_array(self):
        manifest = PluginManifest(agents=[])
        assert manifest.agents_mode == AgentsMode.ARRAY

    def test_wrong_skills_type(self, tmp_path):
        path = tmp_path / "plugin.json"
        path.write_text(json.dumps({"skills": "./skills"}))
        with pytest.raises(ManifestError) as exc_info:
            load_plugin_manifest(path)
        assert "Invalid plugin manifest" in str(exc_info.value)

    def test_empty_skill_reference(self, tmp_path):
        path = tmp_path / "plugin.json"
        path.write_text(json.dumps({"skills": [" "]}))
        with pytest.raises(ManifestError):
            load_plugin_manifest(path)


def test_marketplace_manifest(tmp_path):
    path = tmp_path / "marketplace.json"
    path.write_text(json.dumps({
        "name": "dotnet-skills",
        "owner": {"name": "someone"},
        "plugins": [{"name": "dotnet-skills", "source": "./"}],
        "metadata": {"version": "2"},
    }))

    manifest = load_marketplace_manifest(path)

    assert manifest.name == "dotnet-skills"
    assert manifest.plugins[0]["source"] == "./"


class TestValidationReport:
    """Test report aggregation."""

    def test_empty_report_passes(self):
        report = ValidationReport()
        assert report.passed
        assert report.passed_strict

    def test_warning_only(self):
        report = ValidationReport()
        report.add(Severity.WARNING, "unregistered-skill", "Skill not in plugin.json: ./x")

        assert report.passed
        assert not report.passed_strict
        assert len(report.warnings) == 1
        assert report.errors == []

    def test_error(self):
        report = ValidationReport()
        issue = report.add(Severity.ERROR, "missing-skill", "Missing", path="skills/x/SKILL.md", section="skills")

        assert not report.passed
        assert issue.section == "skills"
        assert report.errors == [issue]
