"""Unit tests for scene loading, CLI overrides and config adapters."""

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from penetrations.application.config import (
    ConfigError,
    SceneConfiguration,
    config_to_model_query,
    config_to_settings,
    format_json_path,
    link_to_transform,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
)
from penetrations.application.config.schema import CylindricalFaceConfig, LinkConfig
from penetrations.domain import Vector3
from penetrations.infrastructure.model_query import SceneModelQuery


def write_json(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestFormatJsonPath:
    """Tests for format_json_path."""

    def test_nested_keys(self) -> None:
        assert format_json_path(("settings", "clearance_mm")) == "settings.clearance_mm"

    def test_list_indices(self) -> None:
        assert format_json_path(("hosts", 0, "bbox", "min")) == "hosts[0].bbox.min"

    def test_empty(self) -> None:
        assert format_json_path(()) == ""


class TestLoadConfig:
    """Tests for load_config and load_config_from_dict."""

    def test_valid_scene(self, scene_file: Path) -> None:
        config = load_config(scene_file)

        assert isinstance(config, SceneConfiguration)
        assert [h.id for h in config.hosts] == ["W1", "S1"]
        assert len(config.conduits) == 7
        assert config.settings.clearance_mm == 50

    def test_minimal_scene_uses_defaults(self) -> None:
        config = load_config_from_dict({"schema_version": "1.0"})

        assert config.settings.clearance_mm == 50.0
        assert config.settings.merge_threshold_mm == 0.0
        assert config.settings.filters.grazing_threshold == 0.5
        assert config.hosts == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")

        assert exc_info.value.error_type == "file_not_found"
        assert "Scene file not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"schema_version": "1.0",\n  oops}', encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.error_type == "json_parse"
        assert exc_info.value.details[0]["line"] == 2

    def test_unknown_field_rejected(self, tmp_path: Path) -> None:
        path = write_json(tmp_path, {"schema_version": "1.0", "bogus": 1})

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.error_type == "validation"
        assert error.path == path
        assert any(d["path"] == "bogus" for d in error.details)

    def test_unsupported_version(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "2.0"})
        assert "Unsupported schema version" in exc_info.value.message

    def test_negative_clearance_reports_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(
                {"schema_version": "1.0", "settings": {"clearance_mm": -5}}
            )
        details = exc_info.value.details
        assert details[0]["path"] == "settings.clearance_mm"
        assert details[0]["value"] == -5
        assert "settings.clearance_mm" in exc_info.value.message

    def test_inverted_box_rejected(self, scene_data: dict[str, Any]) -> None:
        scene_data["hosts"][0]["bbox"] = {"min": [10, 0, 0], "max": [0, 200, 3000]}

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(scene_data)

        assert exc_info.value.details[0]["path"].startswith("hosts[0].bbox")

    def test_point_needs_three_coordinates(self, scene_data: dict[str, Any]) -> None:
        scene_data["conduits"][0]["start"] = [0, 0]
        with pytest.raises(ConfigError):
            load_config_from_dict(scene_data)

    def test_unknown_link_rejected(self, scene_data: dict[str, Any]) -> None:
        scene_data["conduits"][0]["link"] = "nowhere"

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(scene_data)

        assert "Unknown link 'nowhere'" in exc_info.value.message

    def test_duplicate_conduit_ids_rejected(self, scene_data: dict[str, Any]) -> None:
        scene_data["conduits"][1]["id"] = "P1"
        with pytest.raises(ConfigError):
            load_config_from_dict(scene_data)

    def test_unknown_category_still_loads(self, scene_data: dict[str, Any]) -> None:
        config = load_config_from_dict(scene_data)
        assert "sprinkler" in [c.category for c in config.conduits]

    def test_cylindrical_face_discriminated(self, scene_data: dict[str, Any]) -> None:
        scene_data["hosts"][0]["faces"] = [
            {
                "id": "W1:curve",
                "kind": "cylindrical",
                "axis_origin": [3000, -5000, 0],
                "radius": 5100,
                "mid_normal": [0, 1, 0],
            }
        ]

        config = load_config_from_dict(scene_data)

        face = config.hosts[0].faces[0]
        assert isinstance(face, CylindricalFaceConfig)
        assert face.axis_direction == [0.0, 0.0, 1.0]


class TestMergeConfigWithCli:
    """Tests for CLI overrides."""

    def test_overrides_apply(self, scene_data: dict[str, Any]) -> None:
        config = load_config_from_dict(scene_data)

        merged = merge_config_with_cli(config, clearance_mm=25, merge_threshold_mm=100)

        assert merged.settings.clearance_mm == 25
        assert merged.settings.merge_threshold_mm == 100
        assert config.settings.clearance_mm == 50

    def test_none_keeps_scene_value(self, scene_data: dict[str, Any]) -> None:
        config = load_config_from_dict(scene_data)
        merged = merge_config_with_cli(config)
        assert merged.settings.model_dump() == config.settings.model_dump()

    def test_invalid_override_raises(self, scene_data: dict[str, Any]) -> None:
        config = load_config_from_dict(scene_data)
        with pytest.raises(ValidationError):
            merge_config_with_cli(config, merge_threshold_mm=-1)


class TestAdapters:
    """Tests for config to domain adapters."""

    def test_config_to_settings(self) -> None:
        config = load_config_from_dict(
            {
                "schema_version": "1.0",
                "settings": {
                    "clearance_mm": 30,
                    "merge_threshold_mm": 75,
                    "abort_on_unsupported": True,
                    "filters": {"grazing_threshold": 0.7},
                },
            }
        )

        settings = config_to_settings(config)

        assert settings.clearance_mm == 30
        assert settings.merge_threshold_mm == 75
        assert settings.merging_enabled
        assert settings.abort_on_unsupported
        assert settings.grazing_threshold == 0.7
        assert settings.obstruction_probe_mm == 150.0

    def test_link_to_transform(self) -> None:
        transform = link_to_transform(
            LinkConfig(name="MEP", rotation_z_deg=90, translation=[1, 2, 3])
        )
        assert transform.apply_point(Vector3.zero()) == Vector3(1.0, 2.0, 3.0)
        rotated = transform.apply_vector(Vector3.basis_x())
        assert rotated.y == pytest.approx(1.0)

    def test_config_to_model_query(self, scene_data: dict[str, Any]) -> None:
        query = config_to_model_query(load_config_from_dict(scene_data))
        assert isinstance(query, SceneModelQuery)
