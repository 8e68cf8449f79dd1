"""Tests for PluginManifest, validate_manifest and manifest_from_object."""

import pytest
from pydantic import ValidationError

from plugin_host.plugins.errors import ManifestSchemaInvalid
from plugin_host.plugins.manifest import (
    PluginManifest,
    manifest_from_object,
    parse_version,
    validate_manifest,
)


def _data(**overrides: object) -> dict:
    data: dict = {
        "manifest_version": 1,
        "name": "Hello",
        "version": "1.0.0",
        "app_min_version": "1.4",
    }
    data.update(overrides)
    return data


class TestPluginManifest:
    """Model validation."""

    def test_valid_minimal(self) -> None:
        m = PluginManifest.model_validate(_data())
        assert m.name == "Hello"
        assert m.app_min_version == "1.4"
        assert m.description == ""
        assert m.permissions == []

    def test_extra_fields_passed_through(self) -> None:
        m = PluginManifest.model_validate(_data(author="Someone", keywords=["a"]))
        dumped = m.model_dump()
        assert dumped["author"] == "Someone"
        assert dumped["keywords"] == ["a"]

    def test_missing_name(self) -> None:
        data = _data()
        del data["name"]
        with pytest.raises(ValidationError):
            PluginManifest.model_validate(data)

    def test_invalid_app_min_version(self) -> None:
        with pytest.raises(ValidationError):
            PluginManifest.model_validate(_data(app_min_version="latest"))

    def test_unknown_permission(self) -> None:
        with pytest.raises(ValidationError):
            PluginManifest.model_validate(_data(permissions=["root"]))

    def test_known_permission(self) -> None:
        m = PluginManifest.model_validate(_data(permissions=["model"]))
        assert m.permissions == ["model"]


class TestValidateManifest:
    """Tagged result, no exceptions."""

    def test_ok(self) -> None:
        result = validate_manifest(_data())
        assert result.ok
        assert result.manifest is not None
        assert result.errors == []

    def test_errors(self) -> None:
        result = validate_manifest({"name": "x"})
        assert not result.ok
        assert result.manifest is None
        assert result.errors

    def test_not_an_object(self) -> None:
        result = validate_manifest(["a"])
        assert not result.ok
        assert result.errors[0]["type"] == "dict_type"


class TestManifestFromObject:
    """Raising variant."""

    def test_returns_manifest(self) -> None:
        assert manifest_from_object(_data()).version == "1.0.0"

    def test_raises_schema_invalid(self) -> None:
        with pytest.raises(ManifestSchemaInvalid) as exc_info:
            manifest_from_object(_data(manifest_version="one"))
        assert "manifest_version" in str(exc_info.value)
        assert exc_info.value.errors


class TestAppMinVersion:
    """app_min_version follows semantic versioning."""

    @pytest.mark.parametrize(
        "value",
        [
            "1.4",
            "2",
            "1.0.0-alpha",
            "1.0.0-0.3.7",
            "1.0.0-x.7.z.92",
            "1.0.0-alpha.beta",
            "2.0.0-beta.11",
            "1.0.0+20130313144700",
        ],
    )
    def test_semver_accepted(self, value: str) -> None:
        assert validate_manifest(_data(app_min_version=value)).ok

    @pytest.mark.parametrize("value", ["latest", "1.4.x", "01.2.3", "1.0.0-"])
    def test_non_semver_rejected(self, value: str) -> None:
        assert not validate_manifest(_data(app_min_version=value)).ok

    def test_short_form_padded(self) -> None:
        assert str(parse_version("1.4")) == "1.4.0"
        assert PluginManifest.model_validate(_data(app_min_version="1.4")).app_min_version == "1.4"

    def test_prerelease_ordering(self) -> None:
        assert parse_version("1.0.0-alpha") < parse_version("1.0.0")
        assert parse_version("1.0.0-alpha") < parse_version("1.0.0-alpha.1")
        assert parse_version("1.0.0-beta.2") < parse_version("1.0.0-beta.11")
        assert parse_version("1.9") < parse_version("1.10")

    def test_invalid_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_version("not-a-version")
