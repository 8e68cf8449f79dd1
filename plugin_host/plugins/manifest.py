"""Plugin manifest: Pydantic model and validation of raw manifest objects.

Fields the loader does not know about are kept as-is (extra="allow").
"""

from dataclasses import dataclass, field
from typing import Any

import semver
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from plugin_host.plugins.errors import ManifestSchemaInvalid

DEFAULT_APP_MIN_VERSION = "1.4"


def parse_version(value: str) -> semver.Version:
    """Parse a semantic version; "1.4" is read as "1.4.0". Raises ValueError."""
    try:
        return semver.Version.parse(value.strip(), optional_minor_and_patch=True)
    except (ValueError, TypeError):
        raise ValueError(f"Not a valid semantic version: {value!r}") from None


# Permissions a plugin may request in manifest.json
MANIFEST_PERMISSIONS = frozenset({"model"})


class PluginManifest(BaseModel):
    """Manifest schema for manifest.json / the embedded manifest block."""

    model_config = ConfigDict(extra="allow")

    manifest_version: int
    name: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    app_min_version: str
    description: str = ""
    homepage_url: str = ""
    permissions: list[str] = Field(default_factory=list)

    @field_validator("app_min_version")
    @classmethod
    def _validate_app_min_version(cls, value: str) -> str:
        parse_version(value)
        return value

    @field_validator("permissions")
    @classmethod
    def _validate_permissions(cls, value: list[str]) -> list[str]:
        for permission in value:
            if permission not in MANIFEST_PERMISSIONS:
                raise ValueError(f"Invalid permission: {permission}")
        return value

    @property
    def min_version(self) -> semver.Version:
        return parse_version(self.app_min_version)


@dataclass(frozen=True)
class ManifestValidation:
    """Outcome of validate_manifest: a manifest, or the validation errors."""

    manifest: PluginManifest | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.manifest is not None


def validate_manifest(data: Any) -> ManifestValidation:
    """Validate a raw JSON value without raising."""
    if not isinstance(data, dict):
        return ManifestValidation(
            errors=[{"loc": (), "msg": "Manifest must be a JSON object", "type": "dict_type"}]
        )
    try:
        return ManifestValidation(manifest=PluginManifest.model_validate(data))
    except ValidationError as e:
        return ManifestValidation(errors=[dict(err) for err in e.errors()])


def manifest_from_object(data: Any) -> PluginManifest:
    """Validate a raw manifest object. Raises ManifestSchemaInvalid on schema violation."""
    result = validate_manifest(data)
    if result.manifest is None:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())) or '<root>'}: {err.get('msg', '')}"
            for err in result.errors
        )
        raise ManifestSchemaInvalid(f"Invalid manifest: {details}", result.errors)
    return result.manifest
