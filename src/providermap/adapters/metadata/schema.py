"""Pydantic models describing package manifest payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from providermap.domain.model import PackageRecord, normalize_declarations


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PackagePayload(ManifestBaseModel):
    name: str = Field(min_length=1)
    version: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _prefer_pretty_version(cls, value: object) -> object:
        # installed-package listings carry both a normalized and a pretty version
        if isinstance(value, Mapping):
            data: dict[str, object] = dict(cast(Mapping[str, object], value))
            if data.get("pretty_version"):
                data["version"] = data["pretty_version"]
            return data
        return value

    _normalize_version = field_validator("version", mode="before")(_blank_to_none)

    @field_validator("extra", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value

    def to_record(self, metadata_key: str) -> PackageRecord:
        """Return the package as a record holding the bindings under ``metadata_key``."""

        raw = self.extra.get(metadata_key)
        if raw is not None and not isinstance(raw, Mapping):
            raise TypeError(
                f"extra.{metadata_key} of {self.name} must be a mapping, got {type(raw).__name__}"
            )
        declarations = normalize_declarations(cast(Mapping[str, object] | None, raw))
        return PackageRecord(name=self.name, version=self.version, declarations=declarations)


class ManifestPayload(ManifestBaseModel):
    root: PackagePayload | None = None
    packages: list[PackagePayload] = Field(default_factory=list[PackagePayload])

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_package_list(cls, value: object) -> object:
        if isinstance(value, list):
            return {"packages": value}
        return value


class ProjectTable(ManifestBaseModel):
    name: str = Field(min_length=1)
    version: str | None = None

    _normalize_version = field_validator("version", mode="before")(_blank_to_none)


class PyprojectPayload(ManifestBaseModel):
    project: ProjectTable
    tool: dict[str, Any] = Field(default_factory=dict)

    def to_record(self, metadata_key: str) -> PackageRecord:
        settings = self.tool.get("providermap")
        raw: object = settings.get(metadata_key) if isinstance(settings, Mapping) else None
        if raw is not None and not isinstance(raw, Mapping):
            raise TypeError(
                f"tool.providermap.{metadata_key} must be a table, got {type(raw).__name__}"
            )
        declarations = normalize_declarations(cast(Mapping[str, object] | None, raw))
        return PackageRecord(
            name=self.project.name,
            version=self.project.version,
            declarations=declarations,
        )
