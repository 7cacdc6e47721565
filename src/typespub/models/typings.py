"""Parsed type-definition package metadata.

These records are produced by an external definition parser; typespub only
consumes them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import ConfigDict, Field

from typespub.models._base import TypesPubBaseModel


class DefinitionFileKind(StrEnum):
    """How a definition file declares its contents.

    Values without a mapped member resolve to ``UNKNOWN`` instead of
    raising ``ValueError``.
    """

    UNKNOWN = "Unknown"
    GLOBAL = "Global"
    DECLARE_MODULE = "DeclareModule"
    UMD = "UMD"
    OLD_UMD = "OldUMD"
    PROPER_MODULE = "ProperModule"
    MODULE_AUGMENTATION = "ModuleAugmentation"
    MULTIPLE_MODULES = "MultipleModules"
    MIXED = "Mixed"

    @classmethod
    def _missing_(cls, value: object) -> DefinitionFileKind:
        return cls.UNKNOWN


class TypingsData(TypesPubBaseModel):
    """One publishable definition package."""

    model_config = ConfigDict(extra="ignore")

    library_name: str
    package_name: str
    root: str
    files: list[str] = Field(default_factory=list)
    library_major_version: int = 0
    library_minor_version: int = 0
    authors: str = ""
    project_name: str = ""
    source_repo_url: str = Field(default="", alias="sourceRepoURL")
    kind: DefinitionFileKind = DefinitionFileKind.UNKNOWN
    definition_filename: str = "index.d.ts"
    module_dependencies: list[str] = Field(default_factory=list)
    library_dependencies: list[str] = Field(default_factory=list)
    globals: list[str] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Package key used in the version map."""
        return self.package_name.lower()

    def sorted_files(self) -> list[str]:
        """Files in deterministic order so the content hash is stable."""
        return sorted(self.files)
