"""Data models for typespub."""

from typespub.models._base import TypesPubBaseModel
from typespub.models.manifest import PackageManifest
from typespub.models.typings import DefinitionFileKind, TypingsData
from typespub.models.versions import VERSION_MAP_ADAPTER, VersionMap, VersionRecord, untracked_record

__all__ = [
    "DefinitionFileKind",
    "PackageManifest",
    "TypesPubBaseModel",
    "TypingsData",
    "VERSION_MAP_ADAPTER",
    "VersionMap",
    "VersionRecord",
    "untracked_record",
]
