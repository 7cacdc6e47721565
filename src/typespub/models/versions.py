"""Version map records."""

from __future__ import annotations

from pydantic import Field, TypeAdapter

from typespub.models._base import TypesPubBaseModel


class VersionRecord(TypesPubBaseModel):
    """Last committed version of one package and the content that produced it.

    Parameters
    ----------
    last_version : int
        Patch version of the last successful publish (``0`` = never published).
    last_content_hash : str
        Fingerprint of the content published as ``last_version``
        (empty until the first publish).

    Both fields are required and validated strictly: a persisted record
    missing either one, or holding a coerced value, is corrupt state.
    Build the first-sight placeholder with :func:`untracked_record`.
    """

    last_version: int = Field(ge=0, strict=True)
    last_content_hash: str = Field(strict=True)


#: Package key (lower-cased package name) -> record.
VersionMap = dict[str, VersionRecord]

VERSION_MAP_ADAPTER: TypeAdapter[VersionMap] = TypeAdapter(VersionMap)


def untracked_record() -> VersionRecord:
    """Placeholder record for a key seen for the first time."""
    return VersionRecord(last_version=0, last_content_hash="")
