"""Durable version map storage.

The whole map is the unit of persistence: ``save`` always rewrites the
complete file. There is no locking, so two processes pointed at the same
file are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from typespub.config import DEFAULT_VERSION_FILE
from typespub.exceptions import PersistenceWriteError, StateCorruptError
from typespub.models.versions import VERSION_MAP_ADAPTER, VersionMap

_logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Permission bits for the state file: keep the existing ones, else honor the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def dump_version_map(version_map: VersionMap) -> str:
    """Serialize *version_map* deterministically.

    Keys are sorted at every level and indented by four spaces so that the
    file diffs cleanly between runs.
    """
    payload: dict[str, Any] = {
        key: record.model_dump(by_alias=True) for key, record in version_map.items()
    }
    return json.dumps(payload, indent=4, sort_keys=True, ensure_ascii=False) + "\n"


class VersionStore:
    """Read-modify-write access to the persisted version map.

    Nothing is cached between calls: every ``load`` reads the file again so
    a decision cycle never acts on state from an earlier invocation.
    """

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_VERSION_FILE) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> VersionMap:
        """Read the persisted map, or return an empty one if there is none."""
        if not self._path.exists():
            _logger.debug("No version file at %s; starting empty", self._path)
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StateCorruptError(
                f"Could not read version file {self._path}: {exc}",
                path=self._path,
            ) from exc

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StateCorruptError(
                f"Version file {self._path} is not valid JSON: {exc}",
                path=self._path,
            ) from exc

        if not isinstance(raw, dict):
            raise StateCorruptError(
                f"Version file {self._path} must hold a JSON object, got {type(raw).__name__}",
                path=self._path,
            )

        try:
            version_map = VERSION_MAP_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            raise StateCorruptError(
                f"Version file {self._path} has invalid records: {exc}",
                path=self._path,
            ) from exc

        _logger.debug("Loaded %d version records from %s", len(version_map), self._path)
        return version_map

    def save(self, version_map: VersionMap) -> None:
        """Replace the persisted state with *version_map*.

        The caller must pass the full authoritative map; anything missing
        from it is dropped from disk. The file is written to a sibling
        temporary file first and moved into place with ``os.replace``.
        """
        text = dump_version_map(version_map)
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
            # mkstemp creates the file 0600; os.replace would carry that over.
            os.chmod(tmp_name, _target_mode(self._path))
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceWriteError(
                f"Could not write version file {self._path}: {exc}",
                path=self._path,
            ) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        _logger.debug("Saved %d version records to %s", len(version_map), self._path)
