"""Custom exception hierarchy for typespub."""

from __future__ import annotations

from pathlib import Path


class TypesPubError(Exception):
    """Base exception for all typespub errors."""


class TypesPubConfigError(TypesPubError):
    """Invalid or missing configuration."""


class VersionStoreError(TypesPubError):
    """Failure reading or writing the persisted version map."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class StateCorruptError(VersionStoreError):
    """The version file exists but does not hold a valid version map.

    This is fatal for the whole run.  Resetting the state would make every
    package look changed and trigger a spurious version bump for each one,
    so no automatic repair is attempted.
    """


class PersistenceWriteError(VersionStoreError):
    """Writing the version file failed.

    When raised from a commit, the publish for ``key`` at ``version`` has
    already happened but was not recorded.  A later run with the same
    content will see the old hash as unchanged, so only a forced update
    can republish that package.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        key: str = "",
        version: int | None = None,
    ) -> None:
        self.key = key
        self.version = version
        super().__init__(message, path=path)


class PublishCommandError(TypesPubError):
    """The external publish command could not be started."""

    def __init__(self, message: str, *, command: str = "") -> None:
        self.command = command
        super().__init__(message)
