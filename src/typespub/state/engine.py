"""Update decision engine.

Decides whether a package's content changed since its last publish and
drives one apply-and-commit cycle when it did::

    load -> hash -> plan -> apply(candidate) -> save (only on success)

The engine never interprets what ``apply`` does; it only observes the
boolean it returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from typespub.config import PublishSettings
from typespub.exceptions import PersistenceWriteError
from typespub.hashing import compute_hash
from typespub.models.versions import VersionMap, VersionRecord, untracked_record
from typespub.state.store import VersionStore

_logger = logging.getLogger(__name__)

#: ``apply(candidate_version) -> success``.
ApplyAction = Callable[[int], bool]


class UpdatePlan(BaseModel):
    """Outcome of comparing a content hash with the stored record."""

    model_config = ConfigDict(frozen=True)

    key: str
    content_hash: str
    current: VersionRecord
    candidate_version: int | None = None


def plan_update(
    version_map: VersionMap,
    key: str,
    content_hash: str,
    *,
    force_update: bool = False,
) -> UpdatePlan:
    """Compare *content_hash* with the record for *key*.

    A key seen for the first time is inserted into *version_map* as an
    untracked record, whether or not an update follows. *version_map* must be
    a working copy: nothing here writes to disk.
    """
    entry = version_map.get(key)
    if entry is None:
        entry = untracked_record()
        version_map[key] = entry

    candidate: int | None = None
    if entry.last_content_hash != content_hash or force_update:
        candidate = entry.last_version + 1

    return UpdatePlan(key=key, content_hash=content_hash, current=entry, candidate_version=candidate)


class UpdateEngine:
    """Gate publishes on content changes and record committed versions.

    Parameters
    ----------
    store : VersionStore
        Where the version map lives. Loaded fresh on every cycle.
    force_update : bool
        Default for :meth:`perform_update`'s ``force_update`` argument.
    hasher : callable
        Content fingerprint function.
    """

    def __init__(
        self,
        store: VersionStore,
        *,
        force_update: bool = False,
        hasher: Callable[[str], str] = compute_hash,
    ) -> None:
        self._store = store
        self._force_update = force_update
        self._hasher = hasher

    @classmethod
    def from_settings(cls, settings: PublishSettings) -> UpdateEngine:
        return cls(VersionStore(settings.version_file), force_update=settings.force_update)

    @property
    def store(self) -> VersionStore:
        return self._store

    def perform_update(
        self,
        key: str,
        content: str,
        apply: ApplyAction,
        force_update: bool | None = None,
    ) -> bool:
        """Run one decision cycle for *key*.

        Returns ``True`` when an update was warranted and ``apply`` was
        invoked, whether or not it succeeded. Only a successful ``apply``
        is committed. Returns ``False`` when the content is unchanged and
        the update is not forced; nothing is written in that case.

        Raises
        ------
        StateCorruptError
            The version file exists but cannot be parsed.
        PersistenceWriteError
            ``apply`` succeeded but the new version could not be recorded.
        """
        force = self._force_update if force_update is None else force_update

        version_map = self._store.load()
        plan = plan_update(version_map, key, self._hasher(content), force_update=force)

        candidate = plan.candidate_version
        if candidate is None:
            _logger.debug("%s unchanged at version %d", key, plan.current.last_version)
            return False

        _logger.debug(
            "%s: candidate version %d (forced=%s, changed=%s)",
            key,
            candidate,
            force,
            plan.current.last_content_hash != plan.content_hash,
        )

        if not apply(candidate):
            _logger.warning("%s: apply failed for version %d; nothing recorded", key, candidate)
            return True

        committed: VersionMap = dict(version_map)
        committed[key] = VersionRecord(last_version=candidate, last_content_hash=plan.content_hash)
        try:
            self._store.save(committed)
        except PersistenceWriteError as exc:
            _logger.error(
                "%s: version %d was applied but could not be recorded in %s; "
                "a forced update is needed to retry",
                key,
                candidate,
                self._store.path,
            )
            raise PersistenceWriteError(
                str(exc),
                path=exc.path,
                key=key,
                version=candidate,
            ) from exc

        _logger.debug("%s: committed version %d", key, candidate)
        return True
