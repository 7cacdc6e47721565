"""Publish orchestration.

Feeds each definition package through the update engine. The apply
callback renders the package into the output directory and runs the
publish action; its failures are folded into a ``False`` result so the
engine records nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from typespub._action import NpmPublishAction, PublishAction
from typespub.config import PublishSettings
from typespub.exceptions import PublishCommandError
from typespub.models.typings import TypingsData
from typespub.render import collect_content, write_package
from typespub.state.engine import UpdateEngine

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class PublishResult:
    """What happened to one package during a run."""

    package_name: str
    updated: bool = False
    published: bool = False
    version: int | None = None
    log: list[str] = field(default_factory=list)


def publish(
    typing: TypingsData,
    settings: PublishSettings,
    *,
    engine: UpdateEngine | None = None,
    action: PublishAction | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> PublishResult:
    """Publish *typing* if its content changed since the last publish.

    ``updated`` is the engine's answer (an update was warranted and
    attempted); ``published`` tells whether the publish command succeeded.
    """
    engine = engine if engine is not None else UpdateEngine.from_settings(settings)
    action = action if action is not None else NpmPublishAction.from_settings(settings)

    result = PublishResult(package_name=typing.key)
    log = result.log
    log.append(f"Possibly publishing {typing.library_name}")

    content = collect_content(typing)

    def apply(version: int) -> bool:
        log.append(f"Publishing version {version}")
        log.append("Generate package.json and README.md; ensure output path exists")
        try:
            package_dir = write_package(typing, settings, version, now=clock())
        except OSError as exc:
            log.append(f"!!! Could not write package files: {exc}")
            return False
        for name in typing.sorted_files():
            log.append(f"Copy and patch {name}")

        try:
            outcome = action.publish(package_dir)
        except PublishCommandError as exc:
            log.append(f"Run {exc.command}")
            log.append("!!! Publish failed")
            log.append(str(exc))
            return False

        log.append(f"Run {outcome.command}")
        if not outcome.ok:
            log.append("!!! Publish failed")
            if outcome.output:
                log.append(outcome.output)
            return False

        log.append("Ran successfully")
        if outcome.output:
            log.append(outcome.output)
        result.published = True
        result.version = version
        return True

    result.updated = engine.perform_update(typing.key, content, apply, force_update=settings.force_update)

    if not result.updated:
        log.append("Package was already up-to-date")
    elif not result.published:
        _logger.warning("Publish of %s failed; it will be retried on the next run", typing.key)

    return result


def publish_all(
    typings: Iterable[TypingsData],
    settings: PublishSettings,
    *,
    engine: UpdateEngine | None = None,
    action: PublishAction | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> list[PublishResult]:
    """Publish every package in turn.

    A corrupt or unwritable version file aborts the whole run: the
    exception propagates and later packages are not attempted.
    """
    engine = engine if engine is not None else UpdateEngine.from_settings(settings)
    action = action if action is not None else NpmPublishAction.from_settings(settings)

    results: list[PublishResult] = []
    for typing in typings:
        results.append(publish(typing, settings, engine=engine, action=action, clock=clock))
    _logger.debug(
        "Run finished: %d packages, %d published",
        len(results),
        sum(1 for r in results if r.published),
    )
    return results
