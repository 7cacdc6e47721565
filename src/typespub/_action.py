"""External publish step."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from typespub._redact import truncate_for_log
from typespub.config import PublishSettings
from typespub.exceptions import PublishCommandError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishOutcome:
    """Result of one publish command."""

    ok: bool
    command: str
    output: str = ""


class PublishAction(Protocol):
    """Structural publish interface used by the orchestration layer.

    Having a protocol here makes it easy to pass test doubles that succeed
    or fail deterministically, while keeping the production implementation
    (`NpmPublishAction`) concrete.
    """

    def publish(self, package_dir: Path) -> PublishOutcome:
        ...


class NpmPublishAction:
    """Run ``npm publish <dir> --access <access>`` synchronously.

    A non-zero exit code is a failed publish. There is no retry and no
    timeout; callers wrap the action if they need either.
    """

    def __init__(self, npm_command: str = "npm", access: str = "public") -> None:
        self._npm_command = npm_command
        self._access = access

    @classmethod
    def from_settings(cls, settings: PublishSettings) -> NpmPublishAction:
        return cls(settings.npm_command, settings.access)

    def build_command(self, package_dir: Path) -> list[str]:
        return [self._npm_command, "publish", str(package_dir.resolve()), "--access", self._access]

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                list(args),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as exc:
            raise PublishCommandError(
                f"Could not start {args[0]!r}: {exc}",
                command=" ".join(args),
            ) from exc

    def publish(self, package_dir: Path) -> PublishOutcome:
        args = self.build_command(package_dir)
        cmd = " ".join(args)
        _logger.debug("Running %s", cmd)

        proc = self._run(args)
        output = truncate_for_log(proc.stdout or "")
        if proc.returncode != 0:
            _logger.debug("%s exited with %d", cmd, proc.returncode)
            return PublishOutcome(ok=False, command=cmd, output=output)
        return PublishOutcome(ok=True, command=cmd, output=output)
