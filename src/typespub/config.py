"""Publisher configuration for typespub."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from typespub.exceptions import TypesPubConfigError

#: Default name of the persisted version map.
DEFAULT_VERSION_FILE = "versions.json"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class PublishSettings:
    """Publisher configuration.

    Parameters
    ----------
    scope_name : str
        Registry scope without the leading ``@`` (e.g. ``"types"``).
    output_path : Path
        Directory that receives one rendered package folder per key.
    version_file : Path
        Location of the persisted version map.
    force_update : bool
        Republish every package even when its content hash is unchanged.
        Used to repair a broken release without touching the content.
    npm_command : str
        Executable used to run ``publish``.
    access : str
        Value passed to ``--access`` on publish.
    readme_line_ending : str
        Line separator used when rendering ``README.md``.
    """

    scope_name: str
    output_path: Path = Path("output")
    version_file: Path = Path(DEFAULT_VERSION_FILE)
    force_update: bool = False
    npm_command: str = "npm"
    access: str = "public"
    readme_line_ending: str = "\r\n"

    def __post_init__(self) -> None:
        scope = self.scope_name.strip()
        if not scope:
            raise TypesPubConfigError("scope_name must be non-empty")
        if scope.startswith("@"):
            raise TypesPubConfigError(f"scope_name must not include '@': {self.scope_name!r}")
        if not self.npm_command.strip():
            raise TypesPubConfigError("npm_command must be non-empty")
        # Frozen dataclass: coerce path-likes through object.__setattr__.
        object.__setattr__(self, "scope_name", scope)
        object.__setattr__(self, "output_path", Path(self.output_path))
        object.__setattr__(self, "version_file", Path(self.version_file))

    @classmethod
    def from_env(cls, **overrides: Any) -> PublishSettings:
        """Create settings from environment variables.

        Reads ``TYPESPUB_SCOPE_NAME`` and the optional ``TYPESPUB_*``
        variables below. Explicit keyword arguments override environment
        values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        PublishSettings
            Populated settings.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TYPESPUB_SCOPE_NAME": "scope_name",
            "TYPESPUB_OUTPUT_PATH": "output_path",
            "TYPESPUB_VERSION_FILE": "version_file",
            "TYPESPUB_NPM_COMMAND": "npm_command",
            "TYPESPUB_ACCESS": "access",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "force_update" not in overrides:
            config_kwargs["force_update"] = _env_bool(env.get("TYPESPUB_FORCE_UPDATE"), False)

        config_kwargs.update(overrides)

        if "scope_name" not in config_kwargs:
            raise TypesPubConfigError("TYPESPUB_SCOPE_NAME is not set and no scope_name was given")

        return cls(**config_kwargs)
