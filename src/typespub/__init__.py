"""typespub - content-gated versioning and publishing of type definition packages."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("typespub")
except PackageNotFoundError:
    __version__ = "0+local"
from typespub._action import NpmPublishAction, PublishAction, PublishOutcome
from typespub.config import PublishSettings
from typespub.exceptions import (
    PersistenceWriteError,
    PublishCommandError,
    StateCorruptError,
    TypesPubConfigError,
    TypesPubError,
    VersionStoreError,
)
from typespub.hashing import compute_hash
from typespub.models import (
    DefinitionFileKind,
    PackageManifest,
    TypingsData,
    VersionMap,
    VersionRecord,
)
from typespub.publisher import PublishResult, publish, publish_all
from typespub.state.engine import UpdateEngine, UpdatePlan, plan_update
from typespub.state.store import VersionStore

__all__ = [
    "__version__",
    "DefinitionFileKind",
    "NpmPublishAction",
    "PackageManifest",
    "PersistenceWriteError",
    "PublishAction",
    "PublishCommandError",
    "PublishOutcome",
    "PublishResult",
    "PublishSettings",
    "StateCorruptError",
    "TypesPubConfigError",
    "TypesPubError",
    "TypingsData",
    "UpdateEngine",
    "UpdatePlan",
    "VersionMap",
    "VersionRecord",
    "VersionStore",
    "VersionStoreError",
    "compute_hash",
    "plan_update",
    "publish",
    "publish_all",
]
