"""Rendering of the files that make up a published definition package."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from email.utils import format_datetime
from pathlib import Path

from typespub.config import PublishSettings
from typespub.models.manifest import PackageManifest
from typespub.models.typings import TypingsData

# ``/// <reference path="../jquery/jquery.d.ts" />`` -> library "jquery".
_PATH_TO_LIBRARY = re.compile(r'/// <reference path="\.\./(\w[^/"]*)/[^"]+" />', re.MULTILINE)


def collect_content(typing: TypingsData) -> str:
    """Concatenate the package's files in sorted order.

    Sorting keeps the content hash stable across runs when the parser
    reports files in a different order.
    """
    root = Path(typing.root)
    return "".join((root / name).read_text(encoding="utf-8") for name in typing.sorted_files())


def patch_definition_file(text: str) -> str:
    """Rewrite sibling-directory path references into library references."""
    return _PATH_TO_LIBRARY.sub(r'/// <reference library="\1" />', text)


def create_package_json(typing: TypingsData, settings: PublishSettings, version: int) -> PackageManifest:
    dependencies: dict[str, str] = {}
    for dep in typing.module_dependencies:
        dependencies[dep] = "*"
    for dep in typing.library_dependencies:
        dependencies[f"@{settings.scope_name}/{dep}"] = "*"

    return PackageManifest(
        name=f"@{settings.scope_name}/{typing.key}",
        version=f"{typing.library_major_version}.{typing.library_minor_version}.{version}",
        description=f"Type definitions for {typing.library_name} from {typing.source_repo_url}",
        author=typing.authors,
        typings=typing.definition_filename,
        dependencies=dependencies,
    )


def _list_or_none(values: list[str]) -> str:
    return ", ".join(values) if values else "none"


def create_readme(typing: TypingsData, *, now: datetime | None = None, line_ending: str = "\r\n") -> str:
    """Render ``README.md`` for *typing*.

    *now* defaults to the current UTC time and is shown as the last-updated
    stamp.
    """
    stamp = now if now is not None else datetime.now(UTC)
    lines: list[str] = [f"This package contains type definitions for {typing.library_name}."]

    if typing.project_name:
        lines.append("")
        lines.append(f"The project URL or description is {typing.project_name}")

    if typing.authors:
        lines.append("")
        lines.append(f"These definitions were written by {typing.authors}.")

    lines.append("")
    lines.append(f"Typings were exported from {typing.source_repo_url} in the {typing.package_name} directory.")

    lines.append("")
    lines.append("Additional Details")
    lines.append(f" * Last updated: {format_datetime(stamp, usegmt=True)}")
    lines.append(f" * Typings kind: {typing.kind.value}")
    lines.append(f" * Library Dependencies: {_list_or_none(typing.library_dependencies)}")
    lines.append(f" * Module Dependencies: {_list_or_none(typing.module_dependencies)}")
    lines.append(f" * Global values: {_list_or_none(typing.globals)}")
    lines.append("")

    return line_ending.join(lines)


def write_package(
    typing: TypingsData,
    settings: PublishSettings,
    version: int,
    *,
    now: datetime | None = None,
) -> Path:
    """Write ``package.json``, ``README.md`` and patched definition files.

    Returns the package directory (``<output_path>/<key>``).
    """
    package_dir = settings.output_path / typing.key
    package_dir.mkdir(parents=True, exist_ok=True)

    manifest = create_package_json(typing, settings, version)
    (package_dir / "package.json").write_text(manifest.to_json(), encoding="utf-8")
    readme = create_readme(typing, now=now, line_ending=settings.readme_line_ending)
    # newline="" keeps the CRLF separators as rendered.
    with (package_dir / "README.md").open("w", encoding="utf-8", newline="") as handle:
        handle.write(readme)

    root = Path(typing.root)
    for name in typing.sorted_files():
        target = package_dir / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(patch_definition_file((root / name).read_text(encoding="utf-8")), encoding="utf-8")

    return package_dir
