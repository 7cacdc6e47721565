#!/usr/bin/env python3
"""Publish every changed definition package listed in a typings file.

The typings file is a JSON array of parsed definition records (camelCase
keys, as emitted by the definition parser). Each package whose content hash
differs from ``versions.json`` gets the next patch version and is published.

Usage
-----
::

    export TYPESPUB_SCOPE_NAME="types"
    python scripts/publish_typings.py typings.json

Options::

    --scope NAME         Registry scope without '@' (overrides TYPESPUB_SCOPE_NAME)
    --output DIR         Output directory for rendered packages
    --versions FILE      Version state file (default: versions.json)
    --force-update       Republish even when content is unchanged
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pydantic import TypeAdapter  # noqa: E402

from typespub import PublishSettings, TypesPubError, TypingsData, publish_all  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Publish changed type definition packages.",
    )
    parser.add_argument("typings_file", help="JSON array of parsed definition records")
    parser.add_argument("--scope", help="Registry scope without '@'")
    parser.add_argument("--output", help="Output directory for rendered packages")
    parser.add_argument("--versions", help="Version state file")
    parser.add_argument("--force-update", action="store_true", help="Republish even when content is unchanged")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.scope:
        overrides["scope_name"] = args.scope
    if args.output:
        overrides["output_path"] = Path(args.output)
    if args.versions:
        overrides["version_file"] = Path(args.versions)
    if args.force_update:
        overrides["force_update"] = True

    try:
        settings = PublishSettings.from_env(**overrides)
        raw = json.loads(Path(args.typings_file).read_text(encoding="utf-8"))
        typings = TypeAdapter(list[TypingsData]).validate_python(raw)
        results = publish_all(typings, settings)
    except (TypesPubError, OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    failed = 0
    for result in results:
        print("\n".join(result.log))
        print()
        if result.updated and not result.published:
            failed += 1

    if failed:
        print(f"{failed} package(s) failed to publish", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
