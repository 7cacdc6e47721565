"""Generated ``package.json`` document."""

from __future__ import annotations

import json

from pydantic import Field

from typespub.models._base import TypesPubBaseModel


class PackageManifest(TypesPubBaseModel):
    """The ``package.json`` written next to a published definition."""

    name: str
    version: str
    description: str
    main: str = ""
    scripts: dict[str, str] = Field(default_factory=dict)
    author: str = ""
    license: str = "MIT"
    typings: str
    dependencies: dict[str, str] = Field(default_factory=dict)

    def to_json(self) -> str:
        """Render with 4-space indentation, keys in manifest order."""
        return json.dumps(self.model_dump(by_alias=True), indent=4)
