"""Base model for typespub's persisted and exchanged documents.

Every on-disk or on-the-wire document uses camelCase keys (the format the
registry tooling expects), while Python code works with snake_case
attributes. :class:`TypesPubBaseModel` bridges the two via
``alias_generator=to_camel``; dump with ``by_alias=True`` to get the
external shape back.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TypesPubBaseModel(BaseModel):
    """Frozen model with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
