"""Base model for JSON payloads exchanged with conformance clients."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Snake-case attributes, camelCase wire names (``e_tag`` -> ``eTag``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        # Unset optionals are omitted, never rendered as defaults
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = ["WireModel"]
