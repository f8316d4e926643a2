"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged with the REST API (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """Dump as JSON-compatible dict, omitting absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
