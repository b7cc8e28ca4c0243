"""Record model — The opaque entity connectors return and the engine emits."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from capsearch.models.predicate import ID_ATTRIBUTE, NAME_ATTRIBUTE


class Record(BaseModel):
    """A backend record with a unique identifier and a unique display name.

    Records compare and hash by identifier, so a summary record from a
    listing call and its full-detail counterpart are the same record.
    ``partial`` marks summaries that still need enrichment.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique record identifier")
    name: str | None = Field(default=None, description="Unique display name")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Named attribute values")
    partial: bool = Field(default=False, description="True when only summary attributes are present")

    def searchable_value(self, attribute: str) -> str | None:
        """Return the string form of ``attribute`` for local matching.

        The reserved identifier and name attributes resolve to ``id`` and
        ``name``; anything else is looked up in ``attributes``.
        """
        if attribute == ID_ATTRIBUTE:
            return self.id
        if attribute == NAME_ATTRIBUTE:
            return self.name
        value = self.attributes.get(attribute)
        if value is None:
            return None
        return str(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
