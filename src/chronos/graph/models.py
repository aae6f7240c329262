"""Data models for the narrative entity graph."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Relationship kinds that represent cause/effect links between entities
CAUSAL_RELATIONSHIP_TYPES: frozenset[str] = frozenset({
    "causes",
    "leads_to",
    "triggered_by",
    "triggers",
})

# Note sub-kind that can be dropped from optional context
SCIENTIFIC_CONCEPT = "scientific_concept"


class Entity(BaseModel):
    """A node in the narrative graph (character, location, event, ...)."""

    # Graph stores carry extra columns (project_id, position_x, color, ...)
    model_config = ConfigDict(extra="ignore")

    id: str
    entity_type: str
    name: str
    description: str | None = None
    sort_order: int | float | None = None  # Only meaningful for events
    properties: dict[str, Any] | None = None

    def prop(self, key: str) -> Any:
        """Get a property value, or None when absent."""
        if not self.properties:
            return None
        return self.properties.get(key)

    @property
    def is_event(self) -> bool:
        return self.entity_type == "event"


class Relationship(BaseModel):
    """A typed edge between two entity ids."""

    model_config = ConfigDict(extra="ignore")

    from_entity_id: str
    to_entity_id: str
    relationship_type: str
    id: str = ""
    label: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    def other_side(self, entity_id: str) -> str | None:
        """The endpoint opposite `entity_id`, or None if the edge doesn't touch it."""
        if self.from_entity_id == entity_id:
            return self.to_entity_id
        if self.to_entity_id == entity_id:
            return self.from_entity_id
        return None
