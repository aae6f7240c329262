"""Read-only snapshots of the entity graph, persisted as JSON.

A snapshot file looks like the graph store's export:

    {"entities": [...], "relationships": [...]}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from chronos.exceptions import EntityNotFoundError, GraphError
from chronos.graph.models import Entity, Relationship


class GraphSnapshot(BaseModel):
    """Entities and relationships as of one point in time."""

    entities: list[Entity] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)

    def get_entity(self, entity_id: str) -> Entity:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        raise EntityNotFoundError(entity_id)

    def events(self) -> list[Entity]:
        """Event entities in story order (missing sort order counts as 0)."""
        events = [e for e in self.entities if e.is_event]
        events.sort(key=lambda e: e.sort_order if e.sort_order is not None else 0)
        return events

    def stats(self) -> dict[str, int]:
        """Entity counts per type, plus relationship total."""
        counts: dict[str, int] = {}
        for entity in self.entities:
            counts[entity.entity_type] = counts.get(entity.entity_type, 0) + 1
        counts["relationships"] = len(self.relationships)
        return counts


def load_snapshot(path: str | Path) -> GraphSnapshot:
    """Load a snapshot from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        raise GraphError(f"Snapshot not found: {path}") from e
    except json.JSONDecodeError as e:
        raise GraphError(f"Snapshot is not valid JSON: {path}: {e}") from e

    try:
        return GraphSnapshot.model_validate(data)
    except ValidationError as e:
        raise GraphError(f"Invalid snapshot {path}: {e}") from e


def save_snapshot(path: str | Path, snapshot: GraphSnapshot) -> None:
    """Write a snapshot to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot.model_dump(), indent=2))
