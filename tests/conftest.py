"""Shared test fixtures for Chronos."""

from __future__ import annotations

from typing import Any

import pytest

from chronos.graph.models import Entity, Relationship


def _make_entity(
    entity_id: str,
    entity_type: str = "character",
    name: str | None = None,
    description: str | None = None,
    sort_order: int | float | None = None,
    properties: dict[str, Any] | None = None,
) -> Entity:
    return Entity(
        id=entity_id,
        entity_type=entity_type,
        name=name or entity_id,
        description=description,
        sort_order=sort_order,
        properties=properties,
    )


def _make_rel(from_id: str, to_id: str, kind: str = "involves") -> Relationship:
    return Relationship(from_entity_id=from_id, to_entity_id=to_id, relationship_type=kind)


@pytest.fixture
def make_entity():
    """Factory for entities with sensible defaults."""
    return _make_entity


@pytest.fixture
def make_rel():
    """Factory for relationships (default kind: 'involves')."""
    return _make_rel


@pytest.fixture
def story() -> dict[str, Any]:
    """A small story graph anchored on event E0.

    E0 --causes--> E1 --leads_to--> E2 <--triggers-- E3
    E0 --involves--> C1
    E0 --explores_theme--> T1 <--explores_theme-- C2
    L1 shares E0's location, N1 is an unrelated scientific concept note.
    """
    entities = [
        _make_entity("E0", "event", "The Heist", "The crew breaks into the vault",
                     sort_order=10,
                     properties={"timeline_id": "tl-main", "location_id": "loc-bank"}),
        _make_entity("C1", "character", "Mara", "Safecracker"),
        _make_entity("E1", "event", "The Tipoff", sort_order=8),
        _make_entity("E2", "event", "The Getaway", sort_order=12),
        _make_entity("E3", "event", "The Betrayal", sort_order=30),
        _make_entity("T1", "theme", "Greed"),
        _make_entity("C2", "character", "Inspector Vale"),
        _make_entity("L1", "location", "First Bank",
                     properties={"timeline_id": "tl-main", "location_id": "loc-bank"}),
        _make_entity("N1", "note", "Thermal lances",
                     properties={"note_type": "scientific_concept"}),
        _make_entity("X1", "character", "Bystander"),
    ]
    relationships = [
        _make_rel("E0", "E1", "causes"),
        _make_rel("E1", "E2", "leads_to"),
        _make_rel("E3", "E2", "triggers"),
        _make_rel("E0", "C1", "involves"),
        _make_rel("E0", "T1", "explores_theme"),
        _make_rel("C2", "T1", "explores_theme"),
    ]
    return {
        "entities": entities,
        "relationships": relationships,
        "anchor": entities[0],
        "by_id": {e.id: e for e in entities},
    }
