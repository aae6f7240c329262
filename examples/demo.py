#!/usr/bin/env python3
"""Demo: Using Chronos as a Python library.

This shows how to build smart context programmatically, not just from the CLI.
"""

from chronos.config import ContextSettings
from chronos.context import ContextBuilder
from chronos.graph.models import Entity, Relationship


def main():
    # 1. A tiny story graph
    entities = [
        Entity(id="ev-heist", entity_type="event", name="The Heist", sort_order=10,
               description="The crew breaks into the vault",
               properties={"timeline_id": "main", "location_id": "bank"}),
        Entity(id="ch-mara", entity_type="character", name="Mara", description="Safecracker"),
        Entity(id="ev-tipoff", entity_type="event", name="The Tipoff", sort_order=8),
        Entity(id="ev-getaway", entity_type="event", name="The Getaway", sort_order=12),
        Entity(id="loc-bank", entity_type="location", name="First Bank",
               properties={"timeline_id": "main", "location_id": "bank"}),
        Entity(id="note-lance", entity_type="note", name="Thermal lances",
               properties={"note_type": "scientific_concept"}),
    ]
    relationships = [
        Relationship(from_entity_id="ev-tipoff", to_entity_id="ev-heist",
                     relationship_type="causes"),
        Relationship(from_entity_id="ev-heist", to_entity_id="ev-getaway",
                     relationship_type="leads_to"),
        Relationship(from_entity_id="ev-heist", to_entity_id="ch-mara",
                     relationship_type="involves"),
    ]

    # 2. Build context for the heist
    builder = ContextBuilder(entities, relationships, ContextSettings(causal_chain_depth=2))
    report = builder.build("ev-heist")

    print(report.summary())
    print()
    for entity in report.included_entities:
        print(f"  {entity.name}: {report.inclusion_reasons.get(entity.id, '')}")

    # 3. The text payload for a drafting prompt
    print()
    print(report.render())

    # 4. A tight budget starves entities late in the collection
    tight = builder.build("ev-heist", ContextSettings(max_tokens=20))
    print()
    print(tight.summary())


if __name__ == "__main__":
    main()
