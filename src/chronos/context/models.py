"""Data models for smart context selection."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from chronos.graph.models import Entity

# entity_type -> breakdown bucket; anything else counts as a concept
_BREAKDOWN_BUCKETS: dict[str, str] = {
    "character": "characters",
    "location": "locations",
    "timeline": "timelines",
    "event": "events",
    "theme": "themes",
}


class ExclusionReason(str, Enum):
    """Why an entity was left out of the context."""

    NOT_SELECTED = "not_selected"  # Not mandatory and not a top-scoring candidate
    OVER_BUDGET = "over_budget"  # Selected, but the token budget was already spent


class ContextBreakdown(BaseModel):
    """Included-entity counts per type category."""

    characters: int = 0
    locations: int = 0
    timelines: int = 0
    events: int = 0
    themes: int = 0
    concepts: int = 0

    @classmethod
    def from_entities(cls, entities: Iterable[Entity]) -> ContextBreakdown:
        counts: dict[str, int] = {}
        for entity in entities:
            bucket = _BREAKDOWN_BUCKETS.get(entity.entity_type, "concepts")
            counts[bucket] = counts.get(bucket, 0) + 1
        return cls(**counts)


@dataclass
class ScoredEntity:
    """An optional candidate with its relevance score."""

    entity: Entity
    score: int
    signals: list[tuple[str, int]] = field(default_factory=list)

    @property
    def reason(self) -> str:
        names = ", ".join(name for name, _ in self.signals)
        return f"relevance {self.score} ({names})"


@dataclass
class CandidateSet:
    """Entities selected for budgeting, before the token budget is applied."""

    mandatory: dict[str, str] = field(default_factory=dict)  # id -> reason
    optional: list[ScoredEntity] = field(default_factory=list)

    @property
    def ids(self) -> set[str]:
        return set(self.mandatory) | {s.entity.id for s in self.optional}

    @property
    def reasons(self) -> dict[str, str]:
        reasons = dict(self.mandatory)
        for scored in self.optional:
            reasons.setdefault(scored.entity.id, scored.reason)
        return reasons


class ContextReport(BaseModel):
    """The outcome of one smart context selection."""

    anchor_id: str = ""
    included_entities: list[Entity] = Field(default_factory=list)
    excluded_entities: list[Entity] = Field(default_factory=list)
    estimated_tokens: int = 0
    token_budget: int = 0
    breakdown: ContextBreakdown = Field(default_factory=ContextBreakdown)
    candidates_considered: int = 0  # Size of the candidate set before budgeting
    inclusion_reasons: dict[str, str] = Field(default_factory=dict)
    exclusion_reasons: dict[str, ExclusionReason] = Field(default_factory=dict)

    @property
    def budget_used_pct(self) -> float:
        return round(self.estimated_tokens / max(self.token_budget, 1) * 100, 1)

    @property
    def anchor_included(self) -> bool:
        return any(e.id == self.anchor_id for e in self.included_entities)

    def render(self) -> str:
        """Render the included entities as a text payload for a generator.

        Entities are grouped by type in order of first appearance.
        """
        grouped: dict[str, list[Entity]] = {}
        for entity in self.included_entities:
            grouped.setdefault(entity.entity_type, []).append(entity)

        sections: list[str] = ["## Story Context"]
        for entity_type, entities in grouped.items():
            sections.append("")
            sections.append(f"### {entity_type.capitalize()}s")
            for entity in entities:
                line = f"- **{entity.name}**: {entity.description or '(no description)'}"
                props = _format_properties(entity)
                if props:
                    line += f" [{props}]"
                sections.append(line)

        return "\n".join(sections)

    def summary(self) -> str:
        """Human-readable summary of what's in the context."""
        b = self.breakdown
        lines = [
            f"Smart context for: {self.anchor_id}",
            f"Tokens: ~{self.estimated_tokens:,} / {self.token_budget:,} "
            f"({self.budget_used_pct:.0f}%)",
            f"Entities: {len(self.included_entities)} included, "
            f"{len(self.excluded_entities)} excluded "
            f"({self.candidates_considered} candidates)",
            "",
            f"  {b.characters} characters",
            f"  {b.locations} locations",
            f"  {b.timelines} timelines",
            f"  {b.events} events",
            f"  {b.themes} themes",
            f"  {b.concepts} concepts",
        ]

        over_budget = [
            e for e in self.excluded_entities
            if self.exclusion_reasons.get(e.id) == ExclusionReason.OVER_BUDGET
        ]
        if over_budget:
            lines.append("")
            lines.append("Dropped for budget:")
            for entity in over_budget:
                lines.append(f"  - {entity.name} ({entity.entity_type})")

        return "\n".join(lines)


def _format_properties(entity: Entity) -> str:
    if not entity.properties:
        return ""
    parts = []
    for key, value in entity.properties.items():
        if value is None or value == "":
            continue
        if isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False)
        parts.append(f"{key}: {value}")
    return ", ".join(parts)


class TokenEstimator:
    """Estimate token counts from word counts."""

    # Rough heuristic: 1 word ≈ 1.3 tokens (13/10)
    TOKENS_PER_WORD = (13, 10)

    @classmethod
    def estimate(cls, text: str | None) -> int:
        """Estimate token count for a string (0 for empty text)."""
        if not text:
            return 0
        num, den = cls.TOKENS_PER_WORD
        words = len(text.split())
        return -(-words * num // den)

    @classmethod
    def estimate_entity(cls, entity: Entity) -> int:
        """Token cost of an entity: name, description and serialized properties."""
        tokens = cls.estimate(entity.name) + cls.estimate(entity.description or "")
        if entity.properties is not None:
            tokens += cls.estimate(
                json.dumps(entity.properties, separators=(",", ":"),
                           ensure_ascii=False, default=str)
            )
        return tokens
