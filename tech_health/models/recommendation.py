"""
Recommendation models — generator drafts and enriched, ranked output.

Two-stage design:
  1. ``RecommendationDraft`` — what a generator rule emits: text, category,
                              priority and the effort/impact buckets.
  2. ``Recommendation``      — a draft plus derived ranking fields
                              (``id``, ``priority_score``, ``roi``, ``urgency``).

Both models are frozen. A draft is never modified by enrichment; the scorer
builds a new ``Recommendation`` from it. The caller owns any storage or
transport of the output. Nothing here is persisted.

``effort`` and ``impact`` are plain strings, not a closed ``Literal``. The
scorer gives unrecognized values the middle score.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from tech_health.taxonomy.recommendation_taxonomy import Priority

VALID_PRIORITIES: frozenset[str] = frozenset(p.value for p in Priority)


class RecommendationDraft(BaseModel):
    """A recommendation before scoring fields are attached.

    Attributes:
        title: Short imperative headline, e.g. ``"Improve Test Coverage"``.
        description: Human text; may embed computed counts.
        category: Engineering area (see ``Category``).
        priority: One of ``Critical``, ``High``, ``Medium``, ``Low``.
        effort: Cost bucket, nominally ``Low`` / ``Medium`` / ``High``.
        impact: Benefit bucket, nominally ``Low`` / ``Medium`` / ``High``.
        timeline: Free-text delivery estimate, e.g. ``"1-2 weeks"``.
        resources: Free-text staffing estimate.
        details: Ordered action steps (may be empty).
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    category: str
    priority: str
    effort: str = "Medium"
    impact: str = "Medium"
    timeline: str = ""
    resources: str = ""
    details: tuple[str, ...] = ()

    @field_validator("title", "category")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title and category must not be empty.")
        return v.strip()

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: str) -> str:
        if v not in VALID_PRIORITIES:
            raise ValueError(
                f"Unknown priority '{v}'. Must be one of {sorted(VALID_PRIORITIES)}."
            )
        return v


class Recommendation(RecommendationDraft):
    """Final, immutable output unit: a draft plus its ranking fields.

    Attributes:
        id: ``<CAT>-<TITLECODE>-<base36 ms>``; display-only, uniqueness is
            best-effort (same-millisecond calls can collide).
        priority_score: ``weight(priority) * score(impact) / score(effort)``.
        roi: ``score(impact) / score(effort)``.
        urgency: Escalation indicator in ``[1, 5]``.
    """

    id: str
    priority_score: float
    roi: float
    urgency: int

    @field_validator("urgency")
    @classmethod
    def validate_urgency_range(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"urgency must be in [1, 5], got {v}.")
        return v

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict keyed the way report consumers expect."""
        return {
            "id":            self.id,
            "title":         self.title,
            "description":   self.description,
            "category":      self.category,
            "priority":      self.priority,
            "effort":        self.effort,
            "impact":        self.impact,
            "timeline":      self.timeline,
            "resources":     self.resources,
            "details":       list(self.details),
            "priorityScore": self.priority_score,
            "roi":           self.roi,
            "urgency":       self.urgency,
        }
