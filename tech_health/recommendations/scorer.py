"""
Recommendation scoring: turns a RecommendationDraft into an enriched,
immutable Recommendation.

Score formulas
--------------
    priority_score = weight(priority) * score(impact) / score(effort)
    roi            = score(impact) / score(effort)

    weight: Critical 10, High 8, Medium 5, Low 2   (unrecognized → 5)
    score:  Low 1, Medium 3, High 5                (unrecognized → 3)

priority_score therefore ranges from 0.4 (Low priority, Low impact, High
effort) to 50 (Critical, High impact, Low effort).

Urgency (1–5)
-------------
    1
    + 2 if priority is Critical or High
    + 1 if category is Security or Performance
    capped at 5

Identifier
----------
    "<CAT>-<TITLECODE>-<ts36>"
    CAT       : first 3 characters of the category, upper-cased
    TITLECODE : title with whitespace removed, first 8 characters, upper-cased
    ts36      : epoch milliseconds of ``now`` in lower-case base 36

Ids are for display: two drafts with the same category/title prefix enriched
in the same millisecond get the same id.

All functions are pure. ``now`` is passed in explicitly.
"""

from __future__ import annotations

import re
from datetime import datetime

from tech_health.models.recommendation import Recommendation, RecommendationDraft
from tech_health.taxonomy.recommendation_taxonomy import (
    CRITICAL_CATEGORIES,
    URGENT_PRIORITIES,
)
from tech_health.utils.time_utils import epoch_millis, to_base36

PRIORITY_WEIGHTS: dict[str, float] = {
    "Critical": 10.0,
    "High":      8.0,
    "Medium":    5.0,
    "Low":       2.0,
}
DEFAULT_PRIORITY_WEIGHT = 5.0

# Shared by effort and impact.
LEVEL_SCORES: dict[str, float] = {
    "Low":    1.0,
    "Medium": 3.0,
    "High":   5.0,
}
DEFAULT_LEVEL_SCORE = 3.0

MAX_URGENCY = 5

_WHITESPACE = re.compile(r"\s+")


def priority_weight(priority: str) -> float:
    """Return the weight for a priority bucket (5 when unrecognized)."""
    return PRIORITY_WEIGHTS.get(priority, DEFAULT_PRIORITY_WEIGHT)


def level_score(level: str) -> float:
    """Return the score for an effort/impact bucket (3 when unrecognized)."""
    return LEVEL_SCORES.get(level, DEFAULT_LEVEL_SCORE)


def compute_priority_score(draft: RecommendationDraft) -> float:
    """Higher impact and lower effort raise the score; priority scales it."""
    return priority_weight(draft.priority) * level_score(draft.impact) / level_score(draft.effort)


def compute_roi(draft: RecommendationDraft) -> float:
    """Impact-to-effort ratio, independent of priority."""
    return level_score(draft.impact) / level_score(draft.effort)


def compute_urgency(draft: RecommendationDraft) -> int:
    urgency = 1
    if draft.priority in URGENT_PRIORITIES:
        urgency += 2
    if draft.category in CRITICAL_CATEGORIES:
        urgency += 1
    return min(urgency, MAX_URGENCY)


def build_recommendation_id(draft: RecommendationDraft, now: datetime) -> str:
    """Build the display id ``<CAT>-<TITLECODE>-<ts36>`` for a draft."""
    category_code = draft.category[:3].upper()
    title_code    = _WHITESPACE.sub("", draft.title)[:8].upper()
    return f"{category_code}-{title_code}-{to_base36(epoch_millis(now))}"


def enrich(draft: RecommendationDraft, now: datetime) -> Recommendation:
    """Attach id, priority score, ROI and urgency to a draft.

    Deterministic for a given ``(draft, now)``. The draft is not modified.

    Args:
        draft: Generator output.
        now:   Reference time for the id suffix.

    Returns:
        A new frozen ``Recommendation``.
    """
    return Recommendation(
        **draft.model_dump(),
        id=build_recommendation_id(draft, now),
        priority_score=compute_priority_score(draft),
        roi=compute_roi(draft),
        urgency=compute_urgency(draft),
    )


def enrich_all(drafts: list[RecommendationDraft], now: datetime) -> list[Recommendation]:
    """Enrich every draft against the same reference time, preserving order."""
    return [enrich(draft, now) for draft in drafts]
