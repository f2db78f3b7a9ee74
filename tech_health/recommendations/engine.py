"""
Recommendation engine: analysis result in, ranked recommendations out.

Flow
----
1. Run the five generators in fixed order (security, code quality, DORA,
   repository, architecture) and concatenate their drafts.
2. Enrich every draft against a single reference time ``now``.
3. Rank the combined list.

Fallback
--------
If any generator raises while reading the analysis result (a missing or
non-mapping ``analysis`` container, a section of the wrong shape, a
non-numeric metric), the run is abandoned and the fixed five-item fallback
set is enriched, ranked and returned instead. The caller always gets a
usable list but cannot tell "bad data" from "no data"; the failure is logged
at WARNING. A well-formed result on which no rule fires (every section
present and healthy) gets the same baseline set, so the output is never empty.

The engine performs no I/O and holds no state between calls, so it is safe
to call from concurrent request handlers without coordination.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from tech_health.config import AppConfig, RecommendationThresholds
from tech_health.models.analysis import (
    AnalysisResult,
    code_quality_section,
    dora_section,
    repository_section,
    section,
    security_section,
)
from tech_health.models.recommendation import Recommendation, RecommendationDraft
from tech_health.recommendations.defaults import default_recommendations
from tech_health.recommendations.generators import (
    generate_architecture_recommendations,
    generate_code_quality_recommendations,
    generate_dora_recommendations,
    generate_repository_recommendations,
    generate_security_recommendations,
)
from tech_health.recommendations.ranker import rank
from tech_health.recommendations.scorer import enrich_all
from tech_health.utils.time_utils import as_utc, utcnow

logger = logging.getLogger(__name__)

# Raised by generators when the analysis result has the wrong shape.
MALFORMED_INPUT_ERRORS: tuple[type[Exception], ...] = (
    AttributeError,
    KeyError,
    TypeError,
    ValueError,
)


def collect_drafts(
    analysis_result: AnalysisResult,
    now: datetime,
    thresholds: RecommendationThresholds,
) -> list[RecommendationDraft]:
    """Run every generator and concatenate drafts in emission order.

    Raises:
        AttributeError, KeyError, TypeError, ValueError: On malformed input.
    """
    code_quality = code_quality_section(analysis_result)

    drafts: list[RecommendationDraft] = []
    drafts.extend(
        generate_security_recommendations(security_section(analysis_result), thresholds)
    )
    drafts.extend(generate_code_quality_recommendations(code_quality, thresholds))
    drafts.extend(generate_dora_recommendations(dora_section(analysis_result), thresholds))
    drafts.extend(
        generate_repository_recommendations(repository_section(analysis_result), now, thresholds)
    )
    drafts.extend(
        generate_architecture_recommendations(
            section(analysis_result, "techHealthScore"), code_quality, thresholds
        )
    )
    return drafts


def generate(
    analysis_result: AnalysisResult,
    now: Optional[datetime] = None,
    thresholds: Optional[RecommendationThresholds] = None,
) -> list[Recommendation]:
    """Produce the ranked recommendation list for one analysis result.

    Args:
        analysis_result: Nested mapping from the analysis subsystem.
        now:             Reference time for staleness and ids. Defaults to
                         the current UTC time (one clock read per call).
        thresholds:      Rule thresholds. Defaults to the built-in values.

    Returns:
        Non-empty list of recommendations, highest priority first.
    """
    now = utcnow() if now is None else as_utc(now)
    if thresholds is None:
        thresholds = RecommendationThresholds()

    try:
        drafts = collect_drafts(analysis_result, now, thresholds)
    except MALFORMED_INPUT_ERRORS as exc:
        logger.warning(
            "Could not read analysis result (%s: %s); returning fallback recommendations.",
            type(exc).__name__, exc,
        )
        logger.debug("Malformed analysis result traceback", exc_info=True)
        return rank(default_recommendations(now))

    logger.debug("Generated %d recommendation drafts", len(drafts))
    if not drafts:
        logger.info("No rule triggered; returning baseline recommendations.")
        return rank(default_recommendations(now))

    ranked = rank(enrich_all(drafts, now))
    logger.info(
        "Recommendations generated | count=%d | top=%s",
        len(ranked), ranked[0].title,
    )
    return ranked


class RecommendationEngine:
    """Config-bound wrapper around ``generate()``.

    Build once from an ``AppConfig`` (or explicit thresholds) and reuse for
    every report.

    Usage::

        engine = RecommendationEngine.from_config(load_config())
        recs = engine.generate(analysis_result)
    """

    def __init__(self, thresholds: Optional[RecommendationThresholds] = None) -> None:
        self.thresholds = thresholds or RecommendationThresholds()

    @classmethod
    def from_config(cls, config: AppConfig) -> "RecommendationEngine":
        return cls(thresholds=config.thresholds)

    def generate(
        self,
        analysis_result: AnalysisResult,
        now: Optional[datetime] = None,
    ) -> list[Recommendation]:
        return generate(analysis_result, now=now, thresholds=self.thresholds)
