"""
Baseline recommendation set returned when the analysis result cannot be read.

These five drafts are generic enough to be useful for any codebase. They
carry no ``details`` steps.
"""

from __future__ import annotations

from datetime import datetime

from tech_health.models.recommendation import Recommendation, RecommendationDraft
from tech_health.recommendations.scorer import enrich_all
from tech_health.taxonomy.recommendation_taxonomy import Category, Level, Priority

FALLBACK_DRAFTS: tuple[RecommendationDraft, ...] = (
    RecommendationDraft(
        title="Implement Comprehensive Testing",
        description=(
            "Set up automated testing pipeline with unit, integration, and "
            "end-to-end tests."
        ),
        category=Category.QUALITY,
        priority=Priority.HIGH,
        effort=Level.MEDIUM,
        impact=Level.HIGH,
        timeline="3-4 weeks",
        resources="2-3 developers",
    ),
    RecommendationDraft(
        title="Set Up Continuous Integration",
        description="Implement CI/CD pipeline for automated builds, tests, and deployments.",
        category=Category.DEVOPS,
        priority=Priority.HIGH,
        effort=Level.MEDIUM,
        impact=Level.HIGH,
        timeline="2-3 weeks",
        resources="1 DevOps engineer, 1 developer",
    ),
    RecommendationDraft(
        title="Improve Documentation",
        description=(
            "Create comprehensive documentation including README, API docs, "
            "and architectural guides."
        ),
        category=Category.DOCUMENTATION,
        priority=Priority.MEDIUM,
        effort=Level.LOW,
        impact=Level.MEDIUM,
        timeline="1-2 weeks",
        resources="1 developer, technical writer",
    ),
    RecommendationDraft(
        title="Implement Security Scanning",
        description="Set up automated security scanning for vulnerabilities and dependency issues.",
        category=Category.SECURITY,
        priority=Priority.HIGH,
        effort=Level.LOW,
        impact=Level.HIGH,
        timeline="1 week",
        resources="1 developer",
    ),
    RecommendationDraft(
        title="Add Performance Monitoring",
        description="Implement application performance monitoring and alerting.",
        category=Category.PERFORMANCE,
        priority=Priority.MEDIUM,
        effort=Level.MEDIUM,
        impact=Level.MEDIUM,
        timeline="2-3 weeks",
        resources="1 DevOps engineer",
    ),
)


def default_recommendations(now: datetime) -> list[Recommendation]:
    """Return the fallback set, enriched against ``now``, in declaration order."""
    return enrich_all(list(FALLBACK_DRAFTS), now)
