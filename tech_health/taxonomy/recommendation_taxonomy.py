"""
Recommendation taxonomy: the closed vocabularies a recommendation is built from.

Three dimensions describe every recommendation:
  - ``Category`` — the *where*: which engineering area does it improve?
  - ``Priority`` — the *when*: qualitative urgency bucket set by a rule.
  - ``Level``    — the *how much*: shared scale for effort and impact.

Usage example::

    from tech_health.taxonomy.recommendation_taxonomy import Category, Priority

    category = Category.SECURITY
    priority = Priority.CRITICAL

This module has NO imports from any other ``tech_health`` package.
"""

from enum import StrEnum


class Category(StrEnum):
    """Engineering area a recommendation belongs to."""

    SECURITY = "Security"
    """Vulnerabilities, scanning and secure development practice."""

    QUALITY = "Quality"
    """Complexity, test coverage, in-code documentation."""

    DEVOPS = "DevOps"
    """Delivery performance (DORA): deploy frequency, lead time, failures."""

    LEGAL = "Legal"
    """Licensing."""

    DOCUMENTATION = "Documentation"
    """Repository-level docs: description, README, onboarding."""

    MAINTENANCE = "Maintenance"
    """Activity and dependency upkeep."""

    ARCHITECTURE = "Architecture"
    """Cross-cutting technical health."""

    PERFORMANCE = "Performance"
    """Runtime performance monitoring."""


class Priority(StrEnum):
    """Rule-assigned urgency bucket (highest first)."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Level(StrEnum):
    """Three-step scale shared by ``effort`` and ``impact``."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Priorities that raise urgency and land in the "immediate" roadmap bucket.
URGENT_PRIORITIES: frozenset[str] = frozenset({Priority.CRITICAL.value, Priority.HIGH.value})

# Categories that raise urgency regardless of priority.
CRITICAL_CATEGORIES: frozenset[str] = frozenset({Category.SECURITY.value, Category.PERFORMANCE.value})
