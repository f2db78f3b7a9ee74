"""
Recommendation generators: one rule set per slice of the analysis result.

Each generator is a pure function of its input section and the configured
thresholds, returning zero or more ``RecommendationDraft`` objects in a fixed
emission order. The engine concatenates them in this order:

    security → code quality → DORA → repository → architecture

Absent-section behavior
-----------------------
security, code quality, DORA
    An absent section is itself a finding: emit one "set this up" draft and
    stop. A present section with healthy values emits nothing.
repository
    An absent section emits nothing.
architecture
    Reads the overall tech-health score (absent → 0) and the outdated
    dependency list; never short-circuits.

Generators never raise for a well-typed but partially populated section.
They do raise (``AttributeError`` / ``TypeError``) when a section has the
wrong shape; the engine treats that as malformed input.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from tech_health.config import RecommendationThresholds
from tech_health.models.analysis import count, number, section
from tech_health.models.recommendation import RecommendationDraft
from tech_health.taxonomy.recommendation_taxonomy import Category, Level, Priority
from tech_health.utils.time_utils import days_between, latest_timestamp

_DEFAULT_THRESHOLDS = RecommendationThresholds()

# DORA classifications that warrant a delivery-speed recommendation.
_LAGGING_DORA_CLASSES: frozenset[str] = frozenset({"Low", "Medium"})


# ── Security ──────────────────────────────────────────────────────────────────

def generate_security_recommendations(
    security: Optional[Mapping[str, Any]],
    thresholds: RecommendationThresholds = _DEFAULT_THRESHOLDS,
) -> list[RecommendationDraft]:
    """Drafts from ``analysis.codeQuality.security``.

    Critical, High and "too many overall" findings are evaluated
    independently, so a single report can yield all three drafts.
    """
    if security is None:
        return [
            RecommendationDraft(
                title="Implement Security Analysis",
                description=(
                    "Set up automated security scanning to identify "
                    "vulnerabilities in code and dependencies."
                ),
                category=Category.SECURITY,
                priority=Priority.HIGH,
                effort=Level.MEDIUM,
                impact=Level.HIGH,
                timeline="1-2 weeks",
                resources="1 developer, security tools",
                details=(
                    "Install and configure security scanning tools (e.g., Snyk, SonarQube)",
                    "Set up automated dependency vulnerability checking",
                    "Implement pre-commit hooks for security checks",
                    "Create security review process for code changes",
                ),
            )
        ]

    vulnerabilities = security.get("vulnerabilities") or []
    severities = [v.get("severity") for v in vulnerabilities if isinstance(v, Mapping)]
    critical = severities.count("Critical")
    high     = severities.count("High")

    drafts: list[RecommendationDraft] = []

    if critical > 0:
        drafts.append(
            RecommendationDraft(
                title="Address Critical Security Vulnerabilities",
                description=(
                    f"{critical} critical security vulnerabilities require immediate "
                    "attention to prevent potential security breaches."
                ),
                category=Category.SECURITY,
                priority=Priority.CRITICAL,
                effort=Level.HIGH,
                impact=Level.HIGH,
                timeline="Immediate (1-3 days)",
                resources="Senior developer, security expert",
                details=(
                    "Review and patch all critical vulnerabilities immediately",
                    "Update affected dependencies to secure versions",
                    "Conduct security audit of related code",
                    "Implement additional security controls if needed",
                ),
            )
        )

    if high > 0:
        drafts.append(
            RecommendationDraft(
                title="Resolve High-Priority Security Issues",
                description=(
                    f"{high} high-priority security vulnerabilities should be "
                    "addressed to strengthen security posture."
                ),
                category=Category.SECURITY,
                priority=Priority.HIGH,
                effort=Level.MEDIUM,
                impact=Level.HIGH,
                timeline="1-2 weeks",
                resources="1-2 developers",
                details=(
                    "Prioritize and fix high-severity vulnerabilities",
                    "Update dependencies with known security issues",
                    "Review code patterns that led to vulnerabilities",
                    "Enhance security testing coverage",
                ),
            )
        )

    if len(vulnerabilities) > thresholds.vulnerabilities.max_total:
        drafts.append(
            RecommendationDraft(
                title="Establish Security-First Development Practices",
                description=(
                    "High number of security issues indicates need for improved "
                    "security practices in development workflow."
                ),
                category=Category.SECURITY,
                priority=Priority.HIGH,
                effort=Level.MEDIUM,
                impact=Level.HIGH,
                timeline="2-4 weeks",
                resources="Development team, security training",
                details=(
                    "Implement security-focused code review process",
                    "Provide security training for development team",
                    "Integrate security scanning into CI/CD pipeline",
                    "Establish security coding standards and guidelines",
                ),
            )
        )

    return drafts


# ── Code quality ──────────────────────────────────────────────────────────────

def generate_code_quality_recommendations(
    code_quality: Optional[Mapping[str, Any]],
    thresholds: RecommendationThresholds = _DEFAULT_THRESHOLDS,
) -> list[RecommendationDraft]:
    """Drafts from ``analysis.codeQuality``: complexity, coverage, documentation.

    Each sub-signal is only evaluated when its sub-section is present.
    """
    if code_quality is None:
        return [
            RecommendationDraft(
                title="Implement Code Quality Monitoring",
                description=(
                    "Set up comprehensive code quality analysis to track and "
                    "improve code health metrics."
                ),
                category=Category.QUALITY,
                priority=Priority.MEDIUM,
                effort=Level.LOW,
                impact=Level.MEDIUM,
                timeline="1 week",
                resources="1 developer",
                details=(
                    "Configure static code analysis tools",
                    "Set up code quality gates in CI/CD",
                    "Establish code quality metrics dashboard",
                    "Define code quality standards and thresholds",
                ),
            )
        ]

    drafts: list[RecommendationDraft] = []

    complexity = section(code_quality, "complexity")
    if complexity is not None:
        average    = number(complexity, "averageComplexity")
        high_files = count(complexity, "highComplexityFiles")
        limits     = thresholds.complexity
        if average > limits.average_max or high_files > limits.high_complexity_files_max:
            drafts.append(
                RecommendationDraft(
                    title="Reduce Code Complexity",
                    description=(
                        "High code complexity makes maintenance difficult and "
                        "increases bug risk. Refactor complex functions and modules."
                    ),
                    category=Category.QUALITY,
                    priority=(
                        Priority.HIGH if average > limits.average_escalate else Priority.MEDIUM
                    ),
                    effort=Level.HIGH,
                    impact=Level.HIGH,
                    timeline="4-8 weeks",
                    resources="2-3 developers",
                    details=(
                        f"Identify and refactor functions with cyclomatic complexity "
                        f"> {limits.average_max:g}",
                        "Break down large classes and modules",
                        "Implement design patterns to reduce complexity",
                        "Add comprehensive unit tests before refactoring",
                        "Set complexity thresholds in CI/CD pipeline",
                    ),
                )
            )

    testing = section(code_quality, "testing")
    if testing is not None:
        coverage = number(testing, "coverage")
        limits   = thresholds.coverage
        if coverage < limits.minimum:
            drafts.append(
                RecommendationDraft(
                    title="Improve Test Coverage",
                    description=(
                        f"Current test coverage at {coverage}% is below recommended "
                        "80% threshold. Comprehensive testing reduces bugs and "
                        "improves confidence in changes."
                    ),
                    category=Category.QUALITY,
                    priority=(
                        Priority.HIGH if coverage < limits.escalate_below else Priority.MEDIUM
                    ),
                    effort=Level.MEDIUM,
                    impact=Level.HIGH,
                    timeline="3-6 weeks",
                    resources="2-3 developers",
                    details=(
                        "Write unit tests for uncovered critical paths",
                        "Implement integration tests for key workflows",
                        "Set up test coverage reporting and gates",
                        "Adopt test-driven development practices",
                        "Focus on testing business-critical functionality first",
                    ),
                )
            )

    documentation = section(code_quality, "documentation")
    if documentation is not None:
        score = number(documentation, "score")
        if score < thresholds.documentation.minimum_score:
            drafts.append(
                RecommendationDraft(
                    title="Improve Code Documentation",
                    description=(
                        "Poor documentation makes onboarding difficult and slows "
                        "development. Invest in comprehensive documentation."
                    ),
                    category=Category.QUALITY,
                    priority=Priority.MEDIUM,
                    effort=Level.MEDIUM,
                    impact=Level.MEDIUM,
                    timeline="2-4 weeks",
                    resources="1-2 developers, technical writer",
                    details=(
                        "Add comprehensive README with setup instructions",
                        "Document API endpoints and data models",
                        "Create architectural decision records (ADRs)",
                        "Add inline code comments for complex logic",
                        "Set up automated documentation generation",
                    ),
                )
            )

    return drafts


# ── DORA ──────────────────────────────────────────────────────────────────────

def generate_dora_recommendations(
    dora: Optional[Mapping[str, Any]],
    thresholds: RecommendationThresholds = _DEFAULT_THRESHOLDS,
) -> list[RecommendationDraft]:
    """Drafts from ``analysis.dora``: deploy frequency, lead time, failure rate."""
    if dora is None:
        return [
            RecommendationDraft(
                title="Implement DORA Metrics Tracking",
                description=(
                    "Set up tracking for DevOps Research and Assessment (DORA) "
                    "metrics to measure and improve development performance."
                ),
                category=Category.DEVOPS,
                priority=Priority.MEDIUM,
                effort=Level.MEDIUM,
                impact=Level.MEDIUM,
                timeline="2-3 weeks",
                resources="1 DevOps engineer, 1 developer",
                details=(
                    "Implement deployment frequency tracking",
                    "Set up lead time measurement from commit to production",
                    "Track change failure rate and recovery time",
                    "Create DORA metrics dashboard",
                    "Establish performance improvement goals",
                ),
            )
        ]

    drafts: list[RecommendationDraft] = []

    deployment = section(dora, "deploymentFrequency")
    if deployment is not None and deployment.get("classification") in _LAGGING_DORA_CLASSES:
        drafts.append(
            RecommendationDraft(
                title="Increase Deployment Frequency",
                description=(
                    "More frequent deployments reduce risk and enable faster "
                    "feedback. Implement continuous deployment practices."
                ),
                category=Category.DEVOPS,
                priority=Priority.HIGH,
                effort=Level.HIGH,
                impact=Level.HIGH,
                timeline="4-8 weeks",
                resources="2 DevOps engineers, development team",
                details=(
                    "Implement automated testing pipeline",
                    "Set up feature flags for safe deployments",
                    "Break down large releases into smaller increments",
                    "Automate deployment processes",
                    "Implement blue-green or canary deployment strategies",
                ),
            )
        )

    lead_time = section(dora, "leadTimeForChanges")
    if lead_time is not None and lead_time.get("classification") in _LAGGING_DORA_CLASSES:
        drafts.append(
            RecommendationDraft(
                title="Reduce Lead Time for Changes",
                description=(
                    "Long lead times slow down feature delivery and increase risk. "
                    "Streamline development and deployment processes."
                ),
                category=Category.DEVOPS,
                priority=Priority.HIGH,
                effort=Level.MEDIUM,
                impact=Level.HIGH,
                timeline="3-6 weeks",
                resources="1-2 DevOps engineers, development team",
                details=(
                    "Automate build and test processes",
                    "Implement parallel testing strategies",
                    "Reduce code review bottlenecks",
                    "Streamline approval processes",
                    "Optimize CI/CD pipeline performance",
                ),
            )
        )

    failure_rate = section(dora, "changeFailureRate")
    if failure_rate is not None and number(failure_rate, "rate") > thresholds.failure_rate.max_pct:
        drafts.append(
            RecommendationDraft(
                title="Reduce Change Failure Rate",
                description=(
                    "High change failure rate indicates quality issues. Improve "
                    "testing and deployment practices."
                ),
                category=Category.DEVOPS,
                priority=Priority.HIGH,
                effort=Level.MEDIUM,
                impact=Level.HIGH,
                timeline="4-6 weeks",
                resources="2-3 developers, 1 DevOps engineer",
                details=(
                    "Enhance automated testing coverage",
                    "Implement staging environment that mirrors production",
                    "Add monitoring and alerting for early issue detection",
                    "Improve code review processes",
                    "Implement gradual rollout strategies",
                ),
            )
        )

    return drafts


# ── Repository ────────────────────────────────────────────────────────────────

def generate_repository_recommendations(
    repository: Optional[Mapping[str, Any]],
    now: datetime,
    thresholds: RecommendationThresholds = _DEFAULT_THRESHOLDS,
) -> list[RecommendationDraft]:
    """Drafts from ``analysis.repository``: license, description, activity.

    The staleness check measures from the later of ``updated_at`` and
    ``pushed_at`` to ``now``. When neither timestamp is present or parseable
    the check is skipped (the repository is not reported as stale).
    """
    if repository is None:
        return []

    drafts: list[RecommendationDraft] = []

    if not repository.get("license"):
        drafts.append(
            RecommendationDraft(
                title="Add Open Source License",
                description=(
                    "Repository lacks a license, which creates legal uncertainty "
                    "for users and contributors."
                ),
                category=Category.LEGAL,
                priority=Priority.MEDIUM,
                effort=Level.LOW,
                impact=Level.MEDIUM,
                timeline="1 day",
                resources="Legal team, 1 developer",
                details=(
                    "Choose appropriate open source license (MIT, Apache 2.0, etc.)",
                    "Add LICENSE file to repository root",
                    "Update README with license information",
                    "Review any third-party license compatibility",
                ),
            )
        )

    description = repository.get("description") or ""
    if len(description) < thresholds.documentation.description_min_length:
        drafts.append(
            RecommendationDraft(
                title="Improve Repository Documentation",
                description=(
                    "Poor repository description and documentation hurt "
                    "discoverability and onboarding."
                ),
                category=Category.DOCUMENTATION,
                priority=Priority.MEDIUM,
                effort=Level.LOW,
                impact=Level.MEDIUM,
                timeline="1-2 days",
                resources="1 developer, technical writer",
                details=(
                    "Write comprehensive repository description",
                    "Add detailed README with setup instructions",
                    "Include usage examples and API documentation",
                    "Add contribution guidelines",
                    "Create getting started guide for new developers",
                ),
            )
        )

    last_activity = latest_timestamp(repository.get("updated_at"), repository.get("pushed_at"))
    if (
        last_activity is not None
        and days_between(last_activity, now) > thresholds.staleness.max_days
    ):
        drafts.append(
            RecommendationDraft(
                title="Increase Development Activity",
                description=(
                    "Repository has been inactive for an extended period, which "
                    "may indicate maintenance issues."
                ),
                category=Category.MAINTENANCE,
                priority=Priority.MEDIUM,
                effort=Level.MEDIUM,
                impact=Level.MEDIUM,
                timeline="Ongoing",
                resources="Development team",
                details=(
                    "Review and update outdated dependencies",
                    "Address accumulated technical debt",
                    "Update documentation and examples",
                    "Review and close stale issues and pull requests",
                    "Plan regular maintenance cycles",
                ),
            )
        )

    return drafts


# ── Architecture / overall ────────────────────────────────────────────────────

def generate_architecture_recommendations(
    tech_health_score: Optional[Mapping[str, Any]],
    code_quality: Optional[Mapping[str, Any]],
    thresholds: RecommendationThresholds = _DEFAULT_THRESHOLDS,
) -> list[RecommendationDraft]:
    """Drafts from the overall score plus the outdated dependency count.

    The three rules are independent; a score of 65 yields both the
    health-improvement and the performance-monitoring drafts.
    """
    overall = number(tech_health_score, "overall") if tech_health_score is not None else 0
    drafts: list[RecommendationDraft] = []

    if overall < thresholds.health_score.overall_min:
        drafts.append(
            RecommendationDraft(
                title="Comprehensive Technical Health Improvement",
                description=(
                    "Overall tech health score indicates significant areas for "
                    "improvement across multiple dimensions."
                ),
                category=Category.ARCHITECTURE,
                priority=Priority.HIGH,
                effort=Level.HIGH,
                impact=Level.HIGH,
                timeline="3-6 months",
                resources="Senior developers, DevOps team, architect",
                details=(
                    "Conduct comprehensive technical audit",
                    "Create technical improvement roadmap",
                    "Prioritize high-impact, low-effort improvements",
                    "Implement regular technical health monitoring",
                    "Establish technical debt management process",
                ),
            )
        )

    dependencies = section(code_quality, "dependencies") if code_quality is not None else None
    outdated = count(dependencies, "outdated") if dependencies is not None else 0
    if outdated > thresholds.dependencies.max_outdated:
        drafts.append(
            RecommendationDraft(
                title="Update Outdated Dependencies",
                description=(
                    f"{outdated} outdated dependencies create security risks and "
                    "compatibility issues."
                ),
                category=Category.MAINTENANCE,
                priority=Priority.MEDIUM,
                effort=Level.MEDIUM,
                impact=Level.MEDIUM,
                timeline="2-4 weeks",
                resources="1-2 developers",
                details=(
                    "Audit all project dependencies for updates",
                    "Prioritize security-related dependency updates",
                    "Test compatibility with updated dependencies",
                    "Implement automated dependency update monitoring",
                    "Set up regular dependency review schedule",
                ),
            )
        )

    if overall < thresholds.health_score.performance_min:
        drafts.append(
            RecommendationDraft(
                title="Implement Performance Monitoring",
                description=(
                    "Set up comprehensive performance monitoring to identify and "
                    "address bottlenecks proactively."
                ),
                category=Category.PERFORMANCE,
                priority=Priority.MEDIUM,
                effort=Level.MEDIUM,
                impact=Level.MEDIUM,
                timeline="2-3 weeks",
                resources="1 DevOps engineer, 1 developer",
                details=(
                    "Implement application performance monitoring (APM)",
                    "Set up database query performance tracking",
                    "Add response time and throughput metrics",
                    "Create performance alerting and dashboards",
                    "Establish performance benchmarks and SLAs",
                ),
            )
        )

    return drafts
