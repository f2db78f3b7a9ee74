"""
Recommendation engine: converts an analysis result (security findings,
code-quality metrics, DORA metrics, repository metadata, overall score)
into a ranked list of improvement recommendations.

Modules
-------
generators : five rule sets, one per analysis section — pure functions.
scorer     : enrich() — id, priority score, ROI, urgency.
ranker     : rank() + identify_quick_wins() + group_by_horizon().
defaults   : the five-item fallback set.
engine     : generate() / RecommendationEngine — orchestration + fallback.
"""
