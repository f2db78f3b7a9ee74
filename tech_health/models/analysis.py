"""
Read-only accessors for the analysis-result tree.

The engine consumes the analysis result exactly as the upstream analysis
subsystem produces it: a nested JSON-like mapping. No schema is imposed here.
These helpers implement optional-leaf defaulting only:

  - an absent key, an explicit ``None`` and any other falsy non-mapping
    value (``False``, ``""``, ``0``, ``[]``) are all "absent"; an empty
    mapping is present;
  - numeric leaves default to ``0``, list leaves to ``[]``.

They do NOT guard against the wrong *shape*. Reading a truthy value that is
not a mapping raises (``AttributeError`` / ``TypeError``), which is
what lets the engine detect malformed input and switch to the fallback set.

Shape (all keys optional)::

    {
      "analysis": {
        "codeQuality": {"security": ..., "complexity": ..., "testing": ...,
                        "documentation": ..., "dependencies": ...},
        "dora": {...},
        "repository": {...}
      },
      "techHealthScore": {"overall": 0-100}
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

AnalysisResult = Mapping[str, Any]


def section(parent: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    """Return ``parent[key]``, or ``None`` when the key is absent or falsy.

    An empty mapping is returned as is, so ``{}`` still counts as present.
    """
    value = parent.get(key)
    if value is None or (not value and not isinstance(value, Mapping)):
        return None
    return value


def number(parent: Mapping[str, Any], key: str) -> float:
    """Return a numeric leaf, defaulting to ``0`` when absent, null or zero."""
    return parent.get(key) or 0


def count(parent: Mapping[str, Any], key: str) -> int:
    """Return the length of a list leaf, defaulting to ``0``."""
    return len(parent.get(key) or [])


def analysis_body(analysis_result: AnalysisResult) -> Mapping[str, Any]:
    """Return the ``analysis`` container.

    Unlike the sections inside it, the container itself is structural: a
    result without one (missing, null or not a mapping) is malformed.

    Raises:
        TypeError: If ``analysis`` is not a mapping.
    """
    body = analysis_result.get("analysis")
    if not isinstance(body, Mapping):
        raise TypeError(
            f"analysis must be a mapping, got {type(body).__name__}."
        )
    return body


def code_quality_section(analysis_result: AnalysisResult) -> Optional[Mapping[str, Any]]:
    """``analysis.codeQuality``."""
    return section(analysis_body(analysis_result), "codeQuality")


def security_section(analysis_result: AnalysisResult) -> Optional[Mapping[str, Any]]:
    """``analysis.codeQuality.security``, or ``None`` if either level is absent."""
    code_quality = code_quality_section(analysis_result)
    if code_quality is None:
        return None
    return section(code_quality, "security")


def dora_section(analysis_result: AnalysisResult) -> Optional[Mapping[str, Any]]:
    """``analysis.dora``."""
    return section(analysis_body(analysis_result), "dora")


def repository_section(analysis_result: AnalysisResult) -> Optional[Mapping[str, Any]]:
    """``analysis.repository``."""
    return section(analysis_body(analysis_result), "repository")
