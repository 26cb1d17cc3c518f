"""
Web application fingerprinting and sensitive-path protection audit.

Both scans are driven entirely by the tables in catalog.py.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from robotscope.engines.base import CategoryAudit, RuleRecord, SignatureMatch
from robotscope.engines.robots.catalog import (
    RELEVANT_CATEGORIES,
    SENSITIVE_PATHS,
    SIGNATURE_DETECTION_THRESHOLD,
    SIGNATURE_PATTERN_WEIGHT,
    SIGNATURES,
    UNPROTECTED_RATIO_THRESHOLD,
)


def all_paths(rules: Iterable[RuleRecord]) -> list[str]:
    """Every allow and disallow path across all records."""
    paths: list[str] = []
    for rule in rules:
        paths.extend(rule.allow)
        paths.extend(rule.disallow)
    return paths


def all_disallows(rules: Iterable[RuleRecord]) -> list[str]:
    return [path for rule in rules for path in rule.disallow]


def is_protected(path: str, disallows: Sequence[str]) -> bool:
    """A path is protected when some non-empty disallow entry contains it."""
    path = path.lower()
    return any(entry and path in entry for entry in disallows)


def unprotected_paths(paths: Iterable[str], disallows: Sequence[str]) -> list[str]:
    return [p for p in paths if not is_protected(p, disallows)]


def detect_signatures(rules: Sequence[RuleRecord]) -> list[SignatureMatch]:
    """
    Score every catalog signature against the allow+disallow paths.
    Returns one match per signature, in catalog order.
    """
    paths = all_paths(rules)
    matches: list[SignatureMatch] = []
    for name, patterns in SIGNATURES.items():
        found = [pattern for pattern in patterns if any(pattern in path for path in paths)]
        confidence = min(100, len(found) * SIGNATURE_PATTERN_WEIGHT)
        matches.append(SignatureMatch(
            name=name,
            confidence=confidence,
            matched_patterns=found,
            detected=confidence >= SIGNATURE_DETECTION_THRESHOLD,
        ))
    return matches


def detected_frameworks(rules: Sequence[RuleRecord]) -> list[str]:
    return [m.name for m in detect_signatures(rules) if m.detected]


def audit_sensitive_paths(rules: Sequence[RuleRecord]) -> list[CategoryAudit]:
    """Check how much of each sensitive-path category is covered by disallows."""
    disallows = all_disallows(rules)
    audits: list[CategoryAudit] = []
    for category, paths in SENSITIVE_PATHS.items():
        open_paths = unprotected_paths(paths, disallows)
        audits.append(CategoryAudit(
            category=category,
            paths=list(paths),
            unprotected=open_paths,
            under_protected=len(open_paths) / len(paths) > UNPROTECTED_RATIO_THRESHOLD,
        ))
    return audits


def relevant_categories(frameworks: Iterable[str]) -> set[str]:
    relevant: set[str] = set()
    for name in frameworks:
        relevant |= RELEVANT_CATEGORIES.get(name, set())
    return relevant
