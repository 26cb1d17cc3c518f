"""
robots.txt Analyzer

Scores a parsed robots.txt and explains the score.

Check sequence (order is part of the output contract):
1. Global (*) rule present
2. Framework-specific checks for every detected web application
3. Under-protected sensitive-path categories relevant to those frameworks
4. Sitemap declared (generic sites only)
5. Crawl delay reasonable (generic sites only)
6. Complex wildcard patterns
7. Shopify key paths

Scoring Model:
- Start at 100
- Each triggered check deducts a fixed penalty (see catalog.PENALTIES)
- Clamp at 0
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from robotscope.core.urls import URLNormalizer
from robotscope.engines.base import (
    AnalysisResult,
    Recommendation,
    RuleRecord,
    RuleView,
    Severity,
    SitemapReport,
    Status,
    Summary,
    UrlSets,
)
from robotscope.engines.robots.catalog import (
    CATEGORY_LABELS,
    CRAWL_DELAY_WARNING_SECONDS,
    DRUPAL_PROTECTED_PATHS,
    MAGENTO_ADMIN_PATH,
    PENALTIES,
    SHOPIFY_KEY_PATHS,
    WORDPRESS_PROTECTED_PATHS,
    WORDPRESS_SITEMAP_NAMES,
)
from robotscope.engines.robots.fingerprint import (
    all_disallows,
    audit_sensitive_paths,
    detected_frameworks,
    is_protected,
    relevant_categories,
    unprotected_paths,
)

logger = structlog.get_logger(__name__)


class _Checklist:
    """Collects recommendations and the running penalty total."""

    def __init__(self) -> None:
        self.recommendations: list[Recommendation] = []
        self.deductions = 0

    def add(self, key: str, severity: Severity, message: str, details: str | None = None) -> None:
        self.recommendations.append(Recommendation(message=message, severity=severity, details=details))
        self.deductions += PENALTIES[key]

    @property
    def score(self) -> int:
        return max(0, 100 - self.deductions)

    def has(self, severity: Severity) -> bool:
        return any(r.severity == severity.value for r in self.recommendations)


def analyze(rules: Sequence[RuleRecord], base_url: str | None = None) -> AnalysisResult:
    """
    Analyze parsed robots.txt rules.

    Args:
        rules: Output of parse()
        base_url: Site origin used to resolve allow/disallow paths to absolute URLs

    Returns:
        AnalysisResult with summary, per-rule view, sitemaps, recommendations and URL sets
    """
    rules = list(rules)

    # ── Sitemaps ───────────────────────────────────
    sitemaps = _unique(s for rule in rules for s in rule.sitemaps)

    # ── URL resolution ─────────────────────────────
    allowed = _unique(URLNormalizer.resolve(p, base_url) for rule in rules for p in rule.allow)
    blocked = _unique(URLNormalizer.resolve(p, base_url) for rule in rules for p in rule.disallow)

    # ── Fingerprinting & protection audit ──────────
    frameworks = detected_frameworks(rules)
    audits = audit_sensitive_paths(rules)
    disallows = all_disallows(rules)
    has_global = any(rule.is_global for rule in rules)

    checks = _Checklist()

    # ── Global rule ────────────────────────────────
    if not has_global:
        checks.add(
            "missing-global-rule",
            Severity.ERROR,
            "No global rule (User-agent: *) found. Add one to give all crawlers default instructions.",
        )

    # ── Framework-specific checks ──────────────────
    for name in frameworks:
        _check_framework(name, disallows, sitemaps, checks)

    # ── Sensitive path categories ──────────────────
    if frameworks:
        relevant = relevant_categories(frameworks)
        for audit in audits:
            if audit.category in relevant and audit.under_protected:
                label = CATEGORY_LABELS.get(audit.category, audit.category)
                checks.add(
                    "category-under-protected",
                    Severity.WARNING,
                    f"Several {label} paths are not disallowed for {', '.join(frameworks)}.",
                    details=f"Unprotected paths: {', '.join(audit.unprotected)}",
                )

    # ── Generic site checks ────────────────────────
    if not frameworks and not sitemaps:
        checks.add(
            "missing-sitemap",
            Severity.WARNING,
            "No Sitemap directive found. Declare your XML sitemap so search engines can discover content.",
        )

    if not frameworks and any(
        rule.crawl_delay is not None and rule.crawl_delay > CRAWL_DELAY_WARNING_SECONDS for rule in rules
    ):
        checks.add(
            "high-crawl-delay",
            Severity.WARNING,
            f"Crawl-delay above {CRAWL_DELAY_WARNING_SECONDS} seconds may slow down indexing of your site.",
        )

    # ── Wildcards ──────────────────────────────────
    complex_patterns = [d for d in disallows if ("*" in d and "/" in d) or d.count("*") > 1]
    if complex_patterns:
        checks.add(
            "complex-wildcard",
            Severity.POTENTIAL,
            "Complex wildcard patterns found. Not every crawler interprets wildcards the same way.",
            details=f"Patterns: {', '.join(_unique(complex_patterns))}",
        )

    # ── Shopify key paths ──────────────────────────
    if "Shopify" in frameworks:
        open_paths = unprotected_paths(SHOPIFY_KEY_PATHS, disallows)
        if open_paths:
            checks.add(
                "shopify-key-paths",
                Severity.POTENTIAL,
                "Shopify store paths may be exposed to crawlers.",
                details=f"Consider disallowing: {', '.join(open_paths)}",
            )

    status = _derive_status(checks)
    result = AnalysisResult(
        summary=Summary(
            total_rules=len(rules),
            has_global_rule=has_global,
            total_sitemaps=len(sitemaps),
            score=checks.score,
            status=status,
        ),
        rules=[
            RuleView(
                user_agent=rule.user_agent,
                is_global=rule.is_global,
                disallowed_paths=list(rule.disallow),
                allowed_paths=list(rule.allow),
                crawl_delay=rule.crawl_delay,
            )
            for rule in rules
        ],
        sitemaps=SitemapReport(urls=sitemaps, issues=[]),
        recommendations=checks.recommendations,
        urls=UrlSets(allowed=allowed, blocked=blocked),
    )

    logger.debug(
        "robots.txt analysis complete",
        score=checks.score,
        status=status.value,
        frameworks=frameworks,
        recommendations=len(checks.recommendations),
    )
    return result


def _check_framework(
    name: str,
    disallows: list[str],
    sitemaps: list[str],
    checks: _Checklist,
) -> None:
    if name == "WordPress":
        open_paths = unprotected_paths(WORDPRESS_PROTECTED_PATHS, disallows)
        if open_paths:
            checks.add(
                "wordpress-unprotected",
                Severity.ERROR,
                "WordPress core directories are not disallowed.",
                details=f"Add Disallow rules for: {', '.join(open_paths)}",
            )
        if not any(n in s.lower() for s in sitemaps for n in WORDPRESS_SITEMAP_NAMES):
            checks.add(
                "wordpress-missing-sitemap",
                Severity.WARNING,
                "No XML sitemap declared for this WordPress site (e.g. /sitemap.xml or /sitemap_index.xml).",
            )

    elif name == "Drupal":
        open_paths = unprotected_paths(DRUPAL_PROTECTED_PATHS, disallows)
        if open_paths:
            checks.add(
                "drupal-unprotected",
                Severity.ERROR,
                "Drupal administrative paths are not disallowed.",
                details=f"Add Disallow rules for: {', '.join(open_paths)}",
            )

    elif name == "Magento":
        if not is_protected(MAGENTO_ADMIN_PATH, disallows):
            checks.add(
                "magento-admin-exposed",
                Severity.ERROR,
                "Magento admin area is not disallowed.",
                details=f"Add: Disallow: {MAGENTO_ADMIN_PATH}",
            )

    elif name == "Shopify":
        open_paths = unprotected_paths(SHOPIFY_KEY_PATHS, disallows)
        if open_paths:
            checks.add(
                "shopify-unprotected",
                Severity.WARNING,
                "Shopify checkout and account paths are crawlable.",
                details=f"Add Disallow rules for: {', '.join(open_paths)}",
            )


def _derive_status(checks: _Checklist) -> Status:
    if checks.has(Severity.ERROR):
        return Status.MAJOR_ISSUES
    if checks.has(Severity.WARNING):
        return Status.SOME_ISSUES
    if checks.has(Severity.POTENTIAL):
        return Status.POTENTIAL_ISSUES
    return Status.ALL_GOOD


def _unique(items: Iterable[str]) -> list[str]:
    """Deduplicate, keeping first-seen order."""
    return list(dict.fromkeys(items))
