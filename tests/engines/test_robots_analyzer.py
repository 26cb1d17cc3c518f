"""
Tests for the robots.txt analyzer.
Fixtures are raw robots.txt bodies run through the real parser.
"""

import pytest

from robotscope.engines.base import RuleRecord, Severity, Status
from robotscope.engines.robots.analyzer import analyze
from robotscope.engines.robots.parser import parse


def severities(result):
    return [r.severity for r in result.recommendations]


WORDPRESS_GOOD = """
User-agent: *
Disallow: /wp-admin/
Disallow: /wp-includes/
Disallow: /wp-content/plugins/
Disallow: /wp-content/themes/
Allow: /wp-admin/admin-ajax.php
Sitemap: https://example.com/sitemap_index.xml
"""

WORDPRESS_OPEN = """
User-agent: *
Disallow: /wp-admin/
Allow: /wp-content/uploads/
"""

SHOPIFY = """
User-agent: *
Disallow: /admin
Disallow: /cart
Disallow: /orders
Disallow: /checkouts/
Disallow: /collections/*sort_by*
Sitemap: https://shop.example.com/sitemap.xml
"""

SHOPIFY_PARTIAL = """
User-agent: *
Disallow: /cart
Disallow: /orders
Sitemap: https://shop.example.com/sitemap.xml
"""

MAGENTO = """
User-agent: *
Disallow: /catalogsearch/
Disallow: /checkout/cart/
Disallow: /customer/account/
Sitemap: https://m.example.com/sitemap.xml
"""

DRUPAL = """
User-agent: *
Disallow: /admin/
Disallow: /node/add/
Disallow: /user/register/
Disallow: /user/login/
Disallow: /install.php
Sitemap: https://d.example.com/sitemap.xml
"""

DRUPAL_OPEN = """
User-agent: *
Disallow: /admin/
Disallow: /node/add/
Disallow: /user/register/
Sitemap: https://d.example.com/sitemap.xml
"""

WORDPRESS_SHORT_PREFIX = """
User-agent: *
Disallow: /wp
Allow: /wp-content/uploads/
Allow: /wp-json/
Sitemap: https://x.com/sitemap.xml
"""


# ─────────────────────────────────────────────
# Summary
# ─────────────────────────────────────────────

class TestSummary:

    def test_clean_global_rule(self):
        result = analyze(parse("User-agent: *\nDisallow: /admin\nSitemap: https://x.com/sitemap.xml"))
        assert result.summary.has_global_rule is True
        assert result.summary.total_sitemaps == 1
        assert result.summary.total_rules == 1
        assert result.summary.score == 100
        assert result.summary.status == Status.ALL_GOOD.value
        assert result.recommendations == []

    def test_missing_global_rule_is_error(self):
        result = analyze(parse("User-agent: googlebot\nDisallow: /private\nSitemap: https://x.com/sitemap.xml"))
        assert result.summary.has_global_rule is False
        assert severities(result) == [Severity.ERROR.value]
        assert result.summary.score == 80
        assert result.summary.status == Status.MAJOR_ISSUES.value

    def test_empty_rules(self):
        result = analyze([])
        assert result.summary.total_rules == 0
        assert severities(result) == [Severity.ERROR.value, Severity.WARNING.value]
        assert result.summary.score == 70

    def test_rule_view(self):
        result = analyze(parse("User-agent: *\nDisallow: /a\nAllow: /b\nCrawl-delay: 2\nUser-agent: bot\nDisallow: /c"))
        star, bot = result.rules
        assert star.is_global and not bot.is_global
        assert star.disallowed_paths == ["/a"]
        assert star.allowed_paths == ["/b"]
        assert star.crawl_delay == 2.0
        assert bot.crawl_delay is None


# ─────────────────────────────────────────────
# Sitemaps & URL resolution
# ─────────────────────────────────────────────

class TestSitemapsAndUrls:

    def test_sitemaps_deduplicated_in_first_seen_order(self):
        rules = parse(
            "User-agent: *\nSitemap: https://x.com/b.xml\nSitemap: https://x.com/a.xml\n"
            "User-agent: bot\nSitemap: https://x.com/b.xml"
        )
        result = analyze(rules)
        assert result.sitemaps.urls == ["https://x.com/b.xml", "https://x.com/a.xml"]
        assert result.sitemaps.issues == []
        assert result.summary.total_sitemaps == 2

    def test_urls_resolved_against_base(self):
        rules = parse("User-agent: *\nDisallow: /admin\nAllow: /public\nUser-agent: bot\nDisallow: /admin")
        result = analyze(rules, "https://example.com")
        assert result.urls.blocked == ["https://example.com/admin"]
        assert result.urls.allowed == ["https://example.com/public"]

    def test_urls_raw_without_base(self):
        result = analyze(parse("User-agent: *\nDisallow: /admin\nDisallow: /*.pdf$"))
        assert result.urls.blocked == ["/admin", "/*.pdf$"]

    def test_urls_raw_with_unusable_base(self):
        result = analyze(parse("User-agent: *\nDisallow: /admin"), "example.com")
        assert result.urls.blocked == ["/admin"]


# ─────────────────────────────────────────────
# Generic site checks
# ─────────────────────────────────────────────

class TestGenericChecks:

    def test_high_crawl_delay_warning(self):
        result = analyze(parse("User-agent: *\nCrawl-delay: 10\nSitemap: https://x.com/sitemap.xml"))
        assert severities(result) == [Severity.WARNING.value]
        assert result.summary.score == 90
        assert result.summary.status == Status.SOME_ISSUES.value

    def test_nan_crawl_delay_not_flagged(self):
        result = analyze(parse("User-agent: *\nCrawl-delay: slow\nSitemap: https://x.com/sitemap.xml"))
        assert result.recommendations == []

    def test_missing_sitemap_warning(self):
        result = analyze(parse("User-agent: *\nDisallow: /private"))
        assert severities(result) == [Severity.WARNING.value]
        assert "Sitemap" in result.recommendations[0].message

    def test_complex_wildcard_potential(self):
        result = analyze(parse("User-agent: *\nDisallow: /*.pdf$\nSitemap: https://x.com/sitemap.xml"))
        assert severities(result) == [Severity.POTENTIAL.value]
        assert result.summary.score == 97
        assert result.summary.status == Status.POTENTIAL_ISSUES.value

    def test_multiple_stars_without_slash(self):
        result = analyze(parse("User-agent: *\nDisallow: *?*\nSitemap: https://x.com/sitemap.xml"))
        assert severities(result) == [Severity.POTENTIAL.value]

    def test_single_bare_star_not_flagged(self):
        result = analyze(parse("User-agent: *\nDisallow: *\nSitemap: https://x.com/sitemap.xml"))
        assert result.recommendations == []


# ─────────────────────────────────────────────
# Framework checks
# ─────────────────────────────────────────────

class TestFrameworkChecks:

    def test_wordpress_well_configured(self):
        result = analyze(parse(WORDPRESS_GOOD))
        # admin and media categories still have uncovered generic paths
        assert severities(result) == [Severity.WARNING.value, Severity.WARNING.value]
        assert result.summary.score == 90

    def test_wordpress_unprotected(self):
        result = analyze(parse(WORDPRESS_OPEN))
        assert severities(result) == [
            Severity.ERROR.value,
            Severity.WARNING.value,
            Severity.WARNING.value,
            Severity.WARNING.value,
        ]
        assert "/wp-includes" in result.recommendations[0].details
        assert "/wp-admin" not in result.recommendations[0].details
        assert result.summary.score == 70
        assert result.summary.status == Status.MAJOR_ISSUES.value

    def test_framework_suppresses_generic_sitemap_check(self):
        result = analyze(parse(WORDPRESS_OPEN))
        messages = " ".join(r.message for r in result.recommendations)
        assert "No Sitemap directive" not in messages

    def test_drupal_protected(self):
        result = analyze(parse(DRUPAL))
        assert Severity.ERROR.value not in severities(result)
        assert result.summary.score == 90

    def test_drupal_unprotected(self):
        result = analyze(parse(DRUPAL_OPEN))
        assert severities(result) == [Severity.ERROR.value, Severity.WARNING.value, Severity.WARNING.value]
        assert "Drupal" in result.recommendations[0].message
        assert result.recommendations[0].details == "Add Disallow rules for: /install.php"
        assert result.summary.score == 75
        assert result.summary.status == Status.MAJOR_ISSUES.value

    def test_short_prefix_does_not_protect_wordpress_dirs(self):
        result = analyze(parse(WORDPRESS_SHORT_PREFIX))
        assert severities(result)[0] == Severity.ERROR.value
        assert result.recommendations[0].details == (
            "Add Disallow rules for: /wp-admin, /wp-includes, /wp-content/plugins, /wp-content/themes"
        )
        assert result.summary.status == Status.MAJOR_ISSUES.value

    def test_magento_admin_exposed(self):
        result = analyze(parse(MAGENTO))
        assert severities(result) == [Severity.ERROR.value, Severity.WARNING.value, Severity.WARNING.value]
        assert "Magento" in result.recommendations[0].message
        assert result.summary.score == 75

    def test_shopify_protected(self):
        result = analyze(parse(SHOPIFY))
        assert severities(result) == [Severity.WARNING.value, Severity.POTENTIAL.value]
        assert result.summary.score == 92

    def test_shopify_duplicate_notice(self):
        result = analyze(parse(SHOPIFY_PARTIAL))
        assert severities(result) == [
            Severity.WARNING.value,
            Severity.WARNING.value,
            Severity.WARNING.value,
            Severity.POTENTIAL.value,
        ]
        first, last = result.recommendations[0], result.recommendations[-1]
        assert "/admin" in first.details and "/checkout" in first.details
        assert "/admin" in last.details and "/checkout" in last.details
        assert result.summary.score == 77


# ─────────────────────────────────────────────
# Scoring bounds & purity
# ─────────────────────────────────────────────

class TestScoring:

    def test_score_clamped_at_zero(self):
        rules = [RuleRecord(
            user_agent="bot",
            allow=[
                "/wp-content/", "/wp-json/", "/node/add", "/user/register",
                "/catalogsearch", "/downloader", "/cart", "/orders", "/ghost/", "/p/",
            ],
            disallow=["/*/*"],
        )]
        result = analyze(rules)
        assert result.summary.score == 0
        assert result.summary.status == Status.MAJOR_ISSUES.value

    @pytest.mark.parametrize("content", [
        "", WORDPRESS_GOOD, WORDPRESS_OPEN, SHOPIFY, SHOPIFY_PARTIAL, MAGENTO, DRUPAL,
        "User-agent: *\nDisallow: /",
    ])
    def test_score_in_range(self, content):
        score = analyze(parse(content)).summary.score
        assert 0 <= score <= 100

    def test_input_not_mutated(self):
        rules = parse(WORDPRESS_OPEN)
        snapshot = [r.model_copy(deep=True) for r in rules]
        result = analyze(rules)
        assert rules == snapshot
        result.rules[0].disallowed_paths.append("/new")
        assert rules[0].disallow == ["/wp-admin/"]
