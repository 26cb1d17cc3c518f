"""
Tests for JSON / CSV export.
"""

import csv
import io
import json

from robotscope.engines.robots.analyzer import analyze
from robotscope.engines.robots.export import CSV_HEADER, export_filename, to_csv, to_json
from robotscope.engines.robots.parser import parse

CONTENT = "User-agent: *\nDisallow: /admin\nAllow: /public\nCrawl-delay: 2\nSitemap: https://x.com/sitemap.xml"


class TestJsonExport:

    def test_public_field_names(self):
        rules = parse(CONTENT)
        data = json.loads(to_json(analyze(rules), rules))
        summary = data["analysis"]["summary"]
        assert set(summary) == {"totalRules", "hasGlobalRule", "totalSitemaps", "score", "status"}
        assert data["analysis"]["rules"][0]["userAgent"] == "*"
        assert data["analysis"]["rules"][0]["disallowedPaths"] == ["/admin"]
        assert data["rules"][0]["crawlDelay"] == 2.0

    def test_optional_fields_omitted(self):
        rules = parse("User-agent: *\nDisallow: /admin\nSitemap: https://x.com/sitemap.xml")
        data = json.loads(to_json(analyze(rules)))
        assert "crawlDelay" not in data["analysis"]["rules"][0]
        assert data["rules"] == []

    def test_nan_crawl_delay_serialized_as_null(self):
        rules = parse("User-agent: *\nCrawl-delay: slow")
        data = json.loads(to_json(analyze(rules), rules))
        assert data["rules"][0]["crawlDelay"] is None


class TestCsvExport:

    def test_rows(self):
        rules = parse(CONTENT)
        rows = list(csv.reader(io.StringIO(to_csv(analyze(rules), rules))))
        assert rows[0] == CSV_HEADER
        assert ["summary", "", "score", "100"] in rows
        assert ["summary", "", "hasGlobalRule", "true"] in rows
        assert ["rule", "*", "disallow", "/admin"] in rows
        assert ["rule", "*", "allow", "/public"] in rows
        assert ["rule", "*", "crawl-delay", "2"] in rows
        assert ["sitemap", "", "url", "https://x.com/sitemap.xml"] in rows

    def test_recommendation_rows(self):
        rules = parse("User-agent: bot\nDisallow: /x")
        rows = list(csv.reader(io.StringIO(to_csv(analyze(rules), rules))))
        severities = [row[2] for row in rows if row[0] == "recommendation"]
        assert severities == ["error", "warning"]


class TestFilename:

    def test_filename(self):
        assert export_filename("example.com", "csv") == "robots-analysis-example.com.csv"
        assert export_filename("", "json") == "robots-analysis-site.json"
