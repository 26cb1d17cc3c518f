"""
Export an analysis (plus the parsed rule rows) as JSON or CSV text for download.
"""

from __future__ import annotations

import csv
import io
import math
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from robotscope.engines.base import AnalysisResult, RuleRecord

ExportFormat = Literal["json", "csv"]

CSV_HEADER = ["section", "user_agent", "field", "value"]


class ExportDocument(BaseModel):
    analysis: AnalysisResult
    rules: list[RuleRecord] = Field(default_factory=list)


def to_json(result: AnalysisResult, rules: Sequence[RuleRecord] | None = None, *, indent: int = 2) -> str:
    """Serialize with public (camelCase) field names; NaN becomes null."""
    document = ExportDocument(analysis=result, rules=list(rules or []))
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def to_csv(result: AnalysisResult, rules: Sequence[RuleRecord] | None = None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    summary = result.summary
    writer.writerow(["summary", "", "totalRules", summary.total_rules])
    writer.writerow(["summary", "", "hasGlobalRule", str(summary.has_global_rule).lower()])
    writer.writerow(["summary", "", "totalSitemaps", summary.total_sitemaps])
    writer.writerow(["summary", "", "score", summary.score])
    writer.writerow(["summary", "", "status", summary.status])

    for rule in rules or []:
        writer.writerow(["rule", rule.user_agent, "user-agent", rule.user_agent])
        for path in rule.disallow:
            writer.writerow(["rule", rule.user_agent, "disallow", path])
        for path in rule.allow:
            writer.writerow(["rule", rule.user_agent, "allow", path])
        if rule.crawl_delay is not None:
            writer.writerow(["rule", rule.user_agent, "crawl-delay", _format_delay(rule.crawl_delay)])
        for sitemap in rule.sitemaps:
            writer.writerow(["rule", rule.user_agent, "sitemap", sitemap])

    for url in result.sitemaps.urls:
        writer.writerow(["sitemap", "", "url", url])

    for rec in result.recommendations:
        writer.writerow(["recommendation", "", rec.severity, rec.message])

    return buffer.getvalue()


def export_filename(domain: str, fmt: ExportFormat) -> str:
    return f"robots-analysis-{domain or 'site'}.{fmt}"


def _format_delay(value: float) -> str:
    if math.isnan(value):
        return ""
    return f"{value:g}"
