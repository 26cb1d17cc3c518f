"""
Type contracts for the robots.txt engine.

Design principles:
- Parser and analyzer are stateless: every call builds fresh models
- Attributes are snake_case; serialized field names are camelCase aliases
- Dumping with by_alias=True, exclude_none=True yields the public JSON shape
"""

from __future__ import annotations

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ─────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────

class Severity(str, Enum):
    ERROR = "error"           # Misconfiguration exposing or blocking the site
    WARNING = "warning"       # Likely SEO or security problem
    INFO = "info"             # Informational - no action required
    POTENTIAL = "potential"   # Worth a second look


class Status(str, Enum):
    MAJOR_ISSUES = "❌ Major Issues"
    SOME_ISSUES = "⚠️ Some Issues"
    POTENTIAL_ISSUES = "❓ Potential Issues"
    ALL_GOOD = "✅ All Good"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict:
        """Plain JSON-compatible structure using the public field names (NaN becomes null)."""
        return json.loads(self.model_dump_json(by_alias=True, exclude_none=True))


# ─────────────────────────────────────────────
# Parser output
# ─────────────────────────────────────────────

class RuleRecord(CamelModel):
    """All directives collected for one user-agent token."""
    user_agent: str
    disallow: list[str] = Field(default_factory=list)
    allow: list[str] = Field(default_factory=list)
    crawl_delay: float | None = None
    sitemaps: list[str] = Field(default_factory=list)

    @property
    def is_global(self) -> bool:
        return self.user_agent == "*"


# ─────────────────────────────────────────────
# Analyzer output
# ─────────────────────────────────────────────

class Recommendation(CamelModel):
    message: str
    severity: Severity
    details: str | None = None


class RuleView(CamelModel):
    user_agent: str
    is_global: bool
    disallowed_paths: list[str] = Field(default_factory=list)
    allowed_paths: list[str] = Field(default_factory=list)
    crawl_delay: float | None = None


class Summary(CamelModel):
    total_rules: int = 0
    has_global_rule: bool = False
    total_sitemaps: int = 0
    score: int = Field(ge=0, le=100, default=100)
    status: Status = Status.ALL_GOOD


class SitemapReport(CamelModel):
    urls: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class UrlSets(CamelModel):
    allowed: list[str] = Field(default_factory=list)
    blocked: list[str] = Field(default_factory=list)


class AnalysisResult(CamelModel):
    """Standardized output of analyze()."""
    summary: Summary
    rules: list[RuleView] = Field(default_factory=list)
    sitemaps: SitemapReport = Field(default_factory=SitemapReport)
    recommendations: list[Recommendation] = Field(default_factory=list)
    urls: UrlSets = Field(default_factory=UrlSets)


# ─────────────────────────────────────────────
# Fingerprinting / audit intermediates
# ─────────────────────────────────────────────

class SignatureMatch(BaseModel):
    name: str
    confidence: int = 0
    matched_patterns: list[str] = Field(default_factory=list)
    detected: bool = False


class CategoryAudit(BaseModel):
    category: str
    paths: list[str] = Field(default_factory=list)
    unprotected: list[str] = Field(default_factory=list)
    under_protected: bool = False
