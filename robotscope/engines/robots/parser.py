"""
robots.txt parser.

Turns raw robots.txt text into one RuleRecord per user-agent token.
Malformed lines, unknown directives and orphaned allow/disallow lines are
dropped; nothing here raises on bad input.
"""

from __future__ import annotations

import re

import structlog

from robotscope.engines.base import RuleRecord

logger = structlog.get_logger(__name__)

GLOBAL_AGENT = "*"

_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse(content: str) -> list[RuleRecord]:
    """
    Parse robots.txt content into rule records.

    Repeated User-agent lines for the same token merge into one record.
    The global ("*") record, if any, is returned first.
    """
    records: dict[str, RuleRecord] = {}
    current: RuleRecord | None = None

    for directive, value in _directives(content or ""):
        if directive == "user-agent":
            agent = value.lower()
            current = records.get(agent)
            if current is None:
                current = RuleRecord(user_agent=agent)
                records[agent] = current

        elif directive == "disallow":
            if current is not None:
                current.disallow.append(value.lower())

        elif directive == "allow":
            if current is not None:
                current.allow.append(value.lower())

        elif directive == "crawl-delay":
            if current is not None:
                current.crawl_delay = _parse_delay(value)

        elif directive == "sitemap":
            if current is not None:
                current.sitemaps.append(value)
            elif records:
                list(records.values())[-1].sitemaps.append(value)
            else:
                # Leading Sitemap line: surface it on a synthesized global record
                records[GLOBAL_AGENT] = RuleRecord(user_agent=GLOBAL_AGENT, sitemaps=[value])

    ordered = list(records.values())
    global_rule = records.get(GLOBAL_AGENT)
    if global_rule is not None:
        ordered = [global_rule] + [r for r in ordered if r is not global_rule]

    logger.debug("robots.txt parsed", records=len(ordered))
    return ordered


def _directives(content: str) -> list[tuple[str, str]]:
    """Split content into (directive, value) pairs, skipping comments and blanks."""
    pairs: list[tuple[str, str]] = []
    for raw in _LINE_BREAK.split(content):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        directive, sep, value = line.partition(":")
        if not sep:
            continue
        pairs.append((directive.strip().lower(), value.strip()))
    return pairs


def _parse_delay(value: str) -> float:
    # Leading numeric prefix wins ("10 # slow" -> 10.0); anything else is NaN
    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return float("nan")
    return float(match.group(0))
