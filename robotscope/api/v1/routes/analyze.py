"""
Analyze API Routes

No business logic lives here.
Routes validate input, call the parser and analyzer, return responses.
The caller supplies the robots.txt text; nothing is fetched.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response
from pydantic import BaseModel, Field

from robotscope.core.config import Settings, get_settings
from robotscope.core.logging import bind_request_context
from robotscope.core.urls import URLNormalizer
from robotscope.engines.base import AnalysisResult, RuleRecord
from robotscope.engines.robots.analyzer import analyze
from robotscope.engines.robots.export import ExportFormat, export_filename, to_csv, to_json
from robotscope.engines.robots.parser import parse

logger = structlog.get_logger(__name__)
router = APIRouter()

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv; charset=utf-8",
}


# ─────────────────────────────────────────────
# Request / Response Schemas
# ─────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    content: str = Field(..., description="Raw robots.txt text")
    url: str | None = Field(None, description="Site URL used to resolve paths to absolute URLs")


class AnalyzeResponse(BaseModel):
    url: str | None
    robotsUrl: str | None
    analysis: dict[str, Any]
    rules: list[dict[str, Any]]


# ─────────────────────────────────────────────
# Dependencies
# ─────────────────────────────────────────────

def require_api_key(request: Request, settings: Settings = Depends(get_settings)) -> None:
    if settings.auth_enabled and request.headers.get(settings.API_KEY_HEADER) != settings.API_KEY:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def _run(body: AnalyzeRequest, settings: Settings) -> tuple[str | None, list[RuleRecord], AnalysisResult]:
    if len(body.content.encode("utf-8")) > settings.MAX_CONTENT_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"robots.txt content exceeds {settings.MAX_CONTENT_BYTES} bytes",
        )

    normalized: str | None = None
    if body.url is not None:
        try:
            normalized = URLNormalizer.normalize(body.url)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        bind_request_context(domain=URLNormalizer.domain(normalized))

    rules = parse(body.content)
    base_url = URLNormalizer.origin(normalized) if normalized else None
    result = analyze(rules, base_url)

    logger.info(
        "robots.txt analyzed",
        rules=len(rules),
        score=result.summary.score,
        status=result.summary.status,
    )
    return normalized, rules, result


# ─────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────

@router.post(
    "",
    response_model=AnalyzeResponse,
    dependencies=[Depends(require_api_key)],
    summary="Parse and score robots.txt content",
)
async def analyze_robots(
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    normalized, rules, result = _run(body, settings)
    return AnalyzeResponse(
        url=normalized,
        robotsUrl=URLNormalizer.robots_url(normalized) if normalized else None,
        analysis=result.to_dict(),
        rules=[r.to_dict() for r in rules],
    )


@router.post(
    "/export",
    dependencies=[Depends(require_api_key)],
    summary="Download the analysis as JSON or CSV",
)
async def export_analysis(
    body: AnalyzeRequest,
    fmt: ExportFormat = Query("json", alias="format"),
    settings: Settings = Depends(get_settings),
) -> Response:
    normalized, rules, result = _run(body, settings)

    if fmt == "csv":
        payload = to_csv(result, rules)
    else:
        payload = to_json(result, rules)

    domain = URLNormalizer.domain(normalized) if normalized else ""
    return Response(
        content=payload,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{export_filename(domain, fmt)}"'},
    )
