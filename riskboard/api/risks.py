"""Risk assessment API endpoints."""

from __future__ import annotations

import csv
import io

from fastapi import APIRouter, Depends, Query, Response

from riskboard.api.dependencies import get_store
from riskboard.models.risk import DeleteResponse, Risk, RiskCreate, RiskPreview, RiskResponse
from riskboard.risk.scoring import MAX_RATING, MIN_RATING, assess, mitigation_hint
from riskboard.risk.validation import validate_risk_input
from riskboard.store import RiskStore
from riskboard.utils.time import utc_now

EXPORT_COLUMNS = ("ID", "Asset", "Threat", "Likelihood", "Impact", "Score", "Level", "Mitigation Hint")

router = APIRouter(tags=["risks"])


@router.post("/assess-risk", response_model=RiskResponse, status_code=201)
async def assess_risk(
    data: RiskCreate,
    store: RiskStore = Depends(get_store),
):
    """Validate an assessment, derive its score and level, and store it."""
    risk_input = validate_risk_input(data.asset, data.threat, data.likelihood, data.impact)
    risk = await store.create(risk_input)
    return RiskResponse.model_validate(risk)


@router.get("/assess-risk/preview", response_model=RiskPreview)
async def preview_risk(
    likelihood: int = Query(..., ge=MIN_RATING, le=MAX_RATING),
    impact: int = Query(..., ge=MIN_RATING, le=MAX_RATING),
):
    """Score a (likelihood, impact) pair without persisting anything."""
    result = assess(likelihood, impact)
    return RiskPreview(
        likelihood=result.likelihood,
        impact=result.impact,
        score=result.score,
        level=result.level,
        mitigation_hint=result.mitigation_hint,
    )


@router.get("/risks", response_model=list[RiskResponse])
async def list_risks(
    level: str | None = Query(None),
    store: RiskStore = Depends(get_store),
):
    """List risks by score (desc) then creation time (desc), optionally by level."""
    risks = await store.list_risks(level=level)
    return [RiskResponse.model_validate(r) for r in risks]


def render_risks_csv(risks: list[Risk]) -> str:
    """Header row, then one fully quoted row per risk."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(EXPORT_COLUMNS)
    rows = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for risk in risks:
        rows.writerow([
            risk.id,
            risk.asset,
            risk.threat,
            risk.likelihood,
            risk.impact,
            risk.score,
            risk.level,
            mitigation_hint(risk.level),
        ])
    return buffer.getvalue()


@router.get("/risks/export.csv")
async def export_risks(
    level: str | None = Query(None),
    store: RiskStore = Depends(get_store),
):
    """Download the (optionally level-filtered) risk list as CSV."""
    risks = await store.list_risks(level=level)
    filename = f"risks-export-{utc_now().date().isoformat()}.csv"
    return Response(
        content=render_risks_csv(risks),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/risks/{risk_id}", response_model=RiskResponse)
async def get_risk(
    risk_id: int,
    store: RiskStore = Depends(get_store),
):
    risk = await store.get(risk_id)
    return RiskResponse.model_validate(risk)


@router.delete("/risks/{risk_id}", response_model=DeleteResponse)
async def delete_risk(
    risk_id: int,
    store: RiskStore = Depends(get_store),
):
    await store.delete(risk_id)
    return DeleteResponse(message="Risk deleted successfully", id=risk_id)
