"""Dashboard aggregate endpoints — summary stats and the likelihood × impact heatmap."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskboard.api.dependencies import get_store
from riskboard.models.risk import (
    HeatmapCellResponse,
    HeatmapGridCell,
    HeatmapGridResponse,
    RiskStatsResponse,
)
from riskboard.store import RiskStore

router = APIRouter(tags=["dashboard"])


@router.get("/stats", response_model=RiskStatsResponse)
async def risk_stats(store: RiskStore = Depends(get_store)):
    """KPI cards data; all zeros when no risks are recorded."""
    stats = await store.stats()
    return RiskStatsResponse(**stats.to_dict())


@router.get("/heatmap", response_model=dict[str, HeatmapCellResponse])
async def risk_heatmap(store: RiskStore = Depends(get_store)):
    """Populated cells only, keyed ``"<likelihood>-<impact>"``."""
    cells = await store.heatmap()
    return {key: HeatmapCellResponse(**cell.summary()) for key, cell in cells.items()}


@router.get("/heatmap/grid", response_model=HeatmapGridResponse)
async def risk_heatmap_grid(store: RiskStore = Depends(get_store)):
    """All 25 cells in likelihood-major order, empty cells included."""
    grid = await store.heatmap_grid()
    return HeatmapGridResponse(cells=[HeatmapGridCell(**cell.to_dict()) for cell in grid])
