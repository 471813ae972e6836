"""Risk record model — one assessed (asset, threat) pair with its derived score."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, computed_field
from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from riskboard.database import Base
from riskboard.risk.scoring import mitigation_hint


class Risk(Base):
    __tablename__ = "risks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset: Mapped[str] = mapped_column(Text)
    threat: Mapped[str] = mapped_column(Text)
    likelihood: Mapped[int] = mapped_column(Integer)
    impact: Mapped[int] = mapped_column(Integer)
    score: Mapped[int] = mapped_column(Integer, index=True)
    level: Mapped[str] = mapped_column(String(20), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now()
    )


class RiskCreate(BaseModel):
    # Rules and error messages live in riskboard.risk.validation.
    asset: Any = None
    threat: Any = None
    likelihood: Any = None
    impact: Any = None


class RiskResponse(BaseModel):
    id: int
    asset: str
    threat: str
    likelihood: int
    impact: int
    score: int
    level: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mitigation_hint(self) -> str:
        return mitigation_hint(self.level)


class RiskPreview(BaseModel):
    likelihood: int
    impact: int
    score: int
    level: str
    mitigation_hint: str


class RiskStatsResponse(BaseModel):
    total_risks: int
    high_critical_count: int
    average_score: float
    max_score: int
    min_score: int


class HeatmapCellResponse(BaseModel):
    count: int
    assets: list[str]
    level: str


class HeatmapGridCell(BaseModel):
    likelihood: int
    impact: int
    score: int
    level: str
    count: int
    assets: list[str]


class HeatmapGridResponse(BaseModel):
    cells: list[HeatmapGridCell]


class DeleteResponse(BaseModel):
    message: str
    id: int
