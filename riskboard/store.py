"""Risk store — persistence of risk records and the aggregate queries over them."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from riskboard.errors import NotFoundError, StorageError
from riskboard.models.risk import Risk
from riskboard.risk.aggregation import (
    HeatmapCell,
    RiskStats,
    build_heatmap_grid,
    compute_heatmap,
    compute_stats,
)
from riskboard.risk.scoring import assess
from riskboard.risk.validation import RiskInput

logger = logging.getLogger("riskboard.store")

RISK_NOT_FOUND = "Risk not found"

# SQLite INTEGER primary keys are signed 64-bit.
MAX_RISK_ID = 2**63 - 1


class RiskStore:
    """Reads and writes the ``risks`` table through one async session.

    Database failures are rolled back, logged, and re-raised as
    ``StorageError`` with a message that is safe to return to clients.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def _storage_errors(self, message: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception(message)
            raise StorageError(message) from exc

    async def create(self, data: RiskInput) -> Risk:
        result = assess(data.likelihood, data.impact)
        risk = Risk(
            asset=data.asset,
            threat=data.threat,
            likelihood=result.likelihood,
            impact=result.impact,
            score=result.score,
            level=result.level,
        )
        async with self._storage_errors("Failed to insert risk"):
            self.session.add(risk)
            await self.session.commit()
            await self.session.refresh(risk)
        logger.info("risk %s recorded: %s / %s -> %s (%s)", risk.id, risk.asset, risk.threat, risk.score, risk.level)
        return risk

    async def create_many(self, items: list[RiskInput]) -> list[Risk]:
        """Insert several records in a single transaction."""
        risks = []
        for data in items:
            result = assess(data.likelihood, data.impact)
            risks.append(
                Risk(
                    asset=data.asset,
                    threat=data.threat,
                    likelihood=result.likelihood,
                    impact=result.impact,
                    score=result.score,
                    level=result.level,
                )
            )
        async with self._storage_errors("Failed to insert risks"):
            self.session.add_all(risks)
            await self.session.commit()
        return risks

    async def list_risks(self, level: str | None = None) -> list[Risk]:
        """All risks, highest score first, newest first within a score."""
        query = select(Risk).order_by(desc(Risk.score), desc(Risk.created_at), desc(Risk.id))
        if level:
            query = query.where(Risk.level == level)

        async with self._storage_errors("Failed to fetch risks"):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def get(self, risk_id: int) -> Risk:
        if not 0 < risk_id <= MAX_RISK_ID:
            raise NotFoundError(RISK_NOT_FOUND)
        async with self._storage_errors("Failed to fetch risk"):
            result = await self.session.execute(select(Risk).where(Risk.id == risk_id))
            risk = result.scalar_one_or_none()
        if risk is None:
            raise NotFoundError(RISK_NOT_FOUND)
        return risk

    async def delete(self, risk_id: int) -> None:
        if not 0 < risk_id <= MAX_RISK_ID:
            raise NotFoundError(RISK_NOT_FOUND)
        async with self._storage_errors("Failed to delete risk"):
            result = await self.session.execute(delete(Risk).where(Risk.id == risk_id))
            if result.rowcount == 0:
                await self.session.rollback()
                raise NotFoundError(RISK_NOT_FOUND)
            await self.session.commit()
        logger.info("risk %s deleted", risk_id)

    async def count(self) -> int:
        async with self._storage_errors("Failed to count risks"):
            total = (await self.session.execute(select(func.count()).select_from(Risk))).scalar()
        return int(total or 0)

    async def _all_in_insertion_order(self, message: str) -> list[Risk]:
        async with self._storage_errors(message):
            result = await self.session.execute(select(Risk).order_by(Risk.id))
            return list(result.scalars().all())

    async def stats(self) -> RiskStats:
        return compute_stats(await self._all_in_insertion_order("Failed to fetch statistics"))

    async def heatmap(self) -> dict[str, HeatmapCell]:
        return compute_heatmap(await self._all_in_insertion_order("Failed to fetch heatmap data"))

    async def heatmap_grid(self) -> list[HeatmapCell]:
        return build_heatmap_grid(await self._all_in_insertion_order("Failed to fetch heatmap data"))
