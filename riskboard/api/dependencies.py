"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from riskboard.database import get_session
from riskboard.store import RiskStore


async def get_store(session: AsyncSession = Depends(get_session)) -> RiskStore:
    return RiskStore(session)
