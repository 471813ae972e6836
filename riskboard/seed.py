"""Default risk register inserted into an empty database at startup."""

from __future__ import annotations

import logging

from riskboard.risk.validation import RiskInput
from riskboard.store import RiskStore

logger = logging.getLogger("riskboard.seed")

DEFAULT_RISKS: tuple[RiskInput, ...] = (
    RiskInput(asset="Customer Database", threat="Unauthorized Access", likelihood=5, impact=5),
    RiskInput(asset="Web Application", threat="SQL Injection", likelihood=4, impact=5),
    RiskInput(asset="Cloud Storage", threat="Misconfiguration", likelihood=3, impact=4),
    RiskInput(asset="Internal Network", threat="Ransomware", likelihood=4, impact=4),
    RiskInput(asset="Backup Server", threat="Backup Failure", likelihood=2, impact=4),
    RiskInput(asset="Email System", threat="Phishing Attack", likelihood=5, impact=3),
    RiskInput(asset="HR System", threat="Insider Data Leak", likelihood=2, impact=5),
    RiskInput(asset="API Gateway", threat="DDoS Attack", likelihood=3, impact=4),
)


async def seed_default_risks(store: RiskStore) -> int:
    """Insert ``DEFAULT_RISKS`` when the table is empty; return how many were added."""
    existing = await store.count()
    if existing > 0:
        logger.info("Default risks already exist (%d rows). Skipping seed.", existing)
        return 0

    created = await store.create_many(list(DEFAULT_RISKS))
    logger.info("Seeded %d default risks", len(created))
    return len(created)
