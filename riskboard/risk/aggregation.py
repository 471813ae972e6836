"""Dashboard aggregates computed from risk records on demand.

Records are any objects exposing ``asset``, ``likelihood``, ``impact``,
``score`` and ``level`` attributes — ORM rows in production, plain
dataclasses in tests.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, Protocol

from riskboard.risk.scoring import (
    HIGH_SEVERITY_LEVELS,
    MAX_RATING,
    MIN_RATING,
    classify_level,
    compute_score,
)


class RiskRecord(Protocol):
    asset: str
    likelihood: int
    impact: int
    score: int
    level: str


@dataclass
class RiskStats:
    total_risks: int = 0
    high_critical_count: int = 0
    average_score: float = 0
    max_score: int = 0
    min_score: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HeatmapCell:
    likelihood: int
    impact: int
    count: int = 0
    assets: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return heatmap_key(self.likelihood, self.impact)

    @property
    def score(self) -> int:
        return compute_score(self.likelihood, self.impact)

    @property
    def level(self) -> str:
        # Always from the cell coordinates, never from a record in it.
        return classify_level(self.score)

    def summary(self) -> dict:
        return {"count": self.count, "assets": list(self.assets), "level": self.level}

    def to_dict(self) -> dict:
        return {
            "likelihood": self.likelihood,
            "impact": self.impact,
            "score": self.score,
            "level": self.level,
            "count": self.count,
            "assets": list(self.assets),
        }


def heatmap_key(likelihood: int, impact: int) -> str:
    return f"{likelihood}-{impact}"


def compute_stats(records: Iterable[RiskRecord]) -> RiskStats:
    """Summary statistics; all-zero for an empty collection."""
    scores: list[int] = []
    high_critical = 0
    for record in records:
        scores.append(int(record.score))
        if record.level in HIGH_SEVERITY_LEVELS:
            high_critical += 1

    if not scores:
        return RiskStats()

    return RiskStats(
        total_risks=len(scores),
        high_critical_count=high_critical,
        average_score=round(sum(scores) / len(scores), 2),
        max_score=max(scores),
        min_score=min(scores),
    )


def compute_heatmap(records: Iterable[RiskRecord]) -> dict[str, HeatmapCell]:
    """Group records by exact (likelihood, impact); unpopulated cells are omitted.

    Assets are listed per record in input order, so repeated asset names
    appear once per record.
    """
    cells: dict[tuple[int, int], HeatmapCell] = {}
    for record in records:
        coords = (int(record.likelihood), int(record.impact))
        cell = cells.get(coords)
        if cell is None:
            cell = cells[coords] = HeatmapCell(likelihood=coords[0], impact=coords[1])
        cell.count += 1
        cell.assets.append(record.asset)

    return {cells[coords].key: cells[coords] for coords in sorted(cells)}


def build_heatmap_grid(records: Iterable[RiskRecord]) -> list[HeatmapCell]:
    """Full 5×5 grid in likelihood-major order, empty cells included."""
    populated = compute_heatmap(records)
    grid: list[HeatmapCell] = []
    for likelihood in range(MIN_RATING, MAX_RATING + 1):
        for impact in range(MIN_RATING, MAX_RATING + 1):
            key = heatmap_key(likelihood, impact)
            grid.append(populated.get(key) or HeatmapCell(likelihood=likelihood, impact=impact))
    return grid
