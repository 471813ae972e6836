"""Tests for the risk store and default seeding."""

import pytest

from riskboard.errors import NotFoundError, StorageError
from riskboard.risk.validation import RiskInput
from riskboard.seed import DEFAULT_RISKS, seed_default_risks
from riskboard.store import RiskStore


def _input(asset: str, likelihood: int, impact: int, threat: str = "Threat") -> RiskInput:
    return RiskInput(asset=asset, threat=threat, likelihood=likelihood, impact=impact)


class TestRiskStore:
    @pytest.mark.asyncio
    async def test_create_derives_score_and_level(self, store: RiskStore):
        risk = await store.create(_input("Web App", 4, 5))
        assert risk.id is not None
        assert risk.score == 20
        assert risk.level == "Critical"
        assert risk.created_at is not None

        fetched = await store.get(risk.id)
        assert fetched.asset == "Web App"
        assert fetched.score == 20

    @pytest.mark.asyncio
    async def test_ids_are_increasing(self, store: RiskStore):
        first = await store.create(_input("A", 1, 1))
        second = await store.create(_input("B", 1, 1))
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_list_orders_by_score_then_newest(self, store: RiskStore):
        older = await store.create(_input("Older", 2, 3))
        newer = await store.create(_input("Newer", 3, 2))
        top = await store.create(_input("Top", 5, 5))

        risks = await store.list_risks()
        assert [r.id for r in risks] == [top.id, newer.id, older.id]

    @pytest.mark.asyncio
    async def test_list_filters_by_level(self, store: RiskStore):
        await store.create(_input("Low", 1, 2))
        await store.create(_input("Critical", 5, 4))

        critical = await store.list_risks(level="Critical")
        assert [r.asset for r in critical] == ["Critical"]
        assert await store.list_risks(level="Nonexistent") == []

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, store: RiskStore):
        with pytest.raises(NotFoundError):
            await store.get(999)

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, store: RiskStore):
        risk = await store.create(_input("Doomed", 3, 3))
        await store.delete(risk.id)
        assert await store.count() == 0
        with pytest.raises(NotFoundError):
            await store.get(risk.id)

    @pytest.mark.asyncio
    async def test_delete_missing_leaves_store_untouched(self, store: RiskStore):
        await store.create(_input("Keep", 2, 2))
        with pytest.raises(NotFoundError):
            await store.delete(12345)
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_ids_outside_integer_range_are_not_found(self, store: RiskStore):
        with pytest.raises(NotFoundError):
            await store.get(2**63)
        with pytest.raises(NotFoundError):
            await store.delete(2**64)
        with pytest.raises(NotFoundError):
            await store.get(0)

    @pytest.mark.asyncio
    async def test_aggregates_use_stored_records(self, store: RiskStore):
        await store.create(_input("A", 5, 5))
        await store.create(_input("B", 5, 5))
        await store.create(_input("C", 1, 1))

        stats = await store.stats()
        assert stats.total_risks == 3
        assert stats.high_critical_count == 2
        assert stats.min_score == 1

        heatmap = await store.heatmap()
        assert heatmap["5-5"].summary() == {"count": 2, "assets": ["A", "B"], "level": "Critical"}
        assert len(await store.heatmap_grid()) == 25

    @pytest.mark.asyncio
    async def test_database_failure_becomes_storage_error(self, database):
        await database.drop_schema()
        async with database.sessionmaker() as session:
            store = RiskStore(session)
            with pytest.raises(StorageError) as exc:
                await store.list_risks()
        assert exc.value.message == "Failed to fetch risks"
        assert exc.value.status_code == 500


class TestSeeding:
    @pytest.mark.asyncio
    async def test_seeds_empty_table(self, store: RiskStore):
        inserted = await seed_default_risks(store)
        assert inserted == len(DEFAULT_RISKS) == 8
        assert await store.count() == 8

        top = (await store.list_risks())[0]
        assert top.asset == "Customer Database"
        assert top.level == "Critical"

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, store: RiskStore):
        await seed_default_risks(store)
        assert await seed_default_risks(store) == 0
        assert await store.count() == 8

    @pytest.mark.asyncio
    async def test_existing_data_blocks_seeding(self, store: RiskStore):
        await store.create(_input("Mine", 2, 2))
        assert await seed_default_risks(store) == 0
        assert await store.count() == 1
