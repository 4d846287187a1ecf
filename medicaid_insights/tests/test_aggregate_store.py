"""
Tests for the Aggregate Store: snapshot derivations and the three loaders.

Test Categories:
- TestDerivations: build_snapshot chart-payload derivations
- TestJsonLoader: AggregateSnapshot-shaped JSON files
- TestCsvLoader: per-slice CSV directories read with pandas
- TestPostgresLoader: precomputed tables through a mocked asyncpg pool
- TestStore: source selection and snapshot replacement
"""

import json
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import asyncpg
import pytest

from medicaid_insights.core.config import Settings
from medicaid_insights.models import AggregateSnapshot, ProviderTier, RawAggregates
from medicaid_insights.services.aggregate_store import (
    AggregateStore,
    AggregateStoreError,
    build_snapshot,
    default_provider_tiers,
    fetch_snapshot,
    load_snapshot_csv_dir,
    load_snapshot_json,
)
from medicaid_insights.sql.aggregate_queries import (
    PROVIDER_TIERS_QUERY,
    TOTAL_SPENDING_QUERY,
    YEARLY_QUERY,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=None, aggregate_snapshot_path=None, aggregate_csv_dir=None)


def _write_csv(directory: Path, name: str, content: str) -> None:
    (directory / f"{name}.csv").write_text(content, encoding="utf-8")


# =============================================================================
# Derivations
# =============================================================================


class TestDerivations:

    def test_yearly_growth(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        """100 -> 130 is 30% growth; the first year is 0."""
        snapshot = build_snapshot(raw_aggregates, settings)
        growth = [y.growth for y in snapshot.yearly]
        assert growth == [0, 30], f"Unexpected growth {growth}"

    def test_monthly_beneficiaries_estimated(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        """Missing beneficiaries become round(claims * 0.6) and are flagged."""
        monthly = build_snapshot(raw_aggregates, settings).monthly
        assert monthly[0].beneficiaries == 600
        assert monthly[0].beneficiariesEstimated is True
        # reported counts are kept as-is
        assert monthly[1].beneficiaries == 200
        assert monthly[1].beneficiariesEstimated is False

    def test_seasonal_sums_by_month_number(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        """January 2018 and January 2019 fold into month 01."""
        seasonal = build_snapshot(raw_aggregates, settings).seasonal
        assert [(s.month, s.spending, s.claims) for s in seasonal] == [
            ("01", 25.0, 1500),
            ("02", 12.0, 300),
        ]

    def test_categories_descending(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        """Top-code spending per category, largest first; no category -> Uncategorized."""
        categories = build_snapshot(raw_aggregates, settings).categories
        assert [(c.category, c.spending) for c in categories] == [
            ("Home Care", 700.0),
            ("Dental", 250.0),
            ("Uncategorized", 50.0),
        ]

    def test_concentration_buckets(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        """First 10 of 12 providers at 10 each vs the rest of total spending (yearly sum 230)."""
        snapshot = build_snapshot(raw_aggregates, settings)
        assert snapshot.totalSpending == 230.0
        assert [(c.category, c.spending) for c in snapshot.concentration] == [
            ("Top 10", 100.0),
            ("Others", 130.0),
        ]

    def test_concentration_needs_total(self, settings: Settings) -> None:
        """Without any dataset total there are no concentration buckets."""
        raw = RawAggregates(topProviders=[{"npi": "1", "spending": 10.0}])
        assert build_snapshot(raw, settings).concentration == []

    def test_explicit_total_spending_wins(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        raw = raw_aggregates.model_copy(update={"totalSpending": 1000.0})
        snapshot = build_snapshot(raw, settings)
        assert snapshot.concentration[1].spending == 900.0

    def test_default_provider_tiers(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        """Absent tier table: the fixed estimated distribution with the remainder in >$100K."""
        tiers = build_snapshot(raw_aggregates, settings).providerTiers
        assert [(t.tier, t.count) for t in tiers] == [
            ("<$1K", 200000),
            ("$1K-$10K", 150000),
            ("$10K-$100K", 100000),
            (">$100K", 50000),
        ]
        assert tiers[-1].spending == 230.0 - 5.85e9

    def test_default_provider_tiers_need_total(self) -> None:
        assert default_provider_tiers(None) == []

    def test_provider_tiers_passed_through(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        raw = raw_aggregates.model_copy(update={
            "providerTiers": [ProviderTier(tier="<$1K", count=5, spending=1.0)]
        })
        tiers = build_snapshot(raw, settings).providerTiers
        assert [(t.tier, t.count) for t in tiers] == [("<$1K", 5)]

    def test_cost_per_claim_filled(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        """spending / claims rounded to cents; zero claims stay excluded."""
        cost = build_snapshot(raw_aggregates, settings).costPerClaim
        assert cost[0].costPerClaim == 333.33
        assert cost[1].costPerClaim is None

    def test_top_hcpcs_cost_per_claim(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        top = build_snapshot(raw_aggregates, settings).topHCPCS
        assert top[0].costPerClaim == 100.0
        assert top[1].costPerClaim is None
        assert top[2].costPerClaim is None

    def test_invalid_state_codes_dropped(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        """Military code AE is removed; names and per-capita are filled in."""
        states = build_snapshot(raw_aggregates, settings).topStates
        assert [s.state for s in states] == ["CA", "NY"]
        assert states[0].name == "California"
        assert states[0].perCapita == 2.0
        assert states[1].name == "New York"
        assert states[1].perCapita is None

    def test_per_capita_ranking_truncated(
        self, raw_aggregates: RawAggregates, settings: Settings
    ) -> None:
        assert len(build_snapshot(raw_aggregates, settings).topStatesByPerCapita) == 10

    def test_city_state_name(self, raw_aggregates: RawAggregates, settings: Settings) -> None:
        assert build_snapshot(raw_aggregates, settings).topCities[0].stateName == "New York"

    def test_ratio_is_configurable(self, raw_aggregates: RawAggregates) -> None:
        """BENEFICIARY_CLAIMS_RATIO drives the monthly estimate."""
        settings = Settings(beneficiary_claims_ratio=0.5)
        assert build_snapshot(raw_aggregates, settings).monthly[0].beneficiaries == 500

    def test_empty_raw_aggregates(self, settings: Settings) -> None:
        """Nothing in, an empty (valid) snapshot out."""
        snapshot = build_snapshot(RawAggregates(), settings)
        assert set(snapshot.slice_sizes().values()) == {0}
        assert snapshot.totalSpending is None


# =============================================================================
# JSON Loader
# =============================================================================


class TestJsonLoader:

    def test_load_snapshot(self, tmp_path: Path, full_snapshot: AggregateSnapshot) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text(full_snapshot.model_dump_json(), encoding="utf-8")
        loaded = load_snapshot_json(str(path))
        assert loaded.slice_sizes() == full_snapshot.slice_sizes()
        assert loaded.topStates[1].perCapita == 3000.5

    def test_invalid_record_reports_issue(self, tmp_path: Path) -> None:
        """A yearly row without spending is reported with its slice and row number."""
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"yearly": [{"year": "2018"}]}), encoding="utf-8")
        with pytest.raises(AggregateStoreError) as exc_info:
            load_snapshot_json(str(path))
        issues = exc_info.value.issues
        assert len(issues) == 1
        assert (issues[0].slice, issues[0].field, issues[0].rowNumber) == ("yearly", "spending", 1)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(AggregateStoreError):
            load_snapshot_json(str(tmp_path / "missing.json"))


# =============================================================================
# CSV Loader
# =============================================================================


class TestCsvLoader:

    def test_load_directory(self, tmp_path: Path, settings: Settings) -> None:
        """Slices are parsed, derived, and codes keep their text form."""
        _write_csv(tmp_path, "yearly", "year,spending,claims\n2018,100,10\n2019,130,\n")
        _write_csv(
            tmp_path,
            "topHCPCS",
            "code,spending,claims,category\n0001U,500,5,Lab\nT1019,900,,Home Care\n",
        )
        _write_csv(tmp_path, "topStates", "state,spending,population\nCA,600,300\nAP,10,\n")
        _write_csv(tmp_path, "totals", "totalSpending\n5000\n")

        snapshot = load_snapshot_csv_dir(str(tmp_path), settings)

        assert [y.year for y in snapshot.yearly] == ["2018", "2019"]
        assert snapshot.yearly[1].claims is None
        assert snapshot.yearly[1].growth == 30
        assert snapshot.topHCPCS[0].code == "0001U"
        assert snapshot.topHCPCS[0].costPerClaim == 100.0
        assert snapshot.topHCPCS[1].costPerClaim is None
        assert [s.state for s in snapshot.topStates] == ["CA"]
        assert snapshot.totalSpending == 5000.0

    def test_missing_required_column(self, tmp_path: Path, settings: Settings) -> None:
        """A slice file without a required column is rejected with a column issue."""
        _write_csv(tmp_path, "topHCPCS", "code,claims\nT1019,5\n")
        with pytest.raises(AggregateStoreError) as exc_info:
            load_snapshot_csv_dir(str(tmp_path), settings)
        issues = exc_info.value.issues
        assert [(i.slice, i.field) for i in issues] == [("topHCPCS", "spending")]

    def test_invalid_row(self, tmp_path: Path, settings: Settings) -> None:
        """Rows that fail validation are reported with a 1-based row number."""
        _write_csv(tmp_path, "providerTiers", "tier,count,spending\n<$1K,10,5\n>$100K,-1,9\n")
        with pytest.raises(AggregateStoreError) as exc_info:
            load_snapshot_csv_dir(str(tmp_path), settings)
        issue = exc_info.value.issues[0]
        assert (issue.slice, issue.field, issue.rowNumber) == ("providerTiers", "count", 2)

    def test_missing_directory(self, tmp_path: Path, settings: Settings) -> None:
        with pytest.raises(AggregateStoreError):
            load_snapshot_csv_dir(str(tmp_path / "nope"), settings)


# =============================================================================
# Postgres Loader
# =============================================================================


def _fetch_by_query(rows_by_query: Dict[str, List[Dict[str, Any]]]):
    async def fetch(query: str, *args: Any) -> List[Dict[str, Any]]:
        if query == PROVIDER_TIERS_QUERY:
            raise asyncpg.UndefinedTableError("relation \"agg_provider_tiers\" does not exist")
        return rows_by_query.get(query, [])
    return fetch


class TestPostgresLoader:

    @pytest.mark.asyncio
    async def test_fetch_snapshot(
        self,
        mock_db_pool: AsyncMock,
        yearly_rows: List[Dict[str, Any]],
        settings: Settings,
    ) -> None:
        """Rows from the precomputed tables flow through the same derivations."""
        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.side_effect = _fetch_by_query({
            YEARLY_QUERY: yearly_rows,
            TOTAL_SPENDING_QUERY: [{"totalSpending": 1000.0}],
        })

        snapshot = await fetch_snapshot(mock_db_pool, settings)

        assert [y.growth for y in snapshot.yearly] == [0, 30]
        assert snapshot.totalSpending == 1000.0
        # missing tier table falls back to the estimated distribution
        assert len(snapshot.providerTiers) == 4

    @pytest.mark.asyncio
    async def test_fetch_snapshot_invalid_rows(
        self, mock_db_pool: AsyncMock, settings: Settings
    ) -> None:
        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.side_effect = _fetch_by_query({YEARLY_QUERY: [{"year": "2018"}]})

        with pytest.raises(AggregateStoreError) as exc_info:
            await fetch_snapshot(mock_db_pool, settings)
        assert exc_info.value.issues[0].slice == "yearly"

    @pytest.mark.asyncio
    async def test_query_failure_propagates(
        self, mock_db_pool: AsyncMock, settings: Settings
    ) -> None:
        """Errors other than a missing optional table are raised to the caller."""
        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.side_effect = asyncpg.PostgresError("connection reset")

        with pytest.raises(asyncpg.PostgresError):
            await fetch_snapshot(mock_db_pool, settings)


# =============================================================================
# Store
# =============================================================================


class TestStore:

    def test_empty_by_default(self) -> None:
        store = AggregateStore()
        assert store.source == "empty"
        assert store.get_snapshot() == AggregateSnapshot()

    def test_replace(self, full_snapshot: AggregateSnapshot) -> None:
        store = AggregateStore()
        store.replace(full_snapshot, "json")
        assert store.get_snapshot() is full_snapshot
        assert store.source == "json"

    @pytest.mark.asyncio
    async def test_load_from_json_setting(
        self, tmp_path: Path, full_snapshot: AggregateSnapshot
    ) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text(full_snapshot.model_dump_json(), encoding="utf-8")
        store = AggregateStore()
        await store.load(Settings(database_url=None, aggregate_snapshot_path=str(path)))
        assert store.source == "json"
        assert len(store.get_snapshot().yearly) == 4

    @pytest.mark.asyncio
    async def test_load_without_source(self, settings: Settings) -> None:
        """Nothing configured leaves the store empty."""
        store = AggregateStore()
        await store.load(settings)
        assert store.source == "empty"
