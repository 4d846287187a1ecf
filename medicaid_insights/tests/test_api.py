"""
Tests for the FastAPI routers and application wiring.

Route functions are called directly with their dependencies passed in, the
same objects FastAPI would inject.
"""

import pytest
from fastapi import HTTPException

from medicaid_insights import __version__
from medicaid_insights.api.charts import get_charts
from medicaid_insights.api.federal import get_federal, get_fmap_quartiles
from medicaid_insights.api.insights import generate_insights_for_snapshot, get_insights
from medicaid_insights.api.outliers import detect_outliers_endpoint, get_outliers
from medicaid_insights.core.config import Settings
from medicaid_insights.core.dependencies import (
    get_aggregate_store,
    get_outlier_config,
    set_aggregate_store,
)
from medicaid_insights.models import (
    AggregateSnapshot,
    DetectOutliersRequest,
    InsightConfig,
    OutlierCandidate,
    OutlierConfig,
    OutlierPopulation,
    OutlierSource,
)
from medicaid_insights.services.aggregate_store import AggregateStore


@pytest.mark.integration
class TestRouters:

    @pytest.mark.asyncio
    async def test_charts_returns_snapshot(self, store: AggregateStore) -> None:
        """The chart payload is the stored snapshot unchanged."""
        result = await get_charts(store)
        assert result is store.get_snapshot()

    @pytest.mark.asyncio
    async def test_insights_for_store(
        self, store: AggregateStore, insight_config: InsightConfig
    ) -> None:
        response = await get_insights(store, insight_config)
        assert response.total == 14
        assert response.rulesEvaluated == 14

    @pytest.mark.asyncio
    async def test_insights_for_empty_store(self, insight_config: InsightConfig) -> None:
        """An empty store answers with no insights, not an error."""
        response = await get_insights(AggregateStore(), insight_config)
        assert response.insights == []
        assert set(response.categoryCounts.values()) == {0}

    @pytest.mark.asyncio
    async def test_insights_for_posted_snapshot(
        self, full_snapshot: AggregateSnapshot, insight_config: InsightConfig
    ) -> None:
        partial = full_snapshot.model_copy(update={"topCities": []})
        response = await generate_insights_for_snapshot(partial, insight_config)
        assert response.total == 13

    @pytest.mark.asyncio
    async def test_curated_outliers(
        self, store: AggregateStore, outlier_config: OutlierConfig
    ) -> None:
        report = await get_outliers(store, outlier_config, OutlierSource.CURATED)
        assert report.source == OutlierSource.CURATED
        assert len(report.providers) == 8

    @pytest.mark.asyncio
    async def test_computed_outliers(
        self, outlier_population_snapshot: AggregateSnapshot, outlier_config: OutlierConfig
    ) -> None:
        store = AggregateStore(outlier_population_snapshot, source="fixture")
        report = await get_outliers(store, outlier_config, OutlierSource.COMPUTED)
        assert report.source == OutlierSource.COMPUTED
        assert [e.key for e in report.providers] == ["1999999999"]

    @pytest.mark.asyncio
    async def test_detect_with_threshold_override(self, outlier_config: OutlierConfig) -> None:
        """Lowering the threshold flags the 500 in [500, 50, 45]."""
        request = DetectOutliersRequest(
            population=OutlierPopulation.COST_PER_CLAIM,
            candidates=[
                OutlierCandidate(key="A", value=500),
                OutlierCandidate(key="B", value=50),
                OutlierCandidate(key="C", value=45),
            ],
            threshold=1.0,
        )
        result = await detect_outliers_endpoint(request, outlier_config)
        assert [e.key for e in result] == ["A"]
        # the injected config is left untouched
        assert outlier_config.threshold == 3.0

    @pytest.mark.asyncio
    async def test_detect_empty_population(self, outlier_config: OutlierConfig) -> None:
        request = DetectOutliersRequest(population=OutlierPopulation.PROVIDER_SPENDING)
        assert await detect_outliers_endpoint(request, outlier_config) == []

    @pytest.mark.asyncio
    async def test_detect_rejects_non_positive_threshold(self, outlier_config: OutlierConfig) -> None:
        request = DetectOutliersRequest(population=OutlierPopulation.COST_PER_CLAIM, threshold=-1.0)
        with pytest.raises(HTTPException) as exc_info:
            await detect_outliers_endpoint(request, outlier_config)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_federal(self, store: AggregateStore, outlier_config: OutlierConfig) -> None:
        response = await get_federal(store, outlier_config)
        assert response.summary.totalDistricts == 436
        assert len(response.topDistricts) == 25

    @pytest.mark.asyncio
    async def test_fmap_quartiles(self, store: AggregateStore) -> None:
        quartiles = await get_fmap_quartiles(store)
        assert sum(q.states for q in quartiles) == 51


class TestDependencies:

    def test_store_singleton(self, store: AggregateStore) -> None:
        """The store set at startup is the one every request receives."""
        set_aggregate_store(store)
        try:
            assert get_aggregate_store() is store
        finally:
            set_aggregate_store(None)

    def test_empty_store_created_lazily(self) -> None:
        set_aggregate_store(None)
        assert get_aggregate_store().source == "empty"
        set_aggregate_store(None)

    def test_outlier_config_from_settings(self) -> None:
        """OUTLIER_Z_THRESHOLD flows into the classifier configuration."""
        config = get_outlier_config(Settings(outlier_z_threshold=2.5))
        assert config.threshold == 2.5


@pytest.mark.integration
class TestApplication:

    @pytest.mark.asyncio
    async def test_health_check(self) -> None:
        from medicaid_insights.main import health_check

        assert await health_check() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_root(self) -> None:
        from medicaid_insights.main import root

        body = await root()
        assert body["version"] == __version__
        assert body["docs"] == "/docs"

    def test_routes_registered(self) -> None:
        from medicaid_insights.main import app

        paths = {route.path for route in app.routes}
        for path in ("/charts", "/insights", "/outliers", "/outliers/detect", "/federal", "/federal/quartiles"):
            assert path in paths, f"Missing route {path}"
