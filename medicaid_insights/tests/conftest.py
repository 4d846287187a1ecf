"""
Pytest Configuration and Shared Fixtures for Medicaid Insights Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async test execution with pytest-asyncio
- Mock asyncpg pool fixtures for testing the Postgres loader without a database
- A full AggregateSnapshot on which every insight rule fires
- Raw upstream aggregates for exercising build_snapshot derivations
- Default engine configurations (OutlierConfig, InsightConfig)
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import pytest

from medicaid_insights.models import (
    AggregateSnapshot,
    CategorySpending,
    CityRecord,
    ClaimsPerBeneficiaryRecord,
    CostPerClaimRecord,
    HcpcsRecord,
    InsightConfig,
    MonthlyRecord,
    OutlierConfig,
    ProviderRecord,
    ProviderTier,
    RawAggregates,
    SeasonalRecord,
    StateRecord,
    YearlyRecord,
)
from medicaid_insights.services.aggregate_store import AggregateStore


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - slow: Marks tests as slow (deselect with -m "not slow")
    - integration: Marks tests that exercise the HTTP layer end to end
    - parity: Marks tests pinning published figures and insight texts
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'integration: marks tests exercising routers and the application wiring'
    )
    config.addinivalue_line(
        'markers',
        'parity: marks tests pinning published figures and insight texts'
    )


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

@pytest.fixture
def mock_db_pool() -> AsyncMock:
    """
    Create a mock asyncpg connection pool.

    pool.acquire() returns an async context manager yielding a mock connection
    whose fetch() returns [] unless a test configures it.

    Usage:
        mock_db_pool.acquire.return_value.__aenter__.return_value.fetch.return_value = [...]
    """
    pool = AsyncMock()

    conn = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])

    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)

    pool.close = AsyncMock(return_value=None)

    return pool


# ============================================================
# CONFIGURATION FIXTURES
# ============================================================

@pytest.fixture
def outlier_config() -> OutlierConfig:
    """Default classifier configuration (threshold 3.0, 6-tier table)."""
    return OutlierConfig()


@pytest.fixture
def insight_config() -> InsightConfig:
    return InsightConfig()


# ============================================================
# SNAPSHOT FIXTURES
# ============================================================

def _seasonal_months() -> List[SeasonalRecord]:
    # Flat 100 per month except a February trough and a December peak
    spending = {"02": 80.0, "12": 130.0}
    return [
        SeasonalRecord(month=f"{m:02d}", spending=spending.get(f"{m:02d}", 100.0), claims=10)
        for m in range(1, 13)
    ]


def _cost_per_claim() -> List[CostPerClaimRecord]:
    values = [100000.0, 5000.0, 1000.0, 500.0, 400.0, 300.0, 200.0, 100.0, 50.0, 50.0]
    return [
        CostPerClaimRecord(
            code=f"J{index:04d}",
            costPerClaim=value,
            definition=f"Drug {index}" if index else "Nusinersen injection",
        )
        for index, value in enumerate(values)
    ]


@pytest.fixture
def full_snapshot() -> AggregateSnapshot:
    """
    A snapshot on which all 14 insight rules emit.

    Figures are chosen so every templated number is easy to verify by hand:
    - yearly 2018..2021 with growth 0/10/5/20
    - categories 600/200/100/100 (top category 60.0%, top 3 90.0%)
    - concentration Top 10 = 300 of 1000 (30.0%)
    - six states with 50/40/30/20/10/5 providers (top 5 = 96.8%)
    - Brooklyn first of five cities with 40 of 100 billion (40.0%)
    """
    return AggregateSnapshot(
        yearly=[
            YearlyRecord(year="2018", spending=100e9, growth=0),
            YearlyRecord(year="2019", spending=110e9, growth=10),
            YearlyRecord(year="2020", spending=115.5e9, growth=5),
            YearlyRecord(year="2021", spending=138.6e9, growth=20),
        ],
        monthly=[
            MonthlyRecord(month="2021-01", spending=10e9, claims=1000),
        ],
        seasonal=_seasonal_months(),
        topHCPCS=[
            HcpcsRecord(code="T1019", spending=900.0, claims=50, category="Home Care",
                        definition="Personal care services, per 15 minutes"),
            HcpcsRecord(code="99213", spending=500.0, claims=400, category="Office Visits",
                        definition="Office visit, established patient"),
            HcpcsRecord(code="D1120", spending=60.0, claims=30, category="Dental",
                        definition="Prophylaxis, child"),
            HcpcsRecord(code="D0120", spending=40.0, claims=25, category="Dental",
                        definition="Periodic oral evaluation"),
            HcpcsRecord(code="D1206", spending=20.0, claims=20, category="Dental",
                        definition="Fluoride varnish"),
        ],
        costPerClaim=_cost_per_claim(),
        claimsPerBene=[
            ClaimsPerBeneficiaryRecord(code="90999", claimsPerBene=48.26, definition="Dialysis procedure"),
            ClaimsPerBeneficiaryRecord(code="H2016", claimsPerBene=30.0),
            ClaimsPerBeneficiaryRecord(code="T2021", claimsPerBene=12.5),
        ],
        categories=[
            CategorySpending(category="Home Care", spending=600.0),
            CategorySpending(category="Dental", spending=200.0),
            CategorySpending(category="Behavioral Health", spending=100.0),
            CategorySpending(category="Other", spending=100.0),
        ],
        concentration=[
            CategorySpending(category="Top 10", spending=300.0),
            CategorySpending(category="Others", spending=700.0),
        ],
        providerTiers=[
            ProviderTier(tier="<$1K", count=200000, spending=1e8),
            ProviderTier(tier="$1K-$10K", count=150000, spending=7.5e8),
            ProviderTier(tier="$10K-$100K", count=100000, spending=5e9),
            ProviderTier(tier=">$100K", count=50000, spending=1e11),
        ],
        topStates=[
            StateRecord(state="CA", spending=600.0, providers=50, perCapita=2000.0),
            StateRecord(state="NY", spending=500.0, providers=40, perCapita=3000.5),
            StateRecord(state="TX", spending=400.0, providers=30, perCapita=1000.0),
            StateRecord(state="FL", spending=300.0, providers=20, perCapita=1500.0),
            StateRecord(state="PA", spending=200.0, providers=10, perCapita=2500.0),
            StateRecord(state="OH", spending=100.0, providers=5, perCapita=1200.0),
        ],
        topCities=[
            CityRecord(city="BROOKLYN", state="NY", spending=40e9),
            CityRecord(city="MANHATTAN", state="NY", spending=20e9),
            CityRecord(city="BRONX", state="NY", spending=15e9),
            CityRecord(city="LOS ANGELES", state="CA", spending=15e9),
            CityRecord(city="CHICAGO", state="IL", spending=10e9),
        ],
        totalSpending=464.1e9,
    )


@pytest.fixture
def outlier_population_snapshot() -> AggregateSnapshot:
    """
    Full populations with one extreme provider and one extreme procedure code.

    29 providers at 1,000 plus one at 1,000,000; the lone large value sits
    at z = sqrt(29) ~ 5.39 above the population mean.
    """
    providers = [
        ProviderRecord(npi=f"10000000{index:02d}", spending=1000.0, claims=10, beneficiaries=5)
        for index in range(29)
    ]
    providers.append(ProviderRecord(npi="1999999999", spending=1000000.0, claims=100, beneficiaries=50))

    codes = [
        HcpcsRecord(code=f"C{index:03d}", spending=1000.0, claims=100, beneficiaries=50)
        for index in range(29)
    ]
    codes.append(HcpcsRecord(code="J2326", spending=1000000.0, claims=100, beneficiaries=50,
                             definition="Nusinersen injection"))
    codes.append(HcpcsRecord(code="X0000", spending=500.0, claims=0, beneficiaries=None))

    return AggregateSnapshot(providerPopulation=providers, hcpcsPopulation=codes)


@pytest.fixture
def raw_aggregates() -> RawAggregates:
    """Upstream tables before derivation, including one invalid military state code."""
    return RawAggregates(
        yearly=[
            YearlyRecord(year="2018", spending=100.0),
            YearlyRecord(year="2019", spending=130.0),
        ],
        monthly=[
            MonthlyRecord(month="2018-01", spending=10.0, claims=1000),
            MonthlyRecord(month="2019-01", spending=15.0, claims=500, beneficiaries=200),
            MonthlyRecord(month="2019-02", spending=12.0, claims=300),
        ],
        topHCPCS=[
            HcpcsRecord(code="T1019", spending=700.0, claims=7, category="Home Care"),
            HcpcsRecord(code="D1120", spending=100.0, claims=0, category="Dental"),
            HcpcsRecord(code="Z9999", spending=50.0),
            HcpcsRecord(code="D0120", spending=150.0, claims=3, category="Dental"),
        ],
        topProviders=[
            ProviderRecord(npi=f"12345678{index:02d}", spending=10.0) for index in range(12)
        ],
        costPerClaim=[
            CostPerClaimRecord(code="J0001", spending=1000.0, claims=3),
            CostPerClaimRecord(code="J0002", spending=1000.0, claims=0),
        ],
        topStates=[
            StateRecord(state="CA", spending=600.0, population=300),
            StateRecord(state="AE", spending=50.0),
            StateRecord(state="NY", spending=500.0, name="New York"),
        ],
        topStatesByPerCapita=[
            StateRecord(state=code, spending=100.0, population=10)
            for code in ["AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID"]
        ],
        topCities=[CityRecord(city="BROOKLYN", state="NY", spending=40.0)],
    )


@pytest.fixture
def store(full_snapshot: AggregateSnapshot) -> AggregateStore:
    return AggregateStore(full_snapshot, source="fixture")


@pytest.fixture
def yearly_rows() -> List[Dict[str, Any]]:
    """Rows as the Postgres loader receives them (asyncpg records behave like mappings)."""
    return [
        {"year": "2018", "spending": 100.0, "claims": 10, "beneficiaries": None},
        {"year": "2019", "spending": 130.0, "claims": 12, "beneficiaries": None},
    ]
