"""
Aggregate Store - read-only, in-memory snapshot of precomputed Medicaid aggregates.

All heavy aggregation happens upstream. This module only loads the precomputed
tables, applies the chart-payload derivations below, and holds the resulting
immutable AggregateSnapshot for the outlier classifier and insight synthesizer.

Derivations (build_snapshot):
1. Yearly growth: whole-percent change vs previous year, rounded half up
   (0 for the first year or when previous spending is not positive)
2. Monthly beneficiaries: estimated as claims * BENEFICIARY_CLAIMS_RATIO when the
   upstream table has none (flagged beneficiariesEstimated=True)
3. Seasonal: monthly spending/claims summed by month number '01'..'12'
4. Categories: top-by-spending procedure codes summed per category, descending
5. Concentration: 'Top 10' (first 10 providers) vs 'Others' (total - Top 10)
6. Provider tiers: passed through, or the fixed estimated distribution
7. Ratios: cost per claim, cost per beneficiary and claims per beneficiary filled
   from their measures where missing (excluded when the denominator is not positive)
8. Geography: states restricted to the 56 valid codes, per-capita ranking cut to
   10 states, cities cut to 50

Sources (first configured wins):
- PostgreSQL precomputed tables via asyncpg (DATABASE_URL)
- JSON file in AggregateSnapshot shape (AGGREGATE_SNAPSHOT_PATH)
- Directory of per-slice CSV files read with pandas (AGGREGATE_CSV_DIR)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

import asyncpg
import pandas as pd
from pydantic import BaseModel, ValidationError

from medicaid_insights.core.config import Settings, get_settings
from medicaid_insights.core.database import execute_query
from medicaid_insights.data.states import VALID_STATE_CODES, state_name
from medicaid_insights.models import (
    AggregateSnapshot,
    CategorySpending,
    CityRecord,
    ClaimsPerBeneficiaryRecord,
    CostPerBeneficiaryRecord,
    CostPerClaimRecord,
    HcpcsRecord,
    MonthlyRecord,
    ProviderRecord,
    ProviderTier,
    RawAggregates,
    SeasonalRecord,
    SnapshotIssue,
    StateRecord,
    YearlyRecord,
)
from medicaid_insights.services.statistics import growth_percent, ratio, round_half_up
from medicaid_insights.sql.aggregate_queries import SLICE_QUERIES, TOTAL_SPENDING_QUERY


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

RAW_SLICE_MODELS: Dict[str, Type[BaseModel]] = {
    "yearly": YearlyRecord,
    "monthly": MonthlyRecord,
    "topHCPCS": HcpcsRecord,
    "topByClaims": HcpcsRecord,
    "topProviders": ProviderRecord,
    "costPerClaim": CostPerClaimRecord,
    "costPerBeneficiary": CostPerBeneficiaryRecord,
    "claimsPerBene": ClaimsPerBeneficiaryRecord,
    "providerTiers": ProviderTier,
    "topStates": StateRecord,
    "topStatesByPerCapita": StateRecord,
    "topCities": CityRecord,
    "providerPopulation": ProviderRecord,
    "hcpcsPopulation": HcpcsRecord,
}

REQUIRED_COLUMNS: Dict[str, List[str]] = {
    "yearly": ["year", "spending"],
    "monthly": ["month", "spending"],
    "topHCPCS": ["code", "spending"],
    "topByClaims": ["code", "spending", "claims"],
    "topProviders": ["npi", "spending"],
    "costPerClaim": ["code"],
    "costPerBeneficiary": ["code"],
    "claimsPerBene": ["code"],
    "providerTiers": ["tier", "count", "spending"],
    "topStates": ["state", "spending"],
    "topStatesByPerCapita": ["state", "spending"],
    "topCities": ["city", "state", "spending"],
    "providerPopulation": ["npi", "spending"],
    "hcpcsPopulation": ["code", "spending"],
}

# Identifier columns are read as text so codes like '0001U' and NPIs keep their form
TEXT_COLUMNS: List[str] = [
    "year", "month", "npi", "code", "state", "city", "tier",
    "name", "specialty", "definition", "category", "stateName",
]

# Estimated distribution used when no provider tier table is available:
# (label, provider count, spending). The largest band takes the remainder.
DEFAULT_PROVIDER_TIERS: List[Tuple[str, int, float]] = [
    ("<$1K", 200000, 100000000.0),
    ("$1K-$10K", 150000, 750000000.0),
    ("$10K-$100K", 100000, 5000000000.0),
]
LARGEST_PROVIDER_TIER: Tuple[str, int] = (">$100K", 50000)

CONCENTRATION_TOP_N: int = 10
TOP_10_LABEL: str = "Top 10"
OTHERS_LABEL: str = "Others"
PER_CAPITA_LIMIT: int = 10
CITY_LIMIT: int = 50
UNCATEGORIZED: str = "Uncategorized"


class AggregateStoreError(Exception):
    """A snapshot source could not be read or failed validation."""

    def __init__(self, message: str, issues: Optional[List[SnapshotIssue]] = None):
        super().__init__(message)
        self.issues: List[SnapshotIssue] = issues or []


# =============================================================================
# Derivations
# =============================================================================


def derive_yearly(yearly: List[YearlyRecord]) -> List[YearlyRecord]:
    derived = []
    for index, year in enumerate(yearly):
        previous = yearly[index - 1].spending if index > 0 else None
        derived.append(year.model_copy(update={"growth": growth_percent(previous, year.spending)}))
    return derived


def derive_monthly(monthly: List[MonthlyRecord], beneficiary_claims_ratio: float) -> List[MonthlyRecord]:
    """Fill missing monthly beneficiaries with the claims-based approximation."""
    derived = []
    for month in monthly:
        if month.beneficiaries is None and month.claims is not None:
            month = month.model_copy(update={
                "beneficiaries": round_half_up(month.claims * beneficiary_claims_ratio),
                "beneficiariesEstimated": True,
            })
        derived.append(month)
    return derived


def derive_seasonal(monthly: List[MonthlyRecord]) -> List[SeasonalRecord]:
    """
    Sum monthly spending and claims by calendar month.

    Claims are summed only when every contributing month reports them.
    """
    spending: Dict[str, float] = {}
    claims: Dict[str, Optional[int]] = {}
    for month in monthly:
        number = month.month[5:7]
        if len(number) != 2 or not number.isdigit():
            logger.warning(f"Skipping monthly row with unexpected month '{month.month}'")
            continue
        spending[number] = spending.get(number, 0.0) + month.spending
        if number not in claims:
            claims[number] = month.claims
        elif claims[number] is not None and month.claims is not None:
            claims[number] += month.claims
        else:
            claims[number] = None

    return [
        SeasonalRecord(month=number, spending=spending[number], claims=claims[number])
        for number in sorted(spending)
    ]


def derive_categories(top_hcpcs: List[HcpcsRecord]) -> List[CategorySpending]:
    totals: Dict[str, float] = {}
    for record in top_hcpcs:
        category = record.category or UNCATEGORIZED
        totals[category] = totals.get(category, 0.0) + record.spending
    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return [CategorySpending(category=category, spending=total) for category, total in ranked]


def derive_concentration(
    top_providers: List[ProviderRecord],
    total_spending: Optional[float],
) -> List[CategorySpending]:
    """
    Two buckets: the first 10 providers vs all remaining spending.

    Empty when the dataset total is unknown or smaller than the top-10 sum.
    """
    if not top_providers or total_spending is None:
        return []
    top10 = sum(p.spending for p in top_providers[:CONCENTRATION_TOP_N])
    if total_spending < top10:
        logger.warning(
            f"Total spending {total_spending} is below the top-10 provider sum {top10}; "
            f"skipping concentration buckets"
        )
        return []
    return [
        CategorySpending(category=TOP_10_LABEL, spending=top10),
        CategorySpending(category=OTHERS_LABEL, spending=total_spending - top10),
    ]


def default_provider_tiers(total_spending: Optional[float]) -> List[ProviderTier]:
    """The fixed estimated billing-band distribution; empty without a dataset total."""
    if total_spending is None:
        return []
    tiers = [
        ProviderTier(tier=label, count=count, spending=spending)
        for label, count, spending in DEFAULT_PROVIDER_TIERS
    ]
    label, count = LARGEST_PROVIDER_TIER
    remainder = total_spending - sum(spending for _, _, spending in DEFAULT_PROVIDER_TIERS)
    tiers.append(ProviderTier(tier=label, count=count, spending=remainder))
    return tiers


def _rounded_ratio(numerator, denominator) -> Optional[float]:
    value = ratio(numerator, denominator)
    return round(value, 2) if value is not None else None


def fill_hcpcs_ratios(records: List[HcpcsRecord]) -> List[HcpcsRecord]:
    return [
        r if r.costPerClaim is not None
        else r.model_copy(update={"costPerClaim": _rounded_ratio(r.spending, r.claims)})
        for r in records
    ]


def fill_cost_per_claim(records: List[CostPerClaimRecord]) -> List[CostPerClaimRecord]:
    return [
        r if r.costPerClaim is not None
        else r.model_copy(update={"costPerClaim": _rounded_ratio(r.spending, r.claims)})
        for r in records
    ]


def fill_cost_per_beneficiary(records: List[CostPerBeneficiaryRecord]) -> List[CostPerBeneficiaryRecord]:
    return [
        r if r.costPerBeneficiary is not None
        else r.model_copy(update={"costPerBeneficiary": _rounded_ratio(r.spending, r.beneficiaries)})
        for r in records
    ]


def fill_claims_per_beneficiary(records: List[ClaimsPerBeneficiaryRecord]) -> List[ClaimsPerBeneficiaryRecord]:
    return [
        r if r.claimsPerBene is not None
        else r.model_copy(update={"claimsPerBene": _rounded_ratio(r.claims, r.beneficiaries)})
        for r in records
    ]


def filter_states(states: List[StateRecord], limit: Optional[int] = None) -> List[StateRecord]:
    """Drop unknown state codes (military APO/FPO, typos), fill names and per-capita."""
    valid = []
    dropped = []
    for record in states:
        if record.state not in VALID_STATE_CODES:
            dropped.append(record.state)
            continue
        update: Dict[str, Any] = {}
        if record.name is None:
            update["name"] = state_name(record.state)
        if record.perCapita is None:
            update["perCapita"] = _rounded_ratio(record.spending, record.population)
        valid.append(record.model_copy(update=update) if update else record)
    if dropped:
        logger.warning(f"Dropped {len(dropped)} rows with invalid state codes: {sorted(set(dropped))}")
    return valid[:limit] if limit is not None else valid


def filter_cities(cities: List[CityRecord]) -> List[CityRecord]:
    return [
        c if c.stateName is not None else c.model_copy(update={"stateName": state_name(c.state)})
        for c in cities[:CITY_LIMIT]
    ]


def build_snapshot(raw: RawAggregates, settings: Optional[Settings] = None) -> AggregateSnapshot:
    """
    Apply the chart-payload derivations to raw upstream aggregates.

    The dataset total is taken from the raw tables, falling back to the sum of
    yearly spending when no total was supplied.

    Args:
        raw: Raw aggregate slices
        settings: Source of BENEFICIARY_CLAIMS_RATIO (defaults to get_settings())

    Returns:
        Immutable AggregateSnapshot
    """
    settings = settings or get_settings()

    total_spending = raw.totalSpending
    if total_spending is None and raw.yearly:
        total_spending = sum(y.spending for y in raw.yearly)

    monthly = derive_monthly(raw.monthly, settings.beneficiary_claims_ratio)
    top_hcpcs = fill_hcpcs_ratios(raw.topHCPCS)

    return AggregateSnapshot(
        yearly=derive_yearly(raw.yearly),
        monthly=monthly,
        seasonal=derive_seasonal(monthly),
        topHCPCS=top_hcpcs,
        topByClaims=fill_hcpcs_ratios(raw.topByClaims),
        topProviders=raw.topProviders,
        costPerClaim=fill_cost_per_claim(raw.costPerClaim),
        costPerBeneficiary=fill_cost_per_beneficiary(raw.costPerBeneficiary),
        claimsPerBene=fill_claims_per_beneficiary(raw.claimsPerBene),
        categories=derive_categories(top_hcpcs),
        concentration=derive_concentration(raw.topProviders, total_spending),
        providerTiers=(
            raw.providerTiers if raw.providerTiers else default_provider_tiers(total_spending)
        ),
        topStates=filter_states(raw.topStates),
        topStatesByPerCapita=filter_states(raw.topStatesByPerCapita, PER_CAPITA_LIMIT),
        topCities=filter_cities(raw.topCities),
        providerPopulation=raw.providerPopulation,
        hcpcsPopulation=raw.hcpcsPopulation,
        totalSpending=total_spending,
    )


# =============================================================================
# Validation Helpers
# =============================================================================


def _issues_from_validation(
    exc: ValidationError,
    slice_name: Optional[str] = None,
    row_number: Optional[int] = None,
) -> List[SnapshotIssue]:
    issues = []
    for error in exc.errors():
        loc = error.get("loc", ())
        if slice_name is None and loc:
            # Whole-snapshot validation: loc is (slice, row index, field)
            issue_slice = str(loc[0])
            issue_row = loc[1] + 1 if len(loc) > 2 and isinstance(loc[1], int) else None
        else:
            issue_slice = slice_name or "snapshot"
            issue_row = row_number
        issues.append(SnapshotIssue(
            slice=issue_slice,
            field=str(loc[-1]) if loc else "record",
            message=error.get("msg", "invalid value"),
            rowNumber=issue_row,
        ))
    return issues


def validate_columns(df: pd.DataFrame, slice_name: str) -> List[SnapshotIssue]:
    """
    Validate that all required columns for a slice are present.

    Args:
        df: The pandas DataFrame to validate
        slice_name: Raw slice name (CSV file stem)

    Returns:
        List of SnapshotIssue objects for any missing columns
    """
    issues: List[SnapshotIssue] = []
    columns = set(df.columns)
    for col in REQUIRED_COLUMNS.get(slice_name, []):
        if col not in columns:
            issues.append(SnapshotIssue(
                slice=slice_name,
                field=col,
                message=f"Required column '{col}' is missing for slice {slice_name}",
            ))
    return issues


def records_from_rows(
    rows: Iterable[Dict[str, Any]],
    slice_name: str,
) -> Tuple[List[BaseModel], List[SnapshotIssue]]:
    """Validate raw rows into the slice's record type, collecting per-row issues."""
    model = RAW_SLICE_MODELS[slice_name]
    records: List[BaseModel] = []
    issues: List[SnapshotIssue] = []
    for index, row in enumerate(rows):
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            issues.extend(_issues_from_validation(e, slice_name, index + 1))
    return records, issues


# =============================================================================
# Loaders
# =============================================================================


def load_snapshot_json(path: str) -> AggregateSnapshot:
    """
    Load a JSON file already in AggregateSnapshot shape.

    Raises:
        AggregateStoreError: If the file cannot be read or fails validation
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise AggregateStoreError(
            f"Cannot read snapshot file {path}: {e}",
            [SnapshotIssue(slice="file", field="path", message=str(e))],
        ) from e

    try:
        snapshot = AggregateSnapshot.model_validate_json(text)
    except ValidationError as e:
        issues = _issues_from_validation(e)
        raise AggregateStoreError(
            f"Snapshot file {path} failed validation with {len(issues)} issues", issues
        ) from e

    logger.info(f"Loaded snapshot from {path}: {snapshot.slice_sizes()}")
    return snapshot


def _frame_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as dicts with NaN turned into None."""
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_snapshot_csv_dir(path: str, settings: Optional[Settings] = None) -> AggregateSnapshot:
    """
    Load per-slice CSV files (`yearly.csv`, `topHCPCS.csv`, ...) and build a snapshot.

    Missing files leave their slice empty. An optional `totals.csv` with a
    `totalSpending` column supplies the dataset total.

    Raises:
        AggregateStoreError: If the directory is missing or any slice fails
            column or row validation
    """
    directory = Path(path)
    if not directory.is_dir():
        raise AggregateStoreError(
            f"CSV directory {path} does not exist",
            [SnapshotIssue(slice="file", field="path", message="not a directory")],
        )

    slices: Dict[str, List[BaseModel]] = {}
    issues: List[SnapshotIssue] = []

    for slice_name in RAW_SLICE_MODELS:
        csv_path = directory / f"{slice_name}.csv"
        if not csv_path.exists():
            continue
        try:
            df = pd.read_csv(csv_path, dtype={col: str for col in TEXT_COLUMNS})
        except Exception as e:
            issues.append(SnapshotIssue(
                slice=slice_name, field="file", message=f"Failed to parse CSV file: {str(e)}"
            ))
            continue

        column_issues = validate_columns(df, slice_name)
        if column_issues:
            issues.extend(column_issues)
            continue

        records, row_issues = records_from_rows(_frame_rows(df), slice_name)
        issues.extend(row_issues)
        slices[slice_name] = records
        logger.info(f"Parsed {slice_name}.csv with {len(df)} rows")

    total_spending = None
    totals_path = directory / "totals.csv"
    if totals_path.exists():
        totals = pd.read_csv(totals_path)
        if "totalSpending" in totals.columns and not totals.empty:
            total_spending = float(totals["totalSpending"].iloc[0])

    if issues:
        raise AggregateStoreError(
            f"CSV directory {path} failed validation with {len(issues)} issues", issues
        )

    return build_snapshot(RawAggregates(**slices, totalSpending=total_spending), settings)


async def fetch_snapshot(pool: Optional[asyncpg.Pool] = None, settings: Optional[Settings] = None) -> AggregateSnapshot:
    """
    Read every slice from the precomputed tables and build a snapshot.

    The provider tier and totals tables are optional.

    Raises:
        AggregateStoreError: If rows fail validation
        asyncpg.PostgresError: If a required table cannot be read
    """
    slices: Dict[str, List[BaseModel]] = {}
    issues: List[SnapshotIssue] = []

    for slice_name, query in SLICE_QUERIES.items():
        try:
            rows = await execute_query(query, pool=pool)
        except asyncpg.UndefinedTableError:
            if slice_name != "providerTiers":
                raise
            logger.info("No provider tier table; using the estimated distribution")
            continue
        records, row_issues = records_from_rows((dict(row) for row in rows), slice_name)
        issues.extend(row_issues)
        slices[slice_name] = records
        logger.info(f"Fetched {len(records)} {slice_name} rows")

    total_spending = None
    try:
        total_rows = await execute_query(TOTAL_SPENDING_QUERY, pool=pool)
        if total_rows and total_rows[0]["totalSpending"] is not None:
            total_spending = float(total_rows[0]["totalSpending"])
    except asyncpg.UndefinedTableError:
        logger.info("No totals table; total spending derived from yearly rows")

    if issues:
        raise AggregateStoreError(
            f"Aggregate tables failed validation with {len(issues)} issues", issues
        )

    return build_snapshot(RawAggregates(**slices, totalSpending=total_spending), settings)


# =============================================================================
# Store
# =============================================================================


class AggregateStore:
    """
    Holder for the current snapshot.

    The snapshot is immutable; `replace` swaps in a whole new one, so readers
    always see a complete snapshot.
    """

    def __init__(self, snapshot: Optional[AggregateSnapshot] = None, source: str = "empty"):
        self._snapshot = snapshot or AggregateSnapshot()
        self.source = source

    def get_snapshot(self) -> AggregateSnapshot:
        return self._snapshot

    def replace(self, snapshot: AggregateSnapshot, source: str) -> None:
        self._snapshot = snapshot
        self.source = source
        logger.info(f"Aggregate Store now serving snapshot from {source}")

    async def load(self, settings: Settings, pool: Optional[asyncpg.Pool] = None) -> None:
        """
        Load from the first configured source: database, JSON file, CSV directory.

        Leaves the store empty (every rule silent) when nothing is configured.
        """
        if settings.database_url:
            self.replace(await fetch_snapshot(pool, settings), "database")
        elif settings.aggregate_snapshot_path:
            self.replace(load_snapshot_json(settings.aggregate_snapshot_path), "json")
        elif settings.aggregate_csv_dir:
            self.replace(load_snapshot_csv_dir(settings.aggregate_csv_dir, settings), "csv")
        else:
            logger.warning("No aggregate source configured; serving an empty snapshot")
