"""
Pydantic models for the Medicaid Insights backend.

This module provides type-safe data validation and serialization for all API contracts,
including the tagged aggregate record variants that make up an Aggregate Store snapshot,
the outlier classifier output (ZScoreResult, Analogy, OutlierEntry), the insight
synthesizer output (Insight, InsightsResponse), federal funding responses, and the
engine configuration tables (SeverityTable, AnalogyCatalog, OutlierConfig, InsightConfig).

Record shapes:
- Every aggregate record carries a `kind` literal so mixed collections stay self-describing.
- Optional measures default to None. A missing measure is never read as zero.
- Records are frozen; the engine only ever reads them.

All models use Pydantic v2 syntax with proper field validation and examples.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from medicaid_insights.data.analogies import ANALOGY_PHRASES
from medicaid_insights.models.enums import (
    AggregateSlice,
    ExpansionStatus,
    InsightCategory,
    OutlierPopulation,
    OutlierSource,
    Severity,
)


_RECORD_CONFIG = ConfigDict(
    frozen=True,
    str_strip_whitespace=True,
    coerce_numbers_to_str=True,
)


# =============================================================================
# Aggregate Record Variants
# =============================================================================


class YearlyRecord(BaseModel):
    """
    Yearly spending totals.

    `growth` is the whole-percent change versus the previous year, filled in
    by the Aggregate Store when the snapshot is built.
    """
    model_config = ConfigDict(
        frozen=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "kind": "yearly",
                "year": "2021",
                "spending": 165432198765.12,
                "claims": 1543219876,
                "beneficiaries": 89765432,
                "growth": 12,
            }
        },
    )

    kind: Literal["yearly"] = "yearly"
    year: str = Field(..., description="Calendar year, e.g. '2021'")
    spending: float = Field(..., description="Total paid amount for the year")
    claims: Optional[int] = Field(default=None, description="Total claim count")
    beneficiaries: Optional[int] = Field(default=None, description="Total beneficiaries")
    growth: Optional[float] = Field(
        default=None,
        description="Whole-percent spending change vs previous year",
    )


class MonthlyRecord(BaseModel):
    """Monthly spending totals keyed by 'YYYY-MM'."""
    model_config = _RECORD_CONFIG

    kind: Literal["monthly"] = "monthly"
    month: str = Field(..., description="Month in YYYY-MM form")
    spending: float
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    beneficiariesEstimated: bool = Field(
        default=False,
        description="True when beneficiaries were approximated from claims",
    )


class SeasonalRecord(BaseModel):
    """Spending summed across all years for one calendar month ('01'..'12')."""
    model_config = _RECORD_CONFIG

    kind: Literal["seasonal"] = "seasonal"
    month: str = Field(..., description="Two-digit month number")
    spending: float
    claims: Optional[int] = None


class ProviderRecord(BaseModel):
    """Billing provider (NPI) totals."""
    model_config = _RECORD_CONFIG

    kind: Literal["provider"] = "provider"
    npi: str = Field(..., min_length=1, description="National Provider Identifier")
    spending: float
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    name: Optional[str] = None
    specialty: Optional[str] = None
    state: Optional[str] = None


class HcpcsRecord(BaseModel):
    """Procedure code totals, used for the top-K rankings and the full code population."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "kind": "hcpcs",
                "code": "T1019",
                "spending": 122739547514.26,
                "claims": 1100608370,
                "beneficiaries": 55702849,
                "costPerClaim": 111.52,
                "definition": "Personal care services, per 15 minutes",
                "category": "Home Care",
            }
        },
    )

    kind: Literal["hcpcs"] = "hcpcs"
    code: str = Field(..., min_length=1, description="HCPCS procedure code")
    spending: float
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    providers: Optional[int] = None
    costPerClaim: Optional[float] = None
    definition: Optional[str] = None
    category: Optional[str] = None


class CostPerClaimRecord(BaseModel):
    """Procedure code ranked by spending / claims."""
    model_config = _RECORD_CONFIG

    kind: Literal["cost_per_claim"] = "cost_per_claim"
    code: str = Field(..., min_length=1)
    spending: Optional[float] = None
    claims: Optional[int] = None
    costPerClaim: Optional[float] = Field(
        default=None,
        description="Spending per claim; None when claims is missing or zero",
    )
    definition: Optional[str] = None
    category: Optional[str] = None


class CostPerBeneficiaryRecord(BaseModel):
    """Procedure code ranked by spending / beneficiaries."""
    model_config = _RECORD_CONFIG

    kind: Literal["cost_per_beneficiary"] = "cost_per_beneficiary"
    code: str = Field(..., min_length=1)
    spending: Optional[float] = None
    beneficiaries: Optional[int] = None
    costPerBeneficiary: Optional[float] = None
    definition: Optional[str] = None
    category: Optional[str] = None


class ClaimsPerBeneficiaryRecord(BaseModel):
    """Procedure code ranked by claims / beneficiaries (repeat procedures)."""
    model_config = _RECORD_CONFIG

    kind: Literal["claims_per_beneficiary"] = "claims_per_beneficiary"
    code: str = Field(..., min_length=1)
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    claimsPerBene: Optional[float] = None
    definition: Optional[str] = None
    category: Optional[str] = None


class CategorySpending(BaseModel):
    """Spending bucket: a service category, or a provider concentration bucket."""
    model_config = _RECORD_CONFIG

    kind: Literal["category"] = "category"
    category: str
    spending: float


class ProviderTier(BaseModel):
    """Provider count and spending within an annual billing band."""
    model_config = _RECORD_CONFIG

    kind: Literal["provider_tier"] = "provider_tier"
    tier: str = Field(..., description="Band label, e.g. '<$1K' or '>$100K'")
    count: int = Field(..., ge=0)
    spending: float


class StateRecord(BaseModel):
    """State rollup with optional Census population and per-capita spending."""
    model_config = _RECORD_CONFIG

    kind: Literal["state"] = "state"
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter state code")
    name: Optional[str] = None
    spending: float
    claims: Optional[int] = None
    providers: Optional[int] = None
    population: Optional[int] = None
    perCapita: Optional[float] = None


class CityRecord(BaseModel):
    """City rollup keyed by city name plus state code."""
    model_config = _RECORD_CONFIG

    kind: Literal["city"] = "city"
    city: str
    state: str
    stateName: Optional[str] = None
    spending: float
    claims: Optional[int] = None
    providers: Optional[int] = None


class FmapRecord(BaseModel):
    """Federal Medical Assistance Percentage for one jurisdiction."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "kind": "fmap",
                "stateCode": "MS",
                "stateName": "Mississippi",
                "fy2024": 78.82,
                "fy2023": 78.03,
                "fy2022": 77.77,
                "expansionStatus": "N",
            }
        },
    )

    kind: Literal["fmap"] = "fmap"
    stateCode: str
    stateName: str
    fy2024: float = Field(..., ge=0, le=100)
    fy2023: float = Field(..., ge=0, le=100)
    fy2022: float = Field(..., ge=0, le=100)
    expansionStatus: ExpansionStatus


# =============================================================================
# Outlier Classifier Models
# =============================================================================


class ZScoreResult(BaseModel):
    """
    A value positioned against its population.

    `mean` and `standardDeviation` are None for curated entries, whose
    z-score was computed upstream over the full dataset.
    """
    model_config = ConfigDict(frozen=True)

    value: float
    mean: Optional[float] = None
    standardDeviation: Optional[float] = None
    zScore: float


class Analogy(BaseModel):
    """Human-readable rarity attached to an outlier."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "probability": "1 in 741",
                "analogy": "Flipping heads 9 times in a row",
                "severity": "high",
            }
        },
    )

    probability: str
    analogy: str
    severity: Severity


class OutlierCandidate(BaseModel):
    """
    One member of a candidate population.

    `value` is the measure being tested (spending, cost per claim, ...).
    Candidates whose ratio was excluded never become OutlierCandidates.
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="NPI, HCPCS code or district code")
    value: float = Field(..., allow_inf_nan=False)
    label: Optional[str] = None
    spending: Optional[float] = None
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    providers: Optional[int] = None


class SeverityTier(BaseModel):
    """One row of the severity breakpoint table."""
    model_config = ConfigDict(frozen=True)

    lowerBound: float
    level: int = Field(..., ge=1)
    label: Severity


DEFAULT_SEVERITY_BREAKPOINTS: List[float] = [3.0, 3.5, 4.0, 5.0, 6.0, 10.0]

# 3.0-5.0 is "high" (3.5-4.0 being the transitional tier), 5.0-10.0
# "extreme", 10.0 and above "astronomical".
DEFAULT_SEVERITY_LABELS: List[Severity] = [
    Severity.HIGH,
    Severity.HIGH,
    Severity.HIGH,
    Severity.EXTREME,
    Severity.EXTREME,
    Severity.ASTRONOMICAL,
]


def _default_severity_tiers() -> List[SeverityTier]:
    return [
        SeverityTier(lowerBound=bound, level=index + 1, label=label)
        for index, (bound, label) in enumerate(
            zip(DEFAULT_SEVERITY_BREAKPOINTS, DEFAULT_SEVERITY_LABELS)
        )
    ]


class SeverityTable(BaseModel):
    """
    Ordered severity breakpoints; the highest tier whose lower bound is
    at or below the z-score wins.
    """
    model_config = ConfigDict(frozen=True)

    tiers: List[SeverityTier] = Field(default_factory=_default_severity_tiers, min_length=1)

    @model_validator(mode="after")
    def _check_monotonic(self) -> "SeverityTable":
        for index, tier in enumerate(self.tiers):
            if tier.level != index + 1:
                raise ValueError(f"tier levels must run 1..N, got {tier.level} at position {index}")
            if index == 0:
                continue
            previous = self.tiers[index - 1]
            if tier.lowerBound <= previous.lowerBound:
                raise ValueError(
                    f"tier lower bounds must be strictly increasing "
                    f"({previous.lowerBound} then {tier.lowerBound})"
                )
            if tier.label.rank < previous.label.rank:
                raise ValueError(
                    f"tier labels must not decrease in severity "
                    f"({previous.label.value} then {tier.label.value})"
                )
        return self

    def classify(self, z_score: float) -> Optional[SeverityTier]:
        """Return the tier for `z_score`, or None below the first breakpoint."""
        matched = None
        for tier in self.tiers:
            if z_score >= tier.lowerBound:
                matched = tier
            else:
                break
        return matched


class AnalogyPhrase(BaseModel):
    """A rarity metaphor used from `minLog10Odds` up to the next phrase's key."""
    model_config = ConfigDict(frozen=True)

    minLog10Odds: float = Field(..., ge=0)
    analogy: str = Field(..., min_length=1)


def _default_analogy_phrases() -> List[AnalogyPhrase]:
    return [
        AnalogyPhrase(minLog10Odds=key, analogy=phrase)
        for key, phrase in ANALOGY_PHRASES
    ]


class AnalogyCatalog(BaseModel):
    """Lookup table from order-of-magnitude odds to plain-language phrase."""
    model_config = ConfigDict(frozen=True)

    phrases: List[AnalogyPhrase] = Field(default_factory=_default_analogy_phrases, min_length=1)

    @model_validator(mode="after")
    def _check_sorted(self) -> "AnalogyCatalog":
        keys = [phrase.minLog10Odds for phrase in self.phrases]
        if any(later <= earlier for earlier, later in zip(keys, keys[1:])):
            raise ValueError("analogy phrases must be in strictly increasing minLog10Odds order")
        return self

    def lookup(self, log10_odds: float) -> str:
        """Nearest phrase at or below `log10_odds` (the first phrase for anything smaller)."""
        selected = self.phrases[0].analogy
        for phrase in self.phrases:
            if log10_odds >= phrase.minLog10Odds:
                selected = phrase.analogy
            else:
                break
        return selected


class OutlierConfig(BaseModel):
    """Classifier configuration: threshold plus the severity and analogy tables."""
    model_config = ConfigDict(frozen=True)

    threshold: float = Field(default=3.0, description="z-score must be strictly greater")
    severityTable: SeverityTable = Field(default_factory=SeverityTable)
    analogyCatalog: AnalogyCatalog = Field(default_factory=AnalogyCatalog)


class CuratedOutlier(BaseModel):
    """Editorially selected outlier with its z-score and hand-written analogy."""
    model_config = ConfigDict(frozen=True)

    key: str
    spending: float
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    providers: Optional[int] = None
    spendingZScore: float
    definition: Optional[str] = None
    analogy: Analogy


class OutlierEntry(BaseModel):
    """
    A flagged record plus its z-score and rarity analogy.

    Build entries through `from_computed_z_score` (runtime detection) or
    `from_curated_record` (editorial catalog). Both produce the same shape;
    `source` records which one was used.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "key": "T1019",
                "label": "Personal care services, per 15 minutes",
                "population": "hcpcs_spending",
                "source": "curated",
                "spending": 122739547514.26,
                "claims": 1100608370,
                "beneficiaries": 55702849,
                "providers": None,
                "zScore": {
                    "value": 122739547514.26,
                    "mean": None,
                    "standardDeviation": None,
                    "zScore": 12.84,
                },
                "analogy": {
                    "probability": "1 in 10^37",
                    "analogy": "Every person on Earth guessing the same random 20-digit number simultaneously",
                    "severity": "astronomical",
                },
                "tier": 6,
            }
        },
    )

    key: str
    label: Optional[str] = None
    population: OutlierPopulation
    source: OutlierSource
    spending: Optional[float] = None
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    providers: Optional[int] = None
    zScore: ZScoreResult
    analogy: Analogy
    tier: Optional[int] = Field(
        default=None,
        description="1-based severity tier level from the configured table",
    )

    @classmethod
    def from_computed_z_score(
        cls,
        candidate: OutlierCandidate,
        population: OutlierPopulation,
        result: ZScoreResult,
        analogy: Analogy,
        tier: Optional[SeverityTier],
    ) -> "OutlierEntry":
        return cls(
            key=candidate.key,
            label=candidate.label,
            population=population,
            source=OutlierSource.COMPUTED,
            spending=candidate.spending,
            claims=candidate.claims,
            beneficiaries=candidate.beneficiaries,
            providers=candidate.providers,
            zScore=result,
            analogy=analogy,
            tier=tier.level if tier else None,
        )

    @classmethod
    def from_curated_record(
        cls,
        record: CuratedOutlier,
        population: OutlierPopulation,
        severity_table: SeverityTable,
        value: float,
    ) -> "OutlierEntry":
        """
        `value` is the measure the population is scored on (the ratio for
        cost per claim and claims per beneficiary, spending otherwise), the
        same quantity the computed path places in `zScore.value`.
        """
        # Curated severity labels are editorial; only the tier level comes from the table.
        tier = severity_table.classify(record.spendingZScore)
        return cls(
            key=record.key,
            label=record.definition,
            population=population,
            source=OutlierSource.CURATED,
            spending=record.spending,
            claims=record.claims,
            beneficiaries=record.beneficiaries,
            providers=record.providers,
            zScore=ZScoreResult(value=value, zScore=record.spendingZScore),
            analogy=record.analogy,
            tier=tier.level if tier else None,
        )


class OutlierMetadata(BaseModel):
    """Provenance attached to an outlier report."""
    computedAt: Optional[str] = None
    methodology: str
    source: str
    threshold: float
    totalProviders: Optional[int] = None
    totalHCPCSCodes: Optional[int] = None
    totalSpending: Optional[float] = None


class OutlierReport(BaseModel):
    """Outliers per population, as served by GET /outliers."""
    source: OutlierSource
    providers: List[OutlierEntry] = Field(default_factory=list)
    hcpcs: List[OutlierEntry] = Field(default_factory=list)
    costPerClaim: List[OutlierEntry] = Field(default_factory=list)
    repeatProcedures: List[OutlierEntry] = Field(default_factory=list)
    metadata: OutlierMetadata


class DetectOutliersRequest(BaseModel):
    """Request body for POST /outliers/detect."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "population": "cost_per_claim",
                "candidates": [
                    {"key": "A", "value": 500},
                    {"key": "B", "value": 50},
                    {"key": "C", "value": 45},
                ],
            }
        }
    )

    population: OutlierPopulation
    candidates: List[OutlierCandidate] = Field(default_factory=list)
    threshold: Optional[float] = Field(
        default=None,
        description="Override of the configured outlier threshold",
    )


# =============================================================================
# Insight Synthesizer Models
# =============================================================================


class InsightConfig(BaseModel):
    """
    Thresholds and labels used by the insight rules.

    Defaults reproduce the published analysis page.
    """
    model_config = ConfigDict(frozen=True)

    # Trend rules
    minYears: int = 2
    inflationCeilingPct: float = 5.0
    pandemicYear: str = "2020"
    reboundYear: str = "2021"
    pandemicReboundPct: float = 15.0
    seasonalMinMonths: int = 12
    seasonalVariancePct: float = 20.0

    # Concentration rules
    categoryTopN: int = 3
    categoryConcentrationPct: float = 70.0
    top10BucketLabel: str = "Top 10"
    othersBucketLabel: str = "Others"
    top10SharePct: float = 50.0
    smallTierLabel: str = "<$1K"
    largeTierLabel: str = ">$100K"

    # Geographic rules
    topStatesN: int = 5
    minStates: int = 5
    designatedCity: str = "BROOKLYN"
    designatedCityName: str = "Brooklyn"
    designatedCityContext: str = (
        "NYC boroughs (Brooklyn, Manhattan, Bronx) combined represent massive "
        "urban Medicaid infrastructure."
    )
    cityMinEntries: int = 5
    cityTopN: int = 10

    # Efficiency and anomaly rules
    focusCategory: str = "Dental"
    focusCategoryMinEntries: int = 3
    focusCategoryImplication: str = (
        "Dental is often underutilized in Medicaid — this spending pattern "
        "warrants access analysis."
    )
    repeatTopN: int = 5
    unitCostMinEntries: int = 10
    unitCostTopN: int = 3


class Insight(BaseModel):
    """A templated finding produced by one insight rule."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "Multi-Year Spending Trajectory",
                "finding": "Total Medicaid spending grew 30.0% from 2018 to 2019, averaging 30.0% annually. Peak growth occurred in 2019 at 30%.",
                "implication": "Growth exceeds typical healthcare inflation (3-5%), suggesting expanding coverage or rising utilization.",
                "category": "trend",
            }
        },
    )

    title: str
    finding: str
    implication: str
    category: InsightCategory


class InsightsResponse(BaseModel):
    """Insights plus the per-category counts shown in the executive summary."""
    insights: List[Insight] = Field(default_factory=list)
    total: int = 0
    rulesEvaluated: int = 0
    categoryCounts: Dict[str, int] = Field(default_factory=dict)


# =============================================================================
# Federal Funding Models
# =============================================================================


class DistrictRecord(BaseModel):
    """
    Congressional district spending.

    `zScore` is rounded to 2 decimals and is None for districts without
    spending or when the district population has no variance.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["district"] = "district"
    districtCode: str = Field(..., pattern=r"^[A-Z]{2}-\d{2}$")
    stateCode: str
    districtNumber: str
    spending: float
    claims: Optional[int] = None
    beneficiaries: Optional[int] = None
    providers: Optional[int] = None
    zScore: Optional[float] = None


class FmapExtreme(BaseModel):
    """Highest or lowest FMAP; `state` is 'Multiple' when jurisdictions tie."""
    state: str
    rate: float
    states: List[str] = Field(default_factory=list)


class FederalSummary(BaseModel):
    totalStates: int
    expansionStates: int
    nonExpansionStates: int
    avgFMAP: Optional[float] = None
    highestFMAP: Optional[FmapExtreme] = None
    lowestFMAP: Optional[FmapExtreme] = None
    totalDistricts: int


class ExpansionAnalysis(BaseModel):
    expansionCount: int
    nonExpansionCount: int
    avgExpansionFMAP: Optional[float] = None
    avgNonExpansionFMAP: Optional[float] = None


class FederalMetadata(BaseModel):
    computedAt: str
    source: str
    methodology: str


class FmapQuartile(BaseModel):
    """States grouped by FY2024 FMAP quartile (1 = lowest matching rate)."""
    quartile: int = Field(..., ge=1, le=4)
    states: int
    avgFmap: float
    avgPerCapita: Optional[float] = Field(
        default=None,
        description="Mean per-capita spending of member states that report it",
    )


class FederalResponse(BaseModel):
    """Payload served by GET /federal."""
    summary: FederalSummary
    statesByFMAP: List[FmapRecord]
    topDistricts: List[DistrictRecord]
    districtOutliers: List[OutlierEntry]
    expansionAnalysis: ExpansionAnalysis
    allDistricts: List[DistrictRecord]
    metadata: FederalMetadata


# =============================================================================
# Aggregate Store Models
# =============================================================================


class SnapshotIssue(BaseModel):
    """A problem found while loading one slice of a snapshot."""
    slice: str
    field: str
    message: str
    rowNumber: Optional[int] = None


class RawAggregates(BaseModel):
    """
    Upstream aggregate tables before chart-payload derivation.

    `build_snapshot` turns this into an AggregateSnapshot.
    """
    yearly: List[YearlyRecord] = Field(default_factory=list)
    monthly: List[MonthlyRecord] = Field(default_factory=list)
    topHCPCS: List[HcpcsRecord] = Field(default_factory=list)
    topByClaims: List[HcpcsRecord] = Field(default_factory=list)
    topProviders: List[ProviderRecord] = Field(default_factory=list)
    costPerClaim: List[CostPerClaimRecord] = Field(default_factory=list)
    costPerBeneficiary: List[CostPerBeneficiaryRecord] = Field(default_factory=list)
    claimsPerBene: List[ClaimsPerBeneficiaryRecord] = Field(default_factory=list)
    providerTiers: Optional[List[ProviderTier]] = None
    topStates: List[StateRecord] = Field(default_factory=list)
    topStatesByPerCapita: List[StateRecord] = Field(default_factory=list)
    topCities: List[CityRecord] = Field(default_factory=list)
    providerPopulation: List[ProviderRecord] = Field(default_factory=list)
    hcpcsPopulation: List[HcpcsRecord] = Field(default_factory=list)
    totalSpending: Optional[float] = None


class AggregateSnapshot(BaseModel):
    """
    Immutable, named slices of precomputed aggregates.

    Ranked slices keep their upstream order. Every slice defaults to empty,
    so a partial snapshot is valid and simply leaves some rules silent.
    """
    model_config = ConfigDict(frozen=True)

    yearly: List[YearlyRecord] = Field(default_factory=list)
    monthly: List[MonthlyRecord] = Field(default_factory=list)
    seasonal: List[SeasonalRecord] = Field(default_factory=list)
    topHCPCS: List[HcpcsRecord] = Field(default_factory=list)
    topByClaims: List[HcpcsRecord] = Field(default_factory=list)
    topProviders: List[ProviderRecord] = Field(default_factory=list)
    costPerClaim: List[CostPerClaimRecord] = Field(default_factory=list)
    costPerBeneficiary: List[CostPerBeneficiaryRecord] = Field(default_factory=list)
    claimsPerBene: List[ClaimsPerBeneficiaryRecord] = Field(default_factory=list)
    categories: List[CategorySpending] = Field(default_factory=list)
    concentration: List[CategorySpending] = Field(default_factory=list)
    providerTiers: List[ProviderTier] = Field(default_factory=list)
    topStates: List[StateRecord] = Field(default_factory=list)
    topStatesByPerCapita: List[StateRecord] = Field(default_factory=list)
    topCities: List[CityRecord] = Field(default_factory=list)
    providerPopulation: List[ProviderRecord] = Field(default_factory=list)
    hcpcsPopulation: List[HcpcsRecord] = Field(default_factory=list)
    totalSpending: Optional[float] = None

    def slice_size(self, name: AggregateSlice) -> int:
        return len(getattr(self, name.value))

    def slice_sizes(self) -> Dict[str, int]:
        return {name.value: self.slice_size(name) for name in AggregateSlice}


__all__: Tuple[str, ...] = (
    "YearlyRecord",
    "MonthlyRecord",
    "SeasonalRecord",
    "ProviderRecord",
    "HcpcsRecord",
    "CostPerClaimRecord",
    "CostPerBeneficiaryRecord",
    "ClaimsPerBeneficiaryRecord",
    "CategorySpending",
    "ProviderTier",
    "StateRecord",
    "CityRecord",
    "FmapRecord",
    "DistrictRecord",
    "ZScoreResult",
    "Analogy",
    "OutlierCandidate",
    "SeverityTier",
    "SeverityTable",
    "AnalogyPhrase",
    "AnalogyCatalog",
    "OutlierConfig",
    "CuratedOutlier",
    "OutlierEntry",
    "OutlierMetadata",
    "OutlierReport",
    "DetectOutliersRequest",
    "InsightConfig",
    "Insight",
    "InsightsResponse",
    "FmapExtreme",
    "FederalSummary",
    "ExpansionAnalysis",
    "FederalMetadata",
    "FmapQuartile",
    "FederalResponse",
    "SnapshotIssue",
    "RawAggregates",
    "AggregateSnapshot",
    "DEFAULT_SEVERITY_BREAKPOINTS",
    "DEFAULT_SEVERITY_LABELS",
)
