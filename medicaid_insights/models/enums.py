"""
Enumeration definitions for the Medicaid Insights backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization and
deserialization in API responses.
"""

from enum import Enum


class InsightCategory(str, Enum):
    """
    Category tag attached to every generated insight.

    Values: 'trend' | 'efficiency' | 'geographic' | 'concentration' | 'anomaly'
    """
    TREND = "trend"
    EFFICIENCY = "efficiency"
    GEOGRAPHIC = "geographic"
    CONCENTRATION = "concentration"
    ANOMALY = "anomaly"


class Severity(str, Enum):
    """
    Ordinal rarity label attached to an outlier analogy.

    Ordering (least to most severe): low < high < extreme < astronomical.
    Use `Severity.rank` for comparisons; string comparison is not ordinal.
    """
    LOW = "low"
    HIGH = "high"
    EXTREME = "extreme"
    ASTRONOMICAL = "astronomical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANKS[self]


_SEVERITY_RANKS = {
    Severity.LOW: 0,
    Severity.HIGH: 1,
    Severity.EXTREME: 2,
    Severity.ASTRONOMICAL: 3,
}


class OutlierPopulation(str, Enum):
    """
    Candidate population an outlier was detected in.

    - provider_spending: Total spending per billing provider (NPI)
    - hcpcs_spending: Total spending per procedure code
    - cost_per_claim: Spending / claims per procedure code
    - claims_per_beneficiary: Claims / beneficiaries per procedure code
    - district_spending: Spending per congressional district
    """
    PROVIDER_SPENDING = "provider_spending"
    HCPCS_SPENDING = "hcpcs_spending"
    COST_PER_CLAIM = "cost_per_claim"
    CLAIMS_PER_BENEFICIARY = "claims_per_beneficiary"
    DISTRICT_SPENDING = "district_spending"


class OutlierSource(str, Enum):
    """
    Which outlier path the /outliers endpoint serves.

    - curated: Editorially selected records with hand-written analogies
    - computed: Runtime z-score detection over the snapshot populations
    """
    CURATED = "curated"
    COMPUTED = "computed"


class ExpansionStatus(str, Enum):
    """
    ACA Medicaid expansion adoption flag, as published with FMAP rates.
    """
    YES = "Y"
    NO = "N"


class AggregateSlice(str, Enum):
    """
    Named slices of the Aggregate Store.

    Values match the JSON field names of AggregateSnapshot and the CSV file
    stems accepted by the directory loader.
    """
    YEARLY = "yearly"
    MONTHLY = "monthly"
    SEASONAL = "seasonal"
    TOP_HCPCS = "topHCPCS"
    TOP_BY_CLAIMS = "topByClaims"
    TOP_PROVIDERS = "topProviders"
    COST_PER_CLAIM = "costPerClaim"
    COST_PER_BENEFICIARY = "costPerBeneficiary"
    CLAIMS_PER_BENE = "claimsPerBene"
    CATEGORIES = "categories"
    CONCENTRATION = "concentration"
    PROVIDER_TIERS = "providerTiers"
    TOP_STATES = "topStates"
    TOP_STATES_BY_PER_CAPITA = "topStatesByPerCapita"
    TOP_CITIES = "topCities"
    PROVIDER_POPULATION = "providerPopulation"
    HCPCS_POPULATION = "hcpcsPopulation"
