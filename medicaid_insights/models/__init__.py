"""
Package initialization file for models.

This module exports all Pydantic schemas and enumerations from schemas.py and enums.py,
making them importable from medicaid_insights.models directly.

Usage:
    from medicaid_insights.models import (
        AggregateSnapshot,
        OutlierEntry,
        Insight,
        Severity,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from medicaid_insights.models.enums import (
    AggregateSlice,
    ExpansionStatus,
    InsightCategory,
    OutlierPopulation,
    OutlierSource,
    Severity,
)

# =============================================================================
# Aggregate Records
# =============================================================================

from medicaid_insights.models.schemas import (
    YearlyRecord,
    MonthlyRecord,
    SeasonalRecord,
    ProviderRecord,
    HcpcsRecord,
    CostPerClaimRecord,
    CostPerBeneficiaryRecord,
    ClaimsPerBeneficiaryRecord,
    CategorySpending,
    ProviderTier,
    StateRecord,
    CityRecord,
    FmapRecord,
    DistrictRecord,
    RawAggregates,
    AggregateSnapshot,
    SnapshotIssue,
)

# =============================================================================
# Outlier Classifier
# =============================================================================

from medicaid_insights.models.schemas import (
    ZScoreResult,
    Analogy,
    OutlierCandidate,
    SeverityTier,
    SeverityTable,
    AnalogyPhrase,
    AnalogyCatalog,
    OutlierConfig,
    CuratedOutlier,
    OutlierEntry,
    OutlierMetadata,
    OutlierReport,
    DetectOutliersRequest,
)

# =============================================================================
# Insights and Federal Funding
# =============================================================================

from medicaid_insights.models.schemas import (
    InsightConfig,
    Insight,
    InsightsResponse,
    FmapExtreme,
    FederalSummary,
    ExpansionAnalysis,
    FederalMetadata,
    FmapQuartile,
    FederalResponse,
)

__all__ = [
    # Enums
    "AggregateSlice",
    "ExpansionStatus",
    "InsightCategory",
    "OutlierPopulation",
    "OutlierSource",
    "Severity",
    # Aggregate records
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
    "RawAggregates",
    "AggregateSnapshot",
    "SnapshotIssue",
    # Outlier classifier
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
    # Insights and federal funding
    "InsightConfig",
    "Insight",
    "InsightsResponse",
    "FmapExtreme",
    "FederalSummary",
    "ExpansionAnalysis",
    "FederalMetadata",
    "FmapQuartile",
    "FederalResponse",
]
