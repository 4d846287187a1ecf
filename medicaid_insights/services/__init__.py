"""
Medicaid Insights Services Module

Business logic for the descriptive statistics and narrative insight engine.
Every service except the Aggregate Store loaders is a pure function of an
AggregateSnapshot plus configuration.

Services:
- statistics: mean, population standard deviation, z-scores, ratios, quartiles
- formatting: currency, percent and month display helpers
- aggregate_store: snapshot derivations and the JSON / CSV / Postgres loaders
- outliers: z-score outlier classifier (computed and curated paths)
- insights: the 14-rule insight synthesizer
- federal: FMAP, expansion status and congressional district analysis

All services are consumed by the API layer (medicaid_insights/api/).
"""

# =============================================================================
# Statistics Exports
# =============================================================================

from medicaid_insights.services.statistics import (
    mean,
    population_std_dev,
    z_score,
    ratio,
    percentage_share,
    growth_percent,
    quartile_buckets,
)

# =============================================================================
# Aggregate Store Exports
# Read-only snapshot of precomputed aggregates and its loaders
# =============================================================================

from medicaid_insights.services.aggregate_store import (
    AggregateStore,
    AggregateStoreError,
    build_snapshot,
    fetch_snapshot,
    load_snapshot_csv_dir,
    load_snapshot_json,
    validate_columns,
)

# =============================================================================
# Outlier Classifier Exports
# =============================================================================

from medicaid_insights.services.outliers import (
    detect_outliers,
    build_analogy,
    curated_outlier_report,
    computed_outlier_report,
    provider_spending_candidates,
    hcpcs_spending_candidates,
    cost_per_claim_candidates,
    claims_per_beneficiary_candidates,
    district_spending_candidates,
)

# =============================================================================
# Insight Synthesizer Exports
# =============================================================================

from medicaid_insights.services.insights import (
    INSIGHT_RULES,
    InsightRule,
    generate_insights,
    build_insights_response,
)

# =============================================================================
# Federal Funding Exports
# =============================================================================

from medicaid_insights.services.federal import (
    build_federal_response,
    district_spending,
    district_outliers,
    federal_summary,
    expansion_analysis,
    fmap_quartiles,
    fmap_records,
)


__all__ = [
    # Statistics
    'mean',
    'population_std_dev',
    'z_score',
    'ratio',
    'percentage_share',
    'growth_percent',
    'quartile_buckets',
    # Aggregate Store
    'AggregateStore',
    'AggregateStoreError',
    'build_snapshot',
    'fetch_snapshot',
    'load_snapshot_csv_dir',
    'load_snapshot_json',
    'validate_columns',
    # Outliers
    'detect_outliers',
    'build_analogy',
    'curated_outlier_report',
    'computed_outlier_report',
    'provider_spending_candidates',
    'hcpcs_spending_candidates',
    'cost_per_claim_candidates',
    'claims_per_beneficiary_candidates',
    'district_spending_candidates',
    # Insights
    'INSIGHT_RULES',
    'InsightRule',
    'generate_insights',
    'build_insights_response',
    # Federal
    'build_federal_response',
    'district_spending',
    'district_outliers',
    'federal_summary',
    'expansion_analysis',
    'fmap_quartiles',
    'fmap_records',
]
