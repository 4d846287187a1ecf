"""
Aggregate Queries Module.

Read-only SQL over the precomputed aggregate tables (one table per slice, produced
by the upstream batch job over the full provider utilization file). No query here
aggregates raw claim rows.

Column aliases match the record field names in medicaid_insights.models.schemas, so
each returned row can be validated directly into its record type. Every query keeps
the ranking order of its slice.

Tables:
    agg_yearly, agg_monthly                      time series
    agg_hcpcs                                    every procedure code (population)
    agg_providers                                every billing provider (population)
    agg_states, agg_cities                       geographic rollups
    agg_provider_tiers                           billing band distribution (optional)
    agg_totals                                   single-row dataset totals
"""

from typing import Dict


# =============================================================================
# CONSTANTS
# =============================================================================

# Rows kept in each top-K ranking
TOP_K: int = 25

# Cities kept for the city ranking
TOP_CITIES_LIMIT: int = 50


# =============================================================================
# TIME SERIES
# =============================================================================

YEARLY_QUERY = """
    SELECT year::text AS "year", spending, claims, beneficiaries
    FROM agg_yearly
    ORDER BY year ASC
"""

MONTHLY_QUERY = """
    SELECT month AS "month", spending, claims, beneficiaries
    FROM agg_monthly
    ORDER BY month ASC
"""


# =============================================================================
# PROCEDURE CODE RANKINGS
# =============================================================================

_HCPCS_COLUMNS = """
    code, spending, claims, beneficiaries, providers,
    definition, category
"""

TOP_HCPCS_BY_SPENDING_QUERY = f"""
    SELECT {_HCPCS_COLUMNS}
    FROM agg_hcpcs
    ORDER BY spending DESC, code ASC
    LIMIT {TOP_K}
"""

TOP_HCPCS_BY_CLAIMS_QUERY = f"""
    SELECT {_HCPCS_COLUMNS}
    FROM agg_hcpcs
    ORDER BY claims DESC, code ASC
    LIMIT {TOP_K}
"""

# Codes without claims/beneficiaries cannot be ranked by a ratio
TOP_HCPCS_BY_COST_PER_CLAIM_QUERY = f"""
    SELECT code, spending, claims,
           ROUND((spending / claims)::numeric, 2)::float8 AS "costPerClaim",
           definition, category
    FROM agg_hcpcs
    WHERE claims > 0
    ORDER BY spending / claims DESC, code ASC
    LIMIT {TOP_K}
"""

TOP_HCPCS_BY_COST_PER_BENE_QUERY = f"""
    SELECT code, spending, beneficiaries,
           ROUND((spending / beneficiaries)::numeric, 2)::float8 AS "costPerBeneficiary",
           definition, category
    FROM agg_hcpcs
    WHERE beneficiaries > 0
    ORDER BY spending / beneficiaries DESC, code ASC
    LIMIT {TOP_K}
"""

TOP_HCPCS_BY_CLAIMS_PER_BENE_QUERY = f"""
    SELECT code, claims, beneficiaries,
           ROUND((claims::float8 / beneficiaries)::numeric, 2)::float8 AS "claimsPerBene",
           definition, category
    FROM agg_hcpcs
    WHERE beneficiaries > 0
    ORDER BY claims::float8 / beneficiaries DESC, code ASC
    LIMIT {TOP_K}
"""

HCPCS_POPULATION_QUERY = f"""
    SELECT {_HCPCS_COLUMNS}
    FROM agg_hcpcs
    ORDER BY spending DESC, code ASC
"""


# =============================================================================
# PROVIDERS
# =============================================================================

TOP_PROVIDERS_QUERY = f"""
    SELECT npi::text AS npi, spending, claims, beneficiaries, name, specialty, state
    FROM agg_providers
    ORDER BY spending DESC, npi ASC
    LIMIT {TOP_K}
"""

PROVIDER_POPULATION_QUERY = """
    SELECT npi::text AS npi, spending, claims, beneficiaries
    FROM agg_providers
    ORDER BY spending DESC, npi ASC
"""

PROVIDER_TIERS_QUERY = """
    SELECT tier, count, spending
    FROM agg_provider_tiers
    ORDER BY sort_order ASC
"""


# =============================================================================
# GEOGRAPHY
# =============================================================================

STATES_BY_SPENDING_QUERY = """
    SELECT state, spending, claims, providers, population,
           CASE WHEN population > 0
                THEN ROUND((spending / population)::numeric, 2)::float8
           END AS "perCapita"
    FROM agg_states
    ORDER BY spending DESC, state ASC
"""

STATES_BY_PER_CAPITA_QUERY = """
    SELECT state, spending, population,
           ROUND((spending / population)::numeric, 2)::float8 AS "perCapita"
    FROM agg_states
    WHERE population > 0
    ORDER BY spending / population DESC, state ASC
"""

TOP_CITIES_QUERY = f"""
    SELECT city, state, spending, claims, providers
    FROM agg_cities
    ORDER BY spending DESC, city ASC
    LIMIT {TOP_CITIES_LIMIT}
"""


# =============================================================================
# TOTALS
# =============================================================================

TOTAL_SPENDING_QUERY = """
    SELECT total_spending AS "totalSpending"
    FROM agg_totals
    LIMIT 1
"""


# Raw slice name -> query, in load order
SLICE_QUERIES: Dict[str, str] = {
    "yearly": YEARLY_QUERY,
    "monthly": MONTHLY_QUERY,
    "topHCPCS": TOP_HCPCS_BY_SPENDING_QUERY,
    "topByClaims": TOP_HCPCS_BY_CLAIMS_QUERY,
    "topProviders": TOP_PROVIDERS_QUERY,
    "costPerClaim": TOP_HCPCS_BY_COST_PER_CLAIM_QUERY,
    "costPerBeneficiary": TOP_HCPCS_BY_COST_PER_BENE_QUERY,
    "claimsPerBene": TOP_HCPCS_BY_CLAIMS_PER_BENE_QUERY,
    "providerTiers": PROVIDER_TIERS_QUERY,
    "topStates": STATES_BY_SPENDING_QUERY,
    "topStatesByPerCapita": STATES_BY_PER_CAPITA_QUERY,
    "topCities": TOP_CITIES_QUERY,
    "providerPopulation": PROVIDER_POPULATION_QUERY,
    "hcpcsPopulation": HCPCS_POPULATION_QUERY,
}
