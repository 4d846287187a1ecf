"""
Medicaid Insights Backend Package.

FastAPI service layer for the Medicaid spending transparency site. Serves
pre-aggregated claims statistics and derives outlier classifications and
templated narrative insights from them.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - data: Committed literal catalogs (FMAP rates, curated outliers, analogies)
    - models: Pydantic schemas and enums
    - services: Statistics, outlier classifier, insight synthesizer, federal analysis
    - sql: SQL reading the precomputed aggregate tables
"""

__version__ = "1.0.0"
