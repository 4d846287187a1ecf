'''
Medicaid Insights Test Suite

Test Modules:
-------------
- test_statistics.py: Statistical primitives and display formatting
  - Population (not sample) standard deviation
  - Excluded results for zero denominators and zero variance
  - Half-up rounding, NTILE bucketing

- test_aggregate_store.py: Aggregate Store
  - Chart-payload derivations (growth, seasonal, categories, concentration)
  - JSON, CSV and Postgres loaders with per-row issues

- test_outliers.py: Outlier classifier
  - Strict z > threshold over the whole population
  - Severity tiers, analogies, curated vs computed report shape

- test_insights.py: Insight synthesizer
  - Exact texts for all 14 rules, catalog order, rule independence

- test_federal.py: FMAP summary, districts and quartiles

- test_api.py: Router functions and application wiring

Running Tests:
--------------
    pip install -e ".[test]"
    pytest medicaid_insights/tests -v

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
