"""
Committed reference catalogs.

- analogies: rarity phrases keyed by order-of-magnitude odds
- curated_outliers: editorially selected outlier records and their metadata
- fmap: FMAP rates, congressional district counts, federal metadata
- states: valid state/territory codes and names
"""
