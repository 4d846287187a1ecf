"""
Federal funding reference tables.

FMAP rates (FY2022-FY2024) and ACA expansion status come from CMS; district
counts are the 118th Congress apportionment (435 voting seats plus DC's
delegate seat).
"""

from typing import Dict, List, Tuple


# (state code, state name, FY2024, FY2023, FY2022, expansion status)
FMAP_ROWS: List[Tuple[str, str, float, float, float, str]] = [
    ("AL", "Alabama", 73.10, 72.64, 72.18, "N"),
    ("AK", "Alaska", 50.00, 50.00, 50.00, "Y"),
    ("AZ", "Arizona", 76.30, 74.36, 73.63, "Y"),
    ("AR", "Arkansas", 73.43, 70.99, 70.58, "Y"),
    ("CA", "California", 50.00, 50.00, 50.00, "Y"),
    ("CO", "Colorado", 50.00, 50.00, 50.00, "Y"),
    ("CT", "Connecticut", 50.00, 50.00, 50.00, "Y"),
    ("DE", "Delaware", 60.34, 58.46, 58.15, "Y"),
    ("DC", "District of Columbia", 70.00, 70.00, 70.00, "Y"),
    ("FL", "Florida", 65.06, 62.91, 61.87, "N"),
    ("GA", "Georgia", 67.03, 66.68, 66.71, "N"),
    ("HI", "Hawaii", 53.05, 50.47, 50.00, "Y"),
    ("ID", "Idaho", 70.39, 70.01, 70.73, "Y"),
    ("IL", "Illinois", 52.07, 50.07, 50.00, "Y"),
    ("IN", "Indiana", 67.93, 67.02, 66.61, "Y"),
    ("IA", "Iowa", 63.09, 63.15, 62.34, "Y"),
    ("KS", "Kansas", 61.20, 59.68, 59.45, "N"),
    ("KY", "Kentucky", 74.42, 72.02, 71.98, "Y"),
    ("LA", "Louisiana", 66.39, 64.49, 64.01, "Y"),
    ("ME", "Maine", 66.03, 65.65, 65.79, "Y"),
    ("MD", "Maryland", 50.00, 50.00, 50.00, "Y"),
    ("MA", "Massachusetts", 50.00, 50.00, 50.00, "Y"),
    ("MI", "Michigan", 66.89, 65.51, 65.54, "Y"),
    ("MN", "Minnesota", 50.00, 50.00, 50.00, "Y"),
    ("MS", "Mississippi", 78.82, 78.03, 77.77, "N"),
    ("MO", "Missouri", 66.77, 66.29, 66.03, "Y"),
    ("MT", "Montana", 65.74, 64.71, 65.02, "Y"),
    ("NE", "Nebraska", 53.93, 52.17, 51.72, "Y"),
    ("NV", "Nevada", 66.21, 65.67, 66.08, "Y"),
    ("NH", "New Hampshire", 50.00, 50.00, 50.00, "Y"),
    ("NJ", "New Jersey", 50.00, 50.00, 50.00, "Y"),
    ("NM", "New Mexico", 74.11, 72.49, 72.76, "Y"),
    ("NY", "New York", 50.00, 50.00, 50.00, "Y"),
    ("NC", "North Carolina", 67.78, 66.63, 66.38, "Y"),
    ("ND", "North Dakota", 54.49, 52.42, 52.24, "Y"),
    ("OH", "Ohio", 64.41, 63.04, 62.77, "Y"),
    ("OK", "Oklahoma", 67.43, 66.13, 65.33, "Y"),
    ("OR", "Oregon", 63.87, 62.60, 62.99, "Y"),
    ("PA", "Pennsylvania", 54.02, 52.25, 51.94, "Y"),
    ("RI", "Rhode Island", 54.06, 52.23, 52.18, "Y"),
    ("SC", "South Carolina", 72.21, 71.98, 71.30, "N"),
    ("SD", "South Dakota", 58.66, 55.20, 55.22, "Y"),
    ("TN", "Tennessee", 66.83, 66.07, 65.68, "N"),
    ("TX", "Texas", 61.05, 58.48, 58.00, "N"),
    ("UT", "Utah", 69.63, 68.31, 69.16, "Y"),
    ("VT", "Vermont", 58.86, 59.81, 59.03, "Y"),
    ("VA", "Virginia", 50.00, 50.00, 50.00, "Y"),
    ("WA", "Washington", 50.00, 50.00, 50.00, "Y"),
    ("WV", "West Virginia", 76.46, 75.40, 75.25, "Y"),
    ("WI", "Wisconsin", 61.43, 60.22, 59.66, "N"),
    ("WY", "Wyoming", 50.00, 50.00, 50.00, "N"),
]

CD_COUNT: Dict[str, int] = {
    "AL": 7, "AK": 1, "AZ": 9, "AR": 4, "CA": 52, "CO": 8, "CT": 5, "DE": 1, "FL": 28,
    "GA": 14, "HI": 2, "ID": 2, "IL": 17, "IN": 9, "IA": 4, "KS": 4, "KY": 6, "LA": 6,
    "ME": 2, "MD": 8, "MA": 9, "MI": 13, "MN": 8, "MS": 4, "MO": 8, "MT": 2, "NE": 3,
    "NV": 4, "NH": 2, "NJ": 12, "NM": 3, "NY": 26, "NC": 14, "ND": 1, "OH": 15, "OK": 5,
    "OR": 6, "PA": 17, "RI": 2, "SC": 7, "SD": 1, "TN": 9, "TX": 38, "UT": 4, "VT": 1,
    "VA": 11, "WA": 10, "WV": 2, "WI": 8, "WY": 1, "DC": 1,
}

FEDERAL_METADATA: Dict[str, str] = {
    "computedAt": "2026-02-14T08:30:00.000Z",
    "source": "CMS FMAP rates, Census congressional districts",
    "methodology": "State spending distributed proportionally across congressional districts",
}
