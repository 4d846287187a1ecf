"""
Federal funding analysis - FMAP rates, expansion status and congressional districts.

State spending from the Aggregate Store is spread evenly across each state's
congressional districts, then the districts are scored with the same z-score
machinery as every other outlier population.
"""

import logging
from typing import List, Optional

from medicaid_insights.data.fmap import CD_COUNT, FEDERAL_METADATA, FMAP_ROWS
from medicaid_insights.models import (
    DistrictRecord,
    ExpansionAnalysis,
    ExpansionStatus,
    FederalMetadata,
    FederalResponse,
    FederalSummary,
    FmapExtreme,
    FmapQuartile,
    FmapRecord,
    OutlierConfig,
    OutlierEntry,
    OutlierPopulation,
    StateRecord,
)
from medicaid_insights.services.outliers import detect_outliers, district_spending_candidates
from medicaid_insights.services.statistics import mean, population_std_dev, quartile_buckets, z_score


logger = logging.getLogger(__name__)

TOP_DISTRICTS: int = 25
MULTIPLE_STATES: str = "Multiple"


def fmap_records() -> List[FmapRecord]:
    return [
        FmapRecord(
            stateCode=code,
            stateName=name,
            fy2024=fy2024,
            fy2023=fy2023,
            fy2022=fy2022,
            expansionStatus=ExpansionStatus(status),
        )
        for code, name, fy2024, fy2023, fy2022, status in FMAP_ROWS
    ]


def _average_fmap(records: List[FmapRecord]) -> Optional[float]:
    if not records:
        return None
    return round(mean([r.fy2024 for r in records]), 2)


def district_spending(states: List[StateRecord]) -> List[DistrictRecord]:
    """
    Spread each state's spending evenly over its districts and score them.

    States missing from `states` contribute zero-spend districts. z-scores use
    the population standard deviation over districts with positive spending
    and are rounded to 2 decimals; zero-spend districts keep zScore None.

    Returns:
        Every district, sorted descending by spending (ties keep CD_COUNT order)
    """
    spending_by_state = {s.state: s.spending for s in states}

    districts = []
    for state, count in CD_COUNT.items():
        per_district = spending_by_state.get(state, 0.0) / count
        for number in range(1, count + 1):
            districts.append((state, f"{number:02d}", per_district))

    funded = [spending for _, _, spending in districts if spending > 0]
    avg = mean(funded) if funded else None
    std = population_std_dev(funded, avg) if funded else 0.0

    records = []
    for state, number, spending in districts:
        z = z_score(spending, avg, std) if spending > 0 and avg is not None else None
        records.append(DistrictRecord(
            districtCode=f"{state}-{number}",
            stateCode=state,
            districtNumber=number,
            spending=spending,
            zScore=round(z, 2) if z is not None else None,
        ))

    logger.debug(f"Built {len(records)} districts, {len(funded)} with spending")
    return sorted(records, key=lambda d: -d.spending)


def district_outliers(
    districts: List[DistrictRecord],
    config: Optional[OutlierConfig] = None,
) -> List[OutlierEntry]:
    """
    Districts whose spending z-score exceeds the threshold, with formulaic analogies.

    A district is listed only when the 2-decimal `zScore` on its record also
    exceeds the threshold, so the list agrees with the scores shown beside it.
    """
    config = config or OutlierConfig()
    shown = {d.districtCode: d.zScore for d in districts}
    flagged = detect_outliers(
        district_spending_candidates(districts),
        OutlierPopulation.DISTRICT_SPENDING,
        config,
    )
    return [
        entry for entry in flagged
        if shown.get(entry.key) is not None and shown[entry.key] > config.threshold
    ]


def _fmap_extreme(records: List[FmapRecord], highest: bool) -> Optional[FmapExtreme]:
    if not records:
        return None
    rates = [r.fy2024 for r in records]
    rate = max(rates) if highest else min(rates)
    states = [r.stateCode for r in records if r.fy2024 == rate]
    return FmapExtreme(
        state=states[0] if len(states) == 1 else MULTIPLE_STATES,
        rate=rate,
        states=states,
    )


def federal_summary(records: Optional[List[FmapRecord]] = None) -> FederalSummary:
    records = records if records is not None else fmap_records()
    return FederalSummary(
        totalStates=len(records),
        expansionStates=sum(1 for r in records if r.expansionStatus == ExpansionStatus.YES),
        nonExpansionStates=sum(1 for r in records if r.expansionStatus == ExpansionStatus.NO),
        avgFMAP=_average_fmap(records),
        highestFMAP=_fmap_extreme(records, highest=True),
        lowestFMAP=_fmap_extreme(records, highest=False),
        totalDistricts=sum(CD_COUNT.values()),
    )


def expansion_analysis(records: Optional[List[FmapRecord]] = None) -> ExpansionAnalysis:
    records = records if records is not None else fmap_records()
    expansion = [r for r in records if r.expansionStatus == ExpansionStatus.YES]
    non_expansion = [r for r in records if r.expansionStatus == ExpansionStatus.NO]
    return ExpansionAnalysis(
        expansionCount=len(expansion),
        nonExpansionCount=len(non_expansion),
        avgExpansionFMAP=_average_fmap(expansion),
        avgNonExpansionFMAP=_average_fmap(non_expansion),
    )


def fmap_quartiles(states: List[StateRecord]) -> List[FmapQuartile]:
    """
    Group jurisdictions into FY2024 FMAP quartiles (1 = lowest rate).

    Average per-capita spending only counts states in `states` that report it.
    """
    records = fmap_records()
    per_capita = {s.state: s.perCapita for s in states if s.perCapita is not None}
    buckets = quartile_buckets([r.fy2024 for r in records])

    quartiles = []
    for quartile in range(1, 5):
        members = [r for r, bucket in zip(records, buckets) if bucket == quartile]
        if not members:
            continue
        spend = [per_capita[r.stateCode] for r in members if r.stateCode in per_capita]
        quartiles.append(FmapQuartile(
            quartile=quartile,
            states=len(members),
            avgFmap=round(mean([r.fy2024 for r in members]), 2),
            avgPerCapita=round(mean(spend), 2) if spend else None,
        ))
    return quartiles


def build_federal_response(
    states: List[StateRecord],
    config: Optional[OutlierConfig] = None,
) -> FederalResponse:
    """
    Assemble the /federal payload from the snapshot's state rollup.

    Args:
        states: State spending records (topStates slice)
        config: Classifier configuration for district outliers

    Returns:
        FederalResponse
    """
    records = fmap_records()
    districts = district_spending(states)
    return FederalResponse(
        summary=federal_summary(records),
        statesByFMAP=sorted(records, key=lambda r: -r.fy2024),
        topDistricts=districts[:TOP_DISTRICTS],
        districtOutliers=district_outliers(districts, config),
        expansionAnalysis=expansion_analysis(records),
        allDistricts=districts,
        metadata=FederalMetadata(**FEDERAL_METADATA),
    )
