"""
Outlier Classifier - z-score outlier detection with severity tiers and rarity analogies.

Given a candidate population (every provider's spending, every procedure code's
spending, cost per claim or claims per beneficiary, every district's spending),
the classifier computes the population mean and POPULATION standard deviation over
the entire population, keeps candidates whose z-score is strictly greater than the
configured threshold (3.0), and returns them sorted descending by z-score.

Two ways of producing an OutlierEntry:
1. COMPUTED - runtime detection. Severity comes from the configured SeverityTable;
   the analogy is chosen from the AnalogyCatalog by the order of magnitude of the
   odds 1 / P(Z > z) under a standard normal distribution.
2. CURATED - editorially selected records whose z-scores were computed upstream over
   the full dataset and carry hand-written analogies.

Both paths yield structurally identical OutlierEntry records.

Failure semantics:
- Empty population -> []
- Zero-variance population -> []
- Ratio candidates with a missing/zero denominator are excluded before detection

Dependencies:
- numpy (via services.statistics): mean and population standard deviation
- scipy.stats.norm.logsf: upper-tail log probability, stable far into the tail
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from scipy.stats import norm

from medicaid_insights.data.curated_outliers import (
    COST_PER_CLAIM_OUTLIERS,
    HCPCS_OUTLIERS,
    OUTLIER_METADATA,
    PROVIDER_OUTLIERS,
    REPEAT_PROCEDURE_OUTLIERS,
)
from medicaid_insights.models import (
    AggregateSnapshot,
    Analogy,
    CuratedOutlier,
    DistrictRecord,
    HcpcsRecord,
    OutlierCandidate,
    OutlierConfig,
    OutlierEntry,
    OutlierMetadata,
    OutlierPopulation,
    OutlierReport,
    OutlierSource,
    ProviderRecord,
    Severity,
    SeverityTable,
    ZScoreResult,
)
from medicaid_insights.services.statistics import mean, population_std_dev, ratio, z_score


logger = logging.getLogger(__name__)

_LN_10 = math.log(10)


# =============================================================================
# Tail Probability and Analogies
# =============================================================================


def tail_log10_odds(z: float) -> float:
    """
    log10 of the odds 1 / P(Z > z) for a standard normal Z.

    Uses the log survival function so z-scores in the tens or hundreds do not
    underflow to zero probability.
    """
    return float(-norm.logsf(z) / _LN_10)


def format_probability(log10_odds: float) -> str:
    """
    Human-readable rarity for the given odds.

    Examples:
        2.87 -> '1 in 741'
        6.5  -> '1 in 3.2 million'
        9.3  -> '1 in 2.0 billion'
        29.2 -> '1 in 10^29'
    """
    if log10_odds < 6:
        return f"1 in {round(10 ** log10_odds):,}"
    if log10_odds < 9:
        return f"1 in {10 ** log10_odds / 1e6:.1f} million"
    if log10_odds < 12:
        return f"1 in {10 ** log10_odds / 1e9:.1f} billion"
    return f"1 in 10^{int(math.floor(log10_odds))}"


def build_analogy(z: float, config: OutlierConfig) -> Analogy:
    """
    Formulaic analogy for a z-score: probability text, nearest catalog phrase,
    and the severity label of the matching tier (low below the first tier).
    """
    log10_odds = tail_log10_odds(z)
    tier = config.severityTable.classify(z)
    return Analogy(
        probability=format_probability(log10_odds),
        analogy=config.analogyCatalog.lookup(log10_odds),
        severity=tier.label if tier else Severity.LOW,
    )


# =============================================================================
# Candidate Builders
# =============================================================================


def provider_spending_candidates(providers: List[ProviderRecord]) -> List[OutlierCandidate]:
    """Every provider's total spending."""
    return [
        OutlierCandidate(
            key=p.npi,
            label=p.name,
            value=p.spending,
            spending=p.spending,
            claims=p.claims,
            beneficiaries=p.beneficiaries,
        )
        for p in providers
    ]


def hcpcs_spending_candidates(codes: List[HcpcsRecord]) -> List[OutlierCandidate]:
    """Every procedure code's total spending."""
    return [
        OutlierCandidate(
            key=c.code,
            label=c.definition,
            value=c.spending,
            spending=c.spending,
            claims=c.claims,
            beneficiaries=c.beneficiaries,
            providers=c.providers,
        )
        for c in codes
    ]


# (numerator, denominator) of the ratio populations
RATIO_FIELDS: Dict[OutlierPopulation, Tuple[str, str]] = {
    OutlierPopulation.COST_PER_CLAIM: ("spending", "claims"),
    OutlierPopulation.CLAIMS_PER_BENEFICIARY: ("claims", "beneficiaries"),
}


def _ratio_candidates(codes: List[HcpcsRecord], population: OutlierPopulation) -> List[OutlierCandidate]:
    numerator_field, denominator_field = RATIO_FIELDS[population]
    candidates = []
    excluded = 0
    for c in codes:
        value = ratio(getattr(c, numerator_field), getattr(c, denominator_field))
        if value is None:
            excluded += 1
            continue
        candidates.append(
            OutlierCandidate(
                key=c.code,
                label=c.definition,
                value=value,
                spending=c.spending,
                claims=c.claims,
                beneficiaries=c.beneficiaries,
                providers=c.providers,
            )
        )
    if excluded:
        logger.debug(
            f"Excluded {excluded} of {len(codes)} {population.value} candidates "
            f"with a missing or non-positive {denominator_field}"
        )
    return candidates


def cost_per_claim_candidates(codes: List[HcpcsRecord]) -> List[OutlierCandidate]:
    """Spending / claims per procedure code; codes without claims are excluded."""
    return _ratio_candidates(codes, OutlierPopulation.COST_PER_CLAIM)


def claims_per_beneficiary_candidates(codes: List[HcpcsRecord]) -> List[OutlierCandidate]:
    """Claims / beneficiaries per procedure code; codes without beneficiaries are excluded."""
    return _ratio_candidates(codes, OutlierPopulation.CLAIMS_PER_BENEFICIARY)


def district_spending_candidates(districts: List[DistrictRecord]) -> List[OutlierCandidate]:
    """Districts with positive spending (zero-spend districts carry no data)."""
    return [
        OutlierCandidate(
            key=d.districtCode,
            label=d.stateCode,
            value=d.spending,
            spending=d.spending,
            claims=d.claims,
            beneficiaries=d.beneficiaries,
            providers=d.providers,
        )
        for d in districts
        if d.spending > 0
    ]


# =============================================================================
# Detection
# =============================================================================


def detect_outliers(
    candidates: List[OutlierCandidate],
    population: OutlierPopulation,
    config: Optional[OutlierConfig] = None,
) -> List[OutlierEntry]:
    """
    Flag candidates whose z-score strictly exceeds the threshold.

    Mean and standard deviation are taken over ALL candidates, not just the
    flagged ones. Ties keep their input order.

    Args:
        candidates: The full candidate population
        population: Which population the candidates belong to
        config: Classifier configuration (defaults to threshold 3.0 and the
            default severity/analogy tables)

    Returns:
        Outlier entries sorted descending by z-score; empty for an empty or
        zero-variance population
    """
    config = config or OutlierConfig()

    if not candidates:
        logger.debug(f"No {population.value} candidates; nothing to classify")
        return []

    values = [c.value for c in candidates]
    avg = mean(values)
    std = population_std_dev(values, avg)
    if std == 0:
        logger.debug(f"{population.value} population of {len(values)} has zero variance")
        return []

    flagged: List[OutlierEntry] = []
    for candidate in candidates:
        z = z_score(candidate.value, avg, std)
        if z is None or z <= config.threshold:
            continue
        flagged.append(
            OutlierEntry.from_computed_z_score(
                candidate,
                population,
                ZScoreResult(value=candidate.value, mean=avg, standardDeviation=std, zScore=z),
                build_analogy(z, config),
                config.severityTable.classify(z),
            )
        )

    logger.debug(
        f"{len(flagged)} of {len(candidates)} {population.value} candidates "
        f"exceed z > {config.threshold}"
    )
    # sorted() is stable, so equal z-scores keep input order
    return sorted(flagged, key=lambda entry: -entry.zScore.zScore)


# =============================================================================
# Curated Catalog
# =============================================================================


def curated_value(record: CuratedOutlier, population: OutlierPopulation) -> float:
    """
    The measure a curated record is scored on within its population.

    Raises:
        ValueError: If a ratio population record lacks a positive denominator
    """
    fields = RATIO_FIELDS.get(population)
    if fields is None:
        return record.spending
    numerator, denominator = fields
    value = ratio(getattr(record, numerator), getattr(record, denominator))
    if value is None:
        raise ValueError(
            f"Curated {population.value} record {record.key} has no positive {denominator}"
        )
    return value


def curated_outliers(
    records: List[Dict[str, Any]],
    population: OutlierPopulation,
    severity_table: Optional[SeverityTable] = None,
) -> List[OutlierEntry]:
    """Build entries from a curated catalog, preserving catalog order."""
    severity_table = severity_table or SeverityTable()
    entries = []
    for raw in records:
        record = CuratedOutlier(**raw)
        entries.append(OutlierEntry.from_curated_record(
            record, population, severity_table, curated_value(record, population)
        ))
    return entries


def curated_outlier_report(config: Optional[OutlierConfig] = None) -> OutlierReport:
    """The editorial outlier catalog in report form."""
    config = config or OutlierConfig()
    table = config.severityTable
    return OutlierReport(
        source=OutlierSource.CURATED,
        providers=curated_outliers(PROVIDER_OUTLIERS, OutlierPopulation.PROVIDER_SPENDING, table),
        hcpcs=curated_outliers(HCPCS_OUTLIERS, OutlierPopulation.HCPCS_SPENDING, table),
        costPerClaim=curated_outliers(
            COST_PER_CLAIM_OUTLIERS, OutlierPopulation.COST_PER_CLAIM, table
        ),
        repeatProcedures=curated_outliers(
            REPEAT_PROCEDURE_OUTLIERS, OutlierPopulation.CLAIMS_PER_BENEFICIARY, table
        ),
        metadata=OutlierMetadata(threshold=config.threshold, **OUTLIER_METADATA),
    )


def computed_outlier_report(
    snapshot: AggregateSnapshot,
    config: Optional[OutlierConfig] = None,
) -> OutlierReport:
    """
    Run detection over the snapshot's full provider and procedure code populations.

    Args:
        snapshot: Aggregate Store snapshot
        config: Classifier configuration

    Returns:
        OutlierReport with the same shape as the curated report
    """
    config = config or OutlierConfig()
    codes = snapshot.hcpcsPopulation

    report = OutlierReport(
        source=OutlierSource.COMPUTED,
        providers=detect_outliers(
            provider_spending_candidates(snapshot.providerPopulation),
            OutlierPopulation.PROVIDER_SPENDING,
            config,
        ),
        hcpcs=detect_outliers(
            hcpcs_spending_candidates(codes), OutlierPopulation.HCPCS_SPENDING, config
        ),
        costPerClaim=detect_outliers(
            cost_per_claim_candidates(codes), OutlierPopulation.COST_PER_CLAIM, config
        ),
        repeatProcedures=detect_outliers(
            claims_per_beneficiary_candidates(codes),
            OutlierPopulation.CLAIMS_PER_BENEFICIARY,
            config,
        ),
        metadata=OutlierMetadata(
            methodology=(
                f"Runtime z-score analysis over snapshot populations "
                f"(threshold: {config.threshold:g} std dev)"
            ),
            source="Aggregate Store snapshot",
            threshold=config.threshold,
            totalProviders=len(snapshot.providerPopulation),
            totalHCPCSCodes=len(codes),
            totalSpending=snapshot.totalSpending,
        ),
    )
    logger.info(
        f"Computed outliers: {len(report.providers)} providers, {len(report.hcpcs)} codes, "
        f"{len(report.costPerClaim)} cost-per-claim, {len(report.repeatProcedures)} repeat"
    )
    return report
