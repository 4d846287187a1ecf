"""
Insight Synthesizer - templated narrative findings over Aggregate Store slices.

A fixed, ordered catalog of 14 independent rules. Each rule:
1. Declares the snapshot slices it reads (InsightRule.slices)
2. Guards on a minimum-data precondition and returns None when unmet
3. Computes its statistics through services.statistics
4. Formats a title, a finding, an implication chosen by a threshold branch,
   and a category tag

Rules never read another rule's output, so each one can be called directly
with just its slices and an InsightConfig.

Rule catalog (in order):
 1. Multi-Year Spending Trajectory       (trend)
 2. Pandemic Impact Pattern              (trend)
 3. Service Category Concentration       (concentration)
 4. Provider Market Concentration        (concentration)
 5. Geographic Provider Distribution     (geographic)
 6. Procedure Cost Outliers              (efficiency)
 7. Seasonal Utilization Patterns        (trend)
 8. Volume vs Cost Driver Divergence     (efficiency)
 9. Provider Size Distribution           (concentration)
10. Focus Category Services Analysis     (efficiency)
11. Per Capita Spending Disparity        (geographic)
12. High-Frequency Repeat Procedures     (anomaly)
13. Urban Spending Concentration         (geographic)
14. Unit Cost Economics                  (efficiency)

Rounding: displayed percentages and multiples are formatted to one decimal place
first, and threshold branches compare the displayed (rounded) value.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from medicaid_insights.models import (
    AggregateSlice,
    AggregateSnapshot,
    CategorySpending,
    CityRecord,
    ClaimsPerBeneficiaryRecord,
    CostPerClaimRecord,
    HcpcsRecord,
    Insight,
    InsightCategory,
    InsightConfig,
    InsightsResponse,
    ProviderTier,
    SeasonalRecord,
    StateRecord,
    YearlyRecord,
)
from medicaid_insights.services.formatting import (
    format_currency,
    format_dollars,
    format_growth,
    format_percent,
    month_name,
)
from medicaid_insights.services.statistics import (
    growth_percent,
    mean,
    percentage_share,
    ratio,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================


def _growth_series(yearly: List[YearlyRecord]) -> List[float]:
    """Stored growth per year, derived from the previous year where missing."""
    series = []
    for index, year in enumerate(yearly):
        if year.growth is not None:
            series.append(year.growth)
        else:
            previous = yearly[index - 1].spending if index > 0 else None
            series.append(growth_percent(previous, year.spending))
    return series


def _valid_cost_per_claim(entries: List[CostPerClaimRecord]) -> List[CostPerClaimRecord]:
    return [e for e in entries if e.costPerClaim is not None]


def _label(definition: Optional[str], code: str) -> str:
    return definition or code


# =============================================================================
# Trend Rules
# =============================================================================


def multi_year_trajectory(yearly: List[YearlyRecord], config: InsightConfig) -> Optional[Insight]:
    """Rule 1: total and average annual growth, plus the year of peak growth."""
    if len(yearly) < config.minYears:
        return None

    first, last = yearly[0], yearly[-1]
    total_growth = percentage_share(last.spending - first.spending, first.spending)
    if total_growth is None:
        return None

    total_str = format_percent(total_growth)
    avg_str = format_percent(float(total_str) / (len(yearly) - 1))

    growth = _growth_series(yearly)
    peak_index = max(range(len(yearly)), key=lambda i: growth[i])
    peak = yearly[peak_index]

    return Insight(
        title="Multi-Year Spending Trajectory",
        finding=(
            f"Total Medicaid spending grew {total_str}% from {first.year} to {last.year}, "
            f"averaging {avg_str}% annually. Peak growth occurred in {peak.year} at "
            f"{format_growth(growth[peak_index])}%."
        ),
        implication=(
            "Growth exceeds typical healthcare inflation (3-5%), suggesting expanding "
            "coverage or rising utilization."
            if float(avg_str) > config.inflationCeilingPct
            else "Growth is within normal healthcare inflation bounds."
        ),
        category=InsightCategory.TREND,
    )


def pandemic_impact(yearly: List[YearlyRecord], config: InsightConfig) -> Optional[Insight]:
    """Rule 2: pandemic-year change vs rebound-year change, when both years are present."""
    growth = _growth_series(yearly)
    by_year: Dict[str, float] = {}
    for year, change in zip(yearly, growth):
        by_year.setdefault(year.year, change)

    if config.pandemicYear not in by_year or config.reboundYear not in by_year:
        return None

    dip = by_year[config.pandemicYear]
    rebound = by_year[config.reboundYear]
    return Insight(
        title="Pandemic Impact Pattern",
        finding=(
            f"{config.pandemicYear} saw {format_growth(dip)}% change vs prior year, followed by "
            f"{format_growth(rebound)}% in {config.reboundYear}. This reflects pandemic-era "
            f"disruption and recovery patterns."
        ),
        implication=(
            f"Sharp {config.reboundYear} rebound suggests deferred care returning, not "
            f"underlying demand growth."
            if rebound > config.pandemicReboundPct
            else f"{config.reboundYear} pattern suggests normalized utilization post-pandemic."
        ),
        category=InsightCategory.TREND,
    )


def seasonal_utilization(
    seasonal: List[SeasonalRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 7: peak and trough months and their spread as a share of the mean."""
    if len(seasonal) < config.seasonalMinMonths:
        return None

    avg_spending = mean([m.spending for m in seasonal])
    peak = max(seasonal, key=lambda m: m.spending)
    trough = min(seasonal, key=lambda m: m.spending)
    variance = percentage_share(peak.spending - trough.spending, avg_spending)
    if variance is None:
        return None

    variance_str = format_percent(variance)
    return Insight(
        title="Seasonal Utilization Patterns",
        finding=(
            f"Spending peaks in month {peak.month} ({month_name(peak.month)}) and troughs in "
            f"month {trough.month} ({month_name(trough.month)}), with {variance_str}% "
            f"variance from mean."
        ),
        implication=(
            "Significant seasonality suggests opportunities for capacity planning and "
            "resource allocation."
            if float(variance_str) > config.seasonalVariancePct
            else "Relatively stable utilization throughout the year."
        ),
        category=InsightCategory.TREND,
    )


# =============================================================================
# Concentration Rules
# =============================================================================


def category_concentration(
    categories: List[CategorySpending], config: InsightConfig
) -> Optional[Insight]:
    """Rule 3: top category share and top-N category share of spending."""
    if not categories:
        return None

    total = sum(c.spending for c in categories)
    top = categories[0]
    top_share = percentage_share(top.spending, total)
    leaders_share = percentage_share(
        sum(c.spending for c in categories[:config.categoryTopN]), total
    )
    if top_share is None or leaders_share is None:
        return None

    leaders_str = format_percent(leaders_share)
    return Insight(
        title="Service Category Concentration",
        finding=(
            f'"{top.category}" accounts for {format_percent(top_share)}% of spending. '
            f"Top {config.categoryTopN} categories represent {leaders_str}% of total expenditure."
        ),
        implication=(
            "High concentration in few categories — targeted interventions could have "
            "outsized impact."
            if float(leaders_str) > config.categoryConcentrationPct
            else "Spending is diversified across service categories."
        ),
        category=InsightCategory.CONCENTRATION,
    )


def provider_market_concentration(
    concentration: List[CategorySpending], config: InsightConfig
) -> Optional[Insight]:
    """Rule 4: share of spending in the top-10 provider bucket vs everyone else."""
    top10 = next((c for c in concentration if c.category == config.top10BucketLabel), None)
    others = next((c for c in concentration if c.category == config.othersBucketLabel), None)
    if top10 is None or others is None:
        return None

    share = percentage_share(top10.spending, sum(c.spending for c in concentration))
    if share is None:
        return None

    share_str = format_percent(share)
    return Insight(
        title="Provider Market Concentration",
        finding=(
            f"Top 10 providers capture {share_str}% of spending. This concentration metric "
            f"serves as a proxy for market competitiveness."
        ),
        implication=(
            "High concentration may indicate limited competition, warranting antitrust "
            "review or alternative provider recruitment."
            if float(share_str) > config.top10SharePct
            else "Market appears reasonably competitive with distributed provider participation."
        ),
        category=InsightCategory.CONCENTRATION,
    )


def provider_size_distribution(
    provider_tiers: List[ProviderTier], config: InsightConfig
) -> Optional[Insight]:
    """Rule 9: share of providers in the smallest and largest billing bands."""
    small = next((t for t in provider_tiers if t.tier == config.smallTierLabel), None)
    large = next((t for t in provider_tiers if t.tier == config.largeTierLabel), None)
    if small is None or large is None:
        return None

    total = sum(t.count for t in provider_tiers)
    small_share = percentage_share(small.count, total)
    large_share = percentage_share(large.count, total)
    if small_share is None or large_share is None:
        return None

    return Insight(
        title="Provider Size Distribution",
        finding=(
            f"{format_percent(small_share)}% of providers bill {config.smallTierLabel} annually, "
            f"while {format_percent(large_share)}% bill {config.largeTierLabel}. This long-tail "
            f"distribution is typical of healthcare markets."
        ),
        implication=(
            "Small providers represent administrative overhead relative to volume; "
            "consolidation or network efficiencies may reduce costs."
        ),
        category=InsightCategory.CONCENTRATION,
    )


# =============================================================================
# Geographic Rules
# =============================================================================


def geographic_provider_distribution(
    top_states: List[StateRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 5: share of all providers held by the top states by provider count."""
    states = [s for s in top_states if s.providers is not None]
    if len(states) < config.minStates:
        return None

    ranked = sorted(states, key=lambda s: -s.providers)
    leaders = ranked[:config.topStatesN]
    share = percentage_share(sum(s.providers for s in leaders), sum(s.providers for s in states))
    if share is None:
        return None

    return Insight(
        title="Geographic Provider Distribution",
        finding=(
            f"Top {len(leaders)} states ({', '.join(s.state for s in leaders)}) account for "
            f"{format_percent(share)}% of all providers. Population-adjusted analysis would "
            f"reveal true access disparities."
        ),
        implication=(
            "Provider density varies significantly by state, potentially affecting "
            "beneficiary access to care."
        ),
        category=InsightCategory.GEOGRAPHIC,
    )


def per_capita_disparity(
    top_states: List[StateRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 11: highest vs lowest per-capita spending among states that report it."""
    states = [s for s in top_states if s.perCapita is not None and s.perCapita > 0]
    if len(states) < config.minStates:
        return None

    ranked = sorted(states, key=lambda s: -s.perCapita)
    highest, lowest = ranked[0], ranked[-1]
    disparity = ratio(highest.perCapita, lowest.perCapita)

    return Insight(
        title="Per Capita Spending Disparity",
        finding=(
            f"{highest.state} spends {format_dollars(highest.perCapita)} per resident vs "
            f"{lowest.state} at {format_dollars(lowest.perCapita)} — a {disparity:.1f}x "
            f"disparity. This gap suggests fundamentally different coverage models or "
            f"eligibility criteria."
        ),
        implication=(
            "Interstate spending variance of this magnitude warrants policy review. "
            "Low-spending states may have access barriers; high-spending states may have "
            "broader coverage or higher utilization."
        ),
        category=InsightCategory.GEOGRAPHIC,
    )


def urban_concentration(top_cities: List[CityRecord], config: InsightConfig) -> Optional[Insight]:
    """Rule 13: the designated city's share of top-10 city spending, when it ranks first."""
    if len(top_cities) < config.cityMinEntries:
        return None
    leader = top_cities[0]
    if leader.city != config.designatedCity:
        return None

    share = percentage_share(leader.spending, sum(c.spending for c in top_cities[:config.cityTopN]))
    if share is None:
        return None

    return Insight(
        title="Urban Spending Concentration",
        finding=(
            f"{config.designatedCityName} alone accounts for {format_percent(share)}% of "
            f"top-{config.cityTopN} city spending at {format_currency(leader.spending)}. "
            f"{config.designatedCityContext}"
        ),
        implication=(
            "Urban concentration reflects population density but also specialized care "
            "networks. Rural-urban access equity should be monitored."
        ),
        category=InsightCategory.GEOGRAPHIC,
    )


# =============================================================================
# Efficiency and Anomaly Rules
# =============================================================================


def procedure_cost_outliers(
    cost_per_claim: List[CostPerClaimRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 6: the costliest procedure per claim as a multiple of the average."""
    entries = _valid_cost_per_claim(cost_per_claim)
    if not entries:
        return None

    highest = max(entries, key=lambda e: e.costPerClaim)
    multiple = ratio(highest.costPerClaim, mean([e.costPerClaim for e in entries]))
    if multiple is None:
        return None

    return Insight(
        title="Procedure Cost Outliers",
        finding=(
            f'"{_label(highest.definition, highest.code)}" ({highest.code}) averages '
            f"{format_currency(highest.costPerClaim)} per claim — {multiple:.1f}x the "
            f"category average."
        ),
        implication=(
            "High-cost outliers warrant clinical review for appropriateness and potential "
            "alternatives."
        ),
        category=InsightCategory.EFFICIENCY,
    )


def volume_cost_divergence(
    top_hcpcs: List[HcpcsRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 8: emitted only when the top code by spending differs from the top code by claims."""
    with_claims = [h for h in top_hcpcs if h.claims is not None]
    if not top_hcpcs or not with_claims:
        return None

    by_spending = max(top_hcpcs, key=lambda h: h.spending)
    by_claims = max(with_claims, key=lambda h: h.claims)
    if by_spending.code == by_claims.code:
        return None

    return Insight(
        title="Volume vs Cost Driver Divergence",
        finding=(
            f"Highest-volume procedure: {_label(by_claims.definition, by_claims.code)} "
            f"({by_claims.code}). Highest-spend procedure: "
            f"{_label(by_spending.definition, by_spending.code)} ({by_spending.code}). "
            f"These differ, indicating distinct cost and utilization drivers."
        ),
        implication=(
            "Cost containment strategies should address both high-volume (frequency) and "
            "high-cost (unit price) procedures separately."
        ),
        category=InsightCategory.EFFICIENCY,
    )


def focus_category_spending(
    top_hcpcs: List[HcpcsRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 10: spending on codes in the focus category (Dental by default)."""
    matches = [h for h in top_hcpcs if h.category == config.focusCategory]
    if len(matches) < config.focusCategoryMinEntries:
        return None

    total = sum(h.spending for h in matches)
    common = ", ".join(_label(h.definition, h.code) for h in matches[:3])
    return Insight(
        title=f"{config.focusCategory} Services Analysis",
        finding=(
            f"{config.focusCategory} procedures ({len(matches)} codes in top {len(top_hcpcs)}) "
            f"total {format_currency(total)}. Common procedures: {common}."
        ),
        implication=config.focusCategoryImplication,
        category=InsightCategory.EFFICIENCY,
    )


def repeat_procedures(
    claims_per_bene: List[ClaimsPerBeneficiaryRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 12: the code with the most claims per beneficiary, plus the top-N list."""
    entries = [e for e in claims_per_bene if e.claimsPerBene is not None]
    if not entries:
        return None

    ranked = sorted(entries, key=lambda e: -e.claimsPerBene)[:config.repeatTopN]
    top = ranked[0]
    return Insight(
        title="High-Frequency Repeat Procedures",
        finding=(
            f'"{_label(top.definition, top.code)}" ({top.code}) averages '
            f"{top.claimsPerBene:.1f} claims per beneficiary — indicating ongoing/chronic "
            f"treatment patterns. Top {len(ranked)} repeat procedures: "
            f"{', '.join(e.code for e in ranked)}."
        ),
        implication=(
            "High claims-per-beneficiary ratios signal chronic care management opportunities. "
            "Bundled payments or care coordination could reduce administrative costs while "
            "maintaining outcomes."
        ),
        category=InsightCategory.ANOMALY,
    )


def unit_cost_economics(
    cost_per_claim: List[CostPerClaimRecord], config: InsightConfig
) -> Optional[Insight]:
    """Rule 14: average of the costliest codes per claim vs the overall average."""
    entries = _valid_cost_per_claim(cost_per_claim)
    if len(entries) < config.unitCostMinEntries:
        return None

    ranked = sorted(entries, key=lambda e: -e.costPerClaim)
    leaders = ranked[:config.unitCostTopN]
    leaders_avg = mean([e.costPerClaim for e in leaders])
    overall = mean([e.costPerClaim for e in entries])
    top = leaders[0]

    return Insight(
        title="Unit Cost Economics",
        finding=(
            f"Top {len(leaders)} costliest procedures average {format_currency(leaders_avg)}/claim "
            f"vs overall average of {format_currency(overall)}/claim. "
            f"{_label(top.definition, top.code)} ({top.code}) leads at "
            f"{format_currency(top.costPerClaim)}/claim."
        ),
        implication=(
            "Gene therapies and specialty drugs drive extreme per-unit costs. These require "
            "separate formulary management and outcomes tracking to justify spend."
        ),
        category=InsightCategory.EFFICIENCY,
    )


# =============================================================================
# Rule Catalog
# =============================================================================


@dataclass(frozen=True)
class InsightRule:
    """
    One catalog entry.

    `evaluate` is called with the declared slices, in order, followed by the
    InsightConfig.
    """
    rule_id: str
    slices: Tuple[AggregateSlice, ...]
    evaluate: Callable[..., Optional[Insight]]


INSIGHT_RULES: Tuple[InsightRule, ...] = (
    InsightRule("multi_year_trajectory", (AggregateSlice.YEARLY,), multi_year_trajectory),
    InsightRule("pandemic_impact", (AggregateSlice.YEARLY,), pandemic_impact),
    InsightRule("category_concentration", (AggregateSlice.CATEGORIES,), category_concentration),
    InsightRule(
        "provider_market_concentration",
        (AggregateSlice.CONCENTRATION,),
        provider_market_concentration,
    ),
    InsightRule(
        "geographic_provider_distribution",
        (AggregateSlice.TOP_STATES,),
        geographic_provider_distribution,
    ),
    InsightRule(
        "procedure_cost_outliers", (AggregateSlice.COST_PER_CLAIM,), procedure_cost_outliers
    ),
    InsightRule("seasonal_utilization", (AggregateSlice.SEASONAL,), seasonal_utilization),
    InsightRule("volume_cost_divergence", (AggregateSlice.TOP_HCPCS,), volume_cost_divergence),
    InsightRule(
        "provider_size_distribution",
        (AggregateSlice.PROVIDER_TIERS,),
        provider_size_distribution,
    ),
    InsightRule("focus_category_spending", (AggregateSlice.TOP_HCPCS,), focus_category_spending),
    InsightRule("per_capita_disparity", (AggregateSlice.TOP_STATES,), per_capita_disparity),
    InsightRule("repeat_procedures", (AggregateSlice.CLAIMS_PER_BENE,), repeat_procedures),
    InsightRule("urban_concentration", (AggregateSlice.TOP_CITIES,), urban_concentration),
    InsightRule("unit_cost_economics", (AggregateSlice.COST_PER_CLAIM,), unit_cost_economics),
)


def evaluate_rule(
    rule: InsightRule,
    snapshot: AggregateSnapshot,
    config: Optional[InsightConfig] = None,
) -> Optional[Insight]:
    """Run a single catalog rule against a snapshot."""
    config = config or InsightConfig()
    slices = [getattr(snapshot, name.value) for name in rule.slices]
    return rule.evaluate(*slices, config)


def generate_insights(
    snapshot: AggregateSnapshot,
    config: Optional[InsightConfig] = None,
) -> List[Insight]:
    """
    Run the full catalog in order.

    Rules whose precondition is unmet are skipped. Identical snapshots always
    produce identical, identically ordered insights.

    Args:
        snapshot: Aggregate Store snapshot
        config: Rule thresholds and labels

    Returns:
        Insights in catalog order
    """
    config = config or InsightConfig()
    insights: List[Insight] = []

    for rule in INSIGHT_RULES:
        insight = evaluate_rule(rule, snapshot, config)
        if insight is None:
            logger.debug(
                f"Skipped insight rule {rule.rule_id}: precondition not met for "
                f"{', '.join(s.value for s in rule.slices)}"
            )
            continue
        insights.append(insight)

    logger.info(f"Generated {len(insights)} insights from {len(INSIGHT_RULES)} rules")
    return insights


def build_insights_response(
    snapshot: AggregateSnapshot,
    config: Optional[InsightConfig] = None,
) -> InsightsResponse:
    """Insights plus per-category counts (every category listed, zero included)."""
    insights = generate_insights(snapshot, config)
    counts = {category.value: 0 for category in InsightCategory}
    for insight in insights:
        counts[insight.category.value] += 1
    return InsightsResponse(
        insights=insights,
        total=len(insights),
        rulesEvaluated=len(INSIGHT_RULES),
        categoryCounts=counts,
    )
