from __future__ import annotations

import math
import re
from typing import Dict, List, Optional

from ..models.common import round_currency, round_pct
from ..models.costs import CostBehavior
from ..models.results import ClassificationResult, Confidence, PatternAnalysis, SuggestedValue
from .fiscal_calendar import fiscal_month_number, quarter_of_fiscal_month


TEAM_COST_KEYWORDS = [
    "salary", "salaries", "wage", "wages", "payroll",
    "superannuation", "super guarantee", "sgc",
    "contractor", "subcontractor", "labour", "labor",
    "workers comp", "workers compensation", "workcover",
    "staff cost", "employee", "personnel",
    "director fee", "directors fee",
    "annual leave", "sick leave", "leave provision", "leave entitlement",
    "fringe benefit", "fbt", "allowance",
    "payroll tax", "payroll levy",
]

CLASSIFICATION_PATTERNS: Dict[CostBehavior, List[str]] = {
    CostBehavior.SEASONAL: [
        "electricity", "electric", "power", "gas", "natural gas", "water", "sewerage",
        "utilities", "utility", "energy",
        "heating", "cooling", "hvac", "air conditioning", "aircon",
        "christmas", "xmas", "eofy", "end of financial year",
        "black friday", "cyber monday", "boxing day", "seasonal", "holiday", "festive",
    ],
    CostBehavior.VARIABLE: [
        "marketing", "advertising", "advert", "promo",
        "google ads", "facebook ads", "meta ads", "linkedin ads",
        "social media", "seo", "sem", "ppc", "digital marketing", "campaign", "promotion",
        "merchant", "payment processing", "transaction fee",
        "stripe", "square", "paypal", "eftpos", "credit card fee", "card fee", "gateway",
        "freight", "shipping", "postage", "delivery", "courier", "packaging",
        "commission", "referral", "affiliate", "sales expense", "selling expense",
        "client entertainment", "gift",
        "printing", "stationery", "office supplies", "consumable", "toner",
        "direct cost", "variable cost", "job cost", "material", "supplies",
    ],
    CostBehavior.ADHOC: [
        "travel", "travelling", "traveling", "airfare", "flight", "accommodation", "hotel",
        "uber", "taxi", "parking", "toll", "tolls", "car hire", "vehicle hire",
        "motor vehicle", "vehicle expense", "fuel", "petrol", "diesel", "mileage",
        "repair", "maintenance", "r&m",
        "legal", "lawyer", "solicitor", "consulting", "consultant", "advisor", "advisory",
        "training", "course", "workshop", "seminar", "conference", "education", "coaching",
        "equipment", "computer", "laptop", "hardware", "minor asset",
        "recruitment", "recruiting", "hiring",
        "one-off", "one off", "sundry", "miscellaneous", "general expense",
    ],
    CostBehavior.FIXED: [
        "rent", "lease", "premises", "occupancy", "strata", "council rate", "land tax",
        "insurance", "public liability", "professional indemnity",
        "subscription", "software", "saas", "license", "licence",
        "xero", "myob", "quickbooks", "microsoft", "office 365", "adobe", "google workspace",
        "slack", "zoom", "dropbox", "hubspot", "salesforce", "canva", "aws", "azure",
        "telephone", "phone", "mobile", "internet", "broadband", "nbn",
        "membership", "dues", "association", "registration", "accreditation",
        "cleaning", "security", "alarm", "pest control", "waste", "rubbish",
        "bookkeep", "accounting fee", "accountant", "audit", "tax agent",
        "it support", "managed service",
        "bank fee", "bank charge", "interest", "finance charge",
        "depreciation", "amortisation", "amortization",
        "hosting", "domain", "website",
    ],
}

CHECK_ORDER = [CostBehavior.SEASONAL, CostBehavior.VARIABLE, CostBehavior.ADHOC, CostBehavior.FIXED]

INDUSTRY_OVERRIDES: Dict[str, Dict[str, CostBehavior]] = {
    "retail": {"marketing": CostBehavior.SEASONAL, "advertising": CostBehavior.SEASONAL, "packaging": CostBehavior.VARIABLE},
    "restaurant": {"cleaning": CostBehavior.VARIABLE, "food": CostBehavior.VARIABLE, "supplies": CostBehavior.VARIABLE},
    "hospitality": {"cleaning": CostBehavior.VARIABLE, "laundry": CostBehavior.VARIABLE, "amenities": CostBehavior.VARIABLE},
    "construction": {
        "equipment": CostBehavior.ADHOC,
        "hire": CostBehavior.ADHOC,
        "scaffolding": CostBehavior.ADHOC,
        "fuel": CostBehavior.VARIABLE,
        "material": CostBehavior.VARIABLE,
    },
    "trades": {"fuel": CostBehavior.VARIABLE, "material": CostBehavior.VARIABLE, "tool": CostBehavior.ADHOC},
    "accounting": {"marketing": CostBehavior.FIXED, "software": CostBehavior.FIXED},
    "consulting": {"marketing": CostBehavior.FIXED, "travel": CostBehavior.VARIABLE},
    "medical": {"supplies": CostBehavior.VARIABLE, "consumable": CostBehavior.VARIABLE},
    "saas": {"hosting": CostBehavior.FIXED, "cloud": CostBehavior.FIXED, "infrastructure": CostBehavior.FIXED},
    "ecommerce": {"shipping": CostBehavior.VARIABLE, "merchant": CostBehavior.VARIABLE, "platform": CostBehavior.FIXED},
    "manufacturing": {"material": CostBehavior.VARIABLE, "freight": CostBehavior.VARIABLE},
    "agriculture": {"fuel": CostBehavior.SEASONAL, "supplies": CostBehavior.SEASONAL, "water": CostBehavior.SEASONAL},
}


def normalize_account_name(name: str) -> str:
    normalized = name.lower()
    normalized = re.sub(r"^\d+[-.]?\d*\s*", "", normalized)
    normalized = re.sub(r"^(expense|opex|cost|overhead)[\s:-]+", "", normalized)
    normalized = re.sub(r"[^\w\s&-]", " ", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


def _matches(text: str, keyword: str) -> bool:
    if len(keyword) <= 3:
        return re.search(rf"\b{re.escape(keyword)}\b", text) is not None
    return keyword in text


def is_team_cost(account_name: str) -> bool:
    normalized = normalize_account_name(account_name)
    if re.search(r"\bsuper\b", normalized) and "supermarket" not in normalized:
        return True
    return any(keyword in normalized for keyword in TEAM_COST_KEYWORDS)


def classify_by_name(account_name: str, industry: Optional[str] = None) -> ClassificationResult:
    if is_team_cost(account_name):
        return ClassificationResult(
            behavior=CostBehavior.FIXED,
            confidence=Confidence.HIGH,
            reason="Team cost - plan it with the team instead",
            is_team_cost=True,
        )
    normalized = normalize_account_name(account_name)

    if industry:
        overrides = INDUSTRY_OVERRIDES.get(re.sub(r"[_\s-]+", "", industry.lower()), {})
        for keyword, behavior in overrides.items():
            if _matches(normalized, keyword):
                return ClassificationResult(behavior=behavior, confidence=Confidence.HIGH, reason=f"Industry-specific ({industry})")

    for behavior in CHECK_ORDER:
        for keyword in CLASSIFICATION_PATTERNS[behavior]:
            if _matches(normalized, keyword):
                return ClassificationResult(behavior=behavior, confidence=Confidence.HIGH, reason=f'Matched: "{keyword}"')

    return ClassificationResult(
        behavior=CostBehavior.ADHOC,
        confidence=Confidence.LOW,
        reason="Could not auto-classify - please review",
    )


def _has_seasonal_quarters(monthly: Dict[str, float]) -> bool:
    quarters: List[List[float]] = [[], [], [], []]
    for key, value in monthly.items():
        quarters[quarter_of_fiscal_month(fiscal_month_number(key)) - 1].append(value)
    averages = [sum(values) / len(values) if values else 0.0 for values in quarters]
    mean = sum(averages) / 4
    if mean == 0:
        return False
    variance = sum((value - mean) ** 2 for value in averages) / 4
    return math.sqrt(variance) / mean > 0.25


def analyze_pattern(monthly: Dict[str, float]) -> PatternAnalysis:
    values = [value for value in monthly.values() if value is not None]
    if len(values) < 3:
        return PatternAnalysis()
    mean = sum(values) / len(values)
    if mean == 0:
        return PatternAnalysis(suggested_behavior=CostBehavior.ADHOC, is_spiky=True)

    variance = sum((value - mean) ** 2 for value in values) / len(values)
    cv = math.sqrt(variance) / mean
    is_spiky = len([value for value in values if value == 0 or value < mean * 0.1]) >= 3
    has_seasonal = _has_seasonal_quarters(monthly)

    suggested: Optional[CostBehavior] = None
    if cv < 0.15:
        suggested = CostBehavior.FIXED
    elif cv > 0.5:
        if has_seasonal:
            suggested = CostBehavior.SEASONAL
        elif is_spiky:
            suggested = CostBehavior.ADHOC
    return PatternAnalysis(suggested_behavior=suggested, coefficient=cv, is_spiky=is_spiky, has_seasonal=has_seasonal)


def classify_expense(
    account_name: str,
    prior_year_monthly: Optional[Dict[str, float]] = None,
    industry: Optional[str] = None,
) -> ClassificationResult:
    by_name = classify_by_name(account_name, industry)
    if by_name.is_team_cost or not prior_year_monthly or len(prior_year_monthly) < 3:
        return by_name

    pattern = analyze_pattern(prior_year_monthly)
    if pattern.suggested_behavior is None:
        return by_name
    if by_name.confidence == Confidence.LOW:
        return ClassificationResult(
            behavior=pattern.suggested_behavior,
            confidence=Confidence.MEDIUM,
            reason=f"Pattern analysis (CV={pattern.coefficient:.2f})",
        )
    if pattern.suggested_behavior != by_name.behavior:
        return by_name.model_copy(
            update={
                "confidence": Confidence.MEDIUM,
                "reason": f"{by_name.reason} (pattern suggests {pattern.suggested_behavior.value})",
            }
        )
    return by_name


def suggested_value(
    behavior: CostBehavior,
    prior_year_annual: float,
    revenue_target: float = 0.0,
    default_growth_pct: float = 3.0,
) -> SuggestedValue:
    if behavior == CostBehavior.FIXED:
        return SuggestedValue(value=round_currency(prior_year_annual / 12), unit="/mo")
    if behavior == CostBehavior.VARIABLE:
        if revenue_target > 0:
            return SuggestedValue(value=round_pct(prior_year_annual / revenue_target * 100), unit="% rev")
        return SuggestedValue(value=0.0, unit="% rev")
    if behavior == CostBehavior.SEASONAL:
        return SuggestedValue(value=default_growth_pct, unit="% growth")
    return SuggestedValue(value=prior_year_annual, unit="/yr")
