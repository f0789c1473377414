"""
Fixed content of the Oilseed Investment Strategy report.

The report carries its own snapshot of the strategy, risk and market figures
rather than reading the dashboard fixtures in data/, so a generated PDF stays
stable when the dashboard data is edited. reporting.fixtures can compare the
two and list any drift.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from reporting.format_utils import (
    format_millions,
    format_plain_percent,
    format_tons,
    format_years,
)
from reporting.layout import (
    Banner,
    BulletList,
    ClosingPage,
    ContentBlock,
    CoverPage,
    Heading,
    KeyValueTable,
    LabeledMetric,
    MetricGrid,
    PageBreak,
    RiskItem,
    RiskList,
    Spacer,
    TextRun,
    Timeline,
)

CHECK_MARK = "\u2713"
INFO_MARK = "\u2139"


@dataclass(frozen=True)
class StrategySnapshot:
    """Headline figures for one processing location."""
    key: str
    name: str
    investment_million: float
    payback_years: float
    irr_percent: float
    ebitda_margin_percent: float
    tons_day: float
    annual_output_tons: float

    def financial_rows(self) -> list[tuple[str, str]]:
        return [
            ("Investment Required", format_millions(self.investment_million)),
            ("Payback Period", format_years(self.payback_years)),
            ("5-Year IRR", format_plain_percent(self.irr_percent)),
            ("EBITDA Margin", format_plain_percent(self.ebitda_margin_percent)),
            ("Daily Capacity", format_tons(self.tons_day)),
            ("Annual Output", format_tons(self.annual_output_tons)),
        ]


MARKET_METRICS = [
    LabeledMetric("Total Imports", "16 MT", "Annual edible oil imports"),
    LabeledMetric("Market Value", "$18.3B", "Annual market opportunity"),
    LabeledMetric("Growth Rate", "3.5% CAGR", "Market growth projection"),
    LabeledMetric("Investment", "$2.35M", "Tanzania facility setup"),
]

# Figures as they appear in the market metrics grid
MARKET_IMPORTS_MT = 16
MARKET_VALUE_BILLION_USD = 18.3

TANZANIA = StrategySnapshot(
    key="tanzania",
    name="Tanzania",
    investment_million=2.35,
    payback_years=2.75,
    irr_percent=24,
    ebitda_margin_percent=42,
    tons_day=30,
    annual_output_tons=68_000,
)

KAZAKHSTAN = StrategySnapshot(
    key="kazakhstan",
    name="Kazakhstan",
    investment_million=2.80,
    payback_years=3.25,
    irr_percent=16.5,
    ebitda_margin_percent=28,
    tons_day=35,
    annual_output_tons=82_000,
)

STRATEGIES = [TANZANIA, KAZAKHSTAN]

TANZANIA_SUMMARY = (
    "Strategic Advantages: Direct port access in Dar es Salaam with 0% tariff via DFTP "
    "agreement. Regional sourcing from Zambia, Uganda, and Kenya provides supply security "
    "with cost advantages."
)

TANZANIA_ADVANTAGES = [
    "0% DFTP tariff provides $420/ton cost advantage",
    "Port logistics: 14 days to India vs 25-30 days overland",
    "Regional duty-free inputs from SADC member nations",
    "70% sunflower / 30% soybean product mix",
    "Growing demand creates market entry opportunity (+36% YoY)",
]

KAZAKHSTAN_SUMMARY = (
    "Supply Security: Industrial-scale infrastructure with proven capacity. However, 35% MFN "
    "tariff creates significant cost disadvantage. Better for supply reliability than "
    "financial returns."
)

KAZAKHSTAN_STRENGTHS = [
    "Very low supply/weather risk with industrial infrastructure",
    "80% sunflower / 20% soybean production capability",
    "Proven logistics with established export channels",
    "Supply security premium vs emerging market alternatives",
]

RISKS = [
    RiskItem(
        name="Geopolitical Risk",
        description="Trade policy changes or tariff disputes",
        mitigation="Tanzania: Diversify to other SADC markets. Kazakhstan: Monitor RUS-KAZ relations.",
    ),
    RiskItem(
        name="Supply Volatility",
        description="Agricultural production fluctuations",
        mitigation="Maintain 30-45 day buffer stock. Develop supplier relationships across 3+ countries.",
    ),
    RiskItem(
        name="Quality Control",
        description="Oilseed quality variations from smallholder farmers",
        mitigation="Partner with farmer cooperatives. Implement testing protocols at farm & facility level.",
    ),
    RiskItem(
        name="Market Concentration",
        description="Dependence on Indian market demand",
        mitigation="Develop secondary markets in Bangladesh, Pakistan, Middle East by Year 3.",
    ),
]

RECOMMENDATION = [
    "Superior financial returns (24% vs 16.5% IRR)",
    "Lower tariff barrier (0% DFTP vs 35% MFN)",
    "Faster payback period (2.75 vs 3.25 years)",
    "Strong growth market with increasing demand",
    "Manageable risks with clear mitigation strategies",
]

TIMELINE = [
    ("Phase 1 (Months 1-3)", "Site acquisition, facility design, permitting"),
    ("Phase 2 (Months 4-9)", "Equipment procurement, construction, installation"),
    ("Phase 3 (Months 10-12)", "Testing, certification, initial operations ramp"),
    ("Year 2", "Full capacity operations, supplier network development"),
]

INTRO = (
    "Comprehensive analysis of oilseed processing and export opportunities to India's "
    "growing edible oil market. This report evaluates two strategic locations and provides "
    "financial projections with risk assessments."
)

CLOSING_SUMMARY = (
    "This comprehensive analysis demonstrates a compelling investment opportunity with strong "
    "financial returns, manageable risks, and clear mitigation strategies. The Tanzania "
    "location offers superior economics with a 2.75-year payback period and 24% IRR."
)


def strategy_section(
    title: str,
    badge: str,
    summary: str,
    strategy: StrategySnapshot,
    list_title: str,
    items: list[str],
) -> list[ContentBlock]:
    """Banner, positioning paragraph, financial table and bullet list for one location."""
    return [
        Banner(title),
        Spacer(2),
        Heading(badge, size=12, advance=5),
        TextRun(summary, size=10, space_after=6),
        Spacer(3),
        Heading("Financial Projections:", advance=8),
        KeyValueTable(strategy.financial_rows()),
        Spacer(5),
        Heading(list_title, advance=7),
        BulletList(items),
    ]


def build_report_blocks(generated_on: Optional[date] = None) -> list[ContentBlock]:
    """
    Ordered content of the seven-page report.

    Pages: cover, key market metrics, Tanzania strategy, Kazakhstan strategy,
    risk assessment, recommendation and timeline, closing page.
    """
    generated_on = generated_on or date.today()

    return [
        CoverPage(
            title="Oilseed Investment Strategy",
            subtitle="Tanzania & Kazakhstan Analysis",
            heading="Executive Investment Opportunity",
            intro=INTRO,
            generated_on=generated_on,
        ),
        PageBreak(),
        Banner("Key Market Metrics"),
        MetricGrid(MARKET_METRICS),
        PageBreak(),
        *strategy_section(
            "Recommended Strategy: Tanzania",
            f"{CHECK_MARK} RECOMMENDED LOCATION",
            TANZANIA_SUMMARY,
            TANZANIA,
            "Competitive Advantages:",
            TANZANIA_ADVANTAGES,
        ),
        PageBreak(),
        *strategy_section(
            "Alternative Strategy: Kazakhstan",
            f"{INFO_MARK} ALTERNATIVE LOCATION",
            KAZAKHSTAN_SUMMARY,
            KAZAKHSTAN,
            "Key Strengths:",
            KAZAKHSTAN_STRENGTHS,
        ),
        PageBreak(),
        Banner("Risk Assessment & Mitigation"),
        RiskList(RISKS),
        PageBreak(),
        Banner("Investment Recommendation"),
        Spacer(3),
        Heading("Primary Recommendation: Tanzania Investment", size=12, advance=8),
        BulletList(RECOMMENDATION, marker=CHECK_MARK, size=10, space_after=5),
        Spacer(8),
        Banner("Implementation Timeline"),
        Spacer(2),
        Timeline(TIMELINE),
        PageBreak(),
        ClosingPage(
            headline="Investment Ready",
            summary=CLOSING_SUMMARY,
            call_to_action="Ready to proceed with Phase 1 implementation",
            generated_on=generated_on,
        ),
    ]
