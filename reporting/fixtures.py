"""
Dashboard data fixtures: market, strategy and risk JSON documents.

The dashboard views read these files; the PDF report does not (it renders its
own snapshot from reporting.content). check_snapshot_consistency() lists where
the two have drifted apart so the snapshot can be refreshed deliberately.
"""

import json
import math
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from config.logging import logger
from config.settings import settings
from reporting import content

MARKET_FILE = "marketData.json"
STRATEGIES_FILE = "strategiesData.json"
RISK_FILE = "riskData.json"


class FixtureError(Exception):
    """A fixture file is missing or does not match the expected document shape."""


# ── market data ──

class Supplier(BaseModel):
    country: str
    share: float
    color: str


class OilType(BaseModel):
    oil_type: str
    imports_mt: float
    percentage: float
    status: str
    suppliers: list[Supplier] = Field(default_factory=list)


class TotalImports(BaseModel):
    volume_mt: float
    value_billion_usd: float


class MarketData(BaseModel):
    india_total_imports: TotalImports
    oil_breakdown: list[OilType]


# ── strategy data ──

class Financial(BaseModel):
    payback_years: float
    irr_5yr_percent: float
    ebitda_margin: float


class Capacity(BaseModel):
    tons_day: float
    annual_output_tons: float


class Investment(BaseModel):
    total_million: float


class TariffAndLogistics(BaseModel):
    tariff_access: str
    tariff_advantage: Optional[str] = None
    tariff_disadvantage: Optional[str] = None
    logistics_days: float


class Strategy(BaseModel):
    id: str
    name: str
    badge: str = ""
    badge_color: str = ""
    location: str
    color: str = ""
    financial: Financial
    capacity: Capacity
    investment: Investment
    tariff_and_logistics: TariffAndLogistics
    competitive_advantages: list[str] = Field(default_factory=list)


class KeyFactor(BaseModel):
    factor: str
    tanzania: str
    kazakhstan: str
    winner: str


class StrategiesData(BaseModel):
    strategies: list[Strategy]
    comparison_key_factors: list[KeyFactor] = Field(default_factory=list)

    def get(self, strategy_id: str) -> Optional[Strategy]:
        return next((s for s in self.strategies if s.id == strategy_id), None)


# ── risk data ──

class Risk(BaseModel):
    id: str
    name: str
    description: str
    probability: str
    tanzania_risk_level: int
    kazakhstan_risk_level: int
    tanzania_impact: str
    kazakhstan_impact: str
    mitigation: str


class RiskData(BaseModel):
    risks: list[Risk]


# ── loaders ──

def _load(model: type[BaseModel], filename: str, path: Optional[Path] = None):
    path = Path(path) if path else settings.DATA_DIR / filename
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return model.model_validate(raw)
    except FileNotFoundError as exc:
        raise FixtureError(f"Fixture not found: {path}") from exc
    except (json.JSONDecodeError, ValidationError) as exc:
        raise FixtureError(f"Invalid fixture {path}: {exc}") from exc


def load_market_data(path: Optional[Path] = None) -> MarketData:
    return _load(MarketData, MARKET_FILE, path)


def load_strategies_data(path: Optional[Path] = None) -> StrategiesData:
    return _load(StrategiesData, STRATEGIES_FILE, path)


def load_risk_data(path: Optional[Path] = None) -> RiskData:
    return _load(RiskData, RISK_FILE, path)


# ── snapshot comparison ──

def _compare(label: str, report_value: float, fixture_value: float, issues: list[str]) -> None:
    if not math.isclose(report_value, fixture_value, rel_tol=1e-9, abs_tol=1e-9):
        issues.append(f"{label}: report has {report_value:g}, fixtures have {fixture_value:g}")


def check_snapshot_consistency(
    market: Optional[MarketData] = None,
    strategies: Optional[StrategiesData] = None,
    risks: Optional[RiskData] = None,
) -> list[str]:
    """
    Compare the report's embedded figures with the dashboard fixtures.

    Any document not passed in is loaded from settings.DATA_DIR.

    Returns:
        Human-readable discrepancies (empty when the two agree)
    """
    market = market if market is not None else load_market_data()
    strategies = strategies if strategies is not None else load_strategies_data()
    risks = risks if risks is not None else load_risk_data()
    issues: list[str] = []

    imports = market.india_total_imports
    _compare("Total imports (MT)", content.MARKET_IMPORTS_MT, imports.volume_mt, issues)
    _compare("Market value ($B)", content.MARKET_VALUE_BILLION_USD, imports.value_billion_usd, issues)

    for snap in content.STRATEGIES:
        strategy = strategies.get(snap.key)
        if strategy is None:
            issues.append(f"Strategy '{snap.key}' is in the report but missing from fixtures")
            continue
        name = snap.name
        _compare(f"{name} investment ($M)", snap.investment_million, strategy.investment.total_million, issues)
        _compare(f"{name} payback (years)", snap.payback_years, strategy.financial.payback_years, issues)
        _compare(f"{name} 5-year IRR (%)", snap.irr_percent, strategy.financial.irr_5yr_percent, issues)
        _compare(f"{name} EBITDA margin (%)", snap.ebitda_margin_percent, strategy.financial.ebitda_margin, issues)
        _compare(f"{name} daily capacity (t)", snap.tons_day, strategy.capacity.tons_day, issues)
        _compare(f"{name} annual output (t)", snap.annual_output_tons, strategy.capacity.annual_output_tons, issues)

    report_risks = {r.name for r in content.RISKS}
    fixture_risks = {r.name for r in risks.risks}
    for name in sorted(report_risks - fixture_risks):
        issues.append(f"Risk '{name}' is in the report but missing from fixtures")
    for name in sorted(fixture_risks - report_risks):
        issues.append(f"Risk '{name}' is in fixtures but not covered by the report")

    logger.debug(f"Snapshot consistency check: {len(issues)} discrepancies")
    return issues
