#!/usr/bin/env python3
"""
Tests for the dashboard fixture loaders and the snapshot consistency check.
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reporting.fixtures import (
    FixtureError,
    check_snapshot_consistency,
    load_market_data,
    load_risk_data,
    load_strategies_data,
)


def test_bundled_fixtures_load():
    market = load_market_data()
    strategies = load_strategies_data()
    risks = load_risk_data()

    assert market.india_total_imports.volume_mt == 16
    assert {o.oil_type for o in market.oil_breakdown} >= {"Soybean", "Sunflower"}
    assert [s.id for s in strategies.strategies] == ["tanzania", "kazakhstan"]
    assert strategies.get("tanzania").tariff_and_logistics.tariff_access == "0% DFTP"
    assert strategies.get("missing") is None
    assert len(risks.risks) == 4


def test_snapshot_matches_bundled_fixtures():
    issues = check_snapshot_consistency()
    assert issues == [], issues


def test_snapshot_drift_is_reported():
    strategies = load_strategies_data()
    strategies.get("tanzania").financial.irr_5yr_percent = 30
    risks = load_risk_data()
    risks.risks[0].name = "Currency Risk"

    issues = check_snapshot_consistency(strategies=strategies, risks=risks)

    assert "Tanzania 5-year IRR (%): report has 24, fixtures have 30" in issues
    assert "Risk 'Geopolitical Risk' is in the report but missing from fixtures" in issues
    assert "Risk 'Currency Risk' is in fixtures but not covered by the report" in issues
    assert len(issues) == 3


def test_missing_strategy_is_reported():
    strategies = load_strategies_data()
    strategies.strategies = strategies.strategies[:1]
    issues = check_snapshot_consistency(strategies=strategies)
    assert issues == ["Strategy 'kazakhstan' is in the report but missing from fixtures"]


def test_missing_fixture_raises(tmp_path):
    with pytest.raises(FixtureError, match="not found"):
        load_market_data(tmp_path / "marketData.json")


def test_invalid_fixture_raises(tmp_path):
    bad_json = tmp_path / "riskData.json"
    bad_json.write_text("{not json", encoding="utf-8")
    with pytest.raises(FixtureError, match="Invalid fixture"):
        load_risk_data(bad_json)

    wrong_shape = tmp_path / "strategiesData.json"
    wrong_shape.write_text(json.dumps({"strategies": [{"id": "tanzania"}]}), encoding="utf-8")
    with pytest.raises(FixtureError, match="Invalid fixture"):
        load_strategies_data(wrong_shape)
