#!/usr/bin/env python3
"""
Tests for the fixed report content and the figure formatting helpers.
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reporting.content import KAZAKHSTAN, TANZANIA, build_report_blocks
from reporting.format_utils import (
    format_millions,
    format_number,
    format_plain_percent,
    format_tons,
    format_years,
)
from reporting.layout import Banner, ClosingPage, CoverPage, PageBreak
from reporting.surface import hex_to_rgb, safe_text


def test_format_helpers():
    cases = [
        (format_number(68_000), "68,000"),
        (format_plain_percent(24), "24%"),
        (format_plain_percent(16.5), "16.5%"),
        (format_millions(2.8), "$2.80 Million"),
        (format_years(2.75), "2.75 Years"),
        (format_tons(30), "30 Tons"),
    ]
    for result, expected in cases:
        assert result == expected, f"expected {expected!r}, got {result!r}"
        print(f"✓ {expected}")


def test_strategy_tables():
    assert TANZANIA.financial_rows() == [
        ("Investment Required", "$2.35 Million"),
        ("Payback Period", "2.75 Years"),
        ("5-Year IRR", "24%"),
        ("EBITDA Margin", "42%"),
        ("Daily Capacity", "30 Tons"),
        ("Annual Output", "68,000 Tons"),
    ]
    assert dict(KAZAKHSTAN.financial_rows())["5-Year IRR"] == "16.5%"
    assert dict(KAZAKHSTAN.financial_rows())["Investment Required"] == "$2.80 Million"


def test_report_block_order():
    generated = date(2026, 3, 2)
    blocks = build_report_blocks(generated)

    assert isinstance(blocks[0], CoverPage)
    assert isinstance(blocks[-1], ClosingPage)
    assert blocks[0].generated_on == blocks[-1].generated_on == generated
    assert sum(isinstance(b, PageBreak) for b in blocks) == 6

    banners = [b.title for b in blocks if isinstance(b, Banner)]
    assert banners == [
        "Key Market Metrics",
        "Recommended Strategy: Tanzania",
        "Alternative Strategy: Kazakhstan",
        "Risk Assessment & Mitigation",
        "Investment Recommendation",
        "Implementation Timeline",
    ]


def test_safe_text():
    assert safe_text("✓ RECOMMENDED") == "+ RECOMMENDED"
    assert safe_text("• item — note") == "- item  -  note"
    assert safe_text(42) == "42"
    assert safe_text("emoji \U0001F4E5") == "emoji ?"


def test_hex_to_rgb():
    assert hex_to_rgb("#10b981") == (16, 185, 129)
    assert hex_to_rgb("ffffff") == (255, 255, 255)
