"""
Display formatting for report figures.
"""


def format_number(value: float) -> str:
    """68000 -> '68,000'"""
    return f"{value:,.0f}"


def format_plain_percent(percent: float) -> str:
    """24 -> '24%', 16.5 -> '16.5%'"""
    return f"{percent:g}%"


def format_millions(value: float) -> str:
    """2.35 -> '$2.35 Million'"""
    return f"${value:.2f} Million"


def format_years(value: float) -> str:
    return f"{value:g} Years"


def format_tons(value: float) -> str:
    return f"{format_number(value)} Tons"
