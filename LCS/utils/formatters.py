"""
Formatting helpers shared across Streamlit pages.
Currency formatting, status badges, date helpers.
"""

from decimal import Decimal
from datetime import datetime, date
from typing import Optional, Union

from core.models.entities import LoanStatus
from utils.helpers import DateUtils


def format_currency(amount: Union[int, float, Decimal, str, None]) -> str:
    """Format amount as a dollar currency string."""
    if amount is None:
        return "N/A"
    try:
        if isinstance(amount, str):
            amount = Decimal(amount)
        elif isinstance(amount, (int, float)):
            amount = Decimal(str(amount))
        return f"${amount:,.2f}"
    except (ArithmeticError, ValueError):
        return f"${amount}"


def format_date(dt: Union[datetime, date, str, None]) -> str:
    """Format a date or canonical YYYY-MM-DD string for display."""
    if dt is None or dt == "":
        return "N/A"
    if isinstance(dt, str):
        parsed = DateUtils.parse_iso(dt)
        if parsed is None:
            return dt
        dt = parsed
    if isinstance(dt, datetime):
        return dt.strftime("%d %b %Y, %I:%M %p")
    return dt.strftime("%d %b %Y")


def status_badge(status: Optional[LoanStatus]) -> str:
    """Return an emoji + text badge for loan status values."""
    badges = {
        LoanStatus.OUTSTANDING: "🟠 Outstanding",
        LoanStatus.PAID_OFF: "🟢 Paid Off",
    }
    return badges.get(status, str(status))


def to_decimal(value: Union[float, int, str]) -> Decimal:
    """Safely convert a Streamlit number_input value to Decimal."""
    return Decimal(str(value))
