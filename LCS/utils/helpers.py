"""
Helper Utilities
Common utility functions for loan collection operations
"""

import re
import uuid
from decimal import Decimal, InvalidOperation
from datetime import datetime, date
from typing import Optional, Dict, Any
import logging

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

class NumberUtils:
    """Utility functions for number operations"""

    @staticmethod
    def parse_amount(value: Any) -> Optional[Decimal]:
        """Read a monetary amount from a cell or form value.

        Thousands separators, currency symbols and surrounding spaces are
        ignored. Returns None for anything that is not a finite number.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, Decimal):
            return value if value.is_finite() else None

        text = re.sub(r'[,\s$₹]', '', str(value))
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None

    @staticmethod
    def parse_int(value: Any) -> Optional[int]:
        """Read the leading integer of a value ("18 months" -> 18)"""
        if value is None or isinstance(value, bool):
            return None
        match = re.match(r'\s*([-+]?\d+)', str(value))
        return int(match.group(1)) if match else None

    @staticmethod
    def to_json_number(amount: Optional[Decimal]):
        """Convert a Decimal for JSON output, keeping whole amounts as ints"""
        if amount is None:
            return None
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)

class DateUtils:
    """Utility functions for date operations"""

    @staticmethod
    def today() -> date:
        """Current local calendar date"""
        return date.today()

    @staticmethod
    def parse_iso(value: Optional[str]) -> Optional[date]:
        """Parse a canonical YYYY-MM-DD string"""
        if not value:
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    @staticmethod
    def add_months(start_date: date, months: int) -> date:
        """Add months to a date, clamping to the end of shorter months"""
        return start_date + relativedelta(months=months)

    @staticmethod
    def is_past(due_date: Optional[str], today: date = None) -> bool:
        """True when today is strictly after the given canonical date"""
        due = DateUtils.parse_iso(due_date)
        if due is None:
            return False
        if today is None:
            today = DateUtils.today()
        return today > due

class StringUtils:
    """Utility functions for string operations"""

    @staticmethod
    def generate_id() -> str:
        """Generate an opaque unique identifier"""
        return str(uuid.uuid4())

    @staticmethod
    def normalize_header(header: Any) -> str:
        """Lower-case a spreadsheet header and strip all whitespace"""
        if header is None:
            return ""
        return re.sub(r'\s+', '', str(header)).lower()

    @staticmethod
    def contains_ignore_case(haystack: Optional[str], needle: str) -> bool:
        """Case-insensitive substring check tolerant of missing values"""
        if haystack is None:
            return False
        return needle.lower() in str(haystack).lower()

class LoggingUtils:
    """Logging utility functions"""

    @staticmethod
    def log_security_event(event_type: str, user_id: str = None,
                          details: Dict[str, Any] = None):
        """Log security events"""
        log_data = {
            'event_type': event_type,
            'user_id': user_id,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.warning(f"Security Event: {event_type}", extra=log_data)

    @staticmethod
    def log_business_event(event_type: str, entity_type: str, entity_id: str,
                          user_id: str = None, details: Dict[str, Any] = None):
        """Log business events"""
        log_data = {
            'event_type': event_type,
            'entity_type': entity_type,
            'entity_id': entity_id,
            'user_id': user_id,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.info(f"Business Event: {event_type} on {entity_type} {entity_id}", extra=log_data)
