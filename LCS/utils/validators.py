"""
Input Validation Utilities
Provides validation functions for loan collection inputs
"""

from decimal import Decimal
from typing import Any

from core.models.entities import CommunicationType
from utils.exceptions import ValidationException, InvalidPaymentException
from utils.helpers import NumberUtils

class CollectionValidator:
    """Validation utilities for collection operations"""

    @staticmethod
    def validate_payment_amount(amount: Any, outstanding_balance: Decimal) -> Decimal:
        """Validate a payment against the loan's outstanding balance"""
        parsed = NumberUtils.parse_amount(amount)
        if parsed is None or parsed <= 0:
            raise InvalidPaymentException("Please enter a valid positive amount.")

        if parsed > outstanding_balance:
            raise InvalidPaymentException(
                f"Payment amount cannot exceed outstanding balance (${outstanding_balance:,.2f})."
            )

        return parsed

    @staticmethod
    def validate_required_text(value: Any, field_name: str) -> str:
        """Validate a free-text field that must not be blank"""
        if value is None or not str(value).strip():
            raise ValidationException(f"{field_name} cannot be empty.")
        return str(value).strip()

    @staticmethod
    def validate_communication_type(value: Any) -> CommunicationType:
        """Validate communication channel"""
        if isinstance(value, CommunicationType):
            return value
        try:
            return CommunicationType(value)
        except ValueError:
            allowed = ", ".join(t.value for t in CommunicationType)
            raise ValidationException(f"Invalid communication type '{value}'. Allowed: {allowed}")

    @staticmethod
    def validate_agent_fields(name: Any, username: Any) -> tuple:
        """Validate new agent name and username"""
        if not name or not str(name).strip() or not username or not str(username).strip():
            raise ValidationException("Agent name and username cannot be empty.")
        return str(name).strip(), str(username).strip()
