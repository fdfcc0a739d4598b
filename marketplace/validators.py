"""
Custom validators for marketplace models.
"""

import re
from decimal import Decimal

from django.core.exceptions import ValidationError


def validate_phone_number(value):
    """
    Validate phone number format.

    Accepts international formats with optional country codes, spaces, dashes, and parentheses.
    Requires at least 10 digits.

    Valid formats:
    - +1-234-567-8900
    - +44 20 7946 0958
    - +1 (234) 567-8900
    - 234-567-8900
    - 2345678900

    Args:
        value: Phone number string to validate

    Raises:
        ValidationError: If phone number format is invalid
    """
    if not value:  # Optional field
        return

    if not re.match(r'^[\d\s\-\+\(\)]+$', value):
        raise ValidationError(
            'Phone number can only contain digits, spaces, dashes, parentheses, and plus sign.',
            code='invalid_phone_chars'
        )

    digits = re.sub(r'\D', '', value)

    if len(digits) < 10:
        raise ValidationError(
            'Phone number must contain at least 10 digits.',
            code='phone_too_short'
        )

    if len(set(digits)) == 1:
        raise ValidationError(
            'Phone number cannot be all the same digit.',
            code='invalid_phone_pattern'
        )


def validate_non_negative_amount(value):
    """
    Validate a money amount (budget, agreed price, hourly rate) is not negative.

    Args:
        value: Decimal amount or None

    Raises:
        ValidationError: If the amount is below zero
    """
    if value is None:
        return

    if Decimal(str(value)) < 0:
        raise ValidationError(
            'Amount cannot be negative.',
            code='negative_amount'
        )


def validate_not_blank(value):
    """
    Validate a required text value contains something other than whitespace.

    Raises:
        ValidationError: If the value is empty or whitespace-only
    """
    if value is None or not str(value).strip():
        raise ValidationError(
            'This field cannot be blank.',
            code='blank'
        )
