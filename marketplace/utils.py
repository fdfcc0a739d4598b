"""
Formatting helpers shared by models and serializers.
"""

from decimal import Decimal


def _is_set(amount):
    # Zero bounds count as unset
    return amount is not None and Decimal(str(amount)) != 0


def _format_amount(amount):
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), 'f')


def format_budget(budget_min, budget_max):
    """
    Render a budget range for display.

    Examples:
        format_budget(25, 100) -> "$25 - $100"
        format_budget(25, None) -> "$25+"
        format_budget(None, 100) -> "Up to $100"
        format_budget(None, None) -> "Budget not specified"
    """
    has_min = _is_set(budget_min)
    has_max = _is_set(budget_max)

    if has_min and has_max:
        return f"${_format_amount(budget_min)} - ${_format_amount(budget_max)}"
    if has_min:
        return f"${_format_amount(budget_min)}+"
    if has_max:
        return f"Up to ${_format_amount(budget_max)}"
    return "Budget not specified"


def suggest_agreed_price(budget_min, budget_max):
    """
    Midpoint of the budget when both bounds are set, else whichever is set.

    Returns:
        Decimal or None
    """
    has_min = _is_set(budget_min)
    has_max = _is_set(budget_max)

    if has_min and has_max:
        return (Decimal(str(budget_min)) + Decimal(str(budget_max))) / 2
    if has_min:
        return Decimal(str(budget_min))
    if has_max:
        return Decimal(str(budget_max))
    return None
