"""
Utility functions for the application.
"""
from typing import Any, Dict
from decimal import Decimal, ROUND_HALF_UP, localcontext

CENT = Decimal("0.01")


def round_cents(value: Decimal) -> Decimal:
    """Round a monetary value half-up to two decimal places."""
    with localcontext() as ctx:
        # Keep every integer digit plus the cents
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
