"""Exceptions raised by the affordability engine."""
from __future__ import annotations

from typing import Dict, Optional

NOT_AFFORDABLE_MESSAGE = (
    "Your expenses and debts are too high relative to your income for a mortgage"
)


class AffordabilityError(Exception):
    """Base class for calculation failures."""


class NotAffordableError(AffordabilityError):
    """The ratio limit leaves nothing for principal and interest."""

    def __init__(self, message: str = NOT_AFFORDABLE_MESSAGE, max_pi_payment: Optional[float] = None):
        super().__init__(message)
        self.max_pi_payment = max_pi_payment


class ZeroIncomeError(AffordabilityError, ValueError):
    """A ratio against income was requested while income is zero."""


class InvalidInputError(AffordabilityError, ValueError):
    """Raised when a typed request is built from a form that fails validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)
