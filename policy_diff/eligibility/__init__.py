"""Eligibility module for waiting-period checks."""

from .waiting_period import WaitingPeriodChecker, EligibilityResult

__all__ = [
    "WaitingPeriodChecker",
    "EligibilityResult",
]
