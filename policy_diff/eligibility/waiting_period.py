"""
Waiting-period eligibility for claims.

Checks whether enough days have elapsed between policy start and a
treatment date for a given treatment category.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from ..ingestion.field_schema import DEFAULT_FIELD_SCHEMA, FieldSchema

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of a waiting-period check."""

    eligible: bool
    treatment_type: str
    label: str
    required_days: int
    days_elapsed: int
    remaining_days: int
    message: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'eligible': self.eligible,
            'treatment_type': self.treatment_type,
            'label': self.label,
            'required_days': self.required_days,
            'days_elapsed': self.days_elapsed,
            'remaining_days': self.remaining_days,
            'message': self.message,
        }


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


class WaitingPeriodChecker:
    """Evaluates claim eligibility against configured waiting periods."""

    def __init__(self, schema: FieldSchema = DEFAULT_FIELD_SCHEMA):
        self.schema = schema

    def check(
        self,
        policy_start: DateLike,
        treatment_date: DateLike,
        treatment_type: str
    ) -> EligibilityResult:
        """
        Check a claim against its waiting period.

        Args:
            policy_start: Policy inception date
            treatment_date: Date of hospitalization or treatment
            treatment_type: Category key, e.g. "maternity"

        Returns:
            EligibilityResult

        Raises:
            ValueError: if a date string is not ISO formatted
        """
        period = self.schema.waiting_period(treatment_type)
        elapsed = (_as_date(treatment_date) - _as_date(policy_start)).days

        if elapsed < 0:
            return EligibilityResult(
                eligible=False,
                treatment_type=treatment_type,
                label=period.label,
                required_days=period.days,
                days_elapsed=elapsed,
                remaining_days=period.days,
                message="Invalid dates: treatment date cannot be before policy start date."
            )

        if elapsed >= period.days:
            return EligibilityResult(
                eligible=True,
                treatment_type=treatment_type,
                label=period.label,
                required_days=period.days,
                days_elapsed=elapsed,
                remaining_days=0,
                message=(
                    f"Claim is eligible. Waiting period of {period.days} days "
                    f"completed for {period.label}."
                )
            )

        remaining = period.days - elapsed
        return EligibilityResult(
            eligible=False,
            treatment_type=treatment_type,
            label=period.label,
            required_days=period.days,
            days_elapsed=elapsed,
            remaining_days=remaining,
            message=(
                f"Claim is not eligible yet. Waiting period not completed for "
                f"{period.label}. {remaining} day(s) remaining out of "
                f"{period.days} required."
            )
        )
