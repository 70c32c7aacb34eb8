"""
Field configuration for policy normalization.

Keyword lists, fallback values and waiting-period durations live here as
immutable tables so new policy schemas can be supported without touching
the matching logic in the normalizer.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

REFER_TO_POLICY = "Refer to policy document"
NOT_COVERED = "Not covered"


@dataclass(frozen=True)
class FieldRule:
    """
    Keyword rule for one section-derived comparison field.

    Attributes:
        name: Field name in the ComparisonRecord
        keywords: Lowercase phrases matched against section titles
        default: Value used when no section title matches
        default_template: Optional format string filled from the record's
            metadata values; takes precedence over ``default``
    """
    name: str
    keywords: tuple[str, ...]
    default: Any = REFER_TO_POLICY
    default_template: Optional[str] = None

    def matches(self, title: str) -> bool:
        lowered = title.lower()
        return any(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class WaitingPeriod:
    """Waiting period for a treatment category."""
    days: int
    label: str


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class FieldSchema:
    """Complete normalization configuration."""
    metadata_defaults: Mapping[str, Any]
    section_rules: tuple[FieldRule, ...]
    waiting_periods: Mapping[str, WaitingPeriod] = field(default_factory=lambda: _frozen({}))
    default_waiting_days: int = 30

    @property
    def field_names(self) -> list[str]:
        """All record fields in output order."""
        return list(self.metadata_defaults) + [rule.name for rule in self.section_rules]

    def waiting_period(self, treatment_type: str) -> WaitingPeriod:
        """Look up a treatment's waiting period, falling back to the default."""
        period = self.waiting_periods.get(treatment_type)
        if period is None:
            return WaitingPeriod(days=self.default_waiting_days, label=treatment_type)
        return period


# Root-level scalar fields; network_hospitals is reported as a count
METADATA_DEFAULTS = _frozen({
    'policy_name': "Unknown Policy",
    'insurer': "Unknown Insurer",
    'sum_insured': 0,
    'premium_amount': 0,
    'policy_type': "Not specified",
    'network_hospitals': 0,
})

# Order matters only for output; matching is per field
SECTION_RULES = (
    FieldRule('initial_waiting', ('initial waiting',)),
    FieldRule('pre_existing_waiting', ('pre-existing', 'pre existing')),
    FieldRule('specific_disease_waiting', ('specific disease', 'specified disease')),
    FieldRule('maternity', ('maternity',), default=NOT_COVERED),
    FieldRule('room_rent', ('room rent',), default="No sub-limit specified"),
    FieldRule(
        'hospitalization_limit',
        ('hospitalization', 'hospitalisation'),
        default_template="Up to Sum Insured ({sum_insured})",
    ),
    FieldRule(
        'pre_post_hospitalization',
        ('pre and post', 'pre-hospitalization', 'post-hospitalization'),
    ),
    FieldRule('co_payment', ('co-payment', 'co-pay', 'copay'), default="No co-payment"),
    FieldRule('no_claim_bonus', ('no claim bonus', 'cumulative bonus'), default="Not applicable"),
    FieldRule('ambulance', ('ambulance',), default=NOT_COVERED),
    FieldRule('exclusions', ('exclusion',)),
)

WAITING_PERIODS = _frozen({
    'general': WaitingPeriod(30, "General Treatment"),
    'hospitalization': WaitingPeriod(30, "Hospitalization"),
    'surgery': WaitingPeriod(90, "Surgical Procedure"),
    'maternity': WaitingPeriod(730, "Maternity Coverage"),
    'pre-existing': WaitingPeriod(1095, "Pre-Existing Condition"),
    'dental': WaitingPeriod(180, "Dental Treatment"),
    'vision': WaitingPeriod(90, "Vision Care"),
})

DEFAULT_FIELD_SCHEMA = FieldSchema(
    metadata_defaults=METADATA_DEFAULTS,
    section_rules=SECTION_RULES,
    waiting_periods=WAITING_PERIODS,
)
