"""
Tests for field normalization.
"""

import pytest
from policy_diff.ingestion.field_schema import (
    DEFAULT_FIELD_SCHEMA,
    FieldRule,
    FieldSchema,
)
from policy_diff.ingestion.normalizer import FieldNormalizer, normalize_fields
from policy_diff.parsing.clause_model import ComparisonRecord, PolicyDocument


@pytest.fixture
def policy_document():
    """Well-formed policy document wrapped under "policy"."""
    return {
        "policy": {
            "policy_name": "Family Health Optima",
            "insurer": "Star Health",
            "sum_insured": 500000,
            "premium_amount": 18500,
            "policy_type": "Family Floater",
            "network_hospitals": [{"name": "City Care"}, {"name": "Apollo"}, {"name": "Fortis"}],
            "sections": [
                {"title": "4. Waiting Periods", "content": "See below.", "sub_sections": [
                    {"title": "4.1 Initial Waiting Period", "content": "30 days"},
                    {"title": "4.3 Pre-Existing Diseases", "content": "48 months"},
                ]},
                {"title": "5. Hospitalization Coverage",
                 "content": "In-patient care up to sum insured.",
                 "sub_sections": [
                     {"title": "5.1 Room Rent Limit", "content": "1% of sum insured per day"},
                 ]},
                {"title": "6. Maternity Benefit", "content": "Covered after 24 months."},
                {"title": "9. Exclusions", "content": "Cosmetic surgery, dental."},
            ]
        }
    }


class TestFieldNormalizer:
    """Test suite for FieldNormalizer."""

    @pytest.fixture
    def normalizer(self):
        return FieldNormalizer()

    def test_empty_document_defaults(self, normalizer):
        """An empty document yields every documented default."""
        record = normalizer.normalize({})

        assert record is not None
        assert record["sum_insured"] == 0
        assert record["network_hospitals"] == 0
        assert record["initial_waiting"] == "Refer to policy document"
        assert record["maternity"] == "Not covered"
        assert record["hospitalization_limit"] == "Up to Sum Insured (0)"
        assert set(record) == set(DEFAULT_FIELD_SCHEMA.field_names)

    def test_metadata_fields(self, normalizer, policy_document):
        """Root scalars are copied; hospitals are counted."""
        record = normalizer.normalize(policy_document)

        assert record["policy_name"] == "Family Health Optima"
        assert record["insurer"] == "Star Health"
        assert record["sum_insured"] == 500000
        assert record["premium_amount"] == 18500
        assert record["policy_type"] == "Family Floater"
        assert record["network_hospitals"] == 3

    def test_keyword_matching(self, normalizer, policy_document):
        """Section and sub-section titles are matched case-insensitively."""
        record = normalizer.normalize(policy_document)

        assert record["initial_waiting"] == "30 days"
        assert record["pre_existing_waiting"] == "48 months"
        assert record["room_rent"] == "1% of sum insured per day"
        assert record["hospitalization_limit"] == "In-patient care up to sum insured."
        assert record["maternity"] == "Covered after 24 months."
        assert record["exclusions"] == "Cosmetic surgery, dental."
        assert record["co_payment"] == "No co-payment"

    def test_unwrapped_root(self, normalizer, policy_document):
        """Fields may appear at the root without the "policy" wrapper."""
        assert normalizer.normalize(policy_document["policy"]) == normalizer.normalize(
            policy_document
        )

    @pytest.mark.parametrize("wrapper", [None, "Health Optima", ["not", "a", "mapping"]])
    def test_non_mapping_wrapper_reads_root(self, normalizer, wrapper):
        """A "policy" key that is not a mapping is not a wrapper; the root is read."""
        record = normalizer.normalize({
            "policy": wrapper,
            "sum_insured": 300000,
            "sections": [{"title": "Maternity", "content": "Covered after 24 months."}],
        })

        assert record is not None
        assert record["sum_insured"] == 300000
        assert record["maternity"] == "Covered after 24 months."

    def test_first_match_wins(self, normalizer):
        """The earliest matching section in document order is used."""
        document = {"sections": [
            {"title": "Maternity Benefit", "content": "canonical"},
            {"title": "Maternity Add-on Rider", "content": "ancillary"},
        ]}

        assert normalizer.normalize(document)["maternity"] == "canonical"

    def test_section_precedes_its_sub_sections(self, normalizer):
        """A section is checked before its sub-sections, which precede the next section."""
        document = {"sections": [
            {"title": "Benefits", "content": "-", "sub_sections": [
                {"title": "Ambulance Cover", "content": "from sub-section"},
            ]},
            {"title": "Ambulance", "content": "from later section"},
        ]}

        assert normalizer.normalize(document)["ambulance"] == "from sub-section"

    def test_nested_sub_sections_not_traversed(self, normalizer):
        """Only one level of sub-sections is searched."""
        document = {"sections": [
            {"title": "Benefits", "content": "-", "sub_sections": [
                {"title": "Other", "content": "-", "sub_sections": [
                    {"title": "Maternity", "content": "too deep"},
                ]},
            ]},
        ]}

        assert normalizer.normalize(document)["maternity"] == "Not covered"

    def test_hospitalization_fallback_uses_sum_insured(self, normalizer):
        record = normalizer.normalize({"sum_insured": 300000, "sections": []})

        assert record["hospitalization_limit"] == "Up to Sum Insured (300000)"

    def test_matched_section_without_content_uses_default(self, normalizer):
        record = normalizer.normalize({"sections": [{"title": "Maternity"}]})

        assert record["maternity"] == "Not covered"

    @pytest.mark.parametrize("document", [
        None,
        [],
        [{"title": "Maternity"}],
        "policy",
        42,
        {"sections": "Maternity"},
        {"sections": [None]},
        {"sections": [{"title": 7, "content": "x"}]},
        {"sections": [{"title": "A", "sub_sections": {"title": "B"}}]},
        {"network_hospitals": 12},
    ])
    def test_malformed_documents_yield_none(self, normalizer, document):
        """Structural problems null the whole record without raising."""
        assert normalizer.normalize(document) is None

    def test_record_is_read_only(self, normalizer):
        record = normalizer.normalize({})

        assert isinstance(record, ComparisonRecord)
        with pytest.raises(TypeError):
            record["maternity"] = "Covered"

    def test_accepts_policy_document(self, normalizer, policy_document):
        """PolicyDocument instances normalize like their mapping form."""
        doc = PolicyDocument.from_dict(policy_document)

        assert normalizer.normalize(doc) == normalizer.normalize(policy_document)

    def test_module_function(self, policy_document):
        assert normalize_fields(policy_document)["initial_waiting"] == "30 days"


class TestFieldSchema:
    """Tests for injecting a custom field schema."""

    def test_custom_schema(self):
        schema = FieldSchema(
            metadata_defaults={'insurer': "n/a"},
            section_rules=(FieldRule('dental', ('dental',), default="Not covered"),),
        )
        record = FieldNormalizer(schema).normalize({"sections": [
            {"title": "Dental Rider", "content": "Covered with rider."},
        ]})

        assert record.to_dict() == {'insurer': "n/a", 'dental': "Covered with rider."}

    def test_unknown_waiting_period_defaults(self):
        period = DEFAULT_FIELD_SCHEMA.waiting_period("acupuncture")

        assert period.days == 30
        assert period.label == "acupuncture"

    def test_rule_matching_is_case_insensitive(self):
        rule = FieldRule('room_rent', ('room rent',))

        assert rule.matches("ROOM RENT Sub-Limit")
        assert not rule.matches("Room Category")
