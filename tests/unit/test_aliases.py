"""Tests for the alias dictionary and field specs."""

from __future__ import annotations

from wagewise.agents.idp.aliases import ALIASES, FIELD_SPECS, KNOWN_HEADER_TEXTS, SPECS_BY_FIELD, label_for
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.schema_mapping import CanonicalField, FieldKind, NestedTarget, SimpleTarget


def test_every_canonical_field_has_a_spec_and_aliases():
    assert set(SPECS_BY_FIELD) == set(CanonicalField)
    for field in CanonicalField:
        assert len(ALIASES[field]) >= 1


def test_first_alias_is_the_label():
    for spec in FIELD_SPECS:
        assert ALIASES[spec.field][0] == spec.label


def test_every_target_resolves_to_a_record_attribute():
    fields = EmployeeRecord.model_fields
    for spec in FIELD_SPECS:
        if spec.kind == FieldKind.FULL_NAME:
            assert spec.target is None
            continue
        target = spec.target
        if isinstance(target, SimpleTarget):
            assert target.attr in fields, spec.field
        else:
            assert isinstance(target, NestedTarget)
            group_model = fields[target.group].annotation
            assert target.attr in group_model.model_fields, spec.field


def test_statutory_fields_are_nested_under_statutory_deductions():
    for field in (CanonicalField.TAX, CanonicalField.PENSION, CanonicalField.HEALTH, CanonicalField.LEVY):
        target = SPECS_BY_FIELD[field].target
        assert isinstance(target, NestedTarget)
        assert target.group == "statutory_deductions"


def test_known_header_texts_are_lowercased():
    assert "gross pay" in KNOWN_HEADER_TEXTS
    assert "kra pin number" in KNOWN_HEADER_TEXTS
    assert all(text == text.lower() for text in KNOWN_HEADER_TEXTS)


def test_label_for():
    assert label_for(CanonicalField.TAX) == "PAYE"
