"""Tests for EmployeeRecord defaults and derived properties."""

from __future__ import annotations

from decimal import Decimal

from wagewise.models.employee_record import EmployeeRecord, StatutoryDeductions


def test_defaults():
    record = EmployeeRecord()
    assert record.status == "active"
    assert record.is_on_probation is False
    assert record.terms_accepted is False
    assert record.gross_income == Decimal("0")
    assert record.warnings == []
    assert not record.has_identity


def test_ids_are_unique():
    assert EmployeeRecord().id != EmployeeRecord().id


def test_full_name_joins_parts():
    record = EmployeeRecord(other_names="Jane Mary", surname="Doe")
    assert record.full_name == "Jane Mary Doe"
    assert record.has_identity


def test_computed_total_includes_loans_advances_and_allowance():
    record = EmployeeRecord(
        statutory_deductions=StatutoryDeductions(
            tax=Decimal("100"), pension=Decimal("50"), health=Decimal("25"), levy=Decimal("10"),
        ),
        loan_deductions=Decimal("5"),
        employer_advances=Decimal("3"),
        ewa_advances=Decimal("1000"),  # Not part of total deductions
        house_allowance=Decimal("2"),
    )
    assert record.statutory_total == Decimal("185")
    assert record.computed_total_deductions == Decimal("195")


def test_strings_are_stripped():
    assert EmployeeRecord(employee_number="  E1 ").employee_number == "E1"
