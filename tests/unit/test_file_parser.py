"""Tests for the primary row transformer and shared record assembly."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tests.fakes import HEADERS, standard_sheet, titled_sheet
from wagewise.agents.idp.file_parser import BLANK_ROW, HEADER_ECHO, HeaderRowTransformer, is_header_echo
from wagewise.core.config import AppSettings


@pytest.fixture
def transformer():
    return HeaderRowTransformer(settings=AppSettings())


def _row(**cells):
    return {header: cells.get(header) for header in HEADERS} | {
        k: v for k, v in cells.items() if k not in HEADERS
    }


class TestStandardSheet:
    def test_maps_every_row(self, transformer):
        outcome = transformer.attempt(standard_sheet())
        assert outcome is not None
        assert outcome.strategy == "header_row"
        assert len(outcome.records) == 2
        assert outcome.failed_rows == []
        assert outcome.skipped_rows == []

    def test_identity_and_nested_fields(self, transformer):
        jane = transformer.attempt(standard_sheet()).records[0]
        assert jane.employee_number == "E001"
        assert jane.other_names == "Jane Mary"
        assert jane.surname == "Doe"
        assert jane.national_id == "12345678"
        assert jane.tax_pin == "A123456789B"
        assert jane.statutory_deductions.tax == Decimal("5000")
        assert jane.statutory_deductions.pension == Decimal("1080")
        assert jane.contact.phone_number == "0712345678"
        assert jane.bank_info.bank_name == "Equity"
        assert jane.terms_accepted is True
        assert jane.source_row == 1

    def test_derived_fields(self, transformer):
        john = transformer.attempt(standard_sheet()).records[1]
        assert john.gross_income == Decimal("45000")
        # 4000 + 1080 + 1100 + 675 + 2000 + 500
        assert john.total_deductions == Decimal("9355")
        assert john.net_income == Decimal("35645")
        assert john.advance_limit == Decimal("17822")
        assert john.available_advance_limit == john.advance_limit
        assert john.terms_accepted is False

    def test_records_get_fresh_ids(self, transformer):
        records = transformer.attempt(standard_sheet()).records
        assert records[0].id != records[1].id


class TestDerivedOverrides:
    def test_supplied_net_pay_is_kept(self, transformer):
        rows = [_row(**{"Emp No": "E9", "Employee Name": "A B", "Gross Pay": 30000, "Net Pay": 28000})]
        record = transformer.attempt(rows).records[0]
        assert record.net_income == Decimal("28000")
        assert record.advance_limit == Decimal("14000")

    def test_supplied_total_deductions_drive_net(self, transformer):
        rows = [_row(**{"Emp No": "E9", "Gross Pay": 30000, "PAYE": 100, "Total Deductions": 9000})]
        record = transformer.attempt(rows).records[0]
        assert record.total_deductions == Decimal("9000")
        assert record.net_income == Decimal("21000")

    def test_negative_net_clamps_advance_limit(self, transformer):
        rows = [_row(**{"Emp No": "E9", "Gross Pay": 1000, "PAYE": 2000})]
        record = transformer.attempt(rows).records[0]
        assert record.net_income == Decimal("-1000")
        assert record.advance_limit == Decimal("0")
        assert any("exceed gross income" in w for w in record.warnings)

    def test_explicit_surname_wins_over_full_name(self, transformer):
        rows = [{"Emp No": "E1", "Employee Name": "Jane Mary Doe", "Surname": "Wanjiru", "Gross Pay": 100}]
        record = transformer.attempt(rows).records[0]
        assert record.surname == "Wanjiru"
        assert record.other_names == "Jane Mary"


class TestRowHandling:
    def test_blank_rows_are_skipped(self, transformer):
        rows = standard_sheet()
        rows.insert(1, dict.fromkeys(HEADERS, "  "))
        outcome = transformer.attempt(rows)
        assert len(outcome.records) == 2
        assert [(s.row_number, s.reason) for s in outcome.skipped_rows] == [(2, BLANK_ROW)]
        assert outcome.records[1].source_row == 3

    def test_repeated_header_is_skipped(self, transformer):
        rows = [dict(zip(HEADERS, HEADERS)), *standard_sheet()]
        outcome = transformer.attempt(rows)
        assert len(outcome.records) == 2
        assert outcome.skipped_rows[0].reason == HEADER_ECHO
        assert outcome.skipped_rows[0].row_number == 1

    def test_header_echo_needs_two_matches(self):
        assert not is_header_echo({"a": "Gross Pay", "b": "Jane"}, 2)
        assert is_header_echo({"a": "Gross Pay", "b": "kra pin"}, 2)

    def test_unparseable_number_warns_and_defaults(self, transformer):
        rows = [_row(**{"Emp No": "E1", "Employee Name": "Jane Doe", "Gross Pay": "n/a"})]
        record = transformer.attempt(rows).records[0]
        assert record.gross_income == Decimal("0")
        assert "Could not parse gross_income value 'n/a'; defaulted to 0" in record.warnings

    def test_unparseable_number_does_not_fail_the_row(self, transformer):
        outcome = transformer.attempt([{"Employee Name": "Jane Doe", "Emp No": "E1", "Gross Pay": "n/a"}])
        assert outcome.failed_rows == []
        assert outcome.records[0].warnings == ["Could not parse gross_income value 'n/a'; defaulted to 0"]

    def test_single_cell_row_fails_naming_the_count(self, transformer):
        rows = [_row(Position="Clerk")]
        outcome = transformer.attempt(rows)
        assert outcome.records == []
        failed = outcome.failed_rows[0]
        assert failed.row_number == 1
        assert "Only 1 field could be mapped" in failed.reason
        assert "missing key identifier" in failed.reason

    def test_missing_identity_fails_even_when_well_mapped(self, transformer):
        rows = [_row(**{"Gross Pay": 30000, "PAYE": 1000, "NSSF": 1080, "NHIF": 500})]
        failed = transformer.attempt(rows).failed_rows[0]
        assert failed.reason == "Missing key identifier (employee number or name)"

    def test_too_few_fields_fails(self, transformer):
        rows = [_row(**{"Emp No": "E1", "Gross Pay": 1000})]
        failed = transformer.attempt(rows).failed_rows[0]
        assert failed.reason == "Only 2 fields could be mapped to known columns (minimum 3 required)"


def test_declines_when_no_key_maps(transformer):
    assert transformer.attempt(titled_sheet()) is None


def test_declines_on_empty_input(transformer):
    assert transformer.attempt([]) is None


def test_transform_returns_records_and_failures(transformer):
    records, failed = transformer.transform(standard_sheet())
    assert [r.employee_number for r in records] == ["E001", "E002"]
    assert failed == []


def test_transform_is_empty_when_keys_carry_no_headers(transformer):
    assert transformer.transform(titled_sheet()) == ([], [])
