"""Tests for HeaderResolver tiers, placeholder handling and mapping assignment."""

from __future__ import annotations

import pytest

from wagewise.agents.idp.schema_matcher import HeaderResolver, header_tokens, is_placeholder_header
from wagewise.models.schema_mapping import CanonicalField, MatchTier


@pytest.fixture
def resolver():
    return HeaderResolver()


class TestTiers:
    def test_exact_label_is_case_insensitive(self, resolver):
        match = resolver.match(CanonicalField.GROSS_INCOME, ["gross PAY"])
        assert match is not None
        assert match.tier == MatchTier.EXACT_LABEL

    def test_exact_alias(self, resolver):
        assert resolver.tier_for(CanonicalField.TAX_PIN, "KRA PIN NUMBER") == MatchTier.EXACT_ALIAS

    def test_substring_either_direction(self, resolver):
        assert resolver.tier_for(CanonicalField.PENSION_NUMBER, "NSSF No (Member)") == MatchTier.SUBSTRING

    def test_token_overlap(self, resolver):
        assert resolver.tier_for(CanonicalField.GROSS_INCOME, "Gross Earnings") == MatchTier.TOKEN_OVERLAP

    def test_short_tokens_do_not_overlap(self, resolver):
        assert header_tokens("Emp No") == {"emp"}

    def test_no_match(self, resolver):
        assert resolver.resolve(CanonicalField.GROSS_INCOME, ["Foo", "Bar"]) is None


class TestResolve:
    def test_exact_alias_beats_token_overlap(self, resolver):
        observed = ["Gross Earnings", "Basic Salary"]
        assert resolver.resolve(CanonicalField.GROSS_INCOME, observed) == "Basic Salary"

    def test_first_header_wins_within_a_tier(self, resolver):
        observed = ["Salary", "Gross"]
        assert resolver.resolve(CanonicalField.GROSS_INCOME, observed) == "Salary"

    def test_placeholders_never_match(self, resolver):
        assert resolver.resolve(CanonicalField.EMPLOYEE_NUMBER, ["__EMPTY", "__EMPTY_1"]) is None


@pytest.mark.parametrize("header", ["", "   ", "__EMPTY", "__EMPTY_12", "Unnamed: 4", "17", "col_3", "Column 7", "field 2"])
def test_placeholder_headers(header):
    assert is_placeholder_header(header)


@pytest.mark.parametrize("header", ["Gross Pay", "ID", "Column Notes"])
def test_real_headers_are_not_placeholders(header):
    assert not is_placeholder_header(header)


class TestBuildMapping:
    def test_stronger_tier_claims_the_column(self, resolver):
        mapping = resolver.build_mapping(["Bank Account"])
        assert mapping == {"Bank Account": CanonicalField.BANK_ACCOUNT}

    def test_each_column_is_used_once(self, resolver):
        mapping = resolver.build_mapping(["NSSF"])
        assert mapping == {"NSSF": CanonicalField.PENSION}

    def test_bank_columns_split_correctly(self, resolver):
        mapping = resolver.build_mapping(["Bank Account Number", "Bank", "Bank Code"])
        assert mapping == {
            "Bank Account Number": CanonicalField.BANK_ACCOUNT,
            "Bank": CanonicalField.BANK_NAME,
            "Bank Code": CanonicalField.BANK_CODE,
        }

    def test_keeps_original_header_text(self, resolver):
        mapping = resolver.build_mapping(["  Gross Pay "])
        assert mapping == {"  Gross Pay ": CanonicalField.GROSS_INCOME}

    def test_unrelated_headers_map_to_nothing(self, resolver):
        assert resolver.build_mapping(["Foo", "Bar", "__EMPTY"]) == {}

    def test_column_mappings_carry_keys_and_tiers(self, resolver):
        mappings = resolver.column_mappings({"__EMPTY": "Employee Name", "__EMPTY_1": "Salary"})
        by_field = {m.field: m for m in mappings}
        assert by_field[CanonicalField.FULL_NAME].column_key == "__EMPTY"
        assert by_field[CanonicalField.FULL_NAME].tier == MatchTier.EXACT_LABEL
        assert by_field[CanonicalField.GROSS_INCOME].column_key == "__EMPTY_1"
        assert by_field[CanonicalField.GROSS_INCOME].tier == MatchTier.EXACT_ALIAS
