"""Alias dictionary: canonical payroll fields and the header spellings sheets use for them.

Pure data. The first alias of every field is its canonical label (the
field's "own name"); the rest are accepted variants, compared
case-insensitively. Field order doubles as the tie-break order when two
fields compete for the same header at the same match tier.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from wagewise.models.schema_mapping import (
    CanonicalField,
    FieldKind,
    FieldSpec,
    NestedTarget,
    SimpleTarget,
)

F = CanonicalField


def _top(attr: str) -> SimpleTarget:
    return SimpleTarget(attr=attr)


def _statutory(attr: str) -> NestedTarget:
    return NestedTarget(group="statutory_deductions", attr=attr)


def _contact(attr: str) -> NestedTarget:
    return NestedTarget(group="contact", attr=attr)


def _bank(attr: str) -> NestedTarget:
    return NestedTarget(group="bank_info", attr=attr)


# ---------------------------------------------------------------------------
# Field specs (label, coercion, target slot)
# ---------------------------------------------------------------------------

FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec(field=F.EMPLOYEE_NUMBER, label="Emp No", target=_top("employee_number")),
    FieldSpec(field=F.FULL_NAME, label="Employee Name", kind=FieldKind.FULL_NAME, target=None),
    FieldSpec(field=F.SURNAME, label="Surname", target=_top("surname")),
    FieldSpec(field=F.OTHER_NAMES, label="Other Names", target=_top("other_names")),
    FieldSpec(field=F.NATIONAL_ID, label="ID Number", target=_top("national_id")),
    FieldSpec(field=F.TAX_PIN, label="KRA Pin", target=_top("tax_pin")),
    FieldSpec(field=F.PENSION_NUMBER, label="NSSF No", target=_top("pension_number")),
    FieldSpec(field=F.HEALTH_NUMBER, label="NHIF No", target=_top("health_number")),
    FieldSpec(field=F.POSITION, label="Position", target=_top("position")),
    FieldSpec(field=F.GROSS_INCOME, label="Gross Pay", kind=FieldKind.NUMERIC, target=_top("gross_income")),
    FieldSpec(field=F.TAX, label="PAYE", kind=FieldKind.NUMERIC, target=_statutory("tax")),
    FieldSpec(field=F.PENSION, label="NSSF", kind=FieldKind.NUMERIC, target=_statutory("pension")),
    FieldSpec(field=F.HEALTH, label="NHIF", kind=FieldKind.NUMERIC, target=_statutory("health")),
    FieldSpec(field=F.LEVY, label="Levy", kind=FieldKind.NUMERIC, target=_statutory("levy")),
    FieldSpec(field=F.LOAN_DEDUCTIONS, label="Loan Deduction", kind=FieldKind.NUMERIC,
              target=_top("loan_deductions")),
    FieldSpec(field=F.EMPLOYER_ADVANCES, label="Employer Advance", kind=FieldKind.NUMERIC,
              target=_top("employer_advances")),
    FieldSpec(field=F.EWA_ADVANCES, label="EWA Advance", kind=FieldKind.NUMERIC, target=_top("ewa_advances")),
    FieldSpec(field=F.HOUSE_ALLOWANCE, label="House Allowance", kind=FieldKind.NUMERIC,
              target=_top("house_allowance")),
    FieldSpec(field=F.TOTAL_DEDUCTIONS, label="Total Deductions", kind=FieldKind.NUMERIC,
              target=_top("total_deductions")),
    FieldSpec(field=F.NET_INCOME, label="Net Pay", kind=FieldKind.NUMERIC, target=_top("net_income")),
    FieldSpec(field=F.ADVANCE_LIMIT, label="Advance Limit", kind=FieldKind.NUMERIC,
              target=_top("advance_limit")),
    FieldSpec(field=F.PHONE_NUMBER, label="MPesa Number", target=_contact("phone_number")),
    FieldSpec(field=F.EMAIL, label="Email", target=_contact("email")),
    FieldSpec(field=F.BANK_ACCOUNT, label="Bank Account Number", target=_bank("account_number")),
    FieldSpec(field=F.BANK_NAME, label="Bank", target=_bank("bank_name")),
    FieldSpec(field=F.BANK_CODE, label="Bank Code", target=_bank("bank_code")),
    FieldSpec(field=F.GENDER, label="Gender", target=_top("gender")),
    FieldSpec(field=F.IS_ON_PROBATION, label="Probation Period", kind=FieldKind.BOOLEAN,
              target=_top("is_on_probation")),
    FieldSpec(field=F.TERMS_ACCEPTED, label="T & C Accepted", kind=FieldKind.BOOLEAN,
              target=_top("terms_accepted")),
    FieldSpec(field=F.STATUS, label="Status", target=_top("status")),
)


# ---------------------------------------------------------------------------
# Header variants (label excluded; it is prepended below)
# ---------------------------------------------------------------------------

_VARIANTS: dict[CanonicalField, tuple[str, ...]] = {
    F.EMPLOYEE_NUMBER: (
        "EMPLO NO.", "EMP NO.", "EMPLOYEE NO", "EMPLOYEE NO.", "EMPLOYEE NUMBER",
        "EMP NUMBER", "STAFF NO", "STAFF NUMBER", "PAYROLL NO", "PAYROLL NUMBER",
    ),
    F.FULL_NAME: (
        "EMPLOYEES' FULL NAMES", "FULL NAME", "FULL NAMES", "NAME", "NAMES",
        "EMPLOYEE NAMES", "STAFF NAME", "EMPLOYEE FULL NAME",
    ),
    F.SURNAME: ("LAST NAME", "FAMILY NAME"),
    F.OTHER_NAMES: ("FIRST NAME", "FIRST NAMES", "GIVEN NAMES", "FORENAMES"),
    F.NATIONAL_ID: ("ID NO", "ID NO.", "NATIONAL ID", "NATIONAL ID NO", "IDENTITY NUMBER", "ID"),
    F.TAX_PIN: (
        "KRA PIN NO.", "KRA PIN NO", "KRA PIN NUMBER", "TAX PIN", "PIN NO",
        "PIN NUMBER", "KRA NUMBER", "KRA",
    ),
    F.PENSION_NUMBER: (
        "NSSF NO.", "NSSF NUMBER", "NSSF MEMBERSHIP", "NSSF MEMBERSHIP NO",
        "SOCIAL SECURITY NO",
    ),
    F.HEALTH_NUMBER: (
        "NHIF NO.", "NHIF NUMBER", "NHIF MEMBERSHIP", "SHIF NO", "SHIF NUMBER",
        "SHA NO", "HEALTH INSURANCE NO",
    ),
    F.POSITION: ("JOB TITTLE", "JOB TITLE", "TITLE", "DESIGNATION", "ROLE", "SITE"),
    F.GROSS_INCOME: (
        "BASIC SALARY", "BASIC PAY", "GROSS SALARY", "GROSS", "GROSS INCOME",
        "MONTHLY SALARY", "TOTAL GROSS PAY", "SALARY",
    ),
    F.TAX: ("TAX", "INCOME TAX"),
    F.PENSION: ("NSSF DEDUCTION", "NSSF AMOUNT", "NSSF CONTRIBUTION", "PENSION"),
    F.HEALTH: (
        "NHIF DEDUCTION", "NHIF AMOUNT", "NHIF CONTRIBUTION", "SHIF",
        "SHIF DEDUCTION", "SHIF AMOUNT", "SHA",
    ),
    F.LEVY: ("H-LEVY", "HOUSING LEVY", "HOUSE LEVY", "AHL", "LEVIES"),
    F.LOAN_DEDUCTIONS: (
        "LOANS", "LOAN", "LOAN REPAYMENT", "DEBT REPAYMENT", "TOTAL LOAN DEDUCTIONS",
    ),
    F.EMPLOYER_ADVANCES: (
        "ADVANCE", "SALARY ADVANCE", "ADVANCE SALARY", "ADVANCE PAYMENT", "EMPLOYER ADVANCES",
    ),
    F.EWA_ADVANCES: ("JAHAZII", "JAHAZII ADVANCE", "EWA", "EARNED WAGE ADVANCE"),
    F.HOUSE_ALLOWANCE: ("HSE ALLOWANCE", "H/ALLOWANCE", "HOUSING ALLOWANCE"),
    F.TOTAL_DEDUCTIONS: ("TOTAL DED", "TOTAL DEDUCTS"),
    F.NET_INCOME: ("NET SALARY", "TAKE HOME", "NET INCOME", "FINAL PAY"),
    F.ADVANCE_LIMIT: ("MAX ADVANCE", "MAX SALARY ADVANCE", "EWA LIMIT"),
    F.PHONE_NUMBER: (
        "MPESA", "MPESA NO", "PHONE", "PHONE NO", "PHONE NUMBER", "MOBILE",
        "MOBILE NO", "MOBILE NUMBER", "CONTACT", "CONTACTS", "TEL NO.", "TELEPHONE",
    ),
    F.EMAIL: ("EMAIL ADDRESS", "E-MAIL"),
    F.BANK_ACCOUNT: ("BANK ACC", "BANK ACCOUNT", "ACCOUNT NUMBER", "ACC NO", "ACCOUNT NO"),
    F.BANK_NAME: ("BANK NAME",),
    F.BANK_CODE: ("BANK BRANCH CODE", "BRANCH CODE"),
    F.GENDER: ("SEX", "MALE/FEMALE", "M/F"),
    F.IS_ON_PROBATION: ("PROBATION", "ON PROBATION"),
    F.TERMS_ACCEPTED: ("TERMS ACCEPTED", "T&C", "AGREED TERMS"),
    F.STATUS: ("EMPLOYEE STATUS", "EMPLOYMENT STATUS"),
}


SPECS_BY_FIELD: Mapping[CanonicalField, FieldSpec] = MappingProxyType(
    {spec.field: spec for spec in FIELD_SPECS}
)

ALIASES: Mapping[CanonicalField, tuple[str, ...]] = MappingProxyType({
    spec.field: (spec.label, *_VARIANTS.get(spec.field, ()))
    for spec in FIELD_SPECS
})

# Every label and alias, lowercased. Used to recognize header-like cell values.
KNOWN_HEADER_TEXTS: frozenset[str] = frozenset(
    alias.strip().lower() for aliases in ALIASES.values() for alias in aliases
)


def label_for(field: CanonicalField) -> str:
    return SPECS_BY_FIELD[field].label
