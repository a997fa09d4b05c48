"""Canonical field schema and column mapping models for the ingestion agents."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class CanonicalField(StrEnum):
    """Target slots of an employee payroll record, independent of sheet wording."""

    EMPLOYEE_NUMBER = "employee_number"
    FULL_NAME = "full_name"
    SURNAME = "surname"
    OTHER_NAMES = "other_names"
    NATIONAL_ID = "national_id"
    TAX_PIN = "tax_pin"
    PENSION_NUMBER = "pension_number"
    HEALTH_NUMBER = "health_number"
    POSITION = "position"
    GROSS_INCOME = "gross_income"
    TAX = "tax"
    PENSION = "pension"
    HEALTH = "health"
    LEVY = "levy"
    LOAN_DEDUCTIONS = "loan_deductions"
    EMPLOYER_ADVANCES = "employer_advances"
    EWA_ADVANCES = "ewa_advances"
    HOUSE_ALLOWANCE = "house_allowance"
    TOTAL_DEDUCTIONS = "total_deductions"
    NET_INCOME = "net_income"
    ADVANCE_LIMIT = "advance_limit"
    PHONE_NUMBER = "phone_number"
    EMAIL = "email"
    BANK_ACCOUNT = "bank_account"
    BANK_NAME = "bank_name"
    BANK_CODE = "bank_code"
    GENDER = "gender"
    IS_ON_PROBATION = "is_on_probation"
    TERMS_ACCEPTED = "terms_accepted"
    STATUS = "status"


class FieldKind(StrEnum):
    """How a raw cell is coerced before it lands in its slot."""

    FULL_NAME = "full_name"
    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"


class SimpleTarget(BaseModel):
    """A top-level attribute of EmployeeRecord."""

    model_config = {"frozen": True}

    kind: Literal["simple"] = "simple"
    attr: str


class NestedTarget(BaseModel):
    """An attribute inside one of the record's sub-aggregates."""

    model_config = {"frozen": True}

    kind: Literal["nested"] = "nested"
    group: Literal["statutory_deductions", "contact", "bank_info"]
    attr: str


FieldTarget = Annotated[Union[SimpleTarget, NestedTarget], Field(discriminator="kind")]


class FieldSpec(BaseModel):
    """Static description of one canonical field: its label, coercion and slot."""

    model_config = {"frozen": True}

    field: CanonicalField
    label: str
    kind: FieldKind = FieldKind.STRING
    target: Optional[FieldTarget] = None  # None for FULL_NAME, which is split into two slots


class MatchTier(IntEnum):
    """Header resolution tiers, strongest first."""

    EXACT_LABEL = 1
    EXACT_ALIAS = 2
    SUBSTRING = 3
    TOKEN_OVERLAP = 4


class HeaderMatch(BaseModel):
    """An observed header chosen for a canonical field, and how it was chosen."""

    header: str
    tier: MatchTier


class ColumnMapping(BaseModel):
    """Mapping from a sheet column to a canonical payroll field."""

    column_key: str
    source_header: str
    field: CanonicalField
    tier: MatchTier
