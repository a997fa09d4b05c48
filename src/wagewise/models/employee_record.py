"""Employee Record: the normalized structure every extraction strategy produces.

Every uploaded sheet, regardless of column order or wording, is mapped into
this schema. The nested groups are reported together downstream and are kept
as sub-models rather than flattened.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def new_record_id() -> str:
    return uuid4().hex


class StatutoryDeductions(BaseModel):
    """Statutory line items as reported on the sheet (or estimated)."""

    tax: Decimal = Decimal("0")  # PAYE
    pension: Decimal = Decimal("0")  # NSSF
    health: Decimal = Decimal("0")  # SHIF / NHIF
    levy: Decimal = Decimal("0")  # Housing levy


class ContactInfo(BaseModel):
    phone_number: str = ""
    email: str = ""


class BankInfo(BaseModel):
    account_number: str = ""
    bank_name: str = ""
    bank_code: str = ""


class EmployeeRecord(BaseModel):
    """Single employee payroll record in canonical format."""

    # --- Provenance ---
    id: str = Field(default_factory=new_record_id)
    source_row: Optional[int] = None  # 1-based row number in the uploaded sheet

    # --- Identity Fields ---
    employee_number: str = ""
    surname: str = ""
    other_names: str = ""
    national_id: str = ""
    tax_pin: str = ""
    pension_number: str = ""
    health_number: str = ""

    # --- Employment Fields ---
    position: str = ""
    gender: str = ""
    status: str = "active"
    is_on_probation: bool = False
    terms_accepted: bool = False

    # --- Compensation Fields ---
    gross_income: Decimal = Decimal("0")
    statutory_deductions: StatutoryDeductions = Field(default_factory=StatutoryDeductions)
    loan_deductions: Decimal = Decimal("0")
    employer_advances: Decimal = Decimal("0")
    ewa_advances: Decimal = Decimal("0")
    house_allowance: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")  # Derived unless the sheet supplies it
    net_income: Decimal = Decimal("0")  # Derived unless the sheet supplies it

    # --- Earned-wage access ---
    advance_limit: Decimal = Decimal("0")
    available_advance_limit: Decimal = Decimal("0")

    # --- Contact & Banking ---
    contact: ContactInfo = Field(default_factory=ContactInfo)
    bank_info: BankInfo = Field(default_factory=BankInfo)

    # --- Extraction annotations ---
    warnings: list[str] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}

    @property
    def full_name(self) -> str:
        return f"{self.other_names} {self.surname}".strip()

    @property
    def has_identity(self) -> bool:
        """At least one of employee number, surname or other names is set."""
        return bool(self.employee_number or self.surname or self.other_names)

    @property
    def statutory_total(self) -> Decimal:
        """Sum of the four statutory line items."""
        sd = self.statutory_deductions
        return sd.tax + sd.pension + sd.health + sd.levy

    @property
    def computed_total_deductions(self) -> Decimal:
        """Statutory items plus loans, employer advances and the folded-in allowance."""
        return (
            self.statutory_total + self.loan_deductions
            + self.employer_advances + self.house_allowance
        )
