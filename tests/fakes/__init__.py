"""Shared test doubles: sample payroll sheets in the shapes readers hand us."""

from __future__ import annotations

from typing import Any

HEADERS = [
    "Emp No", "Employee Name", "ID Number", "KRA Pin", "Gross Pay", "PAYE",
    "NSSF", "NHIF", "Levy", "Loan Deduction", "Employer Advance",
    "MPesa Number", "Bank", "T & C Accepted",
]

DATA = [
    ["E001", "Jane Mary Doe", "12345678", "A123456789B", 50000, 5000,
     1080, 1200, 750, 0, 0, "0712345678", "Equity", "Yes"],
    ["E002", "John Otieno", "23456789", "B987654321C", "45,000", "4,000",
     1080, 1100, 675, 2000, 500, "0722000000", "KCB", "no"],
]


def placeholder_keys(width: int) -> list[str]:
    """Keys a spreadsheet reader assigns when the first line is not a header."""
    return ["__EMPTY"] + [f"__EMPTY_{i}" for i in range(1, width)]


def standard_sheet() -> list[dict[str, Any]]:
    """Rows keyed by their header text."""
    return [dict(zip(HEADERS, values)) for values in DATA]


def titled_sheet() -> list[dict[str, Any]]:
    """Title block, blank line, then the header as row index 3 and the data."""
    keys = placeholder_keys(len(HEADERS))
    blank = dict.fromkeys(keys)
    title = {**blank, keys[0]: "ACME Ltd Payroll March 2024"}
    subtitle = {**blank, keys[0]: "Generated by HR"}
    header = dict(zip(keys, HEADERS))
    data = [dict(zip(keys, values)) for values in DATA]
    return [title, subtitle, dict(blank), header, *data]


def headerless_sheet() -> list[dict[str, Any]]:
    """No header at all: name, PIN, ID, NSSF number and salary by position."""
    keys = placeholder_keys(5)
    return [
        dict(zip(keys, ["Jane Mary Doe", "A123456789B", "12345678", "654321", 50000.0])),
        dict(zip(keys, ["John Otieno", "B987654321C", "23456789", "765432", "45,000.00"])),
    ]


def rekey_from_row(rows: list[dict[str, Any]], header_index: int) -> list[dict[str, Any]]:
    """The sheet as if ``rows[header_index]`` had been the header line."""
    header = rows[header_index]
    return [
        {header[key]: value for key, value in row.items() if header.get(key)}
        for row in rows[header_index + 1:]
    ]


__all__ = [
    "DATA",
    "HEADERS",
    "headerless_sheet",
    "placeholder_keys",
    "rekey_from_row",
    "standard_sheet",
    "titled_sheet",
]
