"""
Input validation for the worksheet.

The calculators assume well-formed input and never raise for business
data. This module checks a WorksheetInput before it is handed to
generate_worksheet and reports every problem found.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from .models import WorksheetInput


PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
MAX_80D_ENTERED = 200000.0


class IssueKind(Enum):
    """Categories of validation failure."""
    MISSING_FIELD = "missing_field"
    OUT_OF_RANGE = "out_of_range"
    INVALID_DATE_ORDER = "invalid_date_order"
    INVALID_FORMAT = "invalid_format"


@dataclass
class ValidationIssue:
    """A single validation failure."""
    kind: IssueKind
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class InputValidationError(ValueError):
    """Raised when a WorksheetInput fails validation."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(str(issue) for issue in issues))


def _non_negative(issues: List[ValidationIssue], field: str, value: float) -> None:
    if value < 0:
        issues.append(ValidationIssue(IssueKind.OUT_OF_RANGE, field, "Cannot be negative"))


def validate_worksheet_input(worksheet_input: WorksheetInput) -> List[ValidationIssue]:
    """
    Check a worksheet input for invalid records.

    Args:
        worksheet_input: Input to check

    Returns:
        List of issues (empty when the input is valid)
    """
    issues: List[ValidationIssue] = []
    profile = worksheet_input.profile

    if profile.pan and not PAN_PATTERN.match(profile.pan):
        issues.append(ValidationIssue(
            IssueKind.INVALID_FORMAT, "profile.pan", "PAN must be in format AAAAA1234A"
        ))

    salary = worksheet_input.salary
    if salary:
        if salary.gross_salary == 0:
            issues.append(ValidationIssue(
                IssueKind.MISSING_FIELD, "salary.gross_salary", "Gross salary is required"
            ))
        _non_negative(issues, "salary.gross_salary", salary.gross_salary)
        _non_negative(issues, "salary.professional_tax", salary.professional_tax)
        _non_negative(issues, "salary.tds", salary.tds)
        if salary.professional_tax > salary.gross_salary:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, "salary.professional_tax",
                "Professional tax cannot exceed gross salary",
            ))
        if salary.tds > salary.gross_salary:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, "salary.tds", "TDS cannot exceed gross salary"
            ))
        start, end = salary.employment_start_date, salary.employment_end_date
        if start and end and start > end:
            issues.append(ValidationIssue(
                IssueKind.INVALID_DATE_ORDER, "salary.employment_start_date",
                "Start date must be on or before end date",
            ))

    for i, w in enumerate(worksheet_input.mutual_funds):
        prefix = f"mutual_funds[{i}]"
        _non_negative(issues, f"{prefix}.amount_withdrawn", w.amount_withdrawn)
        _non_negative(issues, f"{prefix}.cost_basis", w.cost_basis)
        _non_negative(issues, f"{prefix}.tds", w.tds)
        if w.cost_basis > w.amount_withdrawn:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, f"{prefix}.cost_basis",
                "Cost basis cannot exceed amount withdrawn",
            ))
        if w.tds > w.amount_withdrawn:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, f"{prefix}.tds", "TDS cannot exceed amount withdrawn"
            ))
        if w.redemption_date and w.redemption_date < w.acquisition_date:
            issues.append(ValidationIssue(
                IssueKind.INVALID_DATE_ORDER, f"{prefix}.redemption_date",
                "Redemption date cannot be before acquisition date",
            ))

    for i, s in enumerate(worksheet_input.foreign_stocks):
        prefix = f"foreign_stocks[{i}]"
        for name in ("sale_proceeds_inr", "cost_basis_inr", "sale_proceeds_usd",
                     "cost_basis_usd", "brokerage", "tds"):
            _non_negative(issues, f"{prefix}.{name}", getattr(s, name))
        if s.sale_date <= s.purchase_date:
            issues.append(ValidationIssue(
                IssueKind.INVALID_DATE_ORDER, f"{prefix}.sale_date",
                "Date of sale must be after date of purchase",
            ))
        if s.tds > s.sale_proceeds_inr:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, f"{prefix}.tds", "TDS cannot exceed sale proceeds"
            ))

    for i, o in enumerate(worksheet_input.other_income):
        prefix = f"other_income[{i}]"
        _non_negative(issues, f"{prefix}.amount", o.amount)
        _non_negative(issues, f"{prefix}.tds", o.tds)
        if o.tds > o.amount:
            issues.append(ValidationIssue(
                IssueKind.OUT_OF_RANGE, f"{prefix}.tds", "TDS cannot exceed amount"
            ))

    for name, value in worksheet_input.deductions.to_dict().items():
        _non_negative(issues, f"deductions.{name}", value)
    if worksheet_input.deductions.section_80d > MAX_80D_ENTERED:
        issues.append(ValidationIssue(
            IssueKind.OUT_OF_RANGE, "deductions.section_80d", "Amount too large"
        ))

    for i, p in enumerate(worksheet_input.advance_tax_payments):
        _non_negative(issues, f"advance_tax_payments[{i}].amount_paid", p.amount_paid)

    return issues


def ensure_valid(worksheet_input: WorksheetInput) -> WorksheetInput:
    """
    Validate input, raising on the first batch of problems.

    Raises:
        InputValidationError: If any issue is found
    """
    issues = validate_worksheet_input(worksheet_input)
    if issues:
        raise InputValidationError(issues)
    return worksheet_input
