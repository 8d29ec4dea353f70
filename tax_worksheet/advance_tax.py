"""
Advance tax schedule and interest under Sections 234B and 234C.

This module provides the AdvanceTaxCalculator class that derives the
cumulative installment schedule, compares it against payments by
payment date, and computes simple interest on shortfalls.
"""

from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from .models import AdvanceTaxPayment, InstallmentRow
from .tax import TaxRates


class Interest234BBasis(Enum):
    """
    Amount on which Section 234B interest is charged.

    THRESHOLD_SHORTFALL: 90% of assessed tax less advance tax paid.
    ASSESSED_TAX_SHORTFALL: full assessed tax less advance tax paid.
    """
    THRESHOLD_SHORTFALL = "threshold_shortfall"
    ASSESSED_TAX_SHORTFALL = "assessed_tax_shortfall"


class AdvanceTaxCalculator:
    """
    Calculator for the advance tax schedule and related interest.

    Payments are matched to installments by the date they were paid,
    not by the quarter they were labelled with: a late payment still
    counts towards every later installment.

    Example:
        >>> calculator = AdvanceTaxCalculator()
        >>> schedule = calculator.build_schedule(75000.0, True, payments)
        >>> calculator.interest_234c(schedule)
    """

    def __init__(
        self,
        rates: Optional[TaxRates] = None,
        basis: Interest234BBasis = Interest234BBasis.THRESHOLD_SHORTFALL,
    ):
        """
        Initialize the calculator.

        Args:
            rates: Tax rates to use. Defaults to current FY rates.
            basis: How the Section 234B shortfall is measured.
        """
        self.rates = rates or TaxRates()
        self.basis = basis

    def is_applicable(self, assessed_tax: float, exempt: bool) -> bool:
        """Advance tax applies when not exempt and assessed tax exceeds ₹10,000."""
        return not exempt and assessed_tax > self.rates.ADVANCE_TAX_THRESHOLD

    def payment_date(self, payment: AdvanceTaxPayment) -> date:
        """Date a payment was made; the quarter's due date if not recorded."""
        return payment.paid_on or self.rates.installment_for(payment.quarter).due_date

    def dated_payments(self, payments: List[AdvanceTaxPayment]) -> List[Tuple[date, float]]:
        """(date paid, amount) for every payment with a positive amount."""
        return [
            (self.payment_date(p), p.amount_paid)
            for p in payments
            if p.amount_paid > 0
        ]

    def paid_by(self, payments: List[AdvanceTaxPayment], cutoff: date) -> float:
        """Total paid on or before ``cutoff``."""
        return sum(amount for paid_on, amount in self.dated_payments(payments) if paid_on <= cutoff)

    def total_paid(self, payments: List[AdvanceTaxPayment]) -> float:
        return sum(amount for _, amount in self.dated_payments(payments))

    def build_schedule(
        self,
        assessed_tax: float,
        applicable: bool,
        payments: List[AdvanceTaxPayment],
    ) -> List[InstallmentRow]:
        """
        Build the four-row installment schedule.

        Args:
            assessed_tax: Final tax less TDS credited
            applicable: Whether advance tax is payable at all
            payments: Advance tax payments made

        Returns:
            Rows with required, cumulative paid, shortfall and 234C interest
        """
        base = assessed_tax if applicable else 0.0
        schedule = []
        for rule in self.rates.INSTALLMENTS:
            required = base * rule.cumulative_percentage / 100
            paid = self.paid_by(payments, rule.due_date)
            shortfall = max(0.0, required - paid)
            interest = 0.0
            if applicable and shortfall > 0:
                interest = shortfall * self.rates.INTEREST_RATE_PER_MONTH * rule.interest_months
            schedule.append(InstallmentRow(
                quarter=rule.quarter,
                due_date=rule.due_date,
                cumulative_percentage=rule.cumulative_percentage,
                required_amount=required,
                actual_paid=paid,
                shortfall=shortfall,
                interest_months=rule.interest_months,
                interest_234c=interest,
            ))
        return schedule

    @staticmethod
    def interest_234c(schedule: List[InstallmentRow]) -> float:
        """
        Interest for deferment of installments (Section 234C).

        Each installment is independent: a shortfall carried over from an
        earlier due date accrues again at the next one.
        """
        return sum(row.interest_234c for row in schedule)

    def interest_234b(self, assessed_tax: float, applicable: bool, paid_through_year_end: float) -> float:
        """
        Interest for default in payment of advance tax (Section 234B).

        Charged when advance tax paid by March 31 is below 90% of the
        assessed tax, at 1% per month from April 1 to July 31.
        """
        if not applicable:
            return 0.0
        threshold = assessed_tax * self.rates.INTEREST_234B_PAID_RATIO
        if paid_through_year_end >= threshold:
            return 0.0
        if self.basis == Interest234BBasis.ASSESSED_TAX_SHORTFALL:
            shortfall = assessed_tax - paid_through_year_end
        else:
            shortfall = threshold - paid_through_year_end
        return max(0.0, shortfall) * self.rates.INTEREST_RATE_PER_MONTH * self.rates.INTEREST_234B_MONTHS
