"""
Worksheet generation.

Ties the gains, tax and advance tax calculators together into a single
pure computation: one WorksheetInput in, one WorksheetResult out.
"""

from dataclasses import replace
from typing import Optional

from .advance_tax import AdvanceTaxCalculator, Interest234BBasis
from .calculator import CapitalGainsCalculator
from .interfaces import IIndexationProvider
from .models import TaxRegime, WorksheetInput, WorksheetResult
from .tax import TaxCalculator, TaxRates


class WorksheetGenerator:
    """
    Generator for the complete tax worksheet.

    The generator holds only configuration; every call to ``generate``
    reads its input and returns a new result without side effects, so a
    single instance can be shared across taxpayers.

    Example:
        >>> generator = WorksheetGenerator()
        >>> result = generator.generate(worksheet_input)
        >>> print(result.recommended_regime, result.net_amount_payable)
    """

    def __init__(
        self,
        rates: Optional[TaxRates] = None,
        indexation: Optional[IIndexationProvider] = None,
        interest_234b_basis: Interest234BBasis = Interest234BBasis.THRESHOLD_SHORTFALL,
    ):
        self.rates = rates or TaxRates()
        self.gains_calculator = CapitalGainsCalculator(self.rates, indexation)
        self.tax_calculator = TaxCalculator(self.rates)
        self.advance_tax_calculator = AdvanceTaxCalculator(self.rates, interest_234b_basis)

    def generate(self, worksheet_input: WorksheetInput) -> WorksheetResult:
        """
        Compute the worksheet for one financial year.

        Args:
            worksheet_input: Validated taxpayer input

        Returns:
            WorksheetResult with tax under both regimes, the advance tax
            schedule, interest and net payable
        """
        profile = worksheet_input.profile
        salary = worksheet_input.salary
        if salary:
            salary = replace(
                salary,
                employment_start_date=salary.employment_start_date or self.rates.FY_START,
                employment_end_date=(
                    salary.employment_end_date
                    or profile.date_of_unemployment
                    or self.rates.FY_END
                ),
            )

        # Step 1: Capital gains
        equity, debt = self.gains_calculator.summarize_mutual_funds(worksheet_input.mutual_funds)
        foreign = self.gains_calculator.summarize_foreign_stocks(worksheet_input.foreign_stocks)

        # Step 2: Income taxed at slab rates
        salary_income = salary.net_salary(self.rates.STANDARD_DEDUCTION) if salary else 0.0
        other_income = sum(o.amount for o in worksheet_input.other_income)
        gross_ordinary = salary_income + other_income + debt.slab_taxed

        total_tds = (
            (salary.tds if salary else 0.0)
            + equity.total_tds
            + debt.total_tds
            + foreign.total_tds
            + sum(o.tds for o in worksheet_input.other_income)
        )

        # Step 3: Tax under each regime
        regimes = {
            regime: self.tax_calculator.compute_regime(
                regime, gross_ordinary, worksheet_input.deductions, profile,
                equity=equity, debt=debt, foreign=foreign,
            )
            for regime in (TaxRegime.OLD, TaxRegime.NEW)
        }
        old, new = regimes[TaxRegime.OLD], regimes[TaxRegime.NEW]
        recommended = TaxRegime.OLD if old.total_tax <= new.total_tax else TaxRegime.NEW
        applied_regime = profile.elected_regime or recommended
        applied = regimes[applied_regime]

        # Step 4: Advance tax
        advance = self.advance_tax_calculator
        payments = worksheet_input.advance_tax_payments
        assessed_tax = max(0.0, applied.total_tax - total_tds)
        exempt = profile.is_exempt_from_advance_tax
        applicable = advance.is_applicable(assessed_tax, exempt)
        schedule = advance.build_schedule(assessed_tax, applicable, payments)
        paid_through_year_end = advance.paid_by(payments, self.rates.FY_END)
        total_paid = advance.total_paid(payments)

        # Step 5: Interest
        interest_234c = advance.interest_234c(schedule)
        interest_234b = advance.interest_234b(assessed_tax, applicable, paid_through_year_end)

        return WorksheetResult(
            old_regime=old,
            new_regime=new,
            recommended_regime=recommended,
            applied_regime=applied_regime,
            total_income=gross_ordinary + applied.special_rate_income,
            taxable_income=applied.taxable_income,
            salary_income=salary_income,
            other_income=other_income,
            equity_funds=equity,
            debt_funds=debt,
            foreign_stocks=foreign,
            exempt_from_advance_tax=exempt,
            advance_tax_applicable=applicable,
            assessed_tax=assessed_tax,
            advance_tax_schedule=schedule,
            advance_tax_paid=total_paid,
            paid_through_year_end=paid_through_year_end,
            interest_234b=interest_234b,
            interest_234c=interest_234c,
            interest_234b_basis=advance.basis.value,
            total_tds_credited=total_tds,
            net_amount_payable=max(0.0, assessed_tax + interest_234b + interest_234c - total_paid),
        )


def generate_worksheet(
    worksheet_input: WorksheetInput,
    rates: Optional[TaxRates] = None,
    indexation: Optional[IIndexationProvider] = None,
    interest_234b_basis: Interest234BBasis = Interest234BBasis.THRESHOLD_SHORTFALL,
) -> WorksheetResult:
    """
    Compute the tax worksheet for a single taxpayer.

    Args:
        worksheet_input: Validated taxpayer input
        rates: Tax rates to use. Defaults to current FY rates.
        indexation: Indexation provider. Defaults to a flat 4% per year.
        interest_234b_basis: How the Section 234B shortfall is measured

    Returns:
        WorksheetResult
    """
    generator = WorksheetGenerator(rates, indexation, interest_234b_basis)
    return generator.generate(worksheet_input)
