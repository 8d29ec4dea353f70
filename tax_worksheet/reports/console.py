"""
Console reporting module for the tax worksheet.

This module provides the ConsoleReporter class for generating
formatted text reports to the console.
"""

from typing import List

from ..interfaces import BaseReporter
from ..models import ClassifiedGain, TaxRegime, WorksheetResult


class ConsoleReporter(BaseReporter):
    """
    Reporter for generating console output.

    Prints the worksheet in the same sections as the filed computation:
    income summary, regime comparison, advance tax schedule and the
    final amount payable.
    """

    WIDTH = 90

    def generate(self, result: WorksheetResult, **kwargs) -> None:
        """Print the full worksheet, with capital gains detail if requested."""
        self.print_worksheet(result)
        if kwargs.get('show_gains', True):
            self.print_capital_gains(result)

    def _line(self, label: str, amount: float, indent: int = 3) -> None:
        pad = " " * indent
        print(f"║{pad}{label.ljust(50 - indent + 3)}₹{amount:>33,.2f}   ║")

    def _title(self, title: str) -> None:
        print("║" + " ".ljust(self.WIDTH) + "║")
        print("║   " + title.ljust(self.WIDTH - 3) + "║")
        print("╟" + "─" * self.WIDTH + "╢")

    def print_worksheet(self, result: WorksheetResult) -> None:
        """
        Print the tax worksheet.

        Args:
            result: Computed worksheet
        """
        print("\n")
        print("╔" + "═" * self.WIDTH + "╗")
        print("║" + " ADVANCE TAX WORKSHEET ".center(self.WIDTH) + "║")
        print("╠" + "═" * self.WIDTH + "╣")

        self._print_income_summary(result)
        self._print_regime_comparison(result)
        self._print_advance_tax_schedule(result)
        self._print_summary(result)

        print("║" + " ".ljust(self.WIDTH) + "║")
        print("╚" + "═" * self.WIDTH + "╝")

    def _print_income_summary(self, result: WorksheetResult) -> None:
        self._title("SECTION A: INCOME SUMMARY")
        self._line("Income from Salary (net)", result.salary_income)
        self._line("Income from Other Sources", result.other_income)

        debt = result.debt_funds
        if debt and debt.slab_taxed > 0:
            self._line("Debt Fund STCG (taxed at slab)", debt.slab_taxed)
        if result.equity_funds:
            self._line("Equity Fund LTCG", result.equity_funds.long_term)
            self._line("Equity Fund STCG", result.equity_funds.short_term)
        if debt:
            self._line("Debt Fund LTCG (indexed)", debt.long_term)
        if result.foreign_stocks:
            self._line("Foreign Stock LTCG (indexed)", result.foreign_stocks.long_term)
            self._line("Foreign Stock STCG", result.foreign_stocks.short_term)

        print("╟" + "─" * self.WIDTH + "╢")
        self._line("GROSS TOTAL INCOME", result.total_income)
        self._line("TOTAL TDS CREDITED", result.total_tds_credited)

    def _print_regime_comparison(self, result: WorksheetResult) -> None:
        self._title("SECTION B: TAX COMPUTATION")
        print("║   " + "".ljust(40) + "Old Regime".rjust(22) + "New Regime".rjust(22) + "   ║")
        print("╟" + "─" * self.WIDTH + "╢")

        old, new = result.old_regime, result.new_regime
        rows = [
            ("Gross Ordinary Income", old.gross_ordinary_income, new.gross_ordinary_income),
            ("Less: Deductions", -old.deductions, -new.deductions),
            ("Taxable Ordinary Income", old.taxable_ordinary_income, new.taxable_ordinary_income),
            ("Income at Special Rates", old.special_rate_income, new.special_rate_income),
            ("Tax at Slab Rates", old.slab_tax, new.slab_tax),
            ("Tax at Special Rates", old.special_rate_tax, new.special_rate_tax),
            ("Surcharge", old.surcharge, new.surcharge),
            ("Health & Education Cess", old.cess, new.cess),
        ]
        for label, old_value, new_value in rows:
            print(f"║   {label.ljust(40)}₹{old_value:>21,.2f} ₹{new_value:>20,.2f}   ║")

        print("╟" + "─" * self.WIDTH + "╢")
        print(f"║   {'TOTAL TAX'.ljust(40)}₹{old.total_tax:>21,.2f} ₹{new.total_tax:>20,.2f}   ║")

        recommended = "Old Regime" if result.recommended_regime == TaxRegime.OLD else "New Regime"
        applied = "Old Regime" if result.applied_regime == TaxRegime.OLD else "New Regime"
        print("║" + " ".ljust(self.WIDTH) + "║")
        print(f"║   {'Recommended Regime:'.ljust(40)}{recommended.rjust(44)}   ║")
        if result.applied_regime != result.recommended_regime:
            print(f"║   {'Elected Regime:'.ljust(40)}{applied.rjust(44)}   ║")

    def _print_advance_tax_schedule(self, result: WorksheetResult) -> None:
        self._title("SECTION C: ADVANCE TAX SCHEDULE")

        if result.exempt_from_advance_tax:
            print("║   " + "Exempt: resident senior citizen without business income (Sec 207)".ljust(87) + "║")
        elif not result.advance_tax_applicable:
            print("║   " + "Not applicable: tax due after TDS does not exceed ₹10,000 (Sec 208)".ljust(87) + "║")

        print("║   " + "Due Date".ljust(14) + "Cum. %".rjust(8) + "Required".rjust(17)
              + "Paid".rjust(16) + "Shortfall".rjust(16) + "234C".rjust(13) + "   ║")
        print("╟" + "─" * self.WIDTH + "╢")
        for row in result.advance_tax_schedule:
            print(
                "║   "
                + row.due_date.strftime('%d-%b-%Y').ljust(14)
                + f"{row.cumulative_percentage:>7}%"
                + f"₹{row.required_amount:>16,.0f}"
                + f"₹{row.actual_paid:>15,.0f}"
                + f"₹{row.shortfall:>15,.0f}"
                + f"₹{row.interest_234c:>12,.0f}"
                + "   ║"
            )

    def _print_summary(self, result: WorksheetResult) -> None:
        self._title("SUMMARY")
        self._line(f"Tax Payable ({result.applied_regime.value.title()} Regime)", result.final_tax)
        self._line("Less: TDS Credited", -result.total_tds_credited)
        self._line("Assessed Tax", result.assessed_tax)
        self._line("Add: Interest u/s 234B", result.interest_234b)
        self._line("Add: Interest u/s 234C", result.interest_234c)
        self._line("Less: Advance Tax Paid", -result.advance_tax_paid)
        print("╟" + "─" * self.WIDTH + "╢")
        self._line("NET AMOUNT PAYABLE", result.net_amount_payable)

    def print_capital_gains(self, result: WorksheetResult) -> None:
        """
        Print entry-wise capital gains classification.

        Args:
            result: Computed worksheet
        """
        entries: List[ClassifiedGain] = []
        for summary in (result.equity_funds, result.debt_funds, result.foreign_stocks):
            if summary:
                entries.extend(summary.entries)
        if not entries:
            return

        print("\n" + "=" * 120)
        print("CAPITAL GAINS CLASSIFICATION")
        print("=" * 120)

        sorted_entries = sorted(entries, key=lambda e: (e.disposed, e.category.value, e.description))
        for i, entry in enumerate(sorted_entries, 1):
            self._print_entry(i, entry)

    def _print_entry(self, index: int, entry: ClassifiedGain) -> None:
        """Print a single classified entry."""
        print(f"\n{'─' * 120}")
        print(f"Entry #{index} [{entry.category.value}] {entry.description}")
        print(f"{'─' * 120}")
        print(f"  Acquired:            {entry.acquired.strftime('%d-%b-%Y')}")
        print(f"  Disposed:            {entry.disposed.strftime('%d-%b-%Y')}")
        print(f"  Holding Period:      {entry.months_held} months (threshold > {entry.threshold_months})")
        print(f"  Classification:      {'LONG TERM' if entry.is_long_term else 'SHORT TERM'}"
              + (" (taxed at slab)" if entry.taxed_at_slab else ""))
        print(f"  Sale Value:          ₹{entry.sale_value:,.2f}")
        print(f"  Cost Basis:          ₹{entry.cost_basis:,.2f}")
        if entry.expenses:
            print(f"  Expenses:            ₹{entry.expenses:,.2f}")
        if entry.indexed_cost is not None:
            print(f"  Indexed Cost:        ₹{entry.indexed_cost:,.2f}")
        print(f"  Gain / (Loss):       ₹{entry.gain:,.2f}")
        print(f"  Taxable Gain:        ₹{entry.taxable_gain:,.2f}")
        print(f"  TDS:                 ₹{entry.tds:,.2f}")
