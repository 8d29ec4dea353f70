"""
Capital gains classification and aggregation.

This module provides the CapitalGainsCalculator class that classifies
mutual fund redemptions and foreign stock sales as long-term or
short-term and totals the gains for each category.
"""

from datetime import date
from typing import List, Optional, Tuple

from .indexation import FlatRateIndexation
from .interfaces import IIndexationProvider
from .models import (
    ClassifiedGain,
    ForeignStockSale,
    FundType,
    GainCategory,
    GainSummary,
    MutualFundWithdrawal,
)
from .tax import TaxRates
from .utils import months_between


class CapitalGainsCalculator:
    """
    Calculator for classifying and totalling capital gains.

    Holding periods are counted in whole months and compared against a
    per-category threshold (equity funds 12, debt funds 36, foreign
    stocks 24). Losses are classified for reporting but add nothing to
    the taxable totals; they are not set off or carried forward.

    Attributes:
        rates: Tax rates holding the thresholds and fiscal-year start
        indexation: Provider for indexed cost of long-term debt/foreign gains

    Example:
        >>> calculator = CapitalGainsCalculator()
        >>> equity, debt = calculator.summarize_mutual_funds(withdrawals)
        >>> print(equity.long_term, debt.slab_taxed)
    """

    def __init__(
        self,
        rates: Optional[TaxRates] = None,
        indexation: Optional[IIndexationProvider] = None,
    ):
        """
        Initialize the calculator.

        Args:
            rates: Tax rates to use. Defaults to current FY rates.
            indexation: Indexation provider. Defaults to a flat 4% per year.
        """
        self.rates = rates or TaxRates()
        self.indexation = indexation or FlatRateIndexation()

    @staticmethod
    def months_held(acquired: date, disposed: date) -> int:
        """Whole months between acquisition and disposal, floored at zero."""
        return months_between(acquired, disposed)

    @staticmethod
    def is_long_term(months: int, threshold_months: int) -> bool:
        """Long-term only when held strictly longer than the threshold."""
        return months > threshold_months

    def classify_mutual_fund(self, withdrawal: MutualFundWithdrawal) -> ClassifiedGain:
        """
        Classify a single mutual fund redemption.

        Debt fund gains are indexed when long-term and taxed at slab
        rates when short-term.
        """
        disposed = withdrawal.redemption_date or self.rates.FY_START
        is_equity = withdrawal.fund_type == FundType.EQUITY
        threshold = (
            self.rates.EQUITY_LTCG_THRESHOLD_MONTHS if is_equity
            else self.rates.DEBT_LTCG_THRESHOLD_MONTHS
        )
        months = self.months_held(withdrawal.acquisition_date, disposed)
        long_term = self.is_long_term(months, threshold)

        gain = withdrawal.amount_withdrawn - withdrawal.cost_basis
        taxable = max(0.0, gain)
        indexed_cost = None

        if not is_equity and long_term:
            indexed_cost = self.indexation.indexed_cost(
                withdrawal.cost_basis, withdrawal.acquisition_date, disposed
            )
            if gain > 0:
                taxable = max(0.0, withdrawal.amount_withdrawn - indexed_cost)

        return ClassifiedGain(
            category=GainCategory.EQUITY_FUND if is_equity else GainCategory.DEBT_FUND,
            description=withdrawal.fund_name,
            acquired=withdrawal.acquisition_date,
            disposed=disposed,
            months_held=months,
            threshold_months=threshold,
            is_long_term=long_term,
            sale_value=withdrawal.amount_withdrawn,
            cost_basis=withdrawal.cost_basis,
            indexed_cost=indexed_cost,
            gain=gain,
            taxable_gain=taxable,
            taxed_at_slab=not is_equity and not long_term,
            tds=withdrawal.tds,
        )

    def classify_foreign_stock(self, sale: ForeignStockSale) -> ClassifiedGain:
        """
        Classify a single foreign stock sale.

        Brokerage is deducted as a transfer expense; long-term gains are
        computed against the indexed INR cost.
        """
        threshold = self.rates.FOREIGN_LTCG_THRESHOLD_MONTHS
        months = self.months_held(sale.purchase_date, sale.sale_date)
        long_term = self.is_long_term(months, threshold)

        gain = sale.sale_proceeds_inr - sale.cost_basis_inr - sale.brokerage
        taxable = max(0.0, gain)
        indexed_cost = None

        if long_term:
            indexed_cost = self.indexation.indexed_cost(
                sale.cost_basis_inr, sale.purchase_date, sale.sale_date
            )
            if gain > 0:
                taxable = max(0.0, sale.sale_proceeds_inr - indexed_cost - sale.brokerage)

        return ClassifiedGain(
            category=GainCategory.FOREIGN_EQUITY,
            description=sale.symbol,
            acquired=sale.purchase_date,
            disposed=sale.sale_date,
            months_held=months,
            threshold_months=threshold,
            is_long_term=long_term,
            sale_value=sale.sale_proceeds_inr,
            cost_basis=sale.cost_basis_inr,
            expenses=sale.brokerage,
            indexed_cost=indexed_cost,
            gain=gain,
            taxable_gain=taxable,
            tds=sale.tds,
        )

    @staticmethod
    def summarize(category: GainCategory, entries: List[ClassifiedGain]) -> GainSummary:
        """
        Total classified entries for one category.

        TDS is summed for every entry, including losses.
        """
        summary = GainSummary(category=category, entries=list(entries))
        for entry in entries:
            summary.total_tds += entry.tds
            if entry.is_long_term:
                summary.long_term += entry.taxable_gain
            else:
                summary.short_term += entry.taxable_gain
            if entry.taxed_at_slab:
                summary.slab_taxed += entry.taxable_gain
        return summary

    def summarize_mutual_funds(
        self,
        withdrawals: List[MutualFundWithdrawal],
    ) -> Tuple[GainSummary, GainSummary]:
        """
        Classify and total mutual fund redemptions.

        Returns:
            Tuple of (equity fund summary, debt fund summary)
        """
        classified = [self.classify_mutual_fund(w) for w in withdrawals]
        equity = [c for c in classified if c.category == GainCategory.EQUITY_FUND]
        debt = [c for c in classified if c.category == GainCategory.DEBT_FUND]
        return (
            self.summarize(GainCategory.EQUITY_FUND, equity),
            self.summarize(GainCategory.DEBT_FUND, debt),
        )

    def summarize_foreign_stocks(self, sales: List[ForeignStockSale]) -> GainSummary:
        """Classify and total foreign stock sales."""
        classified = [self.classify_foreign_stock(s) for s in sales]
        return self.summarize(GainCategory.FOREIGN_EQUITY, classified)
