"""
Interface definitions (Protocols) for the Advance Tax Worksheet.

This module defines abstract interfaces that enable loose coupling
between components and facilitate testing with mock implementations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Tuple, Any, Protocol, runtime_checkable

from .models import (
    AdvanceTaxPayment,
    Deductions,
    ForeignStockSale,
    GainSummary,
    InstallmentRow,
    MutualFundWithdrawal,
    RegimeTax,
    TaxpayerProfile,
    TaxRegime,
    WorksheetResult,
)


@runtime_checkable
class IIndexationProvider(Protocol):
    """
    Interface for cost indexation providers.

    Any class implementing this interface can supply the indexed cost
    used for long-term debt fund and foreign stock gains.
    """

    def indexed_cost(self, cost: float, acquired: date, disposed: date) -> float:
        """
        Get the inflation-adjusted cost of acquisition.

        Args:
            cost: Original cost in INR
            acquired: Acquisition date
            disposed: Transfer date

        Returns:
            Indexed cost in INR
        """
        ...


@runtime_checkable
class IGainsCalculator(Protocol):
    """
    Interface for capital gains classifiers/aggregators.
    """

    def summarize_mutual_funds(
        self,
        withdrawals: List[MutualFundWithdrawal],
    ) -> Tuple[GainSummary, GainSummary]:
        """Return (equity fund summary, debt fund summary)."""
        ...

    def summarize_foreign_stocks(self, sales: List[ForeignStockSale]) -> GainSummary:
        """Return the foreign equity summary."""
        ...


@runtime_checkable
class ITaxCalculator(Protocol):
    """
    Interface for regime tax calculators.
    """

    def compute_regime(
        self,
        regime: TaxRegime,
        gross_ordinary_income: float,
        deductions: Deductions,
        profile: TaxpayerProfile,
        equity: GainSummary,
        debt: GainSummary,
        foreign: GainSummary,
    ) -> RegimeTax:
        """Compute final tax under one regime."""
        ...


@runtime_checkable
class IAdvanceTaxCalculator(Protocol):
    """
    Interface for advance tax schedulers.
    """

    def build_schedule(
        self,
        assessed_tax: float,
        applicable: bool,
        payments: List[AdvanceTaxPayment],
    ) -> List[InstallmentRow]:
        """Build the installment schedule with shortfalls."""
        ...

    def interest_234b(self, assessed_tax: float, applicable: bool, paid_through_year_end: float) -> float:
        """Interest for default in payment of advance tax."""
        ...


@runtime_checkable
class IReporter(Protocol):
    """
    Interface for report generators.
    """

    def generate(self, result: WorksheetResult, **kwargs) -> Any:
        """
        Generate a report.

        Args:
            result: Computed worksheet
            **kwargs: Additional report-specific arguments

        Returns:
            Report output (format depends on implementation)
        """
        ...


class BaseReporter(ABC):
    """
    Abstract base class for report generators.
    """

    @abstractmethod
    def generate(self, result: WorksheetResult, **kwargs) -> Any:
        """Generate a report."""
        pass
