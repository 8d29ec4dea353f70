"""
Tax calculation module for the worksheet.

This module provides tax rates, slab tables, and calculation logic
for both regimes based on Indian Income Tax Act provisions.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from .models import (
    AgeBracket,
    Deductions,
    GainSummary,
    Quarter,
    RegimeTax,
    TaxpayerProfile,
    TaxRegime,
)

INFINITY = float("inf")


@dataclass(frozen=True)
class InstallmentRule:
    """Statutory advance tax installment (Section 211)."""
    quarter: Quarter
    due_date: date
    cumulative_percentage: int
    interest_months: int  # Months of 234C interest on a shortfall


@dataclass
class TaxRates:
    """
    Tax rates and limits for FY 2025-26 (AY 2026-27).

    Slab tables are sequences of (upper limit, rate); income exactly at
    an upper limit is taxed at that slab's rate.

    Capital gains (special rates, before surcharge and cess):
    - Equity fund STCG (Section 111A): 20%
    - Equity fund LTCG (Section 112A): 12.5% above ₹1,25,000
    - Debt fund LTCG (indexed): 20%
    - Foreign stock LTCG (indexed): 20%
    - Foreign stock STCG: 15%
    - Debt fund STCG: slab rates

    Surcharge by total income: 10% above ₹50L, 15% above ₹1Cr,
    25% above ₹2Cr. Health & Education Cess: 4%.
    """

    # Financial year
    FINANCIAL_YEAR: str = "2025-26"
    FY_START: date = date(2025, 4, 1)
    FY_END: date = date(2026, 3, 31)

    # Holding period thresholds for LTCG (months, exclusive)
    EQUITY_LTCG_THRESHOLD_MONTHS: int = 12
    DEBT_LTCG_THRESHOLD_MONTHS: int = 36
    FOREIGN_LTCG_THRESHOLD_MONTHS: int = 24

    # Special rates for capital gains
    EQUITY_STCG_RATE: float = 0.20
    EQUITY_LTCG_RATE: float = 0.125
    LTCG_EXEMPTION: float = 125000.0  # ₹1,25,000 (Section 112A)
    DEBT_LTCG_RATE: float = 0.20
    FOREIGN_LTCG_RATE: float = 0.20
    FOREIGN_STCG_RATE: float = 0.15

    # Slab tables
    OLD_REGIME_SLABS: Tuple[Tuple[float, float], ...] = (
        (250000.0, 0.0),
        (500000.0, 0.05),
        (1000000.0, 0.20),
        (INFINITY, 0.30),
    )
    NEW_REGIME_SLABS: Tuple[Tuple[float, float], ...] = (
        (300000.0, 0.0),
        (700000.0, 0.05),
        (1000000.0, 0.10),
        (1200000.0, 0.15),
        (1500000.0, 0.20),
        (INFINITY, 0.30),
    )

    # Rebate u/s 87A: slab tax is nil at or below these limits
    OLD_REGIME_REBATE_LIMIT: float = 500000.0
    NEW_REGIME_REBATE_LIMIT: float = 700000.0

    # Surcharge and cess
    SURCHARGE_SLABS: Tuple[Tuple[float, float], ...] = (
        (5000000.0, 0.0),
        (10000000.0, 0.10),
        (20000000.0, 0.15),
        (INFINITY, 0.25),
    )
    CESS_RATE: float = 0.04

    # Deductions
    STANDARD_DEDUCTION: float = 50000.0
    MAX_80C: float = 150000.0
    MAX_80D: float = 25000.0
    MAX_80D_SENIOR: float = 50000.0
    MAX_80CCD_1B: float = 50000.0

    # Advance tax (Sections 208, 211, 234B, 234C)
    ADVANCE_TAX_THRESHOLD: float = 10000.0
    INSTALLMENTS: Tuple[InstallmentRule, ...] = (
        InstallmentRule(Quarter.JUNE, date(2025, 6, 15), 15, 3),
        InstallmentRule(Quarter.SEPTEMBER, date(2025, 9, 15), 45, 3),
        InstallmentRule(Quarter.DECEMBER, date(2025, 12, 15), 75, 3),
        InstallmentRule(Quarter.MARCH, date(2026, 3, 15), 100, 1),
    )
    INTEREST_RATE_PER_MONTH: float = 0.01
    INTEREST_234B_MONTHS: int = 4  # April 1 to July 31 of the assessment year
    INTEREST_234B_PAID_RATIO: float = 0.90

    def slabs_for(self, regime: TaxRegime) -> Tuple[Tuple[float, float], ...]:
        return self.OLD_REGIME_SLABS if regime == TaxRegime.OLD else self.NEW_REGIME_SLABS

    def rebate_limit_for(self, regime: TaxRegime) -> float:
        if regime == TaxRegime.OLD:
            return self.OLD_REGIME_REBATE_LIMIT
        return self.NEW_REGIME_REBATE_LIMIT

    def installment_for(self, quarter: Quarter) -> InstallmentRule:
        for rule in self.INSTALLMENTS:
            if rule.quarter == quarter:
                return rule
        raise KeyError(f"No installment configured for {quarter.value}")


def progressive_tax(income: float, slabs: Tuple[Tuple[float, float], ...]) -> float:
    """
    Apply a progressive slab table to an income figure.

    Examples:
        >>> progressive_tax(600000, TaxRates().NEW_REGIME_SLABS)
        15000.0
    """
    tax = 0.0
    lower = 0.0
    for upper, rate in slabs:
        if income <= lower:
            break
        tax += (min(income, upper) - lower) * rate
        lower = upper
    return tax


class TaxCalculator:
    """
    Calculator for computing income tax under a given regime.

    Applies Indian tax rules for:
    - Progressive slab rates and the Section 87A rebate
    - Special rates on capital gains, with the Section 112A exemption
    - Surcharge by total income and Health & Education Cess
    - Chapter VI-A deduction caps (old regime only)

    Example:
        >>> calculator = TaxCalculator()
        >>> regime_tax = calculator.compute_regime(
        ...     TaxRegime.NEW, 1147600.0, Deductions(), TaxpayerProfile(),
        ...     equity=GainSummary(GainCategory.EQUITY_FUND),
        ...     debt=GainSummary(GainCategory.DEBT_FUND),
        ...     foreign=GainSummary(GainCategory.FOREIGN_EQUITY),
        ... )
        >>> print(f"Tax: ₹{regime_tax.total_tax:,.2f}")
    """

    def __init__(self, rates: TaxRates = None):
        """
        Initialize the tax calculator.

        Args:
            rates: Tax rates to use. Defaults to current FY rates.
        """
        self.rates = rates or TaxRates()

    def slab_tax(self, taxable_income: float, regime: TaxRegime) -> float:
        """
        Tax on ordinary income at slab rates, after the Section 87A rebate.

        The rebate is all-or-nothing: at or below the regime's limit the
        tax is nil, one rupee above it the full slab tax applies.
        """
        income = max(0.0, taxable_income)
        if income <= self.rates.rebate_limit_for(regime):
            return 0.0
        return progressive_tax(income, self.rates.slabs_for(regime))

    def special_rate_breakdown(
        self,
        equity: GainSummary,
        debt: GainSummary,
        foreign: GainSummary,
    ) -> Dict[str, float]:
        """Tax on each capital gains bucket taxed at a flat rate."""
        rates = self.rates
        return {
            'equity_stcg': equity.special_rate_short_term * rates.EQUITY_STCG_RATE,
            'equity_ltcg': max(0.0, equity.long_term - rates.LTCG_EXEMPTION) * rates.EQUITY_LTCG_RATE,
            'debt_ltcg': debt.long_term * rates.DEBT_LTCG_RATE,
            'foreign_ltcg': foreign.long_term * rates.FOREIGN_LTCG_RATE,
            'foreign_stcg': foreign.special_rate_short_term * rates.FOREIGN_STCG_RATE,
        }

    def special_rate_tax(
        self,
        equity: GainSummary,
        debt: GainSummary,
        foreign: GainSummary,
    ) -> float:
        """Total tax on gains taxed at special rates."""
        return sum(self.special_rate_breakdown(equity, debt, foreign).values())

    def surcharge_rate(self, total_income: float) -> float:
        for upper, rate in self.rates.SURCHARGE_SLABS:
            if total_income <= upper:
                return rate
        return self.rates.SURCHARGE_SLABS[-1][1]

    def surcharge(self, tax: float, total_income: float) -> float:
        """Surcharge on tax, by total income tier."""
        return tax * self.surcharge_rate(total_income)

    def apply_surcharge_and_cess(self, tax: float, total_income: float) -> Tuple[float, float, float]:
        """
        Add surcharge and cess to base tax.

        Returns:
            Tuple of (surcharge, cess, final tax)
        """
        surcharge = self.surcharge(tax, total_income)
        cess = (tax + surcharge) * self.rates.CESS_RATE
        return surcharge, cess, tax + surcharge + cess

    def deduction_total(self, deductions: Deductions, profile: TaxpayerProfile) -> float:
        """Deductions allowed under the old regime, after statutory caps."""
        rates = self.rates
        max_80d = rates.MAX_80D if profile.age_bracket == AgeBracket.BELOW_60 else rates.MAX_80D_SENIOR
        return (
            min(deductions.section_80c, rates.MAX_80C)
            + min(deductions.section_80d, max_80d)
            + min(deductions.section_80ccd_1b, rates.MAX_80CCD_1B)
            + deductions.section_80g
            + deductions.section_24b
            + deductions.other_chapter_via
        )

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
        """
        Compute final tax under one regime.

        Args:
            regime: Regime to compute
            gross_ordinary_income: Income taxed at slab rates, before deductions
            deductions: Deductions claimed (ignored under the new regime)
            profile: Taxpayer profile (drives the 80D ceiling)
            equity: Equity fund gains
            debt: Debt fund gains
            foreign: Foreign stock gains

        Returns:
            RegimeTax with the full breakdown
        """
        allowed = self.deduction_total(deductions, profile) if regime == TaxRegime.OLD else 0.0
        taxable_ordinary = max(0.0, gross_ordinary_income - allowed)

        slab_tax = self.slab_tax(taxable_ordinary, regime)
        special_tax = self.special_rate_tax(equity, debt, foreign)
        special_income = equity.special_rate_total + debt.special_rate_total + foreign.special_rate_total

        surcharge, cess, total_tax = self.apply_surcharge_and_cess(
            slab_tax + special_tax, taxable_ordinary + special_income
        )

        return RegimeTax(
            regime=regime,
            gross_ordinary_income=gross_ordinary_income,
            deductions=allowed,
            taxable_ordinary_income=taxable_ordinary,
            special_rate_income=special_income,
            slab_tax=slab_tax,
            special_rate_tax=special_tax,
            surcharge=surcharge,
            cess=cess,
            total_tax=total_tax,
        )
