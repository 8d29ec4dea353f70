"""
Unit tests for capital gains classification.
"""

import pytest
from datetime import date

from tax_worksheet.calculator import CapitalGainsCalculator
from tax_worksheet.indexation import CostInflationIndexTable
from tax_worksheet.interfaces import IGainsCalculator
from tax_worksheet.models import (
    ForeignStockSale,
    FundType,
    GainCategory,
    MutualFundWithdrawal,
)


def equity_fund(acquired, redeemed=None, amount=150000.0, cost=100000.0, tds=0.0):
    return MutualFundWithdrawal(
        fund_type=FundType.EQUITY,
        acquisition_date=acquired,
        redemption_date=redeemed,
        amount_withdrawn=amount,
        cost_basis=cost,
        tds=tds,
        fund_name="Equity Fund",
    )


def debt_fund(acquired, redeemed=None, amount=150000.0, cost=100000.0, tds=0.0):
    return MutualFundWithdrawal(
        fund_type=FundType.DEBT,
        acquisition_date=acquired,
        redemption_date=redeemed,
        amount_withdrawn=amount,
        cost_basis=cost,
        tds=tds,
        fund_name="Debt Fund",
    )


class TestHoldingPeriod:
    """Tests for holding period classification."""

    def test_strictly_greater_than_threshold(self):
        assert CapitalGainsCalculator.is_long_term(13, 12)
        assert not CapitalGainsCalculator.is_long_term(12, 12)

    def test_months_held_never_negative(self):
        assert CapitalGainsCalculator.months_held(date(2025, 5, 1), date(2025, 4, 1)) == 0


class TestMutualFundClassification:
    """Tests for mutual fund redemptions."""

    @pytest.fixture
    def calculator(self):
        return CapitalGainsCalculator()

    def test_equity_at_threshold_is_short_term(self, calculator):
        entry = calculator.classify_mutual_fund(equity_fund(date(2024, 4, 1), date(2025, 4, 1)))

        assert entry.months_held == 12
        assert not entry.is_long_term
        assert not entry.taxed_at_slab

    def test_equity_past_threshold_is_long_term(self, calculator):
        entry = calculator.classify_mutual_fund(equity_fund(date(2024, 3, 1), date(2025, 4, 1)))

        assert entry.months_held == 13
        assert entry.is_long_term
        assert entry.taxable_gain == 50000.0
        assert entry.indexed_cost is None

    def test_month_end_acquisition_at_threshold(self, calculator):
        equity = calculator.classify_mutual_fund(equity_fund(date(2024, 3, 31), date(2025, 4, 30)))
        debt = calculator.classify_mutual_fund(debt_fund(date(2022, 3, 31), date(2025, 4, 30)))

        assert equity.months_held == 12
        assert not equity.is_long_term
        assert debt.months_held == 36
        assert debt.taxed_at_slab

    def test_redemption_defaults_to_year_start(self, calculator, fy_start):
        entry = calculator.classify_mutual_fund(equity_fund(date(2024, 4, 1)))

        assert entry.disposed == fy_start
        assert entry.months_held == 12

    def test_debt_at_threshold_taxed_at_slab(self, calculator):
        entry = calculator.classify_mutual_fund(debt_fund(date(2022, 4, 1), date(2025, 4, 1)))

        assert entry.months_held == 36
        assert not entry.is_long_term
        assert entry.taxed_at_slab
        assert entry.taxable_gain == 50000.0

    def test_debt_long_term_is_indexed(self, calculator):
        entry = calculator.classify_mutual_fund(debt_fund(date(2022, 3, 1), date(2025, 4, 1)))

        assert entry.months_held == 37
        assert entry.is_long_term
        assert entry.indexed_cost == pytest.approx(100000.0 * 1.04 ** 3)
        assert entry.taxable_gain == pytest.approx(150000.0 - 100000.0 * 1.04 ** 3)

    def test_loss_has_no_taxable_gain(self, calculator):
        entry = calculator.classify_mutual_fund(
            equity_fund(date(2023, 1, 1), date(2025, 4, 1), amount=80000.0, tds=1000.0)
        )

        assert entry.gain == -20000.0
        assert entry.taxable_gain == 0.0
        assert entry.is_loss

    def test_cii_provider(self):
        calculator = CapitalGainsCalculator(indexation=CostInflationIndexTable())
        entry = calculator.classify_mutual_fund(
            debt_fund(date(2021, 6, 1), date(2025, 6, 1), amount=200000.0)
        )

        assert entry.indexed_cost == pytest.approx(100000.0 * 376 / 317)


class TestForeignStockClassification:
    """Tests for foreign stock sales."""

    @pytest.fixture
    def calculator(self):
        return CapitalGainsCalculator()

    def test_at_threshold_is_short_term(self, calculator):
        sale = ForeignStockSale(
            purchase_date=date(2023, 4, 1),
            sale_date=date(2025, 4, 1),
            sale_proceeds_inr=300000.0,
            cost_basis_inr=200000.0,
            brokerage=1000.0,
            symbol="AAPL",
        )
        entry = calculator.classify_foreign_stock(sale)

        assert entry.months_held == 24
        assert not entry.is_long_term
        assert entry.gain == 99000.0
        assert entry.taxable_gain == 99000.0

    def test_month_end_purchase_at_threshold(self, calculator):
        sale = ForeignStockSale(
            purchase_date=date(2023, 3, 31),
            sale_date=date(2025, 4, 30),
            sale_proceeds_inr=300000.0,
            cost_basis_inr=200000.0,
        )
        entry = calculator.classify_foreign_stock(sale)

        assert entry.months_held == 24
        assert not entry.is_long_term
        assert entry.indexed_cost is None

    def test_long_term_uses_indexed_cost(self, calculator):
        sale = ForeignStockSale(
            purchase_date=date(2023, 3, 1),
            sale_date=date(2025, 4, 1),
            sale_proceeds_inr=300000.0,
            cost_basis_inr=200000.0,
            brokerage=1000.0,
        )
        entry = calculator.classify_foreign_stock(sale)

        assert entry.is_long_term
        assert entry.indexed_cost == pytest.approx(200000.0 * 1.04 ** 2)
        assert entry.taxable_gain == pytest.approx(300000.0 - 200000.0 * 1.04 ** 2 - 1000.0)


class TestSummaries:
    """Tests for gain aggregation."""

    @pytest.fixture
    def calculator(self):
        return CapitalGainsCalculator()

    def test_losses_still_contribute_tds(self, calculator):
        equity, debt = calculator.summarize_mutual_funds([
            equity_fund(date(2023, 1, 1), date(2025, 4, 1), amount=80000.0, tds=1000.0),
            equity_fund(date(2023, 1, 1), date(2025, 4, 1), tds=500.0),
        ])

        assert equity.long_term == 50000.0
        assert equity.total_tds == 1500.0
        assert len(equity.entries) == 2
        assert debt.entries == []

    def test_debt_short_term_goes_to_slab(self, calculator):
        equity, debt = calculator.summarize_mutual_funds([
            debt_fund(date(2024, 4, 1), date(2025, 4, 1)),
        ])

        assert debt.short_term == 50000.0
        assert debt.slab_taxed == 50000.0
        assert debt.special_rate_total == 0.0
        assert equity.category == GainCategory.EQUITY_FUND

    def test_foreign_summary(self, calculator):
        summary = calculator.summarize_foreign_stocks([
            ForeignStockSale(
                purchase_date=date(2024, 10, 1),
                sale_date=date(2025, 6, 1),
                sale_proceeds_inr=120000.0,
                cost_basis_inr=100000.0,
                tds=2000.0,
            ),
        ])

        assert summary.short_term == 20000.0
        assert summary.slab_taxed == 0.0
        assert summary.special_rate_short_term == 20000.0
        assert summary.total_tds == 2000.0

    def test_is_gains_calculator(self, calculator):
        assert isinstance(calculator, IGainsCalculator)
