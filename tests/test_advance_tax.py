"""
Unit tests for the advance tax schedule and interest under 234B/234C.
"""

import pytest
from datetime import date

from tax_worksheet.advance_tax import AdvanceTaxCalculator, Interest234BBasis
from tax_worksheet.interfaces import IAdvanceTaxCalculator
from tax_worksheet.models import AdvanceTaxPayment, Quarter


class TestApplicability:
    """Tests for when advance tax is payable."""

    @pytest.fixture
    def calculator(self):
        return AdvanceTaxCalculator()

    def test_threshold_is_exclusive(self, calculator):
        assert not calculator.is_applicable(10000.0, exempt=False)
        assert calculator.is_applicable(10000.01, exempt=False)

    def test_exempt_never_applicable(self, calculator):
        assert not calculator.is_applicable(500000.0, exempt=True)


class TestPayments:
    """Tests for matching payments to dates."""

    @pytest.fixture
    def calculator(self):
        return AdvanceTaxCalculator()

    def test_missing_date_uses_due_date(self, calculator):
        payment = AdvanceTaxPayment(Quarter.DECEMBER, 1000.0)

        assert calculator.payment_date(payment) == date(2025, 12, 15)

    def test_zero_amounts_ignored(self, calculator):
        payments = [
            AdvanceTaxPayment(Quarter.JUNE, 0.0, date(2025, 6, 1)),
            AdvanceTaxPayment(Quarter.JUNE, 5000.0, date(2025, 6, 1)),
        ]

        assert calculator.dated_payments(payments) == [(date(2025, 6, 1), 5000.0)]

    def test_paid_by_cutoff(self, calculator, fy_end):
        payments = [
            AdvanceTaxPayment(Quarter.MARCH, 5000.0, date(2026, 3, 20)),
            AdvanceTaxPayment(Quarter.MARCH, 3000.0, date(2026, 4, 10)),
        ]

        assert calculator.paid_by(payments, fy_end) == 5000.0
        assert calculator.total_paid(payments) == 8000.0


class TestSchedule:
    """Tests for the installment schedule and Section 234C."""

    @pytest.fixture
    def calculator(self):
        return AdvanceTaxCalculator()

    def test_cumulative_requirements(self, calculator):
        schedule = calculator.build_schedule(100000.0, True, [])

        assert [row.required_amount for row in schedule] == pytest.approx([15000.0, 45000.0, 75000.0, 100000.0])
        assert [row.due_date for row in schedule] == [
            date(2025, 6, 15), date(2025, 9, 15), date(2025, 12, 15), date(2026, 3, 15),
        ]

    def test_nothing_paid(self, calculator):
        schedule = calculator.build_schedule(100000.0, True, [])

        assert calculator.interest_234c(schedule) == pytest.approx(
            0.03 * (15000.0 + 45000.0 + 75000.0) + 0.01 * 100000.0
        )

    def test_not_applicable_gives_zero_rows(self, calculator):
        schedule = calculator.build_schedule(100000.0, False, [])

        assert all(row.required_amount == 0.0 for row in schedule)
        assert all(row.shortfall == 0.0 for row in schedule)
        assert calculator.interest_234c(schedule) == 0.0

    def test_late_payment_counts_for_later_installment(self, calculator):
        payments = [AdvanceTaxPayment(Quarter.JUNE, 15000.0, date(2025, 7, 1))]
        schedule = calculator.build_schedule(100000.0, True, payments)

        assert schedule[0].actual_paid == 0.0
        assert schedule[0].shortfall == pytest.approx(15000.0)
        assert schedule[1].actual_paid == 15000.0
        assert schedule[1].shortfall == pytest.approx(30000.0)

    def test_paid_on_time_has_no_234c(self, calculator):
        payments = [
            AdvanceTaxPayment(Quarter.JUNE, 15000.0),
            AdvanceTaxPayment(Quarter.SEPTEMBER, 30000.0),
            AdvanceTaxPayment(Quarter.DECEMBER, 30000.0),
            AdvanceTaxPayment(Quarter.MARCH, 25000.0),
        ]
        schedule = calculator.build_schedule(100000.0, True, payments)

        assert calculator.interest_234c(schedule) == 0.0

    def test_overpayment_never_gives_negative_shortfall(self, calculator):
        payments = [AdvanceTaxPayment(Quarter.JUNE, 200000.0, date(2025, 5, 1))]
        schedule = calculator.build_schedule(100000.0, True, payments)

        assert [row.shortfall for row in schedule] == [0.0, 0.0, 0.0, 0.0]
        assert all(row.actual_paid == 200000.0 for row in schedule)

    def test_shortfall_accrues_at_each_installment(self, calculator):
        payments = [AdvanceTaxPayment(Quarter.SEPTEMBER, 45000.0, date(2025, 9, 15))]
        schedule = calculator.build_schedule(100000.0, True, payments)

        assert schedule[0].interest_234c == pytest.approx(450.0)
        assert schedule[1].interest_234c == 0.0
        assert schedule[2].interest_234c == pytest.approx(900.0)
        assert schedule[3].interest_234c == pytest.approx(550.0)


class TestInterest234B:
    """Tests for Section 234B interest."""

    def test_zero_at_ninety_percent(self):
        calculator = AdvanceTaxCalculator()

        assert calculator.interest_234b(100000.0, True, 90000.0) == 0.0

    def test_zero_when_not_applicable(self):
        calculator = AdvanceTaxCalculator()

        assert calculator.interest_234b(100000.0, False, 0.0) == 0.0

    def test_threshold_shortfall_basis(self):
        calculator = AdvanceTaxCalculator(basis=Interest234BBasis.THRESHOLD_SHORTFALL)

        assert calculator.interest_234b(100000.0, True, 0.0) == pytest.approx(3600.0)
        assert calculator.interest_234b(100000.0, True, 50000.0) == pytest.approx(1600.0)

    def test_assessed_tax_shortfall_basis(self):
        calculator = AdvanceTaxCalculator(basis=Interest234BBasis.ASSESSED_TAX_SHORTFALL)

        assert calculator.interest_234b(100000.0, True, 0.0) == pytest.approx(4000.0)
        assert calculator.interest_234b(100000.0, True, 50000.0) == pytest.approx(2000.0)

    @pytest.mark.parametrize("basis", list(Interest234BBasis))
    def test_proportional_to_shortfall(self, basis):
        calculator = AdvanceTaxCalculator(basis=basis)

        small = calculator.interest_234b(100000.0, True, 80000.0)
        large = calculator.interest_234b(100000.0, True, 70000.0)

        assert small > 0
        assert large > small

    def test_is_advance_tax_calculator(self):
        assert isinstance(AdvanceTaxCalculator(), IAdvanceTaxCalculator)
