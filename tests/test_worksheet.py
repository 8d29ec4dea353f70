"""
End-to-end tests for worksheet generation.
"""

import json

import pytest
from datetime import date

from tax_worksheet import (
    AdvanceTaxPayment,
    Interest234BBasis,
    Quarter,
    SalaryIncome,
    TaxpayerProfile,
    TaxRegime,
    WorksheetGenerator,
    WorksheetInput,
    generate_worksheet,
)


NEW_REGIME_TAX = 75025.6  # (72,140 slab tax) * 1.04
OLD_REGIME_TAX = 163051.2  # (1,56,780 slab tax) * 1.04


class TestSalariedTaxpayer:
    """₹12L salary, nothing paid during the year."""

    @pytest.fixture
    def result(self, salaried_input):
        return generate_worksheet(salaried_input)

    def test_income(self, result):
        assert result.salary_income == 1147600.0
        assert result.total_income == 1147600.0
        assert result.taxable_income == 1147600.0

    def test_both_regimes(self, result):
        assert result.tax_new_regime == pytest.approx(NEW_REGIME_TAX)
        assert result.tax_old_regime == pytest.approx(OLD_REGIME_TAX)

    def test_new_regime_recommended(self, result):
        assert result.recommended_regime == TaxRegime.NEW
        assert result.applied_regime == TaxRegime.NEW
        assert result.final_tax == pytest.approx(NEW_REGIME_TAX)

    def test_schedule(self, result):
        assert result.advance_tax_applicable
        assert result.assessed_tax == pytest.approx(NEW_REGIME_TAX)
        assert [row.required_amount for row in result.advance_tax_schedule] == pytest.approx(
            [11253.84, 33761.52, 56269.2, 75025.6]
        )

    def test_interest(self, result):
        expected_234c = 0.03 * (11253.84 + 33761.52 + 56269.2) + 0.01 * 75025.6

        assert result.interest_234c == pytest.approx(expected_234c)
        assert result.interest_234b == pytest.approx(2700.9216)
        assert result.interest_234b_basis == "threshold_shortfall"

    def test_net_payable(self, result):
        assert result.net_amount_payable == pytest.approx(
            NEW_REGIME_TAX + result.interest_234b + result.interest_234c
        )

    def test_assessed_tax_basis(self, salaried_input):
        result = generate_worksheet(
            salaried_input, interest_234b_basis=Interest234BBasis.ASSESSED_TAX_SHORTFALL
        )

        assert result.interest_234b == pytest.approx(NEW_REGIME_TAX * 0.04)
        assert result.interest_234b_basis == "assessed_tax_shortfall"

    def test_elected_regime_overrides_recommendation(self, salaried_input):
        salaried_input.profile.elected_regime = TaxRegime.OLD
        result = generate_worksheet(salaried_input)

        assert result.recommended_regime == TaxRegime.NEW
        assert result.applied_regime == TaxRegime.OLD
        assert result.assessed_tax == pytest.approx(OLD_REGIME_TAX)


class TestTdsAndPayments:
    """TDS and advance tax paid during the year."""

    def test_tds_reduces_advance_tax_base(self, salaried_input):
        salaried_input.salary.tds = 60000.0
        result = generate_worksheet(salaried_input)

        assert result.total_tds_credited == 60000.0
        assert result.assessed_tax == pytest.approx(NEW_REGIME_TAX - 60000.0)
        assert result.advance_tax_schedule[0].required_amount == pytest.approx(
            0.15 * (NEW_REGIME_TAX - 60000.0)
        )

    def test_tds_below_threshold_not_applicable(self, salaried_input):
        salaried_input.salary.tds = 70000.0
        result = generate_worksheet(salaried_input)

        assert not result.advance_tax_applicable
        assert result.interest_234b == 0.0
        assert result.interest_234c == 0.0
        assert result.net_amount_payable == pytest.approx(NEW_REGIME_TAX - 70000.0)

    def test_paid_in_full_on_time(self, salaried_input):
        salaried_input.advance_tax_payments = [
            AdvanceTaxPayment(Quarter.JUNE, 12000.0),
            AdvanceTaxPayment(Quarter.SEPTEMBER, 22000.0),
            AdvanceTaxPayment(Quarter.DECEMBER, 23000.0),
            AdvanceTaxPayment(Quarter.MARCH, 19000.0),
        ]
        result = generate_worksheet(salaried_input)

        assert result.interest_234c == 0.0
        assert result.interest_234b == 0.0
        assert result.advance_tax_paid == 76000.0
        assert result.net_amount_payable == 0.0

    def test_ninety_percent_by_march_avoids_234b(self, salaried_input):
        salaried_input.advance_tax_payments = [
            AdvanceTaxPayment(Quarter.MARCH, 67600.0, date(2026, 3, 15)),
        ]
        result = generate_worksheet(salaried_input)

        assert result.interest_234b == 0.0
        assert result.interest_234c > 0

    def test_payment_after_year_end(self, salaried_input):
        salaried_input.advance_tax_payments = [
            AdvanceTaxPayment(Quarter.MARCH, 75025.6, date(2026, 4, 10)),
        ]
        result = generate_worksheet(salaried_input)

        assert result.paid_through_year_end == 0.0
        assert result.advance_tax_paid == pytest.approx(75025.6)
        assert result.interest_234b == pytest.approx(2700.9216)
        assert result.net_amount_payable == pytest.approx(result.total_interest)


class TestExemptTaxpayer:
    """Resident senior citizen without business income."""

    def test_all_zero(self, senior_input):
        result = generate_worksheet(senior_input)

        assert result.exempt_from_advance_tax
        assert not result.advance_tax_applicable
        assert result.final_tax == 0.0
        assert result.interest_234b == 0.0
        assert result.interest_234c == 0.0
        assert result.net_amount_payable == 0.0
        assert all(row.required_amount == 0.0 for row in result.advance_tax_schedule)

    def test_exempt_even_with_large_tax(self, senior_input):
        senior_input.other_income[0].amount = 3000000.0
        result = generate_worksheet(senior_input)

        assert result.final_tax > 0
        assert not result.advance_tax_applicable
        assert result.total_interest == 0.0
        assert result.net_amount_payable == pytest.approx(result.assessed_tax)


class TestMixedIncome:
    """Salary, capital gains, other income and deductions together."""

    def test_gains_flow_into_totals(self, mixed_input):
        result = generate_worksheet(mixed_input)

        assert result.equity_funds.long_term == 200000.0
        assert result.applied.special_rate_income == 200000.0
        assert result.total_income == pytest.approx(result.applied.gross_ordinary_income + 200000.0)
        assert result.total_tds_credited == 162000.0

    def test_deterministic(self, mixed_input):
        generator = WorksheetGenerator()

        assert generator.generate(mixed_input).to_dict() == generator.generate(mixed_input).to_dict()

    def test_json_round_trip_gives_same_result(self, mixed_input):
        restored = WorksheetInput.from_dict(json.loads(json.dumps(mixed_input.to_dict())))

        assert generate_worksheet(restored).to_dict() == generate_worksheet(mixed_input).to_dict()

    def test_result_is_json_serializable(self, mixed_input):
        data = json.loads(json.dumps(generate_worksheet(mixed_input).to_dict()))

        assert len(data['advance_tax_schedule']) == 4
        assert data['equity_funds']['entries'][0]['is_long_term'] is True


class TestSeniorWithoutBusinessFlag:
    """Senior profile loaded without has_business_income."""

    def test_advance_tax_applies(self):
        worksheet_input = WorksheetInput.from_dict({
            "profile": {"name": "S. Pillai", "age_bracket": "60to80"},
            "other_income": [{"category": "misc", "amount": 3000000}],
        })
        result = generate_worksheet(worksheet_input)

        assert not result.exempt_from_advance_tax
        assert result.advance_tax_applicable
        assert result.interest_234b > 0


class TestSalaryDates:
    """Missing employment dates are filled from the profile and the year."""

    def test_end_date_from_date_of_unemployment(self):
        worksheet_input = WorksheetInput(
            profile=TaxpayerProfile(date_of_unemployment=date(2025, 9, 30)),
            salary=SalaryIncome(
                gross_salary=600000.0,
                professional_tax=1200.0,
                employment_start_date=date(2025, 4, 1),
            ),
        )
        result = generate_worksheet(worksheet_input)

        assert result.salary_income == 600000.0 - 1200.0 - 25000.0
        assert worksheet_input.salary.employment_end_date is None

    def test_missing_dates_cover_full_year(self):
        worksheet_input = WorksheetInput(
            salary=SalaryIncome(gross_salary=600000.0),
        )
        result = generate_worksheet(worksheet_input)

        assert result.salary_income == 550000.0
        assert worksheet_input.salary.employment_start_date is None

    def test_explicit_end_date_wins(self):
        worksheet_input = WorksheetInput(
            profile=TaxpayerProfile(date_of_unemployment=date(2025, 9, 30)),
            salary=SalaryIncome(
                gross_salary=600000.0,
                employment_start_date=date(2025, 4, 1),
                employment_end_date=date(2025, 6, 30),
            ),
        )
        result = generate_worksheet(worksheet_input)

        assert result.salary_income == 600000.0 - 12500.0
