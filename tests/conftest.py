"""
Pytest configuration and shared fixtures.
"""

import sys
import os
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tax_worksheet.models import (
    AgeBracket,
    AdvanceTaxPayment,
    Deductions,
    FundType,
    MutualFundWithdrawal,
    OtherIncome,
    OtherIncomeCategory,
    Quarter,
    SalaryIncome,
    TaxpayerProfile,
    WorksheetInput,
)


@pytest.fixture
def fy_start():
    """First day of FY 2025-26."""
    return date(2025, 4, 1)


@pytest.fixture
def fy_end():
    """Last day of FY 2025-26."""
    return date(2026, 3, 31)


@pytest.fixture
def salaried_input():
    """
    Salaried taxpayer, ₹12L gross, no TDS and no advance tax paid.

    Taxable (new regime): 12,00,000 - 2,400 - 50,000 = 11,47,600
    """
    return WorksheetInput(
        profile=TaxpayerProfile(name="Asha Rao", pan="ABCDE1234F"),
        salary=SalaryIncome(
            gross_salary=1200000.0,
            professional_tax=2400.0,
            employment_start_date=date(2025, 4, 1),
            employment_end_date=date(2026, 3, 31),
        ),
    )


@pytest.fixture
def senior_input():
    """Resident senior with interest income only."""
    return WorksheetInput(
        profile=TaxpayerProfile(
            name="K. Menon", age_bracket=AgeBracket.SENIOR, has_business_income=False
        ),
        other_income=[
            OtherIncome(OtherIncomeCategory.INTEREST, 40000.0, description="FD interest"),
        ],
    )


@pytest.fixture
def mixed_input():
    """Salary, a fund redemption, other income, deductions and a payment."""
    return WorksheetInput(
        profile=TaxpayerProfile(name="Ravi Iyer", pan="PQRST6789K"),
        salary=SalaryIncome(gross_salary=1800000.0, professional_tax=2500.0, tds=150000.0),
        mutual_funds=[
            MutualFundWithdrawal(
                fund_type=FundType.EQUITY,
                acquisition_date=date(2022, 6, 10),
                redemption_date=date(2025, 8, 1),
                amount_withdrawn=400000.0,
                cost_basis=200000.0,
                fund_name="Index Fund",
            ),
        ],
        other_income=[OtherIncome(OtherIncomeCategory.RENTAL, 120000.0, tds=12000.0)],
        deductions=Deductions(section_80c=150000.0, section_80d=25000.0),
        advance_tax_payments=[
            AdvanceTaxPayment(Quarter.SEPTEMBER, 50000.0, date(2025, 9, 10)),
        ],
    )
