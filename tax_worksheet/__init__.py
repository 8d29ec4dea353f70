"""
Advance Tax Worksheet Package

Computes Indian individual income tax under both regimes, the advance
tax installment schedule, and interest under Sections 234B and 234C
for a single financial year.
"""

__version__ = "1.0.0"

from .models import (
    AgeBracket,
    ResidentialStatus,
    TaxRegime,
    FundType,
    OtherIncomeCategory,
    Quarter,
    GainCategory,
    TaxpayerProfile,
    SalaryIncome,
    MutualFundWithdrawal,
    ForeignStockSale,
    OtherIncome,
    Deductions,
    AdvanceTaxPayment,
    WorksheetInput,
    ClassifiedGain,
    GainSummary,
    RegimeTax,
    InstallmentRow,
    WorksheetResult,
)
from .calculator import CapitalGainsCalculator
from .tax import TaxCalculator, TaxRates, InstallmentRule
from .advance_tax import AdvanceTaxCalculator, Interest234BBasis
from .indexation import FlatRateIndexation, CostInflationIndexTable
from .worksheet import WorksheetGenerator, generate_worksheet
from .validation import (
    IssueKind,
    ValidationIssue,
    InputValidationError,
    validate_worksheet_input,
    ensure_valid,
)
from .interfaces import (
    IIndexationProvider,
    IGainsCalculator,
    ITaxCalculator,
    IAdvanceTaxCalculator,
    IReporter,
    BaseReporter,
)

__all__ = [
    # Models
    "AgeBracket",
    "ResidentialStatus",
    "TaxRegime",
    "FundType",
    "OtherIncomeCategory",
    "Quarter",
    "GainCategory",
    "TaxpayerProfile",
    "SalaryIncome",
    "MutualFundWithdrawal",
    "ForeignStockSale",
    "OtherIncome",
    "Deductions",
    "AdvanceTaxPayment",
    "WorksheetInput",
    "ClassifiedGain",
    "GainSummary",
    "RegimeTax",
    "InstallmentRow",
    "WorksheetResult",
    # Services
    "CapitalGainsCalculator",
    "TaxCalculator",
    "TaxRates",
    "InstallmentRule",
    "AdvanceTaxCalculator",
    "Interest234BBasis",
    "FlatRateIndexation",
    "CostInflationIndexTable",
    "WorksheetGenerator",
    "generate_worksheet",
    # Validation
    "IssueKind",
    "ValidationIssue",
    "InputValidationError",
    "validate_worksheet_input",
    "ensure_valid",
    # Interfaces
    "IIndexationProvider",
    "IGainsCalculator",
    "ITaxCalculator",
    "IAdvanceTaxCalculator",
    "IReporter",
    "BaseReporter",
]
