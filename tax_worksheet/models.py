"""
Data models for the Advance Tax Worksheet.

This module contains the enums and dataclasses describing the taxpayer,
the income and payment records entered for a financial year, and the
values the worksheet computes from them.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, List, Dict, Any

from .utils import parse_optional_date, format_date


class AgeBracket(Enum):
    """Age bracket of the taxpayer."""
    BELOW_60 = "below60"
    SENIOR = "60to80"        # Senior citizen
    SUPER_SENIOR = "above80" # Super senior citizen


class ResidentialStatus(Enum):
    """Residential status for the financial year."""
    RESIDENT = "resident"
    NON_RESIDENT = "non-resident"
    RNOR = "rnor"  # Resident but Not Ordinarily Resident


class TaxRegime(Enum):
    """Tax regime elected by the taxpayer."""
    OLD = "old"  # Deduction-eligible regime
    NEW = "new"  # Default regime, no Chapter VI-A deductions


class FundType(Enum):
    """Mutual fund category for capital gains purposes."""
    EQUITY = "equity"
    DEBT = "debt"


class OtherIncomeCategory(Enum):
    """Category of income from other sources."""
    INTEREST = "interest"
    RENTAL = "rental"
    MISC = "misc"


class Quarter(Enum):
    """Advance tax installment quarters."""
    JUNE = "june"
    SEPTEMBER = "september"
    DECEMBER = "december"
    MARCH = "march"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class GainCategory(Enum):
    """Capital gains categories taxed separately."""
    EQUITY_FUND = "equity_fund"
    DEBT_FUND = "debt_fund"
    FOREIGN_EQUITY = "foreign_equity"


def _enum_value(enum_cls, value, field_name: str):
    """Convert a raw value to an enum member with a readable error."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {field_name}: {value!r} (expected one of: {allowed})")


def _amount(data: Dict[str, Any], key: str) -> float:
    try:
        return float(data.get(key) or 0.0)
    except TypeError:
        raise ValueError(f"Invalid {key}: {data.get(key)!r} (expected a number)")


def _require_mapping(value, field_name: str) -> Dict[str, Any]:
    """Return ``value`` if it is a JSON object, else raise ValueError."""
    if not isinstance(value, dict):
        raise ValueError(f"Invalid {field_name}: expected an object, got {type(value).__name__}")
    return value


def _require_records(value, field_name: str) -> List[Dict[str, Any]]:
    """Return ``value`` if it is a list of JSON objects, else raise ValueError."""
    if not isinstance(value, list):
        raise ValueError(f"Invalid {field_name}: expected a list, got {type(value).__name__}")
    return [_require_mapping(item, f"{field_name}[{i}]") for i, item in enumerate(value)]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass
class TaxpayerProfile:
    """
    Taxpayer details that drive exemptions and deduction ceilings.

    Attributes:
        name: Taxpayer name
        pan: Permanent Account Number (AAAAA9999A)
        age_bracket: Age bracket for the financial year
        residential_status: Residential status for the financial year
        has_business_income: True if the taxpayer has business/professional income.
            Defaults to True: a senior is exempt only when this is set to False.
        financial_year: Financial year label (e.g., '2025-26')
        date_of_unemployment: Date employment ended, if during the year
        elected_regime: Regime the taxpayer opted for; None means use the recommendation
    """
    name: str = ""
    pan: str = ""
    age_bracket: AgeBracket = AgeBracket.BELOW_60
    residential_status: ResidentialStatus = ResidentialStatus.RESIDENT
    has_business_income: bool = True
    financial_year: str = "2025-26"
    date_of_unemployment: Optional[date] = None
    elected_regime: Optional[TaxRegime] = None

    @property
    def is_senior(self) -> bool:
        """True for senior and super senior citizens."""
        return self.age_bracket != AgeBracket.BELOW_60

    @property
    def is_exempt_from_advance_tax(self) -> bool:
        """Resident seniors without business income need not pay advance tax."""
        return (
            self.residential_status == ResidentialStatus.RESIDENT
            and self.is_senior
            and not self.has_business_income
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'pan': self.pan,
            'age_bracket': self.age_bracket.value,
            'residential_status': self.residential_status.value,
            'has_business_income': self.has_business_income,
            'financial_year': self.financial_year,
            'date_of_unemployment': format_date(self.date_of_unemployment),
            'elected_regime': self.elected_regime.value if self.elected_regime else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaxpayerProfile":
        elected = data.get('elected_regime')
        return cls(
            name=data.get('name', ""),
            pan=data.get('pan', ""),
            age_bracket=_enum_value(AgeBracket, data.get('age_bracket', "below60"), 'age_bracket'),
            residential_status=_enum_value(
                ResidentialStatus, data.get('residential_status', "resident"), 'residential_status'
            ),
            has_business_income=bool(data.get('has_business_income', True)),
            financial_year=data.get('financial_year', "2025-26"),
            date_of_unemployment=parse_optional_date(data.get('date_of_unemployment')),
            elected_regime=_enum_value(TaxRegime, elected, 'elected_regime') if elected else None,
        )


@dataclass
class SalaryIncome:
    """
    Salary received during the financial year.

    Attributes:
        gross_salary: Gross salary in INR
        professional_tax: Professional tax paid in INR
        tds: Tax deducted at source by the employer
        employment_start_date: First day of employment in the year
        employment_end_date: Last day of employment in the year
    """
    gross_salary: float
    professional_tax: float = 0.0
    tds: float = 0.0
    employment_start_date: Optional[date] = None
    employment_end_date: Optional[date] = None

    @property
    def employment_months(self) -> int:
        """Months employed; a partial month counts as a full one."""
        if not self.employment_start_date or not self.employment_end_date:
            return 12
        start, end = self.employment_start_date, self.employment_end_date
        if start > end:
            return 0
        months = (end.year - start.year) * 12 + (end.month - start.month) + 1
        return min(max(months, 1), 12)

    def standard_deduction(self, annual_cap: float) -> float:
        """Standard deduction pro-rated by employment months."""
        pro_rata = round(annual_cap * self.employment_months / 12)
        return min(pro_rata, max(self.gross_salary - self.professional_tax, 0.0))

    def net_salary(self, annual_cap: float) -> float:
        """Salary chargeable to tax after professional tax and standard deduction."""
        return max(
            0.0,
            self.gross_salary - self.professional_tax - self.standard_deduction(annual_cap),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gross_salary': self.gross_salary,
            'professional_tax': self.professional_tax,
            'tds': self.tds,
            'employment_start_date': format_date(self.employment_start_date),
            'employment_end_date': format_date(self.employment_end_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SalaryIncome":
        return cls(
            gross_salary=_amount(data, 'gross_salary'),
            professional_tax=_amount(data, 'professional_tax'),
            tds=_amount(data, 'tds'),
            employment_start_date=parse_optional_date(data.get('employment_start_date')),
            employment_end_date=parse_optional_date(data.get('employment_end_date')),
        )


@dataclass
class MutualFundWithdrawal:
    """
    A single mutual fund redemption.

    Attributes:
        fund_type: Equity-oriented or debt-oriented fund
        acquisition_date: Date the units were purchased
        amount_withdrawn: Redemption value in INR
        cost_basis: Purchase cost of the redeemed units in INR
        tds: Tax deducted at source on the redemption
        redemption_date: Date of redemption (None means fiscal-year start)
        fund_name: Scheme name, for reporting
    """
    fund_type: FundType
    acquisition_date: date
    amount_withdrawn: float
    cost_basis: float
    tds: float = 0.0
    redemption_date: Optional[date] = None
    fund_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fund_name': self.fund_name,
            'fund_type': self.fund_type.value,
            'acquisition_date': format_date(self.acquisition_date),
            'redemption_date': format_date(self.redemption_date),
            'amount_withdrawn': self.amount_withdrawn,
            'cost_basis': self.cost_basis,
            'tds': self.tds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MutualFundWithdrawal":
        acquired = parse_optional_date(data.get('acquisition_date'))
        if acquired is None:
            raise ValueError("Mutual fund withdrawal is missing acquisition_date")
        return cls(
            fund_type=_enum_value(FundType, data.get('fund_type'), 'fund_type'),
            acquisition_date=acquired,
            redemption_date=parse_optional_date(data.get('redemption_date')),
            amount_withdrawn=_amount(data, 'amount_withdrawn'),
            cost_basis=_amount(data, 'cost_basis'),
            tds=_amount(data, 'tds'),
            fund_name=data.get('fund_name', ""),
        )


@dataclass
class ForeignStockSale:
    """
    A sale of foreign (e.g., US-listed) shares.

    INR values are already converted by the caller using the exchange
    rate of the relevant date.

    Attributes:
        purchase_date: Date the shares were acquired
        sale_date: Date the shares were sold
        sale_proceeds_inr: Sale proceeds in INR
        cost_basis_inr: Acquisition cost in INR
        sale_proceeds_usd: Sale proceeds in source currency
        cost_basis_usd: Acquisition cost in source currency
        brokerage: Brokerage and other transfer expenses in INR
        tds: Tax deducted at source
        symbol: Ticker symbol, for reporting
    """
    purchase_date: date
    sale_date: date
    sale_proceeds_inr: float
    cost_basis_inr: float
    sale_proceeds_usd: float = 0.0
    cost_basis_usd: float = 0.0
    brokerage: float = 0.0
    tds: float = 0.0
    symbol: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'symbol': self.symbol,
            'purchase_date': format_date(self.purchase_date),
            'sale_date': format_date(self.sale_date),
            'sale_proceeds_usd': self.sale_proceeds_usd,
            'sale_proceeds_inr': self.sale_proceeds_inr,
            'cost_basis_usd': self.cost_basis_usd,
            'cost_basis_inr': self.cost_basis_inr,
            'brokerage': self.brokerage,
            'tds': self.tds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ForeignStockSale":
        purchased = parse_optional_date(data.get('purchase_date'))
        sold = parse_optional_date(data.get('sale_date'))
        if purchased is None or sold is None:
            raise ValueError("Foreign stock sale requires purchase_date and sale_date")
        return cls(
            purchase_date=purchased,
            sale_date=sold,
            sale_proceeds_inr=_amount(data, 'sale_proceeds_inr'),
            cost_basis_inr=_amount(data, 'cost_basis_inr'),
            sale_proceeds_usd=_amount(data, 'sale_proceeds_usd'),
            cost_basis_usd=_amount(data, 'cost_basis_usd'),
            brokerage=_amount(data, 'brokerage'),
            tds=_amount(data, 'tds'),
            symbol=data.get('symbol', ""),
        )


@dataclass
class OtherIncome:
    """Income from other sources (interest, rent, miscellaneous)."""
    category: OtherIncomeCategory
    amount: float
    tds: float = 0.0
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'category': self.category.value,
            'amount': self.amount,
            'tds': self.tds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OtherIncome":
        return cls(
            category=_enum_value(OtherIncomeCategory, data.get('category'), 'category'),
            amount=_amount(data, 'amount'),
            tds=_amount(data, 'tds'),
            description=data.get('description', ""),
        )


@dataclass
class Deductions:
    """
    Chapter VI-A and house property deductions claimed (old regime only).

    Amounts are as entered; statutory caps are applied by the tax calculator.
    """
    section_80c: float = 0.0
    section_80d: float = 0.0
    section_80ccd_1b: float = 0.0
    section_80g: float = 0.0
    section_24b: float = 0.0
    other_chapter_via: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'section_80c': self.section_80c,
            'section_80d': self.section_80d,
            'section_80ccd_1b': self.section_80ccd_1b,
            'section_80g': self.section_80g,
            'section_24b': self.section_24b,
            'other_chapter_via': self.other_chapter_via,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deductions":
        return cls(**{key: _amount(data, key) for key in cls().to_dict()})


@dataclass
class AdvanceTaxPayment:
    """
    An advance tax payment made against a quarterly installment.

    The quarter is only a label; the payment counts towards every
    installment whose due date falls on or after ``paid_on``.
    """
    quarter: Quarter
    amount_paid: float
    paid_on: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quarter': self.quarter.value,
            'amount_paid': self.amount_paid,
            'paid_on': format_date(self.paid_on),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvanceTaxPayment":
        return cls(
            quarter=_enum_value(Quarter, data.get('quarter'), 'quarter'),
            amount_paid=_amount(data, 'amount_paid'),
            paid_on=parse_optional_date(data.get('paid_on')),
        )


@dataclass
class WorksheetInput:
    """Everything the worksheet needs for one financial year."""
    profile: TaxpayerProfile = field(default_factory=TaxpayerProfile)
    salary: Optional[SalaryIncome] = None
    mutual_funds: List[MutualFundWithdrawal] = field(default_factory=list)
    foreign_stocks: List[ForeignStockSale] = field(default_factory=list)
    other_income: List[OtherIncome] = field(default_factory=list)
    deductions: Deductions = field(default_factory=Deductions)
    advance_tax_payments: List[AdvanceTaxPayment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            'profile': self.profile.to_dict(),
            'salary': self.salary.to_dict() if self.salary else None,
            'mutual_funds': [w.to_dict() for w in self.mutual_funds],
            'foreign_stocks': [s.to_dict() for s in self.foreign_stocks],
            'other_income': [o.to_dict() for o in self.other_income],
            'deductions': self.deductions.to_dict(),
            'advance_tax_payments': [p.to_dict() for p in self.advance_tax_payments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorksheetInput":
        """
        Build from a JSON-compatible dictionary (see ``to_dict``).

        Raises:
            ValueError: If a section has the wrong JSON type or a value is invalid
        """
        data = _require_mapping(data, "worksheet input")
        salary = data.get('salary')

        def records(key):
            return _require_records(data.get(key) or [], key)

        return cls(
            profile=TaxpayerProfile.from_dict(_require_mapping(data.get('profile') or {}, 'profile')),
            salary=SalaryIncome.from_dict(_require_mapping(salary, 'salary')) if salary else None,
            mutual_funds=[MutualFundWithdrawal.from_dict(w) for w in records('mutual_funds')],
            foreign_stocks=[ForeignStockSale.from_dict(s) for s in records('foreign_stocks')],
            other_income=[OtherIncome.from_dict(o) for o in records('other_income')],
            deductions=Deductions.from_dict(_require_mapping(data.get('deductions') or {}, 'deductions')),
            advance_tax_payments=[
                AdvanceTaxPayment.from_dict(p) for p in records('advance_tax_payments')
            ],
        )


# ---------------------------------------------------------------------------
# Computed values
# ---------------------------------------------------------------------------

@dataclass
class ClassifiedGain:
    """
    A capital gains entry after holding-period classification.

    Attributes:
        category: Gain category (equity fund, debt fund, foreign equity)
        description: Fund name or symbol
        acquired: Acquisition date
        disposed: Disposal date actually used
        months_held: Whole months held
        threshold_months: Long-term threshold for the category
        is_long_term: True if held strictly longer than the threshold
        sale_value: Sale or redemption value in INR
        cost_basis: Cost of acquisition in INR
        expenses: Transfer expenses in INR
        indexed_cost: Cost after indexation (None when not indexed)
        gain: Sale value less cost and expenses (negative for a loss)
        taxable_gain: Gain counted towards tax (never negative)
        taxed_at_slab: True if the gain folds into ordinary income
        tds: Tax deducted at source
    """
    category: GainCategory
    description: str
    acquired: date
    disposed: date
    months_held: int
    threshold_months: int
    is_long_term: bool
    sale_value: float
    cost_basis: float
    expenses: float = 0.0
    indexed_cost: Optional[float] = None
    gain: float = 0.0
    taxable_gain: float = 0.0
    taxed_at_slab: bool = False
    tds: float = 0.0

    @property
    def term_label(self) -> str:
        return "LTCG" if self.is_long_term else "STCG"

    @property
    def is_loss(self) -> bool:
        return self.gain <= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category.value,
            'description': self.description,
            'acquired': format_date(self.acquired),
            'disposed': format_date(self.disposed),
            'months_held': self.months_held,
            'threshold_months': self.threshold_months,
            'is_long_term': self.is_long_term,
            'sale_value': self.sale_value,
            'cost_basis': self.cost_basis,
            'expenses': self.expenses,
            'indexed_cost': self.indexed_cost,
            'gain': self.gain,
            'taxable_gain': self.taxable_gain,
            'taxed_at_slab': self.taxed_at_slab,
            'tds': self.tds,
        }


@dataclass
class GainSummary:
    """
    Aggregated gains for one category.

    ``short_term`` includes any amount in ``slab_taxed``; only debt fund
    short-term gains are taxed at slab rates.
    """
    category: GainCategory
    long_term: float = 0.0
    short_term: float = 0.0
    slab_taxed: float = 0.0
    total_tds: float = 0.0
    entries: List[ClassifiedGain] = field(default_factory=list)

    @property
    def special_rate_short_term(self) -> float:
        """Short-term gains taxed at a special (flat) rate."""
        return self.short_term - self.slab_taxed

    @property
    def special_rate_total(self) -> float:
        """Gains taxed at special rates (LTCG + special-rate STCG)."""
        return self.long_term + self.special_rate_short_term

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category.value,
            'long_term': self.long_term,
            'short_term': self.short_term,
            'slab_taxed': self.slab_taxed,
            'total_tds': self.total_tds,
            'entries': [e.to_dict() for e in self.entries],
        }


@dataclass
class RegimeTax:
    """Tax computed under one regime."""
    regime: TaxRegime
    gross_ordinary_income: float = 0.0
    deductions: float = 0.0
    taxable_ordinary_income: float = 0.0
    special_rate_income: float = 0.0
    slab_tax: float = 0.0
    special_rate_tax: float = 0.0
    surcharge: float = 0.0
    cess: float = 0.0
    total_tax: float = 0.0

    @property
    def taxable_income(self) -> float:
        """Ordinary taxable income plus gains taxed at special rates."""
        return self.taxable_ordinary_income + self.special_rate_income

    @property
    def tax_before_surcharge(self) -> float:
        return self.slab_tax + self.special_rate_tax

    def to_dict(self) -> Dict[str, Any]:
        return {
            'regime': self.regime.value,
            'gross_ordinary_income': self.gross_ordinary_income,
            'deductions': self.deductions,
            'taxable_ordinary_income': self.taxable_ordinary_income,
            'special_rate_income': self.special_rate_income,
            'taxable_income': self.taxable_income,
            'slab_tax': self.slab_tax,
            'special_rate_tax': self.special_rate_tax,
            'surcharge': self.surcharge,
            'cess': self.cess,
            'total_tax': self.total_tax,
        }


@dataclass
class InstallmentRow:
    """One advance tax installment compared against payments made."""
    quarter: Quarter
    due_date: date
    cumulative_percentage: int
    required_amount: float = 0.0
    actual_paid: float = 0.0
    shortfall: float = 0.0
    interest_months: int = 0
    interest_234c: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quarter': self.quarter.value,
            'due_date': format_date(self.due_date),
            'cumulative_percentage': self.cumulative_percentage,
            'required_amount': self.required_amount,
            'actual_paid': self.actual_paid,
            'shortfall': self.shortfall,
            'interest_months': self.interest_months,
            'interest_234c': self.interest_234c,
        }


@dataclass
class WorksheetResult:
    """
    Contains the complete worksheet computation.

    Attributes include income totals, tax under both regimes, the
    advance tax schedule, interest under sections 234B/234C, and the
    net amount payable.
    """
    old_regime: RegimeTax
    new_regime: RegimeTax
    recommended_regime: TaxRegime
    applied_regime: TaxRegime

    # Income
    total_income: float = 0.0
    taxable_income: float = 0.0
    salary_income: float = 0.0
    other_income: float = 0.0

    # Capital gains by category
    equity_funds: Optional[GainSummary] = None
    debt_funds: Optional[GainSummary] = None
    foreign_stocks: Optional[GainSummary] = None

    # Advance tax
    exempt_from_advance_tax: bool = False
    advance_tax_applicable: bool = False
    assessed_tax: float = 0.0
    advance_tax_schedule: List[InstallmentRow] = field(default_factory=list)
    advance_tax_paid: float = 0.0
    paid_through_year_end: float = 0.0

    # Interest
    interest_234b: float = 0.0
    interest_234c: float = 0.0
    interest_234b_basis: str = "threshold_shortfall"

    # Credits and liability
    total_tds_credited: float = 0.0
    net_amount_payable: float = 0.0

    @property
    def tax_old_regime(self) -> float:
        return self.old_regime.total_tax

    @property
    def tax_new_regime(self) -> float:
        return self.new_regime.total_tax

    @property
    def applied(self) -> RegimeTax:
        """Regime computation the liability is based on."""
        return self.old_regime if self.applied_regime == TaxRegime.OLD else self.new_regime

    @property
    def final_tax(self) -> float:
        return self.applied.total_tax

    @property
    def total_interest(self) -> float:
        return self.interest_234b + self.interest_234c

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            'total_income': self.total_income,
            'taxable_income': self.taxable_income,
            'salary_income': self.salary_income,
            'other_income': self.other_income,
            'tax_old_regime': self.tax_old_regime,
            'tax_new_regime': self.tax_new_regime,
            'recommended_regime': self.recommended_regime.value,
            'applied_regime': self.applied_regime.value,
            'old_regime': self.old_regime.to_dict(),
            'new_regime': self.new_regime.to_dict(),
            'equity_funds': self.equity_funds.to_dict() if self.equity_funds else None,
            'debt_funds': self.debt_funds.to_dict() if self.debt_funds else None,
            'foreign_stocks': self.foreign_stocks.to_dict() if self.foreign_stocks else None,
            'exempt_from_advance_tax': self.exempt_from_advance_tax,
            'advance_tax_applicable': self.advance_tax_applicable,
            'assessed_tax': self.assessed_tax,
            'advance_tax_schedule': [row.to_dict() for row in self.advance_tax_schedule],
            'advance_tax_paid': self.advance_tax_paid,
            'paid_through_year_end': self.paid_through_year_end,
            'interest_234b': self.interest_234b,
            'interest_234c': self.interest_234c,
            'interest_234b_basis': self.interest_234b_basis,
            'total_tds_credited': self.total_tds_credited,
            'net_amount_payable': self.net_amount_payable,
        }
