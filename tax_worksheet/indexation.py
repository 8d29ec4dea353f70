"""
Cost indexation for long-term capital gains.

Long-term debt fund and foreign stock gains are computed against an
inflation-adjusted ("indexed") cost. Two providers are available:

- FlatRateIndexation: uplifts cost by a fixed percentage per whole year
  held. This is the default approximation.
- CostInflationIndexTable: uses the published Cost Inflation Index (CII)
  for the financial years of acquisition and transfer.

Both satisfy IIndexationProvider and can be swapped without changing the
gain computation in CapitalGainsCalculator.
"""

from datetime import date
from typing import Dict, Optional

from .utils import whole_years_between


def financial_year_start(value: date) -> int:
    """Calendar year in which the financial year containing ``value`` starts."""
    return value.year if value.month >= 4 else value.year - 1


class FlatRateIndexation:
    """
    Approximate indexation at a fixed annual rate.

    Example:
        >>> FlatRateIndexation(0.04).indexed_cost(100000, date(2021, 4, 1), date(2025, 4, 1))
        116985.856
    """

    DEFAULT_ANNUAL_RATE = 0.04

    def __init__(self, annual_rate: float = DEFAULT_ANNUAL_RATE):
        self.annual_rate = annual_rate

    def indexed_cost(self, cost: float, acquired: date, disposed: date) -> float:
        years = whole_years_between(acquired, disposed)
        return cost * (1 + self.annual_rate) ** years


class CostInflationIndexTable:
    """
    Indexation using the Cost Inflation Index notified under Section 48.

    Keys are the starting calendar year of each financial year
    (2001 means FY 2001-02, the base year). Acquisitions before the base
    year use the base year index.
    """

    BASE_YEAR = 2001

    DEFAULT_INDEX: Dict[int, int] = {
        2001: 100, 2002: 105, 2003: 109, 2004: 113, 2005: 117,
        2006: 122, 2007: 129, 2008: 137, 2009: 148, 2010: 167,
        2011: 184, 2012: 200, 2013: 220, 2014: 240, 2015: 254,
        2016: 264, 2017: 272, 2018: 280, 2019: 289, 2020: 301,
        2021: 317, 2022: 331, 2023: 348, 2024: 363, 2025: 376,
    }

    def __init__(self, index: Optional[Dict[int, int]] = None):
        self.index = dict(index or self.DEFAULT_INDEX)

    def index_for(self, value: date) -> int:
        """
        CII for the financial year containing ``value``.

        Years past the end of the table use the latest published index.
        """
        year = max(financial_year_start(value), self.BASE_YEAR)
        known = [y for y in self.index if y <= year]
        return self.index[max(known) if known else min(self.index)]

    def indexed_cost(self, cost: float, acquired: date, disposed: date) -> float:
        if disposed <= acquired:
            return cost
        return cost * self.index_for(disposed) / self.index_for(acquired)
