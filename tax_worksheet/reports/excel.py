"""
Excel report generation module.

This module provides the ExcelReporter class for generating
formatted Excel workbooks from a computed worksheet.
"""

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from ..interfaces import BaseReporter
from ..models import TaxRegime, WorksheetResult


INR_FORMAT = '₹#,##0.00'


class ExcelReporter(BaseReporter):
    """
    Reporter for generating Excel workbooks.

    Creates multi-sheet workbooks with:
    - Summary sheet
    - Tax computation (old vs new regime)
    - Advance tax schedule
    - Capital gains entries
    """

    def __init__(self):
        """Initialize reporter with styles."""
        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        self.ltcg_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
        self.stcg_fill = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
        self.loss_fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")

        self.summary_font = Font(bold=True, size=12)
        self.summary_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

    def generate(self, result: WorksheetResult, **kwargs) -> bool:
        """Export to the path given as ``filepath``."""
        return self.export(kwargs['filepath'], result)

    def export(self, filepath, result: WorksheetResult) -> bool:
        """
        Export the worksheet to an Excel workbook.

        Args:
            filepath: Output file path (or writable binary file object)
            result: Computed worksheet

        Returns:
            True if export successful
        """
        wb = Workbook()

        self._create_summary_sheet(wb, result)
        self._create_tax_sheet(wb, result)
        self._create_advance_tax_sheet(wb, result)
        self._create_gains_sheet(wb, result)

        wb.save(filepath)
        if isinstance(filepath, str):
            print(f"[OK] Excel exported to: {filepath}")
        return True

    def _write_header(self, ws, row: int, headers) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.header_alignment
            cell.border = self.thin_border

    def _write_section(self, ws, row: int, title: str, last_col: str = "B") -> None:
        ws.cell(row=row, column=1, value=title).font = self.summary_font
        ws.cell(row=row, column=1).fill = self.summary_fill
        ws.merge_cells(f'A{row}:{last_col}{row}')

    def _write_amount_rows(self, ws, row: int, items) -> int:
        for desc, value in items:
            ws.cell(row=row, column=1, value=desc).border = self.thin_border
            cell = ws.cell(row=row, column=2, value=value)
            cell.number_format = INR_FORMAT
            cell.border = self.thin_border
            row += 1
        return row

    def _create_summary_sheet(self, wb, result: WorksheetResult) -> None:
        """Create the summary sheet."""
        ws = wb.active
        ws.title = "Summary"

        self._write_section(ws, 1, "INCOME SUMMARY")
        row = self._write_amount_rows(ws, 2, [
            ("Income from Salary (net)", result.salary_income),
            ("Income from Other Sources", result.other_income),
            ("Gross Total Income", result.total_income),
            ("Taxable Income (applied regime)", result.taxable_income),
            ("Total TDS Credited", result.total_tds_credited),
        ])

        row += 1
        self._write_section(ws, row, "LIABILITY")
        row += 1
        applied = "Old" if result.applied_regime == TaxRegime.OLD else "New"
        ws.cell(row=row, column=1, value="Recommended Regime")
        ws.cell(row=row, column=2, value=result.recommended_regime.value.title())
        row += 1
        ws.cell(row=row, column=1, value="Applied Regime")
        ws.cell(row=row, column=2, value=applied)
        row += 1
        row = self._write_amount_rows(ws, row, [
            ("Final Tax", result.final_tax),
            ("Assessed Tax (after TDS)", result.assessed_tax),
            ("Interest u/s 234B", result.interest_234b),
            ("Interest u/s 234C", result.interest_234c),
            ("Advance Tax Paid", result.advance_tax_paid),
        ])
        ws.cell(row=row, column=1, value="NET AMOUNT PAYABLE").font = Font(bold=True)
        total = ws.cell(row=row, column=2, value=result.net_amount_payable)
        total.font = Font(bold=True)
        total.number_format = INR_FORMAT

        ws.column_dimensions['A'].width = 36
        ws.column_dimensions['B'].width = 22

    def _create_tax_sheet(self, wb, result: WorksheetResult) -> None:
        """Create the regime comparison sheet."""
        ws = wb.create_sheet("Tax Computation")
        self._write_header(ws, 1, ["Item", "Old Regime", "New Regime"])

        old, new = result.old_regime, result.new_regime
        rows = [
            ("Gross Ordinary Income", old.gross_ordinary_income, new.gross_ordinary_income),
            ("Deductions", old.deductions, new.deductions),
            ("Taxable Ordinary Income", old.taxable_ordinary_income, new.taxable_ordinary_income),
            ("Income at Special Rates", old.special_rate_income, new.special_rate_income),
            ("Tax at Slab Rates", old.slab_tax, new.slab_tax),
            ("Tax at Special Rates", old.special_rate_tax, new.special_rate_tax),
            ("Surcharge", old.surcharge, new.surcharge),
            ("Health & Education Cess", old.cess, new.cess),
            ("Total Tax", old.total_tax, new.total_tax),
        ]
        for row, (desc, old_value, new_value) in enumerate(rows, 2):
            ws.cell(row=row, column=1, value=desc).border = self.thin_border
            for col, value in ((2, old_value), (3, new_value)):
                cell = ws.cell(row=row, column=col, value=value)
                cell.number_format = INR_FORMAT
                cell.border = self.thin_border

        recommended_col = 2 if result.recommended_regime == TaxRegime.OLD else 3
        ws.cell(row=len(rows) + 1, column=recommended_col).fill = self.ltcg_fill

        ws.column_dimensions['A'].width = 30
        for col in range(2, 4):
            ws.column_dimensions[get_column_letter(col)].width = 20

    def _create_advance_tax_sheet(self, wb, result: WorksheetResult) -> None:
        """Create the advance tax schedule sheet."""
        ws = wb.create_sheet("Advance Tax")
        headers = ["Installment", "Due Date", "Cumulative %", "Required",
                   "Paid by Due Date", "Shortfall", "234C Months", "Interest 234C"]
        self._write_header(ws, 1, headers)

        row = 2
        for item in result.advance_tax_schedule:
            values = [
                item.quarter.label, item.due_date.strftime('%d-%b-%Y'),
                item.cumulative_percentage, item.required_amount, item.actual_paid,
                item.shortfall, item.interest_months, item.interest_234c,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.thin_border
                if col in (4, 5, 6, 8):
                    cell.number_format = INR_FORMAT
            if item.shortfall > 0:
                ws.cell(row=row, column=6).fill = self.loss_fill
            row += 1

        row += 1
        self._write_amount_rows(ws, row, [
            ("Paid by March 31", result.paid_through_year_end),
            ("Interest u/s 234B", result.interest_234b),
            ("Interest u/s 234C", result.interest_234c),
        ])

        for col in range(1, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

    def _create_gains_sheet(self, wb, result: WorksheetResult) -> None:
        """Create the capital gains entries sheet."""
        ws = wb.create_sheet("Capital Gains")
        headers = ["Category", "Description", "Acquired", "Disposed", "Months Held",
                   "Term", "Sale Value", "Cost", "Indexed Cost", "Expenses",
                   "Gain/Loss", "Taxable Gain", "TDS"]
        self._write_header(ws, 1, headers)

        row = 2
        for summary in (result.equity_funds, result.debt_funds, result.foreign_stocks):
            if not summary:
                continue
            for entry in summary.entries:
                values = [
                    entry.category.value, entry.description,
                    entry.acquired.strftime('%d-%b-%Y'), entry.disposed.strftime('%d-%b-%Y'),
                    entry.months_held, entry.term_label, entry.sale_value, entry.cost_basis,
                    entry.indexed_cost, entry.expenses, entry.gain, entry.taxable_gain, entry.tds,
                ]
                fill = self.loss_fill if entry.is_loss else (
                    self.ltcg_fill if entry.is_long_term else self.stcg_fill
                )
                for col, value in enumerate(values, 1):
                    cell = ws.cell(row=row, column=col, value=value)
                    cell.border = self.thin_border
                    cell.fill = fill
                    if col >= 7:
                        cell.number_format = INR_FORMAT
                row += 1

        for col in range(1, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 15
