#!/usr/bin/env python3
"""
Advance Tax Worksheet - Main Entry Point

Computes income tax under both regimes, the advance tax installment
schedule, and interest under Sections 234B and 234C from a JSON file
describing one taxpayer's financial year.

Usage:
    python main.py --input worksheet.json
    python main.py -i worksheet.json --excel worksheet.xlsx
    python main.py -i worksheet.json --output-json result.json --234b-basis assessed_tax_shortfall
"""

import argparse
import json
import os
import sys

# Set UTF-8 encoding for console output (fixes Windows encoding issues)
if sys.platform == 'win32':
    sys.stdout.reconfigure(encoding='utf-8')

from tax_worksheet import (
    Interest234BBasis,
    WorksheetInput,
    generate_worksheet,
    validate_worksheet_input,
)
from tax_worksheet.reports import ConsoleReporter, ExcelReporter
from tax_worksheet.utils import format_currency_inr


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Advance Tax Worksheet for Indian individual taxpayers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input worksheet.json
    (Print the worksheet to the console)

  python main.py -i worksheet.json --excel worksheet.xlsx
    (Also export the worksheet to Excel)

  python main.py -i worksheet.json --234b-basis assessed_tax_shortfall
    (Charge 234B interest on the full assessed tax shortfall)
"""
    )

    parser.add_argument('--input', '-i', dest='input_file', required=True,
                        help='Path to the worksheet input JSON file')
    parser.add_argument('--excel', '-x', dest='excel_file',
                        help='Path to write the Excel worksheet')
    parser.add_argument('--output-json', '-o', dest='json_file',
                        help='Path to write the computed result as JSON')
    parser.add_argument('--234b-basis', dest='interest_234b_basis',
                        choices=[b.value for b in Interest234BBasis],
                        default=Interest234BBasis.THRESHOLD_SHORTFALL.value,
                        help='Amount on which 234B interest is charged (default: threshold_shortfall)')
    parser.add_argument('--no-gains', action='store_true',
                        help='Do not print entry-wise capital gains detail')

    return parser


def load_input(path: str) -> WorksheetInput:
    """
    Load a worksheet input from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or has invalid values
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")
    return WorksheetInput.from_dict(data)


def main(argv=None) -> int:
    """Main function to run the worksheet. Returns the process exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    print("=" * 80)
    print("  ADVANCE TAX WORKSHEET")
    print("=" * 80)

    if not os.path.exists(args.input_file):
        print(f"\n[ERROR] Input file not found: {args.input_file}")
        return 1

    print(f"\n[+] Loading input from: {os.path.basename(args.input_file)}")
    try:
        worksheet_input = load_input(args.input_file)
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        return 1

    issues = validate_worksheet_input(worksheet_input)
    if issues:
        print(f"\n[ERROR] Input has {len(issues)} problem(s):")
        for issue in issues:
            print(f"    [ERROR] {issue}")
        return 1

    profile = worksheet_input.profile
    print(f"    Taxpayer:              {profile.name or 'Not given'}")
    print(f"    Financial Year:        {profile.financial_year}")
    print(f"    Mutual fund entries:   {len(worksheet_input.mutual_funds)}")
    print(f"    Foreign stock entries: {len(worksheet_input.foreign_stocks)}")
    print(f"    Advance tax payments:  {len(worksheet_input.advance_tax_payments)}")

    basis = Interest234BBasis(args.interest_234b_basis)
    print(f"\n[*] Computing worksheet (234B basis: {basis.value})")
    result = generate_worksheet(worksheet_input, interest_234b_basis=basis)

    ConsoleReporter().generate(result, show_gains=not args.no_gains)

    if args.excel_file:
        ExcelReporter().export(args.excel_file, result)

    if args.json_file:
        with open(args.json_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"[OK] JSON exported to: {args.json_file}")

    if result.exempt_from_advance_tax:
        print("\n[*] Advance tax not required: resident senior citizen without business income")
    elif not result.advance_tax_applicable:
        print("\n[*] Advance tax not required: tax due after TDS is ₹10,000 or less")
    elif result.total_interest > 0:
        print(f"\n[WARN] Interest u/s 234B/234C: {format_currency_inr(result.total_interest)}")

    print(f"\n[OK] Net amount payable: {format_currency_inr(result.net_amount_payable)}")
    print("\n" + "=" * 80)
    print("  CALCULATION COMPLETE")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
