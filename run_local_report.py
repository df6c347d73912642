#!/usr/bin/env python3
"""
Local Payroll Report Script
Prints a payroll report for one organization without running the API.

Usage:
    python run_local_report.py [weeks_back] [--jobs]
"""

import logging
import sys
from datetime import date

from app.config import get_settings
from app.services.payroll_aggregator import aggregate_payroll
from app.services.payroll_export import format_currency, report_to_csv
from app.services.payroll_source import PayrollJobSource
from app.services.report_periods import format_period_label, get_week_range, shift_week
from app.services.supabase_client import get_supabase_client


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    include_jobs = "--jobs" in sys.argv[1:]
    try:
        weeks_back = int(args[0]) if args else 0
    except ValueError:
        print("Usage: python run_local_report.py [weeks_back] [--jobs]")
        return 1

    org_id = settings.default_organization_id
    if not org_id:
        print("ERROR: DEFAULT_ORGANIZATION_ID is not set")
        return 1

    start_date, end_date = get_week_range(shift_week(date.today(), -weeks_back))

    print("=" * 60)
    print("PAYROLL REPORT")
    print("=" * 60)
    print(f"\nOrganization: {org_id}")
    print(f"Period: {format_period_label(start_date, end_date)}")

    source = PayrollJobSource(
        get_supabase_client(),
        table_name=settings.jobs_table,
        statuses=settings.payroll_statuses,
        page_size=settings.page_size,
    )
    report = aggregate_payroll(source.fetch_jobs(org_id, start_date, end_date))

    if not report.technicians:
        print("\nNo completed jobs found for this period.")
        return 0

    print("\n" + "-" * 40)
    print(report_to_csv(report, include_jobs=include_jobs))
    print("-" * 40)

    totals = report.grand_totals
    print(f"Jobs: {totals.job_count}")
    print(f"Revenue: {format_currency(totals.total_revenue)}")
    print(f"Tips: {format_currency(totals.total_tips)}")
    print(f"CC Fees: {format_currency(totals.total_cc_fees)}")
    print(f"Net Revenue: {format_currency(totals.net_revenue)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
