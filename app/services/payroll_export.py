"""
Payroll Export

Presentation helpers for payroll reports: currency formatting, labels,
and CSV export. All rounding happens here, never in the aggregator.
"""

import csv
import io
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional, Union

from app.models.payroll_models import PayrollReport, PayrollJob

EMPTY = "-"

CSV_HEADER = ["Technician", "Jobs", "Revenue", "Tips", "CC Fees", "Net Revenue"]
CSV_JOB_HEADER = ["Customer", "Date", "Services", "Payment Method"]


def format_currency(amount: Union[Decimal, float, None]) -> str:
    """Format dollars as USD, e.g. 1234.5 -> '$1,234.50', -5 -> '-$5.00'"""
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if value == 0:
        return "$0.00"
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def format_payment_method(method: Optional[str]) -> str:
    """'credit_card' -> 'Credit Card'"""
    if not method:
        return EMPTY
    words = method.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def service_names(services: Any) -> str:
    """Comma separated names from a job's services list"""
    if not isinstance(services, list):
        return EMPTY
    names = [s.get("name") for s in services if isinstance(s, dict) and s.get("name")]
    return ", ".join(names)


def format_job_date(job: PayrollJob) -> str:
    if job.scheduled_date is None:
        return EMPTY
    d = job.scheduled_date
    return f"{d:%b} {d.day}, {d.year}"


def _job_row(job: PayrollJob) -> List[str]:
    return [
        job.customer_name or EMPTY,
        format_job_date(job),
        service_names(job.services),
        format_payment_method(job.payment_method),
        format_currency(job.amount),
        format_currency(job.tip),
        format_currency(job.fee),
        format_currency(job.net_amount),
    ]


def report_to_csv(report: PayrollReport, include_jobs: bool = False) -> str:
    """
    Render a report as CSV text.

    One row per technician followed by a Grand Total row. With include_jobs,
    each technician row is followed by its jobs (blank technician column).
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    header = list(CSV_HEADER)
    if include_jobs:
        header[1:1] = CSV_JOB_HEADER
    writer.writerow(header)

    padding = [""] * len(CSV_JOB_HEADER) if include_jobs else []

    for tech in report.technicians:
        writer.writerow([
            tech.technician_name,
            *padding,
            tech.job_count,
            format_currency(tech.total_revenue),
            format_currency(tech.total_tips),
            format_currency(tech.total_cc_fees),
            format_currency(tech.net_revenue),
        ])
        if include_jobs:
            for job in tech.jobs:
                # Jobs column stays blank on job rows
                row = _job_row(job)
                writer.writerow(["", *row[:4], "", *row[4:]])

    totals = report.grand_totals
    writer.writerow([
        "Grand Total",
        *padding,
        totals.job_count,
        format_currency(totals.total_revenue),
        format_currency(totals.total_tips),
        format_currency(totals.total_cc_fees),
        format_currency(totals.net_revenue),
    ])

    return buffer.getvalue()
