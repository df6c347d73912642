"""
Payroll Aggregator

Groups a period's completed jobs by technician and totals them.

Key rules:
- Grouping key is technician_hcp_id, then technician_name, then "Unassigned"
- Missing amounts count as zero; no rounding (formatting is the caller's job)
- Net revenue is derived from the summed gross and fees, never accumulated
- Technicians are ordered by revenue, highest first; ties keep first-seen order
- Pure function: inputs are not mutated, every call builds a fresh report
"""

from typing import Dict, Optional, Sequence

from app.models.payroll_models import (
    UNASSIGNED,
    PayrollJob,
    PayrollReport,
    PayrollTotals,
    TechnicianPayrollSummary,
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def technician_key(job: PayrollJob) -> str:
    """Grouping key for a job: HCP id, then name, then the unassigned sentinel"""
    return _clean(job.technician_hcp_id) or _clean(job.technician_name) or UNASSIGNED


def aggregate_payroll(jobs: Sequence[PayrollJob]) -> PayrollReport:
    """
    Aggregate jobs into per-technician summaries and grand totals.

    Args:
        jobs: Jobs for one organization and period, in display order

    Returns:
        PayrollReport with technicians sorted by total revenue (descending)
    """
    summaries: Dict[str, TechnicianPayrollSummary] = {}
    named = set()

    for job in jobs:
        key = technician_key(job)
        name = _clean(job.technician_name)

        summary = summaries.get(key)
        if summary is None:
            summary = TechnicianPayrollSummary(
                technician_name=name or UNASSIGNED,
                technician_hcp_id=_clean(job.technician_hcp_id),
                jobs=[],
            )
            summaries[key] = summary
            if name:
                named.add(key)
        elif key not in named and name:
            summary.technician_name = name
            named.add(key)

        summary.job_count += 1
        summary.total_revenue += job.amount
        summary.total_tips += job.tip
        summary.total_cc_fees += job.fee
        summary.jobs.append(job.model_copy(deep=True))

    # sorted() is stable, so equal revenue keeps insertion order
    technicians = sorted(summaries.values(), key=lambda s: s.total_revenue, reverse=True)

    grand_totals = PayrollTotals()
    for summary in technicians:
        grand_totals.job_count += summary.job_count
        grand_totals.total_revenue += summary.total_revenue
        grand_totals.total_tips += summary.total_tips
        grand_totals.total_cc_fees += summary.total_cc_fees

    return PayrollReport(technicians=technicians, grand_totals=grand_totals)
