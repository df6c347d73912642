"""
Payroll Report Endpoints

Per-technician revenue, tips, and card fees for a week or custom range.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from app.config import Settings, get_settings
from app.models.payroll_models import PayrollReport, PayrollReportResponse, ReportPeriod
from app.services.payroll_aggregator import aggregate_payroll
from app.services.payroll_export import report_to_csv
from app.services.payroll_source import PayrollJobSource, PayrollSourceError
from app.services.report_periods import (
    format_period_label,
    get_week_range,
    resolve_period,
    shift_week,
)
from app.services.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

router = APIRouter()


def get_payroll_source(settings: Settings = Depends(get_settings)) -> PayrollJobSource:
    """Supabase-backed job source (overridden in tests)"""
    return PayrollJobSource(
        get_supabase_client(),
        table_name=settings.jobs_table,
        statuses=settings.payroll_statuses,
        page_size=settings.page_size,
    )


def _resolve_organization(organization_id: Optional[str], settings: Settings) -> str:
    org = organization_id or settings.default_organization_id
    if not org:
        raise HTTPException(status_code=400, detail="organization_id is required")
    return org


def _build_report(
    source: PayrollJobSource,
    organization_id: str,
    start: Optional[date],
    end: Optional[date],
    anchor: Optional[date]
) -> Tuple[ReportPeriod, PayrollReport]:
    start_date, end_date = resolve_period(anchor or date.today(), start, end)
    if start_date > end_date:
        raise HTTPException(status_code=400, detail=f"start {start_date} is after end {end_date}")

    try:
        jobs = source.fetch_jobs(organization_id, start_date, end_date)
    except PayrollSourceError as e:
        logger.error(f"[Payroll] Report fetch failed for org {organization_id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    report = aggregate_payroll(jobs)
    logger.info(
        f"[Payroll] Report for org {organization_id} {start_date} to {end_date}: "
        f"{report.grand_totals.job_count} jobs, {len(report.technicians)} technicians"
    )

    period = ReportPeriod(
        start=start_date,
        end=end_date,
        label=format_period_label(start_date, end_date),
    )
    return period, report


@router.get("/report", response_model=PayrollReportResponse)
def get_payroll_report(
    organization_id: Optional[str] = Query(None, description="Organization UUID"),
    start: Optional[date] = Query(None, description="Start date (YYYY-MM-DD), defaults to anchor week's Monday"),
    end: Optional[date] = Query(None, description="End date (YYYY-MM-DD), defaults to anchor week's Sunday"),
    anchor: Optional[date] = Query(None, description="Any date in the report week (default: today)"),
    settings: Settings = Depends(get_settings),
    source: PayrollJobSource = Depends(get_payroll_source)
):
    """
    Get payroll report for a period

    - **organization_id**: Organization to report on
    - **start** / **end**: Custom range (inclusive)
    - **anchor**: Week to report on when no custom range is given

    Technicians are ordered by revenue, highest first. A period with no
    completed jobs returns an empty technician list and zero totals.
    """
    org = _resolve_organization(organization_id, settings)
    period, report = _build_report(source, org, start, end, anchor)

    return PayrollReportResponse(
        organization_id=org,
        period=period,
        technicians=report.technicians,
        grand_totals=report.grand_totals,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/report/export")
def export_payroll_report(
    organization_id: Optional[str] = Query(None, description="Organization UUID"),
    start: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    anchor: Optional[date] = Query(None, description="Any date in the report week"),
    include_jobs: bool = Query(False, description="Include per-job rows under each technician"),
    settings: Settings = Depends(get_settings),
    source: PayrollJobSource = Depends(get_payroll_source)
):
    """
    Download payroll report as CSV
    """
    org = _resolve_organization(organization_id, settings)
    period, report = _build_report(source, org, start, end, anchor)

    filename = f"payroll_{period.start.isoformat()}_{period.end.isoformat()}.csv"
    return Response(
        content=report_to_csv(report, include_jobs=include_jobs),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/week-range")
def get_report_week(
    anchor: Optional[date] = Query(None, description="Any date in the week (default: today)"),
    offset: int = Query(0, description="Weeks to move from anchor (negative = earlier)")
):
    """
    Get Monday-Sunday bounds for week navigation
    """
    week_start, week_end = get_week_range(shift_week(anchor or date.today(), offset))
    return {
        "start": week_start.isoformat(),
        "end": week_end.isoformat(),
        "label": format_period_label(week_start, week_end),
    }
