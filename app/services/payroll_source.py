"""
Payroll Job Source

Reads completed jobs for a payroll period from the hcp_jobs table.

Query rules:
- Single organization (equality filter)
- Inclusive scheduled_date window
- Status allow-list (completed / paid / pro forma by default)
- Ascending scheduled_date, then id
- Paged through PostgREST's row cap
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from app.config import DEFAULT_PAYROLL_STATUSES
from app.models.payroll_models import PayrollJob

logger = logging.getLogger(__name__)

PAYROLL_JOB_COLUMNS = (
    "id, scheduled_date, customer_name, services, total_amount, tip_amount, "
    "cc_fee_amount, payment_method, status, technician_name, technician_hcp_id"
)


class PayrollSourceError(Exception):
    """Jobs could not be fetched from the data service"""


class PayrollDataError(PayrollSourceError):
    """A fetched row failed validation"""


def parse_payroll_jobs(rows: Iterable[Dict[str, Any]]) -> List[PayrollJob]:
    """
    Validate raw hcp_jobs rows.

    Raises:
        PayrollDataError: on the first row that is not a valid job
    """
    jobs = []
    for index, row in enumerate(rows):
        try:
            jobs.append(PayrollJob.model_validate(row))
        except ValidationError as e:
            row_id = row.get("id") if isinstance(row, dict) else None
            raise PayrollDataError(f"Invalid job row {index} (id={row_id}): {e}") from e
    return jobs


class PayrollJobSource:
    """Fetches payroll jobs from Supabase"""

    def __init__(
        self,
        client: Any,
        table_name: str = "hcp_jobs",
        statuses: Optional[List[str]] = None,
        page_size: int = 1000
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.client = client
        self.table_name = table_name
        self.statuses = list(statuses or DEFAULT_PAYROLL_STATUSES)
        self.page_size = page_size

    def _fetch_page(
        self,
        organization_id: str,
        start_date: date,
        end_date: date,
        statuses: List[str],
        offset: int
    ) -> List[Dict[str, Any]]:
        result = self.client.table(self.table_name) \
            .select(PAYROLL_JOB_COLUMNS) \
            .eq("organization_id", organization_id) \
            .gte("scheduled_date", start_date.isoformat()) \
            .lte("scheduled_date", end_date.isoformat()) \
            .in_("status", statuses) \
            .order("scheduled_date", desc=False) \
            .order("id", desc=False) \
            .range(offset, offset + self.page_size - 1) \
            .execute()
        return result.data or []

    def fetch_jobs(
        self,
        organization_id: str,
        start_date: date,
        end_date: date,
        statuses: Optional[List[str]] = None
    ) -> List[PayrollJob]:
        """
        Fetch validated jobs for one organization and period.

        Args:
            organization_id: Organization UUID
            start_date: First scheduled date (inclusive)
            end_date: Last scheduled date (inclusive)
            statuses: Override for the status allow-list

        Returns:
            Jobs ordered by scheduled date, then id

        Raises:
            ValueError: if start_date is after end_date
            PayrollSourceError: if the query fails
            PayrollDataError: if a row is malformed
        """
        if start_date > end_date:
            raise ValueError(f"start_date {start_date} is after end_date {end_date}")

        statuses = list(statuses or self.statuses)
        rows: List[Dict[str, Any]] = []
        offset = 0

        try:
            while True:
                page = self._fetch_page(organization_id, start_date, end_date, statuses, offset)
                rows.extend(page)
                if len(page) < self.page_size:
                    break
                offset += self.page_size
        except Exception as e:
            logger.error(f"[Payroll Source] Error fetching jobs for org {organization_id}: {e}")
            raise PayrollSourceError(f"Failed to fetch payroll jobs: {e}") from e

        logger.info(
            f"[Payroll Source] Fetched {len(rows)} jobs for org {organization_id} "
            f"({start_date} to {end_date})"
        )
        return parse_payroll_jobs(rows)
