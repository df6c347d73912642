"""
Payroll Pydantic Models

Boundary and response schemas for technician payroll reports:
- PayrollJob: one completed hcp_jobs row, validated before aggregation
- TechnicianPayrollSummary: per-technician totals with job drill-down
- PayrollTotals / PayrollReport: grand totals and the full report

Money is held as Decimal so sums and the derived net stay exact; JSON output
renders it as a number. Net revenue is always derived (gross minus card fees).
Tips are excluded from net because they pass through to the technician.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, Field, PlainSerializer, computed_field, field_validator

UNASSIGNED = "Unassigned"

ZERO = Decimal("0")

# Dollars; serialized as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ============== Input Records ==============

class PayrollJob(BaseModel):
    """A completed, billable job for one reporting period"""
    id: str
    scheduled_date: Optional[date] = None
    customer_name: Optional[str] = None
    services: Optional[Any] = None
    total_amount: Optional[Money] = Field(None, description="Gross job amount (dollars)")
    tip_amount: Optional[Money] = Field(None, description="Tip amount (dollars)")
    cc_fee_amount: Optional[Money] = Field(None, description="Card processing fee (dollars)")
    payment_method: Optional[str] = None
    status: Optional[str] = None
    technician_name: Optional[str] = None
    technician_hcp_id: Optional[str] = None

    @field_validator("id", "technician_hcp_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        # HCP ids occasionally arrive as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("job id must be non-empty")
        return value

    @field_validator("total_amount", "tip_amount", "cc_fee_amount", mode="before")
    @classmethod
    def _float_to_decimal(cls, value: Any) -> Any:
        # Go through str so 0.1 becomes Decimal("0.1"), not its binary expansion
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("amount must be a finite number")
            return Decimal(str(value))
        return value

    @field_validator("total_amount", "tip_amount", "cc_fee_amount")
    @classmethod
    def _require_finite(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and not value.is_finite():
            raise ValueError("amount must be a finite number")
        return value

    @property
    def amount(self) -> Decimal:
        return self.total_amount or ZERO

    @property
    def tip(self) -> Decimal:
        return self.tip_amount or ZERO

    @property
    def fee(self) -> Decimal:
        return self.cc_fee_amount or ZERO

    @property
    def net_amount(self) -> Decimal:
        return self.amount - self.fee


# ============== Report Models ==============

class TechnicianPayrollSummary(BaseModel):
    """Totals for one technician over the report period"""
    technician_name: str = UNASSIGNED
    technician_hcp_id: Optional[str] = None
    job_count: int = 0
    total_revenue: Money = Field(ZERO, description="Gross revenue (dollars)")
    total_tips: Money = Field(ZERO, description="Tips (dollars)")
    total_cc_fees: Money = Field(ZERO, description="Card processing fees (dollars)")
    jobs: List[PayrollJob] = []

    @computed_field
    @property
    def net_revenue(self) -> Money:
        return self.total_revenue - self.total_cc_fees


class PayrollTotals(BaseModel):
    """Grand totals across all technicians"""
    job_count: int = 0
    total_revenue: Money = ZERO
    total_tips: Money = ZERO
    total_cc_fees: Money = ZERO

    @computed_field
    @property
    def net_revenue(self) -> Money:
        return self.total_revenue - self.total_cc_fees


class PayrollReport(BaseModel):
    """Technician summaries (highest revenue first) plus grand totals"""
    technicians: List[TechnicianPayrollSummary] = []
    grand_totals: PayrollTotals = Field(default_factory=PayrollTotals)


class ReportPeriod(BaseModel):
    """Inclusive date window a report covers"""
    start: date
    end: date
    label: str


class PayrollReportResponse(BaseModel):
    """Response for /api/payroll/report"""
    organization_id: str
    period: ReportPeriod
    technicians: List[TechnicianPayrollSummary] = []
    grand_totals: PayrollTotals
    generated_at: str
