"""Fixtures for payroll tests."""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.models.payroll_models import PayrollJob


def make_job(
    job_id: str,
    tech_id: Optional[str] = None,
    tech_name: Optional[str] = None,
    amount: Optional[float] = None,
    tip: Optional[float] = None,
    fee: Optional[float] = None,
    **extra: Any
) -> PayrollJob:
    return PayrollJob(
        id=job_id,
        technician_hcp_id=tech_id,
        technician_name=tech_name,
        total_amount=amount,
        tip_amount=tip,
        cc_fee_amount=fee,
        **extra,
    )


class FakeSource:
    """In-memory stand-in for PayrollJobSource"""

    def __init__(self, jobs: Optional[List[PayrollJob]] = None, error: Optional[Exception] = None):
        self.jobs = jobs or []
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def fetch_jobs(self, organization_id, start_date, end_date, statuses=None):
        self.calls.append({"organization_id": organization_id, "start": start_date, "end": end_date})
        if self.error:
            raise self.error
        return list(self.jobs)


@pytest.fixture
def settings():
    return Settings(
        supabase_url="http://localhost:54321",
        supabase_key="test-key",
        default_organization_id=None,
    )


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def client(settings, fake_source):
    from main import app
    from app.routers.payroll import get_payroll_source

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payroll_source] = lambda: fake_source
    yield TestClient(app)
    app.dependency_overrides.clear()
