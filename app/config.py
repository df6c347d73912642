"""
Application Settings

Environment-driven configuration for the payroll backend.
Values are read once (with .env support) and passed to the components that need them.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_PAYROLL_STATUSES = ["completed", "paid", "pro forma"]


def _split_list(value: Optional[str], default: List[str]) -> List[str]:
    """Parse a comma separated env value"""
    if not value:
        return list(default)
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


@dataclass
class Settings:
    """Runtime configuration"""
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    jobs_table: str = "hcp_jobs"
    payroll_statuses: List[str] = field(default_factory=lambda: list(DEFAULT_PAYROLL_STATUSES))
    page_size: int = 1000
    default_organization_id: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            supabase_url=os.getenv("SUPABASE_URL"),
            # Service key bypasses RLS; anon key works when policies allow reads
            supabase_key=os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY"),
            jobs_table=os.getenv("PAYROLL_JOBS_TABLE", "hcp_jobs"),
            payroll_statuses=_split_list(os.getenv("PAYROLL_STATUSES"), DEFAULT_PAYROLL_STATUSES),
            page_size=int(os.getenv("PAYROLL_PAGE_SIZE", "1000")),
            default_organization_id=os.getenv("DEFAULT_ORGANIZATION_ID") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings (FastAPI dependency)"""
    return Settings.from_env()
