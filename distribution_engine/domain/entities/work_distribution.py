"""WorkDistribution entity — one ledger row per (contract, technician, elaborator)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class WorkDistribution:
    id: int | None
    contract_id: int
    technician_id: int | None
    report_elaborator_id: str | None
    supervisor_id: str | None = None
    assigned_count: int = 0
    completed_count: int = 0
    avg_completion_time: float | None = None
    last_assignment: datetime | None = None
