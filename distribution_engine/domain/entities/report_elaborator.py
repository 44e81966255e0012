"""ReportElaborator entity — a worker who writes reports for completed work."""

from dataclasses import dataclass


@dataclass
class ReportElaborator:
    user_id: str
    name: str | None = None
    active: bool = True
    specialization: str | None = None
    max_concurrent_reports: int = 10

    def is_available(self) -> bool:
        return self.active
