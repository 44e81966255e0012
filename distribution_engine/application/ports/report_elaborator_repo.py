"""Port interface for the report-elaborator directory."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.report_elaborator import ReportElaborator


class ReportElaboratorRepository(ABC):
    @abstractmethod
    async def list_active(self) -> list[ReportElaborator]:
        """Return active report elaborators ordered by their row id."""
        ...
