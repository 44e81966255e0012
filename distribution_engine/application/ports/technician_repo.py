"""Port interface for the technician directory."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.technician import Technician


class TechnicianRepository(ABC):
    @abstractmethod
    async def list_active(self) -> list[Technician]:
        """Return active technicians ordered by id."""
        ...
