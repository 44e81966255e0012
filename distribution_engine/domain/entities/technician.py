"""Technician entity — a worker who executes work orders."""

from dataclasses import dataclass


@dataclass
class Technician:
    id: int | None
    name: str
    active: bool = True
    user_id: str | None = None
    email: str | None = None

    def is_available(self) -> bool:
        return self.active
