"""ContractManager entity — the manager responsible for one contract."""

from dataclasses import dataclass


@dataclass
class ContractManager:
    id: int | None
    contract_id: int
    user_id: str
    active: bool = True
