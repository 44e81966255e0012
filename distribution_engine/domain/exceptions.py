"""Domain exceptions raised by the distribution engine and its ports."""


class WorkOrderNotFoundError(LookupError):
    def __init__(self, work_order_id: int):
        super().__init__(f"Work order {work_order_id} not found")
        self.work_order_id = work_order_id


class LedgerWriteError(RuntimeError):
    """The distribution ledger upsert could not be stored."""
