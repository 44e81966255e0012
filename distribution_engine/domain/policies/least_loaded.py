"""LeastLoadedPolicy — greedy workload-count minimization over a worker pool."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

W = TypeVar("W")


@dataclass(frozen=True)
class LoadSelection(Generic[W]):
    """Result of the policy evaluation."""

    worker: W | None  # None when the pool is empty
    load: int
    candidates: int


def select_least_loaded(
    pool: Sequence[W],
    workloads: Mapping[Hashable, int],
    key: Callable[[W], Hashable],
) -> LoadSelection[W]:
    """Pick the worker with the fewest pending work orders.

    Args:
        pool: available workers, in the order the directory returned them.
        workloads: pending count per worker key; absent keys count as 0.
        key: extracts the workload key from a worker.

    Returns:
        LoadSelection with the chosen worker and its pre-assignment load.
        Ties go to the worker that appears first in *pool*.
    """
    if not pool:
        return LoadSelection(worker=None, load=0, candidates=0)

    chosen = min(pool, key=lambda w: workloads.get(key(w), 0))
    return LoadSelection(
        worker=chosen,
        load=workloads.get(key(chosen), 0),
        candidates=len(pool),
    )
