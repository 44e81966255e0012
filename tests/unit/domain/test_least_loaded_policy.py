"""Tests for LeastLoadedPolicy."""

from distribution_engine.domain.entities.technician import Technician
from distribution_engine.domain.policies.least_loaded import select_least_loaded


def _tech(tid: int) -> Technician:
    return Technician(id=tid, name=f"T{tid}")


def test_picks_minimum_load():
    pool = [_tech(1), _tech(2), _tech(3)]
    sel = select_least_loaded(pool, {1: 3, 2: 1, 3: 5}, key=lambda t: t.id)
    assert sel.worker.id == 2
    assert sel.load == 1
    assert sel.candidates == 3


def test_missing_workload_counts_as_zero():
    pool = [_tech(1), _tech(2)]
    sel = select_least_loaded(pool, {1: 2}, key=lambda t: t.id)
    assert sel.worker.id == 2
    assert sel.load == 0


def test_tie_goes_to_first_in_pool_order():
    a, b = _tech(1), _tech(2)
    assert select_least_loaded([a, b], {1: 2, 2: 2}, key=lambda t: t.id).worker.id == 1
    assert select_least_loaded([b, a], {1: 2, 2: 2}, key=lambda t: t.id).worker.id == 2


def test_tie_is_deterministic_across_calls():
    pool = [_tech(1), _tech(2)]
    loads = {1: 2, 2: 2}
    picks = {select_least_loaded(pool, loads, key=lambda t: t.id).worker.id for _ in range(10)}
    assert picks == {1}


def test_empty_pool_selects_nobody():
    sel = select_least_loaded([], {1: 1}, key=lambda t: t.id)
    assert sel.worker is None
    assert sel.load == 0
    assert sel.candidates == 0


def test_string_keys():
    pool = ["e1", "e2"]
    sel = select_least_loaded(pool, {"e1": 4, "e2": 1}, key=lambda e: e)
    assert sel.worker == "e2"


def test_fixture_pools(technician_pool, elaborator_pool):
    tech = select_least_loaded(technician_pool, {1: 2, 2: 2, 3: 1}, key=lambda t: t.id)
    elab = select_least_loaded(elaborator_pool, {"elab-1": 1}, key=lambda e: e.user_id)
    assert tech.worker.name == "Carla"
    assert elab.worker.user_id == "elab-2"
