"""Pytest configuration and shared fixtures."""

import pytest

from distribution_engine.domain.entities.report_elaborator import ReportElaborator
from distribution_engine.domain.entities.technician import Technician


@pytest.fixture
def technician_pool():
    return [
        Technician(id=1, name="Ana"),
        Technician(id=2, name="Bruno"),
        Technician(id=3, name="Carla"),
    ]


@pytest.fixture
def elaborator_pool():
    return [
        ReportElaborator(user_id="elab-1", name="Elaine"),
        ReportElaborator(user_id="elab-2", name="Eduardo"),
    ]
