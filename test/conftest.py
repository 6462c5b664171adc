"""
Shared fixtures.

Author: RefrigProps Project
Date: 2026-10-17
"""

import pytest

from fakes import fake_props_si
from refrig_props.core.props_service import PropsService
from refrig_props.core.solver import EOSSolver
from refrig_props.core.tables import load_custom_tables


@pytest.fixture
def fake_solver():
    """Fixture providing a ready EOSSolver backed by the fake PropsSI."""
    solver = EOSSolver(loader=lambda: fake_props_si)
    solver.wait_ready()
    return solver


@pytest.fixture
def tables():
    """Fixture providing the packaged custom saturation tables."""
    return load_custom_tables()


@pytest.fixture
def service(fake_solver, tables):
    """Fixture providing a fresh PropsService on the fake solver."""
    return PropsService(solver=fake_solver, tables=tables)
