import numpy as np
import pytest

from turingpatterns.engine.field import FieldStore
from turingpatterns.engine.simulation import Simulation


@pytest.fixture
def store() -> FieldStore:
    return FieldStore(width=6, height=4)


@pytest.fixture
def sim() -> Simulation:
    return Simulation(32, 24, seed=1234)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture(scope="session")
def qt_core():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
