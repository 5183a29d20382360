"""Common test fixtures and configuration"""

import os
import sys

# pygame reads these when the display is initialised
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest
from loguru import logger

from objects import Charge, FieldSpec, Position, Sign


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo any sinks installed by the code under test"""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def log_records():
    """Collect loguru records emitted during a test"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def positive_charge():
    return Charge(id=1, sign=Sign.POSITIVE, magnitude=10.0, position=Position(250.0, 250.0), r=20.0)


@pytest.fixture
def negative_charge():
    return Charge(id=2, sign=Sign.NEGATIVE, magnitude=10.0, position=Position(250.0, 250.0), r=20.0)


@pytest.fixture
def scenario_record():
    return {
        "source": {
            "id": 1,
            "sign": "Positive",
            "magnitude": 10,
            "position": {"x": 250, "y": 250},
            "r": 20,
        },
        "density": 4,
        "steps": 5,
        "delta": 5,
    }


@pytest.fixture
def dipole_specs():
    plus = Charge(id=1, sign=Sign.POSITIVE, magnitude=10.0, position=Position(200.0, 250.0), r=20.0)
    minus = Charge(id=2, sign=Sign.NEGATIVE, magnitude=10.0, position=Position(300.0, 250.0), r=20.0)
    return [
        FieldSpec(source=plus, density=6, steps=40, delta=5.0),
        FieldSpec(source=minus, density=6, steps=40, delta=5.0),
    ]
