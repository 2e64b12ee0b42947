import os
import random

import numpy as np
import pytest

from rigidframes.core.config import reset_settings
from rigidframes.core.units import LengthUnit
from rigidframes.frames import Frame


@pytest.fixture(autouse=True)
def seed_rng() -> None:
    random.seed(0)
    np.random.seed(0)
    os.environ["PYTHONHASHSEED"] = "0"


@pytest.fixture(autouse=True)
def default_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def chain() -> tuple[Frame, Frame, Frame]:
    """A -> B -> C, with B at (3, 0, 0) in A and C at (1, 0, 0) in B."""
    a = Frame.root.make_translation(LengthUnit.METER, 0.0, 0.0, 0.0)
    frame_a = Frame.from_position(a, name="A")
    frame_b = Frame.from_position(
        frame_a.make_translation(LengthUnit.METER, 3.0, 0.0, 0.0), name="B"
    )
    frame_c = Frame.from_position(
        frame_b.make_translation(LengthUnit.METER, 1.0, 0.0, 0.0), name="C"
    )
    return frame_a, frame_b, frame_c
