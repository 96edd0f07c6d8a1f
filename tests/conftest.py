"""Shared fixtures for the qdirac test suite."""

import numpy as np
import pytest

from qdirac.core.tensor import Tensor

# ------------------------------------------------------------------ #
# Tensor fixtures                                                      #
# ------------------------------------------------------------------ #

@pytest.fixture
def ket0():
    return Tensor([1, 0], (2, 1))


@pytest.fixture
def ket1():
    return Tensor([0, 1], (2, 1))


@pytest.fixture
def sigma_x():
    return Tensor([0, 1, 1, 0], (2, 2))


@pytest.fixture
def sigma_y():
    return Tensor([0, -1j, 1j, 0], (2, 2))


# ------------------------------------------------------------------ #
# Random state fixture                                                 #
# ------------------------------------------------------------------ #

@pytest.fixture
def rng():
    return np.random.RandomState(42)
