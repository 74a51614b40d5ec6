import numpy as np
import pytest
from epigrid.draws import UniformDraws, FixedDraws


def test_fixed_draws_row_major_and_cycle():
    d = FixedDraws([0.1, 0.2, 0.3])
    assert np.allclose(d.sample((2, 2)), [[0.1, 0.2], [0.3, 0.1]])
    assert np.allclose(d.sample((1,)), [0.2])


def test_fixed_draws_validation():
    with pytest.raises(ValueError):
        FixedDraws([])
    with pytest.raises(ValueError):
        FixedDraws([0.5, 1.5])


def test_uniform_draws_seeded():
    a = UniformDraws(7).sample((4, 4))
    b = UniformDraws(7).sample((4, 4))
    assert a.shape == (4, 4)
    assert np.array_equal(a, b)
    assert np.all((a >= 0.0) & (a < 1.0))


def test_uniform_draws_advance_between_calls():
    d = UniformDraws(7)
    assert not np.array_equal(d.sample((3, 3)), d.sample((3, 3)))
