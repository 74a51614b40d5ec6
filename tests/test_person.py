import pytest
from epigrid.person import SIRV, Person


def test_person_starts_susceptible():
    assert Person().get_state() == SIRV.S


def test_person_setters():
    p = Person()
    p.set_inf()
    assert p.get_state() == SIRV.I
    p.set_rec()
    assert p.get_state() == SIRV.R
    p.set_vac()
    assert p.get_state() == SIRV.V
    p.set_sus()
    assert p.get_state() == SIRV.S


def test_set_state_rejects_strings():
    p = Person()
    with pytest.raises(TypeError):
        p.set_state("infected")
    assert p.get_state() == SIRV.S
