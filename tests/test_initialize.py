import copy
import numpy as np
import pytest
import yaml
import epigrid.initialize as I
from epigrid.person import SIRV


def small_params(**outbreak):
    params = copy.deepcopy(I.default_params)
    params['model']['setup']['n'] = 10
    params['model']['setup']['outbreak'].update({'start': 2, 'end': 8, 'p_infected': 1.0})
    params['model']['setup']['outbreak'].update(outbreak)
    return params


def test_merge_is_recursive_and_copies():
    merged = I.merge(I.default_params, {'disease': {'tv': 10}, 'model': {'max_days': 5}})
    assert merged['disease']['tv'] == 10
    assert merged['disease']['ri'] == I.default_params['disease']['ri']
    assert merged['model']['max_days'] == 5
    assert merged['model']['setup']['n'] == 100
    assert I.default_params['disease']['tv'] == 200


def test_load_params(tmp_path):
    filename = tmp_path / 'params.yaml'
    text = yaml.dump({'disease': {'tv': 10, 'rvh': 0.5}, 'model': {'setup': {'n': 80}}})
    filename.write_text(text)
    (param_string, model_params) = I.load_params(str(filename))
    assert param_string == text
    assert model_params['disease']['tv'] == 10
    assert model_params['disease']['rvh'] == 0.5
    assert model_params['disease']['rr'] == pytest.approx(0.05)
    assert model_params['model']['setup']['n'] == 80
    assert model_params['model']['setup']['outbreak']['end'] == 75


def test_load_empty_params_file(tmp_path):
    filename = tmp_path / 'params.yaml'
    filename.write_text('')
    (_, model_params) = I.load_params(str(filename))
    assert model_params == I.default_params


@pytest.mark.parametrize("path,value", [
    ('disease.ri', 1.5),
    ('disease.rvh', -0.1),
    ('disease.tv', -1),
    ('model.max_days', -1),
    ('model.setup.n', 0),
    ('model.setup.outbreak.end', 11),
    ('model.setup.outbreak.p_infected', 2.0),
    ('model.setup.outbreak.cells', [[0, 10]]),
    ('model.setup.n', 100.5),
    ('model.setup.outbreak.cells', [[1]]),
    ('model.setup.outbreak.cells', [[1, 2, 3]]),
    ('model.setup.outbreak.cells', [['a', 2]]),
])
def test_validate_params_rejects(path, value):
    [(_, params)] = I.param_variants(small_params(), path, [value])
    with pytest.raises(I.InvalidParameters):
        I.validate_params(params)


def test_validate_params_accepts_defaults():
    I.validate_params(I.default_params)
    I.validate_params(small_params(cells=[[0, 0], [9, 9]]))


def test_initialize_population_block():
    pop = I.initialize_population(small_params(), 0)
    assert pop.size() == 10
    assert pop.t == 0
    assert pop.count_states().infected == 36
    assert pop.get_state(2, 2) == SIRV.I
    assert pop.get_state(8, 8) == SIRV.S
    assert pop.tv == 200


def test_initialize_population_explicit_cells():
    pop = I.initialize_population(small_params(p_infected=0.0, cells=[[0, 0], [9, 3]]), 0)
    assert pop.count_states().infected == 2
    assert pop.get_state(0, 0) == SIRV.I
    assert pop.get_state(9, 3) == SIRV.I


def test_initialize_population_reproducible():
    params = small_params(p_infected=0.5)
    a = I.initialize_population(params, 17)
    b = I.initialize_population(params, 17)
    assert np.array_equal(a.snapshot(), b.snapshot())
    for _ in range(5):
        a.advance()
        b.advance()
        assert np.array_equal(a.snapshot(), b.snapshot())


def test_param_variants():
    params = small_params()
    variants = list(I.param_variants(params, 'disease.tv', [0, 50, 100]))
    assert [v for (v, _) in variants] == [0, 50, 100]
    assert [p['disease']['tv'] for (_, p) in variants] == [0, 50, 100]
    assert params['disease']['tv'] == 200


def test_param_variants_unknown_key():
    with pytest.raises(KeyError):
        list(I.param_variants(small_params(), 'disease.nope', [1]))
