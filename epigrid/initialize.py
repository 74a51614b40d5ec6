###########################################################################
# MIT License
#
# Copyright (c) 2020 Matthew Sottile
#
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
###########################################################################
import copy
import numpy as np
import yaml
try:
  from yaml import CLoader as Loader
except ImportError:
  from yaml import Loader
import epigrid.person as PE
import epigrid.population as P
import epigrid.draws as DR

verbose = False

# {{{ logmsg
def logmsg(s):
  if verbose:
    print(s)
  else:
    pass
# }}}

# {{{ exceptions
class InvalidParameters(Exception):
  """ Parameter set that cannot describe a run. """
  pass
# }}}

# {{{ default parameters
default_params = {
  'model': {
    'seed_min': 0,
    'seed_max': 1,
    'max_days': 1000,
    'setup': {
      'n': 100,
      'outbreak': {
        'start': 25,
        'end': 75,
        'p_infected': 0.75,
        'cells': []
      }
    }
  },
  'disease': {
    'ri': 0.2,
    'rr': 1.0/20.0,
    'rm': 1.0/200.0,
    'rv': 1.0/1000.0,
    'rvh': 0.2,
    'tv': 200
  }
}
# }}}

# {{{ merge
def merge(defaults, overrides):
  """ Recursively merge overrides on top of a copy of defaults. """
  merged = copy.deepcopy(defaults)
  for key, value in overrides.items():
    if isinstance(value, dict) and isinstance(merged.get(key), dict):
      merged[key] = merge(merged[key], value)
    else:
      merged[key] = value
  return merged
# }}}

# {{{ validate_params
def validate_params(model_params):
  disease = model_params['disease']
  for rate in ['ri', 'rr', 'rm', 'rv', 'rvh']:
    if not 0.0 <= disease[rate] <= 1.0:
      raise InvalidParameters(f'{rate}={disease[rate]} not in [0,1]')
  if disease['tv'] < 0:
    raise InvalidParameters(f"tv={disease['tv']} is negative")

  model = model_params['model']
  if model['max_days'] < 0:
    raise InvalidParameters(f"max_days={model['max_days']} is negative")
  if model['seed_max'] < model['seed_min']:
    raise InvalidParameters('seed_max is below seed_min')

  n = model['setup']['n']
  if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
    raise InvalidParameters(f'grid size n={n} must be a positive integer')

  outbreak = model['setup']['outbreak']
  if not 0 <= outbreak['start'] <= outbreak['end'] <= n:
    raise InvalidParameters(f"outbreak block [{outbreak['start']},{outbreak['end']}) outside grid of size {n}")
  if not 0.0 <= outbreak['p_infected'] <= 1.0:
    raise InvalidParameters(f"p_infected={outbreak['p_infected']} not in [0,1]")
  for cell in outbreak['cells']:
    if not isinstance(cell, (list, tuple)) or len(cell) != 2:
      raise InvalidParameters(f'outbreak cell {cell!r} is not an (i,j) pair')
    (i, j) = cell
    if not (isinstance(i, int) and isinstance(j, int)):
      raise InvalidParameters(f'outbreak cell {cell!r} needs integer indices')
    if not (0 <= i < n and 0 <= j < n):
      raise InvalidParameters(f'outbreak cell ({i},{j}) outside grid of size {n}')
# }}}

# {{{ load_params
def load_params(filename):
  """ Read a YAML parameter file and merge it over the defaults.  Returns
      the raw file contents (used to tag archives) and the parameter
      dictionary. """
  with open(filename) as f:
    paramfile_string = f.read()
  model_params = merge(default_params, yaml.load(paramfile_string, Loader=Loader) or {})
  validate_params(model_params)
  return (paramfile_string, model_params)
# }}}

# {{{ seed_outbreak
def seed_outbreak(population, model_params, rng):
  """ Infect each cell of the square outbreak block with probability
      p_infected, then infect any explicitly listed cells. """
  outbreak = model_params['model']['setup']['outbreak']
  start = outbreak['start']
  end = outbreak['end']

  for i in range(start, end):
    for j in range(start, end):
      if rng.random() < outbreak['p_infected']:
        population.force_state(i, j, PE.SIRV.I)

  for (i, j) in outbreak['cells']:
    population.force_state(i, j, PE.SIRV.I)

  logmsg(f'seeded outbreak: {population.count_states().infected} infected')
# }}}

# {{{ initialize_population
def initialize_population(model_params, seed):
  """ Build a population from the parameters and seed its outbreak.  The
      outbreak and the daily draws get independent streams spawned from
      the one seed. """
  disease = model_params['disease']
  n = model_params['model']['setup']['n']

  (outbreak_seq, draws_seq) = np.random.SeedSequence(seed).spawn(2)

  pop = P.Population(n,
                     ri=disease['ri'], rr=disease['rr'], rm=disease['rm'],
                     rv=disease['rv'], rvh=disease['rvh'], tv=disease['tv'],
                     draws=DR.UniformDraws(draws_seq))
  logmsg(f'created {n}x{n} population')

  seed_outbreak(pop, model_params, np.random.default_rng(outbreak_seq))
  return pop
# }}}

# {{{ param_variants
def param_variants(model_params, path, values):
  """ Yield (value, params) pairs where params is a copy of model_params
      with the dotted path (e.g. disease.tv) set to value. """
  parts = path.split('.')
  for value in values:
    variant = copy.deepcopy(model_params)
    d = variant
    for part in parts[:-1]:
      d = d[part]
    if parts[-1] not in d:
      raise KeyError(path)
    d[parts[-1]] = value
    yield (value, variant)
# }}}
