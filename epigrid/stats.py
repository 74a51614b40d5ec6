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
import os.path
import numpy as np
import pandas as pd
import h5py

COLUMNS = ['step', 'susceptible', 'infected', 'recovered', 'vaccinated']

class IncompatibleParameters(Exception):
  pass

# {{{ Tracker
class Tracker:
  """
  Tracker class to record the state counts of a population as it runs.
  One row per recorded day: (day, susceptible, infected, recovered,
  vaccinated).  The results of a run can be written to a CSV file or to
  an HDF5 archive shared by all seeds of an ensemble.
  """
  def __init__(self, population):
    self.population = population
    self.rows = []

  def record(self):
    """ Record the counts for the population's current day.  Call once
        before the first advance to capture day 0. """
    c = self.population.count_states()
    self.rows.append((self.population.t, c.susceptible, c.infected,
                      c.recovered, c.vaccinated))

  def to_array(self):
    return np.array(self.rows, dtype=int).reshape((len(self.rows), len(COLUMNS)))

  def to_frame(self):
    return pd.DataFrame(self.to_array(), columns=COLUMNS)

  def to_csv(self, filename):
    self.to_frame().to_csv(filename, index=False)

  def summary(self):
    return summarize(self.to_array())

  def check_redundant_run(self, param_string, seed, filename):
    """ Check if we are trying to do a run for a seed that has already
        been run.  If the parameters do not match, fatal error since we have
        chosen an incompatible output file that already has data from a different
        parameter set. """
    if not os.path.isfile(filename):
      return False

    with h5py.File(filename, 'r') as f:
      check_params(f, param_string)
      return str(seed) in f

  def to_archive(self, param_string, seed, filename):
    """ Emit the counts to an archive file.  The seed is required to distinguish
        runs within an ensemble from the same base parameter set. """
    exists = os.path.isfile(filename)
    with h5py.File(filename, 'r+' if exists else 'w') as f:
      if exists:
        check_params(f, param_string)
      else:
        # archive parameters
        grp = f.create_group('params')
        grp.create_dataset('yaml', data=param_string)

      seed_group = f.create_group(str(seed))

      # time series of state counts
      seed_group.create_dataset('counts', data=self.to_array())

      # final state of every cell
      seed_group.create_dataset('grid', data=self.population.snapshot())
# }}}

def check_params(f, param_string):
  """ Raise IncompatibleParameters if the open archive f was written with
      a different parameter string. """
  f_pstr = f['params']['yaml'].asstr()[()]
  if param_string != f_pstr:
    print("FATAL ERROR: parameter string does not match output file.")
    raise IncompatibleParameters(f.filename)

# {{{ read_archive
def read_archive(filename):
  """ Return the parameter string and a dict mapping each seed to its
      array of count rows. """
  runs = {}
  with h5py.File(filename, 'r') as f:
    param_string = f['params']['yaml'].asstr()[()]
    for seed in f.keys():
      if seed == 'params':
        continue
      runs[int(seed)] = f[seed]['counts'][:]
  return (param_string, runs)
# }}}

# {{{ summarize
def summarize(counts):
  """ Summarize one run given its rows of (day, S, I, R, V) counts.
      first_vaccination_day is -1 if nobody was ever vaccinated. """
  counts = np.asarray(counts)
  days = counts[:, 0]
  infected = counts[:, 2]
  vaccinated = counts[:, 4]

  peak = int(np.argmax(infected))
  vaccinated_days = np.nonzero(vaccinated > 0)[0]
  if len(vaccinated_days) > 0:
    first_vaccination = int(days[vaccinated_days[0]])
  else:
    first_vaccination = -1

  final = counts[-1]
  return {
    'final_susceptible': int(final[1]),
    'final_infected': int(final[2]),
    'final_recovered': int(final[3]),
    'final_vaccinated': int(final[4]),
    'peak_infected': int(infected[peak]),
    'peak_day': int(days[peak]),
    'first_vaccination_day': first_vaccination
  }
# }}}

SUMMARY_COLUMNS = [
  'final_susceptible',
  'final_infected',
  'final_recovered',
  'final_vaccinated',
  'peak_infected',
  'peak_day',
  'first_vaccination_day'
]

# {{{ aggregate
def aggregate(summaries):
  """ Ensemble means of per-run summaries.  first_vaccination_day is
      averaged only over runs that vaccinated anyone, and is -1 if none
      did. """
  output = {'n_seeds': len(summaries)}
  for c in SUMMARY_COLUMNS:
    if c == 'first_vaccination_day':
      values = [s[c] for s in summaries if s[c] >= 0]
      output[c] = float(np.mean(values)) if values else -1
    else:
      output[c] = float(np.mean([s[c] for s in summaries])) if summaries else 0.0
  return output
# }}}
