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
"""
The population grid and its transition rule.  Each day every cell moves
according to its own state, the number of infected neighbors it had
yesterday, and one uniform draw.
"""
from collections import namedtuple
import numpy as np
from epigrid.person import SIRV, Person
from epigrid.draws import UniformDraws

# {{{ exceptions
class InvalidGridSize(ValueError):
  """ Grid side length must be a positive integer. """
  pass

class CellOutOfBounds(IndexError):
  """ A cell index outside [0, n) was used.  Indices never wrap. """
  pass
# }}}

# {{{ Counts
class Counts(namedtuple('Counts', ['susceptible', 'infected', 'recovered', 'vaccinated'])):
  """ Number of individuals in each state. """
  __slots__ = ()

  def total(self):
    return self.susceptible + self.infected + self.recovered + self.vaccinated
# }}}

# {{{ infected_neighbors
def infected_neighbors(codes):
  """ Given an array of state codes, count for every cell how many of its
      up/down/left/right neighbors are infected.  Cells off the grid count
      as not infected, so corners see at most 2 neighbors and edges 3. """
  infected = (codes == SIRV.I.value).astype(int)
  padded = np.pad(infected, 1, mode='constant')
  return (padded[:-2, 1:-1] + padded[2:, 1:-1] +
          padded[1:-1, :-2] + padded[1:-1, 2:])
# }}}

# {{{ Population
class Population:
  """
  An n by n grid of people among which the disease spreads.  Rates are
  fixed for the life of the object; only the states and the day counter
  t change, and only through advance() (or force_state() for seeding).
  """

  # {{{ constructor
  def __init__(self, n, ri=0.2, rr=1.0/20.0, rm=1.0/200.0, rv=1.0/1000.0,
               rvh=0.2, tv=200, draws=None):
    """ Create the grid with everyone susceptible.

        ri  : infection rate per infected neighbor
        rr  : recovery rate
        rm  : mutation rate (recovered back to susceptible)
        rv  : vaccination rate
        rvh : vaccine hesitant fraction of the population
        tv  : day the vaccine becomes available
        draws : source of uniform draws, see epigrid.draws
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
      raise InvalidGridSize(n)

    self.n = int(n)
    self.ri = ri
    self.rr = rr
    self.rm = rm
    self.rv = rv
    self.rvh = rvh
    self.tv = tv
    self.t = 0

    if draws is None:
      draws = UniformDraws()
    self.draws = draws

    self.grid = np.empty((self.n, self.n), dtype=object)
    for i in range(self.n):
      for j in range(self.n):
        self.grid[i, j] = Person()

    self._stepping = False
  # }}}

  def _check_bounds(self, i, j):
    if not (0 <= i < self.n and 0 <= j < self.n):
      raise CellOutOfBounds((i, j, self.n))

  # {{{ accessors
  def size(self):
    return self.n

  def get_person(self, i, j):
    self._check_bounds(i, j)
    return self.grid[i, j]

  def get_state(self, i, j):
    return self.get_person(i, j).get_state()
  # }}}

  # {{{ force_state
  def force_state(self, i, j, state):
    """ Override the state of cell (i,j).  This is not a transition: no
        draw is consumed and the day counter is left alone. """
    self.get_person(i, j).set_state(state)
  # }}}

  # {{{ count_states
  def count_states(self):
    counts = {s: 0 for s in SIRV}
    for person in self.grid.flat:
      counts[person.get_state()] += 1
    return Counts(counts[SIRV.S], counts[SIRV.I], counts[SIRV.R], counts[SIRV.V])
  # }}}

  def snapshot(self):
    """ Return the current grid as an integer array of state codes. """
    codes = np.empty((self.n, self.n), dtype=int)
    for i in range(self.n):
      for j in range(self.n):
        codes[i, j] = self.grid[i, j].get_state().value
    return codes

  # {{{ transition
  def transition(self, state, k, seed, allow_vaccination, day=None):
    """ New state for one cell that was in the given state with k infected
        neighbors, for the draw seed, on the given day (self.t if None). """
    if day is None:
      day = self.t

    if state == SIRV.S:
      p_inf = k * self.ri
      if seed < p_inf:
        return SIRV.I
      if day >= self.tv and allow_vaccination and p_inf <= seed < p_inf + self.rv:
        return SIRV.V
      return SIRV.S

    if state == SIRV.I:
      if seed < self.rr:
        return SIRV.R
      return SIRV.I

    if state == SIRV.R:
      if seed < self.rm:
        return SIRV.S
      # NOTE: strictly after tv here, while susceptibles qualify on day tv
      if day > self.tv and allow_vaccination and self.rm <= seed < self.rm + self.rv:
        return SIRV.V
      return SIRV.R

    # vaccinated is absorbing
    return state
  # }}}

  # {{{ advance
  def advance(self):
    """ Move the whole population forward one day.  All transitions read
        from a snapshot taken before any cell is written.  New states and
        the day counter are committed only once every transition is known,
        so a failed draw leaves the population as it was. """
    if self._stepping:
      raise RuntimeError('advance() is not re-entrant')
    self._stepping = True
    try:
      day = self.t + 1

      counts = self.count_states()
      frac_vaccinated = float(counts.vaccinated) / float(counts.total())
      allow_vaccination = frac_vaccinated < (1.0 - self.rvh)

      old = self.snapshot()
      neighbors = infected_neighbors(old)
      seeds = self.draws.sample((self.n, self.n))

      changes = []
      for i in range(self.n):
        for j in range(self.n):
          state = SIRV(old[i, j])
          new_state = self.transition(state, neighbors[i, j], seeds[i, j],
                                      allow_vaccination, day)
          if new_state != state:
            changes.append((i, j, new_state))

      for (i, j, new_state) in changes:
        self.grid[i, j].set_state(new_state)
      self.t = day
    finally:
      self._stepping = False
  # }}}
# }}}
