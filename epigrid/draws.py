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
Sources of uniform random draws for the transition rule.  A population
consumes one draw per cell per step, laid out row-major.
"""
import numpy as np

# {{{ UniformDraws
class UniformDraws:
  """ Uniform [0,1) draws from one long-lived numpy generator.  Seed it
      once and the whole run is reproducible. """
  def __init__(self, seed=None):
    self.rng = np.random.default_rng(seed)

  def sample(self, shape):
    """ Return an array of the given shape filled with U(0,1) values. """
    return self.rng.random(shape)
# }}}

# {{{ FixedDraws
class FixedDraws:
  """ Replay a known sequence of draws, wrapping around to the start
      when it runs out.  Useful for scripted and test runs. """
  def __init__(self, values):
    self.values = np.asarray(values, dtype=float).ravel()
    if len(self.values) == 0:
      raise ValueError('FixedDraws needs at least one value')
    if np.any(self.values < 0.0) or np.any(self.values > 1.0):
      raise ValueError('draws must lie in [0,1]')
    self.position = 0

  def sample(self, shape):
    count = int(np.prod(shape))
    idx = (self.position + np.arange(count)) % len(self.values)
    self.position = (self.position + count) % len(self.values)
    return self.values[idx].reshape(shape)
# }}}
