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
Individual state for the grid contagion model.
"""
from enum import Enum

# {{{ SIRV enum
class SIRV(Enum):
    """
    States for SIRV model.
    """
    S = 1
    I = 2
    R = 3
    V = 4
# }}}

# {{{ Person
class Person:
  """ A single individual occupying one grid cell.  Holds exactly one
      SIRV state and starts off susceptible. """

  def __init__(self):
    self.state = SIRV.S

  def get_state(self):
    return self.state

  def set_state(self, state):
    """ Set the state directly.  Only SIRV members are accepted. """
    if not isinstance(state, SIRV):
      raise TypeError(f'not a SIRV state: {state!r}')
    self.state = state

  # {{{ setters
  def set_sus(self):
    self.state = SIRV.S

  def set_inf(self):
    self.state = SIRV.I

  def set_rec(self):
    self.state = SIRV.R

  def set_vac(self):
    self.state = SIRV.V
  # }}}
# }}}
