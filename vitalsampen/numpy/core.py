# Copyright (c) 2025 Philipp Rouast
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import math
import numpy as np
from typing import Union

from vitalsampen.constants import DEFAULT_R_MULTIPLIER

def mean(
    x: np.ndarray
  ) -> float:
  """Mean of a 1-d waveform, accumulated in double precision.

  Args:
    x: The waveform. Shape (n,)
  Returns:
    The mean as a Python float
  """
  x = np.asarray(x)
  assert x.ndim == 1, "x.ndim must equal 1"
  assert x.size > 0, "x must not be empty"
  return float(np.sum(x, dtype=np.float64) / x.size)

def standard_deviation(
    x: np.ndarray
  ) -> float:
  """Population standard deviation sqrt(mean((x - mean(x))^2)).

  - Intermediate sums are double precision, also for float32 input.

  Args:
    x: The waveform. Shape (n,)
  Returns:
    The standard deviation as a Python float
  """
  x = np.asarray(x)
  x_bar = mean(x)
  dev = x.astype(np.float64) - x_bar
  return math.sqrt(float(np.dot(dev, dev)) / x.size)

def select_tolerance(
    x: np.ndarray,
    r_multiplier: Union[float, int] = DEFAULT_R_MULTIPLIER
  ) -> float:
  """Select the match tolerance r for sample entropy of a waveform.

  Args:
    x: The (detrended) waveform. Shape (n,)
    r_multiplier: The fraction of the standard deviation to use as tolerance
  Returns:
    r: The tolerance, r = r_multiplier * std(x)
  """
  if not isinstance(r_multiplier, (float, int)) or isinstance(r_multiplier, bool):
    raise ValueError(f"r_multiplier must be a number, got {type(r_multiplier)}")
  if not math.isfinite(r_multiplier) or r_multiplier < 0:
    raise ValueError(f"r_multiplier must be finite and >= 0, got {r_multiplier}")
  return standard_deviation(x) * float(r_multiplier)
