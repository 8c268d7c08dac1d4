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

import logging
import math
import numpy as np
from typing import Tuple, Union

from vitalsampen.errors import DegenerateMatchError, InsufficientDataError, MalformedInputError
from vitalsampen.numpy.stride_tricks import construct_templates

def _check_tolerance(r: Union[float, int]) -> float:
  if not isinstance(r, (float, int, np.floating, np.integer)) or isinstance(r, bool):
    raise ValueError(f"r must be a number, got {type(r)}")
  if not math.isfinite(r) or r < 0:
    raise ValueError(f"r must be finite and >= 0, got {r}")
  return float(r)

def is_match(
    a: np.ndarray,
    b: np.ndarray,
    r: Union[float, int]
  ) -> bool:
  """Determine whether two templates match.

  Two templates match when their Chebyshev distance (the largest elementwise
  absolute difference) is strictly less than `r`. Stops at the first element
  whose difference is >= `r`.

  Args:
    a: A template. Shape (k,)
    b: Another template. Shape (k,)
    r: The tolerance
  Returns:
    True if the templates match
  """
  assert len(a) == len(b), "Templates must have the same length"
  for a_t, b_t in zip(a, b):
    if not abs(float(a_t) - float(b_t)) < r:
      return False
  return True

def count_matches(
    templates: np.ndarray,
    r: Union[float, int]
  ) -> int:
  """Count the ordered pairs of distinct templates that match.

  Enumerates unordered pairs (i, j) with i < j and returns twice their count.
  Self-pairs are never counted. For each i, the candidates j > i are compared
  one element at a time, keeping only candidates that still match, so a pair
  is dropped at its first element with difference >= `r`.

  Args:
    templates: The templates. Shape (n_templates, k)
    r: The tolerance
  Returns:
    The number of matching ordered pairs (always even)
  """
  templates = np.asarray(templates)
  assert templates.ndim == 2, "templates.ndim must equal 2"
  r = _check_tolerance(r)
  n_templates, k = templates.shape
  # Element-major copy so that each column is contiguous
  cols = np.ascontiguousarray(templates.T, dtype=np.float64)
  matches = 0
  for i in range(n_templates - 1):
    # Candidate j indices, relative to i+1
    cand = np.flatnonzero(np.abs(cols[0, i+1:] - cols[0, i]) < r)
    for t in range(1, k):
      if cand.size == 0:
        break
      keep = np.abs(cols[t, i+1+cand] - cols[t, i]) < r
      cand = cand[keep]
    matches += int(cand.size)
  return 2 * matches

def match_counts(
    m: int,
    r: Union[float, int],
    x: np.ndarray
  ) -> Tuple[int, int]:
  """Count template matches at embedding dimensions m and m+1.

  Args:
    m: The embedding dimension
    r: The tolerance, shared by both dimensions
    x: The waveform. Shape (n,)
  Returns:
    Tuple of
     - count_m: Matching ordered pairs of templates of length m
     - count_m1: Matching ordered pairs of templates of length m+1
  """
  if not isinstance(m, (int, np.integer)) or isinstance(m, bool) or m < 1:
    raise ValueError(f"m must be a positive int, got {m}")
  r = _check_tolerance(r)
  x = np.asarray(x)
  if x.ndim != 1:
    raise MalformedInputError(f"Waveform must be 1-d, got shape {x.shape}")
  n = x.shape[0]
  if n < m + 2:
    raise InsufficientDataError(
      f"Need at least m+2={m+2} samples for sample entropy, got {n}")
  if not np.all(np.isfinite(x)):
    raise MalformedInputError("Waveform contains non-finite samples")
  count_m = count_matches(construct_templates(m, x), r)
  count_m1 = count_matches(construct_templates(m + 1, x), r)
  logging.debug(f"n={n} m={m} r={r:.6g}: {count_m} matches at m, {count_m1} at m+1")
  return count_m, count_m1

def sample_entropy(
    m: int,
    r: Union[float, int],
    x: np.ndarray
  ) -> float:
  """Compute the sample entropy of a waveform.

  SampEn = -ln(B/A), where A and B are the numbers of matching template pairs
  of length m and m+1 under the same tolerance `r`.

  Args:
    m: The embedding dimension (the smaller template length)
    r: The tolerance below which templates match
    x: The waveform. Shape (n,) with n >= m+2
  Returns:
    The sample entropy
  """
  count_m, count_m1 = match_counts(m=m, r=r, x=x)
  if count_m == 0:
    raise DegenerateMatchError(
      f"No template matches at m={m} with r={r:.6g}",
      count_m=count_m, count_m1=count_m1)
  if count_m1 == 0:
    raise DegenerateMatchError(
      f"No template matches at m+1={m+1} with r={r:.6g}",
      count_m=count_m, count_m1=count_m1)
  return -math.log(count_m1 / count_m)
