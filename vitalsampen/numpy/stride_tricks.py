# Copyright (c) 2024 Philipp Rouast
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

import numpy as np

from vitalsampen.errors import InsufficientDataError, MalformedInputError

def construct_templates(
    window_size: int,
    x: np.ndarray
  ) -> np.ndarray:
  """Create a view of all templates (sliding windows with step 1) of `x`.

  - Template i is x[i:i+window_size], for i in [0, n-window_size]
  - The view is read-only and shares memory with `x`

  Args:
    window_size: The template length, 1 <= window_size <= n
    x: The 1-d waveform. Shape (n,)
  Returns:
    templates: The templates. Shape (n-window_size+1, window_size)
  """
  if not isinstance(window_size, (int, np.integer)) or isinstance(window_size, bool):
    raise ValueError(f"window_size must be an int, got {type(window_size)}")
  if window_size < 1:
    raise ValueError(f"window_size must be >= 1, got {window_size}")
  x = np.asarray(x)
  if x.ndim != 1:
    raise MalformedInputError(f"Waveform must be 1-d, got shape {x.shape}")
  n = x.shape[0]
  if window_size > n:
    raise InsufficientDataError(
      f"Cannot build templates of length {window_size} from {n} samples")
  return np.lib.stride_tricks.sliding_window_view(x, int(window_size))
