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

import numpy as np

from vitalsampen.errors import InsufficientDataError, MalformedInputError

def detrend_linear(
    x: np.ndarray
  ) -> np.ndarray:
  """Remove the least-squares linear trend from a waveform.

  Fits y = alpha + beta * i over the 1-based sample positions i = 1..n and
  subtracts the fit, as suggested by Pincus & Goldberger (1994), "Physiological
  time-series analysis: what does regularity quantify?".

  - x_bar = (n+1)/2 and sum((i - x_bar)^2) = n(n^2-1)/12 have closed forms,
    so the slope needs a single reduction over the samples.
  - Accumulation is double precision. Floating point input keeps its dtype,
    other input is returned as float64.

  Args:
    x: The waveform. Shape (n,)
  Returns:
    y: The detrended waveform. Shape (n,)
  """
  x = np.asarray(x)
  if x.ndim != 1:
    raise MalformedInputError(f"Waveform must be 1-d, got shape {x.shape}")
  if not np.issubdtype(x.dtype, np.number) or np.issubdtype(x.dtype, np.complexfloating):
    raise MalformedInputError(f"Waveform must be real-valued, got dtype {x.dtype}")
  n = x.shape[0]
  if n < 2:
    raise InsufficientDataError(f"Need at least 2 samples to fit a linear trend, got {n}")
  if not np.all(np.isfinite(x)):
    raise MalformedInputError("Waveform contains non-finite samples")
  out_dtype = x.dtype if np.issubdtype(x.dtype, np.floating) else np.float64
  y = x.astype(np.float64)
  idx = np.arange(1, n + 1, dtype=np.float64)
  x_bar = (n + 1) / 2.
  y_bar = np.sum(y) / n
  # beta hat is the estimate of the slope
  numerator = np.sum((idx - x_bar) * (y - y_bar))
  denominator = n * (n * n - 1) / 12.
  beta_hat = numerator / denominator
  # alpha hat is the estimate of the intercept
  alpha_hat = y_bar - beta_hat * x_bar
  return (y - alpha_hat - beta_hat * idx).astype(out_dtype)
