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

from dataclasses import dataclass, field
import logging
import math
import numpy as np

from vitalsampen.constants import CHANNELS, DEFAULT_M, DEFAULT_R_MULTIPLIER
from vitalsampen.constants import DEGENERATE_EPS_FACTOR, DEGENERATE_RTOL
from vitalsampen.errors import DegenerateMatchError, InsufficientDataError
from vitalsampen.errors import MalformedInputError, SampEnError
from vitalsampen.numpy.core import select_tolerance, standard_deviation
from vitalsampen.numpy.entropy import sample_entropy
from vitalsampen.numpy.filters import detrend_linear

@dataclass(frozen=True)
class SampEnConfig:
  """Parameters for computing sample entropy of vital sign waveforms.

  Attributes:
    m: The embedding dimension; templates of length m and m+1 are compared
    r_multiplier: Tolerance as a fraction of the detrended waveform's std
    degenerate_rtol: A detrended waveform with std <= degenerate_rtol * max|x|
      is considered to have no variability left. For floating point waveforms
      this is at least 10 eps of their dtype.
  """
  m: int = DEFAULT_M
  r_multiplier: float = DEFAULT_R_MULTIPLIER
  degenerate_rtol: float = DEGENERATE_RTOL

  def __post_init__(self):
    if not isinstance(self.m, int) or isinstance(self.m, bool) or self.m < 1:
      raise ValueError(f"m must be a positive int, got {self.m}")
    if not isinstance(self.r_multiplier, (float, int)) or \
       not math.isfinite(self.r_multiplier) or self.r_multiplier < 0:
      raise ValueError(f"r_multiplier must be finite and >= 0, got {self.r_multiplier}")
    if not isinstance(self.degenerate_rtol, (float, int)) or self.degenerate_rtol < 0:
      raise ValueError(f"degenerate_rtol must be >= 0, got {self.degenerate_rtol}")

@dataclass(frozen=True)
class VitalFile:
  """Blood pressure waveforms of a single subject."""
  name: str
  sbp: np.ndarray = field(repr=False)
  mbp: np.ndarray = field(repr=False)
  dbp: np.ndarray = field(repr=False)

  def channel(self, channel: str) -> np.ndarray:
    if channel not in CHANNELS:
      raise KeyError(f"Unknown channel {channel}")
    return getattr(self, channel)

@dataclass(frozen=True)
class VitalEntropies:
  """Sample entropy of each blood pressure waveform of a single subject."""
  name: str
  sbp_sampen: float
  mbp_sampen: float
  dbp_sampen: float

def _check_waveform(x: np.ndarray) -> np.ndarray:
  if x is None:
    raise MalformedInputError("Waveform is missing")
  try:
    x = np.asarray(x)
  except (ValueError, TypeError) as e:
    raise MalformedInputError(f"Waveform cannot be read as an array: {e}") from e
  if x.ndim != 1:
    raise MalformedInputError(f"Waveform must be 1-d, got shape {x.shape}")
  if not (np.issubdtype(x.dtype, np.floating) or np.issubdtype(x.dtype, np.integer)):
    raise MalformedInputError(f"Waveform must be real-valued, got dtype {x.dtype}")
  if not np.all(np.isfinite(x)):
    raise MalformedInputError("Waveform contains non-finite samples")
  return x

def compute_sampen_for_wave(
    x: np.ndarray,
    config: SampEnConfig = SampEnConfig()
  ) -> float:
  """Compute sample entropy for a single waveform.

  The waveform is linearly detrended, and the tolerance is selected from the
  standard deviation of the detrended waveform.

  Args:
    x: The raw waveform. Shape (n,)
    config: The sample entropy parameters
  Returns:
    The sample entropy
  """
  x = _check_waveform(x)
  if x.shape[0] < config.m + 2:
    # Reported before detrending so that the message names m
    raise InsufficientDataError(
      f"Need at least m+2={config.m+2} samples for sample entropy, got {x.shape[0]}")
  y = detrend_linear(x)
  scale = float(np.max(np.abs(x)))
  std = standard_deviation(y)
  rtol = config.degenerate_rtol
  if np.issubdtype(x.dtype, np.floating):
    # Rounding to the storage dtype alone leaves residue of this size
    rtol = max(rtol, DEGENERATE_EPS_FACTOR * float(np.finfo(x.dtype).eps))
  if std <= rtol * scale:
    raise DegenerateMatchError(
      f"Waveform has no variability after detrending (std={std:.3g})")
  r = select_tolerance(y, r_multiplier=config.r_multiplier)
  logging.debug(f"n={y.shape[0]} std={std:.6g} r={r:.6g}")
  return sample_entropy(m=config.m, r=r, x=y)

def compute_sampen_for_vital_file(
    vital_file: VitalFile,
    config: SampEnConfig = SampEnConfig()
  ) -> VitalEntropies:
  """Compute sample entropy for the sbp, mbp, and dbp waveforms of a subject.

  Each channel is processed independently with its own tolerance. If any
  channel fails, no record is produced for the subject.

  Args:
    vital_file: The subject's waveforms
    config: The sample entropy parameters
  Returns:
    The subject's sample entropies
  """
  if not isinstance(vital_file, VitalFile):
    raise MalformedInputError(
      f"Expected a VitalFile, got {type(vital_file).__name__}")
  name = vital_file.name
  if not isinstance(name, str) or not name:
    raise MalformedInputError("Subject name is missing")
  sampen = {}
  for channel in CHANNELS:
    try:
      sampen[channel] = compute_sampen_for_wave(vital_file.channel(channel), config)
    except SampEnError as e:
      raise e.with_context(subject=name, channel=channel) from e
  return VitalEntropies(
    name=name,
    sbp_sampen=sampen['sbp'],
    mbp_sampen=sampen['mbp'],
    dbp_sampen=sampen['dbp'])
