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
import os
import pytest
import random as rand
import tempfile
from typing import Optional, Union

import sys
sys.path.append('../vitalsampen')

SAMPLE_N = 500
SAMPLE_PERIOD = 20

def _make_noisy_sinusoid(
    n: int,
    period: float,
    *,
    trend: float = 0.0,
    offset: float = 0.0,
    noise_std: float = 0.3,
    seed: Optional[Union[int, np.random.Generator]] = None,
  ) -> np.ndarray:
  """Sinusoid with gaussian noise and optional linear trend, reproducible RNG."""
  rng = np.random.default_rng(seed)
  t = np.arange(n)
  sig = np.sin(2 * np.pi * t / period) + rng.normal(0, noise_std, n)
  return offset + trend * t + sig

def _write_vital_csv(
    path: str,
    name: str,
    sbp: np.ndarray,
    mbp: np.ndarray,
    dbp: np.ndarray
  ) -> str:
  """Write a subject csv in the same layout as the vital csv exports."""
  with open(path, 'w') as f:
    f.write("name, mbp, sbp, dbp\n")
    for s, mb, d in zip(sbp, mbp, dbp):
      f.write(f"{name}, {mb}, {s}, {d}\n")
  return path

def _make_bp(seed: int, n: int = 300):
  sbp = _make_noisy_sinusoid(n, SAMPLE_PERIOD, offset=120., trend=0.01, noise_std=.5, seed=seed)
  dbp = _make_noisy_sinusoid(n, SAMPLE_PERIOD, offset=80., trend=-0.01, noise_std=.4, seed=seed+1)
  mbp = (sbp + 2 * dbp) / 3
  return sbp, mbp, dbp

@pytest.fixture(scope='session')
def temp_dir():
  with tempfile.TemporaryDirectory() as temp:
    yield temp

@pytest.fixture
def random():
  rand.seed(0)
  np.random.seed(0)

@pytest.fixture(scope='session')
def noisy_sinusoid():
  return _make_noisy_sinusoid(SAMPLE_N, SAMPLE_PERIOD, seed=3)

@pytest.fixture(scope='session')
def bp_waveforms():
  return _make_bp(seed=7)

@pytest.fixture(scope='session')
def vital_csv_dir(temp_dir):
  """Directory with two good subjects, one with text in a numeric column,
  and one missing the dbp column."""
  d = os.path.join(temp_dir, 'vitals')
  os.makedirs(d)
  for i, name in enumerate(['case_1', 'case_2']):
    sbp, mbp, dbp = _make_bp(seed=10*i)
    _write_vital_csv(os.path.join(d, f"{name}.csv"), name, sbp, mbp, dbp)
  with open(os.path.join(d, 'case_3.csv'), 'w') as f:
    f.write("name,mbp,sbp,dbp\ncase_3,90.,120.,80.\ncase_3,abc,121.,81.\n")
  with open(os.path.join(d, 'case_4.csv'), 'w') as f:
    f.write("name,mbp,sbp\ncase_4,90.,120.\ncase_4,91.,121.\n")
  return d

@pytest.fixture(scope='session')
def vital_files():
  from vitalsampen.vitals import VitalFile
  files = []
  for i in range(4):
    sbp, mbp, dbp = _make_bp(seed=100+10*i)
    files.append(VitalFile(name=f"subject_{i}", sbp=sbp, mbp=mbp, dbp=dbp))
  return files
