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

"""Compute sample entropy for many subjects in parallel"""

from dataclasses import dataclass, field
from joblib import Parallel, delayed
import logging
import psutil
from tqdm import tqdm
from typing import Dict, Iterable, List, Optional, Tuple

from vitalsampen.errors import MalformedInputError, SampEnError
from vitalsampen.vitals import SampEnConfig, VitalEntropies, VitalFile
from vitalsampen.vitals import compute_sampen_for_vital_file

@dataclass
class BatchResult:
  """Sample entropies of all subjects that succeeded, and errors of all that failed"""
  entropies: Dict[str, VitalEntropies] = field(default_factory=dict)
  failures: List[SampEnError] = field(default_factory=list)

def default_n_jobs() -> int:
  """Return the number of physical cores, or 1 if it cannot be determined."""
  n = psutil.cpu_count(logical=False)
  return n if n else 1

def _compute_task(
    vital_file: VitalFile,
    config: SampEnConfig
  ) -> Tuple[str, Optional[VitalEntropies], Optional[SampEnError]]:
  """Compute sample entropies for one subject, returning data errors as values."""
  name = getattr(vital_file, 'name', None)
  try:
    return name, compute_sampen_for_vital_file(vital_file, config), None
  except SampEnError as e:
    return name, None, e.with_context(subject=name)

def compute_sampen_for_vital_files(
    vital_files: Iterable[VitalFile],
    config: SampEnConfig = SampEnConfig(),
    n_jobs: Optional[int] = None,
    progress: bool = True
  ) -> BatchResult:
  """Compute sample entropies for many subjects.

  - Each subject is an independent task; results arrive in completion order.
  - A subject whose computation fails is logged and reported in `failures`,
    while all other subjects proceed.
  - Subjects with a duplicate name are not computed and reported as failures.

  Args:
    vital_files: The subjects' waveforms
    config: The sample entropy parameters
    n_jobs: Number of worker processes (default: number of physical cores)
    progress: Show a progress bar?
  Returns:
    result: The entropies keyed by subject name, and the failures
  """
  if n_jobs is None: n_jobs = default_n_jobs()
  if not isinstance(n_jobs, int) or n_jobs == 0:
    raise ValueError(f"n_jobs must be a non-zero int, got {n_jobs}")
  result = BatchResult()
  # Keep the first occurrence of each name
  tasks, seen = [], set()
  for vf in vital_files:
    name = getattr(vf, 'name', None)
    if name in seen:
      err = MalformedInputError(f"Duplicate subject name {name}", subject=name)
      logging.warning(f"Skipping subject: {err}")
      result.failures.append(err)
      continue
    seen.add(name)
    tasks.append(vf)
  if n_jobs == 1:
    outputs = (_compute_task(vf, config) for vf in tasks)
  else:
    outputs = Parallel(n_jobs=n_jobs, return_as="generator_unordered")(
      delayed(_compute_task)(vf, config) for vf in tasks)
  for name, entropies, err in tqdm(
      outputs, total=len(tasks), desc="Sample entropy", unit="subject", disable=not progress):
    if err is not None:
      logging.warning(f"Failed ({err.kind}): {err}")
      result.failures.append(err)
    else:
      result.entropies[name] = entropies
  logging.info(f"Computed sample entropy for {len(result.entropies)} subjects, "
               f"{len(result.failures)} failed")
  return result
