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

import glob
import logging
import numpy as np
import os
import pandas as pd
from tqdm import tqdm
from typing import Dict, Iterable, List, Tuple, Union

from vitalsampen.constants import FAILURE_COLUMNS, INPUT_COLUMNS, NAME_COLUMN, OUTPUT_COLUMNS
from vitalsampen.errors import MalformedInputError, SampEnError
from vitalsampen.vitals import VitalEntropies, VitalFile

def _subject_from_path(path: str) -> str:
  return os.path.splitext(os.path.basename(path))[0]

def find_vital_csvs(
    pattern: str
  ) -> List[str]:
  """Find all vital csv files matching a glob pattern.

  Args:
    pattern: The glob pattern, e.g. `data/*.csv`. `**` matches recursively.
  Returns:
    paths: The sorted list of matching file paths
  """
  if not isinstance(pattern, str):
    raise ValueError("pattern must be a string")
  paths = sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))
  logging.debug(f"Found {len(paths)} files matching {pattern}")
  return paths

def read_vital_csv(
    path: str
  ) -> VitalFile:
  """Read the blood pressure waveforms of one subject from a csv file.

  The file has a header and the columns `name`, `mbp`, `sbp`, `dbp`, with one
  row per sample. Due to the waveforms having different lengths for each
  subject, each subject is stored in its own file. The subject name is taken
  from the first row.

  Args:
    path: The path to the csv file
  Returns:
    vital_file: The waveforms, stored as float32
  """
  if not isinstance(path, str):
    raise ValueError("path must be a string")
  if not os.path.exists(path):
    raise FileNotFoundError(f"File {path} does not exist")
  subject = _subject_from_path(path)
  try:
    df = pd.read_csv(path, skipinitialspace=True, dtype={NAME_COLUMN: str})
  except pd.errors.EmptyDataError as e:
    raise MalformedInputError(f"File {path} is empty", subject=subject) from e
  except pd.errors.ParserError as e:
    raise MalformedInputError(f"Problem parsing {path}: {e}", subject=subject) from e
  df.columns = [str(c).strip() for c in df.columns]
  missing = [c for c in INPUT_COLUMNS if c not in df.columns]
  if missing:
    raise MalformedInputError(
      f"File {path} is missing columns {missing}", subject=subject)
  if len(df) == 0:
    raise MalformedInputError(f"File {path} contains no samples", subject=subject)
  name = df[NAME_COLUMN].iloc[0]
  if not isinstance(name, str) or not name.strip():
    raise MalformedInputError(f"File {path} has no subject name", subject=subject)
  name = name.strip()
  waves = {}
  for channel in INPUT_COLUMNS[1:]:
    try:
      values = pd.to_numeric(df[channel], errors='raise').to_numpy(dtype=np.float32)
    except (ValueError, TypeError) as e:
      raise MalformedInputError(
        f"Column {channel} of {path} is not numeric: {e}", subject=name) from e
    if not np.all(np.isfinite(values)):
      raise MalformedInputError(
        f"Column {channel} of {path} has missing or non-finite values",
        subject=name, channel=channel)
    waves[channel] = values
  return VitalFile(name=name, sbp=waves['sbp'], mbp=waves['mbp'], dbp=waves['dbp'])

def read_vital_csvs(
    paths: Iterable[str],
    progress: bool = True
  ) -> Tuple[List[VitalFile], List[SampEnError]]:
  """Read many vital csv files, collecting files that cannot be read.

  Args:
    paths: The paths to the csv files
    progress: Show a progress bar?
  Returns:
    Tuple of
     - vital_files: The successfully read files, in the order of `paths`
     - failures: One error for each file that could not be read
  """
  paths = list(paths)
  vital_files, failures = [], []
  for path in tqdm(paths, desc="Reading", unit="file", disable=not progress):
    try:
      vital_files.append(read_vital_csv(path))
    except SampEnError as e:
      logging.warning(f"Skipping {path}: {e}")
      failures.append(e)
    except OSError as e:
      logging.warning(f"Skipping {path}: {e}")
      failures.append(MalformedInputError(
        f"Problem reading {path}: {e}", subject=_subject_from_path(path)))
  return vital_files, failures

def write_entropies_csv(
    entropies: Union[Iterable[VitalEntropies], Dict[str, VitalEntropies]],
    path: str
  ) -> pd.DataFrame:
  """Write one row of sample entropies per subject to a csv file.

  Args:
    entropies: The records, in the order they should be written
    path: The output csv file path
  Returns:
    df: The written table
  """
  if isinstance(entropies, dict):
    entropies = entropies.values()
  df = pd.DataFrame(
    [(e.name, e.sbp_sampen, e.mbp_sampen, e.dbp_sampen) for e in entropies],
    columns=list(OUTPUT_COLUMNS))
  df.to_csv(path, index=False)
  return df

def write_failures_csv(
    failures: Iterable[SampEnError],
    path: str
  ) -> pd.DataFrame:
  """Write one row per failed subject with the kind of error to a csv file.

  Args:
    failures: The errors, each with its subject set
    path: The output csv file path
  Returns:
    df: The written table
  """
  df = pd.DataFrame(
    [(f.subject, f.kind, str(f)) for f in failures],
    columns=list(FAILURE_COLUMNS))
  df.to_csv(path, index=False)
  return df
