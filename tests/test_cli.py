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

import sys
sys.path.append('../vitalsampen')

from vitalsampen.cli import main
from vitalsampen.constants import OUTPUT_COLUMNS

import os
import pandas as pd
import pytest

@pytest.mark.parametrize("n_jobs", ["1", "2"])
def test_main(vital_csv_dir, temp_dir, n_jobs):
  output = os.path.join(temp_dir, f"cli_entropies_{n_jobs}.csv")
  failures = os.path.join(temp_dir, f"cli_failures_{n_jobs}.csv")
  code = main([os.path.join(vital_csv_dir, '*.csv'), "-o", output, "--failures", failures,
               "--n-jobs", n_jobs, "--no-progress", "--log-level", "WARNING"])
  assert code == 0
  df = pd.read_csv(output)
  assert tuple(df.columns) == OUTPUT_COLUMNS
  assert sorted(df['name']) == ['case_1', 'case_2']
  assert df[list(OUTPUT_COLUMNS[1:])].notna().all().all()
  df_failures = pd.read_csv(failures)
  assert sorted(df_failures['name']) == ['case_3', 'case_4']
  assert set(df_failures['error']) == {'malformed_input'}

def test_main_config(vital_csv_dir, temp_dir):
  output_default = os.path.join(temp_dir, "cli_default.csv")
  output_m1 = os.path.join(temp_dir, "cli_m1.csv")
  pattern = os.path.join(vital_csv_dir, 'case_1.csv')
  assert main([pattern, "-o", output_default, "--n-jobs", "1", "--no-progress"]) == 0
  assert main([pattern, "-o", output_m1, "-m", "1", "--r-multiplier", "0.3",
               "--n-jobs", "1", "--no-progress"]) == 0
  assert pd.read_csv(output_default)['sbp_sampen'][0] != pd.read_csv(output_m1)['sbp_sampen'][0]

def test_main_no_files(temp_dir):
  assert main([os.path.join(temp_dir, 'nothing_here_*.csv'), "--no-progress"]) == 1

def test_main_invalid_config(vital_csv_dir):
  assert main([os.path.join(vital_csv_dir, '*.csv'), "-m", "0", "--no-progress"]) == 2
