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

"""Command line interface: compute sample entropy for a directory of vital csv files"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from vitalsampen.constants import DEFAULT_M, DEFAULT_OUTPUT_FILE, DEFAULT_R_MULTIPLIER
from vitalsampen.batch import compute_sampen_for_vital_files
from vitalsampen.io.readwrite import find_vital_csvs, read_vital_csvs
from vitalsampen.io.readwrite import write_entropies_csv, write_failures_csv
from vitalsampen.vitals import SampEnConfig

def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="vitalsampen",
    description="Compute sample entropy of sbp, mbp and dbp waveforms, one csv file per subject.")
  parser.add_argument("pattern", help="Glob pattern for the input csv files, e.g. 'data/*.csv'")
  parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE,
                      help="Output csv file (default: %(default)s)")
  parser.add_argument("-m", type=int, default=DEFAULT_M,
                      help="Embedding dimension (default: %(default)s)")
  parser.add_argument("--r-multiplier", type=float, default=DEFAULT_R_MULTIPLIER,
                      help="Tolerance as fraction of the std (default: %(default)s)")
  parser.add_argument("--n-jobs", type=int, default=None,
                      help="Number of worker processes (default: physical cores)")
  parser.add_argument("--failures", default=None,
                      help="Optional csv file listing subjects that failed")
  parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
  parser.add_argument("--log-level", default="INFO",
                      choices=["DEBUG", "INFO", "WARNING", "ERROR"])
  return parser

def main(argv: Optional[List[str]] = None) -> int:
  args = build_parser().parse_args(argv)
  logging.basicConfig(level=getattr(logging, args.log_level),
                      format="%(asctime)s %(levelname)s %(message)s")
  try:
    config = SampEnConfig(m=args.m, r_multiplier=args.r_multiplier)
  except ValueError as e:
    logging.error(str(e))
    return 2
  progress = not args.no_progress

  logging.info("Reading vital files...")
  paths = find_vital_csvs(args.pattern)
  if not paths:
    logging.error(f"No files match {args.pattern}")
    return 1
  vital_files, failures = read_vital_csvs(paths, progress=progress)

  logging.info("Computing sample entropy...")
  start = time.perf_counter()
  result = compute_sampen_for_vital_files(
    vital_files, config=config, n_jobs=args.n_jobs, progress=progress)
  logging.info(f"Sample entropy computation finished in {time.perf_counter()-start:.2f}s")
  failures.extend(result.failures)

  logging.info("Saving to csv...")
  write_entropies_csv(result.entropies, args.output)
  if args.failures is not None:
    write_failures_csv(failures, args.failures)
  logging.info(f"Wrote {len(result.entropies)} subjects to {args.output}, "
               f"excluded {len(failures)}")
  return 0

if __name__ == "__main__":
  sys.exit(main())
