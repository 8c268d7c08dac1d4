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

DEFAULT_M = 2                     # embedding dimension
DEFAULT_R_MULTIPLIER = 0.2        # fraction of std used as tolerance
DEGENERATE_RTOL = 1e-9            # residual std relative to max |x|
DEGENERATE_EPS_FACTOR = 10        # floor for the above, in eps of the storage dtype

CHANNELS = ('sbp', 'mbp', 'dbp')

NAME_COLUMN = 'name'
INPUT_COLUMNS = (NAME_COLUMN, 'mbp', 'sbp', 'dbp')
OUTPUT_COLUMNS = (NAME_COLUMN, 'sbp_sampen', 'mbp_sampen', 'dbp_sampen')
FAILURE_COLUMNS = (NAME_COLUMN, 'error', 'message')

DEFAULT_OUTPUT_FILE = 'vitaldb_entropies.csv'
