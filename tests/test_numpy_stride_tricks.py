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

from vitalsampen.errors import InsufficientDataError
from vitalsampen.numpy.stride_tricks import construct_templates

import numpy as np
import pytest

def test_construct_templates_1():
  np.testing.assert_equal(construct_templates(1, [1, 2, 3]), [[1], [2], [3]])

def test_construct_templates_2():
  np.testing.assert_equal(
    construct_templates(2, [1, 2, 3, 4, 5]),
    [[1, 2], [2, 3], [3, 4], [4, 5]])

@pytest.mark.parametrize("n,window_size",
  [(n, k) for n in [1, 5, 64] for k in [1, 2, 3, 5] if k <= n])
def test_construct_templates_shape(random, n, window_size):
  x = np.random.uniform(size=n).astype(np.float32)
  x_copy = x.copy()
  templates = construct_templates(window_size, x)
  assert templates.shape == (n - window_size + 1, window_size)
  assert templates.dtype == np.float32
  for i in [0, 1, n - window_size]:
    if i <= n - window_size:
      np.testing.assert_equal(templates[i], x[i:i+window_size])
  # Read-only view, no side effects
  assert not templates.flags.writeable
  np.testing.assert_equal(x, x_copy)

def test_construct_templates_too_long():
  with pytest.raises(InsufficientDataError):
    construct_templates(4, [1., 2., 3.])

@pytest.mark.parametrize("window_size", [0, -1, 2.])
def test_construct_templates_invalid_window_size(window_size):
  with pytest.raises(ValueError):
    construct_templates(window_size, [1., 2., 3.])
