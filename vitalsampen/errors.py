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

"""Errors raised when sample entropy cannot be computed for a waveform"""

import copy
from typing import Optional

class SampEnError(ValueError):
  """Base class for data problems that prevent computing sample entropy.

  Each subclass has a `kind` used when reporting failures of a subject.
  """
  kind = 'sampen_error'

  def __init__(
      self,
      message: str,
      subject: Optional[str] = None,
      channel: Optional[str] = None
    ):
    """Init the error.

    Args:
      message: Human readable description of the problem
      subject: Identifier of the subject this error belongs to, if known
      channel: Name of the waveform channel this error belongs to, if known
    """
    super().__init__(message)
    self.message = message
    self.subject = subject
    self.channel = channel

  def __str__(self) -> str:
    prefix = ""
    if self.subject is not None:
      prefix += f"[{self.subject}] "
    if self.channel is not None:
      prefix += f"{self.channel}: "
    return prefix + self.message

  def with_context(
      self,
      subject: Optional[str] = None,
      channel: Optional[str] = None
    ) -> 'SampEnError':
    """Return a copy of this error with subject and/or channel filled in."""
    err = copy.copy(self)
    if subject is not None: err.subject = subject
    if channel is not None: err.channel = channel
    return err

class InsufficientDataError(SampEnError):
  """The waveform is too short for the requested embedding dimension."""
  kind = 'insufficient_data'

class DegenerateMatchError(SampEnError):
  """No template matches at embedding m or m+1 for the chosen tolerance."""
  kind = 'degenerate_match'

  def __init__(
      self,
      message: str,
      subject: Optional[str] = None,
      channel: Optional[str] = None,
      count_m: Optional[int] = None,
      count_m1: Optional[int] = None
    ):
    super().__init__(message, subject=subject, channel=channel)
    self.count_m = count_m
    self.count_m1 = count_m1

class MalformedInputError(SampEnError):
  """The input could not be parsed into finite waveforms."""
  kind = 'malformed_input'
