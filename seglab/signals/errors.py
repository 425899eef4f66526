# ****************************************************************************
#
# Copyright (C) 2019-2026, SegLab Developers.
# This file is part of SegLab.
#
# SegLab is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# SegLab is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# with this download. If not, see <http://www.gnu.org/licenses/>
#
# ****************************************************************************
"""
Exceptions raised while decoding SEG-Y data
"""


class SegyError(Exception):
    """Base class of all the decoding errors."""


class TransportError(SegyError):
    """Raised when the underlying byte source cannot be read."""


class TruncatedDataError(TransportError):
    """
    Raised when a fixed-size block ends before all its bytes are read.
    """
    def __init__(self, what, expected, received):
        self.what = what
        self.expected = expected
        self.received = received
        super().__init__(
            'truncated {0}: expected {1} bytes, got {2}'.format(
                what, expected, received))


class UnsupportedFormatError(SegyError, ValueError):
    """Raised for a data sample format code that is not supported."""

    def __init__(self, code):
        self.code = code
        super().__init__(
            'Unsupported sample format code: {0}'.format(code))


class IbmFloatConversionError(SegyError, ValueError):
    """Raised when a byte group cannot be read as an IBM float."""


class SampleLengthError(SegyError, ValueError):
    """Raised when a payload is not a whole number of samples."""


class FieldBoundsError(SegyError, IndexError):
    """Raised when a fixed-offset field falls outside its buffer."""
