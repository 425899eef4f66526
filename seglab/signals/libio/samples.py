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
Decoding of SEG-Y trace samples into single precision floats.

Five data sample formats are supported:

    1 - 4-byte IBM floating point (base 16)
    2 - 4-byte two's complement integer
    3 - 2-byte two's complement integer
    5 - 4-byte IEEE floating point
    8 - 1-byte two's complement integer

All multi-byte samples are big-endian.
"""
from enum import Enum

import numpy as np

from seglab.signals.errors import (UnsupportedFormatError,
                                   IbmFloatConversionError,
                                   SampleLengthError)

IBM_SIGN_MASK = 0x80000000
IBM_FRACTION_MASK = 0x00FFFFFF
IBM_HIDDEN_BIT = 0x00800000
IEEE_FRACTION_MASK = 0x007FFFFF
IEEE_EXPONENT_MAX = 255


class SampleFormat(int, Enum):
    """
    SEG-Y data sample format codes.
    """
    IBM_FLOAT = 1
    INT32 = 2
    INT16 = 3
    IEEE_FLOAT = 5
    INT8 = 8

    @classmethod
    def from_code(cls, code):
        """
        Return the sample format for a binary header code.

        Raises
        ------
        UnsupportedFormatError
            If the code is not one of the supported formats.
        """
        try:
            return cls(code)
        except ValueError:
            raise UnsupportedFormatError(code) from None

    @property
    def width(self):
        """
        Size in bytes of one sample.
        """
        return sample_struc[self][0]


# Sample width and on-disk numpy dtype for each format
sample_struc = {SampleFormat.IBM_FLOAT: (4, '>u4'),
                SampleFormat.INT32: (4, '>i4'),
                SampleFormat.INT16: (2, '>i2'),
                SampleFormat.IEEE_FLOAT: (4, '>f4'),
                SampleFormat.INT8: (1, 'i1')}


def decode_samples(sample_format, byte_buffer):
    """
    Decode a run of raw samples into a float32 array.

    Parameters
    ----------
    sample_format : SampleFormat or int
        Declared data sample format.
    byte_buffer : bytes
        Raw samples; its length must be a multiple of the sample width.

    Returns
    -------
    numpy.ndarray
        One float32 value per sample, in file order.
    """
    sample_format = SampleFormat.from_code(sample_format)
    width, dtype = sample_struc[sample_format]

    if len(byte_buffer) % width:
        if sample_format is SampleFormat.IBM_FLOAT:
            raise IbmFloatConversionError(
                'IBM float samples need 4 bytes, {0} bytes left '
                'over'.format(len(byte_buffer) % width))
        raise SampleLengthError(
            '{0} bytes is not a multiple of the {1}-byte sample '
            'width'.format(len(byte_buffer), width))

    raw = np.frombuffer(byte_buffer, dtype=dtype)

    if sample_format is SampleFormat.IBM_FLOAT:
        return ibm_to_float32(raw)

    # Integers are widened without any scaling
    return raw.astype(np.float32)


def ibm2ieee(chunk):
    """
    Convert a single 4-byte IBM float to a Python float.

    Raises
    ------
    IbmFloatConversionError
        If the chunk is not exactly 4 bytes long.
    """
    if len(chunk) != 4:
        raise IbmFloatConversionError(
            'IBM float must be 4 bytes, got {0}'.format(len(chunk)))

    return float(ibm_to_float32(np.frombuffer(chunk, dtype='>u4'))[0])


def ibm_to_float32(words):
    """
    Convert an array of IBM floats (as 32-bit unsigned words) into
    IEEE-754 single precision by rebuilding the bit pattern.

    An IBM float is made of a sign bit, a 7-bit base-16 exponent
    biased by 64 and a 24-bit fraction F, with value 0.F * 16**(e - 64).
    The fraction is shifted left until its leading bit lands on bit 23,
    which becomes the implicit bit of the IEEE mantissa.
    """
    words = np.asarray(words).astype(np.uint32)

    sign = (words & IBM_SIGN_MASK).astype(np.int64)
    fraction = (words & IBM_FRACTION_MASK).astype(np.int64)
    exponent = ((words >> 24) & 0x7F).astype(np.int64)

    # From base 16 to base 2, minus one as the fraction is 0.F and not 1.F
    exponent = (exponent - 64) * 4 - 1

    zero = (fraction == 0)

    pending = ~zero & ((fraction & IBM_HIDDEN_BIT) == 0)
    while pending.any():
        fraction[pending] = fraction[pending] << 1
        exponent[pending] = exponent[pending] - 1
        pending = ~zero & ((fraction & IBM_HIDDEN_BIT) == 0)

    biased = exponent + 127

    bits = sign | (biased << 23) | (fraction & IEEE_FRACTION_MASK)

    # Beyond the single precision range
    overflow = biased >= IEEE_EXPONENT_MAX
    bits[overflow] = sign[overflow] | 0x7F800000

    # Below the normal range, keep the implicit bit in a subnormal
    underflow = biased <= 0
    shift = np.minimum(1 - biased[underflow], 31)
    bits[underflow] = sign[underflow] | (fraction[underflow] >> shift)

    bits[zero] = 0

    return bits.astype(np.uint32).view(np.float32)
