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
Utilities for binary file handling
"""
import os
from enum import Enum
from io import BytesIO
from struct import calcsize, unpack_from

from seglab.signals.errors import FieldBoundsError, TransportError

DEFAULT_BYTE_ORDER = 'be'

BYTE_MAP = {'be': '>', 'le': '<'}

# Integer formats admitted by the field reader (signed and unsigned)
FIELD_FORMATS = ('h', 'H', 'i', 'I')


class ReadOutcome(Enum):
    """
    Result of a fixed-size read on a ByteStream.
    """
    COMPLETE = 'complete'
    CLEAN_END = 'clean_end'
    TRUNCATED = 'truncated'


class ByteStream(object):
    """
    This class allows reading binary data from a file, from a
    byte buffer or from an already open binary stream using the
    same interface.
    """
    def __init__(self, byte_order=DEFAULT_BYTE_ORDER):

        self.buffer = None
        self.byte_order = byte_order
        self._owner = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def ropen(self, byte_stream):
        """
        Open a source for reading. Paths are opened (and later closed)
        by the ByteStream itself, while file objects provided by the
        caller are left open on close.
        """
        if isinstance(byte_stream, (bytes, bytearray)):
            self.buffer = BytesIO(byte_stream)
            self._owner = True
        elif isinstance(byte_stream, (str, os.PathLike)):
            try:
                self.buffer = open(byte_stream, 'rb')
            except OSError as err:
                raise TransportError(
                    'cannot open {0}: {1}'.format(byte_stream, err)) from err
            self._owner = True
        elif hasattr(byte_stream, 'read'):
            self.buffer = byte_stream
            self._owner = False
        else:
            raise TypeError('unsupported byte source: {0}'.format(
                type(byte_stream).__name__))

    def goto(self, offset, whence=0):
        """
        offset − position of the read pointer within the file.
        whence − 0 for absolute file positioning, 1 for relative to
        the current position and 2 seek relative to the file's end.
        """
        try:
            self.buffer.seek(offset, whence)
        except OSError as err:
            raise TransportError('seek failed: {0}'.format(err)) from err

    @property
    def offset(self):
        """
        """
        try:
            return self.buffer.tell()
        except OSError as err:
            raise TransportError('tell failed: {0}'.format(err)) from err

    @property
    def length(self):
        """
        """
        offset = self.offset
        self.goto(0, 2)
        length = self.offset
        self.goto(offset)

        return length

    def fetch(self, byte_num):
        """
        Read exactly byte_num bytes from the current position.

        Returns a (outcome, data) pair where outcome is:
            COMPLETE  - all the requested bytes were read
            CLEAN_END - the source was already exhausted (no byte read)
            TRUNCATED - the source ended after a partial read

        Errors of the underlying source are raised as TransportError.
        """
        chunks = []
        remaining = byte_num

        while remaining > 0:
            try:
                data = self.buffer.read(remaining)
            except OSError as err:
                raise TransportError('read failed: {0}'.format(err)) from err
            if not data:
                break
            chunks.append(data)
            remaining -= len(data)

        data = b''.join(chunks)

        if remaining == 0:
            return ReadOutcome.COMPLETE, data
        elif not data:
            return ReadOutcome.CLEAN_END, data
        else:
            return ReadOutcome.TRUNCATED, data

    def get(self, byte_format, byte_num=1, offset=None):
        """
        Read a single value at the current position (or at the given
        absolute offset).
        """
        if offset is not None:
            self.goto(offset)

        outcome, byte_buffer = self.fetch(byte_num)
        if outcome is not ReadOutcome.COMPLETE:
            raise FieldBoundsError(
                'stream ended while reading {0} bytes'.format(byte_num))

        return read_field(byte_buffer, byte_format, byte_num, 0,
                          byte_order=self.byte_order)

    def close(self):
        """
        """
        if self._owner and self.buffer is not None:
            self.buffer.close()
        self.buffer = None


def read_field(buffer, byte_format, byte_num, offset,
               byte_order=DEFAULT_BYTE_ORDER):
    """
    Extract an integer of 2 or 4 bytes from a byte buffer.

    Parameters
    ----------
    buffer : bytes
        Source buffer.
    byte_format : str
        struct code of the field: 'h', 'H' (2 bytes) or 'i', 'I' (4 bytes).
    byte_num : int
        Width of the field in bytes.
    offset : int
        Zero-based position of the first byte of the field.
    byte_order : str, default='be'
        'be' (big-endian) or 'le' (little-endian).

    Raises
    ------
    FieldBoundsError
        If the field does not fit within the buffer.
    """
    if byte_format not in FIELD_FORMATS:
        raise ValueError('Not a supported field format: {0}'.format(
            byte_format))

    fmt = BYTE_MAP[byte_order] + byte_format
    if calcsize(fmt) != byte_num:
        raise ValueError('Field format {0} is not {1} bytes wide'.format(
            byte_format, byte_num))

    if offset < 0 or offset + byte_num > len(buffer):
        raise FieldBoundsError(
            'cannot read {0} bytes at offset {1} from a {2}-byte '
            'buffer'.format(byte_num, offset, len(buffer)))

    return unpack_from(fmt, buffer, offset)[0]


def unpack_struc(buffer, struc, byte_order=DEFAULT_BYTE_ORDER):
    """
    Decode a fixed-layout block using a field table made of
    (name, byte_format, byte_num, offset) descriptors.
    """
    return {name: read_field(buffer, fmt, num, offset, byte_order)
            for (name, fmt, num, offset) in struc}
