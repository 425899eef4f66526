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
A simple Python library for reading SEG-Y files.

A SEG-Y file is made of a 3200-byte textual header, a 400-byte binary
(reel) header and a sequence of traces, each composed of a 240-byte
trace header followed by the data samples. All binary values are
big-endian.

Usage:
    sgy = segyread('line01.sgy')
    sgy.textual_header.lines[0]
    sgy.metadata_header.sample_format
    sgy.traces[0].data
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

import numpy as np

from seglab.libutils.time import Date
from seglab.signals.binutils import ByteStream, ReadOutcome, unpack_struc
from seglab.signals.errors import TruncatedDataError
from seglab.signals.libio.samples import SampleFormat, decode_samples

logger = logging.getLogger(__name__)

TEXT_HEADER_SIZE = 3200
METADATA_HEADER_SIZE = 400
TRACE_HEADER_SIZE = 240
TEXT_LINE_LENGTH = 80

# Fraction of printable characters above which the textual
# header is taken as ASCII rather than EBCDIC
ASCII_THRESHOLD = 0.80
DEFAULT_CODEPAGE = 'cp037'

# ASCII printable range plus tab, line feed and carriage return
PRINTABLE_BYTES = frozenset(list(range(0x20, 0x7F)) + [0x09, 0x0A, 0x0D])

NEL = '\x85'


def is_probably_ascii(byte_buffer, threshold=ASCII_THRESHOLD):
    """
    Guess if a textual header is ASCII by counting printable bytes.
    """
    if not byte_buffer:
        return True

    count = sum(1 for b in byte_buffer if b in PRINTABLE_BYTES)
    ratio = count / len(byte_buffer)

    logger.debug('Textual header printable ratio: {0:.3f}'.format(ratio))

    return ratio > threshold


@lru_cache(maxsize=None)
def _legacy_table(codepage):
    """
    Translation table from an 8-bit code page to printable ASCII.
    Non-printable characters become spaces and NEL becomes a line feed.
    """
    table = bytearray(b' ' * 256)

    for code in range(256):
        char = bytes([code]).decode(codepage, errors='replace')
        if char == NEL:
            table[code] = 0x0A
        elif ' ' <= char <= '~':
            table[code] = ord(char)

    return bytes(table)


@dataclass(frozen=True)
class TextualHeader:
    """
    Decoded SEG-Y textual header.
    """
    text: str
    encoding: str

    @property
    def lines(self):
        """
        The header split into 80-column card images.
        """
        return [self.text[i:i + TEXT_LINE_LENGTH]
                for i in range(0, len(self.text), TEXT_LINE_LENGTH)]

    def __str__(self):
        return '\n'.join(self.lines)


def decode_textual_header(byte_buffer, ascii_threshold=ASCII_THRESHOLD,
                          codepage=DEFAULT_CODEPAGE):
    """
    Decode the raw textual header into a string.

    The buffer is copied verbatim if it looks like ASCII, otherwise it
    is converted byte by byte from the given EBCDIC code page. Invalid
    byte sequences are replaced, so this never fails.

    Parameters
    ----------
    byte_buffer : bytes
        Raw textual header (3200 bytes).
    ascii_threshold : float, default=0.80
        Minimum fraction of printable ASCII bytes (exclusive).
    codepage : str, default='cp037'
        Python codec of the legacy 8-bit encoding.

    Returns
    -------
    TextualHeader
    """
    if is_probably_ascii(byte_buffer, ascii_threshold):
        encoding = 'ascii'
        ascii_buffer = bytes(byte_buffer)
    else:
        encoding = codepage
        ascii_buffer = bytes(byte_buffer).translate(_legacy_table(codepage))

    logger.debug('Textual header encoding: {0}'.format(encoding))

    text = ascii_buffer.decode('utf-8', errors='replace')

    return TextualHeader(text=text, encoding=encoding)


@dataclass(frozen=True)
class MetadataHeader:
    """
    File level (reel) parameters from the SEG-Y binary header.
    """
    job_id: int
    line_number: int
    reel_number: int
    sample_format: SampleFormat
    samples_per_trace: int
    sample_interval_us: int

    @classmethod
    def from_bytes(cls, byte_buffer):
        """
        Parse the 400-byte binary header.

        Raises
        ------
        UnsupportedFormatError
            If the data sample format code is not supported.
        """
        header = unpack_struc(byte_buffer, metadata_struc)
        header['sample_format'] = SampleFormat.from_code(
            header.pop('format_code'))

        return cls(**header)

    @property
    def sample_width(self):
        return self.sample_format.width

    @property
    def delta(self):
        """
        Sample interval in seconds (None if not set).
        """
        if not self.sample_interval_us:
            return None
        return self.sample_interval_us * 1e-6


@dataclass(frozen=True)
class TraceHeader:
    """
    Selected fields of the 240-byte SEG-Y trace header.
    """
    trace_sequence_line: int
    trace_sequence_file: int
    field_record_number: int
    trace_number: int
    source_point_number: int
    ensemble_number: int
    trace_in_ensemble: int
    offset: int
    coord_scalar: int
    cdp_x: int
    cdp_y: int
    trace_sample_count: int
    trace_sample_interval_us: int
    year_data_recorded: int
    day_of_year: int
    hour_of_day: int
    minute_of_hour: int
    second_of_minute: int

    @classmethod
    def from_bytes(cls, byte_buffer):
        return cls(**unpack_struc(byte_buffer, trace_struc))

    def effective_sample_count(self, default):
        """
        Number of samples of the trace. A zero count in the trace
        header means the file default applies.
        """
        if self.trace_sample_count == 0:
            return default
        return self.trace_sample_count

    @property
    def cdp_coordinates(self):
        """
        CDP coordinates with the coordinate scalar applied: positive
        values are multipliers, negative values are divisors.
        """
        scalar = self.coord_scalar
        if scalar > 0:
            return (self.cdp_x * scalar, self.cdp_y * scalar)
        elif scalar < 0:
            return (self.cdp_x / -scalar, self.cdp_y / -scalar)
        return (self.cdp_x, self.cdp_y)

    @property
    def time(self):
        """
        Acquisition time, if recorded in the header as a valid date.
        """
        if not self.year_data_recorded or not self.day_of_year:
            return None

        try:
            return Date([self.year_data_recorded, self.day_of_year,
                         self.hour_of_day, self.minute_of_hour,
                         self.second_of_minute])
        except ValueError:
            # Fields that do not form a calendar date
            return None


@dataclass(frozen=True, eq=False)
class Trace:
    """
    A trace header with its decoded samples (read-only float32 array).
    """
    header: TraceHeader
    data: np.ndarray

    def __len__(self):
        return self.nsamp

    @property
    def nsamp(self):
        return len(self.data)

    @property
    def delta(self):
        """
        Trace sample interval in seconds (None if not set).
        """
        if not self.header.trace_sample_interval_us:
            return None
        return self.header.trace_sample_interval_us * 1e-6

    @property
    def duration(self):
        if self.delta is None or not self.nsamp:
            return None
        return (self.nsamp - 1) * self.delta


@dataclass(frozen=True, eq=False)
class SegyFile:
    """
    The decoded content of a whole SEG-Y file.
    """
    textual_header: TextualHeader
    metadata_header: MetadataHeader
    traces: Tuple[Trace, ...]

    def __len__(self):
        return len(self.traces)

    def __iter__(self):
        return iter(self.traces)

    def __getitem__(self, index):
        return self.traces[index]


class SegyReader(object):
    """
    Sequential reader over a SEG-Y byte source.

    The source can be a file path, a bytes buffer, an open binary file
    or a ByteStream. Blocks must be read in file order: textual header,
    metadata header and then traces.
    """
    def __init__(self, byte_stream, ascii_threshold=ASCII_THRESHOLD,
                 codepage=DEFAULT_CODEPAGE):

        self.ascii_threshold = ascii_threshold
        self.codepage = codepage

        if isinstance(byte_stream, ByteStream):
            self.stream = byte_stream
            self._owner = False
        else:
            self.stream = ByteStream()
            self.stream.ropen(byte_stream)
            self._owner = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """
        """
        if self._owner:
            self.stream.close()

    def _read_block(self, byte_num, what):
        """
        Read a block that must be complete.
        """
        outcome, byte_buffer = self.stream.fetch(byte_num)
        if outcome is not ReadOutcome.COMPLETE:
            raise TruncatedDataError(what, byte_num, len(byte_buffer))
        return byte_buffer

    def read_textual_header(self):
        """
        """
        byte_buffer = self._read_block(TEXT_HEADER_SIZE, 'textual header')
        return decode_textual_header(byte_buffer,
                                     ascii_threshold=self.ascii_threshold,
                                     codepage=self.codepage)

    def read_metadata_header(self):
        """
        """
        byte_buffer = self._read_block(METADATA_HEADER_SIZE,
                                       'metadata header')
        header = MetadataHeader.from_bytes(byte_buffer)

        logger.debug('Metadata header: format {0}, {1} samples, '
                     '{2} us'.format(header.sample_format.name,
                                     header.samples_per_trace,
                                     header.sample_interval_us))
        return header

    def read_trace_header(self):
        """
        Read the next trace header.

        Returns None if the stream ends exactly at a trace boundary.

        Raises
        ------
        TruncatedDataError
            If the stream ends within the trace header.
        """
        outcome, byte_buffer = self.stream.fetch(TRACE_HEADER_SIZE)

        if outcome is ReadOutcome.CLEAN_END:
            return None
        if outcome is ReadOutcome.TRUNCATED:
            raise TruncatedDataError('trace header', TRACE_HEADER_SIZE,
                                     len(byte_buffer))

        return TraceHeader.from_bytes(byte_buffer)

    def read_trace(self, sample_format, default_sample_count):
        """
        Read the next trace (header and samples).

        Parameters
        ----------
        sample_format : SampleFormat or int
            Data sample format of the file.
        default_sample_count : int
            Samples per trace to use when the trace header gives zero.

        Returns
        -------
        Trace or None
            None if the stream ends exactly at a trace boundary.
        """
        sample_format = SampleFormat.from_code(sample_format)

        header = self.read_trace_header()
        if header is None:
            return None

        nsamp = header.effective_sample_count(default_sample_count)
        byte_buffer = self._read_block(nsamp * sample_format.width,
                                       'trace data')

        data = decode_samples(sample_format, byte_buffer)
        data.flags.writeable = False

        logger.debug('Trace %s: %s samples',
                     header.trace_sequence_file, nsamp)

        return Trace(header=header, data=data)

    def read_all_traces(self, metadata_header):
        """
        Read traces until the end of the stream.

        Returns
        -------
        tuple of Trace
            Traces in file order.
        """
        traces = []

        while True:
            trace = self.read_trace(metadata_header.sample_format,
                                    metadata_header.samples_per_trace)
            if trace is None:
                break
            traces.append(trace)

        return tuple(traces)

    def read(self):
        """
        Decode the whole file from its first byte.
        """
        self.stream.goto(0)

        textual_header = self.read_textual_header()
        metadata_header = self.read_metadata_header()
        traces = self.read_all_traces(metadata_header)

        logger.info('Read {0} traces ({1})'.format(
            len(traces), metadata_header.sample_format.name))

        return SegyFile(textual_header=textual_header,
                        metadata_header=metadata_header,
                        traces=traces)


def segyread(input_data_source, ascii_threshold=ASCII_THRESHOLD,
             codepage=DEFAULT_CODEPAGE):
    """
    Read a SEG-Y file into memory.

    Parameters
    ----------
    input_data_source : str, os.PathLike, bytes, file object or ByteStream
        SEG-Y source. Open file objects are not closed.
    ascii_threshold : float, default=0.80
        Printable fraction above which the textual header is ASCII.
    codepage : str, default='cp037'
        EBCDIC code page of non-ASCII textual headers.

    Returns
    -------
    SegyFile

    Raises
    ------
    TransportError
        If the source cannot be read or ends within a block.
    UnsupportedFormatError
        If the sample format code is not supported.
    """
    with SegyReader(input_data_source, ascii_threshold=ascii_threshold,
                    codepage=codepage) as reader:
        return reader.read()


# Field tables: (name, struct format, size in bytes, zero-based offset)
metadata_struc = [('job_id', 'i', 4, 0),
                  ('line_number', 'i', 4, 4),
                  ('reel_number', 'i', 4, 8),
                  ('sample_interval_us', 'H', 2, 16),
                  ('samples_per_trace', 'H', 2, 20),
                  ('format_code', 'H', 2, 24)]

trace_struc = [('trace_sequence_line', 'i', 4, 0),
               ('trace_sequence_file', 'i', 4, 4),
               ('field_record_number', 'i', 4, 8),
               ('trace_number', 'i', 4, 12),
               ('source_point_number', 'i', 4, 16),
               ('ensemble_number', 'i', 4, 20),
               ('trace_in_ensemble', 'i', 4, 24),
               ('offset', 'i', 4, 36),
               ('coord_scalar', 'h', 2, 70),
               ('cdp_x', 'i', 4, 72),
               ('cdp_y', 'i', 4, 76),
               ('trace_sample_count', 'H', 2, 114),
               ('trace_sample_interval_us', 'H', 2, 116),
               ('year_data_recorded', 'H', 2, 158),
               ('day_of_year', 'H', 2, 160),
               ('hour_of_day', 'H', 2, 162),
               ('minute_of_hour', 'H', 2, 164),
               ('second_of_minute', 'H', 2, 166)]
