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
Builders of synthetic SEG-Y images for testing
"""
import struct

import pytest

# Trace header fields: name -> (struct format, first byte, 1-indexed)
TRACE_FIELDS = {'trace_sequence_line': ('i', 1),
                'trace_sequence_file': ('i', 5),
                'field_record_number': ('i', 9),
                'trace_number': ('i', 13),
                'source_point_number': ('i', 17),
                'ensemble_number': ('i', 21),
                'trace_in_ensemble': ('i', 25),
                'offset': ('i', 37),
                'coord_scalar': ('h', 71),
                'cdp_x': ('i', 73),
                'cdp_y': ('i', 77),
                'trace_sample_count': ('H', 115),
                'trace_sample_interval_us': ('H', 117),
                'year_data_recorded': ('H', 159),
                'day_of_year': ('H', 161),
                'hour_of_day': ('H', 163),
                'minute_of_hour': ('H', 165),
                'second_of_minute': ('H', 167)}

SAMPLE_PACKING = {2: '>{0}i', 3: '>{0}h', 5: '>{0}f', 8: '>{0}b'}


class SegyBuilder(object):
    """
    Pack the blocks of a SEG-Y file.
    """

    @staticmethod
    def textual_header(text='C 1 SEGLAB TEST FILE', codepage=None):
        text = text.ljust(3200)[:3200]
        return text.encode(codepage or 'ascii')

    @staticmethod
    def metadata_header(job_id=1, line_number=2, reel_number=3,
                        sample_interval_us=4000, samples_per_trace=4,
                        format_code=3):
        buf = bytearray(400)
        struct.pack_into('>iii', buf, 0, job_id, line_number, reel_number)
        struct.pack_into('>H', buf, 16, sample_interval_us)
        struct.pack_into('>H', buf, 20, samples_per_trace)
        struct.pack_into('>H', buf, 24, format_code)
        return bytes(buf)

    @staticmethod
    def trace_header(**fields):
        buf = bytearray(240)
        for name, value in fields.items():
            fmt, byte = TRACE_FIELDS[name]
            struct.pack_into('>' + fmt, buf, byte - 1, value)
        return bytes(buf)

    @staticmethod
    def samples(values, format_code=3):
        return struct.pack(SAMPLE_PACKING[format_code].format(len(values)),
                           *values)

    @classmethod
    def trace(cls, values, format_code=3, **fields):
        return cls.trace_header(**fields) + cls.samples(values, format_code)

    @classmethod
    def image(cls, traces=(), text='C 1 SEGLAB TEST FILE', **metadata):
        return (cls.textual_header(text) + cls.metadata_header(**metadata) +
                b''.join(traces))


@pytest.fixture
def segy():
    return SegyBuilder
