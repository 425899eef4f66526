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
Testing code for the time library
"""
import pytest

from seglab.libutils.time import (Date, from_ordinal_day, leap_check,
                                  to_ordinal_day)


def test_leap_check():
    assert leap_check(2024)
    assert leap_check(2000)
    assert not leap_check(1900)
    assert not leap_check(2023)


def test_ordinal_day():
    assert from_ordinal_day(2023, 1) == (1, 1)
    assert from_ordinal_day(2023, 60) == (3, 1)
    assert from_ordinal_day(2024, 60) == (2, 29)
    assert from_ordinal_day(2024, 366) == (12, 31)
    assert to_ordinal_day(2024, 3, 1) == 61

    with pytest.raises(ValueError):
        from_ordinal_day(2023, 366)

    with pytest.raises(ValueError):
        from_ordinal_day(2023, 0)


def test_date_from_ordinal():
    date = Date([2024, 60, 12, 30, 15])
    assert date.get_date() == [2024, 2, 29, 12, 30, 15.0]
    assert date.ordinal_day == 60
    assert repr(date) == '2024-02-29T12:30:15.000000Z'
    assert date == Date([2024, 2, 29, 12, 30, 15])
    assert date == (2024, 2, 29, 12, 30, 15.)


def test_date_check():
    with pytest.raises(ValueError):
        Date([2024, 10, 25, 0, 0])

    with pytest.raises(ValueError):
        Date('2024-01-01')
