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
Time and date functionalities
"""


class Date(object):
    """
    Calendar date (UTC) with sub-second precision.
    """

    def __init__(self, date=None):
        """
        """
        self.year = None
        self.month = None
        self.day = None
        self.hour = None
        self.minute = None
        self.second = None

        if date is not None:
            self.set_date(date)

    def __eq__(self, value):
        """
        """
        if isinstance(value, Date):
            value = value.get_date()
        elif isinstance(value, tuple):
            value = list(value)

        return self.get_date() == value

    def __repr__(self):
        """
        """
        return self.get_date(dtype='string')

    @property
    def ordinal_day(self):
        """
        """
        return to_ordinal_day(self.year, self.month, self.day)

    def set_date(self, date):
        """
        Accepts a list or tuple in calendar format
        [year, month, day, hour, minute, second] or in ordinal
        format [year, day_of_year, hour, minute, second].
        """
        if not isinstance(date, (list, tuple)):
            raise ValueError('Format not recognized')

        if len(date) == 6:
            self.year = int(date[0])
            self.month = int(date[1])
            self.day = int(date[2])
            self.hour = int(date[3])
            self.minute = int(date[4])
            self.second = float(date[5])

        elif len(date) == 5:
            self.year = int(date[0])
            self.hour = int(date[2])
            self.minute = int(date[3])
            self.second = float(date[4])
            (self.month, self.day) = from_ordinal_day(self.year,
                                                      int(date[1]))

        else:
            raise ValueError('Format not recognized')

        self._selfcheck()

    def get_date(self, dtype='list'):
        """
        """
        if dtype in ('l', 'list'):
            date = [self.year, self.month, self.day,
                    self.hour, self.minute, self.second]

        elif dtype in ('s', 'str', 'string', 'iso8601'):
            date = write_iso8601_date(self.year, self.month, self.day,
                                      self.hour, self.minute, self.second)

        else:
            raise ValueError('Format not recognized')

        return date

    def _selfcheck(self):
        """
        """
        if self.year < 1:
            raise ValueError('Year must be >= 1')

        if self.month < 1 or self.month > 12:
            raise ValueError('Month must be between 1 and 12')

        if self.day < 1 or self.day > 31:
            raise ValueError('Day must be between 1 and 31')

        if self.hour < 0 or self.hour > 23:
            raise ValueError('Hours must be between 0 and 23')

        if self.minute < 0 or self.minute > 59:
            raise ValueError('Minutes must be between 0 and 59')

        if self.second < 0 or self.second > 60:
            raise ValueError('Seconds must be between 0 and 60')


def leap_check(year):
    """
    Check if leap year.
    """
    c0 = (year % 4 == 0)
    c1 = (year % 100 != 0)
    c2 = (year % 400 == 0)

    return (c0 and c1) or c2


def days_in_month(year):
    """
    Cumulative number of days at the end of each month.
    """
    if leap_check(year):
        mdays = [31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366]
    else:
        mdays = [31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365]

    return mdays


def from_ordinal_day(year, day):
    """
    Converts an ordinal day of the year to the corresponding
    (month, day) pair.

    Raises
    ------
    ValueError
        If the day is outside the given year.
    """
    mdays = days_in_month(year)

    if day < 1 or day > mdays[-1]:
        raise ValueError('Day of year must be between 1 and {0}'.format(
            mdays[-1]))

    for m, d in enumerate(mdays):
        if day <= d:
            if m > 0:
                day -= mdays[m - 1]
            return (m + 1, day)


def to_ordinal_day(year, month, day):
    """
    Converts a given month and day to the ordinal day of the year.
    """
    mdays = days_in_month(year)

    if month == 1:
        return day
    else:
        return mdays[month - 2] + day


def write_iso8601_date(year, month, day, hour, minute, second, timezone='Z'):
    """
    Converts year, month, day, hour, minute, and second to ISO 8601 format.
    """
    iso8601_str = "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:09.6f}{:s}".format(
        year, month, day, hour, minute, second, timezone
    )
    return iso8601_str
