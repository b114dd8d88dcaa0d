"""
adminforms - Configuration-driven Admin Forms
Copyright © 2025 Ilona Tag

This file is part of adminforms.

adminforms is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

adminforms is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with adminforms. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/elevata>.
"""

import datetime

import pytest
from django.utils import timezone

from adminforms import constants as c
from adminforms.assembly.assembler import assemble_form
from adminforms.exceptions import ConfigurationError
from adminforms.formats import format_value, parse_value, resolve_format
from sample.models import FieldTest


# ---------------------------------------------------------------------
# Format resolution
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
  "type_tag,date_format,strftime_format,expected",
  [
    (c.DATE, None, None, "%B %d, %Y"),
    (c.DATETIME, None, None, "%B %d, %Y %H:%M"),
    (c.TIME, None, None, "%H:%M"),
    (c.DATE, "default", None, "%Y-%m-%d"),
    (c.DATE, "short", None, "%b %d"),
    (c.DATETIME, "default", None, "%a, %d %b %Y %H:%M:%S"),
    (c.DATETIME, "short", None, "%d %b %H:%M"),
    (c.DATE, ":long", None, "%B %d, %Y"),
    (c.DATE, "short", "%d/%m/%Y", "%d/%m/%Y"),
    (c.TIME, None, "%I:%M %p", "%I:%M %p"),
    (c.STRING, "long", None, None),
  ],
)
def test_resolve_format(type_tag, date_format, strftime_format, expected):
  assert resolve_format(type_tag, date_format, strftime_format) == expected


def test_unknown_named_format_raises():
  with pytest.raises(ConfigurationError, match="Unknown date_format 'medium'"):
    resolve_format(c.DATE, "medium")


def test_assembled_fields_carry_their_format(registry, db):
  registry.model(FieldTest).edit.configure("date_field", date_format="default")
  registry.model(FieldTest).edit.configure("datetime_field", strftime_format="%Y-%m-%dT%H:%M")
  assembled = assemble_form(FieldTest, "create")
  assert assembled.field("date_field").format == "%Y-%m-%d"
  assert assembled.field("datetime_field").format == "%Y-%m-%dT%H:%M"
  assert assembled.field("time_field").format == "%H:%M"
  assert assembled.field("string_field").format is None


def test_type_level_date_format(registry, db):
  registry.defaults.base.fields_of_type(c.DATE, date_format="short")
  assert assemble_form(FieldTest, "create").field("date_field").format == "%b %d"


# ---------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------

def test_parse_with_the_configured_format():
  assert parse_value("January 02, 2024", c.DATE, "%B %d, %Y") == datetime.date(2024, 1, 2)
  assert parse_value("14:30", c.TIME, "%H:%M") == datetime.time(14, 30)
  assert parse_value("March 05, 2024 08:15", c.DATETIME, "%B %d, %Y %H:%M") == datetime.datetime(2024, 3, 5, 8, 15)


def test_parse_falls_back_to_a_lenient_parser():
  assert parse_value("2024-01-02", c.DATE, "%B %d, %Y") == datetime.date(2024, 1, 2)
  assert parse_value("2 Jan 2024 10:00", c.DATETIME, "%d/%m/%Y") == datetime.datetime(2024, 1, 2, 10, 0)


def test_parse_aware_input_becomes_naive_in_the_current_timezone(settings):
  settings.TIME_ZONE = "UTC"
  parsed = parse_value("2024-01-02T10:00:00+02:00", c.DATETIME, None)
  assert timezone.is_naive(parsed)
  assert parsed == datetime.datetime(2024, 1, 2, 8, 0)


def test_unparseable_input_raises_value_error():
  with pytest.raises(ValueError):
    parse_value("not a date", c.DATE, "%B %d, %Y")


# ---------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------

def test_format_value():
  assert format_value(datetime.date(2024, 1, 2), c.DATE, "%B %d, %Y") == "January 02, 2024"
  assert format_value(datetime.time(9, 5), c.TIME, "%H:%M") == "09:05"
  assert format_value(None, c.DATE, "%B %d, %Y") == ""
  assert format_value(42, c.INTEGER, None) == "42"


def test_format_aware_datetime_uses_local_time(settings):
  settings.TIME_ZONE = "Europe/Berlin"
  value = datetime.datetime(2024, 1, 2, 10, 0, tzinfo=datetime.timezone.utc)
  assert format_value(value, c.DATETIME, "%H:%M") == "11:00"
