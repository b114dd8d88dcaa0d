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

from __future__ import annotations

import datetime
from typing import Optional

from dateutil import parser as date_parser
from django.utils import timezone

from adminforms import constants as c
from adminforms.exceptions import ConfigurationError

"""
Input formats for date, datetime and time fields.

A field's effective format is, in order:
  - strftime_format option (explicit pattern)
  - date_format option (named: default / long / short)
  - the type's default (long for date/datetime, %H:%M for time)
"""


def resolve_format(type_tag: str, date_format: Optional[str] = None,
                   strftime_format: Optional[str] = None) -> Optional[str]:
  if type_tag not in (c.DATE, c.DATETIME, c.TIME):
    return None

  if strftime_format:
    return strftime_format

  if type_tag == c.TIME:
    return c.DEFAULT_TIME_FORMAT

  named = c.DATE_FORMATS if type_tag == c.DATE else c.DATETIME_FORMATS
  key = date_format or (c.DEFAULT_DATE_FORMAT if type_tag == c.DATE else c.DEFAULT_DATETIME_FORMAT)
  key = str(key).lstrip(":")
  try:
    return named[key]
  except KeyError as exc:
    available = ", ".join(sorted(named))
    raise ConfigurationError(
      f"Unknown date_format {key!r} for {type_tag} field. Available formats: {available}."
    ) from exc


def parse_value(raw: str, type_tag: str, fmt: Optional[str]):
  """
  Parse user input with `fmt`; fall back to a lenient parse.

  Returns a naive datetime for datetime fields (the form layer attaches
  the current timezone), a date for date fields and a time for time
  fields. Raises ValueError when neither parse succeeds.
  """
  raw = (raw or "").strip()
  parsed = None
  if fmt:
    try:
      parsed = datetime.datetime.strptime(raw, fmt)
    except ValueError:
      parsed = None

  if parsed is None:
    try:
      parsed = date_parser.parse(raw)
    except (ValueError, OverflowError) as exc:
      raise ValueError(f"Could not parse {raw!r} as {type_tag}") from exc
    if timezone.is_aware(parsed):
      parsed = timezone.make_naive(parsed, timezone.get_current_timezone())

  if type_tag == c.DATE:
    return parsed.date()
  if type_tag == c.TIME:
    return parsed.time()
  return parsed


def format_value(value, type_tag: str, fmt: Optional[str]) -> str:
  """Format a stored value for display in an input or read-only field."""
  if value is None or value == "":
    return ""
  if fmt and isinstance(value, (datetime.date, datetime.time)):
    if isinstance(value, datetime.datetime) and timezone.is_aware(value):
      value = timezone.localtime(value)
    return value.strftime(fmt)
  return str(value)
