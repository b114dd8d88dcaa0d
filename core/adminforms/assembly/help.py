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

from django.utils.translation import gettext as _

from adminforms import constants as c


def length_hint(schema) -> str:
  """
  Length part of the default help text:
    exact           -> "Length of 3"
    minimum+maximum -> "Length of 1-50"
    maximum         -> "Length up to 50"
    minimum         -> "Length of at least 1"
  Only string/text columns carry length hints.
  """
  if schema is None or schema.type_tag not in (c.STRING, c.TEXT):
    return ""
  if schema.exact_length is not None:
    return _("Length of %(n)s") % {"n": schema.exact_length}
  if schema.min_length is not None and schema.max_length is not None:
    return _("Length of %(min)s-%(max)s") % {"min": schema.min_length, "max": schema.max_length}
  if schema.max_length is not None:
    return _("Length up to %(n)s") % {"n": schema.max_length}
  if schema.min_length is not None:
    return _("Length of at least %(n)s") % {"n": schema.min_length}
  return ""


def default_help(required: bool, schema) -> str:
  """'Required. Length up to 100.' plus the model field's help_text."""
  parts = [_("Required") if required else _("Optional")]
  hint = length_hint(schema)
  if hint:
    parts.append(hint)
  text = ". ".join(parts) + "."
  extra = getattr(schema, "help_text", "") or ""
  if extra:
    text = f"{text} {extra}"
  return text
