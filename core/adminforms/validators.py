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

from django.core.validators import BaseValidator, MaxLengthValidator, MinLengthValidator
from django.utils.deconstruct import deconstructible
from django.utils.translation import ngettext_lazy


@deconstructible
class ExactLengthValidator(BaseValidator):
  """Value must have exactly `limit_value` characters."""

  message = ngettext_lazy(
    "Ensure this value has exactly %(limit_value)d character (it has %(show_value)d).",
    "Ensure this value has exactly %(limit_value)d characters (it has %(show_value)d).",
    "limit_value",
  )
  code = "exact_length"

  def compare(self, a, b):
    return a != b

  def clean(self, x):
    return len(x)


def length_bounds(validators, max_length=None):
  """
  Collect (minimum, maximum, exact) from a field's validators.

  The maximum is the smaller of the column size and any declared
  MaxLengthValidator.
  """
  minimum = None
  maximum = max_length
  exact = None

  for v in validators or ():
    # DecimalValidator, URLValidator, ... carry no limit_value
    limit = getattr(v, "limit_value", None)
    if limit is None or callable(limit):
      continue
    if isinstance(v, ExactLengthValidator):
      exact = limit
    elif isinstance(v, MinLengthValidator):
      minimum = limit if minimum is None else max(minimum, limit)
    elif isinstance(v, MaxLengthValidator):
      maximum = limit if maximum is None else min(maximum, limit)

  return minimum, maximum, exact
