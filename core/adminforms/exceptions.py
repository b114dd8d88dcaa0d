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

from django.core.exceptions import ImproperlyConfigured


class ConfigurationError(ImproperlyConfigured):
  """Developer-facing error in the form configuration."""


class UnknownFieldError(ConfigurationError):
  def __init__(self, model_name: str, field_name: str):
    self.model_name = model_name
    self.field_name = field_name
    super().__init__(
      f"Unknown field {field_name!r} configured for model {model_name!r}."
    )


class UnsupportedFieldTypeError(ConfigurationError):
  def __init__(self, type_tag, where: str = ""):
    self.type_tag = type_tag
    suffix = f" ({where})" if where else ""
    super().__init__(f"Unsupported field type {type_tag!r}{suffix}.")
