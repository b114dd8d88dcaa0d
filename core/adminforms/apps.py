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

from django.apps import AppConfig


class AdminformsConfig(AppConfig):
  default_auto_field = "django.db.models.BigAutoField"
  name = "adminforms"
  verbose_name = "Admin forms"

  def ready(self):
    from adminforms.config.loader import load_config
    from adminforms.config.registry import registry

    load_config(registry)
