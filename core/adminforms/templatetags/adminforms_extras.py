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

from django import template

from adminforms.rendering.renderer import render_field as _render_field

register = template.Library()


@register.filter
def get(d, key):
  """Dict item lookup: {{ dict|get:key }}."""
  try:
    return d.get(key)
  except AttributeError:
    return None


@register.filter
def verbose_name(model) -> str:
  return model._meta.verbose_name


@register.simple_tag(takes_context=True)
def render_field(context, bundle, fd, form=None):
  """Render one field descriptor: {% render_field bundle fd [form] %}."""
  return _render_field(bundle, fd, form=form, request=context.get("request"))


@register.simple_tag
def field_value(obj, name):
  """Display value of a model attribute for list pages."""
  value = getattr(obj, name, None)
  if value is None or value == "":
    return "-"
  getter = getattr(obj, f"get_{name}_display", None)
  if callable(getter):
    return getter()
  return value
