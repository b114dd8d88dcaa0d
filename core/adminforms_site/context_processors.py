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

from django.conf import settings
from django.urls import reverse, NoReverseMatch

from adminforms.config.registry import registry


def _safe_reverse(name: str) -> str:
  try:
    return reverse(name)
  except NoReverseMatch:
    return ""

def app_menu(request):
  """
  Main menu built from the models served by adminforms.
  Sort order and card descriptions can be configured in settings.ADMINFORMS_UI.
  Expected URL-Names: <model_name>_list.
  """
  cfg = getattr(settings, "ADMINFORMS_UI", {})
  order = cfg.get("order", [])
  descriptions = cfg.get("descriptions", {})

  models = registry.registered_models()
  by_name = {m.__name__: m for m in models}
  ordered = [by_name[n] for n in order if n in by_name]
  remaining = sorted(
    [m for n, m in by_name.items() if n not in set(order)],
    key=lambda m: m._meta.verbose_name_plural.lower()
  )

  items = []
  for model in ordered + remaining:
    label = model._meta.verbose_name_plural.title()
    href = _safe_reverse(f"{model._meta.model_name}_list")
    if not href:
      continue
    items.append({
      "label": label,
      "href": href,
      "card_text": descriptions.get(model.__name__, f"Manage {label.lower()}"),
    })

  return {"MAIN_MENU": items}
