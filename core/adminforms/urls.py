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

import logging

from django.conf import settings
from django.urls import path
from django.utils.text import slugify
from django.views.generic import TemplateView

from generic import AdminFormView
from adminforms.config.registry import registry

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# Configuration (optional, read from settings.ADMINFORMS_UI)
# ------------------------------------------------------------
CFG = getattr(settings, "ADMINFORMS_UI", {})
ORDER = CFG.get("order", [])
PATHS = CFG.get("paths", {})

# ------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------
def make_view(model):
  """Dynamically create an admin form view class for the given model."""
  return type(f"{model.__name__}AdminFormView", (AdminFormView,), {"model": model})

def path_segment_for(model):
  """Derive URL segment from config or model verbose_name_plural."""
  custom = PATHS.get(model.__name__)
  return custom.strip("/") if custom else slugify(model._meta.verbose_name_plural)

def sort_models(models):
  """Return models sorted by ORDER, then alphabetically."""
  by_name = {m.__name__: m for m in models}
  ordered = [by_name[n] for n in ORDER if n in by_name]
  remaining = sorted(
    [m for n, m in by_name.items() if n not in set(ORDER)],
    key=lambda m: m._meta.verbose_name_plural.lower(),
  )
  return ordered + remaining

# ------------------------------------------------------------
# Build urlpatterns dynamically
# ------------------------------------------------------------
models_sorted = sort_models(registry.registered_models())

urlpatterns = [
  path("", TemplateView.as_view(template_name="adminforms/index.html", extra_context={"title": "Dashboard"}), name="adminforms_index"),
]

for model in models_sorted:
  model_name = model._meta.model_name
  seg = path_segment_for(model)
  view_cls = make_view(model)

  urlpatterns += [
    path(f"{seg}/", view_cls.as_view(action="list"), name=f"{model_name}_list"),
    path(f"{seg}/new/", view_cls.as_view(action="new"), name=f"{model_name}_create"),
    path(f"{seg}/<int:pk>/edit/", view_cls.as_view(action="edit"), name=f"{model_name}_edit"),
    path(f"{seg}/<int:pk>/delete/", view_cls.as_view(action="delete"), name=f"{model_name}_delete"),
  ]

logger.debug("Registered admin form routes for: %s", ", ".join(m.__name__ for m in models_sorted))
