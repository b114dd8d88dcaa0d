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

from django.shortcuts import render, get_object_or_404, redirect
from django.views import View
from django.urls import reverse
from django.contrib import messages
from django.utils.text import capfirst
from django.utils.translation import gettext_lazy as _
from django.http import HttpResponseNotFound
from django.contrib.auth.mixins import LoginRequiredMixin
from django.forms import widgets as wdg
from crum import get_current_user

from adminforms.assembly.assembler import display_value, is_authorized, list_columns
from adminforms.binding.binder import ensure_authorized, save_bundle
from adminforms.config.registry import registry
from adminforms.exceptions import ConfigurationError
from adminforms.rendering.forms import build_bundle
from adminforms.rendering.renderer import render_form

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# Utility helper
# ------------------------------------------------------------
def display_key(*parts):
  """Build a human-friendly composite key; ignores empty parts and casts to str."""
  cleaned = []
  for p in parts:
    if p is None:
      continue
    s = str(p).strip()
    if s:
      cleaned.append(s)
  return " · ".join(cleaned)

# ------------------------------------------------------------
# Admin form base view
# ------------------------------------------------------------
class AdminFormView(LoginRequiredMixin, View):
  """List / create / edit / delete pages driven by the form configuration."""
  redirect_field_name = "next"

  model = None
  template_list = "adminforms/list.html"
  template_form = "adminforms/form.html"
  template_confirm_delete = "adminforms/confirm_delete.html"
  success_url = None
  action = "list"

  # --------------------------------------------------
  # Dispatch routing
  # --------------------------------------------------
  def dispatch(self, request, *args, **kwargs):
    """Dispatch request by 'action' name."""
    if not request.user.is_authenticated:
      return self.handle_no_permission()

    self.action = kwargs.pop("action", self.action)
    pk = kwargs.get("pk")

    if request.method not in ("GET", "POST"):
      return HttpResponseNotFound(f"Invalid method '{request.method}' for {self.__class__.__name__}")

    if self.action == "list" and request.method == "GET":
      return self.list(request)
    if self.action == "new":
      return self.edit(request, None)
    if self.action == "edit":
      return self.edit(request, pk)
    if self.action == "delete":
      return self.delete(request, pk)

    return HttpResponseNotFound(f"Invalid action '{self.action}' for {self.__class__.__name__}")

  # --------------------------------------------------
  # Utility helpers
  # --------------------------------------------------
  def get_user(self, request):
    return get_current_user() or request.user

  def get_queryset(self):
    return self.model._default_manager.all()

  def url_for(self, suffix, pk=None):
    kwargs = {"pk": pk} if pk is not None else {}
    return reverse(f"{self.model._meta.model_name}_{suffix}", kwargs=kwargs)

  def get_success_url(self):
    if self.success_url:
      return self.success_url
    return self.url_for("list")

  def model_label(self):
    label = registry.model_options(self.model).get("label")
    return str(label or capfirst(self.model._meta.verbose_name))

  def check_authorized(self, request, action, record=None):
    ensure_authorized(self.model, self.get_user(request), action, record=record)

  def _apply_autofocus(self, form):
    """
    Set 'autofocus' on the first truly editable field in a full-page form.

    Rules:
    - disabled fields are skipped
    - hidden and checkbox fields are skipped
    - widgets with a readonly/disabled attribute are skipped
    """
    for name, field in form.fields.items():
      if getattr(field, "disabled", False):
        continue

      widget = field.widget
      if isinstance(widget, (wdg.HiddenInput, wdg.CheckboxInput)):
        continue
      if widget.attrs.get("readonly") or widget.attrs.get("disabled"):
        continue

      widget.attrs["autofocus"] = True
      break

    return form

  # --------------------------------------------------
  # Pages
  # --------------------------------------------------
  def list(self, request):
    """Render the list page with the configured `list` columns."""
    user = self.get_user(request)
    self.check_authorized(request, "list")

    columns = list_columns(self.model, user=user, view=self)
    rows = []
    for obj in self.get_queryset().order_by("pk"):
      rows.append({
        "object": obj,
        "values": [display_value(obj, col) for col in columns],
        "edit_url": self.url_for("edit", obj.pk),
        "delete_url": self.url_for("delete", obj.pk),
      })

    context = {
      "model": self.model,
      "param_key": self.model._meta.model_name,
      "fields": columns,
      "rows": rows,
      "title": capfirst(self.model._meta.verbose_name_plural),
      "new_url": self.url_for("create"),
      "can_create": is_authorized(self.model, user, "new"),
    }
    return render(request, self.template_list, context)

  def edit(self, request, pk=None):
    obj = get_object_or_404(self.get_queryset(), pk=pk) if pk else None
    action = "edit" if obj is not None else "new"
    user = self.get_user(request)
    self.check_authorized(request, action, obj)

    data = request.POST if request.method == "POST" else None
    files = request.FILES if request.method == "POST" else None

    try:
      bundle = build_bundle(self.model, action, record=obj, data=data, files=files, user=user, view=self)

      if request.method == "POST" and bundle.is_valid():
        instance = save_bundle(bundle, user=user)
        if obj is None:
          messages.success(request, _("%(model)s successfully created") % {"model": self.model_label()})
        else:
          messages.success(request, _("%(model)s successfully updated") % {"model": self.model_label()})
        if "_continue" in request.POST:
          return redirect(self.url_for("edit", instance.pk))
        return redirect(self.get_success_url())

      if request.method == "POST":
        messages.error(request, _("%(model)s failed to be saved") % {"model": self.model_label()})

      self._apply_autofocus(bundle.form)
      form_body = render_form(bundle, request)
    except ConfigurationError:
      logger.exception("Failed to render %s form for %s", action, self.model.__name__)
      raise

    if obj is None:
      title = _("New %(model)s") % {"model": self.model_label()}
    else:
      title = _("Edit %(model)s '%(object)s'") % {"model": self.model_label(), "object": obj}

    context = {
      "bundle": bundle,
      "form": bundle.form,
      "form_body": form_body,
      "object": obj,
      "model": self.model,
      "title": title,
      "action_url": request.path,
      "cancel_url": self.url_for("list"),
    }
    return render(request, self.template_form, context)

  def delete(self, request, pk):
    obj = get_object_or_404(self.get_queryset(), pk=pk)
    self.check_authorized(request, "delete", obj)
    if request.method == "POST":
      obj.delete()
      logger.info("Deleted %s #%s", self.model.__name__, pk)
      messages.success(request, _("%(model)s successfully deleted") % {"model": self.model_label()})
      return redirect(self.get_success_url())
    context = {
      "object": obj,
      "model": self.model,
      "title": _("Confirm Deletion"),
      "cancel_url": self.url_for("list"),
    }
    return render(request, self.template_confirm_delete, context)
