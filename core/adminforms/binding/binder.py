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

import logging

from crum import get_current_user
from django.core.exceptions import PermissionDenied
from django.db import transaction

from adminforms.assembly.assembler import is_authorized
from adminforms.config.registry import Registry, registry as default_registry
from adminforms.rendering.forms import FormBundle

logger = logging.getLogger(__name__)


def set_audit_fields(instance, user, is_new: bool) -> None:
  """Auto-fill audit fields if present."""
  if user is None or not getattr(user, "is_authenticated", False):
    return
  if hasattr(instance, "updated_by"):
    instance.updated_by = user
  if is_new and hasattr(instance, "created_by"):
    instance.created_by = user


def ensure_authorized(model, user, action: str, record=None, registry: Registry = default_registry) -> None:
  """Raise PermissionDenied when the model's `authorized` option rejects the user."""
  if not is_authorized(model, user, action, record=record, registry=registry):
    logger.warning("Denied %s on %s for user %s", action, model.__name__, user)
    raise PermissionDenied(f"Not authorized to {action} {model._meta.verbose_name}.")


def save_bundle(bundle: FormBundle, user=None, registry: Registry = default_registry):
  """
  Persist a validated bundle in one transaction.

  Order:
    1) main record (only fields present on the form are assigned)
    2) forward many-to-many and reverse associations
    3) nested formsets (create / update / destroy of child records)

  Returns the saved instance. The bundle must have been validated.
  """
  if not bundle.is_bound:
    raise ValueError("Cannot save an unbound form.")
  if bundle.errors:
    raise ValueError("Cannot save a form with validation errors.")

  model = bundle.assembled.model
  user = user or get_current_user()
  is_new = bundle.assembled.is_new
  ensure_authorized(model, user, bundle.assembled.action, record=bundle.instance, registry=registry)

  with transaction.atomic():
    instance = bundle.form.save(commit=False)
    set_audit_fields(instance, user, is_new)
    instance.save()
    bundle.form.save_m2m()
    bundle.form.save_relations()

    for name, formset in bundle.formsets.items():
      formset.instance = instance
      children = formset.save(commit=False)
      for child in children:
        set_audit_fields(child, user, child.pk is None)
        child.save()
      formset.save_m2m()
      for form in formset.saved_forms:
        form.save_relations()
      for child in formset.deleted_objects:
        child.delete()
      logger.debug(
        "Nested %s on %s: %d saved, %d deleted",
        name, model.__name__, len(children), len(formset.deleted_objects),
      )

  logger.info("%s %s #%s", "Created" if is_new else "Updated", model.__name__, instance.pk)
  return instance
