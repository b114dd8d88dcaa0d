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

import copy
from typing import Dict, Optional

from django import forms
from django.core.exceptions import ObjectDoesNotExist
from django.forms import inlineformset_factory
from django.forms.models import model_to_dict

from adminforms import constants as c
from adminforms.assembly.assembler import assemble_form
from adminforms.assembly.descriptors import AssembledForm, FieldDescriptor
from adminforms.config.registry import Registry, registry as default_registry
from adminforms.rendering.widgets import build_form_field


class AdminModelForm(forms.ModelForm):
  """
  ModelForm built from an AssembledForm.

  Only fields present here are ever assigned to the instance; read-only,
  hidden and inaccessible fields never become form fields.
  """
  assembled: Optional[AssembledForm] = None
  relation_fields: tuple = ()

  def __init__(self, *args, **kwargs):
    super().__init__(*args, **kwargs)
    self.descriptors = self.get_descriptors()
    self.sync_fields()

    is_new = self.instance.pk is None
    for fd in self.descriptors.fields:
      if fd.name not in self.fields:
        continue
      if is_new and fd.default_value is not None:
        self.initial[fd.name] = fd.default_value
      elif not is_new and fd.name in self.relation_fields:
        self.initial[fd.name] = self._relation_initial(fd)

  def get_descriptors(self) -> AssembledForm:
    return self.assembled

  def sync_fields(self) -> None:
    """Hook for forms whose descriptors differ from the class template."""

  def _relation_initial(self, fd: FieldDescriptor):
    if fd.type == c.HAS_ONE:
      try:
        return getattr(self.instance, fd.name).pk
      except ObjectDoesNotExist:
        return None
    return [o.pk for o in getattr(self.instance, fd.name).all()]

  def save_relations(self) -> None:
    """Write reverse associations (has-many / has-one) after the instance is saved."""
    for name in self.relation_fields:
      fd = self.descriptors.field(name)
      value = self.cleaned_data.get(name)
      if fd.type == c.HAS_ONE:
        if value is not None:
          setattr(value, fd.schema.inverse_fk_name, self.instance)
          value.save()
        continue
      getattr(self.instance, name).set(value or [])


class NestedModelForm(AdminModelForm):
  """
  Child form inside a nested formset; descriptors are bound to its own record.

  The class fields come from a template assembled on a blank record, so
  each row re-syncs its fields with its own descriptors: fields hidden for
  this record are dropped (and never assigned), fields shown only for this
  record are added.
  """
  nested_exclude: tuple = ()
  assembly_kwargs: dict = {}

  def get_descriptors(self) -> AssembledForm:
    param_key = (self.prefix or "").replace("-", "_")
    return assemble_form(
      type(self.instance),
      "nested",
      record=self.instance,
      exclude=self.nested_exclude,
      param_key=param_key,
      **self.assembly_kwargs,
    )

  def sync_fields(self) -> None:
    wanted = {
      fd.name: fd for fd in self.descriptors.fields
      if not fd.read_only and not fd.is_nested
    }
    # pk, inline FK and DELETE are added by the formset after __init__
    dropped = [name for name in self.fields if name not in wanted]
    for name in dropped:
      del self.fields[name]

    added = []
    is_new = self.instance.pk is None
    for name, fd in wanted.items():
      if name not in self.fields:
        self.fields[name] = build_form_field(fd, is_new=is_new)
        added.append(fd)

    self.relation_fields = tuple(n for n, fd in wanted.items() if fd.schema.is_reverse)

    if not dropped and not added:
      return

    meta_fields = [n for n in (self._meta.fields or []) if n not in dropped]
    meta_fields += [fd.name for fd in added if not fd.schema.is_reverse and fd.name not in meta_fields]
    self._meta = copy.copy(self._meta)
    self._meta.fields = meta_fields

    concrete = [fd.name for fd in added if not fd.schema.is_reverse]
    if concrete and not is_new:
      for name, value in model_to_dict(self.instance, fields=concrete).items():
        self.initial.setdefault(name, value)


def build_form_class(assembled: AssembledForm, base=AdminModelForm, attrs: Optional[dict] = None):
  """Create a ModelForm class whose fields mirror the assembled descriptors."""
  declared = {}
  meta_fields = []
  relation_fields = []

  for fd in assembled.fields:
    if fd.read_only or fd.is_nested:
      continue
    declared[fd.name] = build_form_field(fd, is_new=assembled.is_new)
    if fd.schema.is_reverse:
      relation_fields.append(fd.name)
    else:
      meta_fields.append(fd.name)

  meta = type("Meta", (), {"model": assembled.model, "fields": meta_fields})
  class_attrs = {
    "Meta": meta,
    "assembled": assembled,
    "relation_fields": tuple(relation_fields),
    **declared,
    **(attrs or {}),
  }
  return type(f"{assembled.model.__name__}AdminForm", (base,), class_attrs)


def nested_prefix(assembled: AssembledForm, fd: FieldDescriptor) -> str:
  return f"{assembled.param_key}-{fd.name}"


def build_nested_formset(assembled: AssembledForm, fd: FieldDescriptor, data=None, files=None,
                         user=None, view=None, registry: Registry = default_registry):
  """
  Inline formset for a nested has-many / has-one association.

  - the foreign key back to the parent is excluded from the child form
  - allow_destroy -> can_delete
  - has-one associations get one blank form while no child exists
  """
  child = fd.related_model
  fk_name = fd.schema.inverse_fk_name
  prefix = nested_prefix(assembled, fd)
  opts = fd.nested or {}
  assembly_kwargs = {"user": user, "view": view, "registry": registry}

  template = assemble_form(
    child, "nested",
    exclude=[fk_name],
    param_key=prefix.replace("-", "_"),
    **assembly_kwargs,
  )
  child_form = build_form_class(
    template,
    base=NestedModelForm,
    attrs={"nested_exclude": (fk_name,), "assembly_kwargs": assembly_kwargs},
  )

  parent = assembled.record
  extra = 0
  if fd.type == c.HAS_ONE and not opts.get("update_only"):
    has_child = parent.pk is not None and child._default_manager.filter(**{fk_name: parent}).exists()
    extra = 0 if has_child else 1

  formset_class = inlineformset_factory(
    assembled.model,
    child,
    form=child_form,
    fk_name=fk_name,
    fields=list(child_form._meta.fields),
    extra=extra,
    can_delete=bool(opts.get("allow_destroy")),
  )
  return formset_class(data=data, files=files, instance=parent, prefix=prefix)


class FormBundle:
  """Main form plus nested formsets for one page."""

  def __init__(self, assembled: AssembledForm, form: AdminModelForm, formsets: Dict[str, object]):
    self.assembled = assembled
    self.form = form
    self.formsets = formsets

  @property
  def groups(self):
    return self.assembled.groups

  @property
  def instance(self):
    return self.form.instance

  @property
  def is_bound(self) -> bool:
    return self.form.is_bound

  def is_valid(self) -> bool:
    valid = self.form.is_valid()
    for formset in self.formsets.values():
      valid = formset.is_valid() and valid
    return valid

  @property
  def errors(self) -> Dict[str, object]:
    out = dict(self.form.errors)
    for name, formset in self.formsets.items():
      errs = [e for e in formset.errors if e]
      if errs or formset.non_form_errors():
        out[name] = errs or formset.non_form_errors()
    return out


def build_bundle(model, action: str = "create", record=None, data=None, files=None,
                 user=None, view=None, registry: Registry = default_registry) -> FormBundle:
  assembled = assemble_form(model, action, record=record, user=user, view=view, registry=registry)
  form_class = build_form_class(assembled)
  form = form_class(data=data, files=files, instance=assembled.record, prefix=assembled.param_key)

  formsets = {}
  for fd in assembled.fields:
    if fd.is_nested and not fd.read_only:
      formsets[fd.name] = build_nested_formset(
        assembled, fd, data=data, files=files, user=user, view=view, registry=registry,
      )
  return FormBundle(assembled, form, formsets)
