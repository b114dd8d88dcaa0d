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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.db import models
from django.db.models.fields import NOT_PROVIDED

from adminforms import constants as c
from adminforms.validators import length_bounds

"""
Schema introspection for Django models.

Reads everything the form engine needs to know about a model without
looking at any configuration:
- field names and type tags
- nullability and the "blank" validation (required)
- column size and declared length validators
- association kind, related model and reverse accessor
- nested-attribute options declared on the model
"""

NESTED_DEFAULTS = {"allow_destroy": False, "update_only": False}


@dataclass
class FieldSchema:
  name: str
  method_name: str
  type_tag: Optional[str]
  nullable: bool = False
  blank: bool = False
  editable: bool = True
  max_length: Optional[int] = None
  min_length: Optional[int] = None
  exact_length: Optional[int] = None
  verbose_name: Any = None
  help_text: str = ""
  choices: Optional[List[tuple]] = None
  default: Any = None
  related_model: Any = None
  # FK on the related model pointing back to us (reverse relations only)
  inverse_fk_name: Optional[str] = None
  nested: Optional[Dict[str, bool]] = None
  model_field: Any = None

  @property
  def is_association(self) -> bool:
    return self.type_tag in c.ASSOCIATION_TYPES

  @property
  def is_reverse(self) -> bool:
    return self.inverse_fk_name is not None


@dataclass
class ModelSchema:
  model: Any
  fields: Dict[str, FieldSchema] = field(default_factory=dict)

  @property
  def param_key(self) -> str:
    """Key used in dom ids, e.g. 'field_test' for FieldTest."""
    return model_param_key(self.model)

  def get(self, name: str) -> Optional[FieldSchema]:
    return self.fields.get(name)

  def names(self) -> List[str]:
    return list(self.fields)


def model_param_key(model) -> str:
  name = model.__name__
  out = []
  for i, ch in enumerate(name):
    if ch.isupper() and i > 0 and not name[i - 1].isupper():
      out.append("_")
    out.append(ch.lower())
  return "".join(out)


def _type_for_concrete(f) -> Optional[str]:
  if isinstance(f, (models.ForeignKey, models.OneToOneField)):
    return c.BELONGS_TO
  internal = f.get_internal_type()
  if internal == "JSONField":
    return c.SERIALIZED
  if getattr(f, "choices", None):
    return c.ENUM
  return c.INTERNAL_TYPE_MAP.get(internal)


def _concrete_schema(f) -> FieldSchema:
  minimum, maximum, exact = length_bounds(f.validators, getattr(f, "max_length", None))
  choices = [(k, v) for k, v in f.flatchoices] if getattr(f, "choices", None) else None
  default = f.default if f.default is not NOT_PROVIDED else None
  if callable(default):
    default = default()

  return FieldSchema(
    name=f.name,
    method_name=f.attname,
    type_tag=_type_for_concrete(f),
    nullable=f.null,
    blank=f.blank,
    editable=f.editable,
    max_length=maximum,
    min_length=minimum,
    exact_length=exact,
    verbose_name=f.verbose_name,
    help_text=str(f.help_text or ""),
    choices=choices,
    default=default,
    related_model=f.related_model if f.is_relation else None,
    model_field=f,
  )


def _m2m_schema(f) -> FieldSchema:
  return FieldSchema(
    name=f.name,
    method_name=f"{_singular(f.name)}_ids",
    type_tag=c.HAS_AND_BELONGS_TO_MANY,
    nullable=True,
    blank=f.blank,
    editable=f.editable,
    verbose_name=f.verbose_name,
    help_text=str(f.help_text or ""),
    related_model=f.related_model,
    model_field=f,
  )


def _reverse_schema(rel, nested_cfg: Dict[str, Any]) -> Optional[FieldSchema]:
  accessor = rel.get_accessor_name()
  if not accessor:
    return None

  if rel.one_to_one:
    type_tag = c.HAS_ONE
    method_name = f"{accessor}_id"
  elif rel.one_to_many:
    type_tag = c.HAS_MANY
    method_name = f"{_singular(accessor)}_ids"
  elif rel.many_to_many:
    type_tag = c.HAS_AND_BELONGS_TO_MANY
    method_name = f"{_singular(accessor)}_ids"
  else:
    return None

  nested = None
  if accessor in nested_cfg and type_tag in (c.HAS_MANY, c.HAS_ONE):
    nested = {**NESTED_DEFAULTS, **(nested_cfg.get(accessor) or {})}

  verbose = accessor.replace("_", " ")

  return FieldSchema(
    name=accessor,
    method_name=method_name,
    type_tag=type_tag,
    nullable=True,
    blank=True,
    editable=True,
    verbose_name=verbose,
    related_model=rel.related_model,
    inverse_fk_name=rel.field.name,
    nested=nested,
    model_field=rel,
  )


def _singular(name: str) -> str:
  if name.endswith("ies"):
    return name[:-3] + "y"
  if name.endswith("s"):
    return name[:-1]
  return name


def introspect_model(model) -> ModelSchema:
  """
  Build a ModelSchema for `model`.

  Order: concrete fields in declaration order, forward many-to-many,
  then reverse relations. Primary keys and hidden reverse relations
  (related_name ending in '+') are skipped.
  """
  opts = model._meta
  schema = ModelSchema(model=model)
  nested_cfg = getattr(model, "nested_attributes", None) or {}

  for f in opts.fields:
    if f.primary_key and f.auto_created:
      continue
    schema.fields[f.name] = _concrete_schema(f)

  for f in opts.many_to_many:
    schema.fields[f.name] = _m2m_schema(f)

  for rel in opts.related_objects:
    if (rel.related_name or "").endswith("+"):
      continue
    fs = _reverse_schema(rel, nested_cfg)
    if fs is not None:
      schema.fields[fs.name] = fs

  return schema


def accessible_attributes(model, role: Optional[str]) -> Optional[set]:
  """
  Return the attribute names writable for `role`, or None when the model
  does not restrict mass assignment.

  Models opt in with a class attribute:

    attr_accessible = {
      "default": ("string_field",),
      "custom_role": ("string_field", "restricted_field"),
    }
  """
  cfg = getattr(model, "attr_accessible", None)
  if not cfg:
    return None
  names = cfg.get(role or "default")
  if names is None:
    names = cfg.get("default", ())
  return set(names)
