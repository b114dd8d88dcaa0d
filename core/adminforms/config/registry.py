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
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from django.utils.module_loading import import_string

from adminforms import constants as c
from adminforms.config.options import normalize_field_options, normalize_group_options
from adminforms.exceptions import ConfigurationError, UnsupportedFieldTypeError

"""
Process-wide configuration registry.

Layout:
  Registry
    defaults      -> ModelConfig applied to every model
    models[key]   -> ModelConfig for one model
      sections[name] -> SectionConfig (base, list, edit, create, update, nested)

Resolution for (model, field, section) walks the section chain
(base -> edit -> create) first for the global defaults, then for the
model. Within a section, type-level options apply before field options.
Later layers win per attribute.
"""

logger = logging.getLogger(__name__)

ModelRef = Union[type, str]


def model_key(model: ModelRef) -> str:
  """'sample.Team' / Team / 'Team' -> 'sample.team' / 'sample.team' / 'team'."""
  if isinstance(model, str):
    return model.strip().lower()
  meta = getattr(model, "_meta", None)
  if meta is not None:
    return meta.label_lower
  return model.__name__.lower()


def section_chain(section: str) -> List[str]:
  """Return the section chain from the root down to `section`."""
  if section not in c.SECTION_PARENTS:
    raise ConfigurationError(
      f"Unknown section {section!r}. "
      f"Available sections: {', '.join(sorted(c.SECTION_PARENTS))}."
    )
  chain = []
  current: Optional[str] = section
  while current is not None:
    chain.append(current)
    current = c.SECTION_PARENTS[current]
  return list(reversed(chain))


class SectionConfig:
  """Field and group overrides for one section of one model (or of all models)."""

  def __init__(self, owner: str, name: str):
    self.owner = owner
    self.name = name
    self.field_options: Dict[str, Dict[str, Any]] = {}
    self.type_options: Dict[str, Dict[str, Any]] = {}
    self.groups: Dict[str, Dict[str, Any]] = {}
    # Fields declared with field() / include_fields(); restricts the form
    self.defined: List[str] = []

  def _where(self, name: str = "") -> str:
    suffix = f".{name}" if name else ""
    return f"{self.owner}.{self.name}{suffix}"

  def _merge_field(self, name: str, options: Dict[str, Any]) -> None:
    opts = normalize_field_options(options, where=self._where(name))
    self.field_options.setdefault(name, {}).update(opts)

  def field(self, name: str, type: Optional[str] = None, **options) -> "SectionConfig":
    """Declare `name` as shown in this section and apply options."""
    if type is not None:
      options["type"] = type
    self._merge_field(name, options)
    if name not in self.defined:
      self.defined.append(name)
    return self

  def configure(self, name: str, type: Optional[str] = None, **options) -> "SectionConfig":
    """Apply options to `name` without restricting the field list."""
    if type is not None:
      options["type"] = type
    self._merge_field(name, options)
    return self

  def include_fields(self, *names: str) -> "SectionConfig":
    for name in names:
      self.field(name)
    return self

  def exclude_fields(self, *names: str) -> "SectionConfig":
    for name in names:
      self.configure(name, visible=False)
    return self

  def fields_of_type(self, type_tag: str, **options) -> "SectionConfig":
    if type_tag not in c.FIELD_TYPES:
      raise UnsupportedFieldTypeError(type_tag, self._where())
    opts = normalize_field_options(options, where=self._where(f"<{type_tag}>"))
    self.type_options.setdefault(type_tag, {}).update(opts)
    return self

  def group(self, name: str, fields: Optional[Iterable[Any]] = None, **options) -> "SectionConfig":
    """
    Declare or update a group.

    `fields` entries are either names or (name, {options}) pairs; each
    one is declared as a field of this section and moved into the group.
    """
    opts = normalize_group_options(options, where=self._where(f"[{name}]"))
    group = self.groups.setdefault(name, {})
    group.update(opts)

    if fields is not None:
      members = group.setdefault("fields", [])
      for entry in fields:
        if isinstance(entry, (tuple, list)):
          fname, fopts = entry[0], dict(entry[1] or {})
        else:
          fname, fopts = entry, {}
        self.field(fname, **fopts)
        if fname not in members:
          members.append(fname)
    return self

  def is_empty(self) -> bool:
    return not (self.field_options or self.type_options or self.groups or self.defined)


class ModelConfig:
  """All sections plus model-level options for one model key."""

  def __init__(self, key: str):
    self.key = key
    self.options: Dict[str, Any] = {}
    self.sections: Dict[str, SectionConfig] = {}

  def section(self, name: str) -> SectionConfig:
    section_chain(name)  # validates the name
    if name not in self.sections:
      self.sections[name] = SectionConfig(self.key, name)
    return self.sections[name]

  @property
  def base(self) -> SectionConfig:
    return self.section(c.BASE)

  @property
  def list(self) -> SectionConfig:
    return self.section(c.LIST)

  @property
  def edit(self) -> SectionConfig:
    return self.section(c.EDIT)

  @property
  def create(self) -> SectionConfig:
    return self.section(c.CREATE)

  @property
  def update(self) -> SectionConfig:
    return self.section(c.UPDATE)

  @property
  def nested(self) -> SectionConfig:
    return self.section(c.NESTED)

  # Shortcuts on the base section
  def field(self, name: str, type: Optional[str] = None, **options) -> SectionConfig:
    return self.base.field(name, type=type, **options)

  def configure(self, name: str, type: Optional[str] = None, **options) -> SectionConfig:
    return self.base.configure(name, type=type, **options)

  def set(self, **options) -> "ModelConfig":
    for key in options:
      if key not in c.MODEL_OPTIONS:
        raise ConfigurationError(f"Unknown model option {key!r} in {self.key}.")
    self.options.update(options)
    return self

  def chain(self, section: str) -> List[SectionConfig]:
    return [self.sections[s] for s in section_chain(section) if s in self.sections]


class Registry:
  """
  Process-wide store for form configuration.

  Usage:
    registry.defaults.edit.fields_of_type("string", label=lambda ctx: f"{ctx.inherited} (STRING)")
    registry.model(Team).edit.field("manager", label="Renamed field")
    registry.model(Team).edit.group("default", label="Hidden group", hide=True)
  """

  GLOBAL_KEY = "__all__"

  def __init__(self):
    self.reset()

  def reset(self) -> None:
    self.defaults = ModelConfig(self.GLOBAL_KEY)
    self.models: Dict[str, ModelConfig] = {}
    self.app_labels: List[str] = []
    self.included_models: List[str] = []
    self.excluded_models: List[str] = []
    self.form_exclude = set(c.FORM_EXCLUDE)
    self._attr_accessible_role: Optional[Callable] = None

  # --------------------------------------------------
  # Registration
  # --------------------------------------------------
  def model(self, model: ModelRef) -> ModelConfig:
    key = model_key(model)
    if key not in self.models:
      logger.debug("Registering form configuration for %s", key)
      self.models[key] = ModelConfig(key)
    return self.models[key]

  def find(self, model) -> Optional[ModelConfig]:
    """Look up the ModelConfig for a model class by label, then by bare name."""
    meta = model._meta
    return self.models.get(meta.label_lower) or self.models.get(meta.model_name)

  def set_attr_accessible_role(self, resolver: Union[Callable, str, None]) -> None:
    if isinstance(resolver, str):
      resolver = import_string(resolver)
    if resolver is not None and not callable(resolver):
      raise ConfigurationError("attr_accessible_role must be callable or a dotted path.")
    self._attr_accessible_role = resolver

  def attr_accessible_role(self, user) -> Optional[str]:
    if self._attr_accessible_role is None:
      return None
    return self._attr_accessible_role(user)

  # --------------------------------------------------
  # Lookup
  # --------------------------------------------------
  def layers_for(self, model, section: str) -> List[SectionConfig]:
    """Section configs lowest-first: global chain, then the model chain."""
    layers = self.defaults.chain(section)
    mc = self.find(model)
    if mc is not None:
      layers += mc.chain(section)
    return layers

  def model_options(self, model) -> Dict[str, Any]:
    merged = dict(self.defaults.options)
    mc = self.find(model)
    if mc is not None:
      merged.update(mc.options)
    return merged

  def is_included(self, model) -> bool:
    meta = model._meta
    names = {meta.label_lower, meta.model_name}
    if self.included_models:
      if not names & {model_key(m) for m in self.included_models}:
        return False
    return not names & {model_key(m) for m in self.excluded_models}

  def registered_models(self) -> List[type]:
    """Installed models served by the admin pages, in app then model order."""
    from django.apps import apps

    out = []
    for app_config in apps.get_app_configs():
      if self.app_labels and app_config.label not in self.app_labels:
        continue
      if not self.app_labels and app_config.name.startswith("django.contrib."):
        continue
      out.extend(m for m in app_config.get_models() if self.is_included(m))
    return out


registry = Registry()
