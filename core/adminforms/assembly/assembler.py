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
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ObjectDoesNotExist
from django.utils.text import capfirst

from adminforms import constants as c
from adminforms.assembly.descriptors import AssembledForm, FieldDescriptor, GroupDescriptor
from adminforms.assembly.help import default_help
from adminforms.config.options import OptionContext, has_option, resolve_option
from adminforms.config.registry import Registry, registry as default_registry
from adminforms.exceptions import ConfigurationError, UnknownFieldError
from adminforms.formats import format_value, resolve_format
from adminforms.introspection.schema import FieldSchema, accessible_attributes, introspect_model

logger = logging.getLogger(__name__)

ACTION_SECTIONS = {
  "create": c.CREATE,
  "new": c.CREATE,
  "edit": c.UPDATE,
  "update": c.UPDATE,
  "nested": c.NESTED,
}

EMPTY_DISPLAY = "-"


def section_for_action(action: str) -> str:
  try:
    return ACTION_SECTIONS[action]
  except KeyError as exc:
    raise ConfigurationError(
      f"Unknown form action {action!r}. Expected one of: {', '.join(sorted(ACTION_SECTIONS))}."
    ) from exc


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def _field_layers(layers, name: str, type_tag: Optional[str]) -> List[Dict[str, Any]]:
  """Option dicts for one field, lowest first: per layer type options, then field options."""
  out = []
  for layer in layers:
    if type_tag and type_tag in layer.type_options:
      out.append(layer.type_options[type_tag])
    if name in layer.field_options:
      out.append(layer.field_options[name])
  return out


def _own_layers(layers, name: str) -> List[Dict[str, Any]]:
  return [layer.field_options[name] for layer in layers if name in layer.field_options]


def _current_value(record, fs: FieldSchema):
  if record is None:
    return None
  if fs.type_tag in (c.HAS_MANY, c.HAS_AND_BELONGS_TO_MANY):
    if record.pk is None:
      return None
    return list(getattr(record, fs.name).all())
  if fs.type_tag in (c.HAS_ONE, c.BELONGS_TO):
    if fs.type_tag == c.HAS_ONE and record.pk is None:
      return None
    try:
      return getattr(record, fs.name)
    except ObjectDoesNotExist:
      return None
  return getattr(record, fs.name, None)


def _normalize_choices(values) -> List[tuple]:
  out = []
  for v in values or []:
    if isinstance(v, (tuple, list)) and len(v) == 2:
      out.append((v[0], v[1]))
    else:
      out.append((v, str(v)))
  return out


def _enum_hook(target, name: str):
  hook = getattr(target, f"{name}_enum", None)
  return hook if callable(hook) else None


def _display(value, fd_type: str, fmt: Optional[str], choices: Optional[List[tuple]]) -> str:
  if value is None or value == "" or value == []:
    return EMPTY_DISPLAY
  if choices:
    lookup = {str(k): v for k, v in choices}
    if isinstance(value, (list, tuple)):
      return ", ".join(str(lookup.get(str(v), v)) for v in value)
    return str(lookup.get(str(value), value))
  if isinstance(value, (list, tuple)):
    return ", ".join(str(v) for v in value)
  return format_value(value, fd_type, fmt) or EMPTY_DISPLAY


def _validate_names(model, schema, model_layers) -> None:
  """Every field a model layer mentions must exist on the model."""
  model_name = model.__name__
  for layer in model_layers:
    names = set(layer.field_options) | set(layer.defined)
    for group in layer.groups.values():
      names.update(group.get("fields", []))
    for name in names:
      if schema.get(name) is None:
        raise UnknownFieldError(model_name, name)


# ------------------------------------------------------------
# Access control
# ------------------------------------------------------------
def is_authorized(model, user, action: str, record=None, registry: Registry = default_registry) -> bool:
  """
  Evaluate the model-level `authorized` option.

  Literal booleans are used as-is; callables receive (user, action, record).
  Unset means authorized.
  """
  rule = registry.model_options(model).get("authorized")
  if rule is None:
    return True
  if callable(rule):
    return bool(rule(user, action, record))
  return bool(rule)


# ------------------------------------------------------------
# Assembly
# ------------------------------------------------------------
def _resolve_type(model, record, fs: FieldSchema, own_layers, ctx) -> str:
  type_tag = resolve_option(own_layers, "type", None, ctx)
  if type_tag:
    if type_tag not in c.FIELD_TYPES:
      raise ConfigurationError(f"Unsupported field type {type_tag!r} for {model.__name__}.{fs.name}.")
    return type_tag

  type_tag = fs.type_tag
  if type_tag is None:
    internal = fs.model_field.get_internal_type() if hasattr(fs.model_field, "get_internal_type") else "?"
    raise ConfigurationError(
      f"Field {model.__name__}.{fs.name} has unsupported type {internal!r}; "
      "configure an explicit `type` or hide the field."
    )

  # Enumeration auto-detection on plain columns
  if type_tag in (c.STRING, c.TEXT, c.INTEGER, c.SERIALIZED):
    declares_enum = has_option(own_layers, "enum") or has_option(own_layers, "enum_method")
    if declares_enum or _enum_hook(record, fs.name) is not None:
      return c.ENUM
  return type_tag


def _resolve_enum(model, record, fs: FieldSchema, layers, ctx) -> Optional[List[tuple]]:
  values = resolve_option(layers, "enum", None, ctx)
  if values is not None:
    return _normalize_choices(values)

  method = resolve_option(layers, "enum_method", None, ctx)
  if method:
    hook = getattr(record, method, None)
    if not callable(hook):
      raise ConfigurationError(
        f"enum_method {method!r} is not a method of {model.__name__}."
      )
    return _normalize_choices(hook())

  hook = _enum_hook(record, fs.name)
  if hook is not None:
    return _normalize_choices(hook())

  return fs.choices


def _build_field(model, record, fs: FieldSchema, layers, bindings, param_key: str) -> FieldDescriptor:
  value = _current_value(record, fs)
  ctx = OptionContext(name=fs.name, schema=fs, bindings=bindings, value=value)

  type_tag = _resolve_type(model, record, fs, _own_layers(layers, fs.name), ctx)
  opts = _field_layers(layers, fs.name, type_tag)

  def opt(key, default=None):
    return resolve_option(opts, key, default, ctx)

  visible = bool(opt("visible", True))

  if type_tag == c.BOOLEAN:
    required_default = False
  else:
    required_default = not fs.blank
  required = bool(opt("required", required_default))

  label = opt("label", capfirst(str(fs.verbose_name or fs.name.replace("_", " "))))
  help_text = opt("help", default_help(required, fs))

  fmt = resolve_format(type_tag, opt("date_format"), opt("strftime_format"))

  enum_choices = None
  multiple = False
  if type_tag == c.ENUM:
    enum_choices = _resolve_enum(model, record, fs, opts, ctx)
    multiple = bool(opt("multiple", fs.type_tag == c.SERIALIZED))
    if multiple and fs.type_tag != c.SERIALIZED:
      raise ConfigurationError(
        f"multiple is only supported on serialized columns ({model.__name__}.{fs.name} is {fs.type_tag})."
      )
  elif type_tag in (c.HAS_MANY, c.HAS_AND_BELONGS_TO_MANY):
    multiple = True

  richtext = None
  for editor in c.RICHTEXT_EDITORS:
    if opt(editor, False):
      richtext = editor
      break
  if richtext and type_tag not in (c.STRING, c.TEXT):
    raise ConfigurationError(
      f"{richtext} is only supported on string/text fields ({model.__name__}.{fs.name} is {type_tag})."
    )

  nested = None
  nested_form = opt("nested_form", None)
  if fs.nested is not None and nested_form is not False:
    nested = dict(fs.nested)
  elif nested_form and fs.nested is None:
    raise ConfigurationError(
      f"{model.__name__}.{fs.name} has no nested_attributes declaration; "
      "add it to the model's `nested_attributes` to enable nested forms."
    )

  read_only = bool(opt("read_only", False))
  formatted = opt("formatted_value", None)
  if formatted is None:
    formatted = _display(value, type_tag, fmt, enum_choices)

  return FieldDescriptor(
    name=fs.name,
    method_name=fs.method_name,
    type=type_tag,
    nullable=fs.nullable,
    required=required,
    label=str(label),
    help=str(help_text or ""),
    visible=visible,
    default_value=opt("default_value", None),
    format=fmt,
    read_only=read_only,
    renderer=opt("partial", None),
    formatted_value=formatted,
    enum_choices=enum_choices,
    multiple=multiple,
    richtext=richtext,
    css_class=opt("css_class", "") or "",
    nested=nested,
    dom_id=f"{param_key}_{fs.method_name}_field",
    schema=fs,
  )


def _field_names(schema, layers) -> List[str]:
  """Declared fields of the most specific layer that declares any, else all."""
  for layer in reversed(layers):
    if layer.defined:
      return list(layer.defined)
  return schema.names()


def _group_plan(layers, names: Iterable[str]):
  """
  Return (group_order, group_layers, membership).

  The default group comes first; other groups follow in first-declared
  order. A field's group is the last layer that assigns it.
  """
  order = [c.DEFAULT_GROUP]
  group_layers: Dict[str, List[Dict[str, Any]]] = {c.DEFAULT_GROUP: []}
  membership: Dict[str, str] = {}

  for layer in layers:
    for gname, gopts in layer.groups.items():
      if gname not in group_layers:
        order.append(gname)
        group_layers[gname] = []
      group_layers[gname].append(gopts)
      for fname in gopts.get("fields", []):
        membership[fname] = gname

  for name in names:
    membership.setdefault(name, c.DEFAULT_GROUP)
  return order, group_layers, membership


def assemble_form(model, action: str = "create", record=None, user=None, view=None,
                  exclude: Iterable[str] = (), param_key: Optional[str] = None,
                  registry: Registry = default_registry) -> AssembledForm:
  """
  Merge the model schema with the configuration into ordered groups of
  visible field descriptors.

  Args:
    model:     Django model class
    action:    create / edit / nested
    record:    bound instance; a fresh unsaved instance is used if None
    user:      current user (access control, bindings)
    view:      the calling view (bindings only)
    exclude:   field names never rendered (e.g. a nested form's parent FK)
    param_key: prefix for dom ids (defaults to the model's param key)
  """
  section = section_for_action(action)
  schema = introspect_model(model)
  if record is None:
    record = model()
  param_key = param_key or schema.param_key

  layers = registry.layers_for(model, section)
  mc = registry.find(model)
  _validate_names(model, schema, mc.chain(section) if mc else [])

  role = registry.attr_accessible_role(user)
  accessible = accessible_attributes(model, role)
  excluded = set(registry.form_exclude) | set(exclude)

  bindings = {"object": record, "view": view, "user": user}

  names = [n for n in _field_names(schema, layers) if n not in excluded]
  descriptors: Dict[str, FieldDescriptor] = {}

  for name in names:
    fs = schema.get(name)
    if fs is None or not fs.editable:
      continue
    fd = _build_field(model, record, fs, layers, bindings, param_key)
    if not fd.visible:
      continue
    if accessible is not None and not fd.read_only:
      if fs.name not in accessible and fs.method_name not in accessible:
        continue
    descriptors[name] = fd

  order, group_layers, membership = _group_plan(layers, names)

  groups: List[GroupDescriptor] = []
  for gname in order:
    gctx = OptionContext(name=gname, bindings=bindings)
    glayers = group_layers[gname]
    default_label = c.DEFAULT_GROUP_LABEL if gname == c.DEFAULT_GROUP else capfirst(gname.replace("_", " "))
    visible = bool(resolve_option(glayers, "visible", True, gctx))
    if not visible:
      logger.debug("Group %s of %s is hidden", gname, model.__name__)
      continue

    members = [descriptors[n] for n in names if n in descriptors and membership.get(n) == gname]
    if not members:
      continue

    groups.append(GroupDescriptor(
      name=gname,
      label=str(resolve_option(glayers, "label", default_label, gctx)),
      help=str(resolve_option(glayers, "help", "", gctx) or ""),
      visible=True,
      fields=members,
    ))

  logger.debug(
    "Assembled %s form for %s: %d group(s), %d field(s)",
    action, model.__name__, len(groups), sum(len(g.fields) for g in groups),
  )

  return AssembledForm(
    model=model,
    action=action,
    section=section,
    record=record,
    param_key=param_key,
    groups=groups,
  )


def list_columns(model, user=None, view=None, registry: Registry = default_registry) -> List[Dict[str, Any]]:
  """
  Columns for the list page: declared `list` fields (or all plain columns),
  with their resolved label and display format. To-many associations are skipped.
  """
  schema = introspect_model(model)
  layers = registry.layers_for(model, c.LIST)
  excluded = set(registry.form_exclude)
  bindings = {"object": None, "view": view, "user": user}

  columns = []
  for name in _field_names(schema, layers):
    fs = schema.get(name)
    if fs is None or name in excluded:
      continue
    if fs.type_tag in (c.HAS_MANY, c.HAS_AND_BELONGS_TO_MANY, c.HAS_ONE, c.SERIALIZED, None):
      continue
    ctx = OptionContext(name=name, schema=fs, bindings=bindings)
    opts = _field_layers(layers, name, fs.type_tag)
    if not resolve_option(opts, "visible", True, ctx):
      continue
    label = resolve_option(opts, "label", capfirst(str(fs.verbose_name or name.replace("_", " "))), ctx)
    fmt = resolve_format(
      fs.type_tag,
      resolve_option(opts, "date_format", None, ctx),
      resolve_option(opts, "strftime_format", None, ctx),
    )
    columns.append({"name": name, "label": str(label), "type": fs.type_tag, "format": fmt, "choices": fs.choices})
  return columns


def display_value(record, column: Dict[str, Any]) -> str:
  """Formatted cell value of `record` for a list column."""
  value = getattr(record, column["name"], None)
  return _display(value, column["type"], column["format"], column["choices"])
