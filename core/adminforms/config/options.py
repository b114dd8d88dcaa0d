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
from typing import Any, Dict, Iterable

from adminforms import constants as c
from adminforms.exceptions import ConfigurationError, UnsupportedFieldTypeError


@dataclass
class OptionContext:
  """
  Argument passed to callable option values.

  Attributes:
    name:      field or group name the option belongs to
    schema:    FieldSchema of the field (None for groups)
    bindings:  {"object": record, "view": view, "user": user}
    inherited: value resolved from the lower layers
    value:     current attribute value of the bound record (fields only)
  """
  name: str
  schema: Any = None
  bindings: Dict[str, Any] = field(default_factory=dict)
  inherited: Any = None
  value: Any = None

  @property
  def object(self):
    return self.bindings.get("object")


def normalize_field_options(options: Dict[str, Any], where: str = "") -> Dict[str, Any]:
  """
  Validate option names and fold aliases:
    hide=X         -> visible=not X
    show=X         -> visible=X
    optional=X     -> required=not X
  """
  out: Dict[str, Any] = {}
  for key, value in options.items():
    if key == "hide":
      out["visible"] = _negate(value)
      continue
    if key == "show":
      out["visible"] = value
      continue
    if key not in c.FIELD_OPTIONS:
      raise ConfigurationError(f"Unknown field option {key!r}{_where(where)}.")
    if key == "optional":
      out["required"] = _negate(value)
      continue
    if key == "type" and value not in c.FIELD_TYPES:
      raise UnsupportedFieldTypeError(value, where)
    out[key] = value
  return out


def normalize_group_options(options: Dict[str, Any], where: str = "") -> Dict[str, Any]:
  out: Dict[str, Any] = {}
  for key, value in options.items():
    if key == "hide":
      out["visible"] = _negate(value)
      continue
    if key == "show":
      out["visible"] = value
      continue
    if key not in c.GROUP_OPTIONS:
      raise ConfigurationError(f"Unknown group option {key!r}{_where(where)}.")
    if key == "fields":
      value = list(value or [])
    out[key] = value
  return out


def _where(where: str) -> str:
  return f" in {where}" if where else ""


def _negate(value):
  if callable(value):
    return lambda ctx: not value(ctx)
  return not value


def resolve_option(layers: Iterable[Dict[str, Any]], key: str, default: Any, ctx: OptionContext) -> Any:
  """
  Fold `key` over `layers` (lowest first). Literal values replace the
  running value; callables receive the running value as `ctx.inherited`.
  """
  value = default
  for layer in layers:
    if key not in layer:
      continue
    raw = layer[key]
    if callable(raw):
      ctx.inherited = value
      value = raw(ctx)
    else:
      value = raw
  ctx.inherited = None
  return value


def has_option(layers: Iterable[Dict[str, Any]], key: str) -> bool:
  return any(key in layer for layer in layers)
