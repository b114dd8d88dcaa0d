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
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from django.apps import apps
from django.conf import settings

from adminforms import constants as c
from adminforms.config.registry import ModelConfig, Registry
from adminforms.exceptions import ConfigurationError

"""
Loading form configuration from Django settings and YAML.

Both sources share one dict layout:

  apps: [sample]                      # app labels served (default: all non-contrib apps)
  included_models: [sample.Team, ...]
  excluded_models: [...]
  attr_accessible_role: "dotted.path.to.callable"   # settings only
  defaults:
    edit:
      fields_of_type:
        string: {help: "..."}
  models:
    sample.Team:
      label: "Club"
      edit:
        fields:            # declared, in this order
          manager: {label: "Team manager"}
        configure:         # options only
          name: {required: true}
        fields_of_type:
          string: {css_class: "wide"}
        groups:
          default: {label: "Hidden group", hide: true}
          basic_info: {fields: [manager]}

The settings dict (settings.ADMINFORMS) is applied after the YAML file,
so settings win where both configure the same attribute.
"""

logger = logging.getLogger(__name__)

SECTION_KEYS = {"fields", "configure", "fields_of_type", "groups"}


def _find_config_path(explicit_path: Optional[str] = None) -> Optional[Path]:
  """
  Locate adminforms.yaml:

  1. explicit_path argument
  2. settings.ADMINFORMS_CONFIG_PATH
  3. <repo>/config/adminforms.yaml and ./config/adminforms.yaml

  Returns None when no file exists; an explicit path that does not
  exist is an error.
  """
  if explicit_path:
    p = Path(explicit_path)
    if not p.exists():
      raise ConfigurationError(f"adminforms config file not found: {p}")
    return p

  candidates = []
  cfg_path = getattr(settings, "ADMINFORMS_CONFIG_PATH", None)
  if cfg_path:
    candidates.append(Path(cfg_path))

  here = Path(__file__).resolve()
  candidates += [
    here.parents[3] / "config" / "adminforms.yaml",
    Path.cwd() / "config" / "adminforms.yaml",
  ]

  for candidate in candidates:
    if candidate.exists():
      return candidate
  return None


def read_yaml(path: Path) -> Dict[str, Any]:
  with open(path, "r", encoding="utf-8") as f:
    try:
      data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
      raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
  if not isinstance(data, dict):
    raise ConfigurationError(f"{path}: top level must be a mapping, got {type(data).__name__}.")
  return data


def _apply_section(mc: ModelConfig, section_name: str, data: Dict[str, Any]) -> None:
  unknown = set(data) - SECTION_KEYS
  if unknown:
    raise ConfigurationError(
      f"{mc.key}.{section_name}: unknown keys {', '.join(sorted(unknown))}."
    )
  section = mc.section(section_name)

  for name, opts in (data.get("fields") or {}).items():
    section.field(name, **(opts or {}))
  for name, opts in (data.get("configure") or {}).items():
    section.configure(name, **(opts or {}))
  for type_tag, opts in (data.get("fields_of_type") or {}).items():
    section.fields_of_type(type_tag, **(opts or {}))
  for name, opts in (data.get("groups") or {}).items():
    opts = dict(opts or {})
    fields = opts.pop("fields", None)
    section.group(name, fields=fields, **opts)


def _apply_model(mc: ModelConfig, data: Dict[str, Any]) -> None:
  model_opts = {}
  for key, value in (data or {}).items():
    if key in c.SECTION_PARENTS:
      _apply_section(mc, key, value or {})
    elif key in c.MODEL_OPTIONS:
      model_opts[key] = value
    else:
      raise ConfigurationError(f"{mc.key}: unknown key {key!r}.")
  if model_opts:
    mc.set(**model_opts)


def apply_config(registry: Registry, data: Dict[str, Any]) -> Registry:
  """Apply one config dict (settings or YAML layout) onto `registry`."""
  if not data:
    return registry

  if "apps" in data:
    registry.app_labels = list(data["apps"] or [])
  if "included_models" in data:
    registry.included_models = list(data["included_models"] or [])
  if "excluded_models" in data:
    registry.excluded_models = list(data["excluded_models"] or [])
  if "form_exclude" in data:
    registry.form_exclude = set(data["form_exclude"] or [])
  if "attr_accessible_role" in data:
    registry.set_attr_accessible_role(data["attr_accessible_role"])

  _apply_model(registry.defaults, data.get("defaults") or {})

  for model_name, model_data in (data.get("models") or {}).items():
    _apply_model(registry.model(model_name), model_data or {})

  return registry


def _warn_unknown_models(registry: Registry) -> None:
  for key in registry.models:
    if "." not in key:
      continue
    app_label, model_name = key.split(".", 1)
    try:
      apps.get_model(app_label, model_name)
    except LookupError:
      logger.warning("Form configuration for %s ignored: no such model is installed", key)


def load_config(registry: Registry, config_path: Optional[str] = None) -> Registry:
  """
  Reset `registry` and fill it from the YAML file (if any) and
  settings.ADMINFORMS.
  """
  registry.reset()

  path = _find_config_path(config_path)
  if path is not None:
    logger.info("Loading form configuration from %s", path)
    apply_config(registry, read_yaml(path))

  apply_config(registry, getattr(settings, "ADMINFORMS", {}) or {})
  _warn_unknown_models(registry)
  logger.debug(
    "Form configuration loaded: %d model(s) configured",
    len(registry.models),
  )
  return registry
