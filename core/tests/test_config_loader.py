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

import pytest

from adminforms import constants as c
from adminforms.config.loader import apply_config, load_config
from adminforms.exceptions import ConfigurationError
from sample.models import Team


TEAM_YAML = """
included_models: [sample.Team, sample.Player]
defaults:
  edit:
    fields_of_type:
      date:
        date_format: short
models:
  sample.Team:
    label: Club
    edit:
      fields:
        manager: {label: Team manager}
        name: {}
      groups:
        advanced:
          label: Advanced
          fields: [revenue]
"""


def _write(tmp_path, text):
  path = tmp_path / "adminforms.yaml"
  path.write_text(text, encoding="utf-8")
  return path


# ---------------------------------------------------------------------
# Dict layout
# ---------------------------------------------------------------------

def test_apply_config_registers_sections_and_options(registry):
  apply_config(registry, {
    "models": {
      "sample.Team": {
        "label": "Club",
        "create": {"configure": {"name": {"hide": True}}},
        "edit": {"fields_of_type": {"string": {"css_class": "wide"}}},
      },
    },
  })

  mc = registry.model(Team)
  assert mc.options == {"label": "Club"}
  assert mc.create.field_options["name"] == {"visible": False}
  assert mc.edit.type_options[c.STRING] == {"css_class": "wide"}


def test_apply_config_global_settings(registry):
  apply_config(registry, {
    "apps": ["sample"],
    "excluded_models": ["sample.Draft"],
    "form_exclude": ["id"],
    "attr_accessible_role": "sample.roles.role_for_user",
  })
  assert registry.app_labels == ["sample"]
  assert registry.excluded_models == ["sample.Draft"]
  assert registry.form_exclude == {"id"}
  assert registry.attr_accessible_role(None) == "default"


def test_unknown_section_key_raises(registry):
  with pytest.raises(ConfigurationError, match="unknown keys"):
    apply_config(registry, {"models": {"sample.Team": {"edit": {"field": {}}}}})


def test_unknown_model_key_raises(registry):
  with pytest.raises(ConfigurationError, match="unknown key 'lable'"):
    apply_config(registry, {"models": {"sample.Team": {"lable": "Club"}}})


# ---------------------------------------------------------------------
# YAML + settings
# ---------------------------------------------------------------------

def test_load_config_reads_yaml(registry, tmp_path, settings):
  settings.ADMINFORMS = {}
  load_config(registry, str(_write(tmp_path, TEAM_YAML)))

  mc = registry.model(Team)
  assert registry.included_models == ["sample.Team", "sample.Player"]
  assert mc.options["label"] == "Club"
  assert mc.edit.defined == ["manager", "name", "revenue"]
  assert mc.edit.groups["advanced"]["fields"] == ["revenue"]
  assert registry.defaults.edit.type_options[c.DATE] == {"date_format": "short"}


def test_settings_win_over_yaml(registry, tmp_path, settings):
  settings.ADMINFORMS = {"models": {"sample.Team": {"label": "Team from settings"}}}
  load_config(registry, str(_write(tmp_path, TEAM_YAML)))
  assert registry.model(Team).options["label"] == "Team from settings"


def test_load_config_resets_previous_state(registry, settings, tmp_path):
  settings.ADMINFORMS = {}
  registry.model(Team).edit.field("name")
  load_config(registry, str(_write(tmp_path, "{}\n")))
  assert "sample.team" not in registry.models


def test_missing_explicit_path_raises(registry, tmp_path):
  with pytest.raises(ConfigurationError, match="not found"):
    load_config(registry, str(tmp_path / "missing.yaml"))


def test_top_level_must_be_a_mapping(registry, tmp_path):
  with pytest.raises(ConfigurationError, match="must be a mapping"):
    load_config(registry, str(_write(tmp_path, "- just\n- a list\n")))


def test_configuration_for_unknown_model_is_logged(registry, settings, tmp_path, caplog):
  settings.ADMINFORMS = {"models": {"sample.Stadium": {"label": "Stadium"}}}
  with caplog.at_level(logging.WARNING, logger="adminforms.config.loader"):
    load_config(registry, str(_write(tmp_path, "{}\n")))
  assert "sample.stadium ignored" in caplog.text
