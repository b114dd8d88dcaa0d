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

import pytest
from django import forms

from adminforms import constants as c
from adminforms.assembly.assembler import assemble_form
from adminforms.exceptions import ConfigurationError
from adminforms.rendering.forms import build_bundle
from sample.models import FieldTest, Team


# ---------------------------------------------------------------------
# Choice sources
# ---------------------------------------------------------------------

def test_enum_hook_on_the_record_makes_an_enum(db):
  fd = assemble_form(Team, "create").field("color")
  assert fd.type == c.ENUM
  assert fd.enum_choices == [("blue", "blue"), ("green", "green"), ("red", "red"), ("white", "white")]
  assert fd.multiple is False


def test_enum_option_wins_over_the_hook(registry, db):
  registry.model(Team).edit.configure("color", enum=[("#000", "Black"), ("#fff", "White")])
  assert assemble_form(Team, "create").field("color").enum_choices == [("#000", "Black"), ("#fff", "White")]


def test_enum_option_callable(registry, team):
  registry.model(Team).edit.configure("mascot", enum=lambda ctx: [ctx.object.name, "Other"])
  fd = assemble_form(Team, "edit", record=team).field("mascot")
  assert fd.type == c.ENUM
  assert fd.enum_choices == [("Mets", "Mets"), ("Other", "Other")]


def test_enum_method_option(registry, db):
  registry.model(Team).edit.configure("ballpark", enum_method="color_enum")
  fd = assemble_form(Team, "create").field("ballpark")
  assert fd.type == c.ENUM
  assert ("red", "red") in fd.enum_choices


def test_enum_method_must_exist(registry, db):
  registry.model(Team).edit.configure("ballpark", enum_method="stadium_enum")
  with pytest.raises(ConfigurationError, match="stadium_enum"):
    assemble_form(Team, "create")


def test_enum_on_integer_column(registry, db):
  registry.model(FieldTest).edit.configure("integer_field", enum=[(1, "One"), (2, "Two")])
  fd = assemble_form(FieldTest, "create").field("integer_field")
  assert fd.type == c.ENUM
  assert fd.enum_choices == [(1, "One"), (2, "Two")]


def test_serialized_enum_defaults_to_multiple(registry, db):
  registry.model(FieldTest).edit.configure("serialized_field", enum=["a", "b", "c"])
  fd = assemble_form(FieldTest, "create").field("serialized_field")
  assert fd.type == c.ENUM
  assert fd.multiple is True


def test_multiple_can_be_switched_off(registry, db):
  registry.model(FieldTest).edit.configure("serialized_field", enum=["a", "b"], multiple=False)
  assert assemble_form(FieldTest, "create").field("serialized_field").multiple is False


def test_multiple_is_rejected_on_plain_columns(registry, db):
  registry.model(Team).edit.configure("mascot", enum=["Mr. Met", "Mrs. Met"], multiple=True)
  with pytest.raises(ConfigurationError, match="mascot"):
    assemble_form(Team, "create")


def test_enum_read_only_displays_the_choice_label(registry, team):
  team.color = "#fff"
  registry.model(Team).edit.configure("color", read_only=True, enum=[("#000", "Black"), ("#fff", "White")])
  assert assemble_form(Team, "edit", record=team).field("color").formatted_value == "White"


# ---------------------------------------------------------------------
# Form fields
# ---------------------------------------------------------------------

def test_optional_enum_renders_a_blank_choice(db):
  bundle = build_bundle(Team, "create")
  field = bundle.form.fields["color"]
  assert isinstance(field, forms.TypedChoiceField)
  assert field.choices[0] == ("", "---------")


def test_required_enum_has_no_blank_choice(registry, db):
  registry.model(Team).edit.configure("color", required=True)
  field = build_bundle(Team, "create").form.fields["color"]
  assert ("", "---------") not in field.choices


def test_integer_enum_is_coerced(registry, db):
  registry.model(FieldTest).edit.configure("integer_field", enum=[(1, "One"), (2, "Two")])
  bundle = build_bundle(FieldTest, "create", data={"field_test-integer_field": "2"})
  bundle.form.is_valid()
  assert bundle.form.cleaned_data["integer_field"] == 2


def test_blank_optional_enum_cleans_to_none(db):
  bundle = build_bundle(Team, "create", data={"team-color": ""})
  bundle.form.is_valid()
  assert bundle.form.cleaned_data["color"] is None


def test_invalid_choice_is_rejected(db):
  bundle = build_bundle(Team, "create", data={"team-color": "purple"})
  assert not bundle.form.is_valid()
  assert "color" in bundle.form.errors


def test_serialized_enum_saves_a_list(registry, db):
  registry.model(FieldTest).edit.field("serialized_field", enum=["a", "b", "c"])
  bundle = build_bundle(FieldTest, "create", data={"field_test-serialized_field": ["a", "c"]})
  assert bundle.form.is_valid(), bundle.form.errors
  assert bundle.form.fields["serialized_field"].widget.allow_multiple_selected
  assert bundle.form.cleaned_data["serialized_field"] == ["a", "c"]
