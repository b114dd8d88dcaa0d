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
from django.core.exceptions import PermissionDenied

from adminforms.assembly.assembler import assemble_form, is_authorized
from adminforms.binding.binder import ensure_authorized, save_bundle
from adminforms.rendering.forms import build_bundle
from sample.models import FieldTest, Team
from tests._form_helpers import field_test_post_data, team_post_data


def _names(assembled):
  return [fd.name for fd in assembled.fields]


# ---------------------------------------------------------------------
# attr_accessible
# ---------------------------------------------------------------------

def test_restricted_fields_are_hidden_for_the_default_role(db):
  names = _names(assemble_form(FieldTest, "create"))
  assert "string_field" in names
  assert "restricted_field" not in names
  assert "protected_field" not in names


def test_role_resolver_unlocks_restricted_fields(registry, staff_user, user):
  registry.set_attr_accessible_role("sample.roles.role_for_user")
  assert "restricted_field" in _names(assemble_form(FieldTest, "create", user=staff_user))
  assert "restricted_field" not in _names(assemble_form(FieldTest, "create", user=user))
  assert "protected_field" not in _names(assemble_form(FieldTest, "create", user=staff_user))


def test_read_only_fields_are_shown_even_when_not_accessible(registry, field_test):
  registry.model(FieldTest).edit.configure("protected_field", read_only=True)
  fd = assemble_form(FieldTest, "edit", record=field_test).field("protected_field")
  assert fd is not None
  assert fd.read_only is True


def test_inaccessible_values_are_never_assigned(db):
  data = field_test_post_data(**{
    "field_test-string_field": "allowed",
    "field_test-restricted_field": "sneaky",
    "field_test-protected_field": "sneaky",
  })
  bundle = build_bundle(FieldTest, "create", data=data)
  assert bundle.is_valid(), bundle.errors
  record = save_bundle(bundle)
  record.refresh_from_db()
  assert record.string_field == "allowed"
  assert record.restricted_field is None
  assert record.protected_field is None


def test_read_only_values_are_never_assigned(registry, field_test):
  registry.model(FieldTest).edit.configure("string_field", read_only=True)
  data = field_test_post_data(**{"field_test-string_field": "changed"})
  bundle = build_bundle(FieldTest, "edit", record=field_test, data=data)
  assert bundle.is_valid(), bundle.errors
  save_bundle(bundle)
  field_test.refresh_from_db()
  assert field_test.string_field == "existing"


# ---------------------------------------------------------------------
# authorized
# ---------------------------------------------------------------------

def test_unconfigured_models_are_authorized(user):
  assert is_authorized(Team, user, "edit")


def test_literal_authorized_option(registry, user):
  registry.model(Team).set(authorized=False)
  assert not is_authorized(Team, user, "edit")
  with pytest.raises(PermissionDenied):
    ensure_authorized(Team, user, "edit")


def test_callable_authorized_option(registry, user, staff_user):
  registry.model(Team).set(authorized=lambda u, action, record: action == "list" or u.is_staff)
  assert is_authorized(Team, user, "list")
  assert not is_authorized(Team, user, "new")
  assert is_authorized(Team, staff_user, "new")


def test_global_authorized_option_applies_to_every_model(registry, user):
  registry.defaults.set(authorized=False)
  assert not is_authorized(FieldTest, user, "new")
  registry.model(FieldTest).set(authorized=True)
  assert is_authorized(FieldTest, user, "new")


def test_save_checks_authorization(registry, user, division):
  registry.model(Team).set(authorized=False)
  bundle = build_bundle(Team, "create", data=team_post_data(division))
  assert bundle.is_valid(), bundle.errors
  with pytest.raises(PermissionDenied):
    save_bundle(bundle, user=user)
  assert not Team.objects.exists()
