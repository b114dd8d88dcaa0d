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
from django.contrib.auth import get_user_model

from adminforms.config.registry import registry as default_registry
from sample.models import Division, FieldTest, Team


@pytest.fixture(autouse=True)
def registry():
  """Every test starts from (and leaves behind) an empty form configuration."""
  default_registry.reset()
  yield default_registry
  default_registry.reset()


# -------------------------------------------------------------------
# Users and clients
# -------------------------------------------------------------------
@pytest.fixture
def user(db):
  return get_user_model().objects.create_user(username="manager", password="secret")


@pytest.fixture
def staff_user(db):
  return get_user_model().objects.create_user(username="staff", password="secret", is_staff=True)


@pytest.fixture
def admin_client(client, user):
  """Django test client logged in as a regular user."""
  client.force_login(user)
  return client


# -------------------------------------------------------------------
# Sample records
# -------------------------------------------------------------------
@pytest.fixture
def division(db):
  return Division.objects.create(name="National League East")


@pytest.fixture
def team(db, division):
  return Team.objects.create(
    division=division,
    name="Mets",
    manager="Terry Collins",
    ballpark="Citi Field",
    wins=90,
    losses=72,
    win_percentage="0.556",
  )


@pytest.fixture
def field_test(db):
  return FieldTest.objects.create(string_field="existing")

