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
from django.urls import reverse

from sample.models import Team
from tests._form_helpers import team_post_data


# ---------------------------------------------------------------------
# Access
# ---------------------------------------------------------------------

def test_anonymous_users_are_sent_to_login(client, db):
  url = reverse("team_list")
  resp = client.get(url)
  assert resp.status_code == 302
  assert resp["Location"].startswith("/accounts/login/")
  assert f"next={url}" in resp["Location"]


def test_unauthorized_model_returns_403(admin_client, registry, team):
  registry.model(Team).set(authorized=False)
  assert admin_client.get(reverse("team_list")).status_code == 403
  assert admin_client.get(reverse("team_edit", kwargs={"pk": team.pk})).status_code == 403
  assert admin_client.post(reverse("team_delete", kwargs={"pk": team.pk})).status_code == 403
  assert Team.objects.filter(pk=team.pk).exists()


def test_authorization_per_action(admin_client, registry, team):
  registry.model(Team).set(authorized=lambda user, action, record: action != "new")
  resp = admin_client.get(reverse("team_list"))
  assert resp.status_code == 200
  assert reverse("team_create") not in resp.content.decode()
  assert admin_client.get(reverse("team_create")).status_code == 403


# ---------------------------------------------------------------------
# List
# ---------------------------------------------------------------------

def test_list_page_shows_records(admin_client, team):
  resp = admin_client.get(reverse("team_list"))
  assert resp.status_code == 200
  html = resp.content.decode()
  assert "Terry Collins" in html
  assert reverse("team_edit", kwargs={"pk": team.pk}) in html
  assert reverse("team_create") in html


def test_list_respects_hidden_columns(admin_client, registry, team):
  registry.model(Team).list.configure("manager", hide=True)
  html = admin_client.get(reverse("team_list")).content.decode()
  assert "Terry Collins" not in html
  assert "Citi Field" in html


def test_index_page(admin_client):
  resp = admin_client.get(reverse("adminforms_index"))
  assert resp.status_code == 200


# ---------------------------------------------------------------------
# Create / edit
# ---------------------------------------------------------------------

def test_new_page_renders_form(admin_client, db):
  resp = admin_client.get(reverse("team_create"))
  assert resp.status_code == 200
  html = resp.content.decode()
  assert "New Team" in html
  assert 'name="team-manager"' in html
  assert 'id="team_manager_field"' in html
  assert 'enctype="multipart/form-data"' in html


def test_create_redirects_and_flashes(admin_client, division):
  resp = admin_client.post(reverse("team_create"), team_post_data(division), follow=True)
  assert resp.status_code == 200
  assert resp.redirect_chain[-1][0] == reverse("team_list")
  assert "Team successfully created" in resp.content.decode()

  team = Team.objects.get()
  assert team.manager == "Joe Girardi"
  assert team.division == division
  assert team.created_by is not None
  assert team.created_by.username == "manager"


def test_save_and_continue_returns_to_edit(admin_client, division):
  data = team_post_data(division, _continue="1")
  resp = admin_client.post(reverse("team_create"), data)
  team = Team.objects.get()
  assert resp.status_code == 302
  assert resp["Location"] == reverse("team_edit", kwargs={"pk": team.pk})


def test_edit_page_shows_current_values(admin_client, team):
  resp = admin_client.get(reverse("team_edit", kwargs={"pk": team.pk}))
  assert resp.status_code == 200
  html = resp.content.decode()
  assert "Edit Team" in html
  assert 'value="Terry Collins"' in html


def test_edit_updates_record(admin_client, team, division):
  data = team_post_data(division, **{"team-manager": "Mickey Callaway", "team-name": "Mets"})
  resp = admin_client.post(reverse("team_edit", kwargs={"pk": team.pk}), data, follow=True)
  assert "Team successfully updated" in resp.content.decode()
  team.refresh_from_db()
  assert team.manager == "Mickey Callaway"
  assert team.updated_by.username == "manager"


def test_invalid_post_rerenders_with_errors(admin_client, division):
  data = team_post_data(division, **{"team-manager": ""})
  resp = admin_client.post(reverse("team_create"), data)
  assert resp.status_code == 200
  html = resp.content.decode()
  assert "Team failed to be saved" in html
  assert "This field is required." in html
  assert "control-group" in html and " error" in html
  assert not Team.objects.exists()


def test_unknown_record_is_404(admin_client, db):
  assert admin_client.get(reverse("team_edit", kwargs={"pk": 999})).status_code == 404


def test_model_label_option_is_used_in_messages(admin_client, registry, division):
  registry.model(Team).set(label="Club")
  resp = admin_client.post(reverse("team_create"), team_post_data(division), follow=True)
  assert "Club successfully created" in resp.content.decode()


# ---------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------

def test_delete_asks_for_confirmation(admin_client, team):
  resp = admin_client.get(reverse("team_delete", kwargs={"pk": team.pk}))
  assert resp.status_code == 200
  assert Team.objects.filter(pk=team.pk).exists()


def test_delete_removes_record(admin_client, team):
  resp = admin_client.post(reverse("team_delete", kwargs={"pk": team.pk}), follow=True)
  assert resp.redirect_chain[-1][0] == reverse("team_list")
  assert "Team successfully deleted" in resp.content.decode()
  assert not Team.objects.filter(pk=team.pk).exists()


@pytest.mark.parametrize("method", ["put", "patch"])
def test_other_methods_are_rejected(admin_client, team, method):
  resp = getattr(admin_client, method)(reverse("team_edit", kwargs={"pk": team.pk}))
  assert resp.status_code == 404
