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

from django.conf import settings
from django.core.validators import MaxLengthValidator, MinLengthValidator
from django.db import models
from crum import get_current_user
from generic import display_key

from adminforms.validators import ExactLengthValidator


class AuditFields(models.Model):
  created_at = models.DateTimeField(auto_now_add=True, db_index=True)
  updated_at = models.DateTimeField(auto_now=True, db_index=True)
  created_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, editable=False,
    on_delete=models.SET_NULL, related_name="+")
  updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, editable=False,
    on_delete=models.SET_NULL, related_name="+")

  class Meta:
      abstract = True

  def save(self, *args, **kwargs):
    user = get_current_user()
    if user and not user.is_anonymous:
      if not self.pk and not self.created_by:
        self.created_by = user
      self.updated_by = user
    super().save(*args, **kwargs)


class Division(AuditFields):
  name = models.CharField(max_length=50)

  class Meta:
    ordering = ["name"]

  def __str__(self):
    return self.name


class Team(AuditFields):
  division = models.ForeignKey(Division, on_delete=models.CASCADE, related_name="teams")
  name = models.CharField(max_length=50, blank=True, default="")
  logo_url = models.URLField(blank=True, default="")
  manager = models.CharField(max_length=100)
  ballpark = models.CharField(max_length=100, blank=True, default="")
  mascot = models.CharField(max_length=100, blank=True, default="")
  founded = models.IntegerField(null=True, blank=True)
  wins = models.IntegerField(default=0)
  losses = models.IntegerField(default=0)
  win_percentage = models.DecimalField(max_digits=4, decimal_places=3, default=0)
  revenue = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
  color = models.CharField(max_length=20, null=True, blank=True)

  class Meta:
    ordering = ["name"]

  def __str__(self):
    return display_key(self.division_id and self.division.name, self.name)

  def color_enum(self):
    return ["blue", "green", "red", "white"]


class Player(AuditFields):
  team = models.ForeignKey(Team, null=True, blank=True, on_delete=models.SET_NULL, related_name="players")
  name = models.CharField(max_length=100)
  number = models.IntegerField()
  position = models.CharField(max_length=50, blank=True, default="")
  retired = models.BooleanField(default=False)
  injured = models.BooleanField(default=False)
  born_on = models.DateField(null=True, blank=True)
  notes = models.TextField(blank=True, default="")

  class Meta:
    ordering = ["name"]

  def __str__(self):
    return display_key(self.name, f"#{self.number}" if self.number is not None else None)


class Fan(AuditFields):
  name = models.CharField(max_length=100)
  teams = models.ManyToManyField(Team, blank=True, related_name="fans")
  avatar = models.FileField(upload_to="avatars/", null=True, blank=True)

  class Meta:
    ordering = ["name"]

  def __str__(self):
    return self.name


class FieldTest(models.Model):
  """One column of every supported type, plus nested and protected attributes."""
  string_field = models.CharField(max_length=255, null=True, blank=True)
  text_field = models.TextField(null=True, blank=True)
  integer_field = models.IntegerField(null=True, blank=True)
  float_field = models.FloatField(null=True, blank=True)
  decimal_field = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
  datetime_field = models.DateTimeField(null=True, blank=True)
  date_field = models.DateField(null=True, blank=True)
  time_field = models.TimeField(null=True, blank=True)
  boolean_field = models.BooleanField(default=False)
  format = models.CharField(max_length=255, null=True, blank=True)
  restricted_field = models.CharField(max_length=255, null=True, blank=True)
  protected_field = models.CharField(max_length=255, null=True, blank=True)
  serialized_field = models.JSONField(null=True, blank=True)
  file_field = models.FileField(upload_to="field_tests/", null=True, blank=True)

  attr_accessible = {
    "default": (
      "string_field", "text_field", "integer_field", "float_field", "decimal_field",
      "datetime_field", "date_field", "time_field", "boolean_field", "format",
      "serialized_field", "file_field", "nested_field_tests", "comment",
    ),
    "custom_role": (
      "string_field", "text_field", "integer_field", "float_field", "decimal_field",
      "datetime_field", "date_field", "time_field", "boolean_field", "format",
      "serialized_field", "file_field", "nested_field_tests", "comment",
      "restricted_field",
    ),
  }

  nested_attributes = {
    "nested_field_tests": {"allow_destroy": True},
    "comment": {"allow_destroy": True},
  }

  def __str__(self):
    return display_key("Field test", self.pk)


class NestedFieldTest(models.Model):
  title = models.CharField(max_length=255, null=True, blank=True)
  field_test = models.ForeignKey(FieldTest, on_delete=models.CASCADE, related_name="nested_field_tests")
  another_field_test = models.ForeignKey(FieldTest, null=True, blank=True, on_delete=models.SET_NULL,
    related_name="+")

  def __str__(self):
    return self.title or display_key("Nested field test", self.pk)


class Comment(models.Model):
  content = models.TextField(null=True, blank=True)
  field_test = models.OneToOneField(FieldTest, on_delete=models.CASCADE, related_name="comment")

  def __str__(self):
    return (self.content or "")[:40] or display_key("Comment", self.pk)


class Draft(models.Model):
  team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="drafts")
  player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="drafts")
  date = models.DateField(null=True)
  round = models.IntegerField(null=True)
  pick = models.IntegerField(null=True, blank=True)
  overall = models.IntegerField(null=True, blank=True)
  college = models.CharField(max_length=255, blank=True, default="")
  notes = models.TextField(null=True, blank=True)

  def __str__(self):
    return display_key(self.player_id and self.player.name, self.round and f"round {self.round}")


class Category(models.Model):
  name = models.CharField(max_length=100)
  parent_category = models.ForeignKey("self", null=True, blank=True, on_delete=models.SET_NULL,
    related_name="children")

  class Meta:
    verbose_name_plural = "categories"

  def __str__(self):
    return self.name


class HelpTest(models.Model):
  """Length validators for the generated help texts."""
  name = models.CharField(max_length=50, validators=[MinLengthValidator(1)], blank=True, default="")
  code = models.CharField(max_length=10, validators=[ExactLengthValidator(3)])
  title = models.CharField(max_length=100, validators=[MaxLengthValidator(40)], blank=True, default="")
  division = models.ForeignKey(Division, null=True, blank=True, on_delete=models.SET_NULL,
    help_text="Division the entry belongs to.")

  def __str__(self):
    return self.name or display_key("Help test", self.pk)
