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

from django.template import TemplateDoesNotExist
from django.template.loader import get_template, render_to_string

from adminforms.assembly.descriptors import FieldDescriptor
from adminforms.exceptions import ConfigurationError
from adminforms.rendering.forms import FormBundle

"""
HTML rendering of assembled forms.

Each field descriptor maps to one partial under adminforms/fields/:
  _read_only.html  read-only fields (formatted value as text)
  _nested.html     nested has-many / has-one sub-forms
  _input.html      everything else (the Django widget)
A `partial` option selects adminforms/fields/<partial>.html instead.
"""

FIELD_TEMPLATE_DIR = "adminforms/fields"


def field_template_name(fd: FieldDescriptor) -> str:
  if fd.renderer:
    return f"{FIELD_TEMPLATE_DIR}/{fd.renderer}.html"
  if fd.read_only:
    return f"{FIELD_TEMPLATE_DIR}/_read_only.html"
  if fd.is_nested:
    return f"{FIELD_TEMPLATE_DIR}/_nested.html"
  return f"{FIELD_TEMPLATE_DIR}/_input.html"


def get_field_template(fd: FieldDescriptor):
  name = field_template_name(fd)
  try:
    return get_template(name)
  except TemplateDoesNotExist as exc:
    raise ConfigurationError(
      f"Field {fd.name!r} uses partial {fd.renderer!r} but template {name!r} does not exist."
    ) from exc


def field_context(bundle: FormBundle, fd: FieldDescriptor, form=None) -> dict:
  form = form if form is not None else bundle.form
  bound = form[fd.name] if fd.name in form.fields else None
  return {
    "bundle": bundle,
    "form": form,
    "fd": fd,
    "bf": bound,
    "formset": bundle.formsets.get(fd.name) if form is bundle.form else None,
  }


def render_field(bundle: FormBundle, fd: FieldDescriptor, form=None, request=None) -> str:
  template = get_field_template(fd)
  return template.render(field_context(bundle, fd, form), request)


def render_form(bundle: FormBundle, request=None) -> str:
  """Render all groups of a bundle (without the surrounding <form> tag)."""
  return render_to_string("adminforms/_form_body.html", {"bundle": bundle}, request=request)
