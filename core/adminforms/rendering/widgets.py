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

from django import forms
from django.forms import widgets as w

from adminforms import constants as c
from adminforms.assembly.descriptors import FieldDescriptor
from adminforms.exceptions import UnsupportedFieldTypeError
from adminforms.formats import parse_value


class ColorInput(w.TextInput):
  input_type = "color"


# ------------------------------------------------------------
# Date / time fields honouring the configured format
# ------------------------------------------------------------
class _FormattedMixin:
  type_tag = None

  def __init__(self, *, fmt, **kwargs):
    self.fmt = fmt
    kwargs.setdefault("input_formats", [fmt])
    super().__init__(**kwargs)

  def strptime(self, value, format):
    return parse_value(value, self.type_tag, self.fmt)


class FormattedDateField(_FormattedMixin, forms.DateField):
  type_tag = c.DATE


class FormattedDateTimeField(_FormattedMixin, forms.DateTimeField):
  type_tag = c.DATETIME


class FormattedTimeField(_FormattedMixin, forms.TimeField):
  type_tag = c.TIME


def _model_formfield(fd: FieldDescriptor, **kwargs):
  model_field = fd.schema.model_field
  return model_field.formfield(**kwargs)


def _string_field(fd):
  if fd.richtext:
    return _model_formfield(fd, widget=w.Textarea(attrs={"data-richtext": fd.richtext}))
  return _model_formfield(fd, widget=w.TextInput)


def _text_field(fd):
  attrs = {"data-richtext": fd.richtext} if fd.richtext else {}
  return _model_formfield(fd, widget=w.Textarea(attrs=attrs))


def _plain_field(fd):
  return _model_formfield(fd)


def _boolean_field(fd):
  return forms.BooleanField(widget=w.CheckboxInput)


def _date_field(fd):
  return FormattedDateField(fmt=fd.format, widget=w.DateInput(format=fd.format))


def _datetime_field(fd):
  return FormattedDateTimeField(fmt=fd.format, widget=w.DateTimeInput(format=fd.format))


def _time_field(fd):
  return FormattedTimeField(fmt=fd.format, widget=w.TimeInput(format=fd.format))


def _enum_field(fd):
  choices = list(fd.enum_choices or [])
  if fd.multiple:
    return forms.MultipleChoiceField(choices=choices, widget=w.SelectMultiple)
  if not fd.required:
    choices = [("", "---------")] + choices
  model_field = fd.schema.model_field
  coerce = str
  if fd.schema.type_tag != c.SERIALIZED and hasattr(model_field, "to_python"):
    coerce = model_field.to_python
  return forms.TypedChoiceField(
    choices=choices,
    coerce=coerce,
    empty_value=None if fd.nullable else "",
    widget=w.Select,
  )


def _color_field(fd):
  return forms.CharField(max_length=fd.schema.max_length, widget=ColorInput)


def _serialized_field(fd):
  return _model_formfield(fd, widget=w.Textarea)


def _belongs_to_field(fd):
  return _model_formfield(fd)


def _to_many_field(fd):
  if not fd.schema.is_reverse:
    return _model_formfield(fd)
  qs = fd.related_model._default_manager.all()
  return forms.ModelMultipleChoiceField(queryset=qs, widget=w.SelectMultiple)


def _has_one_field(fd):
  qs = fd.related_model._default_manager.all()
  return forms.ModelChoiceField(queryset=qs, widget=w.Select)


FIELD_BUILDERS = {
  c.STRING: _string_field,
  c.TEXT: _text_field,
  c.INTEGER: _plain_field,
  c.DECIMAL: _plain_field,
  c.FLOAT: _plain_field,
  c.BOOLEAN: _boolean_field,
  c.DATE: _date_field,
  c.DATETIME: _datetime_field,
  c.TIME: _time_field,
  c.FILE_UPLOAD: _plain_field,
  c.ENUM: _enum_field,
  c.COLOR: _color_field,
  c.SERIALIZED: _serialized_field,
  c.BELONGS_TO: _belongs_to_field,
  c.HAS_MANY: _to_many_field,
  c.HAS_AND_BELONGS_TO_MANY: _to_many_field,
  c.HAS_ONE: _has_one_field,
}


def style_widget(widget) -> None:
  """Bootstrap classes for every widget kind."""
  existing = widget.attrs.get("class", "")
  if isinstance(widget, w.SelectMultiple):
    widget.attrs["class"] = f"{existing} form-select form-select-sm".strip()
    widget.attrs.setdefault("size", "4")
  elif isinstance(widget, w.Select):
    widget.attrs["class"] = f"{existing} form-select".strip()
  elif isinstance(widget, w.CheckboxInput):
    widget.attrs["class"] = f"{existing} form-check-input".strip()
  else:
    widget.attrs["class"] = f"{existing} form-control".strip()


def build_form_field(fd: FieldDescriptor, is_new: bool = True) -> forms.Field:
  """
  Build the Django form field for a descriptor.

  Raises:
    UnsupportedFieldTypeError: when no widget is registered for fd.type.
  """
  try:
    builder = FIELD_BUILDERS[fd.type]
  except KeyError as exc:
    raise UnsupportedFieldTypeError(fd.type, fd.name) from exc

  field = builder(fd)
  if field is None:
    # Model field without a form representation (e.g. non-editable)
    raise UnsupportedFieldTypeError(fd.type, fd.name)

  field.label = fd.label
  field.help_text = fd.help
  field.required = fd.required
  field.widget.is_required = fd.required
  if is_new and fd.default_value is not None:
    field.initial = fd.default_value

  style_widget(field.widget)
  return field
