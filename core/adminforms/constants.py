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

from django.utils.translation import gettext_lazy as _

# ------------------------------------------------------------
# Field type tags
# ------------------------------------------------------------
STRING = "string"
TEXT = "text"
INTEGER = "integer"
DECIMAL = "decimal"
FLOAT = "float"
BOOLEAN = "boolean"
DATE = "date"
DATETIME = "datetime"
TIME = "time"
FILE_UPLOAD = "file_upload"
ENUM = "enum"
COLOR = "color"
SERIALIZED = "serialized"
BELONGS_TO = "belongs_to_association"
HAS_MANY = "has_many_association"
HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many_association"
HAS_ONE = "has_one_association"

FIELD_TYPES = frozenset({
  STRING, TEXT, INTEGER, DECIMAL, FLOAT, BOOLEAN,
  DATE, DATETIME, TIME,
  FILE_UPLOAD, ENUM, COLOR, SERIALIZED,
  BELONGS_TO, HAS_MANY, HAS_AND_BELONGS_TO_MANY, HAS_ONE,
})

ASSOCIATION_TYPES = frozenset({BELONGS_TO, HAS_MANY, HAS_AND_BELONGS_TO_MANY, HAS_ONE})

# Django internal type -> type tag
INTERNAL_TYPE_MAP = {
  "CharField": STRING,
  "SlugField": STRING,
  "EmailField": STRING,
  "URLField": STRING,
  "UUIDField": STRING,
  "GenericIPAddressField": STRING,
  "TextField": TEXT,
  "IntegerField": INTEGER,
  "BigIntegerField": INTEGER,
  "SmallIntegerField": INTEGER,
  "PositiveIntegerField": INTEGER,
  "PositiveBigIntegerField": INTEGER,
  "PositiveSmallIntegerField": INTEGER,
  "DecimalField": DECIMAL,
  "FloatField": FLOAT,
  "BooleanField": BOOLEAN,
  "NullBooleanField": BOOLEAN,
  "DateField": DATE,
  "DateTimeField": DATETIME,
  "TimeField": TIME,
  "FileField": FILE_UPLOAD,
  "ImageField": FILE_UPLOAD,
  "JSONField": SERIALIZED,
}

# ------------------------------------------------------------
# Sections
# ------------------------------------------------------------
BASE = "base"
LIST = "list"
EDIT = "edit"
CREATE = "create"
UPDATE = "update"
NESTED = "nested"

# section -> parent section
SECTION_PARENTS = {
  BASE: None,
  LIST: BASE,
  EDIT: BASE,
  CREATE: EDIT,
  UPDATE: EDIT,
  NESTED: EDIT,
}

# ------------------------------------------------------------
# Options
# ------------------------------------------------------------
FIELD_OPTIONS = frozenset({
  "label", "help", "visible", "read_only", "required", "optional",
  "default_value", "formatted_value", "date_format", "strftime_format",
  "enum", "enum_method", "multiple", "type", "nested_form",
  "ckeditor", "codemirror", "css_class", "partial",
})

GROUP_OPTIONS = frozenset({"label", "help", "visible", "fields"})

MODEL_OPTIONS = frozenset({"label", "authorized"})

DEFAULT_GROUP = "default"
DEFAULT_GROUP_LABEL = _("Basic info")

# ------------------------------------------------------------
# Date / time formats
# ------------------------------------------------------------
# Named formats, selectable with the `date_format` option
DATE_FORMATS = {
  "default": "%Y-%m-%d",
  "long": "%B %d, %Y",
  "short": "%b %d",
}

DATETIME_FORMATS = {
  "default": "%a, %d %b %Y %H:%M:%S",
  "long": "%B %d, %Y %H:%M",
  "short": "%d %b %H:%M",
}

DEFAULT_DATE_FORMAT = "long"
DEFAULT_DATETIME_FORMAT = "long"
DEFAULT_TIME_FORMAT = "%H:%M"

# ------------------------------------------------------------
# Rich text editors
# ------------------------------------------------------------
RICHTEXT_EDITORS = ("ckeditor", "codemirror")

# Fields never rendered in forms
FORM_EXCLUDE = {"id", "created_at", "created_by", "updated_at", "updated_by"}
