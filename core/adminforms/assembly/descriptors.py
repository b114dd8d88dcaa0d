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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FieldDescriptor:
  """Resolved metadata for one form input."""
  name: str
  method_name: str
  type: str
  nullable: bool
  required: bool
  label: str
  help: str
  visible: bool = True
  default_value: Any = None
  format: Optional[str] = None
  read_only: bool = False
  renderer: Optional[str] = None
  formatted_value: Any = None
  enum_choices: Optional[List[tuple]] = None
  multiple: bool = False
  richtext: Optional[str] = None
  css_class: str = ""
  nested: Optional[Dict[str, bool]] = None
  dom_id: str = ""
  schema: Any = None

  @property
  def related_model(self):
    return getattr(self.schema, "related_model", None)

  @property
  def is_nested(self) -> bool:
    return self.nested is not None

  @property
  def wrapper_classes(self) -> str:
    classes = [f"{self.type}_type", f"{self.name}_field"]
    if self.css_class:
      classes.append(self.css_class)
    return " ".join(classes)


@dataclass
class GroupDescriptor:
  name: str
  label: str
  help: str = ""
  visible: bool = True
  fields: List[FieldDescriptor] = field(default_factory=list)


@dataclass
class AssembledForm:
  """Ordered, visible groups for one (model, action, record)."""
  model: Any
  action: str
  section: str
  record: Any
  param_key: str
  groups: List[GroupDescriptor] = field(default_factory=list)

  @property
  def fields(self) -> List[FieldDescriptor]:
    return [f for g in self.groups for f in g.fields]

  def field(self, name: str) -> Optional[FieldDescriptor]:
    for f in self.fields:
      if f.name == name:
        return f
    return None

  @property
  def is_new(self) -> bool:
    return getattr(self.record, "pk", None) is None
