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

import os
from typing import List, Optional

TRUE_VALUES = ("1", "true", "yes", "on")


def _raw(key: str) -> Optional[str]:
  val = os.getenv(key)
  if val is None:
    return None
  val = val.strip()
  return val or None


def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
  """Get env var as string; empty values fall back to the default."""
  val = _raw(key)
  return default if val is None else val


def env_bool(key: str, default: bool = False) -> bool:
  """Get env var as boolean (1/true/yes/on)."""
  val = _raw(key)
  return default if val is None else val.lower() in TRUE_VALUES


def env_list(key: str, default: Optional[List[str]] = None, sep: str = ",") -> List[str]:
  """Get separator-delimited env var as a list of non-empty items."""
  val = _raw(key)
  if val is None:
    return list(default or [])
  return [x.strip() for x in val.split(sep) if x.strip()]
