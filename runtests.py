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
import sys
from pathlib import Path

import pytest


def main():
  """Configure Django and run pytest."""
  root = Path(__file__).resolve().parent

  # Ensure 'core' (apps, settings) and the repository root ('utils') can be imported
  for p in (root / "core", root):
    if str(p) not in sys.path:
      sys.path.insert(0, str(p))

  os.environ.setdefault("DJANGO_SETTINGS_MODULE", "adminforms_site.settings")

  # Run tests in core/tests
  return pytest.main(["core/tests", *sys.argv[1:]])


if __name__ == "__main__":
  raise SystemExit(main())
