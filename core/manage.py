#!/usr/bin/env python
import os
import sys
from pathlib import Path


def main():
  root = Path(__file__).resolve().parent.parent
  if str(root) not in sys.path:
    sys.path.insert(0, str(root))
  os.environ.setdefault("DJANGO_SETTINGS_MODULE", "adminforms_site.settings")
  from django.core.management import execute_from_command_line

  execute_from_command_line(sys.argv)


if __name__ == "__main__":
  main()
