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

from typing import Dict, List

from django.core.management.base import BaseCommand

from adminforms.assembly.assembler import assemble_form
from adminforms.config.loader import load_config
from adminforms.config.registry import registry
from adminforms.exceptions import ConfigurationError
from adminforms.rendering.forms import build_form_class
from adminforms.rendering.renderer import get_field_template

CHECKED_ACTIONS = ("new", "edit", "nested")


def check_model(model, reg=registry) -> List[str]:
  """Assemble every form action of `model` and return configuration problems."""
  issues: List[str] = []
  for action in CHECKED_ACTIONS:
    try:
      assembled = assemble_form(model, action, registry=reg)
      build_form_class(assembled)
      for fd in assembled.fields:
        get_field_template(fd)
    except ConfigurationError as exc:
      issues.append(f"{action}: {exc}")
  return issues


class Command(BaseCommand):
  """
  Validate the form configuration against the installed models.

  Every registered model is assembled for the new, edit and nested
  actions; unknown fields, unsupported types, bad formats and missing
  partial templates are reported. Exit code is 0 if no issues are
  found, 1 otherwise.
  """

  help = "Validate the admin form configuration for all registered models."

  def add_arguments(self, parser):
    parser.add_argument(
      "--config",
      dest="config_path",
      default=None,
      help="Path to an adminforms YAML file to load instead of the configured one.",
    )

  def handle(self, *args, **options):
    self.stdout.write("Running adminforms configuration checks…\n")

    if options.get("config_path"):
      try:
        load_config(registry, options["config_path"])
      except ConfigurationError as exc:
        self.stdout.write(self.style.ERROR(f"Could not load configuration: {exc}"))
        raise SystemExit(1)

    models = registry.registered_models()
    issues_by_model: Dict[str, List[str]] = {}
    for model in models:
      issues = check_model(model)
      if issues:
        issues_by_model[model._meta.label] = issues

    self.stdout.write(f"Registered models: {len(models)}")
    self.stdout.write(f"Models with issues: {len(issues_by_model)}\n")

    if not issues_by_model:
      self.stdout.write(self.style.SUCCESS("All form configurations look healthy."))
      return

    for label in sorted(issues_by_model):
      self.stdout.write("")
      self.stdout.write(self.style.WARNING(f"[{label}]"))
      for msg in issues_by_model[label]:
        self.stdout.write(f"  - {msg}")

    self.stdout.write("")
    self.stdout.write(self.style.ERROR("Form configuration check found issues."))
    # Non-zero exit code so this can be used in CI
    raise SystemExit(1)
