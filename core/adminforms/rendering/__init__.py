from adminforms.rendering.forms import FormBundle, build_bundle  # noqa: F401
from adminforms.rendering.renderer import render_field, render_form  # noqa: F401
