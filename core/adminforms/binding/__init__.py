from adminforms.binding.binder import ensure_authorized, save_bundle  # noqa: F401
