from adminforms.config.registry import Registry, registry  # noqa: F401
