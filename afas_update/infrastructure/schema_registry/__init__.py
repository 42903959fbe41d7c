"""Object type schema registry."""

from .registry import (
    RegistrySchemaResolver,
    get_hooks,
    get_schema,
    list_hooks,
    list_object_types,
    load_schema_dir,
    register_hooks,
    register_schema,
    reset_registry,
    schema_for,
)

__all__ = [
    "RegistrySchemaResolver",
    "get_hooks",
    "get_schema",
    "list_hooks",
    "list_object_types",
    "load_schema_dir",
    "register_hooks",
    "register_schema",
    "reset_registry",
    "schema_for",
]
