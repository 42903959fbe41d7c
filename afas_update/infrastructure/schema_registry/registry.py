"""Object type schema registry and lookup (infrastructure).

Base schemas are read from the CSV files shipped in ``data/``. A directory
holding files with the same names can add object types or replace built-in
ones wholesale; it is taken from ``AFAS_SCHEMA_DIR`` or loaded explicitly
with :func:`load_schema_dir`.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from ...config import UpdateConfig
from ...constants import SchemaFiles
from ...domain.entities.element import Element
from ...domain.entities.schema import ObjectSchema
from ...domain.services.object_hooks import (
    BUILTIN_HOOKS,
    NO_HOOKS,
    ObjectHooks,
    SchemaContext,
)
from ...exceptions import SchemaError
from ..logging.current import get_logger
from .loaders import load_rows_by_type, load_type_rows
from .schema_builder import build_schema_from_rows

DATA_DIR = Path(__file__).parent / "data"

_SCHEMA_DEFINITIONS: dict[str, ObjectSchema] = {}
_HOOK_DEFINITIONS: dict[str, ObjectHooks] = {}


def _read_schema_dir(schema_dir: Path) -> list[ObjectSchema]:
    type_rows = load_type_rows(schema_dir / SchemaFiles.OBJECT_TYPES)
    field_rows = load_rows_by_type(schema_dir / SchemaFiles.FIELDS, "Field Name")
    object_rows = load_rows_by_type(schema_dir / SchemaFiles.OBJECTS, "Reference Name")
    unknown = sorted((set(field_rows) | set(object_rows)) - set(type_rows))
    if unknown:
        raise SchemaError(
            f"Schema rows in {schema_dir} refer to undeclared object types: "
            f"{', '.join(unknown)}"
        )
    return [
        build_schema_from_rows(
            object_type,
            type_row,
            field_rows.get(object_type, []),
            object_rows.get(object_type, []),
        )
        for object_type, type_row in type_rows.items()
    ]


@lru_cache(maxsize=1)
def _builtin_schemas() -> tuple[ObjectSchema, ...]:
    return tuple(_read_schema_dir(DATA_DIR))


def _register(schema: ObjectSchema) -> None:
    _SCHEMA_DEFINITIONS[schema.type] = schema


def _ensure_registry_built() -> None:
    if _SCHEMA_DEFINITIONS:
        return

    for schema in _builtin_schemas():
        _register(schema)
    for object_type, hooks in BUILTIN_HOOKS.items():
        _HOOK_DEFINITIONS.setdefault(object_type, hooks)
    get_logger().verbose(
        f"Loaded {len(_SCHEMA_DEFINITIONS)} built-in object types from {DATA_DIR}"
    )

    schema_dir = UpdateConfig.from_env().schema_dir
    if schema_dir is not None:
        load_schema_dir(schema_dir)


def load_schema_dir(schema_dir: Path) -> list[str]:
    """Register every object type defined in ``schema_dir``, replacing existing ones."""
    _ensure_registry_built()
    if not schema_dir.is_dir():
        raise SchemaError(f"Schema directory not found: {schema_dir}")
    schemas = _read_schema_dir(schema_dir)
    for schema in schemas:
        if schema.type in _SCHEMA_DEFINITIONS:
            get_logger().warning(
                f"Object type '{schema.type}' from {schema_dir} replaces the built-in definition"
            )
        _register(schema)
    get_logger().verbose(f"Loaded {len(schemas)} object types from {schema_dir}")
    return [schema.type for schema in schemas]


def reset_registry() -> None:
    """Forget registered schemas and hooks; the next lookup reloads the built-ins."""
    _SCHEMA_DEFINITIONS.clear()
    _HOOK_DEFINITIONS.clear()


def get_schema(object_type: str) -> ObjectSchema:
    _ensure_registry_built()
    if object_type in _SCHEMA_DEFINITIONS:
        return _SCHEMA_DEFINITIONS[object_type]
    raise SchemaError(f"Unknown object type '{object_type}'")


def get_hooks(object_type: str) -> ObjectHooks:
    _ensure_registry_built()
    return _HOOK_DEFINITIONS.get(object_type, NO_HOOKS)


def schema_for(
    object_type: str,
    *,
    parent_type: str = "",
    action: str = "",
    element: Element | None = None,
) -> ObjectSchema:
    """Return the schema of ``object_type`` as it applies in this context.

    The per-type ``adjust_schema`` hook sees the parent type, the action and
    the element's fields and populated child objects. A relation named after
    the parent type is always dropped so an object cannot embed its parent.
    """
    schema = get_schema(object_type)
    hooks = get_hooks(object_type)
    if hooks.adjust_schema is not None:
        context = SchemaContext(
            parent_type=parent_type,
            action=action,
            fields=dict(element.fields) if element is not None else None,
            objects=frozenset(
                name for name, child in element.objects.items() if child.elements
            )
            if element is not None
            else frozenset(),
        )
        schema = hooks.adjust_schema(schema, context)
    if parent_type and schema.relation(parent_type) is not None:
        schema = schema.without_object(parent_type)
    return schema


def register_schema(schema: ObjectSchema, *, override: bool = False) -> None:
    _ensure_registry_built()
    if schema.type in _SCHEMA_DEFINITIONS and not override:
        raise SchemaError(f"Object type '{schema.type}' is already registered")
    names = schema.field_names()
    if len(names) != len(set(names)):
        raise SchemaError(f"Object type '{schema.type}' defines duplicate fields")
    _register(schema)
    get_logger().debug(f"Registered object type '{schema.type}'")


def register_hooks(object_type: str, hooks: ObjectHooks) -> None:
    _ensure_registry_built()
    if object_type not in _SCHEMA_DEFINITIONS:
        raise SchemaError(f"Cannot register hooks for unknown object type '{object_type}'")
    _HOOK_DEFINITIONS[object_type] = hooks


def list_object_types() -> Iterable[str]:
    _ensure_registry_built()
    return _SCHEMA_DEFINITIONS.keys()


def list_hooks() -> dict[str, ObjectHooks]:
    _ensure_registry_built()
    return dict(_HOOK_DEFINITIONS)


class RegistrySchemaResolver:
    """Adapter exposing the module-level registry to the validation services."""

    def schema_for(
        self,
        object_type: str,
        *,
        parent_type: str = "",
        action: str = "",
        element: Element | None = None,
    ) -> ObjectSchema:
        return schema_for(
            object_type, parent_type=parent_type, action=action, element=element
        )

    def hooks_for(self, object_type: str) -> ObjectHooks:
        return get_hooks(object_type)


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
