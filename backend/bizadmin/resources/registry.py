"""Resolve a resource name from the URL to its model and schemas."""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from bizadmin.core.errors import ResourceNotFoundError
from bizadmin.resources.descriptor import EntityDescriptor, describe

logger = logging.getLogger(__name__)

WriteHook = Callable[[dict[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything the generic endpoints need to serve one resource."""

    name: str
    model: type
    read_schema: type[BaseModel]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    prepare_write: WriteHook | None = None

    @property
    def descriptor(self) -> EntityDescriptor:
        return describe(self.model)

    @property
    def alias(self) -> str:
        """Singular kebab-case alias derived from the model class name."""
        return re.sub(r"(?<!^)(?=[A-Z])", "-", self.model.__name__).lower()

    def serialize(self, obj: Any) -> dict:
        return self.read_schema.model_validate(obj).model_dump(mode="json")


def normalize_name(name: str) -> str:
    return name.strip().lower().replace("_", "-")


class ResourceRegistry:
    """Name to definition lookup, filled once at startup."""

    def __init__(self) -> None:
        self._definitions: dict[str, ResourceDefinition] = {}
        self._lookup: dict[str, ResourceDefinition] = {}

    def register(self, definition: ResourceDefinition) -> ResourceDefinition:
        # Fail at startup rather than on the first request.
        describe(definition.model)

        for key in (normalize_name(definition.name), normalize_name(definition.alias)):
            existing = self._lookup.get(key)
            if existing is not None and existing is not definition:
                raise ValueError(
                    f"Resource name '{key}' is already registered for {existing.model.__name__}"
                )
            self._lookup[key] = definition
        self._definitions[definition.name] = definition
        logger.debug("Registered resource %s -> %s", definition.name, definition.model.__name__)
        return definition

    def resolve(self, name: str) -> ResourceDefinition:
        definition = self._lookup.get(normalize_name(name))
        if definition is None:
            raise ResourceNotFoundError(
                f"Resource '{name}' not found.",
                details={"resource": name},
            )
        return definition

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._lookup

    def __iter__(self) -> Iterator[ResourceDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
