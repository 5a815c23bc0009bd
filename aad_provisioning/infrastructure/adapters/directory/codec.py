"""JSON codec between domain objects and directory graph payloads."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any, ClassVar, TypeVar

from pydantic import TypeAdapter, ValidationError

from ....application.exceptions import SerializationError
from ....domain.entities import Application, PasswordCredential, ServicePrincipal
from ....domain.exceptions import DomainError
from ....domain.value_objects import RequiredResourceAccess, ResourceAccess
from .models import (
    ApplicationModel,
    PasswordCredentialModel,
    RequiredResourceAccessModel,
    ResourceAccessModel,
    ServicePrincipalModel,
    WireModel,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectoryProtocolCodec:
    """
    Encodes domain objects to directory JSON and decodes them back.

    Each type is mapped to its wire model explicitly. Compiled adapters are
    created on first use and cached per codec instance; the cache is safe to
    populate from several threads.
    """

    WIRE_MODELS: ClassVar[dict[type, type[WireModel]]] = {
        Application: ApplicationModel,
        PasswordCredential: PasswordCredentialModel,
        RequiredResourceAccess: RequiredResourceAccessModel,
        ResourceAccess: ResourceAccessModel,
        ServicePrincipal: ServicePrincipalModel,
    }

    def __init__(self) -> None:
        """Initialize with an empty adapter cache."""
        self._adapters: dict[Any, TypeAdapter[Any]] = {}
        self._lock = threading.Lock()

    @property
    def cached_types(self) -> frozenset[Any]:
        """Types an adapter has been compiled for."""
        with self._lock:
            return frozenset(self._adapters)

    def encode(self, obj: object) -> str:
        """
        Encode a domain object or wire model as JSON.

        Unset optional fields are left out rather than written as null.
        """
        model_type = self._wire_model_for(type(obj))
        wire = obj if isinstance(obj, WireModel) else model_type.from_entity(obj)
        data = self._adapter(model_type).dump_json(wire, by_alias=True, exclude_none=True)
        return data.decode("utf-8")

    def encode_many(self, items: Sequence[object]) -> str:
        """Encode a homogeneous sequence as a JSON array."""
        if not items:
            return "[]"
        model_type = self._wire_model_for(type(items[0]))
        wires = [i if isinstance(i, WireModel) else model_type.from_entity(i) for i in items]
        data = self._adapter(list[model_type]).dump_json(wires, by_alias=True, exclude_none=True)
        return data.decode("utf-8")

    def decode(self, target: type[T], data: bytes | str) -> T:
        """
        Decode JSON into ``target``, ignoring fields the target does not know.

        Raises:
            SerializationError: If the payload is not valid JSON for ``target``.
        """
        model_type = self._wire_model_for(target)
        try:
            wire = self._adapter(model_type).validate_json(data)
        except ValidationError as e:
            msg = f"Failed to decode {target.__name__}: {e}"
            raise SerializationError(msg) from e

        if target is model_type:
            return wire

        try:
            return wire.to_entity()
        except DomainError as e:
            msg = f"Invalid {target.__name__} in directory response: {e}"
            raise SerializationError(msg) from e

    def _wire_model_for(self, target: type) -> type[WireModel]:
        """Resolve the wire model used for ``target``."""
        if issubclass(target, WireModel):
            return target
        try:
            return self.WIRE_MODELS[target]
        except KeyError:
            msg = f"No directory wire format for {target.__name__}"
            raise SerializationError(msg) from None

    def _adapter(self, key: Any) -> TypeAdapter[Any]:
        """Get or compile the adapter for ``key``."""
        with self._lock:
            adapter = self._adapters.get(key)
            if adapter is None:
                logger.debug("Compiling directory codec for %s", key)
                adapter = TypeAdapter(key)
                self._adapters[key] = adapter
            return adapter
