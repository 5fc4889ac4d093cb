"""Metadata carriers for components.

A `ComponentMeta` is an opaque, keyed bag of configuration attached to a
component and handed to its builder. Builders that need typed configuration
turn a meta into a pydantic model with `MaterializableMeta.materialize`.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ConfigDict, ValidationError

from matrioska.models.base import ModelBase
from matrioska.observability.logging import get_logger

logger = get_logger(__name__)


class ComponentMeta(ABC):
    """Interface for keyed component metadata."""

    @abstractmethod
    def lookup(self, key: str) -> Optional[Any]:
        """Retrieves the value stored under a key.

        Args:
            key: The name of the metadata entry.

        Returns:
            The value if present, otherwise None. Never raises.
        """
        pass  # pragma: no cover

    def as_dict(self) -> dict[str, Any]:
        """Returns the enumerable entries of the meta.

        Metas that cannot enumerate their keys describe themselves as empty.
        """
        return {}


class DictMeta(ComponentMeta):
    """A meta backed by a private copy of a string-keyed mapping.

    Later changes to the source mapping do not reach the meta.
    """

    def __init__(self, values: Mapping[str, Any]):
        self.values = copy.deepcopy(dict(values))

    def lookup(self, key: str) -> Optional[Any]:
        return self.values.get(key)

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DictMeta):
            return self.values == other.values
        return NotImplemented

    def __repr__(self) -> str:
        return f"DictMeta({self.values!r})"


class ZipMeta(ComponentMeta):
    """Aggregates multiple metas.

    Lookups are forwarded to the metas in the order they were provided and
    the first non-None value wins.
    """

    def __init__(self, *metas: Any):
        self.metas: tuple[ComponentMeta, ...] = tuple(
            m for m in (as_meta(meta) for meta in metas) if m is not None
        )

    def lookup(self, key: str) -> Optional[Any]:
        for meta in self.metas:
            value = meta.lookup(key)
            if value is not None:
                return value
        return None

    def as_dict(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for meta in reversed(self.metas):
            merged.update(
                {k: v for k, v in meta.as_dict().items() if v is not None}
            )
        return merged

    def __repr__(self) -> str:
        return f"ZipMeta{self.metas!r}"


class MaterializableMeta(ModelBase, ComponentMeta):
    """A typed meta built from declared pydantic fields.

    Lookups only see declared fields: a key naming a declared field returns
    its value, any other key returns None. A field holding None is
    indistinguishable from an undeclared key.

    Subclasses are materializable: `materialize` turns any meta carrying the
    right keys into an instance, or returns None when the keys are missing
    or invalid.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    def lookup(self, key: str) -> Optional[Any]:
        if key in type(self).model_fields:
            return getattr(self, key)
        return None

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_meta(cls, meta: ComponentMeta):
        """Builds an instance by looking up each declared field in `meta`.

        Args:
            meta: The meta providing the values.

        Returns:
            A new instance, or None if the values do not validate.
        """
        values = {}
        for name in cls.model_fields:
            value = meta.lookup(name)
            if value is not None:
                values[name] = value
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            logger.debug(
                f"Cannot materialize {cls.__name__} from meta",
                extra={
                    "extra_fields": {
                        "event": "meta_not_materialized",
                        "target": cls.__name__,
                        "errors": e.error_count(),
                    }
                },
            )
            return None

    @classmethod
    def materialize(cls, meta: Any):
        """Materializes a meta into this type.

        Args:
            meta: A meta representation (a ComponentMeta or a mapping),
                an already materialized instance, or None.

        Returns:
            None when `meta` is None or cannot represent metadata, `meta`
            itself when it already is an instance of this type, otherwise
            the result of `from_meta`.
        """
        if meta is None:
            return None
        if isinstance(meta, cls):
            return meta
        try:
            source = as_meta(meta)
        except TypeError:
            logger.debug(
                f"Cannot materialize {cls.__name__} from {type(meta).__name__}",
                extra={
                    "extra_fields": {
                        "event": "meta_not_materialized",
                        "target": cls.__name__,
                        "source": type(meta).__name__,
                    }
                },
            )
            return None
        return cls.from_meta(source)


def as_meta(value: Any) -> Optional[ComponentMeta]:
    """Coerces a value into a ComponentMeta.

    Args:
        value: None, a ComponentMeta, or a string-keyed mapping.

    Returns:
        The value itself for metas, a DictMeta for mappings, None for None.

    Raises:
        TypeError: If the value cannot represent metadata.
    """
    if value is None or isinstance(value, ComponentMeta):
        return value
    if isinstance(value, Mapping):
        return DictMeta(value)
    raise TypeError(f"Cannot use {type(value).__name__} as component meta")
