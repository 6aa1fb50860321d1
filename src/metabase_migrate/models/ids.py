"""Typed identifiers for Metabase entities."""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class EntityId(int):
    """Integer-backed identifier bound to one entity kind.

    Ids of different kinds never compare equal, so a ``CardId`` can not be
    looked up in a collection mapping by accident. Comparison with a plain
    ``int`` is still allowed.
    """

    __slots__ = ()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, EntityId) and type(other) is not type(self):
            return False
        return int.__eq__(self, other)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = int.__hash__

    def __repr__(self) -> str:
        return f'{type(self).__name__}({int(self)})'

    def __str__(self) -> str:
        return int.__repr__(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class CollectionId(EntityId):
    """Collection identifier."""

    __slots__ = ()


class CardId(EntityId):
    """Card (saved question) identifier."""

    __slots__ = ()


class DashboardId(EntityId):
    """Dashboard identifier."""

    __slots__ = ()


class DashboardCardId(EntityId):
    """Dashboard card identifier, unique within its dashboard only."""

    __slots__ = ()
