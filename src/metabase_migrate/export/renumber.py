"""Dense renumbering of entity identifiers."""

from typing import Dict, Iterable, Mapping, Optional, TypeVar

from ..models.ids import EntityId
from .exceptions import MappingLookupError

IdType = TypeVar('IdType', bound=EntityId)


def renumber(ids: Iterable[IdType]) -> Dict[IdType, IdType]:
    """Map identifiers onto 1..N, ordered by their original value.

    Duplicates collapse. Each new id is built with the type of the id it
    replaces, so the mapping stays within one entity kind.

    Args:
        ids: Original identifiers of one kind

    Returns:
        Mapping from original id to new id
    """
    return {
        original: type(original)(new_value)
        for new_value, original in enumerate(sorted(set(ids)), start=1)
    }


def lookup(
    mapping: Mapping[IdType, IdType],
    original: IdType,
    entity_type: str,
    context: Optional[str] = None,
) -> IdType:
    """Resolve an id through a mapping.

    Raises:
        MappingLookupError: If the id is not a key of the mapping
    """
    try:
        return mapping[original]
    except KeyError:
        message = f'{entity_type.capitalize()} {int(original)} not found in {entity_type} mapping'
        if context:
            message = f'{message} for {context}'
        raise MappingLookupError(
            message, entity_type=entity_type, entity_id=int(original), context=context
        ) from None
