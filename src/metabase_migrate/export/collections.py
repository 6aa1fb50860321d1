"""Collection selection and renumbering."""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from ..models.collection import Collection, location_segments
from ..models.ids import CollectionId
from .exceptions import HierarchyResolutionError
from .renumber import lookup, renumber

CollectionMapping = Dict[CollectionId, CollectionId]


def root_ancestor_id(collection: Collection) -> Optional[CollectionId]:
    """Return the id of the root-level ancestor named by the location path.

    Returns ``None`` for root-level collections.

    Raises:
        HierarchyResolutionError: If the root segment is not an integer
    """
    if collection.is_root_level:
        return None

    try:
        return CollectionId(int(location_segments(collection.location)[0]))
    except ValueError:
        raise HierarchyResolutionError(
            f'Invalid location {collection.location!r} for collection {collection.id}',
            collection_id=int(collection.id),
            location=collection.location,
        ) from None


def is_personal(
    collection: Collection, collections_by_id: Mapping[CollectionId, Collection]
) -> bool:
    """Whether the collection is, or lives under, a personal collection.

    An ancestor missing from ``collections_by_id`` counts as not personal.
    """
    if collection.personal_owner_id is not None:
        return True

    root_id = root_ancestor_id(collection)
    if root_id is None:
        return False

    root = collections_by_id.get(root_id)
    if root is None:
        logger.warning(
            f'Root collection {root_id} of collection {collection.id} not found, '
            'treating it as not personal'
        )
        return False

    return root.personal_owner_id is not None


def is_in_subtree(collection: Collection, target_collection_id: CollectionId) -> bool:
    """Whether the collection is the target or has it as root ancestor."""
    if collection.id == target_collection_id:
        return True
    return root_ancestor_id(collection) == target_collection_id


def select_collections(
    collections: Sequence[Collection],
    exclude_personal: bool,
    target_collection_id: Optional[CollectionId] = None,
) -> Tuple[List[Collection], CollectionMapping]:
    """Select the collections to export and renumber them in place.

    Args:
        collections: All collections of the source instance
        exclude_personal: Drop personal collections and their descendants
        target_collection_id: Restrict the export to this collection subtree

    Returns:
        Selected collections (sorted, renumbered) and the id mapping
    """
    collections_by_id = {collection.id: collection for collection in collections}

    selected = [collection for collection in collections if not collection.archived]

    if exclude_personal:
        selected = [
            collection
            for collection in selected
            if not is_personal(collection, collections_by_id)
        ]

    if target_collection_id is not None:
        target_collection_id = CollectionId(target_collection_id)
        selected = [
            collection
            for collection in selected
            if is_in_subtree(collection, target_collection_id)
        ]

    selected.sort(key=lambda collection: collection.id)
    mapping = renumber(collection.id for collection in selected)

    for collection in selected:
        collection.id = lookup(mapping, collection.id, 'collection')

    logger.info(
        f'Selected {len(selected)} of {len(collections)} collections for export'
    )
    return selected, mapping
