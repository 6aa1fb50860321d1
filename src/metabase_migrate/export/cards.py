"""Card selection, renumbering and reference rewriting."""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from ..models.card import Card
from ..models.ids import CardId, CollectionId
from .renumber import lookup, renumber

CardMapping = Dict[CardId, CardId]


def select_cards(
    cards: Sequence[Card],
    collection_mapping: Mapping[CollectionId, CollectionId],
    warnings: Optional[List[str]] = None,
) -> Tuple[List[Card], CardMapping]:
    """Select the cards to export, renumber them and rewrite their collection.

    A card is kept when it is not archived and either sits in the root
    collection or in a collection present in ``collection_mapping``.

    Args:
        cards: All cards of the source instance
        collection_mapping: Mapping produced by the collection selection
        warnings: Optional list collecting diagnostic messages

    Returns:
        Selected cards (sorted, rewritten) and the card id mapping

    Raises:
        MappingLookupError: If a kept card's collection is missing from the mapping
    """
    selected = [
        card
        for card in cards
        if not card.archived
        and (card.collection_id is None or card.collection_id in collection_mapping)
    ]
    selected.sort(key=lambda card: card.id)
    mapping = renumber(card.id for card in selected)

    for card in selected:
        old_id = card.id
        new_id = lookup(mapping, old_id, 'card')
        logger.info(f'Mapping card {old_id} to {new_id} ({card.name})')
        card.id = new_id

        if card.collection_id is not None:
            card.collection_id = lookup(
                collection_mapping,
                card.collection_id,
                'collection',
                context=f'card {old_id}',
            )

        if not card.dataset_query.is_native:
            message = (
                f'Card {old_id} has a non-SQL definition. Its state might not be '
                f'exported/imported correctly. ({card.name})'
            )
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)

        if not card.description:
            card.description = None

    logger.info(f'Selected {len(selected)} of {len(cards)} cards for export')
    return selected, mapping
