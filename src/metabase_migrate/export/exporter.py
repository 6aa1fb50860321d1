"""Export orchestrator - fetches the source graph and runs the selectors."""

from typing import List, Optional

from loguru import logger

from ..models.ids import CollectionId
from ..models.state import MetabaseState
from .cards import select_cards
from .collections import select_collections
from .dashboards import select_dashboards


class MetabaseExporter:
    """Exports a consistent, renumbered subset of a Metabase instance."""

    def __init__(self, client):
        """Initialize exporter.

        Args:
            client: Source API client providing ``get_all_collections``,
                ``get_all_cards`` and ``get_all_dashboards`` coroutines
        """
        self.client = client
        self.warnings: List[str] = []
        self.logger = logger.bind(component='MetabaseExporter')

    async def export(
        self,
        exclude_personal_collections: bool = True,
        target_collection_id: Optional[int] = None,
    ) -> MetabaseState:
        """Export collections, cards and dashboards.

        Collections are selected first because cards are filtered and
        rewritten through the collection mapping, and dashboards through the
        card mapping.

        Args:
            exclude_personal_collections: Skip personal collections and their contents
            target_collection_id: Only export this collection subtree

        Returns:
            Exported state

        Raises:
            MappingLookupError: If a reference can not be rewritten
            HierarchyResolutionError: If a collection location is corrupt
        """
        self.warnings = []
        target = (
            CollectionId(target_collection_id)
            if target_collection_id is not None
            else None
        )

        self.logger.info('Starting Metabase export')

        collections = await self.client.get_all_collections()
        selected_collections, collection_mapping = select_collections(
            collections, exclude_personal_collections, target
        )

        cards = await self.client.get_all_cards()
        selected_cards, card_mapping = select_cards(
            cards, collection_mapping, warnings=self.warnings
        )

        dashboards = await self.client.get_all_dashboards()
        selected_dashboards, _ = select_dashboards(
            dashboards, card_mapping, collection_mapping
        )

        state = MetabaseState(
            collections=selected_collections,
            cards=selected_cards,
            dashboards=selected_dashboards,
        )

        self.logger.info(
            f'Export completed: {len(state.collections)} collections, '
            f'{len(state.cards)} cards, {len(state.dashboards)} dashboards, '
            f'{len(self.warnings)} warnings'
        )
        return state
