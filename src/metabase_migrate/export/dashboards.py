"""Dashboard selection, renumbering and card reference rewriting."""

from typing import Dict, List, Mapping, Sequence, Tuple

from loguru import logger

from ..models.dashboard import Dashboard
from ..models.ids import CardId, CollectionId, DashboardId
from .renumber import lookup, renumber

DashboardMapping = Dict[DashboardId, DashboardId]


def rewrite_dashboard_cards(
    dashboard: Dashboard,
    card_mapping: Mapping[CardId, CardId],
    dashboard_label: str,
) -> None:
    """Renumber the dashboard cards of one dashboard and rewrite card references.

    Dashboard card ids are only unique within a dashboard, so each dashboard
    gets its own mapping.
    """
    dashcard_mapping = renumber(dashcard.id for dashcard in dashboard.dashcards)

    for dashcard in sorted(dashboard.dashcards, key=lambda dashcard: dashcard.id):
        dashcard.id = lookup(
            dashcard_mapping, dashcard.id, 'dashboard card', context=dashboard_label
        )

        if dashcard.card_id is not None:
            dashcard.card_id = lookup(
                card_mapping, dashcard.card_id, 'card', context=dashboard_label
            )

        for parameter in dashcard.parameter_mappings:
            parameter.card_id = lookup(
                card_mapping,
                parameter.card_id,
                'card',
                context=f'parameter {parameter.parameter_id}, {dashboard_label}',
            )

        for series_card in dashcard.series:
            series_card.id = lookup(
                card_mapping,
                series_card.id,
                'card',
                context=f'series {series_card.name}, {dashboard_label}',
            )


def select_dashboards(
    dashboards: Sequence[Dashboard],
    card_mapping: Mapping[CardId, CardId],
    collection_mapping: Mapping[CollectionId, CollectionId],
) -> Tuple[List[Dashboard], DashboardMapping]:
    """Select the dashboards to export and rewrite them in place.

    Only non-archived dashboards stored in an exported collection are kept.

    Args:
        dashboards: All dashboards of the source instance, fully hydrated
        card_mapping: Mapping produced by the card selection of the same run
        collection_mapping: Mapping produced by the collection selection

    Returns:
        Selected dashboards (sorted, rewritten) and the dashboard id mapping

    Raises:
        MappingLookupError: If a dashboard references a card that is not exported
    """
    selected = [
        dashboard
        for dashboard in dashboards
        if not dashboard.archived
        and dashboard.collection_id is not None
        and dashboard.collection_id in collection_mapping
    ]
    selected.sort(key=lambda dashboard: dashboard.id)
    mapping = renumber(dashboard.id for dashboard in selected)

    for dashboard in selected:
        old_id = dashboard.id
        dashboard.id = lookup(mapping, old_id, 'dashboard')
        logger.debug(f'Mapping dashboard {old_id} to {dashboard.id}')
        rewrite_dashboard_cards(dashboard, card_mapping, f'dashboard {old_id}')

    logger.info(
        f'Selected {len(selected)} of {len(dashboards)} dashboards for export'
    )
    return selected, mapping
