"""Data models for Metabase entities."""

from .ids import CardId, CollectionId, DashboardCardId, DashboardId, EntityId
from .collection import Collection
from .card import Card, DatasetQuery
from .dashboard import Dashboard, DashboardCard, ParameterMapping, SeriesCard
from .state import MetabaseState

__all__ = [
    'EntityId',
    'CollectionId',
    'CardId',
    'DashboardId',
    'DashboardCardId',
    'Collection',
    'Card',
    'DatasetQuery',
    'Dashboard',
    'DashboardCard',
    'ParameterMapping',
    'SeriesCard',
    'MetabaseState',
]
