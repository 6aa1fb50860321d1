"""Selection and renumbering of the exported Metabase graph."""

from .exceptions import ExportError, HierarchyResolutionError, MappingLookupError
from .renumber import renumber
from .collections import select_collections
from .cards import select_cards
from .dashboards import select_dashboards
from .exporter import MetabaseExporter

__all__ = [
    'ExportError',
    'HierarchyResolutionError',
    'MappingLookupError',
    'renumber',
    'select_collections',
    'select_cards',
    'select_dashboards',
    'MetabaseExporter',
]
