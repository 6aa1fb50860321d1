"""Export exceptions."""

from typing import Optional


class ExportError(Exception):
    """Base exception for export errors."""

    pass


class MappingLookupError(ExportError):
    """A reference does not resolve in the mapping of the referenced kind."""

    def __init__(
        self,
        message: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        context: Optional[str] = None,
    ):
        """Initialize mapping lookup error.

        Args:
            message: Error message
            entity_type: Kind of the id that failed to resolve (collection, card, ...)
            entity_id: The id that failed to resolve
            context: Where the reference was found, e.g. "dashboard 4"
        """
        super().__init__(message)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.context = context


class HierarchyResolutionError(ExportError):
    """A collection location path can not be interpreted."""

    def __init__(
        self,
        message: str,
        collection_id: Optional[int] = None,
        location: Optional[str] = None,
    ):
        """Initialize hierarchy resolution error.

        Args:
            message: Error message
            collection_id: Collection whose location is invalid
            location: The offending location path
        """
        super().__init__(message)
        self.collection_id = collection_id
        self.location = location
