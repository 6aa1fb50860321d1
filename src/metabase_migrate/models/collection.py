"""Collection entity models."""

from typing import Optional

from pydantic import BaseModel, Field

from .ids import CollectionId


class Collection(BaseModel):
    """Metabase collection model."""

    id: CollectionId = Field(..., description='Collection ID')
    name: Optional[str] = Field(default=None, description='Collection name')
    description: Optional[str] = Field(
        default=None, description='Collection description'
    )
    archived: bool = Field(default=False, description='Collection is archived')

    # Hierarchy
    personal_owner_id: Optional[int] = Field(
        default=None, description='Owning user ID of a personal root collection'
    )
    location: Optional[str] = Field(
        default=None,
        description='Slash-delimited ancestor path, e.g. "/1/5/" ("/" for root level)',
    )

    class Config:
        """Pydantic configuration."""

        extra = 'allow'

    @property
    def is_root_level(self) -> bool:
        """Whether the collection sits directly under the root collection."""
        return not location_segments(self.location)


def location_segments(location: Optional[str]) -> list:
    """Split a collection location path into its non-empty segments.

    ``"/1/5/"`` gives ``["1", "5"]``; ``"/"``, ``""`` and ``None`` give ``[]``.
    """
    if not location:
        return []
    return [segment for segment in location.split('/') if segment]
