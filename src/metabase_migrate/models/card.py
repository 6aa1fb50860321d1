"""Card (saved question) entity models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .ids import CardId, CollectionId


class DatasetQuery(BaseModel):
    """Query definition of a card."""

    type: Optional[str] = Field(default=None, description='Query type (native, query)')
    database: Optional[int] = Field(default=None, description='Database ID')
    native: Optional[Dict[str, Any]] = Field(
        default=None, description='Native (SQL) query definition'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'allow'

    @property
    def is_native(self) -> bool:
        """Whether the query carries a native definition."""
        return self.native is not None


class Card(BaseModel):
    """Metabase card model."""

    id: CardId = Field(..., description='Card ID')
    name: str = Field(..., description='Card name')
    description: Optional[str] = Field(default=None, description='Card description')
    archived: bool = Field(default=False, description='Card is archived')
    collection_id: Optional[CollectionId] = Field(
        default=None, description='Owning collection ID (None = root collection)'
    )
    display: Optional[str] = Field(default=None, description='Visualization type')
    dataset_query: DatasetQuery = Field(
        default_factory=DatasetQuery, description='Query definition'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'allow'
