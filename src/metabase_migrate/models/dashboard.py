"""Dashboard entity models."""

from typing import List, Optional

from pydantic import BaseModel, Field, root_validator

from .ids import CardId, CollectionId, DashboardCardId, DashboardId


class ParameterMapping(BaseModel):
    """Mapping of a dashboard filter parameter onto a card."""

    parameter_id: str = Field(..., description='Dashboard parameter ID')
    card_id: CardId = Field(..., description='Target card ID')

    class Config:
        """Pydantic configuration."""

        extra = 'allow'


class SeriesCard(BaseModel):
    """Card overlaid on a dashboard card as an extra series."""

    id: CardId = Field(..., description='Card ID')
    name: Optional[str] = Field(default=None, description='Card name')

    class Config:
        """Pydantic configuration."""

        extra = 'allow'


class DashboardCard(BaseModel):
    """Placement of a card (or a text tile) on a dashboard."""

    id: DashboardCardId = Field(..., description='Dashboard card ID')
    card_id: Optional[CardId] = Field(
        default=None, description='Card ID (None for text/placeholder tiles)'
    )
    parameter_mappings: List[ParameterMapping] = Field(
        default_factory=list, description='Parameter to card mappings'
    )
    series: List[SeriesCard] = Field(
        default_factory=list, description='Additional series cards'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'allow'


class Dashboard(BaseModel):
    """Metabase dashboard model."""

    id: DashboardId = Field(..., description='Dashboard ID')
    name: Optional[str] = Field(default=None, description='Dashboard name')
    description: Optional[str] = Field(
        default=None, description='Dashboard description'
    )
    archived: bool = Field(default=False, description='Dashboard is archived')
    collection_id: Optional[CollectionId] = Field(
        default=None, description='Owning collection ID'
    )
    dashcards: List[DashboardCard] = Field(
        default_factory=list, description='Cards placed on the dashboard'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'allow'

    @root_validator(pre=True)
    def accept_ordered_cards(cls, values):
        """Older Metabase versions return the placements as ``ordered_cards``."""
        if isinstance(values, dict) and 'dashcards' not in values:
            ordered_cards = values.get('ordered_cards')
            if ordered_cards is not None:
                values = {k: v for k, v in values.items() if k != 'ordered_cards'}
                values['dashcards'] = ordered_cards
        return values
