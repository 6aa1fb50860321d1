"""Exported Metabase state."""

import json
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from .card import Card
from .collection import Collection
from .dashboard import Dashboard


class MetabaseState(BaseModel):
    """Renumbered, self-contained set of exported entities."""

    collections: List[Collection] = Field(
        default_factory=list, description='Exported collections'
    )
    cards: List[Card] = Field(default_factory=list, description='Exported cards')
    dashboards: List[Dashboard] = Field(
        default_factory=list, description='Exported dashboards'
    )

    def to_file(self, state_path: str) -> None:
        """Write the state as JSON."""
        state_file = Path(state_path)
        state_file.parent.mkdir(parents=True, exist_ok=True)

        with open(state_file, 'w', encoding='utf-8') as f:
            json.dump(self.model_dump(mode='json'), f, indent=2)

    @classmethod
    def from_file(cls, state_path: str) -> 'MetabaseState':
        """Load a state previously written by :meth:`to_file`."""
        state_file = Path(state_path)

        if not state_file.exists():
            raise FileNotFoundError(f'State file not found: {state_path}')

        with open(state_file, 'r', encoding='utf-8') as f:
            state_data = json.load(f)

        return cls(**state_data)
