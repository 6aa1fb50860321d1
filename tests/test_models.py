"""Tests for entity models and the state file."""

import json
import os
import tempfile

import pytest

from metabase_migrate.models import (
    Card,
    CardId,
    Collection,
    CollectionId,
    Dashboard,
    MetabaseState,
)


class TestModels:
    """Test model parsing."""

    def test_ids_parsed_as_typed_ids(self):
        """Test integer payload ids become typed ids."""
        card = Card(id=3, name='Revenue', collection_id=4)

        assert type(card.id) is CardId
        assert type(card.collection_id) is CollectionId

    def test_ids_serialized_as_integers(self):
        """Test typed ids dump back to plain integers."""
        card = Card(id=3, name='Revenue', collection_id=4)

        dumped = card.model_dump(mode='json')

        assert dumped['id'] == 3
        assert type(dumped['id']) is int

    def test_missing_native_query(self):
        """Test a card without native definition is not native."""
        card = Card(id=1, name='GUI', dataset_query={'type': 'query'})

        assert card.dataset_query.is_native is False

    def test_dashboard_defaults(self):
        """Test dashboards without placements parse."""
        dashboard = Dashboard(id=1)

        assert dashboard.dashcards == []
        assert dashboard.collection_id is None


class TestMetabaseState:
    """Test state file persistence."""

    def test_state_file_round_trip(self):
        """Test a state written to disk loads back unchanged."""
        state = MetabaseState(
            collections=[Collection(id=1, name='Team', location='/')],
            cards=[Card(id=1, name='Revenue', collection_id=1, cache_ttl=None)],
            dashboards=[
                Dashboard(id=1, collection_id=1, dashcards=[{'id': 1, 'card_id': 1}])
            ],
        )

        with tempfile.TemporaryDirectory() as temp_dir:
            state_path = os.path.join(temp_dir, 'out', 'state.json')
            state.to_file(state_path)

            with open(state_path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            loaded = MetabaseState.from_file(state_path)

        assert raw['dashboards'][0]['dashcards'][0]['card_id'] == 1
        assert loaded.model_dump(mode='json') == state.model_dump(mode='json')

    def test_missing_state_file(self):
        """Test loading a missing state file."""
        with pytest.raises(FileNotFoundError):
            MetabaseState.from_file('/nonexistent/state.json')
