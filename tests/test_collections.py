"""Tests for collection selection."""

import pytest

from metabase_migrate.export.collections import (
    is_in_subtree,
    is_personal,
    root_ancestor_id,
    select_collections,
)
from metabase_migrate.export.exceptions import HierarchyResolutionError
from metabase_migrate.models.collection import Collection
from metabase_migrate.models.ids import CollectionId


def make_collection(collection_id, location='/', **kwargs):
    """Build a collection with sensible defaults."""
    return Collection(
        id=collection_id, name=f'Collection {collection_id}', location=location, **kwargs
    )


class TestHierarchy:
    """Test location path interpretation."""

    def test_root_ancestor_of_nested_collection(self):
        """Test the first location segment is the root ancestor."""
        collection = make_collection(9, location='/1/5/')

        assert root_ancestor_id(collection) == CollectionId(1)

    @pytest.mark.parametrize('location', ['/', '', None, '//'])
    def test_root_level_has_no_ancestor(self, location):
        """Test root-level collections have no root ancestor."""
        collection = make_collection(9, location=location)

        assert root_ancestor_id(collection) is None
        assert collection.is_root_level is True

    def test_invalid_location_raises(self):
        """Test a non-numeric segment is a hard error."""
        collection = make_collection(9, location='/abc/')

        with pytest.raises(HierarchyResolutionError) as exc_info:
            root_ancestor_id(collection)

        assert exc_info.value.collection_id == 9
        assert exc_info.value.location == '/abc/'

    def test_personal_via_root_ancestor(self):
        """Test personal status is inherited from the root ancestor."""
        root = make_collection(1, personal_owner_id=42)
        child = make_collection(2, location='/1/')
        collections_by_id = {c.id: c for c in [root, child]}

        assert is_personal(root, collections_by_id) is True
        assert is_personal(child, collections_by_id) is True

    def test_missing_root_ancestor_is_not_personal(self):
        """Test an unresolvable root ancestor counts as not personal."""
        orphan = make_collection(2, location='/77/')

        assert is_personal(orphan, {orphan.id: orphan}) is False

    def test_subtree_membership(self):
        """Test subtree membership by id or root ancestor."""
        target = CollectionId(1)

        assert is_in_subtree(make_collection(1), target) is True
        assert is_in_subtree(make_collection(2, location='/1/'), target) is True
        assert is_in_subtree(make_collection(4, location='/1/2/'), target) is True
        assert is_in_subtree(make_collection(3), target) is False


class TestSelectCollections:
    """Test collection selection and renumbering."""

    def test_archived_dropped(self):
        """Test archived collections are not exported."""
        collections = [
            make_collection(1),
            make_collection(2, archived=True),
            make_collection(3),
        ]

        selected, mapping = select_collections(collections, exclude_personal=False)

        assert mapping == {CollectionId(1): CollectionId(1), CollectionId(3): CollectionId(2)}
        assert [c.id for c in selected] == [1, 2]

    def test_personal_exclusion(self):
        """Test a personal collection and its descendants are excluded."""
        collections = [
            make_collection(1, personal_owner_id=7),
            make_collection(2, location='/1/'),
        ]

        selected, mapping = select_collections(collections, exclude_personal=True)

        assert selected == []
        assert mapping == {}

    def test_personal_kept_when_not_excluded(self):
        """Test personal collections are exported when requested."""
        collections = [
            make_collection(1, personal_owner_id=7),
            make_collection(2, location='/1/'),
        ]

        selected, mapping = select_collections(collections, exclude_personal=False)

        assert len(selected) == 2

    def test_personal_root_resolved_in_unfiltered_set(self):
        """Test an archived personal root still marks its children personal."""
        collections = [
            make_collection(1, personal_owner_id=7, archived=True),
            make_collection(2, location='/1/'),
            make_collection(3),
        ]

        selected, mapping = select_collections(collections, exclude_personal=True)

        assert list(mapping.keys()) == [CollectionId(3)]
        assert selected[0].name == 'Collection 3'

    def test_subtree_selection(self):
        """Test only the target subtree is exported."""
        collections = [
            make_collection(1, location=''),
            make_collection(2, location='/1/'),
            make_collection(3, location=''),
        ]

        selected, mapping = select_collections(
            collections, exclude_personal=False, target_collection_id=CollectionId(1)
        )

        assert mapping == {CollectionId(1): CollectionId(1), CollectionId(2): CollectionId(2)}
        assert [c.name for c in selected] == ['Collection 1', 'Collection 2']

    def test_subtree_selection_accepts_plain_int(self):
        """Test the target id may be given as a plain integer."""
        collections = [make_collection(5), make_collection(8, location='/5/')]

        selected, mapping = select_collections(
            collections, exclude_personal=False, target_collection_id=5
        )

        assert [c.id for c in selected] == [1, 2]

    def test_renumbered_in_place_sorted(self):
        """Test selected collections are sorted and renumbered in place."""
        collections = [make_collection(30), make_collection(10), make_collection(20)]

        selected, mapping = select_collections(collections, exclude_personal=False)

        assert [c.name for c in selected] == [
            'Collection 10',
            'Collection 20',
            'Collection 30',
        ]
        assert [c.id for c in selected] == [1, 2, 3]
        assert all(type(c.id) is CollectionId for c in selected)

    def test_invalid_location_aborts(self):
        """Test corrupt location data aborts selection."""
        collections = [make_collection(1), make_collection(2, location='/x/')]

        with pytest.raises(HierarchyResolutionError):
            select_collections(collections, exclude_personal=True)
