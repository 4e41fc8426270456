"""Tests for backlog.db.models module."""

import pytest

from backlog.db.models import (
    Document,
    Epic,
    ItemDetail,
    ItemKind,
    ItemStatus,
    LastItem,
    Story,
)


def make_document(last_item: LastItem) -> Document:
    return Document(
        last_item=last_item,
        epics={
            0: Epic(ItemDetail(0, "Login", "Login flow", ItemStatus.IN_PROGRESS), [0, 1]),
            2: Epic(ItemDetail(2, "Empty", "", ItemStatus.OPEN)),
        },
        stories={
            0: Story(ItemDetail(0, "Add form", "", ItemStatus.OPEN)),
            1: Story(ItemDetail(1, "Validate", "server side", ItemStatus.RESOLVED)),
            5: Story(ItemDetail(5, "Orphan", "no epic", ItemStatus.CLOSED)),
        },
    )


class TestItemStatus:
    """Tests for ItemStatus parsing."""

    def test_values_match_document_literals(self):
        assert [s.value for s in ItemStatus] == ["Open", "InProgress", "Resolved", "Closed"]

    def test_canceled_reads_as_closed(self):
        """Older documents used Canceled for Closed."""
        assert ItemStatus("Canceled") is ItemStatus.CLOSED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            ItemStatus("Blocked")


class TestLastItem:
    """Tests for the last item marker."""

    def test_none_serializes_without_id(self):
        assert LastItem.none().to_dict() == {"type": "None"}

    def test_epic_and_story_serialize_with_id(self):
        assert LastItem.epic(3).to_dict() == {"type": "Epic", "id": 3}
        assert LastItem.story(0).to_dict() == {"type": "Story", "id": 0}

    def test_none_ignores_id_on_read(self):
        assert LastItem.from_dict({"type": "None", "id": 7}).is_none

    def test_wrapped_id_shape(self):
        assert LastItem.from_dict({"type": "Story", "id": {"0": 4}}) == LastItem.story(4)

    def test_points_to_checks_kind(self):
        marker = LastItem.epic(1)
        assert marker.points_to(ItemKind.EPIC, 1)
        assert not marker.points_to(ItemKind.STORY, 1)
        assert not marker.points_to(ItemKind.EPIC, 2)


class TestItemDetail:
    def test_key_order(self):
        detail = ItemDetail(1, "n", "d", ItemStatus.OPEN)
        assert list(detail.to_dict()) == ["description", "id", "name", "status"]

    def test_wrapped_id_shape(self):
        detail = ItemDetail.from_dict(
            {"description": "", "id": {"0": 9}, "name": "x", "status": "Resolved"}
        )
        assert detail.id == 9
        assert detail.status is ItemStatus.RESOLVED


class TestDocument:
    """Tests for Document helpers and serialization."""

    def test_next_ids_on_empty_document(self):
        doc = Document.empty()
        assert doc.next_epic_id() == 0
        assert doc.next_story_id() == 0

    def test_next_ids_follow_maximum(self):
        doc = make_document(LastItem.none())
        assert doc.next_epic_id() == 3
        assert doc.next_story_id() == 6

    def test_orphan_stories(self):
        doc = make_document(LastItem.none())
        assert doc.orphan_stories() == [5]

    def test_owner_of(self):
        doc = make_document(LastItem.none())
        assert doc.owner_of(1) == 0
        assert doc.owner_of(5) is None

    def test_keys_are_strings(self):
        data = make_document(LastItem.none()).to_dict()
        assert list(data) == ["last_item", "epics", "stories"]
        assert set(data["epics"]) == {"0", "2"}
        assert data["epics"]["0"]["stories"] == [0, 1]

    @pytest.mark.parametrize("last_item", [LastItem.none(), LastItem.epic(0), LastItem.story(5)])
    def test_round_trip(self, last_item):
        """A populated document survives to_dict/from_dict unchanged."""
        doc = make_document(last_item)
        assert Document.from_dict(doc.to_dict()) == doc
