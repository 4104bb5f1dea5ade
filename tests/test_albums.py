"""Tests for the album service.

This module tests the album operations:
- list_albums / search_albums (paged)
- gallery_view / gallery_groups
- list_albums_for_owner
- create_album / update_album / partial_update_album / delete_album
"""

from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from albumcat import albums as album_service
from albumcat.errors import FieldValidationError, NotFoundError
from albumcat.metadata import Album, AlbumTag, Photo, Tag, User
from albumcat.models.requests import AlbumCreateRequest, AlbumPatchRequest, AlbumUpdateRequest
from albumcat.pagination import PageRequest
from albumcat.search.criteria import SortBy, normalize_criteria
from albumcat.search.ordering import MISCELLANEOUS_LABEL


# ============================================================================
# Reads
# ============================================================================

class TestGetAlbum:
    def test_found(self, test_db: Session, make_album, make_tag):
        album = make_album("Holiday", tags=[make_tag("beach")])

        record = album_service.get_album(test_db, album.id)

        assert record.name == "Holiday"
        assert [tag.name for tag in record.tags] == ["beach"]

    def test_missing_is_none(self, test_db: Session):
        assert album_service.get_album(test_db, 999) is None


class TestListAlbums:
    def test_paged_with_field_sort(self, test_db: Session, make_album):
        for name in ("Charlie", "Alpha", "Bravo"):
            make_album(name)

        page = album_service.list_albums(test_db, PageRequest.of(page=0, size=2, sort=["name,asc"]))

        assert [record.name for record in page.items] == ["Alpha", "Bravo"]
        assert page.total == 3
        assert page.total_pages == 2

    def test_default_order_is_id(self, test_db: Session, make_album):
        first = make_album("Zulu")
        second = make_album("Alpha")

        page = album_service.list_albums(test_db, PageRequest.of())

        assert [record.id for record in page.items] == [first.id, second.id]

    def test_eagerload_false_skips_tags(self, test_db: Session, make_album, make_tag):
        make_album("Tagged", tags=[make_tag("beach")])

        page = album_service.list_albums(test_db, PageRequest.of(), eagerload=False)

        assert page.items[0].tags == []

    def test_bad_sort_field(self, test_db: Session):
        with pytest.raises(FieldValidationError):
            album_service.list_albums(test_db, PageRequest.of(sort=["nope,asc"]))


class TestSearchAlbums:
    def test_keyword_substring_in_description(self, test_db: Session, make_album):
        concat = make_album("Code", description="concatenate")
        make_album("Pets", description="dog")

        page = album_service.search_albums(test_db, normalize_criteria(keyword="cat"), PageRequest.of())

        assert [record.id for record in page.items] == [concat.id]
        assert page.total == 1

    def test_tagged_albums_appear_once(self, test_db: Session, make_album, make_tag):
        tags = [make_tag(f"summer-{index}") for index in range(4)]
        album = make_album("Summer", tags=tags)

        page = album_service.search_albums(test_db, normalize_criteria(tag_name="summer"), PageRequest.of())

        assert [record.id for record in page.items] == [album.id]
        assert len(page.items[0].tags) == 4
        assert page.total == 1

    def test_non_ascii_keyword_is_case_insensitive(self, test_db: Session, make_album):
        album = make_album("ÉCOLE trip")

        page = album_service.search_albums(test_db, normalize_criteria(keyword="école"), PageRequest.of())

        assert [record.id for record in page.items] == [album.id]
        assert page.total == 1

    def test_date_sort(self, test_db: Session, make_album):
        old = make_album("Old", creation_date=datetime(2020, 1, 1))
        new = make_album("New", creation_date=datetime(2023, 1, 1))

        page = album_service.search_albums(test_db, normalize_criteria(sort_by="DATE"), PageRequest.of())

        assert [record.id for record in page.items] == [new.id, old.id]


class TestGallery:
    def test_event_gallery(self, test_db: Session, make_album):
        a = make_album("Zebra", event=None)
        b = make_album("Apple", event="Party")
        c = make_album("Apple", event=None)

        records = album_service.gallery_view(test_db, SortBy.EVENT)

        assert [record.id for record in records] == [c.id, a.id, b.id]

    def test_gallery_cap(self, test_db: Session, make_album):
        for index in range(5):
            make_album(f"Album {index}")

        assert len(album_service.gallery_view(test_db, SortBy.EVENT, limit=3)) == 3

    def test_gallery_cap_from_settings(self, test_db: Session, make_album, monkeypatch):
        from albumcat.settings import settings

        monkeypatch.setattr(settings, "gallery_max_results", 2)
        for index in range(4):
            make_album(f"Album {index}")

        assert len(album_service.gallery_view(test_db)) == 2

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_keeps_configured_cap(self, test_db: Session, make_album, monkeypatch, limit):
        from albumcat.settings import settings

        monkeypatch.setattr(settings, "gallery_max_results", 3)
        for index in range(5):
            make_album(f"Album {index}")

        assert len(album_service.gallery_view(test_db, SortBy.EVENT, limit=limit)) == 3

    def test_limit_cannot_raise_cap(self, test_db: Session, make_album, monkeypatch):
        from albumcat.settings import settings

        monkeypatch.setattr(settings, "gallery_max_results", 2)
        for index in range(4):
            make_album(f"Album {index}")

        assert len(album_service.gallery_view(test_db, SortBy.EVENT, limit=10)) == 2

    def test_groups(self, test_db: Session, make_album):
        make_album("Loose", event=None)
        make_album("Cake", event="Birthday")

        groups = album_service.gallery_groups(test_db, SortBy.EVENT)

        assert [group.label for group in groups] == [MISCELLANEOUS_LABEL, "Birthday"]


class TestListAlbumsForOwner:
    def test_exact_login_only(self, test_db: Session, make_album, make_user):
        alice = make_user("alice")
        malice = make_user("malice")
        mine = make_album("Mine", owner=alice)
        make_album("Not mine", owner=malice)
        make_album("Orphan")

        records = album_service.list_albums_for_owner(test_db, "alice")

        assert [record.id for record in records] == [mine.id]

    def test_unknown_login(self, test_db: Session, make_album):
        make_album("Orphan")
        assert album_service.list_albums_for_owner(test_db, "ghost") == []


# ============================================================================
# Writes
# ============================================================================

class TestCreateAlbum:
    def test_defaults_creation_date(self, test_db: Session):
        before = datetime.utcnow()
        record = album_service.create_album(test_db, AlbumCreateRequest(name="Fresh"))

        assert record.id is not None
        assert record.creation_date >= before.replace(microsecond=0)
        assert record.user is None
        assert record.tags == []

    def test_with_tags_and_owner(self, test_db: Session, make_tag):
        beach = make_tag("beach")
        sun = make_tag("sun")
        test_db.commit()

        record = album_service.create_album(
            test_db,
            AlbumCreateRequest(name="Trip", event="Holiday", tag_ids=[sun.id, beach.id, sun.id]),
            owner_login="alice",
        )

        assert record.user.login == "alice"
        assert [tag.name for tag in record.tags] == ["beach", "sun"]
        assert test_db.query(User).filter(User.login == "alice").count() == 1

    def test_existing_owner_is_reused(self, test_db: Session, make_user):
        alice = make_user("alice")
        test_db.commit()

        record = album_service.create_album(test_db, AlbumCreateRequest(name="Trip", owner_login="alice"))

        assert record.user.id == alice.id

    def test_rejects_id(self, test_db: Session):
        with pytest.raises(FieldValidationError) as exc_info:
            album_service.create_album(test_db, AlbumCreateRequest(id=5, name="Nope"))
        assert exc_info.value.field == "id"

    def test_rejects_unknown_tags(self, test_db: Session):
        with pytest.raises(FieldValidationError) as exc_info:
            album_service.create_album(test_db, AlbumCreateRequest(name="Trip", tag_ids=[42]))
        assert exc_info.value.field == "tag_ids"
        assert test_db.query(Album).count() == 0


class TestUpdateAlbum:
    def test_full_replacement_keeps_creation_date(self, test_db: Session, make_album, make_tag, make_user):
        old_tag = make_tag("old")
        new_tag = make_tag("new")
        album = make_album(
            "Before",
            event="Party",
            keywords="k",
            creation_date=datetime(2020, 1, 1),
            owner=make_user("alice"),
            tags=[old_tag],
        )
        test_db.commit()

        record = album_service.update_album(
            test_db,
            album.id,
            AlbumUpdateRequest(name="After", creation_date=datetime(1999, 1, 1), tag_ids=[new_tag.id]),
        )

        assert record.name == "After"
        assert record.event is None
        assert record.keywords is None
        assert record.user is None
        assert record.creation_date == datetime(2020, 1, 1)
        assert [tag.name for tag in record.tags] == ["new"]

    def test_missing_album(self, test_db: Session):
        with pytest.raises(NotFoundError):
            album_service.update_album(test_db, 404, AlbumUpdateRequest(name="Ghost"))

    def test_body_id_mismatch(self, test_db: Session, make_album):
        album = make_album("Real")
        with pytest.raises(FieldValidationError) as exc_info:
            album_service.update_album(test_db, album.id, AlbumUpdateRequest(id=album.id + 1, name="Real"))
        assert exc_info.value.field == "id"


class TestPartialUpdateAlbum:
    def test_only_present_fields_change(self, test_db: Session, make_album, make_tag):
        tag = make_tag("keep")
        album = make_album("Original", event="Party", keywords="a b", tags=[tag])
        test_db.commit()

        record = album_service.partial_update_album(
            test_db, album.id, AlbumPatchRequest(override_date=datetime(2030, 1, 1))
        )

        assert record.name == "Original"
        assert record.event == "Party"
        assert record.keywords == "a b"
        assert record.override_date == datetime(2030, 1, 1)
        assert [t.name for t in record.tags] == ["keep"]

    def test_explicit_null_clears_optional_field(self, test_db: Session, make_album):
        album = make_album("Original", event="Party")
        test_db.commit()

        record = album_service.partial_update_album(test_db, album.id, AlbumPatchRequest(event=None))

        assert record.event is None

    def test_null_name_rejected(self, test_db: Session, make_album):
        album = make_album("Original")
        test_db.commit()
        with pytest.raises(FieldValidationError) as exc_info:
            album_service.partial_update_album(test_db, album.id, AlbumPatchRequest(name=None))
        assert exc_info.value.field == "name"

    def test_creation_date_ignored(self, test_db: Session, make_album):
        album = make_album("Original", creation_date=datetime(2021, 6, 1))
        test_db.commit()

        record = album_service.partial_update_album(
            test_db, album.id, AlbumPatchRequest(creation_date=datetime(2000, 1, 1))
        )

        assert record.creation_date == datetime(2021, 6, 1)

    def test_tags_replaced_and_cleared(self, test_db: Session, make_album, make_tag):
        first = make_tag("first")
        second = make_tag("second")
        album = make_album("Original", tags=[first])
        test_db.commit()

        record = album_service.partial_update_album(test_db, album.id, AlbumPatchRequest(tag_ids=[second.id]))
        assert [t.name for t in record.tags] == ["second"]

        record = album_service.partial_update_album(test_db, album.id, AlbumPatchRequest(tag_ids=[]))
        assert record.tags == []

    def test_missing_album(self, test_db: Session):
        with pytest.raises(NotFoundError):
            album_service.partial_update_album(test_db, 404, AlbumPatchRequest(name="Ghost"))


class TestDeleteAlbum:
    def test_delete_keeps_tags_users_and_photos(self, test_db: Session, make_album, make_tag, make_user, make_photo):
        tag = make_tag("beach")
        owner = make_user("alice")
        album = make_album("Doomed", owner=owner, tags=[tag])
        photo = make_photo("Inside", album=album)
        test_db.commit()

        album_service.delete_album(test_db, album.id)

        assert test_db.query(Album).count() == 0
        assert test_db.query(AlbumTag).count() == 0
        assert test_db.query(Tag).count() == 1
        assert test_db.query(User).count() == 1
        remaining = test_db.query(Photo).filter(Photo.id == photo.id).one()
        test_db.refresh(remaining)
        assert remaining.album_id is None

    def test_missing_album(self, test_db: Session):
        with pytest.raises(NotFoundError):
            album_service.delete_album(test_db, 404)
