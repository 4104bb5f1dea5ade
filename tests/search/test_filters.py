"""Tests for album filter predicates."""

from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from albumcat.metadata import Album
from albumcat.search.criteria import normalize_criteria
from albumcat.search.query_builder import AlbumQueryBuilder


def _matching_names(test_db: Session, **criteria_args) -> set:
    criteria = normalize_criteria(**criteria_args)
    ids = [row[0] for row in AlbumQueryBuilder(test_db, criteria).filtered_query().all()]
    return {name for (name,) in test_db.query(Album.name).filter(Album.id.in_(ids)).all()}


class TestKeywordFilter:
    """Keyword matches name, keywords or description as a substring."""

    @pytest.fixture(autouse=True)
    def albums(self, make_album):
        make_album("Concatenate Trip")
        make_album("Summer", keywords="beach, CAT")
        make_album("Winter", description="The cat slept all day")
        make_album("Dogs only", keywords="dog", description="no felines")

    def test_substring_anywhere_in_name(self, test_db):
        assert _matching_names(test_db, keyword="cat") == {"Concatenate Trip", "Summer", "Winter"}

    def test_case_insensitive(self, test_db):
        assert _matching_names(test_db, keyword="CaT") == {"Concatenate Trip", "Summer", "Winter"}

    def test_no_match(self, test_db):
        assert _matching_names(test_db, keyword="zebra") == set()

    def test_like_wildcards_are_literal(self, test_db, make_album):
        make_album("100% Fun")
        assert _matching_names(test_db, keyword="%") == {"100% Fun"}
        assert _matching_names(test_db, keyword="_") == set()


class TestEventFilter:
    """Event is a case-insensitive substring match."""

    def test_event_substring(self, test_db, make_album):
        make_album("A", event="Birthday Party")
        make_album("B", event="Wedding")
        make_album("C", event=None)

        assert _matching_names(test_db, event="party") == {"A"}

    def test_blank_event_criterion_matches_all(self, test_db, make_album):
        make_album("A", event="Birthday Party")
        make_album("B", event=None)

        assert _matching_names(test_db, event="   ") == {"A", "B"}


class TestYearFilter:
    """Year matches creation date only."""

    def test_matches_creation_year(self, test_db, make_album):
        make_album("Old", creation_date=datetime(2021, 12, 31, 23, 59, 59))
        make_album("New", creation_date=datetime(2022, 1, 1, 0, 0, 0))

        assert _matching_names(test_db, year=2021) == {"Old"}
        assert _matching_names(test_db, year="2022") == {"New"}

    def test_override_date_is_ignored_by_year_filter(self, test_db, make_album):
        # Displayed (and sorted) as 2020, but filtered as 2023
        make_album("Shifted", creation_date=datetime(2023, 5, 1), override_date=datetime(2020, 5, 1))

        assert _matching_names(test_db, year=2023) == {"Shifted"}
        assert _matching_names(test_db, year=2020) == set()

    def test_out_of_range_year_matches_nothing(self, test_db, make_album):
        make_album("Any")
        assert _matching_names(test_db, year=0) == set()
        assert _matching_names(test_db, year=12345) == set()


class TestTagFilter:
    """Tag filter matches any tag name substring without duplicating albums."""

    def test_tag_substring(self, test_db, make_album, make_tag):
        beach = make_tag("Beach")
        beach_party = make_tag("beach party")
        mountains = make_tag("Mountains")
        make_album("Both beaches", tags=[beach, beach_party])
        make_album("Hills", tags=[mountains])
        make_album("Untagged")

        assert _matching_names(test_db, tag_name="BEACH") == {"Both beaches"}

    def test_multiple_matching_tags_yield_one_row(self, test_db, make_album, make_tag):
        tags = [make_tag(f"trip-{index}") for index in range(3)]
        make_album("Fan out", tags=tags)

        criteria = normalize_criteria(tag_name="trip")
        ids = [row[0] for row in AlbumQueryBuilder(test_db, criteria).filtered_query().all()]
        assert len(ids) == 1


class TestContributorFilter:
    """Contributor matches owner login as a case-insensitive substring."""

    def test_login_substring(self, test_db, make_album, make_user):
        alice = make_user("alice")
        malice = make_user("Malice")
        bob = make_user("bob")
        make_album("Alice album", owner=alice)
        make_album("Malice album", owner=malice)
        make_album("Bob album", owner=bob)
        make_album("Orphan")

        assert _matching_names(test_db, contributor_login="ALICE") == {"Alice album", "Malice album"}

    def test_unowned_albums_never_match(self, test_db, make_album):
        make_album("Orphan")
        assert _matching_names(test_db, contributor_login="a") == set()


class TestNonAsciiCaseFolding:
    """Case-insensitive matching folds accented and non-Latin letters too."""

    def test_keyword(self, test_db, make_album):
        make_album("ÉCOLE trip")
        make_album("College")

        assert _matching_names(test_db, keyword="école") == {"ÉCOLE trip"}

    def test_event_and_tag(self, test_db, make_album, make_tag):
        make_album("Fest", event="Öktoberfest", tags=[make_tag("ΘΆΛΑΣΣΑ")])

        assert _matching_names(test_db, event="öktober") == {"Fest"}
        assert _matching_names(test_db, tag_name="θάλασσα") == {"Fest"}

    def test_contributor(self, test_db, make_album, make_user):
        make_album("Nordic", owner=make_user("ÅSA"))

        assert _matching_names(test_db, contributor_login="åsa") == {"Nordic"}


class TestCombinedFilters:
    """All supplied criteria are ANDed."""

    def test_conjunction(self, test_db, make_album, make_tag, make_user):
        alice = make_user("alice")
        beach = make_tag("beach")
        make_album("Beach party 2022", event="Party", creation_date=datetime(2022, 7, 1), owner=alice, tags=[beach])
        make_album("Beach party 2021", event="Party", creation_date=datetime(2021, 7, 1), owner=alice, tags=[beach])
        make_album("Party no tag", event="Party", creation_date=datetime(2022, 7, 1), owner=alice)

        names = _matching_names(
            test_db,
            keyword="beach",
            event="party",
            year=2022,
            tag_name="bea",
            contributor_login="ali",
        )
        assert names == {"Beach party 2022"}

    def test_no_criteria_matches_everything(self, test_db, make_album):
        make_album("One")
        make_album("Two", event="  ")
        assert _matching_names(test_db) == {"One", "Two"}
