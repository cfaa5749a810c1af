import pytest

from app.core.errors import NotFoundError, ValidationError
from app.db.models.sitter import format_rate_label
from app.schemas.sitter import SitterSearchCriteria
from app.services import ratings, sitters


@pytest.fixture
def roster(make_sitter):
    return {
        "maya": make_sitter(
            "maya@example.com", first_name="Maya", last_name="Chen", rating=4.9,
            borough="Brooklyn", neighborhood="Park Slope", daily_rate=45,
            specialties=["Senior Cats", "Medication"], bio="Former vet tech.",
        ),
        "leo": make_sitter(
            "leo@example.com", first_name="Leo", last_name="Park", rating=4.2,
            borough="Brooklyn", neighborhood="Williamsburg", daily_rate=55,
            specialties=["Kittens"], bio="Loves playful cats.", available=False,
        ),
        "ana": make_sitter(
            "ana@example.com", first_name="Ana", last_name="Ruiz", rating=4.6,
            borough="Queens", neighborhood="Astoria", daily_rate=40,
            specialties=["Medication", "Shy Cats"], bio="Patient with anxious cats.",
        ),
        "tom": make_sitter(
            "tom@example.com", first_name="Tom", last_name="Bell", rating=3.8,
            borough="Manhattan", neighborhood="Harlem", daily_rate=35,
            specialties=[], bio="Weekend sitter near Brooklyn Bridge.",
        ),
    }


def names(result):
    return [s.name for s in result]


def test_no_filters_returns_everyone_best_rated_first(db, roster):
    result = sitters.search(db, SitterSearchCriteria())

    assert names(result) == ["Maya Chen", "Ana Ruiz", "Leo Park", "Tom Bell"]
    ratings_seen = [s.rating_average for s in result]
    assert ratings_seen == sorted(ratings_seen, reverse=True)


def test_borough_and_rate_range(db, roster):
    result = sitters.search(db, SitterSearchCriteria(borough="Brooklyn", min_rate=40, max_rate=50))

    assert names(result) == ["Maya Chen"]
    assert all(s.borough == "Brooklyn" and 40 <= s.daily_rate <= 50 for s in result)


def test_rate_bounds_are_inclusive(db, roster):
    result = sitters.search(db, SitterSearchCriteria(min_rate=40, max_rate=45))
    assert set(names(result)) == {"Maya Chen", "Ana Ruiz"}


def test_all_means_no_filter(db, roster):
    result = sitters.search(db, SitterSearchCriteria(borough="all", specialty="all"))
    assert len(result) == 4


def test_specialty_is_case_insensitive_substring(db, roster):
    result = sitters.search(db, SitterSearchCriteria(specialty="medic"))
    assert names(result) == ["Maya Chen", "Ana Ruiz"]

    assert names(sitters.search(db, SitterSearchCriteria(specialty="KITTEN"))) == ["Leo Park"]


def test_min_rating_is_inclusive(db, roster):
    result = sitters.search(db, SitterSearchCriteria(min_rating=4.6))
    assert names(result) == ["Maya Chen", "Ana Ruiz"]


def test_available_flag_equality(db, roster):
    assert names(sitters.search(db, SitterSearchCriteria(available=False))) == ["Leo Park"]
    assert "Leo Park" not in names(sitters.search(db, SitterSearchCriteria(available=True)))


def test_free_text_matches_any_of_four_fields(db, roster):
    # borough field for Maya and Leo, bio for Tom
    assert names(sitters.search(db, SitterSearchCriteria(search="brooklyn"))) == ["Maya Chen", "Leo Park", "Tom Bell"]
    assert names(sitters.search(db, SitterSearchCriteria(search="astor"))) == ["Ana Ruiz"]
    assert names(sitters.search(db, SitterSearchCriteria(search="vet tech"))) == ["Maya Chen"]
    assert names(sitters.search(db, SitterSearchCriteria(search="bell"))) == ["Tom Bell"]


def test_free_text_combines_with_other_filters(db, roster):
    result = sitters.search(db, SitterSearchCriteria(search="brooklyn", borough="Manhattan"))
    assert names(result) == ["Tom Bell"]


def test_like_wildcards_are_literal(db, roster):
    assert sitters.search(db, SitterSearchCriteria(search="%")) == []
    assert sitters.search(db, SitterSearchCriteria(search="_")) == []


def test_no_match_is_empty_list(db, roster):
    assert sitters.search(db, SitterSearchCriteria(borough="Bronx")) == []


def test_get_by_id_unknown(db):
    with pytest.raises(NotFoundError):
        sitters.get_by_id(db, "missing")


def test_list_reviews_most_recent_first(db, roster, make_owner):
    owner = make_owner()
    first = ratings.submit(db, roster["ana"].id, owner, 3, "ok")
    second = ratings.submit(db, roster["ana"].id, owner, 5, "great")

    reviews = sitters.list_reviews(db, roster["ana"].id)
    assert [r.id for r in reviews] == [second.id, first.id]


def test_rate_change_updates_label(db, make_sitter):
    profile = make_sitter("rate@example.com")

    updated = sitters.update_own_profile(db, profile.user, daily_rate=62.5)

    assert updated.daily_rate == 62.5
    assert updated.rate_display == "$62.5/day"


def test_update_profile_replaces_specialties_as_a_set(db, make_sitter):
    profile = make_sitter("spec@example.com", specialties=["Kittens"])

    updated = sitters.update_own_profile(db, profile.user, specialties=["Shy Cats", "shy cats", " ", "Diabetes"])

    assert updated.specialties == ["Shy Cats", "Diabetes"]


@pytest.mark.parametrize(
    "fields",
    [
        {"daily_rate": 0},
        {"daily_rate": -5},
        {"borough": "Hoboken"},
        {"name": "  "},
        {"rating_average": 1.0},
        {"user_id": "someone-else"},
    ],
)
def test_update_profile_rejects_bad_fields_without_partial_write(db, make_sitter, fields):
    profile = make_sitter("bad@example.com")

    with pytest.raises(ValidationError):
        sitters.update_own_profile(db, profile.user, bio="changed", **fields)

    db.refresh(profile)
    assert profile.bio == "New to Purrfect Sitters!"
    assert profile.daily_rate == 40


@pytest.mark.parametrize(
    "rate, label",
    [(40, "$40/day"), (100, "$100/day"), (62.5, "$62.5/day"), (1234.567, "$1234.57/day"), (2000000, "$2000000/day")],
)
def test_rate_label_uses_fixed_notation(rate, label):
    assert format_rate_label(rate) == label
