"""Tests for challenge matching rules."""

from bitesnaps.domain.analysis import FoodCategory
from bitesnaps.services.challenges import (
    GREEN_THUMB_ID,
    HYDRATION_HERO_ID,
    NEW_FLAVORS_ID,
    apply_post,
    challenge_matches,
    default_challenges,
)
from tests.conftest import make_analysis, make_post


def _by_id(challenges):  # type: ignore[no-untyped-def]
    return {c.id: c for c in challenges}


def test_water_flag_drives_hydration_not_category() -> None:
    challenges = _by_id(default_challenges())
    drink_not_water = make_post("1", make_analysis(categories=[FoodCategory.DRINK]))
    water = make_post("2", make_analysis(categories=[], is_water=True))

    assert not challenge_matches(challenges[HYDRATION_HERO_ID], drink_not_water)
    assert challenge_matches(challenges[HYDRATION_HERO_ID], water)


def test_healthy_flag_does_not_count_as_green() -> None:
    challenges = _by_id(default_challenges())
    lean = make_post("1", make_analysis(categories=[], is_healthy_lean=True))

    assert not challenge_matches(challenges[GREEN_THUMB_ID], lean)
    assert challenge_matches(challenges[NEW_FLAVORS_ID], lean)


def test_apply_post_skips_completed_challenges() -> None:
    challenges = [
        challenge.model_copy(update={"current_count": 1, "completed": True})
        if challenge.id == NEW_FLAVORS_ID
        else challenge
        for challenge in default_challenges()
    ]

    updated, changed = apply_post(challenges, make_post("1", make_analysis()))

    assert changed is False
    assert updated == challenges


def test_apply_post_marks_completion_at_target() -> None:
    updated, changed = apply_post(
        default_challenges(),
        make_post("1", make_analysis(categories=[FoodCategory.GREEN_FRESH])),
    )

    by_id = _by_id(updated)
    assert changed is True
    assert by_id[GREEN_THUMB_ID].current_count == 1
    assert by_id[GREEN_THUMB_ID].completed is True
    assert by_id[HYDRATION_HERO_ID].current_count == 0


def test_unknown_challenge_never_matches() -> None:
    custom = default_challenges()[0].model_copy(update={"id": "99"})

    assert not challenge_matches(custom, make_post("1", make_analysis(is_water=True)))
