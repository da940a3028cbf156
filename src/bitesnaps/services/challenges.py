"""Challenge catalog and progress rules."""

from collections.abc import Callable

from bitesnaps.domain.analysis import FoodCategory
from bitesnaps.domain.models import Challenge, ChallengeType, Post

HYDRATION_HERO_ID = "1"
GREEN_THUMB_ID = "2"
NEW_FLAVORS_ID = "3"

DEFAULT_CHALLENGES: tuple[Challenge, ...] = (
    Challenge(
        id=HYDRATION_HERO_ID,
        title="Hydration Hero",
        description="Drink water 3 times today",
        type=ChallengeType.SOLO,
        target_count=3,
        required_category=FoodCategory.DRINK,
    ),
    Challenge(
        id=GREEN_THUMB_ID,
        title="Green Thumb",
        description="Add something green once",
        type=ChallengeType.SOLO,
        target_count=1,
        required_category=FoodCategory.GREEN_FRESH,
    ),
    Challenge(
        id=NEW_FLAVORS_ID,
        title="New Flavors",
        description="Try 1 new dish this week",
        type=ChallengeType.COMMUNITY,
        target_count=1,
    ),
)


def _is_water(post: Post) -> bool:
    return post.analysis is not None and post.analysis.is_water


def _has_green(post: Post) -> bool:
    return (
        post.analysis is not None
        and FoodCategory.GREEN_FRESH in post.analysis.category
    )


def _any_dish(post: Post) -> bool:
    # Every post counts as a new dish.
    return True


_PREDICATES: dict[str, Callable[[Post], bool]] = {
    HYDRATION_HERO_ID: _is_water,
    GREEN_THUMB_ID: _has_green,
    NEW_FLAVORS_ID: _any_dish,
}


def default_challenges() -> list[Challenge]:
    """Return a fresh copy of the default catalog."""
    return list(DEFAULT_CHALLENGES)


def challenge_matches(challenge: Challenge, post: Post) -> bool:
    """Return True when a post counts toward a challenge."""
    predicate = _PREDICATES.get(challenge.id)
    if predicate is None:
        return False
    return predicate(post)


def apply_post(challenges: list[Challenge], post: Post) -> tuple[list[Challenge], bool]:
    """Advance open challenges matched by a post.

    Returns the updated list and whether any challenge changed. Completed
    challenges are left untouched.
    """
    updated = False
    result: list[Challenge] = []
    for challenge in challenges:
        if challenge.completed or not challenge_matches(challenge, post):
            result.append(challenge)
            continue
        new_count = challenge.current_count + 1
        result.append(
            challenge.model_copy(
                update={
                    "current_count": new_count,
                    "completed": new_count >= challenge.target_count,
                }
            )
        )
        updated = True
    return result, updated
