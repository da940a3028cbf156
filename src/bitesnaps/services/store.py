"""Local persistence for the profile, posts and challenge progress."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from bitesnaps.domain.models import Challenge, Post, User
from bitesnaps.errors import DuplicatePostError
from bitesnaps.services.challenges import apply_post, default_challenges

logger = logging.getLogger(__name__)

USER_KEY = "bitesnaps_user"
POSTS_KEY = "bitesnaps_posts"
CHALLENGES_KEY = "bitesnaps_challenges"
SEEN_TUTORIAL_KEY = "bitesnaps_seen_tutorial"

STORAGE_KEYS = (USER_KEY, POSTS_KEY, CHALLENGES_KEY, SEEN_TUTORIAL_KEY)

_POSTS_ADAPTER = TypeAdapter(list[Post])
_CHALLENGES_ADAPTER = TypeAdapter(list[Challenge])


class KeyValueStorage(Protocol):
    """Durable key-value storage holding serialized records."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""

    def clear(self) -> None:
        """Remove every stored key."""


@dataclass
class ProgressStore:
    """Read-modify-write access to the four persisted records."""

    storage: KeyValueStorage

    def get_user(self) -> User | None:
        """Return the stored profile, if any."""
        raw = self.storage.get(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable user record")
            return None

    def save_user(self, user: User) -> None:
        """Overwrite the stored profile."""
        self.storage.set(USER_KEY, user.model_dump_json(by_alias=True))

    def get_posts(self) -> list[Post]:
        """Return all posts, newest first."""
        raw = self.storage.get(POSTS_KEY)
        if raw is None:
            return []
        try:
            return _POSTS_ADAPTER.validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable post list")
            return []

    def save_post(self, post: Post) -> None:
        """Prepend a post, bump the meal counter and advance challenges."""
        posts = self.get_posts()
        if any(existing.id == post.id for existing in posts):
            raise DuplicatePostError(f"Post {post.id} already exists")
        posts.insert(0, post)
        self.storage.set(POSTS_KEY, _dump_posts(posts))

        user = self.get_user()
        if user is not None:
            self.save_user(
                user.model_copy(update={"total_meals": user.total_meals + 1})
            )

        self._update_challenges(post)

    def get_challenges(self) -> list[Challenge]:
        """Return persisted challenges, seeding the default catalog once."""
        raw = self.storage.get(CHALLENGES_KEY)
        if raw is not None:
            try:
                return _CHALLENGES_ADAPTER.validate_json(raw)
            except ValidationError:
                logger.warning("Discarding unreadable challenge list, reseeding")
        challenges = default_challenges()
        self._save_challenges(challenges)
        return challenges

    def set_seen_tutorial(self) -> None:
        """Record that the first-run tutorial was shown."""
        self.storage.set(SEEN_TUTORIAL_KEY, "true")

    def has_seen_tutorial(self) -> bool:
        """Return True once the tutorial has been shown."""
        return self.storage.get(SEEN_TUTORIAL_KEY) == "true"

    def clear_data(self) -> None:
        """Wipe every persisted record."""
        self.storage.clear()

    def _update_challenges(self, post: Post) -> None:
        challenges, updated = apply_post(self.get_challenges(), post)
        if updated:
            self._save_challenges(challenges)

    def _save_challenges(self, challenges: list[Challenge]) -> None:
        self.storage.set(
            CHALLENGES_KEY,
            _CHALLENGES_ADAPTER.dump_json(challenges, by_alias=True).decode("utf-8"),
        )


def _dump_posts(posts: list[Post]) -> str:
    return _POSTS_ADAPTER.dump_json(posts, by_alias=True).decode("utf-8")
