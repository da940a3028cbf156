"""Category statistics and the daily wrap recap."""

from collections import Counter
from dataclasses import dataclass

from bitesnaps.domain.analysis import FoodCategory
from bitesnaps.domain.models import Post, User

TOP_CATEGORY_LIMIT = 5
DEFAULT_WRAP_STYLE = "Explorer"

COMFORT_INSIGHT = (
    "You've been leaning into comfort foods. "
    "Make sure to check in on how you're feeling emotionally."
)
VARIETY_INSIGHT = (
    "Great variety! Keeping your plate diverse helps with nutritional "
    "balance naturally."
)


@dataclass(frozen=True)
class CategoryCount:
    """Number of posts tagged with a category."""

    name: str
    value: int


@dataclass(frozen=True)
class StatsSummary:
    """Aggregates shown on the stats screen."""

    total_meals: int
    diversity: int
    top_categories: list[CategoryCount]
    insight: str


@dataclass(frozen=True)
class DailyWrap:
    """Short recap of the user's eating vibe."""

    eating_style: str
    top_category: str


def category_counts(posts: list[Post]) -> dict[str, int]:
    """Count category tags across analyzed posts."""
    counts: Counter[str] = Counter()
    for post in posts:
        if post.analysis is None:
            continue
        counts.update(category.value for category in post.analysis.category)
    return dict(counts)


def summarize(posts: list[Post]) -> StatsSummary:
    """Build the stats screen summary."""
    counts = category_counts(posts)
    top = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    top_categories = [
        CategoryCount(name=name, value=value)
        for name, value in top[:TOP_CATEGORY_LIMIT]
    ]
    if top_categories and top_categories[0].name == FoodCategory.COMFORT.value:
        insight = COMFORT_INSIGHT
    else:
        insight = VARIETY_INSIGHT
    return StatsSummary(
        total_meals=len(posts),
        diversity=len(counts),
        top_categories=top_categories,
        insight=insight,
    )


def build_daily_wrap(posts: list[Post], user: User | None) -> DailyWrap:
    """Build the wrap from the newest post and the user's eating style."""
    if not posts:
        top_category = "Nothing yet"
    else:
        analysis = posts[0].analysis
        if analysis is None or not analysis.category:
            top_category = "Mystery"
        else:
            top_category = analysis.category[0].value
    eating_style = DEFAULT_WRAP_STYLE
    if user is not None and user.eating_style:
        eating_style = user.eating_style[0]
    return DailyWrap(eating_style=eating_style, top_category=top_category)
