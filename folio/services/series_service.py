import datetime
import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple, Union

from folio.schemas.blog import PostFrontMatter
from folio.schemas.series import (
    SeriesContext,
    SeriesDefinition,
    SeriesNavigation,
    SeriesWithPosts,
)
from folio.services.series_catalog import SeriesCatalog

logger = logging.getLogger(__name__)

# Posts without an explicit order come after every numbered part
SERIES_POST_ORDER_FALLBACK = math.inf


class SeriesService:
    def __init__(self, front_matter_service, catalog: Optional[SeriesCatalog] = None):
        self.front_matter_service = front_matter_service
        self.catalog = catalog if catalog is not None else SeriesCatalog()

    def _posts(self) -> List[PostFrontMatter]:
        return self.front_matter_service.load_all_front_matter("blog")

    def list_series(self) -> List[SeriesWithPosts]:
        return collect_series_from_posts(self._posts(), self.catalog)

    def get_series(self, slug: str) -> Optional[SeriesWithPosts]:
        return get_series(self._posts(), slug, self.catalog)

    def get_series_context(
        self,
        series_slug: str,
        current_slug: str,
        posts: Optional[List[PostFrontMatter]] = None,
    ) -> Optional[SeriesContext]:
        if posts is None:
            posts = self._posts()
        return build_series_context(posts, series_slug, current_slug, self.catalog)

    def get_series_meta(self, slug: str) -> SeriesDefinition:
        return self.catalog.get_series_meta(slug)

    def list_available_series(self) -> List[SeriesDefinition]:
        return self.catalog.list_available_series()


def series_sort_key(post: PostFrontMatter) -> Tuple[Union[int, float], int, float, str, str]:
    """
    Sort key for posts of one series: explicit order, then publication date
    (undated last), then title, then slug so that the order is total.
    """
    order = post.series.order if post.series else None
    has_no_date, timestamp = _date_key(post.date)
    return (
        SERIES_POST_ORDER_FALLBACK if order is None else order,
        has_no_date,
        timestamp,
        post.title or "",
        post.slug,
    )


def _date_key(value: Optional[str]) -> Tuple[int, float]:
    if not value:
        return 1, 0.0
    try:
        parsed = datetime.datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"Unsortable post date {value!r}, treating as undated")
        return 1, 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return 0, parsed.timestamp()


def order_series_posts(posts: Iterable[PostFrontMatter]) -> List[PostFrontMatter]:
    return sorted(posts, key=series_sort_key)


def _posts_in_series(posts: Iterable[PostFrontMatter], slug: str) -> List[PostFrontMatter]:
    return [post for post in posts if post.series is not None and post.series.slug == slug]


def _with_posts(definition: SeriesDefinition, posts: List[PostFrontMatter]) -> SeriesWithPosts:
    return SeriesWithPosts(**definition.model_dump(), posts=order_series_posts(posts))


def collect_series_from_posts(
    posts: Iterable[PostFrontMatter], catalog: Optional[SeriesCatalog] = None
) -> List[SeriesWithPosts]:
    """Group posts by series, each group in reading order, groups sorted by title."""
    catalog = catalog if catalog is not None else SeriesCatalog()

    grouped: Dict[str, List[PostFrontMatter]] = {}
    for post in posts:
        if post.series is None or not post.series.slug:
            continue
        grouped.setdefault(post.series.slug, []).append(post)

    series = [
        _with_posts(catalog.get_series_meta(slug), series_posts)
        for slug, series_posts in grouped.items()
    ]
    # Plain code-point comparison: case-sensitive and locale independent
    series.sort(key=lambda item: (item.title, item.slug))
    return series


def get_series(
    posts: Iterable[PostFrontMatter], slug: str, catalog: Optional[SeriesCatalog] = None
) -> Optional[SeriesWithPosts]:
    catalog = catalog if catalog is not None else SeriesCatalog()
    matching = _posts_in_series(posts, slug)
    if not matching:
        return None
    return _with_posts(catalog.get_series_meta(slug), matching)


def build_series_context(
    posts: Iterable[PostFrontMatter],
    series_slug: str,
    current_slug: str,
    catalog: Optional[SeriesCatalog] = None,
) -> Optional[SeriesContext]:
    """
    Locate a post inside its series. Returns None when no post belongs to the
    series; `currentIndex` is -1 when the current post is not one of them.
    """
    catalog = catalog if catalog is not None else SeriesCatalog()
    matching = _posts_in_series(posts, series_slug)
    if not matching:
        return None

    ordered = order_series_posts(matching)
    current_index = next(
        (i for i, post in enumerate(ordered) if post.slug == current_slug), -1
    )
    if current_index == -1:
        logger.warning(f"Post '{current_slug}' is not part of series '{series_slug}'")

    return SeriesContext(
        meta=catalog.get_series_meta(series_slug),
        posts=ordered,
        currentIndex=current_index,
    )


def previous_in_series(context: Optional[SeriesContext]) -> Optional[PostFrontMatter]:
    if context is None or context.currentIndex <= 0:
        return None
    return context.posts[context.currentIndex - 1]


def next_in_series(context: Optional[SeriesContext]) -> Optional[PostFrontMatter]:
    if context is None or not 0 <= context.currentIndex < len(context.posts) - 1:
        return None
    return context.posts[context.currentIndex + 1]


def part_number_for_post(post: PostFrontMatter, index: int) -> Union[int, float]:
    """Declared `series.order` when present, else the 1-based position."""
    if post.series is not None and post.series.order is not None:
        return post.series.order
    return index + 1


def series_navigation(context: Optional[SeriesContext]) -> Optional[SeriesNavigation]:
    if context is None or context.currentIndex < 0:
        return None
    current = context.posts[context.currentIndex]
    return SeriesNavigation(
        previous=previous_in_series(context),
        next=next_in_series(context),
        partNumber=part_number_for_post(current, context.currentIndex),
        position=context.currentIndex + 1,
        total=len(context.posts),
    )
