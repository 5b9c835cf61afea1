import logging
from typing import List, Optional, Sequence, Tuple

from folio.schemas.blog import PostFrontMatter
from folio.schemas.post_page import PostLink, PostPage
from folio.services.series_service import series_navigation

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, front_matter_service, series_service):
        self.front_matter_service = front_matter_service
        self.series_service = series_service

    def list_posts(self) -> List[PostFrontMatter]:
        return self.front_matter_service.load_all_front_matter("blog")

    def get_post_page(self, slug: str) -> PostPage:
        """
        Everything a post page renders: the compiled document, its neighbours
        in the listing and, when it belongs to one, its series.
        Raises DocumentNotFoundError for unknown slugs.
        """
        document = self.front_matter_service.load_document_by_slug("blog", slug)
        posts = self.list_posts()
        prev_post, next_post = adjacent_posts(posts, slug)

        series_context = None
        reference = document.frontMatter.series
        if reference is not None:
            series_context = self.series_service.get_series_context(
                reference.slug, slug, posts=posts
            )
            logger.debug(f"Post {slug} is part of series {reference.slug}")

        return PostPage(
            document=document,
            prev=_link(prev_post),
            next=_link(next_post),
            series=series_context,
            seriesNavigation=series_navigation(series_context),
        )


def adjacent_posts(
    posts: Sequence[PostFrontMatter], slug: str
) -> Tuple[Optional[PostFrontMatter], Optional[PostFrontMatter]]:
    """
    Neighbours of a post in a newest-first listing: `prev` is the older post,
    `next` the newer one.
    """
    index = next((i for i, post in enumerate(posts) if post.slug == slug), -1)
    if index == -1:
        return None, None
    prev_post = posts[index + 1] if index + 1 < len(posts) else None
    next_post = posts[index - 1] if index > 0 else None
    return prev_post, next_post


def _link(post: Optional[PostFrontMatter]) -> Optional[PostLink]:
    if post is None:
        return None
    return PostLink(slug=post.slug, title=post.title)
