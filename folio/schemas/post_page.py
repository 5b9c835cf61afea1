from typing import Optional

from pydantic import BaseModel

from folio.schemas.blog import PostDocument
from folio.schemas.series import SeriesContext, SeriesNavigation


class PostLink(BaseModel):
    slug: str
    title: Optional[str] = None


class PostPage(BaseModel):
    document: PostDocument
    prev: Optional[PostLink] = None
    next: Optional[PostLink] = None
    series: Optional[SeriesContext] = None
    seriesNavigation: Optional[SeriesNavigation] = None
