from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from folio.schemas.blog import PostFrontMatter


class SeriesCta(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Optional[str] = None
    href: Optional[str] = None


class SeriesDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    summary: Optional[str] = None
    description: Optional[str] = None
    cta: Optional[SeriesCta] = None


class SeriesWithPosts(SeriesDefinition):
    posts: List[PostFrontMatter]


class SeriesContext(BaseModel):
    meta: SeriesDefinition
    posts: List[PostFrontMatter]
    currentIndex: int


class SeriesNavigation(BaseModel):
    """What the "part N of M" widget on a post page needs."""

    previous: Optional[PostFrontMatter] = None
    next: Optional[PostFrontMatter] = None
    partNumber: Union[int, float]
    position: int
    total: int
