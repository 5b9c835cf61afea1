from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SeriesReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    order: Optional[Union[int, float]] = None


class PostFrontMatter(BaseModel):
    """Normalized metadata of one blog document, as used by listings."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    authors: Optional[List[str]] = None
    draft: Optional[bool] = None
    cover: Optional[str] = None
    slug: str
    fileName: str
    series: Optional[SeriesReference] = None


class PostDetailFrontMatter(PostFrontMatter):
    lastmod: Optional[str] = None
    readingTime: Dict[str, Any] = Field(default_factory=dict)


class AuthorFrontMatter(BaseModel):
    # Author pages carry arbitrary profile keys through untouched.
    model_config = ConfigDict(frozen=True, extra="allow")

    name: Optional[str] = None
    avatar: Optional[str] = None
    occupation: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    gitlab: Optional[str] = None
    linktree: Optional[str] = None
    layout: Optional[str] = None
    slug: str
    fileName: str


class ReadingTime(BaseModel):
    text: str
    minutes: float
    time: int
    words: int


class TocEntry(BaseModel):
    value: str
    url: str
    depth: int


class CompiledDocument(BaseModel):
    compiledContent: str
    tableOfContents: List[TocEntry] = Field(default_factory=list)
    frontMatter: Union[PostDetailFrontMatter, AuthorFrontMatter]


class PostDocument(CompiledDocument):
    frontMatter: PostDetailFrontMatter


class AuthorDocument(CompiledDocument):
    frontMatter: AuthorFrontMatter
