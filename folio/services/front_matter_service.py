import datetime
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel

from folio.errors import DocumentNotFoundError
from folio.schemas.blog import (
    AuthorDocument,
    AuthorFrontMatter,
    CompiledDocument,
    PostDetailFrontMatter,
    PostDocument,
    PostFrontMatter,
    ReadingTime,
    SeriesReference,
)
from folio.services.content_compiler import CompileOptions, MarkdownCompiler
from folio.services.content_parser import ContentParser

logger = logging.getLogger(__name__)

AUTHOR_FIELDS = (
    "name",
    "avatar",
    "occupation",
    "company",
    "email",
    "twitter",
    "linkedin",
    "github",
    "gitlab",
    "linktree",
    "layout",
)

_CONTENT_EXTENSION = re.compile(r"\.(mdx|md)$")


class Valid(BaseModel):
    reference: SeriesReference


class Invalid(BaseModel):
    reason: str


SeriesValidation = Union[Valid, Invalid]


class FrontMatterService:
    def __init__(
        self,
        repo,
        parser=None,
        compiler=None,
        *,
        words_per_minute: int = 200,
        toc_depth: str = "1-6",
    ):
        self.repo = repo
        self.parser = parser or ContentParser(repo)
        self.compiler = compiler or MarkdownCompiler()
        self.words_per_minute = words_per_minute
        self.toc_depth = toc_depth

    def get_files(self, kind: str) -> List[str]:
        return self.repo.list_files(kind)

    def load_all_front_matter(self, kind: str = "blog") -> List[PostFrontMatter]:
        """Every non-draft document of a collection, newest first."""
        posts = []
        for file_name in self._unique_documents(kind):
            # ValueError covers impossible YAML timestamps and UnicodeDecodeError
            try:
                metadata, _content = self.parser.parse(kind, file_name)
            except (yaml.YAMLError, ValueError) as e:
                logger.warning(f"Skipping {kind}/{file_name}: unreadable front matter ({e})")
                continue

            if metadata.get("draft") is True:
                logger.debug(f"Skipping draft {kind}/{file_name}")
                continue

            posts.append(build_post_front_matter(metadata, file_name))

        # Undated posts go last; sort is stable so equal dates keep file order
        posts.sort(key=lambda post: post.date or "", reverse=True)
        return posts

    def load_document_by_slug(self, kind: str, slug: str) -> CompiledDocument:
        file_name = self.repo.find_document(kind, slug)
        if file_name is None:
            raise DocumentNotFoundError(kind, slug)

        metadata, content = self.parser.parse(kind, file_name)
        options = CompileOptions(
            bibliography=_optional_str(metadata.get("bibliography")),
            content_root=str(self.repo.root),
            toc_depth=self.toc_depth,
        )
        compiled = self.compiler.compile(content, options)

        if kind == "authors":
            return AuthorDocument(
                compiledContent=compiled.html,
                tableOfContents=compiled.toc,
                frontMatter=build_author_front_matter(metadata, slug, file_name),
            )

        return PostDocument(
            compiledContent=compiled.html,
            tableOfContents=compiled.toc,
            frontMatter=build_post_detail_front_matter(
                metadata,
                slug,
                file_name,
                content,
                words_per_minute=self.words_per_minute,
            ),
        )

    def _unique_documents(self, kind: str) -> List[str]:
        """Content files of a collection, one per slug (`.mdx` wins over `.md`)."""
        chosen: Dict[str, str] = {}
        for file_name in self.repo.list_documents(kind):
            slug = format_slug(file_name)
            current = chosen.get(slug)
            if current is None:
                chosen[slug] = file_name
                continue
            preferred = file_name if file_name.endswith(".mdx") else current
            logger.warning(
                f"Both {current} and {file_name} map to slug '{slug}', using {preferred}"
            )
            chosen[slug] = preferred
        return list(chosen.values())


def build_post_front_matter(metadata: Mapping[str, Any], file_name: str) -> PostFrontMatter:
    return PostFrontMatter(**_post_fields(metadata, file_name))


def build_post_detail_front_matter(
    metadata: Mapping[str, Any],
    slug: str,
    file_name: str,
    content: str,
    *,
    words_per_minute: int = 200,
) -> PostDetailFrontMatter:
    fields = _post_fields(metadata, file_name)
    fields["slug"] = slug

    reading_time = metadata.get("readingTime")
    if isinstance(reading_time, Mapping):
        fields["readingTime"] = dict(reading_time)
    else:
        fields["readingTime"] = calculate_reading_time(
            content, words_per_minute
        ).model_dump()

    lastmod = _date_or_none(metadata.get("lastmod"), file_name)
    fields["lastmod"] = lastmod or fields["date"]
    return PostDetailFrontMatter(**fields)


def build_author_front_matter(
    metadata: Mapping[str, Any], slug: str, file_name: str
) -> AuthorFrontMatter:
    extra = {
        key: value
        for key, value in metadata.items()
        if isinstance(key, str) and key not in AUTHOR_FIELDS
    }
    known = {field: _optional_str(metadata.get(field)) for field in AUTHOR_FIELDS}
    return AuthorFrontMatter.model_validate(
        {**extra, **known, "slug": slug, "fileName": file_name}
    )


def _post_fields(metadata: Mapping[str, Any], file_name: str) -> Dict[str, Any]:
    draft = metadata.get("draft")
    return {
        "title": _optional_str(metadata.get("title")),
        "date": _date_or_none(metadata.get("date"), file_name),
        "tags": normalize_string_list(metadata.get("tags")),
        "summary": _optional_str(metadata.get("summary")),
        "authors": normalize_string_list(metadata.get("authors")),
        "draft": draft if isinstance(draft, bool) else None,
        "cover": _optional_str(metadata.get("cover")),
        "slug": format_slug(file_name),
        "fileName": file_name,
        "series": parse_series_reference(metadata.get("series"), file_name),
    }


def format_slug(file_name: str) -> str:
    """Strip the content extension from a stored relative path."""
    return _CONTENT_EXTENSION.sub("", file_name)


def date_sort_desc(a: Optional[str], b: Optional[str]) -> int:
    """Comparator for `functools.cmp_to_key`, newest first."""
    if (a or "") > (b or ""):
        return -1
    if (a or "") < (b or ""):
        return 1
    return 0


def convert_date_to_string(value: Any) -> Optional[str]:
    """
    Normalize a front-matter date to an ISO-8601 UTC string with millisecond
    precision (`2024-01-02T00:00:00.000Z`). Naive values are read as UTC.
    Raises ValueError for values that are not dates.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = datetime.datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return (
        parsed.astimezone(datetime.timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _date_or_none(value: Any, file_name: str) -> Optional[str]:
    try:
        return convert_date_to_string(value)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Ignoring unparseable date in {file_name}: {e}")
        return None


def validate_series_reference(value: Any) -> SeriesValidation:
    """
    Check the `series` front-matter entry. Only a mapping with a non-empty
    string slug is a series reference; an unusable `order` is dropped without
    invalidating the reference.
    """
    if value is None:
        return Invalid(reason="no series declared")
    if not isinstance(value, Mapping):
        return Invalid(reason=f"expected a mapping, got {type(value).__name__}")

    slug = value.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        return Invalid(reason="series slug must be a non-empty string")

    return Valid(
        reference=SeriesReference(slug=slug.strip(), order=_coerce_order(value.get("order")))
    )


def parse_series_reference(value: Any, file_name: str = "") -> Optional[SeriesReference]:
    result = validate_series_reference(value)
    if isinstance(result, Invalid):
        if value is not None:
            logger.debug(f"Ignoring series metadata in {file_name}: {result.reason}")
        return None
    return result.reference


def _coerce_order(value: Any) -> Optional[Union[int, float]]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def normalize_string_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _optional_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, datetime.date)):
        return str(value)
    return None


def calculate_reading_time(text: str, words_per_minute: int = 200) -> ReadingTime:
    words = len(text.split())
    minutes = words / words_per_minute
    displayed = math.ceil(round(minutes, 2)) or 1
    return ReadingTime(
        text=f"{displayed} min read",
        minutes=minutes,
        time=round(minutes * 60000),
        words=words,
    )
