import textwrap
from pathlib import Path

import pytest

from folio.errors import DocumentNotFoundError
from folio.schemas.blog import PostFrontMatter, SeriesReference


def write_doc(root: Path, kind: str, file_name: str, source: str) -> Path:
    """Write a content document below `root/kind`, dedenting the source."""
    path = root / kind / file_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def content_root(tmp_path):
    (tmp_path / "blog").mkdir()
    (tmp_path / "authors").mkdir()
    return tmp_path


def make_post(
    slug: str,
    *,
    title: str | None = None,
    date: str | None = None,
    series: str | None = None,
    order=None,
    **extra,
) -> PostFrontMatter:
    """Build a PostFrontMatter the way the loader would, for resolver tests."""
    reference = SeriesReference(slug=series, order=order) if series else None
    return PostFrontMatter(
        slug=slug,
        fileName=f"{slug}.md",
        title=title if title is not None else slug.upper(),
        date=date,
        series=reference,
        **extra,
    )


class FakeRepo:
    """
    Minimal in-memory stand-in for FileContentRepo.
    `files` maps "kind/file_name" to raw source.
    """

    def __init__(self, files: dict[str, str], root: str = "/content"):
        self.files = {
            key: textwrap.dedent(value).lstrip() for key, value in files.items()
        }
        self.root = Path(root)
        self.reads = []

    def list_files(self, kind: str):
        prefix = f"{kind}/"
        return sorted(key[len(prefix):] for key in self.files if key.startswith(prefix))

    def list_documents(self, kind: str):
        return [
            name for name in self.list_files(kind) if name.endswith((".md", ".mdx"))
        ]

    def read(self, kind: str, file_name: str) -> str:
        self.reads.append(f"{kind}/{file_name}")
        return self.files[f"{kind}/{file_name}"]

    def find_document(self, kind: str, slug: str):
        for ext in (".mdx", ".md"):
            if f"{kind}/{slug}{ext}" in self.files:
                return f"{slug}{ext}"
        return None


class FakeCompiler:
    """Records compile calls and echoes the body back."""

    def __init__(self, toc=None):
        self.toc = toc or []
        self.calls = []

    def compile(self, source, options=None):
        from folio.services.content_compiler import CompiledContent

        self.calls.append((source, options))
        return CompiledContent(html=f"<compiled>{source}</compiled>", toc=self.toc)


class FakeFrontMatterService:
    """
    Minimal loader stand-in used by series and posts service tests.
    """

    def __init__(self, posts=None, documents=None):
        self.posts = list(posts or [])
        self.documents = documents or {}
        self.calls = []

    def load_all_front_matter(self, kind: str = "blog"):
        self.calls.append(("all", kind))
        return list(self.posts)

    def load_document_by_slug(self, kind: str, slug: str):
        self.calls.append(("one", kind, slug))
        if slug not in self.documents:
            raise DocumentNotFoundError(kind, slug)
        return self.documents[slug]


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_page_return=None):
        self._list_posts_return = list_posts_return or []
        self._get_post_page_return = get_post_page_return

    def list_posts(self):
        return self._list_posts_return

    def get_post_page(self, slug: str):
        if self._get_post_page_return is None:
            raise DocumentNotFoundError("blog", slug)
        return self._get_post_page_return


class FakeSeriesService:
    """
    Minimal series service stand-in for router tests.
    """

    def __init__(self, series=None, catalog=None):
        self.series = series or []
        self.catalog = catalog or []

    def list_series(self):
        return self.series

    def get_series(self, slug: str):
        return next((item for item in self.series if item.slug == slug), None)

    def list_available_series(self):
        return self.catalog
