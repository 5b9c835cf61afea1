import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

COLLECTION_KINDS = ("blog", "authors")
CONTENT_EXTENSIONS = (".mdx", ".md")


class FileContentRepo:
    """Read access to the content collections stored under a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def collection_path(self, kind: str) -> Path:
        if kind not in COLLECTION_KINDS:
            raise ValueError(f"Unknown content collection: {kind}")
        return self.root / kind

    def list_files(self, kind: str) -> List[str]:
        """All files under a collection, as sorted POSIX paths relative to it."""
        base = self.collection_path(kind)
        if not base.is_dir():
            logger.warning(f"Content collection {base} does not exist")
            return []
        return sorted(
            path.relative_to(base).as_posix()
            for path in base.rglob("*")
            if path.is_file()
        )

    def list_documents(self, kind: str) -> List[str]:
        return [
            file_name
            for file_name in self.list_files(kind)
            if is_content_file(file_name)
        ]

    def read(self, kind: str, file_name: str) -> str:
        return (self.collection_path(kind) / file_name).read_text(encoding="utf-8")

    def find_document(self, kind: str, slug: str) -> Optional[str]:
        """Return the file name backing a slug, preferring `.mdx` over `.md`."""
        base = self.collection_path(kind)
        if not self._is_safe_slug(slug):
            logger.warning(f"Rejected {kind} slug outside the collection: {slug}")
            return None

        for ext in CONTENT_EXTENSIONS:
            candidate = base / f"{slug}{ext}"
            if candidate.is_file():
                return f"{slug}{ext}"
        return None

    @staticmethod
    def _is_safe_slug(slug: str) -> bool:
        if not slug or slug.startswith(("/", "\\")):
            return False
        parts = slug.replace("\\", "/").split("/")
        return ".." not in parts and "" not in parts


def is_content_file(file_name: str) -> bool:
    return Path(file_name).suffix in CONTENT_EXTENSIONS
