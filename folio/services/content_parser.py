import logging
from typing import Any, Dict, Tuple

import frontmatter

logger = logging.getLogger(__name__)


class ContentParser:
    def __init__(self, repo):
        self.repo = repo

    def get_markdown_content(self, kind: str, file_name: str) -> str:
        """Get the full source of a content document (front matter included)."""
        raw = self.repo.read(kind, file_name)
        # Editors on Windows leave a BOM and CRLFs behind; the YAML fence needs neither
        return raw.lstrip("\ufeff").replace("\r\n", "\n")

    def parse(self, kind: str, file_name: str) -> Tuple[Dict[str, Any], str]:
        """
        Split a document into its metadata mapping and its body.
        A front-matter block that is not a mapping yields empty metadata.
        Raises yaml.YAMLError when the block is not valid YAML.
        """
        return parse_source(self.get_markdown_content(kind, file_name))


def parse_source(source: str) -> Tuple[Dict[str, Any], str]:
    metadata, content = frontmatter.parse(source)
    return dict(metadata or {}), content
