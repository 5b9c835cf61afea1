class FolioError(Exception):
    """Base class for errors raised by the content layer."""


class DocumentNotFoundError(FolioError, LookupError):
    """No content document exists for a slug under any recognized extension."""

    def __init__(self, kind: str, slug: str):
        self.kind = kind
        self.slug = slug
        super().__init__(f"No {kind} document found for slug '{slug}'")
