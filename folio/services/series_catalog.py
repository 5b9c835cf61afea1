import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from folio.data.series_data import SERIES_DATA
from folio.schemas.series import SeriesDefinition

logger = logging.getLogger(__name__)


def humanize_series_slug(slug: str) -> str:
    """Turn `my-new-series` into `My New Series`."""
    return " ".join(segment[:1].upper() + segment[1:] for segment in slug.split("-"))


def ensure_series_definition(
    slug: str, definitions: Mapping[str, SeriesDefinition] = SERIES_DATA
) -> SeriesDefinition:
    """
    Return the registered definition for a slug, or a minimal one built from the
    slug itself so that a post never points at a series nobody can display.
    """
    definition = definitions.get(slug)
    if definition is not None:
        return definition
    return SeriesDefinition(slug=slug, title=humanize_series_slug(slug))


class SeriesCatalog:
    def __init__(self, definitions: Mapping[str, SeriesDefinition] = SERIES_DATA):
        self.definitions = MappingProxyType(dict(definitions))

    def get_series_meta(self, slug: str) -> SeriesDefinition:
        return ensure_series_definition(slug, self.definitions)

    def list_available_series(self) -> List[SeriesDefinition]:
        return [ensure_series_definition(slug, self.definitions) for slug in self.definitions]

    def __contains__(self, slug: str) -> bool:
        return slug in self.definitions

    def __len__(self) -> int:
        return len(self.definitions)


def load_series_catalog(path: Optional[Path] = None) -> SeriesCatalog:
    """
    Build the catalog from the built-in series data, extended (or overridden)
    by the entries of an optional YAML file keyed by series slug.
    """
    definitions: Dict[str, SeriesDefinition] = dict(SERIES_DATA)
    if path is None:
        return SeriesCatalog(definitions)

    if not path.exists():
        logger.warning(f"Series catalog file {path} not found, using built-in series")
        return SeriesCatalog(definitions)

    try:
        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        logger.warning(f"Could not parse series catalog {path}: {e}")
        return SeriesCatalog(definitions)

    if not isinstance(raw, dict):
        logger.warning(f"Series catalog {path} must be a mapping of slug to series")
        return SeriesCatalog(definitions)

    for slug, entry in raw.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping series '{slug}' in {path}: expected a mapping")
            continue
        try:
            definitions[str(slug)] = SeriesDefinition(**{**entry, "slug": str(slug)})
        except ValidationError as e:
            logger.warning(f"Skipping series '{slug}' in {path}: {e}")

    logger.debug(f"Loaded {len(definitions)} series definitions")
    return SeriesCatalog(definitions)
