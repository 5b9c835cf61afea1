from functools import lru_cache

from fastapi import Depends

from folio.repos.content_repo import FileContentRepo
from folio.services.front_matter_service import FrontMatterService
from folio.services.posts_service import PostsService
from folio.services.series_catalog import SeriesCatalog, load_series_catalog
from folio.services.series_service import SeriesService
from folio.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


@lru_cache(maxsize=1)
def _catalog_for(path) -> SeriesCatalog:
    return load_series_catalog(path)


def get_series_catalog(current_settings: Settings = Depends(get_settings)) -> SeriesCatalog:
    # Built once per catalog file for the life of the process
    return _catalog_for(current_settings.series_catalog_path)


def get_content_repo(current_settings: Settings = Depends(get_settings)):
    return FileContentRepo(current_settings.content_path)


def get_front_matter_service(
    repo=Depends(get_content_repo),
    current_settings: Settings = Depends(get_settings),
):
    return FrontMatterService(
        repo,
        words_per_minute=current_settings.READING_WORDS_PER_MINUTE,
        toc_depth=current_settings.TOC_DEPTH,
    )


def get_series_service(
    front_matter_service=Depends(get_front_matter_service),
    catalog=Depends(get_series_catalog),
):
    return SeriesService(front_matter_service, catalog)


def get_posts_service(
    front_matter_service=Depends(get_front_matter_service),
    series_service=Depends(get_series_service),
):
    return PostsService(front_matter_service, series_service)
