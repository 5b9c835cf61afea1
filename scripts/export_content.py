import json
import logging
import sys
from pathlib import Path

from folio.repos.content_repo import FileContentRepo
from folio.services.front_matter_service import FrontMatterService
from folio.services.series_catalog import load_series_catalog
from folio.services.series_service import collect_series_from_posts
from folio.settings import settings

logger = logging.getLogger(__name__)


def export_content(output_dir: Path, *, repo=None, catalog=None) -> dict:
    """Write the post listing and the series listing as JSON files."""
    repo = repo or FileContentRepo(settings.content_path)
    catalog = catalog if catalog is not None else load_series_catalog(
        settings.series_catalog_path
    )
    service = FrontMatterService(
        repo, words_per_minute=settings.READING_WORDS_PER_MINUTE
    )

    posts = service.load_all_front_matter("blog")
    series = collect_series_from_posts(posts, catalog)

    output_dir.mkdir(parents=True, exist_ok=True)
    written = {
        "posts.json": [post.model_dump() for post in posts],
        "series.json": [item.model_dump() for item in series],
    }
    for name, payload in written.items():
        (output_dir / name).write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )

    logger.info(f"Exported {len(posts)} posts and {len(series)} series to {output_dir}")
    return {"posts": len(posts), "series": len(series)}


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper()))
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("build/content")
    try:
        export_content(target)
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        sys.exit(1)
