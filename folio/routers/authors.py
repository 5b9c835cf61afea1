import logging

from fastapi import APIRouter, Depends, HTTPException

from folio import dependencies as deps
from folio.errors import DocumentNotFoundError
from folio.schemas.blog import AuthorDocument
from folio.services.front_matter_service import FrontMatterService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/authors/{slug:path}", response_model=AuthorDocument)
def get_author(
    slug: str,
    service: FrontMatterService = Depends(deps.get_front_matter_service),
):
    """Get an author page by slug."""
    try:
        return service.load_document_by_slug("authors", slug)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Author not found")
    except Exception as e:
        logger.error(f"Unexpected error retrieving author {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve author")
