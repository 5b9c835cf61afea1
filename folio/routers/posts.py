import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from folio import dependencies as deps
from folio.errors import DocumentNotFoundError
from folio.schemas.blog import PostFrontMatter
from folio.schemas.post_page import PostPage
from folio.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostFrontMatter])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get all published posts metadata, newest first."""
    try:
        return service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostPage)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug, with its navigation and series."""
    try:
        return service.get_post_page(slug)
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
