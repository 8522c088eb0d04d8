# forum_server/api/posts.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from forum_server.api.deps import get_content_service, get_session_token
from forum_server.core.content_service import ContentService
from forum_server.schemas import ContentNodeView, NodeRecord


router = APIRouter(prefix="/posts", tags=["posts"])


class CreatePostRequest(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None


class BodyRequest(BaseModel):
    body: Optional[str] = None


# -------------------------------
# Posts
# -------------------------------

@router.get("", response_model=List[ContentNodeView])
def list_posts(service: ContentService = Depends(get_content_service)):
    """Top-level posts with their authors and direct comments."""
    return service.list_top_level()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    req: CreatePostRequest,
    token: Optional[str] = Depends(get_session_token),
    service: ContentService = Depends(get_content_service),
):
    post_id = service.create_content(token, req.title, req.body)
    return {"post": post_id}


@router.patch("/{node_id}", response_model=NodeRecord)
def update_post(
    node_id: str,
    req: BodyRequest,
    token: Optional[str] = Depends(get_session_token),
    service: ContentService = Depends(get_content_service),
):
    """Edit the body of a post or a comment."""
    return service.update_content_body(node_id, req.body, token)


@router.delete("/{node_id}", response_model=NodeRecord)
def delete_post(
    node_id: str,
    token: Optional[str] = Depends(get_session_token),
    service: ContentService = Depends(get_content_service),
):
    """
    Delete a post or a comment. Its comments stay in place; the node is
    unlinked from its parent's comment list.
    """
    return service.delete_content(node_id, token)


# -------------------------------
# Comments
# -------------------------------

@router.get("/{node_id}/comments", response_model=ContentNodeView)
def get_post_with_comments(node_id: str, service: ContentService = Depends(get_content_service)):
    return service.get_content_with_comments(node_id)


@router.post("/{node_id}/comments", status_code=status.HTTP_201_CREATED)
def create_comment(
    node_id: str,
    req: BodyRequest,
    token: Optional[str] = Depends(get_session_token),
    service: ContentService = Depends(get_content_service),
):
    comment_id = service.create_comment(token, node_id, req.body)
    return {"comment": comment_id}
