# forum_server/core/content_service.py

import logging
import uuid
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from forum_server.core.auth_gate import AuthGate
from forum_server.core.content_tree import ContentTreeStore
from forum_server.core.errors import Forbidden, NotFound, ValidationError
from forum_server.schemas import CommentDraft, ContentNodeView, NodeRecord, PostDraft


logger = logging.getLogger(__name__)


def parse_node_id(value: str) -> str:
    """Normalize a node id to its hex form, rejecting anything that is not a UUID."""
    try:
        return uuid.UUID(str(value).strip()).hex
    except (ValueError, AttributeError):
        raise ValidationError("Invalid request")


def _require_body(body: Optional[str]) -> str:
    body = (body or "").strip()
    if not body:
        raise ValidationError("Invalid request")
    return body


class ContentService:
    """
    Entry point for every post and comment operation.

    Creating content always requires a confirmed identity. Editing and
    deleting additionally require the caller to be the node's author unless
    ``require_authorship`` is turned off, in which case anyone may do both.
    """

    def __init__(self, store: ContentTreeStore, gate: AuthGate, require_authorship: bool = True):
        self.store = store
        self.gate = gate
        self.require_authorship = require_authorship

    def list_top_level(self) -> List[ContentNodeView]:
        return self.store.find_top_level()

    def create_content(self, token: Optional[str], title: Optional[str], body: Optional[str]) -> str:
        identity = self.gate.authenticate(token)
        try:
            draft = PostDraft(title=title or "", body=body or "")
        except PydanticValidationError:
            raise ValidationError("Title and body are required for posts")

        post = self.store.create_post(identity.user_id, draft.title, draft.body)
        return post.id

    def get_content_with_comments(self, node_id: str) -> ContentNodeView:
        node = self.store.find_by_id(parse_node_id(node_id))
        if node is None:
            raise NotFound("Post not found")
        return node

    def create_comment(self, token: Optional[str], parent_id: str, body: Optional[str]) -> str:
        identity = self.gate.authenticate(token)
        try:
            draft = CommentDraft(parent_id=parse_node_id(parent_id), body=body or "")
        except PydanticValidationError:
            raise ValidationError("Invalid request")

        comment = self.store.create_comment(identity.user_id, draft.parent_id, draft.body)
        return comment.id

    def update_content_body(self, node_id: str, body: Optional[str], token: Optional[str] = None) -> NodeRecord:
        node_id = self._authorize_change(node_id, token)
        node = self.store.update_body(node_id, _require_body(body))
        return NodeRecord.model_validate(node)

    def delete_content(self, node_id: str, token: Optional[str] = None) -> NodeRecord:
        node_id = self._authorize_change(node_id, token)
        node = self.store.delete_by_id(node_id)
        return NodeRecord.model_validate(node)

    def _authorize_change(self, node_id: str, token: Optional[str]) -> str:
        if not self.require_authorship:
            return parse_node_id(node_id)

        identity = self.gate.authenticate(token)
        node_id = parse_node_id(node_id)
        node = self.store.get_node(node_id)
        if node is None:
            raise NotFound("Post or comment not found")
        if node.author_id != identity.user_id:
            logger.warning("User %s tried to modify node %s owned by %s", identity.user_id, node_id, node.author_id)
            raise Forbidden()
        return node_id
