# forum_server/core/content_tree.py

import logging
from typing import List

from sqlalchemy.orm import Session

from forum_server.core.errors import NotFound, ParentNotFound
from forum_server.database import store_errors, unit_of_work
from forum_server.models.post import Post
from forum_server.schemas import AuthorView, CommentView, ContentNodeView


logger = logging.getLogger(__name__)


class ContentTreeStore:
    """
    Persistence for posts and comments, which share the ``posts`` table.

    The parent's ``child_ids`` list is kept in step with the comments that
    point at it: a comment is inserted and linked in one transaction, and a
    deleted node is unlinked from its parent in the same transaction that
    removes it. Children of a deleted node are left in place.
    """

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------
    # Writes
    # -------------------------------

    def create_post(self, author_id: str, title: str, body: str) -> Post:
        post = Post(title=title, body=body, author_id=author_id, parent_id=None, child_ids=[])
        with unit_of_work(self.db):
            self.db.add(post)
        logger.info("Post %s created by %s", post.id, author_id)
        return post

    def create_comment(self, author_id: str, parent_id: str, body: str) -> Post:
        with unit_of_work(self.db):
            parent = (
                self.db.query(Post)
                .filter(Post.id == parent_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if parent is None:
                raise ParentNotFound()

            comment = Post(title=None, body=body, author_id=author_id, parent_id=parent.id, child_ids=[])
            self.db.add(comment)
            self.db.flush()
            parent.child_ids.append(comment.id)

        logger.info("Comment %s added to %s by %s", comment.id, parent_id, author_id)
        return comment

    def update_body(self, node_id: str, body: str) -> Post:
        with unit_of_work(self.db):
            node = self.db.get(Post, node_id)
            if node is None:
                raise NotFound("Post or comment not found")
            node.body = body
        logger.info("Node %s body updated", node_id)
        return node

    def delete_by_id(self, node_id: str) -> Post:
        with unit_of_work(self.db):
            node = self.db.get(Post, node_id)
            if node is None:
                raise NotFound("Post or comment not found")

            if node.parent_id is not None:
                parent = (
                    self.db.query(Post)
                    .filter(Post.id == node.parent_id)
                    .with_for_update()
                    .populate_existing()
                    .first()
                )
                if parent is not None and node.id in parent.child_ids:
                    parent.child_ids.remove(node.id)

            self.db.delete(node)

        logger.info("Node %s deleted", node_id)
        return node

    # -------------------------------
    # Reads
    # -------------------------------

    def get_node(self, node_id: str) -> Post | None:
        with store_errors():
            return self.db.get(Post, node_id)

    def find_top_level(self) -> List[ContentNodeView]:
        with store_errors():
            posts = (
                self.db.query(Post)
                .filter(Post.parent_id.is_(None))
                .order_by(Post.created_at.asc())
                .all()
            )
            return self._resolve(posts)

    def find_by_id(self, node_id: str) -> ContentNodeView | None:
        with store_errors():
            node = self.db.get(Post, node_id)
            if node is None:
                return None
            return self._resolve([node])[0]

    def _resolve(self, nodes: List[Post]) -> List[ContentNodeView]:
        wanted = {child_id for node in nodes for child_id in node.child_ids}
        children = {}
        if wanted:
            for child in self.db.query(Post).filter(Post.id.in_(list(wanted))).all():
                children[child.id] = child

        return [
            ContentNodeView(
                id=node.id,
                title=node.title,
                parent_id=node.parent_id,
                body=node.body,
                author=AuthorView.model_validate(node.author),
                comments=[
                    CommentView.model_validate(children[child_id])
                    for child_id in node.child_ids
                    if child_id in children
                ],
                created_at=node.created_at,
                updated_at=node.updated_at,
            )
            for node in nodes
        ]
