# forum_server/models/post.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Text, JSON
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship
from . import Base
from .user import new_id, utcnow


# -------------------------------
# Post / Comment Model
# -------------------------------

class Post(Base):
    """
    A single content node. Rows without a parent are posts and carry a title;
    rows with a parent are comments. ``child_ids`` lists the comments attached
    to this node in the order they were created.
    """
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("parent_id IS NOT NULL OR title IS NOT NULL", name="ck_posts_title_required"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String, nullable=True)
    body = Column(Text, nullable=False)
    author_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    # no FK: deleted parents leave their comments in place
    parent_id = Column(String(32), nullable=True, index=True)
    child_ids = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship("User", lazy="joined", innerjoin=True)

    @property
    def is_comment(self) -> bool:
        return self.parent_id is not None
