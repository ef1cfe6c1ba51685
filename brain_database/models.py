import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, relationship, validates

Base = declarative_base()

# Types the contents table accepts. Input validation additionally allows "link".
STORED_CONTENT_TYPES = ("document", "Twitter", "youtube")


def _new_id():
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
class User(Base):
    """
    SQLAlchemy model for a second brain user.

    `share_token` is null until the user generates a shareable link and is
    overwritten every time a new link is generated.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    username = Column(String(10), unique=True, index=True, nullable=False)
    password = Column(String(256), nullable=False)
    share_token = Column(String(64), unique=True, index=True, nullable=True)
    shared_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    contents = relationship("Content", back_populates="owner")


# PUBLIC_INTERFACE
class Content(Base):
    """
    SQLAlchemy model for a saved content item (a bookmark).
    """
    __tablename__ = "contents"

    id = Column(String(36), primary_key=True, default=_new_id)
    types = Column(String(16), nullable=False)
    link = Column(String(2048), nullable=False)
    title = Column(String(256), nullable=False)
    tags = Column(String(256), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    owner = relationship("User", back_populates="contents")

    @validates("types")
    def validate_types(self, key, value):
        if value not in STORED_CONTENT_TYPES:
            raise ValueError(f"Content type '{value}' cannot be stored.")
        return value
