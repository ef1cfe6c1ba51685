"""
Persistence for users and content items.

Plain single-record operations over a SQLAlchemy session with no business
rules of their own. SQLAlchemy failures are rolled back and re-raised as
StoreError, username collisions as DuplicateError.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from brain_backend.api.errors import DuplicateError, StoreError, ValidationError
from brain_database.models import Content, User

logger = logging.getLogger(__name__)


class _SessionStore:
    def __init__(self, db):
        self.db = db

    def _fail(self, action, message=None):
        self.db.rollback()
        logger.exception("Store failure while trying to %s", action)
        return StoreError(message)


# PUBLIC_INTERFACE
class CredentialStore(_SessionStore):
    """Users, their passwords and their share tokens."""

    def create_user(self, username: str, password: str) -> User:
        user = User(username=username, password=password)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("Signup rejected, username %r already taken", username)
            raise DuplicateError()
        except SQLAlchemyError:
            raise self._fail("create a user", "Database connection error")
        self.db.refresh(user)
        return user

    def find_user_by_id(self, user_id: str):
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError:
            raise self._fail("look up a user by id")

    def find_user_by_username(self, username: str):
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError:
            raise self._fail("look up a user by username")

    def find_user_by_share_token(self, share_token: str):
        try:
            return self.db.query(User).filter(User.share_token == share_token).first()
        except SQLAlchemyError:
            raise self._fail("look up a user by share token")

    def update_user_share_token(self, user_id: str, share_token: str) -> int:
        """Overwrites the user's share token. Returns the number of rows updated."""
        try:
            updated = (
                self.db.query(User)
                .filter(User.id == user_id)
                .update({User.share_token: share_token, User.shared_at: datetime.utcnow()})
            )
            self.db.commit()
        except SQLAlchemyError:
            raise self._fail("update a share token")
        return updated


# PUBLIC_INTERFACE
class ContentStore(_SessionStore):
    """Saved content items, keyed by id and by owner."""

    def create_content(self, user_id: str, types: str, link: str, title: str, tags: str) -> Content:
        try:
            content = Content(types=types, link=link, title=title, tags=tags, user_id=user_id)
        except ValueError as exc:
            raise ValidationError(str(exc))
        self.db.add(content)
        try:
            self.db.commit()
        except SQLAlchemyError:
            raise self._fail("create a content item")
        self.db.refresh(content)
        return content

    def find_content_by_owner(self, user_id: str):
        try:
            return self.db.query(Content).filter(Content.user_id == user_id).all()
        except SQLAlchemyError:
            raise self._fail("list content by owner")

    def find_content_by_id(self, content_id: str):
        try:
            return self.db.query(Content).filter(Content.id == content_id).first()
        except SQLAlchemyError:
            raise self._fail("look up a content item")

    def delete_content_by_id(self, content_id: str) -> int:
        try:
            deleted = self.db.query(Content).filter(Content.id == content_id).delete()
            self.db.commit()
        except SQLAlchemyError:
            raise self._fail("delete a content item")
        return deleted
