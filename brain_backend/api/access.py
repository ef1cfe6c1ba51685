"""
Access control for second brain operations.

Owner operations (add, list, share) run for a user id already verified by
the TokenService. Anonymous reads go through a share token that selects one
user's whole collection. Stores and token service are injected so the rules
can be exercised with in-memory fakes.
"""
import logging
import uuid

from brain_backend.api.errors import (
    InvalidCredentials,
    NotFound,
    StoreError,
    Unauthenticated,
    ValidationError,
)

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class AccessControl:
    def __init__(self, credentials, contents, tokens, password_context, share_base_url):
        self.credentials = credentials
        self.contents = contents
        self.tokens = tokens
        self.password_context = password_context
        self.share_base_url = share_base_url.rstrip("/")

    #####################
    # IDENTITY
    #####################

    def signup(self, username, password):
        """Creates a user. Raises DuplicateError when the username is taken."""
        stored = self.password_context.hash(password)
        user = self.credentials.create_user(username, stored)
        logger.info("User %s signed up", user.id)
        return user

    def signin(self, username, password):
        """Returns a session token for matching credentials."""
        user = self.credentials.find_user_by_username(username)
        if user is None or not self.password_context.verify(password, user.password):
            logger.warning("Failed sign in for username %r", username)
            raise InvalidCredentials()
        return self.tokens.issue(user.id)

    def authenticate(self, token):
        """Resolves a session token to the user id it was issued for."""
        return self.tokens.verify(token)

    #####################
    # OWNER OPERATIONS
    #####################

    def add_content(self, user_id, payload):
        """
        Saves a content item owned by `user_id`.

        The owner must still exist. The store may reject a type that passed
        input validation but cannot be persisted.
        """
        if not user_id:
            raise Unauthenticated()
        if self.credentials.find_user_by_id(user_id) is None:
            raise Unauthenticated()
        return self.contents.create_content(
            user_id,
            types=payload.types,
            link=payload.link,
            title=payload.title,
            tags=payload.tags,
        )

    def list_own_content(self, user_id):
        if not user_id:
            raise Unauthenticated()
        try:
            return self.contents.find_content_by_owner(user_id)
        except StoreError:
            raise NotFound("User not Found!")

    def delete_content(self, content_id):
        # Any authenticated caller may delete any item; ownership is not checked.
        if not content_id or not str(content_id).strip():
            raise ValidationError("id must be provided!")
        if self.contents.find_content_by_id(content_id) is None:
            raise NotFound("Content Doesn't exist!")
        self.contents.delete_content_by_id(content_id)
        logger.info("Content %s deleted", content_id)

    def generate_share_link(self, user_id):
        """
        Replaces the user's share token with a fresh one and returns the
        public link. Links handed out earlier stop working.
        """
        if not user_id:
            raise Unauthenticated()
        share_token = str(uuid.uuid4())
        self.credentials.update_user_share_token(user_id, share_token)
        logger.info("Share link regenerated for user %s", user_id)
        return f"{self.share_base_url}/{share_token}"

    #####################
    # ANONYMOUS ACCESS
    #####################

    def get_shared_content(self, share_token):
        """Returns (contents, owner username) for the holder of `share_token`."""
        if not share_token or not share_token.strip():
            raise ValidationError("ShareToken is Required!")
        owner = self.credentials.find_user_by_share_token(share_token)
        if owner is None:
            raise NotFound("Content Not Found!")
        return self.contents.find_content_by_owner(owner.id), owner.username
