import logging

from jose import JWTError, jwt
from passlib.context import CryptContext

from brain_backend.api.errors import InvalidToken, MissingToken

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TokenService:
    """
    Issues and verifies signed session tokens.

    A token carries the user id in its `id` claim. No expiry is set, so a
    token stays valid for as long as the signing secret is unchanged.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("A signing secret is required.")
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, user_id: str) -> str:
        return jwt.encode({"id": str(user_id)}, self._secret, algorithm=self._algorithm)

    def verify(self, token) -> str:
        """Returns the user id bound to `token` or raises an Unauthenticated error."""
        if not token or not token.strip():
            raise MissingToken()
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.warning("Rejected session token: %s", exc)
            raise InvalidToken()
        user_id = payload.get("id")
        if not user_id:
            raise InvalidToken()
        return user_id


# PUBLIC_INTERFACE
def make_password_context(scheme: str = "plaintext") -> CryptContext:
    """
    Builds the context used to store and check passwords. The default
    "plaintext" scheme keeps passwords exactly as given.
    """
    return CryptContext(schemes=[scheme], deprecated="auto")
