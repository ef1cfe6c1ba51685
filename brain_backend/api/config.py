import os
from dotenv import load_dotenv

load_dotenv()


# PUBLIC_INTERFACE
def get_jwt_secret():
    """
    Retrieves the session token signing secret from JWT_SECRET.
    There is no fallback: without a secret the service must not start.
    """
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable not set.")
    return secret


def get_cors_origins():
    raw = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
# "plaintext" keeps stored passwords comparable with existing accounts.
PASSWORD_SCHEME = os.getenv("PASSWORD_SCHEME", "plaintext")
SHARE_BASE_URL = os.getenv("SHARE_BASE_URL", "http://localhost:5173/shared").rstrip("/")
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
