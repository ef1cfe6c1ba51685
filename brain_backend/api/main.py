import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brain_backend.api import config
from brain_backend.api.access import AccessControl
from brain_backend.api.errors import BrainError
from brain_backend.api.schemas import (
    CONTENT_INVALID_MESSAGE,
    SIGNIN_INVALID_MESSAGE,
    SIGNUP_INVALID_MESSAGE,
    ContentCreate,
    ContentListOut,
    Credentials,
    MessageOut,
    SharedContentOut,
    ShareLinkOut,
    TokenOut,
)
from brain_backend.api.security import TokenService, make_password_context
from brain_backend.api.stores import ContentStore, CredentialStore
from brain_database.db import get_db

logger = logging.getLogger(__name__)

# Fails at import, before the app can serve anything, when JWT_SECRET is unset
token_service = TokenService(config.get_jwt_secret(), config.JWT_ALGORITHM)
pwd_context = make_password_context(config.PASSWORD_SCHEME)

# FastAPI app config
app = FastAPI(
    title="Second Brain Backend API",
    description="Save links with titles and tags, and share the whole collection read-only.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Authentication", "description": "Signup and signin"},
        {"name": "Content", "description": "Add, list and delete saved content"},
        {"name": "Sharing", "description": "Shareable links and public collection views"},
    ]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
router = APIRouter(prefix=config.API_PREFIX)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


# Dependencies
def get_token_service():
    return token_service


def get_access(db=Depends(get_db), tokens: TokenService = Depends(get_token_service)):
    return AccessControl(
        credentials=CredentialStore(db),
        contents=ContentStore(db),
        tokens=tokens,
        password_context=pwd_context,
        share_base_url=config.SHARE_BASE_URL,
    )


def get_current_user_id(
    token: Optional[str] = Header(None, description="Session token from /signin"),
    access: AccessControl = Depends(get_access),
):
    """Verifies the `token` header and returns the user id it carries."""
    return access.authenticate(token)


# Root Health Check
@app.get("/", summary="Health Check", tags=["General"])
def health_check():
    """Simple health check endpoint."""
    return {"message": "Healthy"}


@app.get("/test", summary="Backend smoke test", tags=["General"])
def backend_test():
    return {"message": "Backend is working!"}


#####################
# AUTH ENDPOINTS
#####################

# PUBLIC_INTERFACE
@router.post("/signup", response_model=MessageOut, status_code=201, summary="Register a new user", tags=["Authentication"])
def signup(credentials: Credentials, access: AccessControl = Depends(get_access)):
    """
    Register a new user.
    A taken username is reported as a server error.
    """
    access.signup(credentials.username, credentials.password)
    return {"message": "You are Signed Up!"}

# PUBLIC_INTERFACE
@router.post("/signin", response_model=TokenOut, summary="Sign in and get a session token", tags=["Authentication"])
def signin(credentials: Credentials, access: AccessControl = Depends(get_access)):
    """
    Returns a session token to send in the `token` header of later requests.
    """
    token = access.signin(credentials.username, credentials.password)
    return {"message": "You are Signed In!", "token": token}


#####################
# CONTENT ENDPOINTS
#####################

# PUBLIC_INTERFACE
@router.post("/content", response_model=MessageOut, status_code=201, summary="Save a content item", tags=["Content"])
def add_content(
    payload: ContentCreate,
    user_id: str = Depends(get_current_user_id),
    access: AccessControl = Depends(get_access),
):
    access.add_content(user_id, payload)
    return {"message": "Content Added Successfully!"}

# PUBLIC_INTERFACE
@router.get("/content", response_model=ContentListOut, summary="List own content", tags=["Content"])
def list_content(user_id: str = Depends(get_current_user_id), access: AccessControl = Depends(get_access)):
    """
    Every content item owned by the authenticated user, in store order.
    """
    return {"user": access.list_own_content(user_id)}

# PUBLIC_INTERFACE
@router.delete("/content/{content_id}", response_model=MessageOut, summary="Delete a content item", tags=["Content"])
def delete_content(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    access: AccessControl = Depends(get_access),
):
    """
    Delete a content item by id.
    The caller only needs a valid session token; ownership is not checked.
    """
    access.delete_content(content_id)
    return {"message": "Deleted Successfully!"}


#####################
# SHARING ENDPOINTS
#####################

# PUBLIC_INTERFACE
@router.post("/share", response_model=ShareLinkOut, summary="Generate a shareable link", tags=["Sharing"])
def share_content(user_id: str = Depends(get_current_user_id), access: AccessControl = Depends(get_access)):
    """
    Generates a new shareable link for the whole collection.
    Any previously generated link stops working.
    """
    link = access.generate_share_link(user_id)
    return {"message": "Shareable Link Generated Successfully!", "shareableLink": link}

# PUBLIC_INTERFACE
@router.get("/shared/{share_token}", response_model=SharedContentOut, summary="View a shared collection", tags=["Sharing"])
def get_shared_content(share_token: str, access: AccessControl = Depends(get_access)):
    """
    Public, read-only view of the collection a share token points to.
    """
    contents, owner_name = access.get_shared_content(share_token)
    return {
        "contents": contents,
        "ownerName": owner_name,
    }


app.include_router(router)


# Error handlers
_VALIDATION_MESSAGES = {
    "/signup": SIGNUP_INVALID_MESSAGE,
    "/signin": SIGNIN_INVALID_MESSAGE,
    "/content": CONTENT_INVALID_MESSAGE,
}


@app.exception_handler(BrainError)
def brain_error_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
    )


@app.exception_handler(RequestValidationError)
def request_validation_handler(request, exc):
    path = request.url.path[len(config.API_PREFIX):]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": _VALIDATION_MESSAGES.get(path, "Invalid request."),
            "errors": jsonable_encoder(exc.errors()),
        },
    )
