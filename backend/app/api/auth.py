"""Demo login and signup endpoints"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import get_users
from app.middleware.monitoring import record_login_failure
from app.middleware.rate_limit import rate_limit
from app.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserResponse
from app.utils.auth import UserDirectory
from app.utils.logger import logger

router = APIRouter(prefix="/api", tags=["auth"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
@rate_limit("auth")
def login(request: Request, credentials: LoginRequest, users: UserDirectory = Depends(get_users)):
    """Check credentials against the in-memory user list"""
    user = users.authenticate(credentials.email, credentials.password)
    if not user:
        record_login_failure()
        logger.warning("Login rejected", extra={"path": "/api/login"})
        return _failure(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    return AuthResponse(success=True, user=UserResponse(**users.public(user)))


@router.post("/signup", response_model=AuthResponse, response_model_exclude_none=True)
@rate_limit("auth")
def signup(request: Request, body: SignupRequest, users: UserDirectory = Depends(get_users)):
    """
    Register a user (demo only).

    The email must not be taken; ids are assigned sequentially.
    """
    user = users.add(
        email=body.email,
        password=body.password,
        role=body.role,
        name=body.name,
        location=body.location,
        land_size=body.land_size,
    )
    if user is None:
        return _failure(status.HTTP_400_BAD_REQUEST, "User already exists")

    logger.info(f"User registered: {user['id']}", extra={"user_id": user["id"]})
    return AuthResponse(success=True, user=UserResponse(**users.public(user)))
