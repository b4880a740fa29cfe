"""Authentication endpoints."""
from fastapi import APIRouter, HTTPException, Request, Response

from sanctuary.schemas import StaffLoginRequest, SuccessResponse
from sanctuary.core.security import STAFF_COOKIE_NAME, verify_staff_password, create_access_token
from sanctuary.core.rate_limit import limiter, RATE_LIMITS
from sanctuary.core import config
from sanctuary.core.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.post("/staff/login", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["login"])
async def staff_login(request: Request, credentials: StaffLoginRequest, response: Response) -> SuccessResponse:
    """
    Authenticate check-in staff and set a JWT in an httpOnly cookie.

    Example:
        Request:
            POST /api/v1/auth/staff/login
            {"password": "your-secure-password"}

        Response (200):
            {"success": true, "message": "Logged in successfully"}
            Set-Cookie: staff_token=eyJhbGc...; HttpOnly; SameSite=Lax

        Response (401):
            {"detail": "Invalid password"}
    """
    if not verify_staff_password(credentials.password):
        logger.warning("staff_login_rejected")
        raise HTTPException(status_code=401, detail="Invalid password")

    access_token = create_access_token(data={"is_staff": True})

    response.set_cookie(
        key=STAFF_COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=config.settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    return SuccessResponse(success=True, message="Logged in successfully")


@router.post("/staff/logout", response_model=SuccessResponse)
async def staff_logout(response: Response) -> SuccessResponse:
    """Clear the staff cookie. Safe to call when not logged in."""
    response.delete_cookie(key=STAFF_COOKIE_NAME)
    return SuccessResponse(success=True, message="Logged out successfully")
