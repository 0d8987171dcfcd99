from typing import Optional
from fastapi import APIRouter, Request, Response

from booking_api.core import security
from booking_api.core.config import Settings
from booking_api.models.api_models import LoginRequest, LoginResponse

router = APIRouter(prefix="/admin")


@router.post("/login", response_model=LoginResponse)
async def admin_login(request: Request, response: Response, req: Optional[LoginRequest] = None):
    settings: Settings = request.app.state.settings
    token = security.login(req.password if req else None, settings)

    # Returned both in the body and as a cookie so either transport works
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.TOKEN_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return LoginResponse(token=token)


@router.post("/logout")
async def admin_logout(request: Request, response: Response):
    settings: Settings = request.app.state.settings
    response.delete_cookie(settings.AUTH_COOKIE_NAME, httponly=True, samesite="lax")
    return {"ok": True}
