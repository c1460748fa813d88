"""
Route dependencies
Service lookup, envelope unwrapping, authentication and role checks
"""
from typing import Any, Dict, Sequence

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import Response
from fastapi.security import OAuth2PasswordBearer

from app.config import Settings
from app.core.filtering import page_count, paginate
from app.core.results import NOT_AVAILABLE, ApiResponse, PaginationInfo, is_not_found, ok
from app.core.security import InvalidToken, Principal, decode_principal
from app.services.container import Services
from app.services.export import export_csv

# Tokens come from the identity provider; the URL only feeds the docs UI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

STAFF_ROLES = ("admin", "hr")


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def unwrap(result: ApiResponse) -> ApiResponse:
    """Pass a successful envelope through; map a failed one to an HTTP error."""
    if result.success:
        return result
    if is_not_found(result):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    if result.error == NOT_AVAILABLE:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)


def paged(result: ApiResponse, page: int, page_size: int) -> ApiResponse:
    rows = unwrap(result).data
    return ok(paginate(rows, page, page_size), pagination=PaginationInfo(
        page=page, limit=page_size, total=len(rows), total_pages=page_count(len(rows), page_size)
    ))


def csv_download(result: ApiResponse, data_type: str) -> Response:
    export = unwrap(export_csv(unwrap(result).data, data_type)).data
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )


async def get_principal(token: str = Depends(oauth2_scheme),
                        settings: Settings = Depends(get_app_settings)) -> Principal:
    try:
        return decode_principal(token, settings)
    except InvalidToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(principal: Principal = Depends(get_principal),
                           services: Services = Depends(get_services)) -> Dict[str, Any]:
    """Signed-in user's profile, created on first sight"""
    result = await services.auth.resolve_profile(principal)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    if result.data.get("is_active") is False:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return result.data


def require_roles(*roles: str):
    allowed: Sequence[str] = roles or STAFF_ROLES

    async def checker(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
        return user

    return checker
