"""
Authentication Routes
Profile of the signed-in user; tokens are issued by the identity provider
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_principal, get_services, unwrap
from app.core.security import Principal
from app.models.user import UserUpdate
from app.services.auth import AuthService
from app.services.container import Services

router = APIRouter()

# Fields users may change on their own profile
SELF_EDITABLE = {"first_name", "last_name", "phone", "address", "avatar", "emergency_contact"}


@router.get("/me")
async def get_me(current_user: dict = Depends(get_current_user)):
    """Get current user profile (created on first sign-in)"""
    return current_user


@router.put("/me")
async def update_me(
    update_data: UserUpdate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """Update current user profile"""
    changes = update_data.model_dump(exclude_unset=True, include=SELF_EDITABLE)
    return unwrap(await services.users.update_user(current_user["id"], UserUpdate(**changes)))


@router.post("/session")
async def sign_in(
    principal: Principal = Depends(get_principal),
    services: Services = Depends(get_services),
):
    """Record a sign-in; stamps last_login_at and returns the session state"""
    # Session state is per request; the shared service only resolves profiles
    session = AuthService(services.store)
    return await session.handle_signed_in(principal)
