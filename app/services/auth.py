"""
Auth Service
Maps a signed-in identity to its user profile and tracks session state
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from app.core import clock
from app.core.results import ApiResponse, is_not_found, ok
from app.core.security import Principal
from app.db.store import DocumentStore

logger = logging.getLogger(__name__)

AuthListener = Callable[["AuthState"], None]


class AuthState(BaseModel):
    user: Optional[Dict[str, Any]] = None
    loading: bool = True
    error: Optional[str] = None


def default_profile(principal: Principal) -> Dict[str, Any]:
    """Profile written the first time an identity is seen."""
    name = (principal.display_name or "").strip()
    if not name and principal.email:
        name = principal.email.split("@")[0]
    first_name, _, last_name = (name or "User").partition(" ")
    now = clock.utcnow()
    return {
        "first_name": first_name,
        "last_name": last_name.strip(),
        "email": principal.email or "",
        "role": "employee",
        "department": "",
        "position": "",
        "status": "active",
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }


class AuthService:
    collection = "users"

    def __init__(self, store: DocumentStore):
        self.store = store
        self.state = AuthState()
        self._listeners: List[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; it is called immediately with the current state."""
        self._listeners.append(listener)
        listener(self.state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self.state)

    async def resolve_profile(self, principal: Principal) -> ApiResponse:
        """
        Read users/<uid>; create a default profile when none exists.
        A profile is always returned, even if it cannot be persisted.
        Only a confirmed miss is written; any other read failure falls back
        to the default profile in memory so a stored profile is never replaced.
        """
        existing = await self.store.get_document(self.collection, principal.uid)
        if existing.success:
            return existing

        profile = default_profile(principal)
        if not is_not_found(existing):
            logger.warning("Could not read profile for %s: %s", principal.uid, existing.error)
            return ok({"id": principal.uid, **profile})

        created = await self.store.set_document(self.collection, principal.uid, profile)
        if created.success:
            logger.info("Created profile for %s", principal.uid)
            return created

        logger.warning("Could not persist profile for %s: %s", principal.uid, created.error)
        return ok({"id": principal.uid, **profile})

    async def handle_signed_in(self, principal: Principal) -> AuthState:
        self._publish(loading=True, error=None)
        result = await self.resolve_profile(principal)
        if not result.success:
            self._publish(user=None, loading=False, error=result.error)
            return self.state

        touched = await self.store.update_document(
            self.collection, principal.uid, {"last_login_at": clock.utcnow()}
        )
        user = touched.data if touched.success else result.data
        self._publish(user=user, loading=False, error=None)
        return self.state

    def handle_signed_out(self) -> AuthState:
        self._publish(user=None, loading=False, error=None)
        return self.state
