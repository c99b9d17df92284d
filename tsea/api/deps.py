"""
FastAPI dependencies for authentication, database sessions, session state,
the progress engine and the assistant service.
"""

import uuid
from functools import lru_cache
from typing import Annotated, AsyncGenerator, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from tsea.assistant.client import AssistantClient
from tsea.assistant.request_builder import AssistantConfig
from tsea.assistant.service import AssistantService
from tsea.config import get_settings
from tsea.curriculum.loader import get_curriculum
from tsea.curriculum.progress import ProgressEngine
from tsea.database import async_session_maker
from tsea.kernel.identity.identity_service import IdentityService
from tsea.kernel.identity.jwt import verify_access_token
from tsea.kernel.models.user import User
from tsea.kernel.sessions.store import SessionStore, get_session_store, progress_session_key

security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that commits on success and rolls back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: DbSession,
) -> User:
    """Get current authenticated user or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await IdentityService(db).get_user_by_id(uuid.UUID(payload.sub))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


# ── Curriculum and session state ─────────────────────────────────────────

@lru_cache
def get_progress_engine() -> ProgressEngine:
    """Process-wide engine over the loaded curriculum."""
    return ProgressEngine(get_curriculum())


Engine = Annotated[ProgressEngine, Depends(get_progress_engine)]
Sessions = Annotated[SessionStore, Depends(get_session_store)]


class ProgressSession:
    """A user's progress record loaded from the session store."""

    def __init__(self, store: SessionStore, user: User):
        self.store = store
        self.key = progress_session_key(user.id)
        self.data: Dict[str, bool] = store.get(self.key) or {}

    def save(self) -> None:
        """Write completed flags back, keeping flags saved by other requests."""
        merged = self.store.get(self.key) or {}
        merged.update({key: True for key, done in self.data.items() if done})
        self.store.set(self.key, merged)
        self.data = merged


def get_progress_session(store: Sessions, user: CurrentUser) -> ProgressSession:
    return ProgressSession(store, user)


UserProgress = Annotated[ProgressSession, Depends(get_progress_session)]


# ── Assistant ────────────────────────────────────────────────────────────

def get_assistant_service() -> AssistantService:
    settings = get_settings()
    return AssistantService(
        config=AssistantConfig.from_settings(settings),
        client=AssistantClient.from_settings(settings),
    )


Assistant = Annotated[AssistantService, Depends(get_assistant_service)]
