from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from supabase import AuthError

from ..domain import Result
from .context import ServiceContext
from .errors import auth_failure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthService:
    context: ServiceContext

    async def _auth(self):
        client = await self.context.connection.ensure_client()
        return client.auth

    async def login(self, email: str, password: str) -> Result[Any]:
        auth = await self._auth()
        try:
            response = await auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as exc:
            logger.error("Login error: %s", exc.message)
            return auth_failure(exc)
        return Result.success(getattr(response, "session", None))

    async def get_session(self) -> Optional[Any]:
        auth = await self._auth()
        try:
            return await auth.get_session()
        except AuthError as exc:
            logger.warning("Could not read the current session: %s", exc.message)
            return None

    async def is_logged_in(self) -> bool:
        return bool(await self.get_session())

    async def logout(self) -> Result[None]:
        auth = await self._auth()
        try:
            await auth.sign_out()
        except AuthError as exc:
            logger.error("Logout error: %s", exc.message)
            return auth_failure(exc)
        return Result.success(None)

    async def current_user_id(self) -> Optional[str]:
        session = await self.get_session()
        user = getattr(session, "user", None)
        identifier = getattr(user, "id", None)
        return str(identifier) if identifier else None
