from __future__ import annotations

from uuid import UUID

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from kraalhub.application.errors import AuthError, PermissionDenied
from kraalhub.config.settings import Settings
from kraalhub.infrastructure.auth.context import AuthContext, resolve_context
from kraalhub.infrastructure.auth.tokens import AccessTokens
from kraalhub.interfaces.middleware.error_handler import error_payload

HEALTH_PATH = "/api/v1/health"


def public_paths(app: FastAPI) -> frozenset[str]:
    """Health probe plus whichever API docs the app serves."""
    docs = (app.docs_url, app.redoc_url, app.openapi_url, app.swagger_ui_oauth2_redirect_url)
    return frozenset({HEALTH_PATH, *(path for path in docs if path)})


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the caller's tenant role for every herd endpoint.

    The result lands on ``request.state.auth_context`` for ``get_auth_context``.
    """

    def __init__(self, app, *, settings: Settings, tokens: AccessTokens) -> None:
        super().__init__(app)
        self.tenant_header = settings.tenant_header
        self.tokens = tokens

    async def dispatch(self, request: Request, call_next) -> Response:
        # CORS preflight carries no credentials
        if request.method == "OPTIONS" or request.url.path in public_paths(request.app):
            return await call_next(request)
        try:
            request.state.auth_context = await self._authenticate(request)
        except (AuthError, PermissionDenied) as exc:
            return JSONResponse(status_code=exc.status_code, content=error_payload(exc))
        return await call_next(request)

    async def _authenticate(self, request: Request) -> AuthContext:
        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise AuthError("Missing or malformed bearer token")
        user_id = self.tokens.user_id(token)
        tenant_id = self._tenant_id(request)
        async with request.app.state.session_factory() as session:
            return await resolve_context(session, user_id, tenant_id)

    def _tenant_id(self, request: Request) -> UUID:
        value = request.headers.get(self.tenant_header)
        if not value:
            raise PermissionDenied("Missing tenant header", details={"header": self.tenant_header})
        try:
            return UUID(value)
        except ValueError as exc:
            raise PermissionDenied("Invalid tenant identifier") from exc
