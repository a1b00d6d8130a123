from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt
from jose.exceptions import JWTError

from kraalhub.application.errors import AuthError
from kraalhub.config.settings import Settings

ACCESS_TOKEN_TYPE = "access"


class AccessTokens:
    """Verifies bearer tokens minted by the platform's identity service.

    The subject claim carries the user id. ``issue`` is for seeding scripts
    and tests; the API never hands tokens out.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> AccessTokens:
        return cls(
            settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    def issue(self, user_id: UUID, *, expires_minutes: int = 60) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
            "typ": ACCESS_TOKEN_TYPE,
        }
        if self._issuer:
            claims["iss"] = self._issuer
        if self._audience:
            claims["aud"] = self._audience
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def user_id(self, token: str) -> UUID:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
            )
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc
        if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            raise AuthError("Not an access token")
        try:
            return UUID(str(claims["sub"]))
        except (KeyError, ValueError) as exc:
            raise AuthError("Token subject is not a user id") from exc
