"""Session tokens: signed, time-limited JWTs carrying the user id as ``sub``."""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.exceptions import Unauthorized

DEFAULT_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionIssuer:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, user_id: str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> str:
        """Return the user id in ``token`` or raise ``Unauthorized``."""
        if not token:
            raise Unauthorized()
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]}
            )
        except jwt.ExpiredSignatureError as e:
            raise Unauthorized("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise Unauthorized("Invalid token") from e
        return claims["sub"]
