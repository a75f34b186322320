"""JWT bearer token issuance and verification.

Tokens are HS256 JWTs with three claims:
- sub: account ID
- iat: issued-at (Unix seconds)
- exp: expiry (Unix seconds), iat + AuthConfig.token_ttl

Tokens are stateless; there is no server-side session table. Only the
configured algorithm is accepted on decode, so "alg": "none" and
algorithm-swapped tokens are rejected.
"""

from datetime import datetime, timedelta

import jwt

from ..config import AuthConfig
from ..exceptions import BadSignature, MalformedToken, TokenExpired
from ..utils import isodatetime
from .schemas import TokenPayload

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenIssuer:
    """Mints and verifies signed bearer tokens."""

    def __init__(self, config: AuthConfig):
        if not config.secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = config.secret
        self._algorithm = config.algorithm
        self._ttl = config.token_ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, account_id: str, issued_at: datetime | None = None) -> str:
        """Create a signed token for account_id.

        Args:
            account_id: Account the token proves
            issued_at: Override "now" (defaults to current UTC time)
        """
        issued_at = issued_at or isodatetime.utcnow()
        payload = {
            "sub": account_id,
            "iat": isodatetime.to_unix(issued_at),
            "exp": isodatetime.to_unix(issued_at + self._ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenPayload:
        """Verify signature and expiry, returning the claims.

        Raises:
            MalformedToken: Not a decodable JWT, or required claims missing
            BadSignature: Signature mismatch or unexpected algorithm
            TokenExpired: now > exp
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except jwt.InvalidSignatureError:
            # Must precede DecodeError: InvalidSignatureError subclasses it
            raise BadSignature("Token signature does not match")
        except jwt.InvalidAlgorithmError:
            raise BadSignature("Token signed with an unexpected algorithm")
        except jwt.InvalidTokenError as e:
            raise MalformedToken(f"Malformed token: {e}")

        if not isinstance(payload.get("sub"), str) or not payload["sub"]:
            raise MalformedToken("Malformed token: sub must be a non-empty string")

        return TokenPayload(sub=payload["sub"], iat=payload["iat"], exp=payload["exp"])

    def verify(self, token: str) -> str:
        """Verify a token and return the account ID it was issued for."""
        return self.decode(token).sub

    def expires_in(self, token: str) -> timedelta | None:
        """Remaining lifetime of a valid token, or None if it does not verify."""
        try:
            payload = self.decode(token)
        except (MalformedToken, BadSignature, TokenExpired):
            return None
        return isodatetime.from_unix(payload.exp) - isodatetime.utcnow()
