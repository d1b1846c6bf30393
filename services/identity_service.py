from jose import jwt, JWTError
from core.exceptions import Unauthenticated
from utils.emails import normalize_email
from utils.logger import get_logger

logger = get_logger(__name__)


class IdentityVerifier:
    """
    Verifies bearer tokens issued by the identity provider.

    The only thing the rest of the application learns from a token is the
    verified email address; roles are looked up locally.
    """

    def __init__(self, secret_key: str, algorithm: str, audience: str | None = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience

    def verify(self, token: str) -> str:
        """
        Args:
            token: Raw bearer token (without the "Bearer " prefix)

        Returns:
            The verified email, lowercased

        Raises:
            Unauthenticated: signature, expiry or audience check failed,
                or the token carries no email
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None}
            )
        except JWTError as e:
            logger.debug("Token rejected", extra={"error": str(e)})
            raise Unauthenticated("Invalid or expired token") from e

        email = payload.get("email") or payload.get("sub")
        if not email:
            raise Unauthenticated("Token has no email claim")

        return normalize_email(email)
