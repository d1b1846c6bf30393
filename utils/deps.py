from typing import Annotated
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from core.exceptions import Unauthenticated, Forbidden
from core.policy import Capability, granted
from services.identity_service import IdentityVerifier
from services.payment_gateway import PaymentGateway
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


def get_db(request: Request):
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway

gateway_dependency = Annotated[PaymentGateway, Depends(get_payment_gateway)]


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: db_dependency,
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)]
):
    # No token at all is 401; a token we cannot verify is 403.
    if credentials is None:
        raise Unauthenticated("Unauthorized access")

    try:
        email = verifier.verify(credentials.credentials)
    except Unauthenticated as e:
        logger.warning("Authentication failed - unverifiable token", extra={"reason": e.detail})
        raise Forbidden("Forbidden access") from e

    return {"email": email, "role": UserService.get_role(db, email)}


def require(capability: Capability):
    """
    Build the dependency enforcing a route's required capability.

    Anonymous routes never touch the Authorization header; the others
    authenticate first and then check the caller's role.
    """
    if capability is Capability.ANONYMOUS:
        def anonymous():
            return None
        return anonymous

    def dependency(user: Annotated[dict, Depends(get_current_user)]):
        if not granted(user, capability):
            logger.warning(
                "Authorization failed",
                extra={"email": user.get("email"), "role": user.get("role"), "required": capability.value}
            )
            raise Forbidden("Forbidden access")
        return user

    return dependency


user_dependency = Annotated[dict, Depends(require(Capability.SELF))]
operator_dependency = Annotated[dict, Depends(require(Capability.OPERATOR))]
