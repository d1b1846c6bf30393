from sqlalchemy.orm import Session
from core.exceptions import NotFound
from models.users import User
from schemas.user_schemas import CreateUserRequest
from utils.emails import normalize_email
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ROLE = "user"


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "photo": user.photo,
        "role": user.role,
        "created_at": user.created_at,
    }


class UserService:

    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).one_or_none()

    @staticmethod
    def get_role(db: Session, email: str) -> str:
        user = UserService.get_by_email(db, email)
        return user.role if user and user.role else DEFAULT_ROLE

    @staticmethod
    def create_user(body: CreateUserRequest, db: Session) -> dict:
        if UserService.get_by_email(db, body.email):
            logger.info("User already exists", extra={"email": body.email})
            return {"message": "User already exists", "insertedId": None}

        # Roles are never taken from the request body
        model = User(email=body.email, name=body.name, photo=body.photo, role=DEFAULT_ROLE)
        db.add(model)
        db.commit()

        logger.info("User registered", extra={"user_id": model.id, "email": model.email})
        return {"acknowledged": True, "insertedId": model.id}

    @staticmethod
    def list_users(db: Session) -> list[dict]:
        return [user_to_dict(u) for u in db.query(User).order_by(User.created_at.desc()).all()]

    @staticmethod
    def set_role(email: str, role: str, db: Session) -> dict:
        model = UserService.get_by_email(db, email)
        if not model:
            raise NotFound("User not found")

        model.role = role
        db.commit()
        db.refresh(model)

        logger.info("User role changed", extra={"email": email, "role": role})
        return user_to_dict(model)
