from fastapi import APIRouter, Depends, Response, status
from core.policy import Capability
from fastapi.responses import JSONResponse
from schemas.user_schemas import CreateUserRequest, UpdateRoleRequest
from services.user_service import UserService
from utils.deps import db_dependency, operator_dependency, require


router = APIRouter(
    prefix="/users",
    tags=["users"]
)


@router.get("", status_code=status.HTTP_200_OK)
async def list_users(user: operator_dependency, db: db_dependency):
    return UserService.list_users(db)


@router.get("/role/{email}", status_code=status.HTTP_200_OK, dependencies=[Depends(require(Capability.ANONYMOUS))])
async def get_user_role(email: str, db: db_dependency):
    model = UserService.get_by_email(db, email)
    if not model:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "User not found", "role": None}
        )
    return {"role": model.role or "user"}


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require(Capability.ANONYMOUS))])
async def create_user(body: CreateUserRequest, response: Response, db: db_dependency):
    result = UserService.create_user(body, db)
    if result["insertedId"] is None:
        response.status_code = status.HTTP_200_OK
    return result


@router.patch("/role/{email}", status_code=status.HTTP_200_OK)
async def update_user_role(email: str, body: UpdateRoleRequest, user: operator_dependency, db: db_dependency):
    return UserService.set_role(email, body.role, db)
