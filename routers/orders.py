from fastapi import APIRouter, Response, status
from core.policy import scope_to_caller
from schemas.order_schemas import CreateOrderRequest, UpdateOrderStatusRequest
from services.order_service import OrderService
from utils.deps import db_dependency, user_dependency, operator_dependency


router = APIRouter(
    prefix="/orders",
    tags=["orders"]
)


@router.get("", status_code=status.HTTP_200_OK)
async def list_orders(user: user_dependency, db: db_dependency, email: str | None = None):
    """
    List orders, most expensive first.

    Buyers only see their own; operators may filter by any email or list all.
    """
    return OrderService.list_orders(db, scope_to_caller(user, email))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(body: CreateOrderRequest, response: Response, user: user_dependency, db: db_dependency):
    result = OrderService.create_order(body, user, db)
    if result["insertedId"] is None:
        response.status_code = status.HTTP_200_OK
    return result


@router.get("/librarian/{email}", status_code=status.HTTP_200_OK)
async def list_librarian_orders(email: str, user: operator_dependency, db: db_dependency):
    return OrderService.list_orders_by_author(db, email)


@router.get("/{order_id}", status_code=status.HTTP_200_OK)
async def get_order(order_id: str, user: user_dependency, db: db_dependency):
    return OrderService.get_order(order_id, user, db)


@router.delete("/{order_id}", status_code=status.HTTP_200_OK)
async def delete_order(order_id: str, user: operator_dependency, db: db_dependency):
    return OrderService.delete_order(order_id, db)


@router.patch("/cancel/{order_id}", status_code=status.HTTP_200_OK)
async def cancel_order(order_id: str, user: user_dependency, db: db_dependency):
    return OrderService.cancel_order(order_id, user, db)


@router.patch("/status/{order_id}", status_code=status.HTTP_200_OK)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest,
    user: operator_dependency, db: db_dependency):
    return OrderService.update_status(order_id, body.status, db)
