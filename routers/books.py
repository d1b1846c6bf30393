from fastapi import APIRouter, Depends, status
from core.policy import Capability
from schemas.book_schemas import CreateBookRequest
from services.book_service import BookService
from utils.deps import db_dependency, operator_dependency, require


router = APIRouter(
    prefix="/books",
    tags=["books"]
)


@router.get("", status_code=status.HTTP_200_OK, dependencies=[Depends(require(Capability.ANONYMOUS))])
async def list_books(db: db_dependency):
    return BookService.list_books(db)


@router.get("/{book_id}", status_code=status.HTTP_200_OK, dependencies=[Depends(require(Capability.ANONYMOUS))])
async def get_book(book_id: str, db: db_dependency):
    return BookService.get_book(book_id, db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(body: CreateBookRequest, user: operator_dependency, db: db_dependency):
    return BookService.create_book(body, db)


@router.delete("/{book_id}", status_code=status.HTTP_200_OK)
async def delete_book(book_id: str, user: operator_dependency, db: db_dependency):
    return BookService.delete_book(book_id, db)
