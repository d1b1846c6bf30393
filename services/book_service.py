from sqlalchemy.orm import Session
from core.exceptions import NotFound
from models.books import Book
from schemas.book_schemas import CreateBookRequest
from utils.logger import get_logger

logger = get_logger(__name__)


def book_to_dict(book: Book) -> dict:
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "image": book.image,
        "description": book.description,
        "price": float(book.price),
        "created_at": book.created_at,
    }


class BookService:

    @staticmethod
    def list_books(db: Session) -> list[dict]:
        return [book_to_dict(b) for b in db.query(Book).order_by(Book.price.desc()).all()]

    @staticmethod
    def get_book(book_id: str, db: Session) -> dict:
        book = db.query(Book).filter(Book.id == book_id).one_or_none()
        if not book:
            raise NotFound("Book Not Found")
        return book_to_dict(book)

    @staticmethod
    def create_book(body: CreateBookRequest, db: Session) -> dict:
        model = Book(**body.model_dump())
        db.add(model)
        db.commit()

        logger.info("Book added", extra={"book_id": model.id, "title": model.title})
        return {"acknowledged": True, "insertedId": model.id}

    @staticmethod
    def delete_book(book_id: str, db: Session) -> dict:
        deleted = db.query(Book).filter(Book.id == book_id).delete(synchronize_session=False)
        db.commit()
        if not deleted:
            raise NotFound("Book Not Found")

        logger.info("Book deleted", extra={"book_id": book_id})
        return {"deletedCount": deleted}
