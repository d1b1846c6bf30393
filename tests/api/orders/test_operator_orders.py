from models.orders import Order
from conftest import auth_headers, BUYER_EMAIL, ADMIN_EMAIL, LIBRARIAN_EMAIL


async def test_librarian_marks_order_completed(client, session, pending_order, librarian_user):
    response = await client.patch(
        f"/orders/status/{pending_order.id}",
        json={"status": "completed"},
        headers=auth_headers(LIBRARIAN_EMAIL)
    )

    assert response.status_code == 200
    assert response.json()["status"] == "completed"


async def test_status_overwrite_is_unguarded(client, session, pending_order, admin_user):
    """Operators may move an order from any status to any other."""
    pending_order.status = "cancelled"
    session.commit()

    response = await client.patch(
        f"/orders/status/{pending_order.id}",
        json={"status": "pending"},
        headers=auth_headers(ADMIN_EMAIL)
    )

    assert response.status_code == 200
    assert response.json()["status"] == "pending"


async def test_status_update_rejects_unknown_status(client, pending_order, admin_user):
    response = await client.patch(
        f"/orders/status/{pending_order.id}",
        json={"status": "delivred"},
        headers=auth_headers(ADMIN_EMAIL)
    )

    assert response.status_code == 422


async def test_buyer_cannot_update_status(client, session, pending_order):
    response = await client.patch(
        f"/orders/status/{pending_order.id}",
        json={"status": "completed"},
        headers=auth_headers(BUYER_EMAIL)
    )

    assert response.status_code == 403
    session.expire_all()
    assert session.get(Order, pending_order.id).status == "pending"


async def test_status_update_missing_order(client, admin_user):
    response = await client.patch(
        "/orders/status/nope",
        json={"status": "completed"},
        headers=auth_headers(ADMIN_EMAIL)
    )

    assert response.status_code == 404


async def test_delete_order(client, session, pending_order, admin_user):
    response = await client.delete(f"/orders/{pending_order.id}", headers=auth_headers(ADMIN_EMAIL))

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    assert session.query(Order).count() == 0

    response = await client.delete(f"/orders/{pending_order.id}", headers=auth_headers(ADMIN_EMAIL))
    assert response.status_code == 404


async def test_buyer_cannot_delete_order(client, pending_order):
    response = await client.delete(f"/orders/{pending_order.id}", headers=auth_headers(BUYER_EMAIL))

    assert response.status_code == 403


async def test_librarian_orders_by_author(client, session, pending_order, librarian_user):
    session.add(Order(book_id="b9", email=BUYER_EMAIL, author="someone@else.com", price=3))
    session.commit()

    response = await client.get(f"/orders/librarian/{LIBRARIAN_EMAIL}", headers=auth_headers(LIBRARIAN_EMAIL))

    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == [pending_order.id]
