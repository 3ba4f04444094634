import pytest
from sqlmodel import select

from app.models.store import Store
from app.models.user import User

URL = "/api/v1/webhooks/identity"
HEADERS = {"X-Webhook-Secret": "test-webhook-secret"}


def user_event(event_type: str, **data) -> dict:
    payload = {
        "id": "user_abc",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "username": "ada",
        "image_url": "https://img.example.com/ada.png",
        "email_addresses": [{"email_address": "ada@example.com", "id": "idn_1"}],
        "object": "user",
    }
    payload.update(data)
    return {"type": event_type, "data": payload, "object": "event"}


@pytest.mark.parametrize("headers", [{}, {"X-Webhook-Secret": "wrong"}])
def test_secret_is_required(client, session, headers):
    response = client.post(URL, json=user_event("user.created"), headers=headers)

    assert response.status_code == 401
    assert session.get(User, "user_abc") is None


def test_user_created(client, session):
    response = client.post(URL, json=user_event("user.created"), headers=HEADERS)

    assert response.status_code == 200
    user = session.get(User, "user_abc")
    assert user.name == "Ada Lovelace"
    assert user.email == "ada@example.com"
    assert user.role == "user"


def test_user_updated_keeps_role(client, session):
    client.post(URL, json=user_event("user.created"), headers=HEADERS)
    user = session.get(User, "user_abc")
    user.role = "seller"
    session.add(user)
    session.commit()

    response = client.post(
        URL,
        json=user_event("user.updated", first_name="Augusta", image_url=None),
        headers=HEADERS,
    )

    assert response.status_code == 200
    session.refresh(user)
    assert user.name == "Augusta Lovelace"
    assert user.picture == ""
    assert user.role == "seller"


@pytest.mark.parametrize(
    "names, expected",
    [
        ({"first_name": None, "last_name": None}, "ada"),
        ({"first_name": "", "last_name": "", "username": None}, "User"),
    ],
)
def test_display_name_fallbacks(client, session, names, expected):
    client.post(URL, json=user_event("user.created", **names), headers=HEADERS)

    assert session.get(User, "user_abc").name == expected


def test_email_is_required(client, session):
    response = client.post(
        URL, json=user_event("user.created", email_addresses=[]), headers=HEADERS
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "User email is required"}


def test_email_change_updates_same_user(client, session):
    client.post(URL, json=user_event("user.created"), headers=HEADERS)

    response = client.post(
        URL,
        json=user_event(
            "user.updated",
            email_addresses=[{"email_address": "ada@newmail.example.com", "id": "idn_2"}],
        ),
        headers=HEADERS,
    )

    assert response.status_code == 200
    session.expire_all()
    users = session.exec(select(User)).all()
    assert [u.id for u in users] == ["user_abc"]
    assert users[0].email == "ada@newmail.example.com"


def test_email_held_by_another_user_gets_409(client, session, make_user):
    other = make_user()
    client.post(URL, json=user_event("user.created"), headers=HEADERS)

    response = client.post(
        URL,
        json=user_event(
            "user.updated",
            email_addresses=[{"email_address": other.email, "id": "idn_2"}],
        ),
        headers=HEADERS,
    )

    assert response.status_code == 409
    assert response.json() == {"detail": "A user with the same email already exists"}
    session.expire_all()
    assert session.get(User, "user_abc").email == "ada@example.com"


def test_user_deleted(client, session):
    client.post(URL, json=user_event("user.created"), headers=HEADERS)

    response = client.post(
        URL,
        json={"type": "user.deleted", "data": {"id": "user_abc", "deleted": True}},
        headers=HEADERS,
    )

    assert response.status_code == 200
    session.expire_all()
    assert session.get(User, "user_abc") is None


def test_deleting_seller_with_stores_gets_409(client, session, seller, store):
    response = client.post(
        URL,
        json={"type": "user.deleted", "data": {"id": seller.id, "deleted": True}},
        headers=HEADERS,
    )

    assert response.status_code == 409
    assert response.json() == {"detail": "User still owns stores"}
    session.expire_all()
    assert session.get(User, seller.id) is not None
    assert session.get(Store, store.id) is not None


def test_deleting_unknown_user(client):
    response = client.post(
        URL,
        json={"type": "user.deleted", "data": {"id": "user_missing"}},
        headers=HEADERS,
    )

    assert response.status_code == 404


def test_other_events_are_ignored(client, session):
    response = client.post(URL, json=user_event("session.created"), headers=HEADERS)

    assert response.status_code == 200
    assert session.get(User, "user_abc") is None
