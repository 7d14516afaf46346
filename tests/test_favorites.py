from sqlalchemy.orm import Session

from app.db.models.favorite import ApartmentFavorite as ApartmentFavoriteModel
from app.domain.enums import ApartmentStatus


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# ADD / CHECK / REMOVE TESTS
# ============================================================================


def test_add_favorite_is_idempotent(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()

    response = client.post(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))
    assert response.status_code == 201
    assert response.json() == {"apartment_id": apartment.id, "is_favorite": True}

    response = client.post(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))
    assert response.status_code == 200
    assert response.json()["is_favorite"] is True
    assert db.query(ApartmentFavoriteModel).count() == 1


def test_add_favorite_unknown_apartment(client, db: Session, user_token: str):
    response = client.post("/api/v1/favorites/9999", headers=_auth(user_token))
    assert response.status_code == 404


def test_check_favorite(client, db: Session, user_token: str, resident_token: str, make_apartment):
    apartment = make_apartment()
    client.post(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))

    mine = client.get(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token)).json()
    theirs = client.get(f"/api/v1/favorites/{apartment.id}", headers=_auth(resident_token)).json()
    assert mine["is_favorite"] is True
    assert theirs["is_favorite"] is False


def test_remove_favorite(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    client.post(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))

    response = client.delete(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))
    assert response.status_code == 204

    response = client.delete(f"/api/v1/favorites/{apartment.id}", headers=_auth(user_token))
    assert response.status_code == 404
    assert response.json()["detail"] == "Favorite not found"


def test_favorites_require_authentication(client, db: Session, make_apartment):
    apartment = make_apartment()
    assert client.post(f"/api/v1/favorites/{apartment.id}").status_code == 401
    assert client.get("/api/v1/favorites").status_code == 401


# ============================================================================
# LIST TESTS
# ============================================================================


def test_list_favorites_newest_first(client, db: Session, user_token: str, make_apartment):
    rental = make_apartment(is_listed_for_sale=False)
    sale = make_apartment(status=ApartmentStatus.FOR_SALE)
    client.post(f"/api/v1/favorites/{rental.id}", headers=_auth(user_token))
    client.post(f"/api/v1/favorites/{sale.id}", headers=_auth(user_token))

    response = client.get("/api/v1/favorites", headers=_auth(user_token))
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [item["apartment_id"] for item in data["items"]] == [sale.id, rental.id]

    sale_card = data["items"][0]["apartment"]
    assert sale_card["code"] == sale.apartment_number
    assert sale_card["mode"] == "buy"
    assert sale_card["price"] == 200000

    rental_card = data["items"][1]["apartment"]
    assert rental_card["mode"] == "rent"
    assert rental_card["price"] == 1000


def test_list_favorites_pagination(client, db: Session, user_token: str, make_apartment):
    for _ in range(3):
        client.post(f"/api/v1/favorites/{make_apartment().id}", headers=_auth(user_token))

    data = client.get("/api/v1/favorites?page=2&page_size=2", headers=_auth(user_token)).json()
    assert data["total"] == 3
    assert len(data["items"]) == 1
    assert data["has_prev"] is True
    assert data["has_next"] is False
