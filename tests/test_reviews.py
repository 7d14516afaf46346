from sqlalchemy.orm import Session

from app.db.models.review import ApartmentReview as ApartmentReviewModel


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _review(client, token: str, apartment_id: int, **body):
    return client.post(
        f"/api/v1/apartments/{apartment_id}/reviews", json=body, headers=_auth(token)
    )


# ============================================================================
# CREATE REVIEW TESTS
# ============================================================================


def test_tenant_reviews_apartment(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    response = _review(client, resident_token, apartment.id, rating=4, comment="Bright and quiet")
    assert response.status_code == 201
    data = response.json()
    assert data["rating"] == 4
    assert data["comment"] == "Bright and quiet"
    assert data["user_id"] == resident_user_dict["id"]
    assert data["apartment_id"] == apartment.id


def test_owner_reviews_apartment(
    client, db: Session, owner_token: str, owner_user_dict: dict, make_apartment
):
    apartment = make_apartment(owner_id=owner_user_dict["id"])
    response = _review(client, owner_token, apartment.id, rating=5)
    assert response.status_code == 201
    assert response.json()["comment"] is None


def test_stranger_cannot_review(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    response = _review(client, user_token, apartment.id, rating=3)
    assert response.status_code == 403
    assert response.json()["detail"] == "Only the apartment's owner or tenant can review it"


def test_second_review_is_rejected(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    _review(client, resident_token, apartment.id, rating=4)
    response = _review(client, resident_token, apartment.id, rating=2)
    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_RESOURCE"


def test_review_rating_bounds(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    assert _review(client, resident_token, apartment.id, rating=0).status_code == 422
    assert _review(client, resident_token, apartment.id, rating=6).status_code == 422


def test_review_unknown_apartment(client, db: Session, resident_token: str):
    assert _review(client, resident_token, 9999, rating=3).status_code == 404


# ============================================================================
# LIST REVIEW TESTS
# ============================================================================


def test_list_apartment_reviews_with_average(
    client,
    db: Session,
    resident_token: str,
    resident_user_dict: dict,
    owner_token: str,
    owner_user_dict: dict,
    make_apartment,
):
    apartment = make_apartment(
        owner_id=owner_user_dict["id"], tenant_id=resident_user_dict["id"]
    )
    _review(client, resident_token, apartment.id, rating=4)
    _review(client, owner_token, apartment.id, rating=5)

    response = client.get(f"/api/v1/apartments/{apartment.id}/reviews")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["total_reviews"] == 2
    assert data["avg_rating"] == 4.5
    assert [item["rating"] for item in data["items"]] == [5, 4]


def test_average_rating_rounds_half_up(client, db: Session, make_user, make_apartment):
    apartment = make_apartment()
    for n, rating in enumerate([2, 2, 2, 3]):
        reviewer = make_user(f"reviewer{n}@example.com", "resident")
        db.add(
            ApartmentReviewModel(apartment_id=apartment.id, user_id=reviewer["id"], rating=rating)
        )
    db.commit()

    data = client.get(f"/api/v1/apartments/{apartment.id}/reviews").json()
    assert data["total_reviews"] == 4
    assert data["avg_rating"] == 2.3


def test_list_reviews_of_unrated_apartment(client, db: Session, make_apartment):
    apartment = make_apartment()
    data = client.get(f"/api/v1/apartments/{apartment.id}/reviews").json()
    assert data["items"] == []
    assert data["avg_rating"] == 0.0
    assert data["total_reviews"] == 0


def test_list_reviews_unknown_apartment(client, db: Session):
    assert client.get("/api/v1/apartments/9999/reviews").status_code == 404


def test_list_my_reviews(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    first = make_apartment(tenant_id=resident_user_dict["id"])
    second = make_apartment(tenant_id=resident_user_dict["id"])
    _review(client, resident_token, first.id, rating=3)
    _review(client, resident_token, second.id, rating=4)

    data = client.get("/api/v1/reviews/me", headers=_auth(resident_token)).json()
    assert data["total"] == 2
    assert {item["apartment_id"] for item in data["items"]} == {first.id, second.id}


# ============================================================================
# UPDATE / DELETE REVIEW TESTS
# ============================================================================


def test_update_own_review(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    review = _review(client, resident_token, apartment.id, rating=2, comment="Noisy").json()

    response = client.put(
        f"/api/v1/reviews/{review['id']}", json={"rating": 3}, headers=_auth(resident_token)
    )
    assert response.status_code == 200
    assert response.json()["rating"] == 3
    assert response.json()["comment"] == "Noisy"


def test_update_review_null_rating_keeps_rating(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    review = _review(client, resident_token, apartment.id, rating=2).json()

    response = client.put(
        f"/api/v1/reviews/{review['id']}",
        json={"rating": None, "comment": "Better after repairs"},
        headers=_auth(resident_token),
    )
    assert response.status_code == 200
    assert response.json()["rating"] == 2
    assert response.json()["comment"] == "Better after repairs"


def test_cannot_modify_someone_elses_review(
    client,
    db: Session,
    resident_token: str,
    resident_user_dict: dict,
    owner_token: str,
    make_apartment,
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    review = _review(client, resident_token, apartment.id, rating=4).json()

    response = client.put(
        f"/api/v1/reviews/{review['id']}", json={"rating": 1}, headers=_auth(owner_token)
    )
    assert response.status_code == 403
    response = client.delete(f"/api/v1/reviews/{review['id']}", headers=_auth(owner_token))
    assert response.status_code == 403


def test_delete_own_review(
    client, db: Session, resident_token: str, resident_user_dict: dict, make_apartment
):
    apartment = make_apartment(tenant_id=resident_user_dict["id"])
    review = _review(client, resident_token, apartment.id, rating=4).json()

    response = client.delete(f"/api/v1/reviews/{review['id']}", headers=_auth(resident_token))
    assert response.status_code == 204
    response = client.delete(f"/api/v1/reviews/{review['id']}", headers=_auth(resident_token))
    assert response.status_code == 404
