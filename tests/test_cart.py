from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.apartment import Apartment as ApartmentModel
from app.db.models.cart import CartItem as CartItemModel
from app.db.models.lease_request import LeaseRequest as LeaseRequestModel
from app.db.models.payment import Payment as PaymentModel
from app.db.models.user import User as UserModel
from app.domain.enums import ApartmentStatus, CartMode, LeaseStatus


def _add(client, token: str, **body):
    return client.post("/api/v1/cart", json=body, headers={"Authorization": f"Bearer {token}"})


# ============================================================================
# ADD TO CART TESTS
# ============================================================================


def test_add_rent_item_defaults_to_twelve_months(
    client, db: Session, user_token: str, make_apartment
):
    apartment = make_apartment()
    response = _add(client, user_token, apartment_id=apartment.id, mode="rent")
    assert response.status_code == 201
    data = response.json()
    assert data["mode"] == "rent"
    assert data["months"] == 12
    assert data["price"] == 1000
    assert data["deposit"] == 2000
    assert data["maintenance_fee"] == 50
    assert data["subtotal"] == 12000
    assert data["total"] == 12000 + 2000 + 600
    assert data["selected"] is True
    assert data["code"] == apartment.apartment_number
    assert data["title"] == "2BHK Apartment"
    assert data["amenities"] == ["gym", "pool"]
    assert data["apartment"]["id"] == apartment.id


def test_add_buy_item_never_has_months(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(status=ApartmentStatus.FOR_SALE)
    response = _add(client, user_token, apartment_id=apartment.id, mode="buy", months=24)
    assert response.status_code == 201
    data = response.json()
    assert data["months"] is None
    assert data["price"] == 200000
    assert data["deposit"] == 0
    assert data["subtotal"] == 200000
    assert data["total"] == 200000 + 600


def test_add_same_apartment_and_mode_refreshes_item(
    client, db: Session, user_token: str, user_dict: dict, make_apartment
):
    apartment = make_apartment()
    first = _add(client, user_token, apartment_id=apartment.id, mode="rent", months=6).json()
    second = _add(client, user_token, apartment_id=apartment.id, mode="rent", months=3).json()

    assert second["id"] == first["id"]
    assert second["months"] == 3
    assert db.query(CartItemModel).filter(CartItemModel.user_id == user_dict["id"]).count() == 1


def test_add_same_apartment_in_both_modes(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    _add(client, user_token, apartment_id=apartment.id, mode="rent")
    _add(client, user_token, apartment_id=apartment.id, mode="buy")

    response = client.get("/api/v1/cart", headers={"Authorization": f"Bearer {user_token}"})
    assert {item["mode"] for item in response.json()["items"]} == {"rent", "buy"}


def test_add_apartment_not_listed_for_mode(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(is_listed_for_sale=False)
    response = _add(client, user_token, apartment_id=apartment.id, mode="buy")
    assert response.status_code == 400
    assert response.json()["detail"] == "Apartment is not available for sale"


def test_add_occupied_apartment(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(status=ApartmentStatus.OCCUPIED)
    response = _add(client, user_token, apartment_id=apartment.id, mode="rent")
    assert response.status_code == 400


def test_add_unknown_apartment(client, db: Session, user_token: str):
    response = _add(client, user_token, apartment_id=9999, mode="rent")
    assert response.status_code == 404


def test_add_months_out_of_range(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    response = _add(client, user_token, apartment_id=apartment.id, mode="rent", months=61)
    assert response.status_code == 422


def test_cart_requires_authentication(client, db: Session):
    assert client.get("/api/v1/cart").status_code == 401


# ============================================================================
# GET / UPDATE / REMOVE TESTS
# ============================================================================


def test_get_cart_with_summary(client, db: Session, user_token: str, make_apartment):
    rent = make_apartment()
    buy = make_apartment(status=ApartmentStatus.FOR_SALE)
    _add(client, user_token, apartment_id=rent.id, mode="rent", months=6)
    _add(client, user_token, apartment_id=buy.id, mode="buy")

    response = client.get("/api/v1/cart", headers={"Authorization": f"Bearer {user_token}"})
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["rent_total"] == 6000
    assert summary["buy_total"] == 200000
    assert summary["subtotal"] == 206000
    assert summary["deposit_total"] == 2000
    assert summary["maintenance_total"] == 300 + 600
    assert summary["taxes"] == 0
    assert summary["grand_total"] == 206000 + 2000 + 900
    assert summary["selected_count"] == 2
    assert summary["total_items"] == 2


def test_summary_applies_tax_rate(client, db: Session, user_token: str, make_apartment, monkeypatch):
    monkeypatch.setattr(settings, "cart_tax_rate", Decimal("0.05"))
    apartment = make_apartment()
    _add(client, user_token, apartment_id=apartment.id, mode="rent", months=2)

    response = client.get("/api/v1/cart/summary", headers={"Authorization": f"Bearer {user_token}"})
    summary = response.json()
    assert summary["taxes"] == 100
    assert summary["grand_total"] == 2000 + 2000 + 100 + 100


def test_update_cart_item_months_and_note(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    item = _add(client, user_token, apartment_id=apartment.id, mode="rent").json()

    response = client.patch(
        f"/api/v1/cart/{item['id']}",
        json={"months": 24, "note": "Prefer June move-in"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["months"] == 24
    assert data["note"] == "Prefer June move-in"
    assert data["subtotal"] == 24000


def test_update_buy_item_months_is_ignored(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(status=ApartmentStatus.FOR_SALE)
    item = _add(client, user_token, apartment_id=apartment.id, mode="buy").json()

    response = client.patch(
        f"/api/v1/cart/{item['id']}",
        json={"months": 6},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    assert response.json()["months"] is None


def test_update_other_users_item_not_found(
    client, db: Session, user_token: str, resident_token: str, make_apartment
):
    apartment = make_apartment()
    item = _add(client, resident_token, apartment_id=apartment.id, mode="rent").json()

    response = client.patch(
        f"/api/v1/cart/{item['id']}",
        json={"months": 2},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Cart item not found"


def test_toggle_selection_and_select_all(client, db: Session, user_token: str, make_apartment):
    first = _add(client, user_token, apartment_id=make_apartment().id, mode="rent").json()
    _add(client, user_token, apartment_id=make_apartment().id, mode="rent")

    response = client.patch(
        f"/api/v1/cart/{first['id']}/select",
        json={"selected": False},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    assert response.json()["selected"] is False

    summary = client.get(
        "/api/v1/cart/summary", headers={"Authorization": f"Bearer {user_token}"}
    ).json()
    assert summary["selected_count"] == 1
    assert summary["total_items"] == 2

    response = client.post(
        "/api/v1/cart/select-all",
        json={"selected": False},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    assert [item["selected"] for item in response.json()] == [False, False]


def test_remove_item_and_clear_cart(client, db: Session, user_token: str, make_apartment):
    first = _add(client, user_token, apartment_id=make_apartment().id, mode="rent").json()
    _add(client, user_token, apartment_id=make_apartment().id, mode="rent")

    response = client.delete(
        f"/api/v1/cart/{first['id']}", headers={"Authorization": f"Bearer {user_token}"}
    )
    assert response.status_code == 204
    cart = client.get("/api/v1/cart", headers={"Authorization": f"Bearer {user_token}"}).json()
    assert len(cart["items"]) == 1

    response = client.delete("/api/v1/cart", headers={"Authorization": f"Bearer {user_token}"})
    assert response.status_code == 204
    cart = client.get("/api/v1/cart", headers={"Authorization": f"Bearer {user_token}"}).json()
    assert cart["items"] == []
    assert cart["summary"]["grand_total"] == 0


# ============================================================================
# CHECKOUT TESTS
# ============================================================================


def test_checkout_rent_and_buy(
    client, db: Session, user_token: str, user_dict: dict, make_apartment
):
    rent = make_apartment(status=ApartmentStatus.FOR_RENT)
    buy = make_apartment(status=ApartmentStatus.FOR_SALE)
    _add(client, user_token, apartment_id=rent.id, mode="rent", months=6)
    _add(client, user_token, apartment_id=buy.id, mode="buy")
    db.add(
        LeaseRequestModel(
            apartment_id=rent.id,
            user_id=user_dict["id"],
            type=CartMode.RENT,
            status=LeaseStatus.APPROVED,
        )
    )
    db.commit()

    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "bank_transfer", "note": "First payment"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user_role"] == "resident"
    amounts = {payment["apartment_id"]: payment["amount"] for payment in data["payments"]}
    assert amounts == {rent.id: 6000, buy.id: 200000}
    assert all(p["status"] == "successful" for p in data["payments"])
    assert len({p["transaction_id"] for p in data["payments"]}) == 2

    db.expire_all()
    rented = db.get(ApartmentModel, rent.id)
    bought = db.get(ApartmentModel, buy.id)
    assert rented.status == ApartmentStatus.OCCUPIED
    assert rented.tenant_id == user_dict["id"]
    assert rented.is_listed_for_rent is False
    assert bought.owner_id == user_dict["id"]
    assert bought.tenant_id is None
    assert bought.is_listed_for_sale is False
    assert db.query(CartItemModel).count() == 0
    assert db.query(LeaseRequestModel).count() == 0
    assert db.get(UserModel, user_dict["id"]).role.name == "resident"


def test_checkout_only_selected_items(client, db: Session, user_token: str, make_apartment):
    kept = _add(client, user_token, apartment_id=make_apartment().id, mode="rent").json()
    _add(client, user_token, apartment_id=make_apartment().id, mode="rent")
    client.patch(
        f"/api/v1/cart/{kept['id']}/select",
        json={"selected": False},
        headers={"Authorization": f"Bearer {user_token}"},
    )

    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "cash"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 200
    assert len(response.json()["payments"]) == 1
    remaining = db.query(CartItemModel).all()
    assert [item.id for item in remaining] == [kept["id"]]


def test_checkout_keeps_resident_role(client, db: Session, resident_token: str, make_apartment):
    _add(client, resident_token, apartment_id=make_apartment().id, mode="rent")
    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "credit_card"},
        headers={"Authorization": f"Bearer {resident_token}"},
    )
    assert response.status_code == 200
    assert response.json()["user_role"] == "resident"


def test_checkout_without_selected_items(client, db: Session, user_token: str):
    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "cash"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No items selected for checkout"


def test_checkout_is_all_or_nothing(
    client, db: Session, user_token: str, user_dict: dict, make_apartment
):
    available = make_apartment(status=ApartmentStatus.FOR_RENT)
    vacant = make_apartment(status=ApartmentStatus.VACANT)
    _add(client, user_token, apartment_id=available.id, mode="rent")
    _add(client, user_token, apartment_id=vacant.id, mode="rent")

    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "cash"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 400
    assert "no longer available" in response.json()["detail"]

    db.expire_all()
    assert db.query(PaymentModel).count() == 0
    assert db.query(CartItemModel).count() == 2
    assert db.get(ApartmentModel, available.id).status == ApartmentStatus.FOR_RENT
    assert db.get(UserModel, user_dict["id"]).role.name == "user"


def test_checkout_invalid_payment_method(client, db: Session, user_token: str):
    response = client.post(
        "/api/v1/cart/checkout",
        json={"payment_method": "barter"},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert response.status_code == 422
