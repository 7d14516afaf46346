from sqlalchemy.orm import Session

from app.db.models.apartment import Apartment as ApartmentModel
from app.db.models.cart import CartItem as CartItemModel
from app.domain.enums import ApartmentStatus
from app.services import cart as cart_service


def _graphql(client, query: str, token: str | None = None, variables: dict | None = None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


ADD_TO_CART = """
mutation Add($input: AddToCartInput!) {
  addToCart(input: $input) {
    id
    apartmentId
    mode
    months
    price
    deposit
    subtotal
    total
    title
    apartment { apartmentNumber status }
  }
}
"""

MY_CART = """
query {
  myCart {
    items { id mode months selected note }
    summary { rentTotal buyTotal subtotal depositTotal maintenanceTotal grandTotal selectedCount totalItems }
  }
}
"""


# ============================================================================
# QUERY TESTS
# ============================================================================


def test_my_cart_requires_authentication(client, db: Session):
    body = _graphql(client, MY_CART)
    assert body["data"] is None
    assert body["errors"][0]["message"] == "Authentication required"
    assert body["errors"][0]["extensions"]["code"] == "UNAUTHORIZED"


def test_my_cart_empty(client, db: Session, user_token: str):
    body = _graphql(client, MY_CART, user_token)
    assert "errors" not in body
    assert body["data"]["myCart"]["items"] == []
    assert body["data"]["myCart"]["summary"]["grandTotal"] == 0


def test_cart_summary_matches_rest(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    client.post(
        "/api/v1/cart",
        json={"apartment_id": apartment.id, "mode": "rent", "months": 3},
        headers={"Authorization": f"Bearer {user_token}"},
    )
    rest = client.get(
        "/api/v1/cart/summary", headers={"Authorization": f"Bearer {user_token}"}
    ).json()

    body = _graphql(client, "query { cartSummary { subtotal grandTotal selectedCount } }", user_token)
    summary = body["data"]["cartSummary"]
    assert summary["subtotal"] == rest["subtotal"]
    assert summary["grandTotal"] == rest["grand_total"]
    assert summary["selectedCount"] == 1


# ============================================================================
# MUTATION TESTS
# ============================================================================


def test_add_to_cart(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    body = _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT"}},
    )
    assert "errors" not in body
    item = body["data"]["addToCart"]
    assert item["apartmentId"] == str(apartment.id)
    assert item["mode"] == "RENT"
    assert item["months"] == 12
    assert item["subtotal"] == 12000
    assert item["deposit"] == 2000
    assert item["title"] == "2BHK Apartment"
    assert item["apartment"]["status"] == "FOR_RENT"


def test_add_to_cart_buy_drops_months(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(status=ApartmentStatus.FOR_SALE)
    body = _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "BUY", "months": 6}},
    )
    assert body["data"]["addToCart"]["months"] is None
    assert body["data"]["addToCart"]["subtotal"] == 200000


def test_add_to_cart_unknown_apartment(client, db: Session, user_token: str):
    body = _graphql(
        client, ADD_TO_CART, user_token, {"input": {"apartmentId": "9999", "mode": "RENT"}}
    )
    assert body["errors"][0]["message"] == "Apartment not found"
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


def test_add_to_cart_malformed_id(client, db: Session, user_token: str):
    body = _graphql(
        client, ADD_TO_CART, user_token, {"input": {"apartmentId": "abc", "mode": "RENT"}}
    )
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


def test_add_to_cart_not_listed(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment(is_listed_for_rent=False)
    body = _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT"}},
    )
    assert body["errors"][0]["message"] == "Apartment is not available for rent"
    assert body["errors"][0]["extensions"]["code"] == "VALIDATION_ERROR"


def test_add_to_cart_months_out_of_range(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    body = _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT", "months": 0}},
    )
    assert body["errors"][0]["extensions"]["code"] == "VALIDATION_ERROR"
    assert db.query(CartItemModel).count() == 0


def test_update_toggle_and_remove(client, db: Session, user_token: str, make_apartment):
    apartment = make_apartment()
    added = _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT"}},
    )["data"]["addToCart"]

    body = _graphql(
        client,
        """
        mutation Update($id: ID!) {
          updateCartItem(id: $id, input: {months: 6, note: "Corner unit"}) { months note selected }
        }
        """,
        user_token,
        {"id": added["id"]},
    )
    assert body["data"]["updateCartItem"] == {"months": 6, "note": "Corner unit", "selected": True}

    body = _graphql(
        client,
        "mutation Toggle($id: ID!) { toggleCartItemSelection(id: $id, selected: false) { selected } }",
        user_token,
        {"id": added["id"]},
    )
    assert body["data"]["toggleCartItemSelection"]["selected"] is False

    body = _graphql(
        client,
        "mutation { selectAllCartItems { selected } }",
        user_token,
    )
    assert body["data"]["selectAllCartItems"] == [{"selected": True}]

    body = _graphql(
        client,
        "mutation Remove($id: ID!) { removeFromCart(id: $id) }",
        user_token,
        {"id": added["id"]},
    )
    assert body["data"]["removeFromCart"] is True
    assert db.query(CartItemModel).count() == 0


def test_update_other_users_item(
    client, db: Session, user_token: str, resident_token: str, make_apartment
):
    apartment = make_apartment()
    added = _graphql(
        client,
        ADD_TO_CART,
        resident_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT"}},
    )["data"]["addToCart"]

    body = _graphql(
        client,
        "mutation Remove($id: ID!) { removeFromCart(id: $id) }",
        user_token,
        {"id": added["id"]},
    )
    assert body["errors"][0]["message"] == "Cart item not found"
    assert db.query(CartItemModel).count() == 1


def test_clear_cart(client, db: Session, user_token: str, make_apartment):
    for _ in range(2):
        _graphql(
            client,
            ADD_TO_CART,
            user_token,
            {"input": {"apartmentId": str(make_apartment().id), "mode": "RENT"}},
        )

    body = _graphql(client, "mutation { clearCart }", user_token)
    assert body["data"]["clearCart"] is True
    assert db.query(CartItemModel).count() == 0


def test_checkout_cart(client, db: Session, user_token: str, user_dict: dict, make_apartment):
    apartment = make_apartment()
    _graphql(
        client,
        ADD_TO_CART,
        user_token,
        {"input": {"apartmentId": str(apartment.id), "mode": "RENT", "months": 6}},
    )

    body = _graphql(
        client,
        """
        mutation {
          checkoutCart(input: {paymentMethod: BANK_TRANSFER}) {
            success
            message
            userRole
            payments { amount mode paymentMethod transactionId }
            completedApartments { id status tenantId }
          }
        }
        """,
        user_token,
    )
    assert "errors" not in body
    result = body["data"]["checkoutCart"]
    assert result["success"] is True
    assert result["message"] == "Checkout completed for 1 apartment(s)"
    assert result["userRole"] == "resident"
    assert result["payments"][0]["amount"] == 6000
    assert result["payments"][0]["paymentMethod"] == "BANK_TRANSFER"
    assert result["payments"][0]["transactionId"].startswith("TXN-")
    assert result["completedApartments"][0]["status"] == "OCCUPIED"
    assert result["completedApartments"][0]["tenantId"] == user_dict["id"]

    db.expire_all()
    assert db.get(ApartmentModel, apartment.id).status == ApartmentStatus.OCCUPIED


def test_checkout_cart_empty(client, db: Session, user_token: str):
    body = _graphql(
        client,
        "mutation { checkoutCart(input: {paymentMethod: CASH}) { success } }",
        user_token,
    )
    assert body["errors"][0]["message"] == "No items selected for checkout"
    assert body["errors"][0]["extensions"]["code"] == "VALIDATION_ERROR"


def test_unexpected_errors_are_masked(client, db: Session, user_token: str, monkeypatch):
    def broken_get_cart(db, user):
        raise RuntimeError("secret connection string")

    monkeypatch.setattr(cart_service, "get_cart", broken_get_cart)

    body = _graphql(client, MY_CART, user_token)
    assert body["data"] is None
    assert body["errors"][0]["message"] == "Unexpected error."
    assert "secret" not in str(body)
