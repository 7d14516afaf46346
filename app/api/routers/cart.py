from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.db.models.user import User
from app.schemas.cart import (
    CartItem,
    CartItemAdd,
    CartItemUpdate,
    CartResponse,
    CartSelection,
    CartSummary,
    CheckoutRequest,
    CheckoutResult,
)
from app.services import cart as cart_service

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
def get_my_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the current user's cart items (newest first) and the summary of the selected ones."""
    return cart_service.get_cart(db, current_user)


@router.get("/summary", response_model=CartSummary)
def get_my_cart_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.get_cart_summary(db, current_user)


@router.post("", response_model=CartItem, status_code=status.HTTP_201_CREATED)
def add_item(
    item_data: CartItemAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add an apartment to the cart for rent or purchase.

    Rentals default to a 12 month term; purchases never carry a term.
    Adding the same apartment and mode again refreshes the existing line.
    """
    return cart_service.add_to_cart(db, current_user, item_data)


@router.post("/select-all", response_model=list[CartItem])
def select_all_items(
    selection: CartSelection,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.select_all(db, current_user, selection.selected)


@router.post("/checkout", response_model=CheckoutResult)
def checkout(
    checkout_data: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Pay for every selected item.

    Either every selected apartment is completed or nothing changes.
    """
    return cart_service.checkout(db, current_user, checkout_data)


@router.patch("/{item_id}", response_model=CartItem)
def update_item(
    item_id: int,
    item_data: CartItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.update_cart_item(db, current_user, item_id, item_data)


@router.patch("/{item_id}/select", response_model=CartItem)
def toggle_item_selection(
    item_id: int,
    selection: CartSelection,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.toggle_selection(db, current_user, item_id, selection.selected)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    cart_service.remove_from_cart(db, current_user, item_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_my_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    cart_service.clear_cart(db, current_user)
