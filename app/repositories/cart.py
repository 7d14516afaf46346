from sqlalchemy.orm import Session, joinedload

from app.db.models.cart import CartItem as CartItemModel
from app.domain.enums import CartMode


def get_cart_items_by_user_id(db: Session, user_id: int) -> list[CartItemModel]:
    """Get a user's cart items with apartments loaded, newest first."""
    return (
        db.query(CartItemModel)
        .options(joinedload(CartItemModel.apartment))
        .filter(CartItemModel.user_id == user_id)
        .order_by(CartItemModel.added_at.desc(), CartItemModel.id.desc())
        .all()
    )


def get_selected_cart_items(db: Session, user_id: int) -> list[CartItemModel]:
    return (
        db.query(CartItemModel)
        .options(joinedload(CartItemModel.apartment))
        .filter(CartItemModel.user_id == user_id, CartItemModel.selected.is_(True))
        .order_by(CartItemModel.id)
        .all()
    )


def get_user_cart_item(db: Session, user_id: int, item_id: int) -> CartItemModel | None:
    """Get a cart item only if it belongs to the given user."""
    return (
        db.query(CartItemModel)
        .options(joinedload(CartItemModel.apartment))
        .filter(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
        .first()
    )


def get_cart_item_by_key(
    db: Session, user_id: int, apartment_id: int, mode: CartMode
) -> CartItemModel | None:
    """Get the cart item for a (user, apartment, mode) triple. Used to avoid duplicates."""
    return (
        db.query(CartItemModel)
        .filter(
            CartItemModel.user_id == user_id,
            CartItemModel.apartment_id == apartment_id,
            CartItemModel.mode == mode,
        )
        .first()
    )


def create_cart_item(db: Session, **fields) -> CartItemModel:
    """Create a new cart item in the database. Pure data access - no business logic."""
    db_item = CartItemModel(**fields)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_cart_item(db: Session, item: CartItemModel, **fields) -> CartItemModel:
    """Update the provided fields of a cart item."""
    for field, value in fields.items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


def set_selection_for_user(db: Session, user_id: int, selected: bool) -> None:
    db.query(CartItemModel).filter(CartItemModel.user_id == user_id).update(
        {CartItemModel.selected: selected}, synchronize_session=False
    )
    db.commit()


def delete_cart_item(db: Session, item: CartItemModel) -> None:
    db.delete(item)
    db.commit()


def delete_cart_items_by_user_id(db: Session, user_id: int) -> int:
    """Delete every cart item of a user. Returns the number of rows removed."""
    deleted = (
        db.query(CartItemModel)
        .filter(CartItemModel.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


