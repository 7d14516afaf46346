from app.db.models.role import Role
from app.db.models.position import Position
from app.db.models.user import User
from app.db.models.apartment import Apartment
from app.db.models.cart import CartItem
from app.db.models.lease_request import LeaseRequest
from app.db.models.review import ApartmentReview
from app.db.models.favorite import ApartmentFavorite
from app.db.models.view import ApartmentView
from app.db.models.payment import Payment

__all__ = [
    "Role",
    "Position",
    "User",
    "Apartment",
    "CartItem",
    "LeaseRequest",
    "ApartmentReview",
    "ApartmentFavorite",
    "ApartmentView",
    "Payment",
]
