from fastapi import APIRouter

from app.api.routers import (
    apartments,
    auth,
    cart,
    favorites,
    leases,
    reviews,
    roles,
    users,
    views,
)

api_router = APIRouter()

api_router.include_router(roles.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(apartments.router)
api_router.include_router(reviews.router)
api_router.include_router(cart.router)
api_router.include_router(leases.router)
api_router.include_router(favorites.router)
api_router.include_router(views.router)
