"""GraphQL cart API mounted at /graphql."""

import strawberry
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from app.errors import NotFoundError
from app.gql.context import domain_errors, get_context, require_user, should_mask_error
from app.gql.types import (
    AddToCartInput,
    CartItem,
    CartResponse,
    CartSummary,
    CheckoutInput,
    CheckoutResult,
    UpdateCartItemInput,
)
from app.schemas.cart import CartItemAdd, CartItemUpdate, CheckoutRequest
from app.services import cart as cart_service


def _parse_id(value: strawberry.ID, label: str = "Cart item") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise NotFoundError(f"{label} not found") from None


@strawberry.type
class Query:
    @strawberry.field
    def my_cart(self, info: Info) -> CartResponse:
        with domain_errors():
            user = require_user(info)
            return CartResponse.from_schema(cart_service.get_cart(info.context["db"], user))

    @strawberry.field
    def cart_summary(self, info: Info) -> CartSummary:
        with domain_errors():
            user = require_user(info)
            return CartSummary.from_schema(
                cart_service.get_cart_summary(info.context["db"], user)
            )


@strawberry.type
class Mutation:
    @strawberry.mutation
    def add_to_cart(self, info: Info, input: AddToCartInput) -> CartItem:
        with domain_errors():
            user = require_user(info)
            item_data = CartItemAdd(
                apartment_id=_parse_id(input.apartment_id, "Apartment"),
                mode=input.mode,
                months=input.months,
                note=input.note,
            )
            item = cart_service.add_to_cart(info.context["db"], user, item_data)
            return CartItem.from_schema(item)

    @strawberry.mutation
    def update_cart_item(
        self, info: Info, id: strawberry.ID, input: UpdateCartItemInput
    ) -> CartItem:
        with domain_errors():
            user = require_user(info)
            fields = {
                name: value
                for name, value in vars(input).items()
                if value is not strawberry.UNSET
            }
            item = cart_service.update_cart_item(
                info.context["db"], user, _parse_id(id), CartItemUpdate(**fields)
            )
            return CartItem.from_schema(item)

    @strawberry.mutation
    def remove_from_cart(self, info: Info, id: strawberry.ID) -> bool:
        with domain_errors():
            user = require_user(info)
            cart_service.remove_from_cart(info.context["db"], user, _parse_id(id))
            return True

    @strawberry.mutation
    def clear_cart(self, info: Info) -> bool:
        with domain_errors():
            user = require_user(info)
            cart_service.clear_cart(info.context["db"], user)
            return True

    @strawberry.mutation
    def toggle_cart_item_selection(
        self, info: Info, id: strawberry.ID, selected: bool
    ) -> CartItem:
        with domain_errors():
            user = require_user(info)
            item = cart_service.toggle_selection(info.context["db"], user, _parse_id(id), selected)
            return CartItem.from_schema(item)

    @strawberry.mutation
    def select_all_cart_items(self, info: Info, selected: bool = True) -> list[CartItem]:
        with domain_errors():
            user = require_user(info)
            items = cart_service.select_all(info.context["db"], user, selected)
            return [CartItem.from_schema(item) for item in items]

    @strawberry.mutation
    def checkout_cart(self, info: Info, input: CheckoutInput) -> CheckoutResult:
        with domain_errors():
            user = require_user(info)
            checkout_data = CheckoutRequest(payment_method=input.payment_method, note=input.note)
            result = cart_service.checkout(info.context["db"], user, checkout_data)
            return CheckoutResult.from_schema(result)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskErrors(should_mask_error=should_mask_error)],
)

graphql_router = GraphQLRouter(schema, context_getter=get_context)
