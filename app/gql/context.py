from contextlib import contextmanager

from fastapi import Depends
from graphql import GraphQLError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from strawberry.types import Info

from app.api.deps import get_db, get_optional_user
from app.db.models.user import User
from app.errors import VALIDATION_ERROR, DomainError, UnauthorizedError


def get_context(
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
) -> dict:
    """Per-request GraphQL context, built from the same dependencies as the REST routes."""
    return {"db": db, "user": user}


def require_user(info: Info) -> User:
    user = info.context["user"]
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


@contextmanager
def domain_errors():
    """Re-raise domain and input validation errors as GraphQL errors carrying their code."""
    try:
        yield
    except DomainError as exc:
        raise GraphQLError(str(exc), extensions={"code": exc.code}) from exc
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise GraphQLError(
            f"{field}: {first['msg']}", extensions={"code": VALIDATION_ERROR}
        ) from exc


def should_mask_error(error: GraphQLError) -> bool:
    """Hide anything that was not raised on purpose as a GraphQL error."""
    original = error.original_error
    return original is not None and not isinstance(original, GraphQLError)
