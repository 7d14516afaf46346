from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
import app.repositories.role as role_repo
from app.schemas.role import Position, Role

router = APIRouter(tags=["roles"])


@router.get("/roles", response_model=list[Role])
def get_roles(db: Session = Depends(get_db)):
    roles = role_repo.get_all_roles(db)
    return roles


@router.get("/positions", response_model=list[Position])
def get_positions(db: Session = Depends(get_db)):
    positions = role_repo.get_all_positions(db)
    return positions
