from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.role import Position, Role


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    address: str | None = None
    phone_number: str | None = None
    gender: bool
    image: str | None = None
    is_active: bool
    role: Role
    position: Position | None = None
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    phone_number: str | None = Field(None, max_length=20)
    gender: bool = True
    image: str | None = Field(None, max_length=500)
    role_id: int | None = None  # If not provided, defaults to "user"
    position_id: int | None = None  # If not provided, defaults to position "P0"


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)
    address: str | None = None
    phone_number: str | None = Field(None, max_length=20)
    gender: bool | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    role_id: int | None = None
    position_id: int | None = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
