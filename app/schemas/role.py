from pydantic import BaseModel, ConfigDict


class Role(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class Position(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    name: str
