from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.enums import CartMode, LeaseDecision, LeaseStatus


class LeaseRequest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apartment_id: int
    user_id: int
    type: CartMode
    status: LeaseStatus
    start_date: date | None = None
    end_date: date | None = None
    monthly_rent: float | None = None
    total_price: float | None = None
    note: str | None = None
    decision_by: int | None = None
    decision_at: datetime | None = None
    created_at: datetime


class LeaseRequestCreate(BaseModel):
    apartment_id: int
    type: CartMode = CartMode.RENT
    start_date: date | None = None
    end_date: date | None = None
    monthly_rent: float | None = Field(None, ge=0)
    total_price: float | None = Field(None, ge=0)
    note: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_end_date_after_start_date(self):
        """Ensure end_date doesn't precede start_date."""
        if self.start_date is not None and self.end_date is not None:
            if self.end_date < self.start_date:
                raise ValueError(
                    f"end_date ({self.end_date}) cannot precede start_date ({self.start_date})"
                )
        return self


class LeaseDecisionRequest(BaseModel):
    decision: LeaseDecision
