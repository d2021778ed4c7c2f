from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: int


class PlanCreate(BaseModel):
    name: str = Field(min_length=1)
    price: int = Field(ge=0)


class PlanUpdate(BaseModel):
    id: Optional[int] = None
    name: str = Field(min_length=1)
    price: int = Field(ge=0)


class MutationResponse(BaseModel):
    success: bool
    id: Optional[int] = None


class ProratedPriceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prorated_price: int = Field(alias="proratedPrice")
