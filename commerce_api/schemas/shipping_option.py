"""Shipping Option Schemas - create/update bodies with price-type cross-validation.

Invariants:
    - flat_rate requires amount; calculated ignores it
    - includes_tax only accepted while tax_inclusive_pricing is enabled
    - Delete acknowledgment is exactly {id, object: "shipping-option", deleted: true}
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, StrictBool, model_validator

from commerce_api.core.domain_types import ShippingOptionPriceType
from commerce_api.core.feature_flags import TAX_INCLUSIVE_PRICING
from commerce_api.core.validation import feature_flagged
from commerce_api.schemas.common import RequestModel, ResponseModel, metadata_field


class AdminPostShippingOptionsReq(RequestModel):
    name: str = Field(min_length=1, max_length=200)
    region_id: str = Field(min_length=1)
    provider_id: str = Field(min_length=1)
    profile_id: str | None = None
    data: dict[str, Any]
    price_type: ShippingOptionPriceType
    amount: int | None = Field(None, ge=0)
    is_return: bool = False
    admin_only: bool = False
    metadata: dict[str, Any] | None = None
    includes_tax: StrictBool | None = feature_flagged(TAX_INCLUSIVE_PRICING.key)

    @model_validator(mode="after")
    def validate_price_type_amount(self):
        if (
            self.price_type is ShippingOptionPriceType.FLAT_RATE
            and self.amount is None
        ):
            raise ValueError(
                "Shipping options of type `flat_rate` must have an `amount`",
            )
        if self.price_type is ShippingOptionPriceType.CALCULATED:
            self.amount = None
        return self


class AdminPostShippingOptionsOptionReq(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    amount: int | None = Field(None, ge=0)
    admin_only: bool | None = None
    data: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    includes_tax: StrictBool | None = feature_flagged(TAX_INCLUSIVE_PRICING.key)


class ShippingOptionOut(ResponseModel):
    id: str
    name: str
    region_id: str
    profile_id: str | None
    provider_id: str
    price_type: ShippingOptionPriceType
    amount: int | None
    is_return: bool
    admin_only: bool
    includes_tax: bool
    data: dict[str, Any]
    metadata: dict[str, Any] | None = metadata_field()
    created_at: datetime
    updated_at: datetime


class ShippingOptionResponse(BaseModel):
    shipping_option: ShippingOptionOut


class ShippingOptionListResponse(BaseModel):
    shipping_options: list[ShippingOptionOut]
    count: int


class ShippingOptionDeleteResponse(BaseModel):
    id: str
    object: Literal["shipping-option"] = "shipping-option"
    deleted: bool = True
