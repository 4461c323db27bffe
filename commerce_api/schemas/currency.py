"""Currency Schemas - update body and list filters, both gated on tax-inclusive pricing."""

from pydantic import BaseModel, Field, StrictBool

from commerce_api.core.feature_flags import TAX_INCLUSIVE_PRICING
from commerce_api.core.validation import feature_flagged
from commerce_api.schemas.common import RequestModel, ResponseModel


class AdminPostCurrenciesCurrencyReq(RequestModel):
    includes_tax: StrictBool | None = feature_flagged(
        TAX_INCLUSIVE_PRICING.key,
        description="[EXPERIMENTAL] Tax included in prices of currency.",
    )


class AdminGetCurrenciesParams(RequestModel):
    """Query string for GET /admin/currencies (values arrive as strings)."""
    code: str | None = None
    includes_tax: bool | None = feature_flagged(TAX_INCLUSIVE_PRICING.key)
    offset: int = Field(0, ge=0)
    limit: int = Field(20, ge=1, le=100)


class CurrencyOut(ResponseModel):
    code: str
    symbol: str
    symbol_native: str
    name: str
    includes_tax: bool


class CurrencyResponse(BaseModel):
    currency: CurrencyOut


class CurrencyListResponse(BaseModel):
    currencies: list[CurrencyOut]
    count: int
    offset: int
    limit: int
