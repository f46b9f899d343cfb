from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field

from billsplit.utils.currency_utils import round_money

def _to_display(value: Decimal) -> Decimal:
    return round_money(value)


# Money leaves the API rounded; the engine keeps full precision
Money = Annotated[Decimal, AfterValidator(_to_display)]


class ExtractedItem(BaseModel):
    name: str = Field(validation_alias=AliasChoices("name", "description"))
    price: Decimal = Field(validation_alias=AliasChoices("price", "amount"))
    quantity: Decimal | None = None


class ExtractionCreate(BaseModel):
    """Structured receipt as handed over by the OCR collaborator."""

    items: list[ExtractedItem] = Field(default_factory=list, validation_alias=AliasChoices("items", "line_items"))
    tax: Decimal | None = None
    service_charge: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("service_charge", "serviceCharge")
    )
    total: Decimal | None = None


class LineItemInput(BaseModel):
    id: str | None = None
    name: str
    price: Decimal
    quantity: Decimal | None = None


class ManualReceiptCreate(BaseModel):
    items: list[LineItemInput]
    tax: Decimal | None = None
    service_charge: Decimal | None = None
    total: Decimal | None = None


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    price: Money
    quantity: int


class ReceiptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    items: list[LineItemResponse] = []
    subtotal: Money
    tax: Money
    service_charge: Money
    total: Money
