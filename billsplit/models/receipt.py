from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from billsplit.core.exceptions import UnknownItemError


class LineItem(BaseModel):
    """One receipt line. `price` is the total for the line, not per unit."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)


class Receipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[LineItem, ...] = ()
    tax: Decimal = Field(default=Decimal("0"), ge=0)
    service_charge: Decimal = Field(default=Decimal("0"), ge=0)
    # Stated grand total, never reconciled against the items
    total: Decimal = Field(default=Decimal("0"), ge=0)

    @model_validator(mode="after")
    def _check_unique_item_ids(self):
        ids = [item.id for item in self.items]
        if len(set(ids)) != len(ids):
            raise ValueError("line item ids must be unique")
        return self

    @property
    def subtotal(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0"))

    def get_item(self, item_id: str) -> LineItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise UnknownItemError(item_id)
