import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from stockbook.schemas.common import strip_required

# Upper bound of the 32-bit integer columns.
MAX_QUANTITY = 2_147_483_647


class ItemCreate(BaseModel):
    item_name: str = Field(min_length=1, max_length=160)
    stock_quantity: int = Field(default=0, ge=0, le=MAX_QUANTITY, description="Opening stock, before any purchase")

    @field_validator("item_name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def default_missing_stock(cls, value):
        return 0 if value is None else value


class ItemOut(BaseModel):
    id: int
    item_name: str
    stock_quantity: int
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class SeasonCreate(BaseModel):
    season_name: str = Field(min_length=1, max_length=50)

    @field_validator("season_name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        if isinstance(value, str):
            return strip_required(value)
        return value


class SeasonOut(BaseModel):
    id: int
    season_name: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class PurchaseCreate(BaseModel):
    date: dt.date
    item_id: int
    season_id: int
    quantity: int = Field(gt=0, le=MAX_QUANTITY)
    unit_price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    vendor_name: str = Field(min_length=1, max_length=160)

    @field_validator("vendor_name")
    @classmethod
    def normalize_vendor(cls, value: str) -> str:
        return strip_required(value)


class PurchaseOut(BaseModel):
    id: int
    date: dt.date
    item_id: int
    item_name: str
    season_id: int
    season_name: str
    quantity: int
    unit_price: Decimal
    vendor_name: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class SaleCreate(BaseModel):
    date: dt.date
    item_id: int
    season_id: int
    quantity: int = Field(gt=0, le=MAX_QUANTITY)
    unit_price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    customer_name: str = Field(min_length=1, max_length=160)

    @field_validator("customer_name")
    @classmethod
    def normalize_customer(cls, value: str) -> str:
        return strip_required(value)


class SaleOut(BaseModel):
    id: int
    date: dt.date
    item_id: int
    item_name: str
    season_id: int
    season_name: str
    quantity: int
    unit_price: Decimal
    customer_name: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class ExpenseCreate(BaseModel):
    date: dt.date | None = None
    expense_type: str = Field(min_length=1, max_length=120)
    linked_transaction_id: int | None = None
    item_id: int | None = None
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    description: str = Field(min_length=1, max_length=255)
    season_id: int

    @field_validator("expense_type", "description")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return strip_required(value)


class ExpenseOut(BaseModel):
    id: int
    date: dt.date
    expense_type: str
    linked_transaction_id: int | None
    item_id: int | None
    item_name: str | None
    amount: Decimal
    description: str
    season_id: int
    season_name: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}
