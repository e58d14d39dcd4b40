from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List
from datetime import datetime


# Catalog
class CategoryIn(BaseModel):
    category_name: str = Field(..., alias="categoryName", min_length=1, max_length=50)
    description: Optional[str] = None

class CategoryOut(BaseModel):
    category_name: str = Field(..., alias="categoryName")
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ProductIn(BaseModel):
    product_name: str = Field(..., alias="productName", min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    image_url: Optional[str] = Field(None, alias="imageUrl")
    category: Optional[str] = None
    amount: int = Field(0, ge=0, description="On-hand stock, defaults to 0")

class ProductOut(BaseModel):
    id: int
    product_name: str = Field(..., alias="productName")
    price: Decimal
    image_url: Optional[str] = Field(None, alias="imageUrl")
    category: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PriceUpdate(BaseModel):
    """Both fields are checked by the route so a missing one is a 400, not a 422."""
    id: Optional[int] = None
    price: Optional[Decimal] = Field(None, ge=0)


# Orders
class OrderLineIn(BaseModel):
    id: int = Field(..., description="Product ID")
    quantity: int = Field(..., description="Ordered quantity, not checked against stock")

class OrderCreate(BaseModel):
    customer_id: int = Field(..., alias="customerId")
    products: List[OrderLineIn]

class OrderPlaced(BaseModel):
    order_id: int = Field(..., alias="orderId")

    model_config = ConfigDict(populate_by_name=True)


class OrderedProductOut(ProductOut):
    quantity: int

class CustomerOrderOut(BaseModel):
    order_date: datetime = Field(..., alias="orderDate")
    order_id: int = Field(..., alias="orderId")
    products: List[OrderedProductOut] = []

    model_config = ConfigDict(populate_by_name=True)


# Customers
class CustomerOut(BaseModel):
    fname: Optional[str] = None
    lname: Optional[str] = None
    username: str

class Token(BaseModel):
    jwt_token: str = Field(..., alias="jwtToken")

    model_config = ConfigDict(populate_by_name=True)


# Stock reporting
class StockBalanceOut(BaseModel):
    id: int
    product_name: str = Field(..., alias="productName")
    amount: int
    price: Decimal
    stock_balance: Decimal

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class GrandTotalOut(BaseModel):
    grand_total: Decimal

class LowStockOut(BaseModel):
    id: int
    product_name: str
    price: Decimal
    amount: int
    total_ordered: int

    model_config = ConfigDict(from_attributes=True)
