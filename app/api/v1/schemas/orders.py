from pydantic import BaseModel, Field
from typing import List

from app.domain.models.order import Order, OrderStatus, ProductSales


class OrderIn(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_lastname: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_district: str = Field(min_length=1)
    product_code: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    product_color: str = Field(min_length=1)
    product_price: float = Field(gt=0)

    model_config = {"str_strip_whitespace": True}


class OrderCreatedOut(BaseModel):
    success: bool = True
    order_code: str
    order: Order


class OrderListOut(BaseModel):
    items: List[Order]
    count: int


class OrderStatusIn(BaseModel):
    status: OrderStatus


class ProductSalesOut(BaseModel):
    items: List[ProductSales]
    count: int
