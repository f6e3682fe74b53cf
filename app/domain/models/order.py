from datetime import datetime
from enum import Enum
from pydantic import BaseModel


class OrderStatus(str, Enum):
    RECEIVED = "received"
    PREPARING = "preparing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class Order(BaseModel):
    order_code: str
    customer_name: str
    customer_lastname: str
    customer_phone: str
    customer_district: str
    product_code: str
    product_name: str
    product_color: str
    product_price: float
    status: OrderStatus = OrderStatus.RECEIVED
    created_at: datetime
    model_config = {"frozen": True}


class ProductSales(BaseModel):
    code: str
    name: str
    type: str
    compression: str
    price_sale: float
    sales: int
    model_config = {"frozen": True}


class OrderNotFoundError(LookupError):
    def __init__(self, order_code: str):
        super().__init__(f"Order not found: {order_code}")
        self.order_code = order_code
