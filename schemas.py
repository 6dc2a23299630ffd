from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# Category routes and the display strings stored on products
class Category(Enum):
    GROCERIES = ("groceries", "Groceries")
    KITCHEN_UTENSILS = ("utensils", "Kitchen utensils")
    SNACKS = ("snacls", "Foood and beverage")
    STATIONERY = ("stationary", "Stationary")
    ELECTRONICS = ("electronics", "Electronics")
    APPLIANCES = ("applainces", "Home appliances")
    FASHION = ("fashion", "Fashion dresses")

    @property
    def slug(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


# Order statuses the dashboard treats as still open
PENDING_STATUSES = ("Received", "Processing", "Paid")
DEFAULT_ORDER_STATUS = "Received"
ANONYMOUS_CUSTOMER = "Anonymous Checkout"


# Collection: products
class Product(BaseModel):
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, description="Product category")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Price in dollars")
    description: Optional[str] = Field(None, description="Product description")
    image_url: Optional[str] = Field(None, description="Image URL")


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)
    description: Optional[str] = None
    image_url: Optional[str] = None


# Collection: users
class Account(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: Optional[str] = None
    role: Role = Role.USER


class SignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# Collection: orders
class CartItem(BaseModel):
    """A cart line as the storefront client sends it."""
    id: str
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    quantity: int = Field(..., ge=1)


class OrderItem(BaseModel):
    """Line item captured at purchase time."""
    productId: str
    name: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)
    quantity: int = Field(..., ge=1)


class Order(BaseModel):
    customerName: str
    userId: str = ANONYMOUS_CUSTOMER
    items: List[OrderItem]
    totalAmount: float = Field(..., ge=0, allow_inf_nan=False)
    orderDate: datetime
    status: str = DEFAULT_ORDER_STATUS


class CheckoutIn(BaseModel):
    customerName: Optional[str] = None
    items: Optional[List[CartItem]] = None
    grandTotal: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class StatusUpdateIn(BaseModel):
    status: Optional[str] = None


class DashboardStats(BaseModel):
    productCount: int
    totalRevenue: float
    pendingOrders: int
