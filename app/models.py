"""
Data models for the inventory dashboard.
All models use Pydantic for validation and static typing.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ApiStatus(str, Enum):
    """Availability of the inventory service as seen by the health probe."""
    CHECKING = "checking"
    UP = "up"
    DOWN = "down"


class Product(BaseModel):
    """
    Product record as returned by the inventory service.
    The server owns every field; unknown fields are kept so the local
    snapshot stays identical to what the server sent.
    """
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    name: str
    description: Optional[str] = None
    price: float
    quantity: int


DRAFT_FIELDS = ("name", "description", "price", "quantity")


class ProductDraft(BaseModel):
    """
    In-progress product typed into the creation form.
    Every field is raw text until submission.
    """
    name: str = ""
    description: str = ""
    price: str = ""
    quantity: str = ""


class ProductPayload(BaseModel):
    """
    Body of POST/PUT /products.
    A numeric field that could not be parsed is sent as null.
    """
    name: str
    description: str = ""
    price: Optional[float] = None
    quantity: Optional[int] = None


class ViewState(BaseModel):
    """Loading flag and error banner text for the dashboard."""
    loading: bool = True
    error: Optional[str] = None


class DraftFieldUpdate(BaseModel):
    """Request body for a single draft field edit."""
    field: str
    value: str = ""


class ProductCard(BaseModel):
    """One rendered product in the grid."""
    id: Union[int, str]
    name: str
    description: str
    price: float
    quantity: int


class DashboardStats(BaseModel):
    """Aggregates derived from the current collection snapshot."""
    count: int = 0
    total_value: str = "0.00"


class DashboardResponse(BaseModel):
    """
    API response model for GET /dashboard and every intent endpoint.
    """
    api_status: ApiStatus
    status_label: str
    loading: bool
    error: Optional[str] = None
    show_form: bool = False
    draft: Optional[ProductDraft] = None
    stats: DashboardStats = Field(default_factory=DashboardStats)
    products: List[ProductCard] = Field(default_factory=list)
    empty_message: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """
    error: str
    detail: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
