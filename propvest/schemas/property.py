# propvest/schemas/property.py
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from .base import CamelModel

FILTERS = ("Available", "Funded", "Exited")


def funding_range(v):
    if v is not None and not 0 <= v <= 100:
        raise ValueError("Funding percentage must be between 0 and 100")
    return v


def lifecycle_filter(v):
    if v is not None and v not in FILTERS:
        raise ValueError(f"Filter must be one of: {', '.join(FILTERS)}")
    return v


class PropertyBase(CamelModel):
    title: str
    location: str
    city: str
    bedrooms: int
    price: str
    image_url: str
    type: str
    funding_percentage: int = 0
    yearly_return: float
    total_return: float
    projected_yield: float
    property_id: str
    status: str
    filter: str = "Available"
    description: Optional[str] = None
    floor_area: Optional[float] = None
    year_built: Optional[int] = None
    parking_spaces: Optional[int] = None
    monthly_rent: Optional[float] = None
    service_charges: Optional[float] = None
    maintenance_fees: Optional[float] = None
    occupancy_rate: Optional[float] = None


class PropertyCreate(PropertyBase):
    @field_validator("funding_percentage")
    @classmethod
    def funding_in_range(cls, v):
        return funding_range(v)

    @field_validator("filter")
    @classmethod
    def known_filter(cls, v):
        return lifecycle_filter(v)


class PropertyResponse(PropertyBase):
    id: int
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PropertyUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    city: Optional[str] = None
    bedrooms: Optional[int] = None
    price: Optional[str] = None
    image_url: Optional[str] = None
    type: Optional[str] = None
    funding_percentage: Optional[int] = None
    yearly_return: Optional[float] = None
    total_return: Optional[float] = None
    projected_yield: Optional[float] = None
    property_id: Optional[str] = None
    status: Optional[str] = None
    filter: Optional[str] = None
    floor_area: Optional[float] = None
    year_built: Optional[int] = None
    parking_spaces: Optional[int] = None
    monthly_rent: Optional[float] = None
    service_charges: Optional[float] = None
    maintenance_fees: Optional[float] = None
    occupancy_rate: Optional[float] = None

    @field_validator("funding_percentage")
    @classmethod
    def funding_in_range(cls, v):
        return funding_range(v)

    @field_validator("filter")
    @classmethod
    def known_filter(cls, v):
        return lifecycle_filter(v)


class PropertyImageCreate(CamelModel):
    image_url: str
    caption: Optional[str] = None
    display_order: int = 0


class PropertyImageResponse(PropertyImageCreate):
    id: int
    property_id: int
    uploaded_by: Optional[int] = None
    created_at: Optional[datetime] = None


class PropertyDocumentCreate(CamelModel):
    title: str
    document_url: str
    document_type: Optional[str] = None


class PropertyDocumentResponse(PropertyDocumentCreate):
    id: int
    property_id: int
    uploaded_by: Optional[int] = None
    uploaded_at: Optional[datetime] = None
