# propvest/models/property.py
from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Text
from sqlalchemy.sql import func
from propvest.core.database import Base

class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    location = Column(String, nullable=False)
    city = Column(String, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    price = Column(String, nullable=False)  # display string, e.g. "AED 1,823,000"
    image_url = Column(String, nullable=False)
    type = Column(String, nullable=False)  # Balanced, Capital Growth
    funding_percentage = Column(Integer, nullable=False, default=0)
    yearly_return = Column(Float, nullable=False)
    total_return = Column(Float, nullable=False)
    projected_yield = Column(Float, nullable=False)
    property_id = Column(String, nullable=False)  # external display code
    status = Column(String, nullable=False)  # Ready, Rented, Exited
    filter = Column(String, nullable=False, index=True)  # Available, Funded, Exited
    floor_area = Column(Float)
    year_built = Column(Integer)
    parking_spaces = Column(Integer)
    monthly_rent = Column(Float)
    service_charges = Column(Float)
    maintenance_fees = Column(Float)
    occupancy_rate = Column(Float)
    admin_id = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

class PropertyImage(Base):
    __tablename__ = "property_images"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    image_url = Column(String, nullable=False)
    caption = Column(String)
    display_order = Column(Integer, nullable=False, default=0)
    uploaded_by = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class PropertyDocument(Base):
    __tablename__ = "property_documents"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    title = Column(String, nullable=False)
    document_url = Column(String, nullable=False)
    document_type = Column(String)  # brochure, title-deed, valuation, ...
    uploaded_by = Column(Integer, ForeignKey("users.id"))
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())
