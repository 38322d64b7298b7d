# propvest/models/audit.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
from propvest.core.database import Base

class AdminAuditLog(Base):
    __tablename__ = "admin_audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    action = Column(String, nullable=False)
    entity_type = Column(String, nullable=False)  # user, property, property_image, property_document
    entity_id = Column(Integer)
    details = Column(Text)  # JSON string
    ip_address = Column(String)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())
