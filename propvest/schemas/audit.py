# propvest/schemas/audit.py
from datetime import datetime
from typing import Optional

from .base import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    admin_id: int
    action: str
    entity_type: str
    entity_id: Optional[int] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    timestamp: Optional[datetime] = None
