# propvest/models/__init__.py
from .user import User
from .property import Property, PropertyImage, PropertyDocument
from .investment import UserProperty
from .wallet import WalletTransaction, PaymentCard
from .audit import AdminAuditLog

__all__ = [
    "User",
    "Property",
    "PropertyImage",
    "PropertyDocument",
    "UserProperty",
    "WalletTransaction",
    "PaymentCard",
    "AdminAuditLog",
]
