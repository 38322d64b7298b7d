# propvest/routes/admin.py
"""Admin-only listing and mutation endpoints.

Every mutation here appends an ``AdminAuditLog`` entry naming the acting
admin, the touched entity and the submitted changes.
"""
import json
import logging

from fastapi import APIRouter, Depends, Request, status

from propvest.core.deps import client_ip, get_current_admin, get_storage
from propvest.core.exceptions import NotFound, ValidationError
from propvest.models import User
from propvest.routes.properties import get_property_or_404
from propvest.schemas.audit import AuditLogResponse
from propvest.schemas.property import (
    PropertyDocumentCreate,
    PropertyDocumentResponse,
    PropertyImageCreate,
    PropertyImageResponse,
    PropertyResponse,
    PropertyUpdate,
)
from propvest.schemas.user import AdminUserUpdate, UserResponse
from propvest.schemas.wallet import TransactionResponse
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

def record_audit(storage, request, admin, action, entity_type, entity_id, details):
    storage.add_admin_audit_log({
        "admin_id": admin.id,
        "action": action,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "details": json.dumps(details, default=str),
        "ip_address": client_ip(request),
    })
    logger.info("Admin %s: %s %s %s", admin.id, action, entity_type, entity_id)

@router.get("/users", response_model=list[UserResponse])
def list_users(
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.get_all_users()

@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: AdminUserUpdate,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    changes = user_data.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")

    user = storage.update_user_by_admin(user_id, changes)
    record_audit(storage, request, admin, "update_user", "user", user.id, changes)
    return user

@router.get("/properties", response_model=list[PropertyResponse])
def list_properties(
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.get_all_properties()

@router.patch("/properties/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    property_data: PropertyUpdate,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    changes = property_data.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")

    prop = storage.update_property_by_admin(property_id, changes)
    record_audit(storage, request, admin, "update_property", "property", prop.id, changes)
    return prop

@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.get_all_transactions()

@router.get("/audit-logs", response_model=list[AuditLogResponse])
def list_audit_logs(
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.get_admin_audit_logs()

@router.post(
    "/properties/{property_id}/images",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_property_image(
    property_id: int,
    image_data: PropertyImageCreate,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    get_property_or_404(storage, property_id)

    data = image_data.model_dump()
    image = storage.add_property_image(dict(data, property_id=property_id, uploaded_by=admin.id))
    record_audit(
        storage, request, admin, "add_property_image", "property_image", image.id,
        dict(data, property_id=property_id),
    )
    return image

@router.delete("/properties/{property_id}/images/{image_id}")
def delete_property_image(
    property_id: int,
    image_id: int,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    image = storage.get_property_image(image_id)
    if not image or image.property_id != property_id:
        raise NotFound("Image not found")

    storage.delete_property_image(image_id)
    record_audit(
        storage, request, admin, "delete_property_image", "property_image", image_id,
        {"property_id": property_id, "image_url": image.image_url},
    )
    return {"message": "Image deleted successfully"}

@router.post(
    "/properties/{property_id}/documents",
    response_model=PropertyDocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_property_document(
    property_id: int,
    document_data: PropertyDocumentCreate,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    get_property_or_404(storage, property_id)

    data = document_data.model_dump()
    document = storage.add_property_document(
        dict(data, property_id=property_id, uploaded_by=admin.id)
    )
    record_audit(
        storage, request, admin, "add_property_document", "property_document", document.id,
        dict(data, property_id=property_id),
    )
    return document

@router.delete("/properties/{property_id}/documents/{document_id}")
def delete_property_document(
    property_id: int,
    document_id: int,
    request: Request,
    admin: User = Depends(get_current_admin),
    storage: Storage = Depends(get_storage),
):
    document = storage.get_property_document(document_id)
    if not document or document.property_id != property_id:
        raise NotFound("Document not found")

    storage.delete_property_document(document_id)
    record_audit(
        storage, request, admin, "delete_property_document", "property_document", document_id,
        {"property_id": property_id, "title": document.title},
    )
    return {"message": "Document deleted successfully"}
