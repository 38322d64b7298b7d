# propvest/routes/properties.py
import logging

from fastapi import APIRouter, Depends, status

from propvest.core.deps import get_current_user, get_storage
from propvest.core.exceptions import NotFound
from propvest.models import User
from propvest.schemas.property import (
    PropertyCreate,
    PropertyDocumentResponse,
    PropertyImageResponse,
    PropertyResponse,
)
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

def get_property_or_404(storage: Storage, property_id: int):
    prop = storage.get_property(property_id)
    if not prop:
        raise NotFound("Property not found")
    return prop

@router.get("/properties", response_model=list[PropertyResponse])
def list_properties(
    filter: str = "Available",
    storage: Storage = Depends(get_storage),
):
    return storage.get_properties(filter)

@router.get("/properties/{property_id}", response_model=PropertyResponse)
def get_property(property_id: int, storage: Storage = Depends(get_storage)):
    return get_property_or_404(storage, property_id)

# Any signed-in user may list a property; only the admin endpoints are role-gated.
@router.post("/properties", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    data = property_data.model_dump()
    if current_user.role == "admin":
        data["admin_id"] = current_user.id

    prop = storage.create_property(data)
    logger.info("User %s created property %s (%s)", current_user.id, prop.id, prop.title)
    return prop

@router.get("/properties/{property_id}/images", response_model=list[PropertyImageResponse])
def list_property_images(property_id: int, storage: Storage = Depends(get_storage)):
    get_property_or_404(storage, property_id)
    return storage.get_property_images(property_id)

@router.get("/properties/{property_id}/documents", response_model=list[PropertyDocumentResponse])
def list_property_documents(property_id: int, storage: Storage = Depends(get_storage)):
    get_property_or_404(storage, property_id)
    return storage.get_property_documents(property_id)
