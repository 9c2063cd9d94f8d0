from typing import List

from fastapi import APIRouter, Depends, Path

from storefront.api.deps import get_user_service
from storefront.api.errors import unwrap
from storefront.domain.schemas import ShippingAddressIn, ShippingAddressOut, UserCreate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead)
def create_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    return unwrap(svc.create_user(payload))


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int = Path(..., gt=0), svc: UserService = Depends(get_user_service)):
    return unwrap(svc.get_user(user_id))


@router.post("/{user_id}/addresses", response_model=ShippingAddressOut, status_code=201)
def add_address(
    payload: ShippingAddressIn,
    user_id: int = Path(..., gt=0),
    svc: UserService = Depends(get_user_service),
):
    return unwrap(svc.add_address(user_id, payload))


@router.get("/{user_id}/addresses", response_model=List[ShippingAddressOut])
def list_addresses(user_id: int = Path(..., gt=0), svc: UserService = Depends(get_user_service)):
    return unwrap(svc.list_addresses(user_id))


@router.get("/{user_id}/addresses/{address_id}", response_model=ShippingAddressOut)
def get_address(
    user_id: int = Path(..., gt=0),
    address_id: int = Path(..., gt=0),
    svc: UserService = Depends(get_user_service),
):
    return unwrap(svc.get_address(user_id, address_id))


@router.put("/{user_id}/addresses/{address_id}", response_model=ShippingAddressOut)
def update_address(
    payload: ShippingAddressIn,
    user_id: int = Path(..., gt=0),
    address_id: int = Path(..., gt=0),
    svc: UserService = Depends(get_user_service),
):
    return unwrap(svc.update_address(user_id, address_id, payload))
