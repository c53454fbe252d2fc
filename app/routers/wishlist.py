# =============================================================================
# app/routers/wishlist.py - Wishlist Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from core.models.wishlist import WishlistItem, WishlistToggleResponse
from core.services.wishlist_service import WishlistService

router = APIRouter()

ResourceId = Annotated[str, Path(description="Resource ID")]


@router.get("", response_model=list[WishlistItem])
async def list_wishlist(user: AuthUser = Depends(get_current_user)) -> list[WishlistItem]:
    """The caller's saved resources, newest first."""
    return WishlistService.list_items(str(user.id))


@router.get("/{resource_id}", response_model=WishlistToggleResponse)
async def check_wishlist(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user),
) -> WishlistToggleResponse:
    return WishlistToggleResponse(
        resource_id=resource_id,
        in_wishlist=WishlistService.contains(str(user.id), resource_id),
    )


@router.put("/{resource_id}", response_model=WishlistItem)
async def add_to_wishlist(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user),
) -> WishlistItem:
    """Save a resource. Saving twice is a no-op."""
    return WishlistService.add(str(user.id), resource_id)


@router.post("/{resource_id}", response_model=WishlistToggleResponse)
async def toggle_wishlist(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user),
) -> WishlistToggleResponse:
    """Save the resource if it isn't saved, otherwise remove it."""
    return WishlistToggleResponse(
        resource_id=resource_id,
        in_wishlist=WishlistService.toggle(str(user.id), resource_id),
    )


@router.delete("/{resource_id}")
async def remove_from_wishlist(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    removed = WishlistService.remove(str(user.id), resource_id)
    return {"resource_id": resource_id, "removed": removed}
