# =============================================================================
# app/routers/resources.py - Resource Catalog Endpoints
# =============================================================================
# Browse, upload, edit, delete and download resources.
# Browsing and detail pages are public; everything else requires a token.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status

from app.auth import (
    AuthUser,
    get_current_user,
    get_current_user_optional_with_role,
    get_current_user_with_role,
    require_uploader,
)
from app.dependencies import FiltersDep, PaginationDep
from core.models.resource import (
    Resource,
    ResourceCategory,
    ResourceCreate,
    ResourceList,
    ResourceUpdate,
)
from core.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter()

ResourceId = Annotated[str, Path(description="Resource ID")]


@router.get("", response_model=ResourceList)
async def browse_resources(filters: FiltersDep, pagination: PaginationDep) -> ResourceList:
    """
    Browse the approved catalog.

    Filters combine with AND. `subject` and `search` match
    case-insensitive substrings; `all` or an empty value disables a filter.
    """
    return ResourceService.list_resources(
        filters, page=pagination.page, page_size=pagination.page_size
    )


@router.post("", response_model=Resource, status_code=status.HTTP_201_CREATED)
async def upload_resource(
    file: Annotated[UploadFile, File(description="Resource document")],
    title: Annotated[str, Form(min_length=1, max_length=255)],
    category: Annotated[ResourceCategory, Form()],
    subject: Annotated[str, Form(min_length=1, max_length=120)],
    semester: Annotated[str, Form(min_length=1, max_length=20)],
    year: Annotated[str, Form(min_length=4, max_length=4)],
    description: Annotated[str, Form(max_length=5000)] = "",
    branch: Annotated[Optional[str], Form(max_length=20)] = None,
    price: Annotated[float, Form(ge=0, le=100000)] = 0,
    user: AuthUser = Depends(require_uploader),
) -> Resource:
    """
    Upload a new resource (uploaders and admins only).

    The file goes to the category's storage bucket. The resource is hidden
    from the catalog until an admin approves it.
    """
    data = ResourceCreate(
        title=title,
        description=description,
        category=category,
        subject=subject,
        semester=semester,
        year=year,
        branch=branch,
        price=price,
    )
    content = await file.read()
    filename = file.filename or "upload"

    logger.info(f"Processing upload: {filename} ({len(content)} bytes) by {user.id}")

    return ResourceService.create_resource(
        uploader_id=str(user.id),
        data=data,
        filename=filename,
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )


@router.get("/mine", response_model=list[Resource])
async def list_my_resources(user: AuthUser = Depends(get_current_user)) -> list[Resource]:
    """The caller's uploads, including those still awaiting approval."""
    return ResourceService.list_uploader_resources(str(user.id))


@router.get("/{resource_id}", response_model=Resource)
async def get_resource(
    resource_id: ResourceId,
    user: Optional[AuthUser] = Depends(get_current_user_optional_with_role),
) -> Resource:
    """
    Resource detail.

    Pending resources are only visible to their uploader and admins.
    """
    return ResourceService.get_resource(
        resource_id,
        user_id=str(user.id) if user else None,
        is_admin=bool(user and user.is_admin),
    )


@router.patch("/{resource_id}", response_model=Resource)
async def update_resource(
    resource_id: ResourceId,
    request: ResourceUpdate,
    user: AuthUser = Depends(get_current_user_with_role),
) -> Resource:
    """Edit a resource. Uploader or admin only."""
    return ResourceService.update_resource(
        resource_id, request, user_id=str(user.id), is_admin=user.is_admin
    )


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user_with_role),
) -> dict:
    """Delete a resource and its stored file. Uploader or admin only."""
    ResourceService.delete_resource(resource_id, user_id=str(user.id), is_admin=user.is_admin)
    return {
        "resource_id": resource_id,
        "message": "Resource deleted successfully",
    }


@router.post("/{resource_id}/download")
async def download_resource(
    resource_id: ResourceId,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Get the file URL of a resource and count the download.

    Paid resources need a completed purchase (402 otherwise).
    """
    return ResourceService.record_download(resource_id, str(user.id))
