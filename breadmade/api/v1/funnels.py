"""Funnel and category API endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from breadmade.api.deps import get_funnel_service, require_admin_user
from breadmade.models.funnel import Category, Funnel
from breadmade.schemas.funnel import CategoryCreate, FunnelCreate, FunnelUpdate
from breadmade.services.funnel_service import FunnelService

router = APIRouter()


@router.get("/funnels", response_model=List[Funnel])
async def list_funnels(service: FunnelService = Depends(get_funnel_service)):
    """Active funnels with their categories"""
    return await service.get_funnels_with_categories()


@router.get("/funnels/slug/{public_id}", response_model=Funnel)
async def get_funnel_by_public_id(public_id: str, service: FunnelService = Depends(get_funnel_service)):
    funnel = await service.get_funnel_by_funnel_id(public_id)
    if not funnel:
        raise HTTPException(status_code=404, detail="Funnel not found")
    return funnel


@router.get("/funnels/{funnel_id}", response_model=Funnel)
async def get_funnel(funnel_id: str, service: FunnelService = Depends(get_funnel_service)):
    funnel = await service.get_funnel_by_id_with_category(funnel_id)
    if not funnel:
        raise HTTPException(status_code=404, detail="Funnel not found")
    return funnel


@router.post("/funnels", response_model=Funnel, status_code=201, dependencies=[Depends(require_admin_user)])
async def create_funnel(funnel_data: FunnelCreate, service: FunnelService = Depends(get_funnel_service)):
    """
    Create a funnel

    - **title**: Also used to derive the public funnel id
    - **description**, **image_url**, **category_id**: Optional details
    - **is_available_for_lease**: Whether the funnel can be leased
    """
    return await service.create_funnel(funnel_data)


@router.patch("/funnels/{funnel_id}", response_model=Funnel, dependencies=[Depends(require_admin_user)])
async def update_funnel(
    funnel_id: str,
    updates: FunnelUpdate,
    service: FunnelService = Depends(get_funnel_service),
):
    return await service.update_funnel(funnel_id, updates)


@router.delete("/funnels/{funnel_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_funnel(funnel_id: str, service: FunnelService = Depends(get_funnel_service)):
    """Deactivate a funnel; the row is kept"""
    await service.delete_funnel(funnel_id)


@router.post("/funnel-images", dependencies=[Depends(require_admin_user)])
async def upload_funnel_image(
    filename: str,
    request: Request,
    service: FunnelService = Depends(get_funnel_service),
):
    """Upload the raw request body as a funnel image and return its public URL"""
    content = await request.body()
    if not content:
        raise HTTPException(status_code=400, detail="Empty image upload")
    content_type = request.headers.get("content-type", "application/octet-stream")
    url = await service.upload_funnel_image(filename, content, content_type)
    if url is None:
        raise HTTPException(status_code=400, detail="Failed to upload image")
    return {"url": url}


@router.get("/categories", response_model=List[Category])
async def list_categories(service: FunnelService = Depends(get_funnel_service)):
    return await service.get_categories()


@router.post("/categories", response_model=Category, status_code=201, dependencies=[Depends(require_admin_user)])
async def create_category(category_data: CategoryCreate, service: FunnelService = Depends(get_funnel_service)):
    return await service.create_category(category_data.name)
