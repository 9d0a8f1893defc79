"""Purchase API endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from breadmade.api.deps import (
    csv_response,
    get_current_user,
    get_purchase_service,
    require_admin_user,
)
from breadmade.models.purchase import Purchase, PurchaseWithDetails
from breadmade.models.user import User
from breadmade.schemas.purchase import (
    PurchaseCreate,
    PurchaseFilters,
    PurchaseStats,
    PurchaseStatusUpdate,
    PurchaseUpdate,
)
from breadmade.services.purchase_service import PurchaseService
from breadmade.utils.export import PURCHASES_FILENAME, export_to_csv

router = APIRouter()


@router.get("/purchases", response_model=List[PurchaseWithDetails], dependencies=[Depends(require_admin_user)])
async def list_purchases(
    filters: PurchaseFilters = Depends(),
    service: PurchaseService = Depends(get_purchase_service),
):
    """
    List purchases, newest first

    - **status**: Payment status
    - **type** / **note**: Processor and purchase kind
    - **start_date** / **end_date**: Creation date range
    - **min_amount** / **max_amount**: Amount range
    """
    return await service.get_purchases(filters)


@router.get("/purchases/me", response_model=List[PurchaseWithDetails])
async def my_purchases(
    user: User = Depends(get_current_user),
    service: PurchaseService = Depends(get_purchase_service),
):
    return await service.get_purchases_by_user_id(user.id)


@router.get("/purchases/search", response_model=List[PurchaseWithDetails], dependencies=[Depends(require_admin_user)])
async def search_purchases(q: str, service: PurchaseService = Depends(get_purchase_service)):
    """Search by payment intent, order or transaction reference"""
    return await service.search_purchases(q)


@router.get("/purchases/stats", response_model=PurchaseStats, dependencies=[Depends(require_admin_user)])
async def purchase_stats(service: PurchaseService = Depends(get_purchase_service)):
    return await service.get_purchase_stats()


@router.get("/purchases/recent", response_model=List[PurchaseWithDetails], dependencies=[Depends(require_admin_user)])
async def recent_purchases(limit: int = 10, service: PurchaseService = Depends(get_purchase_service)):
    return await service.get_recent_purchases(limit)


@router.get("/purchases/export", dependencies=[Depends(require_admin_user)])
async def export_purchases(
    filters: PurchaseFilters = Depends(),
    service: PurchaseService = Depends(get_purchase_service),
):
    purchases = await service.get_purchases(filters)
    return csv_response(PURCHASES_FILENAME, export_to_csv(purchases))


@router.get("/purchases/{purchase_id}", response_model=PurchaseWithDetails, dependencies=[Depends(require_admin_user)])
async def get_purchase(purchase_id: str, service: PurchaseService = Depends(get_purchase_service)):
    purchase = await service.get_purchase_by_id(purchase_id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    return purchase


@router.post("/purchases", response_model=Purchase, status_code=201, dependencies=[Depends(require_admin_user)])
async def create_purchase(purchase_data: PurchaseCreate, service: PurchaseService = Depends(get_purchase_service)):
    return await service.create_purchase(purchase_data)


@router.patch("/purchases/{purchase_id}", response_model=Purchase, dependencies=[Depends(require_admin_user)])
async def update_purchase(
    purchase_id: str,
    updates: PurchaseUpdate,
    service: PurchaseService = Depends(get_purchase_service),
):
    return await service.update_purchase(purchase_id, updates)


@router.patch("/purchases/{purchase_id}/status", response_model=Purchase, dependencies=[Depends(require_admin_user)])
async def update_purchase_status(
    purchase_id: str,
    status_update: PurchaseStatusUpdate,
    service: PurchaseService = Depends(get_purchase_service),
):
    return await service.update_purchase_status(purchase_id, status_update.payment_status)


@router.delete("/purchases/{purchase_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_purchase(purchase_id: str, service: PurchaseService = Depends(get_purchase_service)):
    await service.delete_purchase(purchase_id)
