"""Custom request and lease request API endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from breadmade.api.deps import (
    csv_response,
    get_current_user,
    get_custom_request_service,
    get_leasing_service,
    require_admin_user,
)
from breadmade.models.request import CustomRequest, LeaseRequest
from breadmade.models.user import User
from breadmade.schemas.request import (
    CustomRequestCreate,
    LeaseDraftCreate,
    LeaseRequestCreate,
    LeaseRequestUpdate,
    RevenueUpdate,
    StatusUpdate,
)
from breadmade.services.custom_request_service import CustomRequestService
from breadmade.services.leasing_service import LeasingService
from breadmade.utils.export import LEASE_REQUESTS_FILENAME, export_to_csv

router = APIRouter()


# Custom requests

@router.post("/custom-requests", response_model=CustomRequest, status_code=201)
async def create_custom_request(
    request_data: CustomRequestCreate,
    service: CustomRequestService = Depends(get_custom_request_service),
):
    """
    Submit a custom funnel request

    Starts as pending, stamped with the submission time and quarter.
    """
    return await service.create_custom_request(request_data)


@router.get("/custom-requests/me", response_model=List[CustomRequest])
async def my_custom_requests(
    user: User = Depends(get_current_user),
    service: CustomRequestService = Depends(get_custom_request_service),
):
    return await service.get_custom_requests_by_email(user.email)


@router.get("/custom-requests", response_model=List[CustomRequest], dependencies=[Depends(require_admin_user)])
async def list_custom_requests(service: CustomRequestService = Depends(get_custom_request_service)):
    return await service.get_custom_requests()


@router.patch(
    "/custom-requests/{request_id}/status",
    response_model=CustomRequest,
    dependencies=[Depends(require_admin_user)],
)
async def update_custom_request_status(
    request_id: str,
    status_update: StatusUpdate,
    service: CustomRequestService = Depends(get_custom_request_service),
):
    return await service.update_custom_request_status(
        request_id, status_update.status, status_update.assigned_team_member
    )


@router.delete("/custom-requests/{request_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_custom_request(
    request_id: str,
    service: CustomRequestService = Depends(get_custom_request_service),
):
    await service.delete_custom_request(request_id)


# Lease requests

@router.post("/lease-requests", response_model=LeaseRequest, status_code=201)
async def create_lease_request(
    request_data: LeaseRequestCreate,
    service: LeasingService = Depends(get_leasing_service),
):
    return await service.create_lease_request(request_data)


@router.post("/lease-requests/draft", response_model=LeaseRequest, status_code=201)
async def create_draft_lease_request(
    draft: LeaseDraftCreate,
    service: LeasingService = Depends(get_leasing_service),
):
    """Save the contact step of the lease form; project fields are filled later"""
    return await service.create_draft_lease_request(draft)


@router.get("/lease-requests/me", response_model=List[LeaseRequest])
async def my_lease_requests(
    user: User = Depends(get_current_user),
    service: LeasingService = Depends(get_leasing_service),
):
    return await service.get_lease_requests_by_email(user.email)


@router.get("/lease-requests", response_model=List[LeaseRequest], dependencies=[Depends(require_admin_user)])
async def list_lease_requests(
    status: Optional[str] = None,
    service: LeasingService = Depends(get_leasing_service),
):
    if status:
        return await service.get_lease_requests_by_status(status)
    return await service.get_lease_requests()


@router.get("/lease-requests/export", dependencies=[Depends(require_admin_user)])
async def export_lease_requests(service: LeasingService = Depends(get_leasing_service)):
    requests = await service.get_lease_requests()
    return csv_response(LEASE_REQUESTS_FILENAME, export_to_csv(requests))


@router.get("/lease-requests/{request_id}", response_model=LeaseRequest, dependencies=[Depends(require_admin_user)])
async def get_lease_request(request_id: str, service: LeasingService = Depends(get_leasing_service)):
    lease_request = await service.get_lease_request_by_id(request_id)
    if not lease_request:
        raise HTTPException(status_code=404, detail="Lease request not found")
    return lease_request


@router.patch("/lease-requests/{request_id}", response_model=LeaseRequest)
async def update_lease_request(
    request_id: str,
    updates: LeaseRequestUpdate,
    service: LeasingService = Depends(get_leasing_service),
):
    """Complete or edit a lease request, e.g. after the draft step"""
    return await service.update_lease_request(request_id, updates)


@router.patch(
    "/lease-requests/{request_id}/status",
    response_model=LeaseRequest,
    dependencies=[Depends(require_admin_user)],
)
async def update_lease_request_status(
    request_id: str,
    status_update: StatusUpdate,
    service: LeasingService = Depends(get_leasing_service),
):
    return await service.update_lease_request_status(
        request_id, status_update.status, status_update.assigned_team_member
    )


@router.patch(
    "/lease-requests/{request_id}/revenue",
    response_model=LeaseRequest,
    dependencies=[Depends(require_admin_user)],
)
async def update_lease_request_revenue(
    request_id: str,
    revenue: RevenueUpdate,
    service: LeasingService = Depends(get_leasing_service),
):
    return await service.update_lease_request_revenue(request_id, revenue.estimated_revenue)


@router.delete("/lease-requests/{request_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_lease_request(request_id: str, service: LeasingService = Depends(get_leasing_service)):
    await service.delete_lease_request(request_id)
