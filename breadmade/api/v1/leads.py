"""Lead API endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from breadmade.api.deps import csv_response, get_lead_service, require_admin_user
from breadmade.models.lead import Lead, LeadSource
from breadmade.schemas.lead import LeadCreate, LeadUpdate
from breadmade.services.lead_service import LeadService
from breadmade.utils.export import LEADS_FILENAME, export_to_csv

router = APIRouter()


@router.post("/leads", response_model=Lead, status_code=201)
async def create_lead(
    lead_data: LeadCreate,
    service: LeadService = Depends(get_lead_service),
):
    """
    Capture a lead from a public form

    - **email**: Contact email
    - **phone_number**: Phone (optional)
    - **username**: Handle (optional)
    """
    return await service.create_lead(lead_data)


@router.get("/leads", response_model=List[Lead], dependencies=[Depends(require_admin_user)])
async def list_leads(service: LeadService = Depends(get_lead_service)):
    return await service.get_leads()


@router.get("/leads/sources", response_model=List[LeadSource], dependencies=[Depends(require_admin_user)])
async def list_lead_sources(service: LeadService = Depends(get_lead_service)):
    """Prospects from custom requests and bid offers, newest first"""
    return await service.get_lead_sources()


@router.get("/leads/export", dependencies=[Depends(require_admin_user)])
async def export_leads(service: LeadService = Depends(get_lead_service)):
    leads = await service.get_leads()
    return csv_response(LEADS_FILENAME, export_to_csv(leads))


@router.get("/leads/{lead_id}", response_model=Lead, dependencies=[Depends(require_admin_user)])
async def get_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    lead = await service.get_lead_by_id(lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.patch("/leads/{lead_id}", response_model=Lead, dependencies=[Depends(require_admin_user)])
async def update_lead(
    lead_id: str,
    updates: LeadUpdate,
    service: LeadService = Depends(get_lead_service),
):
    return await service.update_lead(lead_id, updates)


@router.delete("/leads/{lead_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    await service.delete_lead(lead_id)
