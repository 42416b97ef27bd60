"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Client, User
from ...shared.responses import Envelope, success
from .schemas import ClientCreate, ClientDropdownItem, ClientResponse
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: AsyncSession = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def to_client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        firstName=client.first_name,
        middleName=client.middle_name,
        lastName=client.last_name,
        fullName=client.full_name,
        emergencyNumber=client.emergency_number,
        birthDate=client.birth_date,
        totalAppointments=client.total_appointments,
        userId=client.user_id,
        createdAt=client.created_at,
        updatedAt=client.updated_at,
    )


@router.get("", response_model=Envelope[list[ClientResponse]])
async def get_clients(
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Get all non-deleted clients"""
    clients = await service.get_clients()
    return success([to_client_response(c) for c in clients])


@router.get("/dropdown", response_model=Envelope[list[ClientDropdownItem]])
async def get_clients_for_dropdown(
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Client names for select inputs"""
    clients = await service.get_clients()
    return success(
        [
            ClientDropdownItem(id=c.id, fullName=c.full_name, emergencyNumber=c.emergency_number)
            for c in clients
        ]
    )


@router.get("/{client_id}", response_model=Envelope[ClientResponse])
async def get_client(
    client_id: int,
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Get a specific client"""
    client = await service.get_client(client_id)
    return success(to_client_response(client))


@router.post("", response_model=Envelope[ClientResponse], status_code=201)
async def create_client(
    data: ClientCreate,
    current_user: User = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    """Create a new client"""
    client = await service.create_client(data)
    return success(to_client_response(client), "Client created")


@router.delete("/{client_id}", response_model=Envelope[dict])
async def delete_client(
    client_id: int,
    current_user: User = Depends(require_roles("admin")),
    service: ClientService = Depends(get_client_service),
):
    """Soft-delete a client (admin only)"""
    result = await service.delete_client(client_id, current_user)
    return success({"cascadedUserId": result["cascadedUserId"]}, result["message"])
