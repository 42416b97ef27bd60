"""Catalog routers - services and supplies"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import Service, Supply, User
from ...shared.responses import Envelope, success
from .schemas import (
    ServiceCreate,
    ServiceDropdownItem,
    ServiceResponse,
    SupplyCreate,
    SupplyResponse,
)
from .service import CatalogService

services_router = APIRouter(prefix="/services", tags=["Services"])
supplies_router = APIRouter(prefix="/supplies", tags=["Supplies"])


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


def to_service_response(s: Service) -> ServiceResponse:
    return ServiceResponse(
        id=s.id, name=s.name, price=s.price, createdAt=s.created_at, updatedAt=s.updated_at
    )


def to_supply_response(s: Supply) -> SupplyResponse:
    return SupplyResponse(
        id=s.id,
        name=s.name,
        quantity=s.quantity,
        expirationDate=s.expiration_date,
        price=s.price,
        createdAt=s.created_at,
        updatedAt=s.updated_at,
    )


# ============================================================================
# SERVICES
# ============================================================================


@services_router.get("", response_model=Envelope[list[ServiceResponse]])
async def get_services(
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    services = await catalog.get_services()
    return success([to_service_response(s) for s in services])


@services_router.get("/dropdown", response_model=Envelope[list[ServiceDropdownItem]])
async def get_services_for_dropdown(
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    services = await catalog.get_services()
    return success([ServiceDropdownItem(id=s.id, name=s.name, price=s.price) for s in services])


@services_router.get("/{service_id}", response_model=Envelope[ServiceResponse])
async def get_service(
    service_id: int,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return success(to_service_response(await catalog.get_service(service_id)))


@services_router.post("", response_model=Envelope[ServiceResponse], status_code=201)
async def create_service(
    data: ServiceCreate,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    service = await catalog.create_service(data)
    return success(to_service_response(service), "Service created")


@services_router.delete("/{service_id}", response_model=Envelope[dict])
async def delete_service(
    service_id: int,
    current_user: User = Depends(require_roles("admin")),
    catalog: CatalogService = Depends(get_catalog_service),
):
    await catalog.delete_service(service_id)
    return success(message="Service deleted")


# ============================================================================
# SUPPLIES
# ============================================================================


@supplies_router.get("", response_model=Envelope[list[SupplyResponse]])
async def get_supplies(
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    supplies = await catalog.get_supplies()
    return success([to_supply_response(s) for s in supplies])


@supplies_router.get("/{supply_id}", response_model=Envelope[SupplyResponse])
async def get_supply(
    supply_id: int,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return success(to_supply_response(await catalog.get_supply(supply_id)))


@supplies_router.post("", response_model=Envelope[SupplyResponse], status_code=201)
async def create_supply(
    data: SupplyCreate,
    current_user: User = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    supply = await catalog.create_supply(data)
    return success(to_supply_response(supply), "Supply created")


@supplies_router.delete("/{supply_id}", response_model=Envelope[dict])
async def delete_supply(
    supply_id: int,
    current_user: User = Depends(require_roles("admin")),
    catalog: CatalogService = Depends(get_catalog_service),
):
    await catalog.delete_supply(supply_id)
    return success(message="Supply deleted")
