"""Client service - Business logic for client operations"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import CLIENT_DELETE_CASCADES_USER
from ...database import transaction
from ...errors import NotFoundError, ValidationError
from ...models import Client, User
from .repository import ClientRepository
from .schemas import ClientCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientDeletionPolicy:
    """What else goes away when a client is deleted"""

    cascade_user: bool = CLIENT_DELETE_CASCADES_USER


class ClientService:
    """Service layer for client business logic"""

    def __init__(
        self,
        db: AsyncSession,
        repo: Optional[ClientRepository] = None,
        deletion_policy: Optional[ClientDeletionPolicy] = None,
    ):
        self.db = db
        self.repo = repo or ClientRepository()
        self.deletion_policy = deletion_policy or ClientDeletionPolicy()

    async def get_clients(self) -> list[Client]:
        """Get all non-deleted clients"""
        return await self.repo.get_clients(self.db)

    async def get_client(self, client_id: int) -> Client:
        """Get a specific client"""
        client = await self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def create_client(self, data: ClientCreate) -> Client:
        """Create a new client with validation"""
        if data.userId is not None:
            user = await self.repo.get_user_by_id(self.db, data.userId)
            if not user or user.is_deleted:
                raise ValidationError(f"userId {data.userId} does not reference an existing user")

        client_data = {
            "first_name": data.firstName,
            "middle_name": data.middleName,
            "last_name": data.lastName,
            "emergency_number": data.emergencyNumber,
            "birth_date": data.birthDate,
            "total_appointments": data.totalAppointments,
            "user_id": data.userId,
        }

        client = await self.repo.create_client(self.db, **client_data)
        logger.info(f"📥 Created client {client.id}")
        return client

    async def delete_client(self, client_id: int, current_user: Optional[User] = None) -> dict:
        """Soft-delete a client and apply the deletion policy to its user account"""
        cascaded_user_id = None

        async with transaction(self.db):
            client = await self.get_client(client_id)
            await self.repo.soft_delete_client(self.db, client)

            if self.deletion_policy.cascade_user and client.user_id is not None:
                user = await self.repo.get_user_by_id(self.db, client.user_id)
                if user and not user.is_deleted:
                    await self.repo.soft_delete_user(self.db, user)
                    cascaded_user_id = user.id

        actor = current_user.id if current_user else "system"
        logger.info(f"🗑️ Client {client_id} deleted by {actor}")
        if cascaded_user_id is not None:
            logger.info(f"🗑️ Linked user {cascaded_user_id} deleted with client {client_id}")

        return {"message": "Client deleted", "cascadedUserId": cascaded_user_id}
