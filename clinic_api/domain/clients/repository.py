"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Client, User
from ...shared.soft_delete import active, soft_delete


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    async def get_clients(db: AsyncSession) -> list[Client]:
        """Get all non-deleted clients"""
        result = await db.execute(select(Client).where(active(Client)).order_by(Client.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_client_by_id(db: AsyncSession, client_id: int) -> Optional[Client]:
        """Get a specific non-deleted client by ID"""
        result = await db.execute(select(Client).where(Client.id == client_id, active(Client)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_client(db: AsyncSession, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        await db.commit()
        await db.refresh(client)
        return client

    @staticmethod
    async def soft_delete_client(db: AsyncSession, client: Client) -> Client:
        """Mark a client deleted; the caller commits"""
        soft_delete(client)
        await db.flush()
        return client

    @staticmethod
    async def soft_delete_user(db: AsyncSession, user: User) -> User:
        soft_delete(user)
        await db.flush()
        return user
