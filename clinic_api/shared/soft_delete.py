"""Soft-delete convention shared by every mutable entity.

Records are marked with a ``deleted_at`` timestamp instead of being removed.
Repositories read through :func:`active` unless a caller explicitly asks for
deleted rows.
"""

from sqlalchemy import Column, DateTime

from .dates import utc_now


class SoftDeleteMixin:
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def active(model):
    """WHERE clause selecting rows that are not soft-deleted"""
    return model.deleted_at.is_(None)


def soft_delete(record) -> None:
    """Mark a record deleted; a record that is already deleted keeps its timestamp"""
    if record.deleted_at is None:
        record.deleted_at = utc_now()


def restore(record) -> None:
    record.deleted_at = None
