"""
Soft deletion: rows are hidden by setting deleted_at, never physically removed.

Works on any model with a deleted_at column.
"""
import logging
from datetime import datetime

from sqlmodel import Session, SQLModel

logger = logging.getLogger(__name__)


def soft_delete(session: Session, row: SQLModel) -> SQLModel:
    if not hasattr(row, "deleted_at"):
        raise TypeError(f"{type(row).__name__} does not support soft deletion")
    if row.deleted_at is None:
        row.deleted_at = datetime.utcnow()
        session.add(row)
        session.flush()
        logger.info("Soft-deleted %s %s", type(row).__name__, row.id)
    return row


def restore(session: Session, row: SQLModel) -> SQLModel:
    if not hasattr(row, "deleted_at"):
        raise TypeError(f"{type(row).__name__} does not support soft deletion")
    row.deleted_at = None
    session.add(row)
    session.flush()
    return row


def is_trashed(row: SQLModel) -> bool:
    return getattr(row, "deleted_at", None) is not None
