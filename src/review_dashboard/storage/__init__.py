"""Approval state persistence and report output."""

import shelve

from review_dashboard.config import Settings
from review_dashboard.storage.approval_store import (
    ApprovalStore,
    FileApprovalStore,
    LocalApprovalStore,
    MemoryApprovalStore,
)
from review_dashboard.utils.logging import logger


def create_approval_store(settings: Settings) -> ApprovalStore:
    """Build the approval store selected by configuration.

    Args:
        settings: Application settings

    Returns:
        Store for the configured backend
    """
    backend = settings.approval_backend

    if backend == "memory":
        store: ApprovalStore = MemoryApprovalStore()
    elif backend == "local":
        settings.local_store_path.parent.mkdir(parents=True, exist_ok=True)
        store = LocalApprovalStore(shelve.open(str(settings.local_store_path)))
    elif backend == "file":
        store = FileApprovalStore(settings.approval_file)
    else:
        raise ValueError(f"Unknown approval backend: {backend}")

    logger.debug(f"Using {type(store).__name__} for approvals")
    return store


__all__ = [
    "ApprovalStore",
    "FileApprovalStore",
    "LocalApprovalStore",
    "MemoryApprovalStore",
    "create_approval_store",
]
