"""
Shared request dependencies: catalog access and admin gating.
"""
import threading
from typing import Optional
from fastapi import Depends, Header, HTTPException, status

from config.settings import settings
from service.access import has_role_access
from service.course_catalog import CourseCatalog

_catalog: Optional[CourseCatalog] = None
_catalog_lock = threading.Lock()


def get_catalog() -> CourseCatalog:
    """Process-wide catalog, seeded from settings.catalog_file on first use."""
    global _catalog
    if _catalog is None:
        # Sync dependencies run in the threadpool; build the catalog only once
        with _catalog_lock:
            if _catalog is None:
                if settings.catalog_file:
                    _catalog = CourseCatalog.from_file(settings.catalog_file)
                else:
                    _catalog = CourseCatalog()
    return _catalog


def require_admin(x_user_role: Optional[str] = Header(default=None)) -> str:
    """Caller must present an admin (or super admin) role."""
    if not x_user_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not has_role_access(x_user_role, "ADMIN"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can manage course schedules"
        )
    return x_user_role


def require_finished_period(
    _role: str = Depends(require_admin),
    catalog: CourseCatalog = Depends(get_catalog)
) -> CourseCatalog:
    """Scheduling opens only once at least one enrollment period has ended."""
    if not catalog.has_finished_enrollment_period():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Course scheduling can only be used after an enrollment period has finished"
        )
    return catalog
