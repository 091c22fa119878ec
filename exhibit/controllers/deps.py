"""
Request-scoped dependencies.

Resolves the authenticated user from proxy headers and builds the per-request
service manager bound to the database session, the user and the request.
"""
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from exhibit.db.database import get_db
from exhibit.db.models import User
from exhibit.services import ServiceManager


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def resolve_identity_from_headers(
    x_auth_request_email: Optional[str],
    x_forwarded_email: Optional[str],
) -> Optional[str]:
    return _normalize_email(x_auth_request_email or x_forwarded_email)


def get_current_user(
    db: Session = Depends(get_db),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Optional[User]:
    """Return the user named by the proxy headers, or None for guests."""
    email = resolve_identity_from_headers(x_auth_request_email, x_forwarded_email)
    if not email:
        return None
    return db.query(User).filter(User.email == email).first()


def build_services(request: Request, db: Session, current_user: Optional[User]) -> ServiceManager:
    services = ServiceManager(request.app.state.config)
    services.set_service("EntityManager", db)
    services.set_service("CurrentUser", current_user)
    services.set_service("Request", request)
    # Listeners attached at startup apply to every request.
    services.set_service("EventManager", request.app.state.event_manager)
    return services


def get_services(
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
) -> ServiceManager:
    return build_services(request, db, current_user)
