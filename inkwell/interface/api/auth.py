"""Request principal dependencies.

Authentication happens upstream: a middleware verifies the caller and
stores a ``Principal`` on ``request.state.principal``. Routes only read it.
"""

from fastapi import Depends, HTTPException, Request, status

from inkwell.domain.model import Principal


def get_principal(request: Request) -> Principal | None:
    """Authenticated caller, or None for anonymous requests."""
    principal = getattr(request.state, "principal", None)
    return principal if isinstance(principal, Principal) else None


def require_principal(
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    """Authenticated caller.

    Raises:
        HTTPException: 401 if the request is anonymous
    """
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return principal


def require_admin(principal: Principal = Depends(require_principal)) -> Principal:
    """Authenticated admin.

    Raises:
        HTTPException: 401 if anonymous, 403 if not an admin
    """
    if not principal.is_elevated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal
