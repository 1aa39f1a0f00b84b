"""Login endpoint."""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_access
from stockledger.application.dto.requests import LoginRequest
from stockledger.application.dto.responses import ErrorResponse, SessionResponse
from stockledger.core.entities.inventory import ItemType
from stockledger.core.services import AccessControl, can_access_category

router = APIRouter(prefix="/api/session", tags=["session"])


@router.post("", response_model=SessionResponse, responses={403: {"model": ErrorResponse}})
async def login(
    request: LoginRequest,
    access: AccessControl = Depends(get_access),
) -> SessionResponse:
    """
    Resolve the role for a secret.

    Clients send the same secret as X-Access-Secret on later requests.
    """
    role = access.authenticate(request.secret)
    return SessionResponse(
        role=role,
        categories=[t for t in ItemType if can_access_category(role, t)],
    )
