from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import Principal
from src.app.use_cases.users import ManageSessionsUseCase, RevokeSessionsResponse, SessionInfo
from src.depends import get_unit_of_work, require_admin

router = APIRouter(prefix="/admin/users", tags=["Sessions"])


@router.get(
    "/{user_id}/sessions",
    status_code=status.HTTP_200_OK,
    response_model=List[SessionInfo],
)
async def list_user_sessions(
    user_id: UUID,
    principal: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List User Sessions (admin)

    Raises:
        - 401 Unauthorized: No admin session
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.list_sessions(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{user_id}/sessions",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_user_sessions(
    user_id: UUID,
    principal: Principal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke All Sessions (admin)

    Deletes every session of the user, signing them out on all devices.

    Raises:
        - 401 Unauthorized: No admin session
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.revoke_all(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
