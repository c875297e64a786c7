from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ANY_ROLE, Principal, ResolvePrincipalUseCase
from src.domain.entities import STAFF_ROLES, UserRole

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)


def require_roles(*roles: UserRole, include_profile: bool = False):
    """
    Build a dependency that resolves the session cookie into a Principal.

    Every denial (no cookie, unknown or expired session, deactivated account,
    wrong role, storage failure) becomes the same 401, so a caller cannot
    tell "not logged in" from "not allowed".

    Args:
        roles: Roles admitted by the route
        include_profile: Attach the doctor/pharmacist profile to the principal
    """
    if not roles:
        raise ValueError("require_roles needs at least one role")
    allowed_roles = frozenset(UserRole(role) for role in roles)

    async def resolve_principal(
        session_token: Optional[str] = Depends(get_session_token),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> Principal:
        use_case = ResolvePrincipalUseCase(uow)
        result = await use_case.execute(session_token, allowed_roles, include_profile)

        if result.is_err():
            raise ClientError(
                Error("UNAUTHORIZED", "Unauthorized"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        return result.value

    return resolve_principal


require_any_role = require_roles(*ANY_ROLE)
require_admin = require_roles(UserRole.admin)
require_doctor = require_roles(UserRole.doctor, include_profile=True)
require_pharmacist = require_roles(UserRole.pharmacist, include_profile=True)
require_patient = require_roles(UserRole.patient)
require_staff = require_roles(*STAFF_ROLES)
require_billing_access = require_roles(UserRole.admin, UserRole.pharmacist)
require_medical_staff = require_roles(UserRole.admin, UserRole.doctor)
