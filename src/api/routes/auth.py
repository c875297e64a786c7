import secrets
from datetime import UTC, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.rate_limit import (
    RateLimiters,
    client_identity,
    enforce_rate_limit,
    get_rate_limiters,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ANY_ROLE,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    CleanupExpiredStateUseCase,
    CleanupResponse,
    LoginResult,
    LoginUseCase,
    LogoutUseCase,
    OtpSendResponse,
    Principal,
    ResolvePrincipalUseCase,
    SendOtpUseCase,
    VerifyOtpUseCase,
)
from src.depends import get_session_token, get_unit_of_work, require_staff

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginResponse(BaseModel):
    """Body returned after a successful password or OTP login"""

    success: bool
    user: Principal


class SessionResponse(BaseModel):
    """Current session user, or null when there is no valid session"""

    user: Optional[Principal] = None


class SuccessResponse(BaseModel):
    success: bool


def _set_session_cookie(response: Response, login: LoginResult):
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=login.session_token,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
        expires=login.expires_at.replace(tzinfo=UTC),
        path="/",
    )


def _clear_session_cookie(response: Response):
    response.delete_cookie(key=ApplicationConfig.SESSION_COOKIE_NAME, path="/")


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming staff login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    """
    Staff Login

    Authenticates an admin, doctor or pharmacist with email and password,
    creates a session and sets the session cookie.

    Raises:
        - 400 Bad Request: Patient account or password not set
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account deactivated
        - 429 Too Many Requests: Login rate limit exhausted
        - 500 Internal Server Error: Server error
    """
    caller = client_identity(http_request, ApplicationConfig.TRUST_PROXY_HEADERS)
    enforce_rate_limit(limiters.login, caller)

    use_case = LoginUseCase(
        uow,
        session_ttl=timedelta(hours=ApplicationConfig.STAFF_SESSION_HOURS),
        bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS,
    )
    result = await use_case.execute(request.email, request.password)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_DEACTIVATED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("USE_OTP_LOGIN", "PASSWORD_NOT_SET"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    _set_session_cookie(response, result.value)
    return LoginResponse(success=True, user=result.value.user)


class OtpSendRequest(BaseModel):
    email: EmailStr = Field(..., description="Patient email address")


@router.post("/otp/send", status_code=status.HTTP_200_OK, response_model=OtpSendResponse)
async def send_otp(
    request: OtpSendRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    """
    Send OTP

    Issues a 6-digit login code for an existing account.

    Raises:
        - 403 Forbidden: Account deactivated
        - 404 Not Found: No account for this email
        - 429 Too Many Requests: OTP send rate limit exhausted
        - 500 Internal Server Error: Server error
    """
    caller = client_identity(http_request, ApplicationConfig.TRUST_PROXY_HEADERS)
    enforce_rate_limit(limiters.otp_send, caller)

    use_case = SendOtpUseCase(
        uow, otp_ttl=timedelta(minutes=ApplicationConfig.OTP_TTL_MINUTES)
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ACCOUNT_DEACTIVATED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class OtpVerifyRequest(BaseModel):
    email: EmailStr = Field(..., description="Patient email address")
    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit code")


@router.post("/otp/verify", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def verify_otp(
    request: OtpVerifyRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    """
    Verify OTP

    Exchanges a valid code for a session and sets the session cookie.

    Raises:
        - 400 Bad Request: Invalid or expired code
        - 403 Forbidden: Account deactivated
        - 404 Not Found: No account for this email
        - 429 Too Many Requests: OTP verify rate limit exhausted
        - 500 Internal Server Error: Server error
    """
    caller = client_identity(http_request, ApplicationConfig.TRUST_PROXY_HEADERS)
    enforce_rate_limit(limiters.otp_verify, caller)

    use_case = VerifyOtpUseCase(
        uow, session_ttl=timedelta(days=ApplicationConfig.PATIENT_SESSION_DAYS)
    )
    result = await use_case.execute(request.email, request.code)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_OTP", "OTP_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ACCOUNT_DEACTIVATED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    _set_session_cookie(response, result.value)
    return LoginResponse(success=True, user=result.value.user)


@router.get("/session", status_code=status.HTTP_200_OK, response_model=SessionResponse)
async def get_current_session(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Session

    Returns the signed-in user with role profile, or null. A cookie that no
    longer maps to a valid session is cleared.
    """
    if not session_token:
        return SessionResponse(user=None)

    use_case = ResolvePrincipalUseCase(uow)
    result = await use_case.execute(session_token, ANY_ROLE, include_profile=True)

    if result.is_err():
        _clear_session_cookie(response)
        return SessionResponse(user=None)

    return SessionResponse(user=result.value)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=SuccessResponse)
async def logout(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Deletes the session behind the cookie and clears the cookie.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(session_token)

    if result.is_err():
        raise ServerError(result.error)

    if session_token:
        _clear_session_cookie(response)
    return SuccessResponse(success=True)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, alias="currentPassword")
    new_password: str = Field(..., min_length=1, alias="newPassword")

    model_config = {"populate_by_name": True}


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    principal: Principal = Depends(require_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password (staff)

    Raises:
        - 400 Bad Request: New password too short, unchanged, or no password set
        - 401 Unauthorized: No staff session, or current password incorrect
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    result = await use_case.execute(
        principal.user_id, request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in ("WEAK_PASSWORD", "PASSWORD_UNCHANGED", "PASSWORD_NOT_SET"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/cleanup", status_code=status.HTTP_200_OK, response_model=CleanupResponse)
async def cleanup_expired_state(
    secret: Optional[str] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Expired State Cleanup

    Deletes expired sessions and expired or used OTP codes. When
    CLEANUP_SECRET is configured the ``secret`` query parameter must match it.

    Raises:
        - 401 Unauthorized: Secret missing or wrong
        - 500 Internal Server Error: Server error
    """
    expected = ApplicationConfig.CLEANUP_SECRET
    if expected and not secrets.compare_digest(secret or "", expected):
        raise ClientError(
            Error("UNAUTHORIZED", "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = CleanupExpiredStateUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
