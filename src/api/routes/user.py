from fastapi import APIRouter, Depends, status

from src.app.use_cases.auth import ANY_ROLE, Principal
from src.depends import require_doctor, require_patient, require_pharmacist, require_roles

router = APIRouter(tags=["User"])

require_any_role_with_profile = require_roles(*ANY_ROLE, include_profile=True)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=Principal)
async def get_me(principal: Principal = Depends(require_any_role_with_profile)):
    """
    Current User

    Returns the principal behind the session cookie, with the doctor or
    pharmacist profile when the role has one.

    Raises:
        - 401 Unauthorized: No valid session
    """
    return principal


@router.get("/doctor/profile", status_code=status.HTTP_200_OK, response_model=Principal)
async def get_doctor_profile(principal: Principal = Depends(require_doctor)):
    """Doctor portal profile (doctor sessions only)"""
    return principal


@router.get("/pharmacist/profile", status_code=status.HTTP_200_OK, response_model=Principal)
async def get_pharmacist_profile(principal: Principal = Depends(require_pharmacist)):
    """Pharmacist portal profile (pharmacist sessions only)"""
    return principal


@router.get("/patient/profile", status_code=status.HTTP_200_OK, response_model=Principal)
async def get_patient_profile(principal: Principal = Depends(require_patient)):
    """Patient portal profile (patient sessions only)"""
    return principal
