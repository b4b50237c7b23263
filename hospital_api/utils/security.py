import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from hospital_api.config.database import settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN = "Admin"


class OperationClaims:
    BRANCHES_WRITE = "Branches.Write"
    DOCTORS_WRITE = "Doctors.Write"
    DOCTORS_UPDATE = "Doctors.Update"
    PATIENTS_READ = "Patients.Read"
    PATIENTS_WRITE = "Patients.Write"
    DOCTOR_SCHEDULES_WRITE = "DoctorSchedules.Write"
    DOCTOR_SCHEDULES_UPDATE = "DoctorSchedules.Update"
    APPOINTMENTS_WRITE = "Appointments.Write"
    REPORTS_READ = "Reports.Read"
    REPORTS_WRITE = "Reports.Write"


def create_access_token(subject: str, roles: list[str]) -> str:
    """Issue a signed token carrying operation claims"""
    return jwt.encode(
        {"sub": subject, "roles": roles},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_roles(*roles: str):
    """
    Dependency factory guarding an endpoint by operation claims.
    Admin satisfies every requirement.
    """
    def dependency(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> dict:
        if not settings.auth_enabled:
            return {}

        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        claims = decode_access_token(credentials.credentials)
        granted = set(claims.get("roles") or [])
        if ADMIN not in granted and not granted.intersection(roles):
            logger.warning(f"Subject {claims.get('sub')} lacks any of {roles}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not authorized to perform this operation",
            )
        return claims

    return dependency
