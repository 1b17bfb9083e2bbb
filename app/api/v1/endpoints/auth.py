"""
Auth Endpoints - Registration and login
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_credential_service, get_jwt_service
from app.services import CredentialService, JwtService
from app.schemas import CredentialsRequest, RegisterResponse, TokenResponse, DataResponse

router = APIRouter()


@router.post(
    "/register",
    response_model=DataResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED
)
def register(
    request: CredentialsRequest,
    db: Session = Depends(get_db),
    credential_service: CredentialService = Depends(get_credential_service)
):
    """
    Register a new account

    A previously deleted account with the same email is reactivated with the
    new password and keeps its history.

    **Errors:**
    - 400: Empty email or password
    - 409: An active account already uses this email
    """
    result = credential_service.register(db, request.email, request.password)

    return DataResponse(
        success=True,
        message="User registered successfully",
        data=RegisterResponse(email=result.email, reactivated=result.reactivated)
    )


@router.post(
    "/login",
    response_model=DataResponse[TokenResponse],
    status_code=status.HTTP_200_OK
)
def login(
    request: CredentialsRequest,
    db: Session = Depends(get_db),
    credential_service: CredentialService = Depends(get_credential_service),
    jwt_service: JwtService = Depends(get_jwt_service)
):
    """
    Exchange email and password for a session token

    **Response:**
    - access_token to send as `Authorization: Bearer <token>`
    - expires_in seconds and expires_at instant

    **Errors:**
    - 401: Invalid email or password
    """
    identity = credential_service.verify(db, request.email, request.password)
    issued = jwt_service.issue(identity.u_email)

    return DataResponse(
        success=True,
        message="Login successful",
        data=TokenResponse(
            access_token=issued.token,
            expires_in=issued.expires_in,
            expires_at=issued.expires_at
        )
    )
