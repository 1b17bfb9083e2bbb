"""
User Endpoints - Account management for the authenticated user
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_credential_service, require_auth
from app.services import CredentialService
from app.schemas import ChangePasswordRequest, CurrentUser, DataResponse

router = APIRouter(dependencies=[Depends(require_auth)])


@router.get(
    "/me",
    response_model=DataResponse[CurrentUser],
    status_code=status.HTTP_200_OK
)
def get_me(current_user: CurrentUser = Depends(require_auth)):
    """Identity carried by the session token"""
    return DataResponse(
        success=True,
        message="Current user retrieved successfully",
        data=current_user
    )


@router.put(
    "/password",
    response_model=DataResponse[None],
    status_code=status.HTTP_200_OK
)
def change_password(
    request: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    credential_service: CredentialService = Depends(get_credential_service)
):
    """
    Change password

    **Errors:**
    - 400: New password is empty
    - 401: Not authenticated, or old password is incorrect
    - 404: Account no longer exists
    """
    credential_service.change_password(
        db, current_user.email, request.old_password, request.new_password
    )

    return DataResponse(success=True, message="Password updated successfully")


@router.delete(
    "",
    response_model=DataResponse[None],
    status_code=status.HTTP_200_OK
)
def delete_account(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    credential_service: CredentialService = Depends(get_credential_service)
):
    """
    Delete the account

    The account is tombstoned, not erased: registering again with the same
    email reactivates it. Tokens already issued remain valid until they expire.
    """
    credential_service.tombstone(db, current_user.email)

    return DataResponse(success=True, message="Account deleted successfully")
