"""Invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from ledger.application.usecase.invite import (
    CleanupInvitesResponse,
    CleanupInvitesUseCase,
    GetActiveInvitesRequest,
    GetActiveInvitesResponse,
    GetActiveInvitesUseCase,
    IssueCodeRequest,
    IssueCodeResponse,
    IssueCodeUseCase,
    IssueEmailInvitesRequest,
    IssueEmailInvitesResponse,
    IssueEmailInvitesUseCase,
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from ledger.domain.model.invite import MAX_NOTES_LENGTH
from ledger.domain.service import JWTService
from ledger.domain.value import InviteKind
from ledger.util.jwt import JWTError

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class IssueCodeAPIRequest(BaseModel):
    """API request for issuing an invite code."""

    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    expiration_hours: float | None = None


class IssueEmailInvitesAPIRequest(BaseModel):
    """API request for issuing email invites."""

    emails: list[str] = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    expiration_hours: float | None = None


class RedeemInviteAPIRequest(BaseModel):
    """API request for redeeming an invite."""

    token: str
    kind: InviteKind | None = None


def _authenticate(jwt_service: JWTService, auth_token: str | None) -> str:
    """Resolve the caller's identity from the auth cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or the token is invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    return payload.user_id


@router.post(
    "/codes", response_model=IssueCodeResponse, status_code=status.HTTP_201_CREATED
)
async def issue_code(
    request: IssueCodeAPIRequest,
    issue_code_use_case: FromDishka[IssueCodeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> IssueCodeResponse:
    """Issue an invite code for the current identity.

    Raises:
        HTTPException: 401 if not authenticated, 409 if over quota
    """
    issuer_id = _authenticate(jwt_service, auth_token)

    response = await issue_code_use_case.execute(
        IssueCodeRequest(
            issuer_id=issuer_id,
            notes=request.notes,
            expiration_hours=request.expiration_hours,
        )
    )
    if not response.issued:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=response.message,
        )
    return response


@router.post(
    "/emails",
    response_model=IssueEmailInvitesResponse,
    status_code=status.HTTP_201_CREATED,
)
async def issue_email_invites(
    request: IssueEmailInvitesAPIRequest,
    issue_email_invites_use_case: FromDishka[IssueEmailInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> IssueEmailInvitesResponse:
    """Issue and mail email invites for the current identity.

    Addresses that could not be invited are listed in ``failed_emails``.
    """
    issuer_id = _authenticate(jwt_service, auth_token)

    return await issue_email_invites_use_case.execute(
        IssueEmailInvitesRequest(
            issuer_id=issuer_id,
            emails=request.emails,
            notes=request.notes,
            expiration_hours=request.expiration_hours,
        )
    )


@router.get("", response_model=GetActiveInvitesResponse)
async def get_active_invites(
    get_active_invites_use_case: FromDishka[GetActiveInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    kind: InviteKind | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetActiveInvitesResponse:
    """Get the current identity's outstanding invites.

    Args:
        get_active_invites_use_case: Get active invites use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        kind: Optional kind filter (code, email)
        limit: Maximum number of results (1-100)
        offset: Number of results to skip
    """
    issuer_id = _authenticate(jwt_service, auth_token)

    return await get_active_invites_use_case.execute(
        GetActiveInvitesRequest(
            issuer_id=issuer_id, kind=kind, limit=limit, offset=offset
        )
    )


@router.post("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    request: ValidateInviteRequest,
    validate_invite_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check whether an invite can be redeemed.

    Public endpoint, used by the registration page before sign-up.
    """
    return await validate_invite_use_case.execute(request)


@router.post("/redeem", response_model=RedeemInviteResponse)
async def redeem_invite(
    request: RedeemInviteAPIRequest,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RedeemInviteResponse:
    """Redeem an invite for the current identity.

    Raises:
        HTTPException: 401 if not authenticated, 400 if the invite is
            unknown, used or expired
    """
    redeemer_id = _authenticate(jwt_service, auth_token)

    response = await redeem_invite_use_case.execute(
        RedeemInviteRequest(
            token=request.token, redeemer_id=redeemer_id, kind=request.kind
        )
    )
    if not response.redeemed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=response.message,
        )
    return response


@router.post("/cleanup", response_model=CleanupInvitesResponse)
async def cleanup_invites(
    cleanup_invites_use_case: FromDishka[CleanupInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CleanupInvitesResponse:
    """Purge expired invites that were never redeemed."""
    _authenticate(jwt_service, auth_token)
    return await cleanup_invites_use_case.execute()
