"""Invite use cases."""

from ledger.application.usecase.invite.cleanup_invites import (
    CleanupInvitesResponse,
    CleanupInvitesUseCase,
)
from ledger.application.usecase.invite.get_active_invites import (
    GetActiveInvitesRequest,
    GetActiveInvitesResponse,
    GetActiveInvitesUseCase,
)
from ledger.application.usecase.invite.issue_code import (
    IssueCodeRequest,
    IssueCodeResponse,
    IssueCodeUseCase,
)
from ledger.application.usecase.invite.issue_email_invites import (
    EmailInviteItem,
    IssueEmailInvitesRequest,
    IssueEmailInvitesResponse,
    IssueEmailInvitesUseCase,
    build_invite_link,
)
from ledger.application.usecase.invite.item import INVALID_INVITE_MESSAGE, InviteItem
from ledger.application.usecase.invite.redeem_invite import (
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)
from ledger.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "INVALID_INVITE_MESSAGE",
    "CleanupInvitesResponse",
    "CleanupInvitesUseCase",
    "EmailInviteItem",
    "GetActiveInvitesRequest",
    "GetActiveInvitesResponse",
    "GetActiveInvitesUseCase",
    "InviteItem",
    "IssueCodeRequest",
    "IssueCodeResponse",
    "IssueCodeUseCase",
    "IssueEmailInvitesRequest",
    "IssueEmailInvitesResponse",
    "IssueEmailInvitesUseCase",
    "RedeemInviteRequest",
    "RedeemInviteResponse",
    "RedeemInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
    "build_invite_link",
]
