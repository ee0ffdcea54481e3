"""Invitation email content."""

from html import escape

from ledger.domain.model.invite import Invite

SUBJECT = "You're invited!"

_BODY = """\
<!DOCTYPE html>
<html>
<head>
    <title>{subject}</title>
</head>
<body>
    <h2>You're Invited to Join Our Platform</h2>

    <p>Hello,</p>

    <p>You've been invited to create an account on our platform. Click the link below to get started:</p>

    <p><a href="{link}" style="background-color: #007bff; color: white; padding: 10px 20px; text-decoration: none; border-radius: 4px; display: inline-block;">Accept Invitation</a></p>

    <p>Or copy and paste this link in your browser:</p>
    <p><code>{link}</code></p>

    <p>This invitation expires on {expires}.</p>

    <p>If you didn't expect this invitation, you can safely ignore this email.</p>

    <p>Best regards,<br>The Team</p>
</body>
</html>
"""


def render_invite_body(invite: Invite, link: str) -> str:
    """Render the HTML body of an invitation email.

    Args:
        invite: Email invite being delivered
        link: Registration link carrying the invite token

    Returns:
        HTML document
    """
    return _BODY.format(
        subject=escape(SUBJECT),
        link=escape(link, quote=True),
        expires=invite.expires_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
