"""Notification email templates.

Each renderer takes the job context plus platform settings and returns
the subject with HTML and plain-text bodies.
"""
from dataclasses import dataclass
from html import escape
from typing import Any, Dict, Callable
from src.domain.enums import NotificationKind, UserRole


@dataclass(frozen=True)
class PlatformSettings:
    platform_name: str
    frontend_url: str
    support_email: str


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html_body: str
    text_body: str


DASHBOARD_PATHS = {
    UserRole.project_owner.value: "/project-owner",
    UserRole.investor.value: "/investor",
    UserRole.admin.value: "/admin",
}


def _layout(settings: PlatformSettings, heading: str, paragraphs: list, link: tuple = None) -> str:
    body = "".join(f"<p>{escape(text)}</p>" for text in paragraphs)
    if link:
        label, url = link
        body += f'<p><a href="{escape(url)}">{escape(label)}</a></p>'
    return (
        "<!DOCTYPE html><html><body>"
        f"<h1>{escape(heading)}</h1>{body}"
        f"<p>Questions? Contact us at {escape(settings.support_email)}.</p>"
        f"<p>The {escape(settings.platform_name)} Team</p>"
        "</body></html>"
    )


def _text(settings: PlatformSettings, heading: str, paragraphs: list, link: tuple = None) -> str:
    lines = [heading, ""] + list(paragraphs)
    if link:
        lines.append(f"{link[0]}: {link[1]}")
    lines += ["", f"Questions? Contact us at {settings.support_email}.", f"The {settings.platform_name} Team"]
    return "\n".join(lines)


def _render(settings: PlatformSettings, subject: str, heading: str, paragraphs: list, link: tuple = None) -> RenderedEmail:
    return RenderedEmail(
        subject=subject,
        html_body=_layout(settings, heading, paragraphs, link),
        text_body=_text(settings, heading, paragraphs, link),
    )


def render_user_welcome(context: Dict[str, Any], settings: PlatformSettings) -> RenderedEmail:
    role = context.get("role") or UserRole.investor.value
    dashboard = settings.frontend_url.rstrip("/") + DASHBOARD_PATHS.get(role, "/")
    first_name = context.get("first_name")
    heading = f"Welcome to {settings.platform_name}"
    heading = f"{heading}, {first_name}!" if first_name else f"{heading}!"
    return _render(
        settings,
        f"Welcome to {settings.platform_name} - Your Account is Approved!",
        heading,
        [
            f"Great news! Your {settings.platform_name} account has been approved and is now active.",
            f"You can now access all the features available to {role.replace('_', ' ')}s on our platform.",
        ],
        ("Access your dashboard", dashboard),
    )


def render_user_rejection(context: Dict[str, Any], settings: PlatformSettings) -> RenderedEmail:
    return _render(
        settings,
        f"{settings.platform_name} Account Application Update",
        "Your application has been reviewed",
        [
            f"Thank you for your interest in {settings.platform_name}. "
            "After careful review we are unable to approve your account at this time.",
            f"Reason: {context.get('reason', '')}",
            "You are welcome to contact our support team if you have questions about this decision.",
        ],
    )


def render_project_approved(context: Dict[str, Any], settings: PlatformSettings) -> RenderedEmail:
    title = context.get("project_title", "your project")
    url = settings.frontend_url.rstrip("/") + f"/projects/{context.get('project_id', '')}"
    return _render(
        settings,
        f"Your project \"{title}\" is live on {settings.platform_name}",
        "Your project has been approved",
        [f"\"{title}\" has been reviewed and is now visible to investors."],
        ("View your project", url),
    )


def render_project_rejected(context: Dict[str, Any], settings: PlatformSettings) -> RenderedEmail:
    title = context.get("project_title", "your project")
    return _render(
        settings,
        f"Update on your project \"{title}\"",
        "Your project needs changes",
        [
            f"\"{title}\" was not approved for listing.",
            f"Reason: {context.get('reason', '')}",
            "You can update your project and submit it again for review.",
        ],
    )


RENDERERS: Dict[str, Callable[[Dict[str, Any], PlatformSettings], RenderedEmail]] = {
    NotificationKind.user_welcome.value: render_user_welcome,
    NotificationKind.user_rejection.value: render_user_rejection,
    NotificationKind.project_approved.value: render_project_approved,
    NotificationKind.project_rejected.value: render_project_rejected,
}


def render_notification(kind, context: Dict[str, Any], settings: PlatformSettings) -> RenderedEmail:
    """Render the email for a notification kind; unknown kinds raise KeyError"""
    key = kind.value if hasattr(kind, "value") else kind
    return RENDERERS[key](context or {}, settings)
