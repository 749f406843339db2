import pytest
from src.app.services.email_templates import PlatformSettings, render_notification
from src.domain import NotificationKind

SETTINGS = PlatformSettings(
    platform_name="Zuvomo",
    frontend_url="https://zuvomo.example/",
    support_email="support@zuvomo.example",
)


def test_welcome_links_role_dashboard():
    email = render_notification(
        NotificationKind.user_welcome, {"first_name": "Ada", "role": "project_owner"}, SETTINGS
    )

    assert email.subject == "Welcome to Zuvomo - Your Account is Approved!"
    assert "Welcome to Zuvomo, Ada!" in email.text_body
    assert "https://zuvomo.example/project-owner" in email.html_body


def test_welcome_without_name():
    email = render_notification("user_welcome", {}, SETTINGS)

    assert "Welcome to Zuvomo!" in email.text_body
    assert "/investor" in email.text_body


def test_rejection_includes_reason():
    email = render_notification(
        NotificationKind.user_rejection, {"reason": "Incomplete profile"}, SETTINGS
    )

    assert "Reason: Incomplete profile" in email.text_body
    assert "support@zuvomo.example" in email.text_body


def test_project_rejected_escapes_html():
    email = render_notification(
        NotificationKind.project_rejected,
        {"project_title": "<b>Kit</b>", "reason": "Needs work"},
        SETTINGS,
    )

    assert "&lt;b&gt;Kit&lt;/b&gt;" in email.html_body
    assert "<b>Kit</b>" in email.text_body


def test_project_approved_links_project():
    email = render_notification(
        NotificationKind.project_approved,
        {"project_title": "Solar", "project_id": "project-1"},
        SETTINGS,
    )

    assert "https://zuvomo.example/projects/project-1" in email.text_body


def test_unknown_kind():
    with pytest.raises(KeyError):
        render_notification("newsletter", {}, SETTINGS)
