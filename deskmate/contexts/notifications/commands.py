"""Email configuration commands."""

from deskmate.contexts.notifications.email import EmailConfig
from deskmate.contexts.notifications.logger import _log_info
from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.utils.event_logging import log_activity_event


def load_email_config(repo: DocumentRepository) -> EmailConfig:
    """Read the stored email configuration (disabled if none is stored)."""
    return EmailConfig.from_dict(repo.get().get("emailConfig"))


def save_email_config(repo: DocumentRepository, config: EmailConfig) -> EmailConfig:
    """
    Validate and store the email configuration, replacing any previous one.

    Raises:
        ValidationError: If the configuration is incomplete
    """
    config.validate()

    document = repo.get()
    document["emailConfig"] = config.to_dict()
    repo.put(document)

    _log_info(f"Email notifications {'enabled' if config.enabled else 'disabled'} ({config.service})")
    log_activity_event(
        event_type="email_config_saved",
        subject_id=None,
        source="notifications",
        enabled=config.enabled,
        service=config.service,
    )
    return config
