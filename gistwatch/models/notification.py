"""Where and how to deliver the digest."""

from pydantic import BaseModel, ConfigDict, Field

from gistwatch.config import DEFAULT_SMTP_SERVER, SUBMISSION_PORT


class NotificationRequest(BaseModel):
    """Recipient, sender, sender credential and mail relay."""

    model_config = ConfigDict(frozen=True)

    recipient: str
    sender: str
    password: str = Field(default="", repr=False)
    smtp_server: str = DEFAULT_SMTP_SERVER
    smtp_port: int = SUBMISSION_PORT
