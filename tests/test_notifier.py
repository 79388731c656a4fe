"""Tests for NotificationDispatcher (SMTP mocked)."""

import smtplib
from unittest.mock import MagicMock

import pytest

from gistwatch.errors import DispatchError
from gistwatch.models import NotificationRequest
from gistwatch.services.notifier import NotificationDispatcher, build_message, helo_domain


@pytest.fixture
def request_() -> NotificationRequest:
    return NotificationRequest(
        recipient="me@example.com",
        sender="bot@gmail.com",
        password="secret",
        smtp_server="smtp.example.com",
    )


def _server() -> MagicMock:
    server = MagicMock()
    server.__enter__.return_value = server
    return server


class DisconnectAtQuitSMTP(smtplib.SMTP):
    """Real SMTP session object whose relay hangs up on QUIT."""

    def __init__(self, host: str, port: int, local_hostname: str | None = None) -> None:
        super().__init__(local_hostname=local_hostname or "localhost")
        self.sent: list = []
        self.closed = False

    def starttls(self, *args, **kwargs):
        return (220, b"ready")

    def login(self, user, password, **kwargs):
        return (235, b"ok")

    def send_message(self, msg, from_addr=None, to_addrs=None, **kwargs):
        self.sent.append((from_addr, to_addrs))
        return {}

    def docmd(self, cmd, args=""):
        if cmd.lower() == "quit":
            raise smtplib.SMTPServerDisconnected("Connection unexpectedly closed")
        return (250, b"ok")

    def close(self) -> None:
        self.closed = True


def test_build_message_headers(request_: NotificationRequest) -> None:
    """Message carries the fixed subject, sender, recipient and body."""
    msg = build_message(request_, "digest body")
    assert msg["Subject"] == "New comments on gists"
    assert msg["From"] == "bot@gmail.com"
    assert msg["To"] == "me@example.com"
    assert msg.get_payload(decode=True).decode("utf-8") == "digest body"


def test_send_starttls_login_and_send(request_: NotificationRequest) -> None:
    """send connects to server:587, upgrades to TLS, logs in, sends once, closes."""
    server = _server()
    factory = MagicMock(return_value=server)

    NotificationDispatcher(smtp_factory=factory).send(request_, "hello")

    factory.assert_called_once_with("smtp.example.com", 587, "gmail.com")
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("bot@gmail.com", "secret")
    server.send_message.assert_called_once()
    kwargs = server.send_message.call_args[1]
    assert kwargs["from_addr"] == "bot@gmail.com"
    assert kwargs["to_addrs"] == ["me@example.com"]
    server.__exit__.assert_called_once()
    names = [c[0] for c in server.method_calls]
    assert names.index("starttls") < names.index("login") < names.index("send_message")


def test_disconnect_at_quit_after_send_is_not_a_failure(request_: NotificationRequest) -> None:
    """A relay hanging up on QUIT after delivery does not fail the send."""
    sessions: list = []

    def factory(host: str, port: int, local_hostname: str | None) -> smtplib.SMTP:
        session = DisconnectAtQuitSMTP(host, port, local_hostname)
        sessions.append(session)
        return session

    NotificationDispatcher(smtp_factory=factory).send(request_, "hello")

    assert sessions[0].sent == [("bot@gmail.com", ["me@example.com"])]
    assert sessions[0].closed


def test_auth_failure_raises_dispatch_error(request_: NotificationRequest) -> None:
    """SMTP auth errors become DispatchError and the session is closed."""
    server = _server()
    server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

    with pytest.raises(DispatchError) as exc_info:
        NotificationDispatcher(smtp_factory=lambda *a: server).send(request_, "hello")

    assert "me@example.com" in str(exc_info.value)
    server.send_message.assert_not_called()
    server.__exit__.assert_called_once()


def test_connection_failure_raises_dispatch_error(request_: NotificationRequest) -> None:
    """Connection refused (OSError) becomes DispatchError."""
    factory = MagicMock(side_effect=ConnectionRefusedError("refused"))
    with pytest.raises(DispatchError):
        NotificationDispatcher(smtp_factory=factory).send(request_, "hello")
    factory.assert_called_once()


@pytest.mark.parametrize(
    "sender,expected",
    [("bot@gmail.com", "gmail.com"), ("a@b@mail.example.org", "mail.example.org"), ("nobody", None), ("x@", None)],
)
def test_helo_domain(sender: str, expected: str | None) -> None:
    """EHLO announces the sender's domain, or the default hostname without one."""
    assert helo_domain(sender) == expected


def test_password_not_in_repr(request_: NotificationRequest) -> None:
    """The sender credential is hidden from repr."""
    assert "secret" not in repr(request_)
