"""Unit tests for email configuration, composition, transport and alert sinks."""

import smtplib

import pytest

from deskmate.contexts.notifications import (
    ConsoleAlertSink,
    DesktopAlertSink,
    EmailConfig,
    EmailDeliveryError,
    EmailDispatcher,
    SmtpTransport,
    build_reminder_email,
    load_email_config,
    save_email_config,
)
from deskmate.utils.validation import ValidationError


class FakeSMTP:
    """Stand-in for smtplib.SMTP / SMTP_SSL that records what happened."""

    instances = []
    fail_login = False

    def __init__(self, host, port, context=None, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.tls = False
        self.login_args = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.tls = True

    def login(self, user, password):
        if FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"Bad credentials")
        self.login_args = (user, password)

    def send_message(self, msg):
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_login = False
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def config():
    return EmailConfig(enabled=True, email="me@example.com", password="abcd efgh", service="gmail")


class TestEmailConfig:
    """Stored configuration record."""

    @pytest.mark.unit
    def test_missing_record_is_disabled(self):
        config = EmailConfig.from_dict(None)
        assert config.enabled is False
        assert config.service == "gmail"

    @pytest.mark.unit
    def test_round_trip_dict(self, config):
        assert EmailConfig.from_dict(config.to_dict()) == config

    @pytest.mark.unit
    def test_enabled_requires_credentials(self):
        with pytest.raises(ValidationError) as exc_info:
            EmailConfig(enabled=True, email="me@example.com", password="").validate()
        assert exc_info.value.message == "Please enter email and password"

    @pytest.mark.unit
    def test_disabled_without_credentials_is_valid(self):
        EmailConfig(enabled=False).validate()

    @pytest.mark.unit
    def test_unknown_service_rejected(self):
        with pytest.raises(ValidationError):
            EmailConfig(enabled=False, service="aol").validate()

    @pytest.mark.unit
    def test_save_and_load(self, repo, config, activity_log):
        save_email_config(repo, config)

        assert load_email_config(repo) == config
        assert repo.get()["emailConfig"]["service"] == "gmail"
        assert "email_config_saved" in activity_log.read_text()

    @pytest.mark.unit
    def test_invalid_config_not_stored(self, repo):
        with pytest.raises(ValidationError):
            save_email_config(repo, EmailConfig(enabled=True))
        assert repo.get()["emailConfig"] is None


class TestBuildReminderEmail:
    """Composition of the HTML reminder email."""

    @pytest.mark.unit
    def test_headers(self, make_reminder, config):
        msg = build_reminder_email(make_reminder(), "50% time passed", config)

        assert msg["Subject"] == "Reminder: Submit lab report"
        assert msg["From"] == "me@example.com"
        assert msg["To"] == "me@example.com"

    @pytest.mark.unit
    def test_html_body(self, make_reminder, config):
        reminder = make_reminder(important=True, id="abc123")
        msg = build_reminder_email(reminder, "4 hour(s) left", config)

        html_body = msg.get_body(preferencelist=("html",)).get_content()
        assert "Reminder Alert" in html_body
        assert "4 hour(s) left" in html_body
        assert "Important: Yes" in html_body
        assert "reminder://done/abc123" in html_body

    @pytest.mark.unit
    def test_text_is_escaped_in_html(self, make_reminder, config):
        msg = build_reminder_email(make_reminder(text="<b>Rent</b> & bills"), "m", config)

        html_body = msg.get_body(preferencelist=("html",)).get_content()
        assert "&lt;b&gt;Rent&lt;/b&gt; &amp; bills" in html_body


class TestSmtpTransport:
    """smtplib wrapper."""

    @pytest.mark.unit
    def test_ssl_service(self, fake_smtp, make_reminder, config):
        msg = build_reminder_email(make_reminder(), "m", config)

        SmtpTransport(timeout=3).send(msg, config)

        server = fake_smtp.instances[0]
        assert (server.host, server.port, server.timeout) == ("smtp.gmail.com", 465, 3)
        assert server.tls is False
        assert server.login_args == ("me@example.com", "abcdefgh")
        assert server.sent == [msg]

    @pytest.mark.unit
    def test_starttls_service(self, fake_smtp, make_reminder, config):
        config.service = "outlook"
        SmtpTransport().send(build_reminder_email(make_reminder(), "m", config), config)

        server = fake_smtp.instances[0]
        assert (server.host, server.port) == ("smtp.office365.com", 587)
        assert server.tls is True

    @pytest.mark.unit
    def test_auth_failure_wrapped(self, fake_smtp, make_reminder, config):
        fake_smtp.fail_login = True

        with pytest.raises(EmailDeliveryError) as exc_info:
            SmtpTransport().send(build_reminder_email(make_reminder(), "m", config), config)

        assert exc_info.value.service == "gmail"
        assert isinstance(exc_info.value.original_error, smtplib.SMTPAuthenticationError)

    @pytest.mark.unit
    def test_unknown_service(self, make_reminder, config):
        config.service = "aol"
        with pytest.raises(EmailDeliveryError):
            SmtpTransport().send(build_reminder_email(make_reminder(), "m", config), config)


class TestEmailDispatcher:
    """Fire-and-forget delivery."""

    @pytest.mark.unit
    def test_dispatch_sends_in_background(self, make_reminder, config, transport):
        dispatcher = EmailDispatcher(transport=transport)

        future = dispatcher.dispatch(make_reminder(), "50% time passed", config)

        assert future.result(timeout=5) is True
        assert len(transport.sent) == 1
        dispatcher.shutdown()

    @pytest.mark.unit
    def test_failure_is_swallowed(self, make_reminder, config, failing_transport):
        dispatcher = EmailDispatcher(transport=failing_transport)

        future = dispatcher.dispatch(make_reminder(), "50% time passed", config)

        assert future.result(timeout=5) is False
        dispatcher.shutdown()

    @pytest.mark.unit
    def test_disabled_config_is_noop(self, make_reminder, transport):
        dispatcher = EmailDispatcher(transport=transport)

        assert dispatcher.dispatch(make_reminder(), "m", EmailConfig(enabled=False)) is None
        dispatcher.shutdown()
        assert transport.sent == []


class TestAlertSinks:
    """Local alert delivery."""

    @pytest.mark.unit
    def test_console_sink_prints(self, capsys):
        ConsoleAlertSink().notify("Reminder Alert", "Pay rent\n50% time passed", "normal")

        out = capsys.readouterr().out
        assert "Reminder Alert: Pay rent - 50% time passed" in out

    @pytest.mark.unit
    def test_desktop_sink_falls_back_without_notify_send(self, capsys):
        sink = DesktopAlertSink(command="deskmate-no-such-notifier")

        sink.notify("Reminder Alert", "Pay rent", "critical")

        assert sink.command is None
        assert "Pay rent" in capsys.readouterr().out

    @pytest.mark.unit
    def test_desktop_sink_invokes_command(self, monkeypatch):
        calls = []
        monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("subprocess.run", lambda args, **kwargs: calls.append(args))

        DesktopAlertSink().notify("Reminder Alert", "Pay rent", "bogus")

        assert calls == [
            [
                "/usr/bin/notify-send",
                "--urgency",
                "normal",
                "--app-name",
                "deskmate",
                "Reminder Alert",
                "Pay rent",
            ]
        ]

    @pytest.mark.unit
    def test_desktop_sink_failure_falls_back(self, monkeypatch, capsys):
        def broken_run(args, **kwargs):
            raise OSError("no display")

        monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("subprocess.run", broken_run)

        DesktopAlertSink().notify("Reminder Alert", "Pay rent", "normal")

        assert "Pay rent" in capsys.readouterr().out
