"""Configuration management."""

import os
from dataclasses import dataclass
from typing import List, Optional

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass  # python-dotenv is optional


@dataclass
class AgentConfig:
    """Text-generation agent configuration."""
    provider: str         # "gemini", "openai" or "generic_http"
    api_key: str
    model: str
    base_url: Optional[str]  # allow custom endpoint
    max_tokens: int
    temperature: float
    timeout_seconds: float = 120.0
    max_attempts: int = 2  # total calls per source, first attempt included


@dataclass
class SMTPConfig:
    """Outbound mail configuration."""
    host: str
    port: int
    username: Optional[str]
    password: Optional[str]   # or app-specific password
    use_ssl: bool


@dataclass
class TwilioConfig:
    """Twilio SMS configuration."""
    account_sid: str
    auth_token: str
    from_number: str
    to_number: str


@dataclass
class NotificationConfig:
    """Notification delivery configuration."""
    method: str = "email"  # "email" or "sms"
    to_email: Optional[str] = None
    from_name: str = "Opportunity Monitor"


@dataclass
class AppConfig:
    """Complete application configuration."""
    db_path: str
    agent: AgentConfig
    smtp: SMTPConfig
    twilio: Optional[TwilioConfig]
    notification: NotificationConfig


def _parse_list_env(key: str, default: List[str]) -> List[str]:
    """Parse comma-separated list from environment variable."""
    value = os.getenv(key, "")
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool_env(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _load_agent_config() -> AgentConfig:
    provider = os.getenv("AGENT_PROVIDER", "gemini").lower()
    api_key = os.getenv("AGENT_API_KEY") or os.getenv("GEMINI_API_KEY")

    return AgentConfig(
        provider=provider,
        api_key=api_key,
        model=os.getenv("AGENT_MODEL", "gemini-flash-lite-latest"),
        base_url=os.getenv("AGENT_BASE_URL"),
        max_tokens=int(os.getenv("AGENT_MAX_TOKENS", "4000")),
        temperature=float(os.getenv("AGENT_TEMPERATURE", "0.0")),
        timeout_seconds=float(os.getenv("AGENT_TIMEOUT", "120")),
        max_attempts=max(1, int(os.getenv("AGENT_MAX_ATTEMPTS", "2"))),
    )


def _load_twilio_config() -> Optional[TwilioConfig]:
    values = [
        os.getenv("TWILIO_ACCOUNT_SID"),
        os.getenv("TWILIO_AUTH_TOKEN"),
        os.getenv("TWILIO_FROM_NUMBER"),
        os.getenv("TWILIO_TO_NUMBER"),
    ]
    if not all(values):
        return None
    return TwilioConfig(*values)


def load_db_path() -> str:
    """Location of the seen-set database."""
    return os.getenv("DB_PATH", "monitor_oportunidades.db")


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Only the agent credentials are essential. Missing mail or SMS
    settings leave the corresponding channel unconfigured, which turns
    notification delivery into a no-op.

    Raises:
        ValueError: If required configuration values are missing.
    """
    db_path = load_db_path()

    agent = _load_agent_config()

    # Outbound mail. EMAIL_USER/EMAIL_PASS double as SMTP login.
    email_password = os.getenv("EMAIL_PASS")
    if email_password:
        # Gmail app passwords are often pasted with spaces
        email_password = email_password.replace(" ", "")
    smtp_port = int(os.getenv("SMTP_PORT", "587"))
    smtp = SMTPConfig(
        host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        port=smtp_port,
        username=os.getenv("EMAIL_USER"),
        password=email_password,
        use_ssl=_parse_bool_env("SMTP_USE_SSL", smtp_port == 465),
    )

    notification = NotificationConfig(
        method=os.getenv("NOTIFICATION_METHOD", "email").lower(),
        to_email=os.getenv("EMAIL_TO"),
        from_name=os.getenv("EMAIL_FROM_NAME", "Opportunity Monitor"),
    )

    missing = []
    if not agent.api_key:
        missing.append("AGENT_API_KEY (or GEMINI_API_KEY)")
    if agent.provider not in ("gemini", "openai", "generic_http"):
        raise ValueError(f"Unsupported AGENT_PROVIDER: {agent.provider}")
    if notification.method not in ("email", "sms"):
        raise ValueError(f"Unsupported NOTIFICATION_METHOD: {notification.method}")

    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return AppConfig(
        db_path=db_path,
        agent=agent,
        smtp=smtp,
        twilio=_load_twilio_config(),
        notification=notification,
    )


def enabled_source_names() -> List[str]:
    """Source names listed in MONITOR_SOURCES, empty meaning all."""
    return _parse_list_env("MONITOR_SOURCES", [])
