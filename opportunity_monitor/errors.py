"""Error types raised by the monitoring pipeline."""


class MonitorError(Exception):
    """Base class for monitor failures."""


class ExtractionError(MonitorError):
    """Agent text did not contain a usable structured payload."""


class AgentCallError(MonitorError):
    """The text-generation call failed or timed out."""

    def __init__(self, source_name: str, message: str):
        super().__init__(f"[{source_name}] {message}")
        self.source_name = source_name


class StoreAccessError(MonitorError):
    """Reading from or writing to the seen-set failed."""


class ChannelError(MonitorError):
    """The notification could not be delivered."""
