from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Mapping, Optional
import os


UNSET = -1
DEFAULT_MAX_RETRIES = 4
DEFAULT_EXPONENTIAL_RETRY_INTERVAL = 1000
DEFAULT_EXPONENTIAL_FACTOR = 4

_TRUTHY = {"1", "true", "yes", "on"}


class SSLChannelMode(str, Enum):
    """Strategies for building the secure channel to the store."""

    OPENSSL = "OpenSSL"
    DEFAULT = "Default"
    DEFAULT_JSSE = "Default_JSSE"

    @classmethod
    def resolve(cls, name: Optional[str]) -> "SSLChannelMode":
        """Case-insensitive lookup by canonical name, falling back to DEFAULT."""
        wanted = (name or "").lower()
        for mode in cls:
            if mode.value.lower() == wanted:
                return mode
        return cls.DEFAULT


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


class StoreOptions:
    """Options that shape the behavior of a StoreClient.

    Populate once, hand to the client, then treat as read-only. Setters
    return ``self`` so calls can be chained::

        opts = StoreOptions().set_user_agent_suffix("etl").set_max_retries(7)
    """

    def __init__(self) -> None:
        self._user_agent_suffix: Optional[str] = None
        self._insecure_transport = False
        self._remote_exceptions_enabled = False
        self._file_path_prefix: Optional[str] = None
        # UNSET lets the input stream pick its own depth
        self._read_ahead_queue_depth = UNSET
        self._default_timeout = UNSET
        self._alter_cipher_suites = True
        self._ssl_channel_mode = SSLChannelMode.DEFAULT
        self._max_retries = DEFAULT_MAX_RETRIES
        self._exponential_retry_interval = DEFAULT_EXPONENTIAL_RETRY_INTERVAL
        self._exponential_factor = DEFAULT_EXPONENTIAL_FACTOR
        self._conditional_create_enabled = False

    # ---------------------------
    # Setters
    # ---------------------------
    def set_user_agent_suffix(self, suffix: Optional[str]) -> StoreOptions:
        """Text appended to the User-Agent header of every request."""
        self._user_agent_suffix = suffix
        return self

    def set_insecure_transport(self) -> StoreOptions:
        """Use http instead of https. Meant for mock or fake servers only.

        There is no way back: once set, the flag stays on.
        """
        self._insecure_transport = True
        return self

    def enable_throwing_remote_exceptions(self) -> StoreOptions:
        """Raise the server-named exception type instead of StoreError."""
        self._remote_exceptions_enabled = True
        return self

    def set_file_path_prefix(self, prefix: Optional[str]) -> StoreOptions:
        """Prefix prepended to every path, scoping the client to a subtree."""
        self._file_path_prefix = prefix
        return self

    def set_read_ahead_queue_depth(self, queue_depth: int) -> StoreOptions:
        """Read-ahead depth for file input streams; 0 disables read-ahead."""
        if queue_depth < 0:
            raise ValueError("Queue depth has to be 0 or more")
        self._read_ahead_queue_depth = queue_depth
        return self

    def set_default_timeout(self, timeout_ms: int) -> StoreOptions:
        self._default_timeout = timeout_ms
        return self

    def set_alter_cipher_suites(self, alter: bool) -> StoreOptions:
        """Deprioritize AES-GCM suites when building the TLS context."""
        self._alter_cipher_suites = alter
        return self

    def set_ssl_channel_mode(self, name: Optional[str]) -> StoreOptions:
        self._ssl_channel_mode = SSLChannelMode.resolve(name)
        return self

    def set_max_retries(self, max_retries: int) -> StoreOptions:
        self._max_retries = max_retries
        return self

    def set_exponential_retry_interval(self, interval_ms: int) -> StoreOptions:
        self._exponential_retry_interval = interval_ms
        return self

    def set_exponential_factor(self, factor: int) -> StoreOptions:
        self._exponential_factor = factor
        return self

    def set_enable_conditional_create(self, enabled: bool) -> StoreOptions:
        self._conditional_create_enabled = enabled
        return self

    # ---------------------------
    # Accessors
    # ---------------------------
    @property
    def user_agent_suffix(self) -> Optional[str]:
        return self._user_agent_suffix

    @property
    def insecure_transport(self) -> bool:
        return self._insecure_transport

    @property
    def remote_exceptions_enabled(self) -> bool:
        return self._remote_exceptions_enabled

    @property
    def file_path_prefix(self) -> Optional[str]:
        return self._file_path_prefix

    @property
    def read_ahead_queue_depth(self) -> int:
        return self._read_ahead_queue_depth

    @property
    def default_timeout(self) -> int:
        return self._default_timeout

    @property
    def alter_cipher_suites(self) -> bool:
        return self._alter_cipher_suites

    @property
    def ssl_channel_mode(self) -> SSLChannelMode:
        return self._ssl_channel_mode

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def exponential_retry_interval(self) -> int:
        return self._exponential_retry_interval

    @property
    def exponential_factor(self) -> int:
        return self._exponential_factor

    @property
    def conditional_create_enabled(self) -> bool:
        return self._conditional_create_enabled

    # ---------------------------
    # Loading and display
    # ---------------------------
    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> StoreOptions:
        """Build options from loosely typed key/value input. Unknown keys are ignored."""
        opts = cls()
        if values.get("user_agent_suffix") is not None:
            opts.set_user_agent_suffix(str(values["user_agent_suffix"]))
        if _as_bool(values.get("insecure_transport", False)):
            opts.set_insecure_transport()
        if _as_bool(values.get("remote_exceptions", False)):
            opts.enable_throwing_remote_exceptions()
        if values.get("file_path_prefix") is not None:
            opts.set_file_path_prefix(str(values["file_path_prefix"]))
        if values.get("read_ahead_queue_depth") is not None:
            opts.set_read_ahead_queue_depth(int(values["read_ahead_queue_depth"]))
        if values.get("default_timeout") is not None:
            opts.set_default_timeout(int(values["default_timeout"]))
        if values.get("alter_cipher_suites") is not None:
            opts.set_alter_cipher_suites(_as_bool(values["alter_cipher_suites"]))
        if values.get("ssl_channel_mode") is not None:
            opts.set_ssl_channel_mode(str(values["ssl_channel_mode"]))
        if values.get("max_retries") is not None:
            opts.set_max_retries(int(values["max_retries"]))
        if values.get("exponential_retry_interval") is not None:
            opts.set_exponential_retry_interval(int(values["exponential_retry_interval"]))
        if values.get("exponential_factor") is not None:
            opts.set_exponential_factor(int(values["exponential_factor"]))
        if values.get("conditional_create") is not None:
            opts.set_enable_conditional_create(_as_bool(values["conditional_create"]))
        return opts

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "ADL_") -> StoreOptions:
        env = os.environ if environ is None else environ
        values = {k[len(prefix):].lower(): v for k, v in env.items() if k.startswith(prefix)}
        return cls.from_mapping(values)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "user_agent_suffix": self._user_agent_suffix,
            "insecure_transport": self._insecure_transport,
            "remote_exceptions": self._remote_exceptions_enabled,
            "file_path_prefix": self._file_path_prefix,
            "read_ahead_queue_depth": self._read_ahead_queue_depth,
            "default_timeout": self._default_timeout,
            "alter_cipher_suites": self._alter_cipher_suites,
            "ssl_channel_mode": self._ssl_channel_mode.value,
            "max_retries": self._max_retries,
            "exponential_retry_interval": self._exponential_retry_interval,
            "exponential_factor": self._exponential_factor,
            "conditional_create": self._conditional_create_enabled,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"StoreOptions({fields})"
