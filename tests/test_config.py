import pytest

from adl_store.config import (
    DEFAULT_EXPONENTIAL_FACTOR,
    DEFAULT_EXPONENTIAL_RETRY_INTERVAL,
    DEFAULT_MAX_RETRIES,
    UNSET,
    SSLChannelMode,
    StoreOptions,
)


class TestDefaults:
    """A fresh StoreOptions is usable without any setter."""

    def test_documented_defaults(self):
        opts = StoreOptions()
        assert opts.max_retries == 4 == DEFAULT_MAX_RETRIES
        assert opts.exponential_retry_interval == 1000 == DEFAULT_EXPONENTIAL_RETRY_INTERVAL
        assert opts.exponential_factor == 4 == DEFAULT_EXPONENTIAL_FACTOR
        assert opts.alter_cipher_suites is True
        assert opts.ssl_channel_mode is SSLChannelMode.DEFAULT
        assert opts.user_agent_suffix is None
        assert opts.file_path_prefix is None
        assert opts.read_ahead_queue_depth == UNSET == -1
        assert opts.default_timeout == UNSET
        assert opts.insecure_transport is False
        assert opts.remote_exceptions_enabled is False
        assert opts.conditional_create_enabled is False

    def test_accessors_are_read_only(self):
        opts = StoreOptions()
        with pytest.raises(AttributeError):
            opts.insecure_transport = False


class TestReadAheadQueueDepth:
    @pytest.mark.parametrize("depth", [0, 1, 4, 1000])
    def test_non_negative_round_trips(self, depth):
        assert StoreOptions().set_read_ahead_queue_depth(depth).read_ahead_queue_depth == depth

    @pytest.mark.parametrize("depth", [-1, -5])
    def test_negative_rejected_and_value_kept(self, depth):
        opts = StoreOptions().set_read_ahead_queue_depth(3)
        with pytest.raises(ValueError):
            opts.set_read_ahead_queue_depth(depth)
        assert opts.read_ahead_queue_depth == 3

    def test_negative_on_fresh_instance_keeps_unset(self):
        opts = StoreOptions()
        with pytest.raises(ValueError):
            opts.set_read_ahead_queue_depth(-2)
        assert opts.read_ahead_queue_depth == UNSET


class TestSSLChannelMode:
    @pytest.mark.parametrize("name", ["default", "DEFAULT", "Default", "dEfAuLt"])
    def test_default_any_case(self, name):
        assert SSLChannelMode.resolve(name) is SSLChannelMode.DEFAULT

    @pytest.mark.parametrize("name", ["openssl", "OPENSSL", "OpenSSL"])
    def test_openssl_any_case(self, name):
        assert SSLChannelMode.resolve(name) is SSLChannelMode.OPENSSL

    def test_jsse(self):
        assert SSLChannelMode.resolve("default_jsse") is SSLChannelMode.DEFAULT_JSSE

    @pytest.mark.parametrize("name", ["", "bogus-mode", "open ssl", None])
    def test_unknown_falls_back_to_default(self, name):
        assert SSLChannelMode.resolve(name) is SSLChannelMode.DEFAULT

    def test_setter_normalizes_without_error(self):
        opts = StoreOptions().set_ssl_channel_mode("OpenSSL")
        opts.set_ssl_channel_mode("nonsense")
        assert opts.ssl_channel_mode is SSLChannelMode.DEFAULT

    def test_declared_order(self):
        assert [m.value for m in SSLChannelMode] == ["OpenSSL", "Default", "Default_JSSE"]


class TestSetters:
    def test_insecure_transport_sticks(self):
        opts = StoreOptions().set_insecure_transport()
        assert opts.insecure_transport is True
        opts.set_insecure_transport()
        assert opts.insecure_transport is True
        assert not hasattr(opts, "set_secure_transport")

    def test_chaining_returns_same_instance(self):
        opts = StoreOptions()
        assert opts.set_user_agent_suffix("x").set_max_retries(7) is opts
        assert opts.user_agent_suffix == "x"
        assert opts.max_retries == 7

    def test_order_independent(self):
        a = StoreOptions().set_max_retries(2).set_file_path_prefix("/p").set_default_timeout(500)
        b = StoreOptions().set_default_timeout(500).set_file_path_prefix("/p").set_max_retries(2)
        assert a.as_dict() == b.as_dict()

    def test_retry_fields_accept_anything(self):
        opts = StoreOptions().set_max_retries(-3).set_exponential_retry_interval(0).set_exponential_factor(-1)
        assert (opts.max_retries, opts.exponential_retry_interval, opts.exponential_factor) == (-3, 0, -1)

    def test_every_setter_chains(self):
        opts = StoreOptions()
        result = (
            opts.set_user_agent_suffix("ua")
            .set_insecure_transport()
            .enable_throwing_remote_exceptions()
            .set_file_path_prefix("/scope")
            .set_read_ahead_queue_depth(2)
            .set_default_timeout(1500)
            .set_alter_cipher_suites(False)
            .set_ssl_channel_mode("openssl")
            .set_max_retries(1)
            .set_exponential_retry_interval(10)
            .set_exponential_factor(2)
            .set_enable_conditional_create(True)
        )
        assert result is opts
        assert opts.remote_exceptions_enabled is True
        assert opts.alter_cipher_suites is False
        assert opts.conditional_create_enabled is True

    def test_end_to_end_scenario(self):
        opts = StoreOptions().set_max_retries(10).set_read_ahead_queue_depth(0).set_ssl_channel_mode("openssl")
        assert opts.max_retries == 10
        assert opts.read_ahead_queue_depth == 0
        assert opts.ssl_channel_mode is SSLChannelMode.OPENSSL
        d = opts.as_dict()
        untouched = StoreOptions().as_dict()
        for key in ("user_agent_suffix", "insecure_transport", "default_timeout", "exponential_factor",
                    "exponential_retry_interval", "alter_cipher_suites", "conditional_create"):
            assert d[key] == untouched[key]


class TestLoading:
    def test_from_mapping(self):
        opts = StoreOptions.from_mapping({
            "user_agent_suffix": "job-42",
            "insecure_transport": "TRUE",
            "read_ahead_queue_depth": "0",
            "ssl_channel_mode": "OPENSSL",
            "max_retries": "9",
            "alter_cipher_suites": "no",
            "conditional_create": "1",
            "unrelated": "ignored",
        })
        assert opts.user_agent_suffix == "job-42"
        assert opts.insecure_transport is True
        assert opts.read_ahead_queue_depth == 0
        assert opts.ssl_channel_mode is SSLChannelMode.OPENSSL
        assert opts.max_retries == 9
        assert opts.alter_cipher_suites is False
        assert opts.conditional_create_enabled is True

    def test_from_mapping_bad_mode_normalizes(self):
        assert StoreOptions.from_mapping({"ssl_channel_mode": "tls9"}).ssl_channel_mode is SSLChannelMode.DEFAULT

    def test_from_mapping_negative_depth_raises(self):
        with pytest.raises(ValueError):
            StoreOptions.from_mapping({"read_ahead_queue_depth": "-1"})

    def test_from_env(self):
        env = {"ADL_MAX_RETRIES": "2", "ADL_FILE_PATH_PREFIX": "/data", "HOME": "/root"}
        opts = StoreOptions.from_env(env)
        assert opts.max_retries == 2
        assert opts.file_path_prefix == "/data"

    def test_repr_lists_fields(self):
        assert "ssl_channel_mode='Default'" in repr(StoreOptions())
