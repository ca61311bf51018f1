from __future__ import annotations
from typing import Optional
import logging
import ssl

from .config import StoreOptions, SSLChannelMode


log = logging.getLogger("adl.store.ssl")

# AES-GCM suites go last in the TLS 1.2 preference order
ALTERED_CIPHERS = "DEFAULT:!aNULL:!eNULL:!MD5:!RC4:!3DES:+AESGCM"


def build_ssl_context(options: StoreOptions) -> Optional[ssl.SSLContext]:
    """Return the TLS context for the configured channel mode, or None for plain http."""
    if options.insecure_transport:
        return None
    ctx = ssl.create_default_context()
    mode = options.ssl_channel_mode
    if mode is not SSLChannelMode.DEFAULT_JSSE and options.alter_cipher_suites:
        ctx.set_ciphers(ALTERED_CIPHERS)
        log.debug("SSL context | mode=%s | ciphers=altered", mode.value)
    else:
        log.debug("SSL context | mode=%s | ciphers=default", mode.value)
    return ctx
