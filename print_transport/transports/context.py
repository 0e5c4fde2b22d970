"""
Transport Context
=================

Settings shared by every transport built for one caller: development
mode, the OAuth token cache for cloud printers, the Epson host override
and TLS verification. Passing the same context to several transports is
how they share a token.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from google.auth.transport.requests import Request
from google.oauth2 import service_account

from .. import config
from ..exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class OAuthTokenCache:
    """Lazily loaded service-account credentials, refreshed only when expired."""

    def __init__(self, key_file: Optional[str], scopes: Optional[List[str]] = None):
        self.key_file = key_file
        self.scopes = scopes or list(config.GOOGLE_CLOUD_SCOPES)
        self._credentials = None

    def _load_credentials(self):
        if not self.key_file:
            raise ConfigurationError('No service-account key file configured for cloud printing')

        return service_account.Credentials.from_service_account_file(
            self.key_file, scopes=self.scopes
        )

    def token(self) -> str:
        """Return a valid bearer token, refreshing it if needed."""
        if self._credentials is None:
            self._credentials = self._load_credentials()

        # valid is False when there is no token yet or it has expired
        if not self._credentials.valid:
            logger.info('Refreshing OAuth access token')
            self._credentials.refresh(Request())

        token = self._credentials.token
        if not token:
            raise TransportError('No access token in credentials response')

        return token


@dataclass
class TransportContext:
    """Explicit replacement for process-wide transport settings."""

    dummy_mode: bool = False
    token_cache: Optional[OAuthTokenCache] = None
    epson_host_override: Optional[str] = None
    verify_tls: Union[bool, str] = True

    @classmethod
    def from_config(cls) -> 'TransportContext':
        """Build a context from the service configuration."""
        token_cache = None
        if config.GOOGLE_KEY_FILE:
            token_cache = OAuthTokenCache(config.GOOGLE_KEY_FILE)

        return cls(
            dummy_mode=config.DUMMY_MODE,
            token_cache=token_cache,
            epson_host_override=config.EPSON_HOST_OVERRIDE,
            verify_tls=config.VERIFY_TLS,
        )
