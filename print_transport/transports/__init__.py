"""
Print Transport Transports
==========================

Wire protocol transports for the different printer families.
"""

from .base import BaseTransport
from .context import OAuthTokenCache, TransportContext
from .ftp import FTPTransport
from .cab import CABTransport
from .epson import EpsonTransport, DUMMY_DEVICE_ID
from .google_cloud import GoogleCloudTransport
from .dummy import DummyTransport

__all__ = [
    'BaseTransport', 'OAuthTokenCache', 'TransportContext', 'FTPTransport', 'CABTransport',
    'EpsonTransport', 'DUMMY_DEVICE_ID', 'GoogleCloudTransport', 'DummyTransport',
]
