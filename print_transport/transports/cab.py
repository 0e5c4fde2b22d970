"""
CAB Transport
=============

Transport for the CAB SQUIX printer series. Labels have to be configured
for the specific printer before rendering, so this builds on the plain
FTP transport and injects the device config into the media first.
"""

from typing import TYPE_CHECKING, Optional

from .context import TransportContext
from .ftp import FTPTransport, TRANSFER_ASCII
from ..config import FTP_PORT, FTP_TIMEOUT
from ..exceptions import ConfigurationError
from ..media import Capability, PrintableMedia
from ..result import PrintingResult

if TYPE_CHECKING:
    from ..printers.ftp import CABPrinterConfig


class CABTransport(FTPTransport):
    """FTP transport that configures CAB labels for the target device."""

    protocol = 'ftp'
    required_capabilities = frozenset({Capability.PAYLOAD, Capability.DEVICE_GEOMETRY})

    def __init__(self, host: str, device_config: 'CABPrinterConfig', port: int = FTP_PORT,
                 username: Optional[str] = None, password: Optional[str] = None,
                 transfer_mode: str = TRANSFER_ASCII, timeout: int = FTP_TIMEOUT,
                 context: Optional[TransportContext] = None):
        super().__init__(host, port, username, password, transfer_mode, timeout, context)

        if device_config is None:
            raise ConfigurationError('CAB transport requires the device configuration')

        self.device_config = device_config

    def _transport(self, media: PrintableMedia) -> PrintingResult:
        media.configure_media(self.device_config)
        return super()._transport(media)
