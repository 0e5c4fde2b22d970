"""
FTP Transport
=============

Uploads the payload as a file to a printer's FTP server. The printer
prints every file dropped into its job folder.

Connection notes:
- Passive mode is forced.
- The address announced in the PASV reply is ignored and the data
  connection goes to the control host. Printers are usually reached
  through port forwarding, so the printer's own LAN address is not
  reachable from here.
"""

import logging
import time
from ftplib import FTP
from io import BytesIO
from typing import Optional

from .base import BaseTransport
from .context import TransportContext
from ..config import FTP_PORT, FTP_TIMEOUT
from ..exceptions import ConfigurationError, TransportError
from ..media import PrintableMedia
from ..result import PrintingResult

logger = logging.getLogger(__name__)

TRANSFER_ASCII = 'ascii'
TRANSFER_BINARY = 'binary'
TRANSFER_MODES = (TRANSFER_ASCII, TRANSFER_BINARY)


class FTPTransport(BaseTransport):
    """Transport for printers that accept jobs via FTP upload."""

    protocol = 'ftp'

    def __init__(self, host: str, port: int = FTP_PORT,
                 username: Optional[str] = None, password: Optional[str] = None,
                 transfer_mode: str = TRANSFER_ASCII, timeout: int = FTP_TIMEOUT,
                 context: Optional[TransportContext] = None):
        super().__init__(context)

        if not host:
            raise ConfigurationError('Printer host not configured')
        if transfer_mode not in TRANSFER_MODES:
            raise ConfigurationError(f'Invalid transfer mode {transfer_mode!r}. Valid: {list(TRANSFER_MODES)}')

        self.host = host
        self.port = port or FTP_PORT
        self.username = username
        self.password = password
        self.transfer_mode = transfer_mode
        self.timeout = timeout

    def _payload_buffer(self, payload) -> BytesIO:
        """Write the payload into an in-memory file, rewound for reading."""
        if isinstance(payload, str):
            payload = payload.encode('utf-8')

        buffer = BytesIO()
        if not payload or not buffer.write(payload):
            raise TransportError('Unable to write the payload to a temporary buffer')

        buffer.seek(0)
        return buffer

    def _remote_filename(self) -> str:
        return f'remote-{time.time():.4f}.txt'

    def _transport(self, media: PrintableMedia) -> PrintingResult:
        result = PrintingResult()

        try:
            payload = media.get_print_payload()
            buffer = self._payload_buffer(payload)
            result.add_data('payload', payload)

            logger.info('FTP print request to %s:%s', self.host, self.port)

            # The context manager sends QUIT and closes the socket on every path
            with FTP(timeout=self.timeout) as ftp:
                ftp.connect(self.host, self.port, timeout=self.timeout)
                ftp.login(self.username or '', self.password or '')

                ftp.trust_server_pasv_ipv4_address = False
                ftp.set_pasv(True)

                remote_file = self._remote_filename()
                result.add_data('remoteFile', remote_file)

                if self.transfer_mode == TRANSFER_BINARY:
                    ftp.storbinary(f'STOR {remote_file}', buffer)
                else:
                    # storlines rejects lines longer than maxline
                    ftp.maxline = max(ftp.maxline, len(buffer.getvalue()) + 1)
                    ftp.storlines(f'STOR {remote_file}', buffer)

            result.set_successful(True)
            logger.info('FTP upload of %s to %s:%s complete', remote_file, self.host, self.port)

        except TimeoutError as e:
            logger.warning('FTP timeout to %s:%s', self.host, self.port)
            self._record_failure(result, f'Connection timeout to {self.host}:{self.port}', e)
        except ConnectionRefusedError as e:
            logger.warning('FTP connection refused by %s:%s', self.host, self.port)
            self._record_failure(result, f'Connection refused by {self.host}:{self.port}', e)
        except Exception as e:
            logger.warning('FTP print to %s:%s failed: %s', self.host, self.port, e)
            self._record_failure(result, str(e), e)

        return result
