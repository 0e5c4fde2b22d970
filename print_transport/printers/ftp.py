"""
FTP Printer Configurations
==========================

Printers that receive jobs as files uploaded over FTP: CAB SQUIX label
printers and generic FTP drop folders.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import PrinterConfig, Prompter, is_ip_address, is_number
from ..config import FTP_PORT
from ..media import MEDIA_BARCODE_LABEL, PrintableMedia
from ..media.cab_label import HEIGHT_ENDLESS, LABEL_ENDLESS, LABEL_FIXED
from ..media.test_documents import CABTestDocument, FTPTestDocument
from ..transports import CABTransport, FTPTransport, TransportContext
from ..transports.ftp import TRANSFER_ASCII, TRANSFER_MODES


def _value_or(params: Dict[str, Any], key: str, default):
    """Stored value, or default when missing or null (0 is a real value)."""
    value = params.get(key)
    return default if value is None else value


@dataclass
class FTPPrinterConfig(PrinterConfig):
    """Connection settings shared by every FTP printer."""

    host: Optional[str] = None
    port: int = FTP_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    transfer_mode: str = TRANSFER_ASCII

    transport_class = FTPTransport

    @classmethod
    def _connection_from_dict(cls, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'host': params.get('host'),
            'port': params.get('port', FTP_PORT),
            'username': params.get('username'),
            'password': params.get('password'),
            'transfer_mode': params.get('transfer_mode') or TRANSFER_ASCII,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'host': self.host,
            'port': self.port,
            'username': self.username,
            'password': self.password,
            'transfer_mode': self.transfer_mode,
        }

    def validation_errors(self) -> List[str]:
        errors = []
        if not is_ip_address(self.host):
            errors.append(f'host must be an IP address, got {self.host!r}')
        if isinstance(self.port, bool) or not isinstance(self.port, int) or self.port <= 0:
            errors.append(f'port must be a positive integer, got {self.port!r}')
        if not isinstance(self.username, str) or not self.username:
            errors.append('username required')
        if not isinstance(self.password, str) or not self.password:
            errors.append('password required')
        if self.transfer_mode not in TRANSFER_MODES:
            errors.append(f'transfer_mode must be one of {list(TRANSFER_MODES)}')
        return errors

    def configure(self, prompter: Prompter) -> None:
        self.host = prompter.ask('Enter host', self.host)
        self.port = int(prompter.ask('Enter port', self.port))
        self.username = prompter.ask('Enter username', self.username)
        self.password = prompter.ask('Enter password', self.password)


@dataclass
class GenericFTPPrinterConfig(FTPPrinterConfig):
    """Any printer with an FTP job folder; prints the media types it is told to."""

    media_types: int = int(MEDIA_BARCODE_LABEL)

    kind = 'ftp'

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'GenericFTPPrinterConfig':
        return cls(
            media_types=int(params.get('media_types', MEDIA_BARCODE_LABEL)),
            **cls._connection_from_dict(params),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['media_types'] = self.media_types
        return data

    def _build_transport(self, context: Optional[TransportContext]) -> FTPTransport:
        return FTPTransport(
            self.host, self.port, self.username, self.password,
            transfer_mode=self.transfer_mode, context=context,
        )

    def can_print(self, media: PrintableMedia) -> bool:
        return (media.media_type_flag & self.media_types) != 0

    def get_test_document(self) -> FTPTestDocument:
        return FTPTestDocument(self)

    def configure(self, prompter: Prompter) -> None:
        super().configure(prompter)
        self.transfer_mode = prompter.choice('Transfer Mode', {
            'ascii': 'ASCII',
            'binary': 'Binary',
        }, self.transfer_mode)


@dataclass
class CABPrinterConfig(FTPPrinterConfig):
    """
    CAB printers print onto thermal adhesive labels, using their own
    label language (see media.cab_label).
    """

    label_type: str = LABEL_ENDLESS
    height: int = HEIGHT_ENDLESS
    width: int = 20
    heat: int = 75

    kind = 'cab'
    transport_class = CABTransport

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'CABPrinterConfig':
        return cls(
            label_type=params.get('type') or LABEL_ENDLESS,
            height=_value_or(params, 'height', HEIGHT_ENDLESS),
            width=_value_or(params, 'width', 20),
            heat=_value_or(params, 'heat', 75),
            **cls._connection_from_dict(params),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'type': self.label_type,
            'height': self.height,
            'width': self.width,
            'heat': self.heat,
        })
        return data

    def validation_errors(self) -> List[str]:
        errors = super().validation_errors()
        if self.label_type not in (LABEL_ENDLESS, LABEL_FIXED):
            errors.append(f'label type must be {LABEL_ENDLESS!r} or {LABEL_FIXED!r}')
        if not is_number(self.width) or float(self.width) <= 0:
            errors.append('label width must be a positive number')
        if not is_number(self.heat):
            errors.append('heat must be numeric')
        return errors

    def _build_transport(self, context: Optional[TransportContext]) -> CABTransport:
        return CABTransport(
            self.host, self, self.port, self.username, self.password,
            transfer_mode=self.transfer_mode, context=context,
        )

    def can_print(self, media: PrintableMedia) -> bool:
        return media.media_type_flag == MEDIA_BARCODE_LABEL

    def get_test_document(self) -> CABTestDocument:
        return CABTestDocument()

    def configure(self, prompter: Prompter) -> None:
        super().configure(prompter)

        self.label_type = prompter.choice('Label Type', {
            LABEL_ENDLESS: 'Endless',
            LABEL_FIXED: 'Fixed',
        }, self.label_type)

        if self.label_type == LABEL_FIXED:
            self.height = int(prompter.ask('Label Height'))
        else:
            self.height = HEIGHT_ENDLESS

        self.width = int(prompter.ask('Label Width', self.width))
        self.heat = int(prompter.ask('Default Heat', self.heat))
