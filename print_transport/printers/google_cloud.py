"""
Cloud Printer Configurations
============================

Printers reached through an OAuth-authenticated cloud print queue.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import PrinterConfig, Prompter, is_number
from ..config import GOOGLE_CLOUD_TIMEOUT
from ..media import MEDIA_NAMETAG_CARD, PrintableMedia
from ..media.test_documents import ZebraCardTestDocument
from ..transports import GoogleCloudTransport, TransportContext


@dataclass
class GoogleCloudPrinterConfig(PrinterConfig):
    """Queue address and timeout shared by cloud printers."""

    address: Optional[str] = None
    timeout: int = GOOGLE_CLOUD_TIMEOUT

    transport_class = GoogleCloudTransport

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'GoogleCloudPrinterConfig':
        instance = cls(address=params.get('address'))
        if 'timeout' in params:
            instance.timeout = params['timeout']
        return instance

    def to_dict(self) -> Dict[str, Any]:
        return {
            'address': self.address,
            'timeout': self.timeout,
        }

    def validation_errors(self) -> List[str]:
        errors = []
        if not isinstance(self.address, str) or not self.address:
            errors.append('address required')
        if not is_number(self.timeout):
            errors.append('timeout must be numeric')
        return errors

    def _build_transport(self, context: Optional[TransportContext]) -> GoogleCloudTransport:
        return GoogleCloudTransport(self.address, timeout=int(self.timeout), context=context)

    def configure(self, prompter: Prompter) -> None:
        while True:
            self.address = prompter.ask('Enter address', self.address)
            self.timeout = prompter.ask('Enter timeout', self.timeout)
            if isinstance(self.address, str) and self.address and is_number(self.timeout):
                break

        self.timeout = int(self.timeout)


@dataclass
class ZebraCardPrinterConfig(GoogleCloudPrinterConfig):
    """Zebra card printers; print anything that includes a name-tag card."""

    kind = 'zebra_card'

    def can_print(self, media: PrintableMedia) -> bool:
        return (media.media_type_flag & MEDIA_NAMETAG_CARD) != 0

    def get_test_document(self) -> ZebraCardTestDocument:
        return ZebraCardTestDocument()
