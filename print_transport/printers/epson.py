"""
Epson Printer Configuration
===========================

Epson TM receipt printers reached through ePOS-Print.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import PrinterConfig, Prompter, is_ip_address, is_number
from ..config import EPSON_PORT, EPSON_TIMEOUT
from ..media import MEDIA_SERVICE_TICKET, PrintableMedia
from ..media.test_documents import EpsonTestDocument
from ..transports import EpsonTransport, TransportContext


@dataclass
class EpsonPrinterConfig(PrinterConfig):
    host: Optional[str] = None
    port: int = EPSON_PORT
    printer_id: Optional[str] = None
    timeout: int = EPSON_TIMEOUT

    kind = 'epson'
    transport_class = EpsonTransport

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'EpsonPrinterConfig':
        return cls(
            host=params.get('host'),
            # Port was added later; older configs have no value
            port=params.get('port') or EPSON_PORT,
            printer_id=params.get('printer_id'),
            timeout=params.get('timeout', EPSON_TIMEOUT),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'host': self.host,
            'port': self.port,
            'printer_id': self.printer_id,
            'timeout': self.timeout,
        }

    def validation_errors(self) -> List[str]:
        errors = []
        if not is_ip_address(self.host):
            errors.append(f'host must be an IP address, got {self.host!r}')
        if not isinstance(self.printer_id, str) or not self.printer_id:
            errors.append('printer_id required')
        if not is_number(self.port):
            errors.append('port must be numeric')
        if not is_number(self.timeout):
            errors.append('timeout must be numeric')
        return errors

    def _build_transport(self, context: Optional[TransportContext]) -> EpsonTransport:
        return EpsonTransport(
            self.host, self.printer_id, port=int(self.port), timeout=int(self.timeout), context=context,
        )

    def can_print(self, media: PrintableMedia) -> bool:
        return media.media_type_flag == MEDIA_SERVICE_TICKET

    def get_test_document(self) -> EpsonTestDocument:
        return EpsonTestDocument(self)

    def configure(self, prompter: Prompter) -> None:
        while True:
            self.host = prompter.ask('Enter printer host', self.host)
            if is_ip_address(self.host):
                break

        while True:
            self.port = prompter.ask('Enter printer port', self.port)
            if is_number(self.port):
                break

        while True:
            self.printer_id = prompter.ask('Enter printer ID', self.printer_id)
            if self.printer_id:
                break

        while True:
            self.timeout = prompter.ask('Enter timeout', self.timeout)
            if is_number(self.timeout):
                break

        self.port = int(self.port)
        self.timeout = int(self.timeout)
