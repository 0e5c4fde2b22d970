"""
Dummy Printer Configuration
===========================
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import PrinterConfig, Prompter, is_number
from ..media import PrintableMedia
from ..media.test_documents import DummyTestDocument
from ..transports import DummyTransport, TransportContext


@dataclass
class DummyPrinterConfig(PrinterConfig):
    delay: int = 0

    kind = 'dummy'
    transport_class = DummyTransport

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'DummyPrinterConfig':
        return cls(delay=int(params.get('delay', 0)))

    def to_dict(self) -> Dict[str, Any]:
        return {'delay': int(self.delay)}

    def validation_errors(self) -> List[str]:
        return []

    def _build_transport(self, context: Optional[TransportContext]) -> DummyTransport:
        return DummyTransport(self.delay, context=context)

    def can_print(self, media: PrintableMedia) -> bool:
        # Not a real printer
        return True

    def get_test_document(self) -> DummyTestDocument:
        return DummyTestDocument()

    def configure(self, prompter: Prompter) -> None:
        while True:
            delay = prompter.ask('How many seconds to wait before returning?', 0)
            if is_number(delay):
                break

        self.delay = int(delay)
