"""
Dummy Transport
===============

Pretends to print, optionally after a delay. Used to exercise print
pipelines without hardware.
"""

import logging
import time
from typing import Optional

from .base import BaseTransport
from .context import TransportContext
from ..media import PrintableMedia
from ..result import PrintingResult

logger = logging.getLogger(__name__)


class DummyTransport(BaseTransport):
    def __init__(self, delay_seconds: float = 0, context: Optional[TransportContext] = None):
        super().__init__(context)
        self.delay_seconds = delay_seconds

    def _transport(self, media: PrintableMedia) -> PrintingResult:
        if self.delay_seconds:
            logger.info('Dummy printer waiting %s seconds', self.delay_seconds)
            time.sleep(self.delay_seconds)

        return PrintingResult(True)
