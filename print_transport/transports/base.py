"""
Base Transport
==============

Abstract base class for printer transports.
"""

import ipaddress
import logging
import traceback
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional

from .context import TransportContext
from ..exceptions import UnsupportedMediaError
from ..media import Capability, PrintableMedia
from ..result import PrintingResult

logger = logging.getLogger(__name__)


def is_ip_address(value) -> bool:
    """Check that value is a literal IPv4/IPv6 address."""
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


class BaseTransport(ABC):
    """
    Delivers a printable media to one printer over one wire protocol.

    print_media() only raises for programming errors (unsupported media).
    Anything that goes wrong while talking to the printer ends up in the
    returned PrintingResult.
    """

    protocol: Optional[str] = None
    required_capabilities: FrozenSet[Capability] = frozenset({Capability.PAYLOAD})

    def __init__(self, context: Optional[TransportContext] = None):
        """Initialize transport with the shared context."""
        self.context = context or TransportContext()

    def print_media(self, media: PrintableMedia) -> PrintingResult:
        """
        Print a media.

        Args:
            media: Document to print

        Returns:
            PrintingResult with success flag and diagnostics

        Raises:
            UnsupportedMediaError: media lacks a required capability
        """
        if self.context.dummy_mode:
            logger.info('%s: development mode, skipping print', type(self).__name__)
            return PrintingResult(True)

        missing = self.required_capabilities - frozenset(media.capabilities)
        if missing:
            names = ', '.join(sorted(c.value for c in missing))
            raise UnsupportedMediaError(
                f'{type(media).__name__} cannot be printed by {type(self).__name__} (missing: {names})'
            )

        try:
            return self._transport(media)
        except Exception as e:
            logger.exception('%s: unhandled error while printing', type(self).__name__)
            result = PrintingResult()
            self._record_failure(result, str(e), e)
            return result

    @abstractmethod
    def _transport(self, media: PrintableMedia) -> PrintingResult:
        """
        Deliver the media.

        Returns:
            PrintingResult with success status and details
        """
        pass

    def _record_failure(self, result: PrintingResult, message: str, error: BaseException) -> PrintingResult:
        """Store the error message and its call stack in the result."""
        result.set_successful(False)
        result.add_data('exception', message)
        result.add_data('exception_type', type(error).__name__)
        result.add_data(
            'backtrace',
            ''.join(traceback.format_exception(type(error), error, error.__traceback__)),
        )
        return result
