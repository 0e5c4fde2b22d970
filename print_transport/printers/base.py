"""
Printer Configuration
=====================

A printer configuration is stored as two pieces of information: the kind
of printer and a flat JSON object with the parameters for that kind.
Either call the kind's class directly or name the kind on the base class:

    PrinterConfig.from_database(string, 'cab')
    CABPrinterConfig.from_database(string)
"""

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Protocol, Type

from ..exceptions import ConfigurationError, InvalidTransportError
from ..media import PrintableMedia
from ..transports import BaseTransport, TransportContext
from ..transports.base import is_ip_address  # noqa: F401

# Kind name -> config class, filled in as subclasses are defined
CONFIG_KINDS: Dict[str, Type['PrinterConfig']] = {}


class Prompter(Protocol):
    """Asks the operator one question at a time (e.g. a CLI)."""

    def ask(self, question: str, default: Any = None) -> Any:
        """Ask a question and return the answer, or default when left blank."""
        ...

    def choice(self, question: str, choices: Dict[str, str], default: Optional[str] = None) -> str:
        """Offer labelled choices and return the chosen key."""
        ...


def get_config_class(kind: str) -> Type['PrinterConfig']:
    """Get config class by kind name."""
    try:
        return CONFIG_KINDS[kind]
    except KeyError:
        raise ConfigurationError(f'Unknown printer kind {kind!r}. Valid: {sorted(CONFIG_KINDS)}')


def is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


class PrinterConfig(ABC):
    """Base class for persistable printer configurations."""

    kind: ClassVar[Optional[str]] = None
    transport_class: ClassVar[Type[BaseTransport]] = BaseTransport

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get('kind'):
            CONFIG_KINDS[cls.kind] = cls

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @classmethod
    def from_database(cls, string: str, kind: Optional[str] = None) -> 'PrinterConfig':
        """
        Inflate a printer config from JSON.

        Args:
            string: JSON config options
            kind: Optional kind to inflate (defaults to the called class)

        Raises:
            ConfigurationError: unknown kind, abstract class or invalid JSON
        """
        target = get_config_class(kind) if kind else cls
        if not target.kind:
            raise ConfigurationError(f'{target.__name__} is not a concrete printer kind')

        try:
            params = json.loads(string) if string else {}
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f'Invalid printer config JSON: {e}')

        if not isinstance(params, dict):
            raise ConfigurationError('Printer config JSON must be an object')

        return target.from_dict(params)

    @classmethod
    @abstractmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'PrinterConfig':
        """Create from the flat dictionary stored in the database."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the flat dictionary stored in the database."""

    def to_database(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        return self.to_database()

    # -------------------------------------------------------------------------
    # Validation & transport
    # -------------------------------------------------------------------------

    @abstractmethod
    def validation_errors(self) -> List[str]:
        """Describe everything wrong with the configuration."""

    def is_valid(self) -> bool:
        return not self.validation_errors()

    def get_transport(self, context: Optional[TransportContext] = None) -> BaseTransport:
        """
        Return a transport wired to this configuration.

        Raises:
            ConfigurationError: the configuration is invalid
            InvalidTransportError: the transport is not of the expected family
        """
        errors = self.validation_errors()
        if errors:
            raise ConfigurationError(f'Invalid {self.kind} printer configuration: ' + '; '.join(errors))

        transport = self._build_transport(context)
        if not isinstance(transport, self.transport_class):
            raise InvalidTransportError(
                f'{type(transport).__name__} is not a {self.transport_class.__name__}'
            )

        return transport

    @abstractmethod
    def _build_transport(self, context: Optional[TransportContext]) -> BaseTransport:
        pass

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------

    @abstractmethod
    def can_print(self, media: PrintableMedia) -> bool:
        pass

    @abstractmethod
    def get_test_document(self) -> PrintableMedia:
        """Printer-specific document for a test print."""

    @abstractmethod
    def configure(self, prompter: Prompter) -> None:
        """
        Interactively configure the printer.

        Asks the operator for everything the printer needs (host, device
        id, label geometry...) and stores the answers on this instance so
        they can be validated and saved.
        """
