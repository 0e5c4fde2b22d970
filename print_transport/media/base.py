"""
Printable Media
===============

A printable media is a document plus a set of capability tags that the
transports query at dispatch time.
"""

import enum
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Union


class MediaType(enum.IntFlag):
    """Physical media families."""

    NONE = 0
    BARCODE_LABEL = 1
    SERVICE_TICKET = 2
    NAMETAG_CARD = 4


MEDIA_BARCODE_LABEL = MediaType.BARCODE_LABEL
MEDIA_SERVICE_TICKET = MediaType.SERVICE_TICKET
MEDIA_NAMETAG_CARD = MediaType.NAMETAG_CARD


class Capability(enum.Enum):
    """What a document can provide beyond its media type."""

    PAYLOAD = 'payload'                  # get_print_payload()
    DOCUMENT_INFO = 'document_info'      # document_title / content_type
    DEVICE_GEOMETRY = 'device_geometry'  # configure_media(device_config)


Payload = Union[str, bytes, None]


class PrintableMedia(ABC):
    """Base class for anything a transport can print."""

    capabilities: FrozenSet[Capability] = frozenset({Capability.PAYLOAD})

    @property
    @abstractmethod
    def media_type_flag(self) -> int:
        """Bitmask of MediaType values."""

    @abstractmethod
    def get_print_payload(self) -> Payload:
        """Document content in the target device's command language."""

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities


class RawDocument(PrintableMedia):
    """
    Pre-encoded payload.

    Passing both a title and a content type makes the document printable
    on cloud printers as well.
    """

    def __init__(self, payload: Payload, media_type: int,
                 document_title: Optional[str] = None,
                 content_type: Optional[str] = None):
        self._payload = payload
        self._media_type = int(media_type)
        self.document_title = document_title
        self.content_type = content_type

        if document_title is not None and content_type is not None:
            self.capabilities = frozenset({Capability.PAYLOAD, Capability.DOCUMENT_INFO})

    @property
    def media_type_flag(self) -> int:
        return self._media_type

    def get_print_payload(self) -> Payload:
        return self._payload
