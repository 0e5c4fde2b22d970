"""
Print Transport Media
=====================

Documents that can be handed to a transport.
"""

from .base import (
    Capability,
    MEDIA_BARCODE_LABEL,
    MEDIA_NAMETAG_CARD,
    MEDIA_SERVICE_TICKET,
    MediaType,
    PrintableMedia,
    RawDocument,
)
from .cab_label import CABLabel, HEIGHT_ENDLESS, LABEL_ENDLESS, LABEL_FIXED
from .elements import LabelElement, QRCode, Text

__all__ = [
    'Capability', 'MediaType', 'PrintableMedia', 'RawDocument',
    'MEDIA_BARCODE_LABEL', 'MEDIA_NAMETAG_CARD', 'MEDIA_SERVICE_TICKET',
    'CABLabel', 'HEIGHT_ENDLESS', 'LABEL_ENDLESS', 'LABEL_FIXED',
    'LabelElement', 'QRCode', 'Text',
]
