"""
CAB Label
=========

Renderer for CAB SQUIX thermal label printers (JScript language).

The label dimensions depend on the physical device, so a label has to be
configured with the target printer's config (configure_media) before it
can be rendered. The CAB transport does this just before uploading.

Command stream:
- m m|i          - Measurement unit (must come first)
- J              - Job start
- H heat         - Heat setting
- S e;0,0,h,h,w  - Label size (endless labels only)
- O R            - Rotate 180 degrees (optional, must follow S)
- C 1            - Cut after each label
- T ... / B ...  - One line per element
- A count        - Print count copies
"""

from typing import TYPE_CHECKING, List, Optional

from .base import Capability, MEDIA_BARCODE_LABEL, PrintableMedia
from .elements import LabelElement
from ..exceptions import ConfigurationError, MediaNotConfiguredError

if TYPE_CHECKING:
    from ..printers.ftp import CABPrinterConfig


LABEL_ENDLESS = 'e'
LABEL_FIXED = 'f'

HEIGHT_ENDLESS = -1


class CABLabel(PrintableMedia):
    """Base class for labels; subclasses add their elements in __init__."""

    DIMENSION_MM = 'm'
    DIMENSION_INCH = 'i'

    capabilities = frozenset({Capability.PAYLOAD, Capability.DEVICE_GEOMETRY})

    def __init__(self):
        self.unit = self.DIMENSION_MM
        self.height = 0
        self.width = 0
        self.offset_x = 0
        self.offset_y = 0
        self.reversed = False
        self.heat: Optional[int] = None

        self._elements: List[LabelElement] = []
        self._commands: List[str] = []
        self._config: Optional['CABPrinterConfig'] = None

    @property
    def media_type_flag(self) -> int:
        return MEDIA_BARCODE_LABEL

    def configure_media(self, config: 'CABPrinterConfig') -> None:
        """Inject the geometry of the target device."""
        self._config = config

    def set_dimensions(self, height: int, width: int, reversed: Optional[bool] = None) -> 'CABLabel':
        """
        Set the dimensions of the label.

        Args:
            height: Height of the label
            width: Width of the label
            reversed: Rotate the label 180 degrees (unchanged when None)
        """
        self.height = height
        self.width = width

        if reversed is not None:
            self.reversed = reversed

        return self

    def set_offset(self, x: int, y: int) -> 'CABLabel':
        self.offset_x = x
        self.offset_y = y
        return self

    def set_heat(self, heat: Optional[int]) -> 'CABLabel':
        """Override the device default heat for this label."""
        self.heat = heat
        return self

    def render_label(self, count: int = 1) -> str:
        """Render the full command stream for count copies."""
        self._commands = []

        self._render_header()
        self._render_body()
        self._render_footer(count)

        return '\n'.join(self._commands) + '\n'

    def get_print_payload(self) -> str:
        return self.render_label(1)

    def _get_config(self) -> 'CABPrinterConfig':
        if self._config is None:
            raise MediaNotConfiguredError('Media not configured')
        return self._config

    def _render_header(self) -> None:
        config = self._get_config()
        heat = self.heat if self.heat is not None else config.heat

        self._commands.append(f'm {self.unit}')
        self._commands.append('J')
        self._commands.append(f'H {heat}')
        self._commands.append(self._get_label_dimensions())

        if self.reversed:
            self._commands.append('O R')

        self._commands.append('C 1')

    def _render_body(self) -> None:
        for element in self._elements:
            self._commands.append(element.get_element_code(self))

    def _render_footer(self, count: int) -> None:
        self._commands.append(f'A {count}')

    def _add_element(self, element: LabelElement) -> 'CABLabel':
        self._elements.append(element)
        return self

    def _get_label_dimensions(self) -> str:
        config = self._get_config()

        if config.label_type == LABEL_ENDLESS:
            label_char = 'e'
        else:
            raise ConfigurationError(f'Unsupported label type: {config.label_type!r}')

        width = min(self.width, config.width)
        if config.label_type == LABEL_ENDLESS:
            height = self.height
        else:
            height = min(self.height, config.height)

        return f'S {label_char};0,0,{height},{height},{width}'
