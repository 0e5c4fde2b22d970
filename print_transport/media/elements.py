"""
CAB Label Elements
==================

Element codecs for the CAB JScript label language. Each element renders
to exactly one command line, with the label offset added to its own
position.

    T [:name;]x,y,rotation,font,size[,effects];text
    B x,y,rotation,QRCODE[+MODEL n][+WS n][+EL level],size;data
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

if TYPE_CHECKING:
    from .cab_label import CABLabel


def _check_rotation(degrees) -> int:
    if degrees < 0 or degrees > 360:
        raise ValueError(f'Rotation must be 0-360 degrees, got {degrees}')
    return degrees


class LabelElement(ABC):
    """A positioned element on a CAB label."""

    def __init__(self, x: int, y: int, rotation: int = 0):
        self.x = x
        self.y = y
        self.rotation = 0
        self.set_rotation(rotation)

    def set_rotation(self, degrees: int) -> 'LabelElement':
        self.rotation = _check_rotation(degrees)
        return self

    def _position(self, label: 'CABLabel') -> str:
        x = self.x + label.offset_x
        y = self.y + label.offset_y
        return f'{x},{y},{self.rotation}'

    @abstractmethod
    def get_element_code(self, label: 'CABLabel') -> str:
        """Render the element's command line for the given label."""


class Text(LabelElement):
    """Text field."""

    # Font faces
    FONT_BITMAP12X12 = -1
    FONT_BITMAP16X16 = -2
    FONT_BITMAP16X32 = -3
    FONT_OCRA = -4
    FONT_OCRB = -5
    FONT_SWISS721 = 3
    FONT_SWISS721BOLD = 5
    FONT_MONOSPACE821 = 596

    # Effects
    FX_BOLD = 'b'
    FX_SLANT = 's'
    FX_LEFTSLANT = 'z'
    FX_ITALIC = 'i'
    FX_NEGATIVE = 'n'
    FX_OUTLINE = 'o'
    FX_GREY = 'g'
    FX_UNDERLINE = 'u'
    FX_LIGHT = 'l'
    FX_KERNING = 'k'
    FX_VERTICAL = 'v'

    UNIT_POINT = 'pt'
    UNIT_LABEL = ''

    def __init__(self, x: int, y: int, content: str, options: Optional[Dict[str, Any]] = None):
        """
        Args:
            x: X position
            y: Y position
            content: Text to print
            options: rotation, name, font_face, font_size, effects,
                squeeze, h_char_width, char_spacing
        """
        options = options or {}
        super().__init__(x, y, options.get('rotation', 0))

        self.content = content
        self.name = options.get('name')
        self.font_face = self.FONT_SWISS721
        self.font_size = f'{self.UNIT_POINT}5'
        self.effects: Dict[str, str] = {}

        if options.get('font_face') is not None:
            self.set_font_face(options['font_face'])
        if options.get('font_size') is not None:
            self.set_font_size(options['font_size'])
        if options.get('effects'):
            self.set_effects(options['effects'])
        if options.get('squeeze') is not None:
            self.set_squeeze(options['squeeze'])
        if options.get('h_char_width') is not None:
            self.set_h_character_width(options['h_char_width'])
        if options.get('char_spacing') is not None:
            self.set_character_spacing(options['char_spacing'])

    def get_element_code(self, label: 'CABLabel') -> str:
        code = 'T '

        if self.name:
            code += f':{self.name};'

        code += f'{self._position(label)},{self.font_face},{self.font_size}'

        if self.effects:
            code += ',' + ''.join(self.effects.values())

        return f'{code};{self.content}'

    def set_font_face(self, font: int) -> 'Text':
        self.font_face = font
        return self

    def set_font_size(self, size, unit: str = UNIT_POINT) -> 'Text':
        if isinstance(size, bool):
            raise ValueError('Font size must be numeric')
        try:
            float(size)
        except (TypeError, ValueError):
            raise ValueError(f'Font size must be numeric, got {size!r}')
        self.font_size = f'{unit}{size}'
        return self

    def set_effects(self, effects: Iterable[str]) -> 'Text':
        for effect in effects:
            self.effects[effect] = effect
        return self

    def set_squeeze(self, amount) -> 'Text':
        amount = int(amount)
        if amount < 10 or amount > 1000:
            raise ValueError('Squeeze must be between 10-1000')
        self.effects['q'] = f'q{amount}'
        return self

    def set_h_character_width(self, width) -> 'Text':
        self.effects['h'] = f'h{width}'
        return self

    def set_character_spacing(self, spacing) -> 'Text':
        self.effects['m'] = f'm{spacing}'
        return self


class QRCode(LabelElement):
    """QR code barcode."""

    ERROR_LOW = 'L'
    ERROR_MED = 'M'
    ERROR_HIGH = 'Q'
    ERROR_MAX = 'H'

    def __init__(self, x: int, y: int, size: int, content: str,
                 options: Optional[Dict[str, Any]] = None):
        options = options or {}
        super().__init__(x, y, options.get('rotation', 0))

        self.size = size
        self.content = content
        self.model: Optional[int] = options.get('model', 2)
        self.whitespace: Optional[int] = options.get('whitespace', 0)
        self.error_level: Optional[str] = None  # printer default

        if options.get('error_level') is not None:
            self.set_error_level(options['error_level'])

    def get_element_code(self, label: 'CABLabel') -> str:
        code = f'B {self._position(label)},QRCODE'

        if self.model is not None:
            code += f'+MODEL{self.model}'
        if self.whitespace is not None:
            code += f'+WS{self.whitespace}'
        if self.error_level is not None:
            code += f'+EL{self.error_level}'

        return f'{code},{self.size};{self.content}'

    def set_error_level(self, level: Optional[str]) -> 'QRCode':
        self.error_level = level
        return self
