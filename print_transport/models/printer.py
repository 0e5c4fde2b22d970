"""
Printer Record
==============

A stored printer: its kind, the JSON blob of its configuration and some
bookkeeping for the service.
"""

import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from ..printers import PrinterConfig


@dataclass
class PrinterRecord:
    """Printer profile and state."""

    # Identification
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8].upper())
    name: str = ""
    kind: str = ""  # cab, ftp, epson, zebra_card, dummy

    # Configuration, as produced by PrinterConfig.to_database()
    config: str = "{}"

    # Location (for multi-site)
    location: str = ""

    # Status
    status: str = "unknown"  # ready, error, unknown
    last_status_check: Optional[datetime] = None
    last_error: Optional[str] = None

    # Flags
    is_active: bool = True
    is_default: bool = False

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        # Convert datetime to ISO format
        for key in ['created_at', 'updated_at', 'last_status_check']:
            if data.get(key):
                data[key] = data[key].isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrinterRecord':
        """Create from dictionary."""
        data = dict(data)
        # Convert ISO strings back to datetime
        for key in ['created_at', 'updated_at', 'last_status_check']:
            if data.get(key) and isinstance(data[key], str):
                data[key] = datetime.fromisoformat(data[key])
        return cls(**data)

    @classmethod
    def from_config(cls, name: str, config: PrinterConfig, **kwargs) -> 'PrinterRecord':
        """Create a record holding the given configuration."""
        return cls(name=name, kind=config.kind, config=config.to_database(), **kwargs)

    def get_config(self) -> PrinterConfig:
        """Inflate the stored configuration."""
        return PrinterConfig.from_database(self.config, self.kind)

    def set_config(self, config: PrinterConfig):
        self.kind = config.kind
        self.config = config.to_database()
        self.updated_at = datetime.now()

    def update_status(self, status: str, error: Optional[str] = None):
        """Update printer status."""
        self.status = status
        self.last_status_check = datetime.now()
        self.last_error = error
        self.updated_at = datetime.now()
