"""
Print Transport Printer Configurations
======================================

Persistable printer profiles, one class per printer kind.
"""

from .base import CONFIG_KINDS, PrinterConfig, Prompter, get_config_class
from .ftp import CABPrinterConfig, FTPPrinterConfig, GenericFTPPrinterConfig
from .epson import EpsonPrinterConfig
from .google_cloud import GoogleCloudPrinterConfig, ZebraCardPrinterConfig
from .dummy import DummyPrinterConfig

__all__ = [
    'CONFIG_KINDS', 'PrinterConfig', 'Prompter', 'get_config_class',
    'FTPPrinterConfig', 'GenericFTPPrinterConfig', 'CABPrinterConfig',
    'EpsonPrinterConfig', 'GoogleCloudPrinterConfig', 'ZebraCardPrinterConfig',
    'DummyPrinterConfig',
]
