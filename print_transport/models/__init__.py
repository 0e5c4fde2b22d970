"""
Print Transport Models
"""

from .printer import PrinterRecord
from .job import PrintJob

__all__ = ['PrinterRecord', 'PrintJob']
