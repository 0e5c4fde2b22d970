"""
Print Transport
===============

Printer configuration, document rendering and delivery for networked
printers.

Supports:
- CAB SQUIX label printers (JScript over FTP)
- Generic FTP drop-folder printers
- Epson receipt printers (ePOS-Print over SOAP/HTTP)
- Zebra card printers (cloud print submission)

Usage:
    python -m print_transport

API Endpoints:
    GET  /api/kinds                - Supported printer kinds
    GET  /api/printers             - List all printers
    POST /api/printers             - Add new printer
    GET  /api/printers/{id}        - Get printer details
    POST /api/printers/{id}/test   - Print the test document
    POST /api/printers/{id}/print  - Print a payload
    GET  /api/jobs                 - Job history
"""

__version__ = '1.0.0'
__author__ = 'EGS Software AG'
