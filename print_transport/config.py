"""
Print Transport Service Configuration
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('PRINT_TRANSPORT_PORT', 5100))
HOST = os.environ.get('PRINT_TRANSPORT_HOST', '0.0.0.0')
DEBUG = os.environ.get('PRINT_TRANSPORT_DEBUG', 'false').lower() == 'true'

# API Key for authentication
API_KEY = os.environ.get('PRINT_TRANSPORT_API_KEY', 'print-transport-2026')

# Structured (JSON lines) logging
JSON_LOGS = os.environ.get('PRINT_TRANSPORT_JSON_LOGS', 'false').lower() == 'true'

# =============================================================================
# Transport Context
# =============================================================================

# Development mode: every transport reports success without touching the network
DUMMY_MODE = os.environ.get('PRINT_TRANSPORT_DUMMY_MODE', 'false').lower() == 'true'

# Service-account JSON key used to obtain OAuth tokens for cloud printers
GOOGLE_KEY_FILE = os.environ.get('PRINT_TRANSPORT_GOOGLE_KEY_FILE') or None

# Replaces the configured host of every Epson printer (e.g. behind a tunnel)
EPSON_HOST_OVERRIDE = os.environ.get('PRINT_TRANSPORT_EPSON_HOST_OVERRIDE') or None

# 'true' / 'false' or a path to a CA bundle
_verify_tls = os.environ.get('PRINT_TRANSPORT_VERIFY_TLS', 'true')
if _verify_tls.lower() in ('true', 'false'):
    VERIFY_TLS = _verify_tls.lower() == 'true'
else:
    VERIFY_TLS = _verify_tls

# =============================================================================
# Printer Defaults
# =============================================================================

# FTP (CAB SQUIX and generic FTP drop folders)
FTP_PORT = 21
FTP_TIMEOUT = 15  # seconds

# Epson ePOS-Print
EPSON_PORT = 80
EPSON_TIMEOUT = 30  # seconds

# Google Cloud Print style submission
GOOGLE_CLOUD_TIMEOUT = 15  # seconds
GOOGLE_CLOUD_SUBMIT_URL = 'https://www.google.com/cloudprint/interface/submit'
GOOGLE_CLOUD_SCOPES = ['https://www.googleapis.com/auth/cloudprint']

# =============================================================================
# Supported Printer Kinds
# =============================================================================

PRINTER_KINDS = {
    'cab': {
        'name': 'CAB SQUIX Label Printer',
        'transport': 'cab',
        'protocol': 'ftp',
        'default_port': FTP_PORT,
    },
    'ftp': {
        'name': 'Generic FTP Printer',
        'transport': 'ftp',
        'protocol': 'ftp',
        'default_port': FTP_PORT,
    },
    'epson': {
        'name': 'Epson ePOS-Print Receipt Printer',
        'transport': 'epson',
        'protocol': 'soap',
        'default_port': EPSON_PORT,
    },
    'zebra_card': {
        'name': 'Zebra Card Printer (cloud)',
        'transport': 'google_cloud',
        'protocol': 'rest',
    },
    'dummy': {
        'name': 'Dummy Printer',
        'transport': 'dummy',
        'protocol': None,
    },
}

# =============================================================================
# Storage Configuration
# =============================================================================

# Where to store printer configuration (local file-based for standalone)
DATA_DIR = os.environ.get('PRINT_TRANSPORT_DATA_DIR', os.path.expanduser('~/.print_transport'))

# Job history kept in memory
JOB_HISTORY_LIMIT = 500
