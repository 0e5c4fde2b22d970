#!/usr/bin/env python
"""
Print Transport Service - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    PRINT_TRANSPORT_PORT=5200 PRINT_TRANSPORT_DUMMY_MODE=true python main.py
"""

from print_transport.app import main


if __name__ == '__main__':
    main()
