"""
Run the service: python -m print_transport
"""

from .app import main

if __name__ == '__main__':
    main()
