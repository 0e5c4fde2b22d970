"""
Print Transport Client
======================

Python SDK for talking to a running Print Transport Service.

Usage:
    from print_transport.client import PrintClient

    client = PrintClient('http://localhost:5100', api_key='your-key')

    # Register a label printer
    client.add_printer('Warehouse', 'cab', host='10.0.0.20',
                       username='ftpprint', password='print')

    # Print its test label
    result = client.print_test('PRINTER-ID')

    # Push a pre-rendered receipt
    client.print_payload('PRINTER-ID', '<text>Hello</text>', media_type=2)
"""

import base64
import requests
from typing import Dict, Any, Optional, List, Union


class PrintClient:
    """Client for Print Transport Service."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None,
                 timeout: int = 30):
        """
        Initialize client.

        Args:
            base_url: Base URL of the print service
            api_key: API key for authentication
            timeout: Request timeout in seconds (print calls get twice as long)
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 params: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        if data is not None and self.api_key:
            data['api_key'] = self.api_key

        try:
            if method == 'GET':
                response = requests.get(url, params=params, headers=self._headers(),
                                        timeout=self.timeout)
            elif method == 'POST':
                response = requests.post(url, json=data or {}, headers=self._headers(),
                                         timeout=self.timeout * 2)
            elif method == 'PUT':
                response = requests.put(url, json=data or {}, headers=self._headers(),
                                        timeout=self.timeout)
            elif method == 'DELETE':
                response = requests.delete(url, headers=self._headers(), timeout=self.timeout)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    def list_kinds(self) -> List[Dict[str, Any]]:
        """Supported printer kinds with their default configuration."""
        result = self._request('GET', '/api/kinds')
        return result.get('kinds', [])

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> List[Dict[str, Any]]:
        """List all printers."""
        result = self._request('GET', '/api/printers')
        return result.get('printers', [])

    def get_printer(self, printer_id: str) -> Optional[Dict[str, Any]]:
        """Get printer by ID."""
        result = self._request('GET', f'/api/printers/{printer_id}')
        return result.get('printer') if result.get('success') else None

    def add_printer(self, name: str, kind: str, location: str = '', **config) -> Dict[str, Any]:
        """
        Add a new printer.

        Args:
            name: Printer display name
            kind: Printer kind (cab, ftp, epson, zebra_card, dummy)
            location: Free-form location
            **config: Kind-specific settings (host, port, printer_id, etc.)
        """
        data = {
            'name': name,
            'kind': kind,
            'location': location,
            'config': config,
        }
        return self._request('POST', '/api/printers', data)

    def update_printer(self, printer_id: str, config: Dict[str, Any] = None,
                       **fields) -> Dict[str, Any]:
        """Update printer fields (name, location, ...) and/or its configuration."""
        data = dict(fields)
        if config is not None:
            data['config'] = config
        return self._request('PUT', f'/api/printers/{printer_id}', data)

    def delete_printer(self, printer_id: str) -> Dict[str, Any]:
        """Delete a printer."""
        return self._request('DELETE', f'/api/printers/{printer_id}')

    # =========================================================================
    # Printing
    # =========================================================================

    def print_test(self, printer_id: str) -> Dict[str, Any]:
        """Print the printer's test document."""
        return self._request('POST', f'/api/printers/{printer_id}/test', {})

    def print_payload(self, printer_id: str, payload: Union[str, bytes], media_type: int,
                      document_name: str = 'Print Job', title: str = None,
                      content_type: str = None) -> Dict[str, Any]:
        """
        Print a pre-encoded payload.

        Args:
            printer_id: Target printer ID
            payload: Device commands (text) or raw bytes
            media_type: MediaType flag of the document
            document_name: Job name
            title: Document title (cloud printers)
            content_type: MIME type (cloud printers)
        """
        data = {
            'media_type': int(media_type),
            'document_name': document_name,
        }
        if isinstance(payload, bytes):
            data['payload_base64'] = base64.b64encode(payload).decode('utf-8')
        else:
            data['payload'] = payload
        if title is not None:
            data['title'] = title
        if content_type is not None:
            data['content_type'] = content_type

        return self._request('POST', f'/api/printers/{printer_id}/print', data)

    # =========================================================================
    # Jobs
    # =========================================================================

    def list_jobs(self, printer_id: str = None, limit: int = 50) -> List[Dict[str, Any]]:
        """List recent print jobs."""
        params = {'limit': limit}
        if printer_id:
            params['printer_id'] = printer_id
        result = self._request('GET', '/api/jobs', params=params)
        return result.get('jobs', [])
