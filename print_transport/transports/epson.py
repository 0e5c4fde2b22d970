"""
Epson Transport
===============

Transport for Epson TM receipt printers using ePOS-Print.

ePOS-Print is a SOAP service built into the printer (or a TM-i
intelligent printer acting for a device on the same network):
- Endpoint: http://<host>:<port>/cgi-bin/epos/service.cgi?devid=<id>&timeout=<ms>
- Body: SOAP envelope wrapping an <epos-print> document
- Reply: <response success="true|false" code="..." status="..."/> in the SOAP body
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

import requests

from .base import BaseTransport, is_ip_address
from .context import TransportContext
from ..config import EPSON_PORT, EPSON_TIMEOUT
from ..exceptions import ConfigurationError, UnexpectedDeviceResponseError
from ..media import PrintableMedia
from ..result import PrintingResult

logger = logging.getLogger(__name__)

SOAP_SCHEMA = 'http://schemas.xmlsoap.org/soap/envelope/'
EPOS_SCHEMA = 'http://www.epson-pos.com/schemas/2011/03/epos-print'

# Device id denoting a printer that only pretends to print.
DUMMY_DEVICE_ID = 'EpsonPrintTransportDummyMode'


class EpsonTransport(BaseTransport):
    """Transport for Epson ePOS-Print receipt printers."""

    protocol = 'soap'

    def __init__(self, host: Optional[str], printer_id: str, port: int = EPSON_PORT,
                 timeout: int = EPSON_TIMEOUT, context: Optional[TransportContext] = None):
        super().__init__(context)

        self.host = self.context.epson_host_override or host
        self.port = port or EPSON_PORT
        self.printer_id = printer_id
        self.timeout = timeout

        if not isinstance(printer_id, str) or not printer_id:
            raise ConfigurationError('No printer device id specified')

        if printer_id != DUMMY_DEVICE_ID and not is_ip_address(self.host):
            raise ConfigurationError(f"Invalid remote IP address: '{self.host}'")

    def _get_envelope(self, content) -> str:
        if isinstance(content, bytes):
            content = content.decode('utf-8')

        return (
            f'<soapenv:Envelope xmlns:soapenv="{SOAP_SCHEMA}">'
            '<soapenv:Body>'
            f'<epos-print xmlns="{EPOS_SCHEMA}">'
            f'{content or ""}'
            '</epos-print>'
            '</soapenv:Body>'
            '</soapenv:Envelope>'
        )

    def _get_transmit_url(self) -> str:
        timeout_ms = int(self.timeout * 1000)
        return (
            f'http://{self.host}:{self.port}/cgi-bin/epos/service.cgi'
            f'?devid={self.printer_id}&timeout={timeout_ms}'
        )

    def _parse_response(self, text: str, result: PrintingResult) -> None:
        """Read the ePOS <response> element into the result."""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise UnexpectedDeviceResponseError(f'Epson response is not valid XML: {e}')

        body = root.find(f'{{{SOAP_SCHEMA}}}Body')
        if body is None:
            result.add_data('missing_child', 'Body')
            raise UnexpectedDeviceResponseError('Epson response has no outer child (SOAP Body)')

        response = body.find(f'{{{EPOS_SCHEMA}}}response')
        if response is None:
            response = body.find('response')
        if response is None:
            result.add_data('missing_child', 'response')
            raise UnexpectedDeviceResponseError('Epson response has no inner child (ePOS response)')

        result.add_data('code', response.get('code'))
        result.add_data('status', response.get('status'))

        if response.get('success') == 'true':
            result.set_successful(True)

    def _transport(self, media: PrintableMedia) -> PrintingResult:
        if self.printer_id == DUMMY_DEVICE_ID:
            return PrintingResult(True)

        result = PrintingResult()

        try:
            envelope = self._get_envelope(media.get_print_payload())
            url = self._get_transmit_url()
            body = envelope.encode('utf-8')

            result.add_data('url', url)
            result.add_data('envelope', envelope)

            headers = {
                'Content-Type': 'text/xml; charset=utf-8',
                'If-Modified-Since': 'Thu, 01 Jan 1970 00:00:00 GMT',
                'Cache-Control': 'no-cache',
                'Content-Length': str(len(body)),
            }

            logger.info('Epson print request generated (printer=%s, url=%s, timeout=%s)',
                        self.printer_id, url, self.timeout)

            with requests.Session() as session:
                response = session.post(url, data=body, headers=headers, timeout=self.timeout)

            result.add_data('http_status', response.status_code)
            result.add_data('response', response.text)

            if not response.text:
                raise UnexpectedDeviceResponseError('Epson response body is empty')

            self._parse_response(response.text, result)
            logger.info('Epson print response received (printer=%s, success=%s)',
                        self.printer_id, result.was_successful())

        except requests.exceptions.Timeout as e:
            logger.warning('Epson request to %s:%s timed out', self.host, self.port)
            self._record_failure(result, f'Request timeout to {self.host}:{self.port}', e)
        except requests.exceptions.ConnectionError as e:
            logger.warning('Cannot connect to Epson printer at %s:%s', self.host, self.port)
            self._record_failure(result, f'Cannot connect to {self.host}:{self.port}', e)
        except Exception as e:
            logger.warning('Epson print to %s failed: %s', self.printer_id, e)
            self._record_failure(result, str(e), e)

        return result
