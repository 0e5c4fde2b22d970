"""
Google Cloud Transport
======================

Submits documents to a cloud print queue over an OAuth-authenticated
REST call. Used by the Zebra card printers.

Request:
    POST <submit url>
    Authorization: OAuth <token>
    printerid, title, contentTransferEncoding=base64, content, contentType

Reply: JSON object, printed when "success" is truthy.
"""

import base64
import logging
from typing import Optional

import requests

from .base import BaseTransport
from .context import TransportContext
from ..config import GOOGLE_CLOUD_SUBMIT_URL, GOOGLE_CLOUD_TIMEOUT
from ..exceptions import ConfigurationError, UnexpectedDeviceResponseError
from ..media import Capability, PrintableMedia
from ..result import PrintingResult

logger = logging.getLogger(__name__)


class GoogleCloudTransport(BaseTransport):
    """Transport for cloud print queues (OAuth bearer + form POST)."""

    protocol = 'rest'
    required_capabilities = frozenset({Capability.PAYLOAD, Capability.DOCUMENT_INFO})

    def __init__(self, address: str, timeout: int = GOOGLE_CLOUD_TIMEOUT,
                 submit_url: str = GOOGLE_CLOUD_SUBMIT_URL,
                 context: Optional[TransportContext] = None):
        super().__init__(context)

        if not address:
            raise ConfigurationError('Address for printer not specified')
        if self.context.token_cache is None and not self.context.dummy_mode:
            raise ConfigurationError('Cloud printing requires OAuth credentials in the transport context')

        self.address = address
        self.timeout = timeout
        self.submit_url = submit_url

    def _transport(self, media: PrintableMedia) -> PrintingResult:
        result = PrintingResult()
        result.add_data('url', self.submit_url)

        try:
            token = self.context.token_cache.token()

            payload = media.get_print_payload()
            if isinstance(payload, str):
                payload = payload.encode('utf-8')

            fields = {
                'printerid': self.address,
                'title': media.document_title,
                'contentTransferEncoding': 'base64',
                'content': base64.b64encode(payload or b'').decode('ascii'),
                'contentType': media.content_type,
            }
            headers = {'Authorization': f'OAuth {token}'}

            logger.info('Cloud print request generated (printer=%s, title=%s)',
                        self.address, media.document_title)

            with requests.Session() as session:
                response = session.post(
                    self.submit_url,
                    data=fields,
                    headers=headers,
                    timeout=self.timeout,
                    verify=self.context.verify_tls,
                )

            result.add_data('http_status', response.status_code)
            result.add_data('response', response.text)

            try:
                body = response.json()
            except ValueError:
                raise UnexpectedDeviceResponseError('Cloud print response is not valid JSON')

            if isinstance(body, dict) and body.get('success'):
                result.set_successful(True)
            elif isinstance(body, dict) and body.get('message'):
                result.add_data('message', body['message'])

            logger.info('Cloud print response received (printer=%s, success=%s)',
                        self.address, result.was_successful())

        except requests.exceptions.Timeout as e:
            logger.warning('Cloud print request to %s timed out', self.submit_url)
            self._record_failure(result, 'Request timeout', e)
        except requests.exceptions.ConnectionError as e:
            logger.warning('Cannot connect to %s', self.submit_url)
            self._record_failure(result, f'Cannot connect to {self.submit_url}', e)
        except Exception as e:
            logger.warning('Cloud print to %s failed: %s', self.address, e)
            self._record_failure(result, str(e), e)

        return result
