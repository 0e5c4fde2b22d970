"""
Print Transport Service - Main Application
==========================================

HTTP service around the printer configurations and transports.

Run: python -m print_transport
"""

import sys
import json
import base64
import logging
from datetime import datetime
from pathlib import Path
from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import PORT, HOST, DEBUG, API_KEY, DATA_DIR, PRINTER_KINDS, JOB_HISTORY_LIMIT
from .exceptions import ConfigurationError, UnsupportedMediaError
from .log import configure_logging
from .media import PrintableMedia, RawDocument
from .models import PrinterRecord, PrintJob
from .printers import CONFIG_KINDS, get_config_class
from .transports import TransportContext

logger = logging.getLogger(__name__)

# =============================================================================
# Application Setup
# =============================================================================

app = Flask(__name__)
CORS(app)

# In-memory state, printers persisted to DATA_DIR
_printers: dict = {}
_jobs: list = []

# Shared by every transport the service builds
_context = TransportContext.from_config()

# =============================================================================
# Storage Functions
# =============================================================================

def _get_data_file(name: str) -> Path:
    """Get path to data file."""
    data_dir = Path(DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / f'{name}.json'


def _load_printers():
    """Load printers from storage."""
    global _printers
    try:
        path = _get_data_file('printers')
        if path.exists():
            with open(path, 'r') as f:
                data = json.load(f)
                _printers = {k: PrinterRecord.from_dict(v) for k, v in data.items()}
    except (OSError, ValueError, TypeError) as e:
        logger.warning('Failed to load printers: %s', e)


def _save_printers():
    """Save printers to storage."""
    try:
        path = _get_data_file('printers')
        with open(path, 'w') as f:
            json.dump({k: v.to_dict() for k, v in _printers.items()}, f, indent=2)
    except OSError as e:
        logger.warning('Failed to save printers: %s', e)


def _record_job(job: PrintJob):
    """Append to the job history, dropping the oldest entries."""
    _jobs.append(job)
    del _jobs[:-JOB_HISTORY_LIMIT]


def _check_api_key():
    """Validate API key from request."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    auth_header = request.headers.get('Authorization', '')

    # Check body
    if data.get('api_key') == API_KEY:
        return True

    # Check header (Bearer token)
    if auth_header.startswith('Bearer ') and auth_header[7:] == API_KEY:
        return True

    return False


def _public_record(record: PrinterRecord) -> dict:
    """Printer record for API responses, with the config inflated and the password hidden."""
    data = record.to_dict()
    try:
        config = json.loads(record.config)
    except ValueError:
        config = {}
    if config.get('password'):
        config['password'] = '********'
    data['config'] = config
    return data


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.route('/api', methods=['GET'])
def api_info():
    """API info (JSON)."""
    return jsonify({
        'service': 'Print Transport Service',
        'version': __version__,
        'status': 'running',
        'endpoints': {
            'health': '/health',
            'kinds': '/api/kinds',
            'printers': '/api/printers',
            'jobs': '/api/jobs',
        }
    })


@app.route('/health', methods=['GET'])
def health():
    """Health check with system info."""
    import platform
    import socket as sock

    return jsonify({
        'status': 'online',
        'version': __version__,
        'hostname': sock.gethostname(),
        'platform': platform.system(),
        'python': sys.version.split()[0],
        'printers_registered': len(_printers),
        'dummy_mode': _context.dummy_mode,
        'timestamp': datetime.now().isoformat(),
    })


@app.route('/api/kinds', methods=['GET'])
def list_kinds():
    """List supported printer kinds with their default configuration."""
    kinds = []
    for kind, config_class in sorted(CONFIG_KINDS.items()):
        info = PRINTER_KINDS.get(kind, {})
        kinds.append({
            'kind': kind,
            'name': info.get('name', kind),
            'transport': info.get('transport'),
            'protocol': info.get('protocol'),
            'default_port': info.get('default_port'),
            'defaults': config_class().to_dict(),
        })

    return jsonify({
        'success': True,
        'kinds': kinds,
    })


# =============================================================================
# Printer Management API
# =============================================================================

@app.route('/api/printers', methods=['GET'])
def list_printers():
    """List all registered printers."""
    return jsonify({
        'success': True,
        'printers': [_public_record(p) for p in _printers.values()],
        'count': len(_printers)
    })


@app.route('/api/printers', methods=['POST'])
def add_printer():
    """Add a new printer."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    data = request.get_json()
    if not data or not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body required'}), 400

    # Validate required fields
    if not data.get('name'):
        return jsonify({'success': False, 'error': 'Printer name required'}), 400
    if not data.get('kind'):
        return jsonify({'success': False, 'error': 'Printer kind required'}), 400
    if data['kind'] not in CONFIG_KINDS:
        return jsonify({
            'success': False,
            'error': f'Invalid printer kind. Valid: {sorted(CONFIG_KINDS)}'
        }), 400

    params = data.get('config') or {}
    if not isinstance(params, dict):
        return jsonify({'success': False, 'error': 'Printer config must be an object'}), 400

    try:
        config = get_config_class(data['kind']).from_dict(params)
    except (TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': f'Invalid printer config: {e}'}), 400

    errors = config.validation_errors()
    if errors:
        return jsonify({'success': False, 'error': 'Invalid printer config', 'details': errors}), 400

    record = PrinterRecord.from_config(
        data['name'],
        config,
        location=data.get('location', ''),
        is_default=data.get('is_default', False),
    )

    _printers[record.id] = record
    _save_printers()
    logger.info('Added %s printer %s (%s)', record.kind, record.id, record.name)

    return jsonify({
        'success': True,
        'printer': _public_record(record),
        'message': 'Printer added successfully'
    }), 201


@app.route('/api/printers/<printer_id>', methods=['GET'])
def get_printer(printer_id):
    """Get printer details."""
    record = _printers.get(printer_id)
    if not record:
        return jsonify({'success': False, 'error': 'Printer not found'}), 404

    return jsonify({
        'success': True,
        'printer': _public_record(record)
    })


@app.route('/api/printers/<printer_id>', methods=['PUT'])
def update_printer(printer_id):
    """Update printer details and/or configuration."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    record = _printers.get(printer_id)
    if not record:
        return jsonify({'success': False, 'error': 'Printer not found'}), 404

    data = request.get_json()
    if not data or not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body required'}), 400

    if 'config' in data:
        changes = data['config'] or {}
        if not isinstance(changes, dict):
            return jsonify({'success': False, 'error': 'Printer config must be an object'}), 400
        try:
            params = record.get_config().to_dict()
            params.update(changes)
            config = get_config_class(record.kind).from_dict(params)
        except (ConfigurationError, TypeError, ValueError) as e:
            return jsonify({'success': False, 'error': f'Invalid printer config: {e}'}), 400

        errors = config.validation_errors()
        if errors:
            return jsonify({'success': False, 'error': 'Invalid printer config', 'details': errors}), 400

        record.set_config(config)

    # Update allowed fields
    for field in ['name', 'location', 'is_active', 'is_default']:
        if field in data:
            setattr(record, field, data[field])

    record.updated_at = datetime.now()
    _save_printers()

    return jsonify({
        'success': True,
        'printer': _public_record(record)
    })


@app.route('/api/printers/<printer_id>', methods=['DELETE'])
def delete_printer(printer_id):
    """Delete a printer."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    if printer_id not in _printers:
        return jsonify({'success': False, 'error': 'Printer not found'}), 404

    del _printers[printer_id]
    _save_printers()

    return jsonify({
        'success': True,
        'message': 'Printer deleted'
    })


# =============================================================================
# Printing
# =============================================================================

def _print(record: PrinterRecord, media: PrintableMedia, job_type: str, document_name: str):
    """Run one print job synchronously and build the response."""
    job = PrintJob(
        printer_id=record.id,
        job_type=job_type,
        document_name=document_name,
        media_type=int(media.media_type_flag),
        source_ip=request.remote_addr,
    )
    job.start()

    try:
        config = record.get_config()
        if not config.can_print(media):
            raise UnsupportedMediaError(
                f'{record.kind} printer cannot print media type {media.media_type_flag}'
            )
        transport = config.get_transport(_context)
        result = transport.print_media(media)
    except (ConfigurationError, UnsupportedMediaError) as e:
        job.fail(str(e))
        _record_job(job)
        return jsonify({'success': False, 'error': str(e), 'job': job.to_dict()}), 400

    job.finish(result)
    _record_job(job)

    if result.was_successful():
        record.update_status('ready')
    else:
        record.update_status('error', job.error_message)
    _save_printers()

    response = result.to_dict()
    response['job'] = job.to_dict()
    return jsonify(response)


@app.route('/api/printers/<printer_id>/test', methods=['POST'])
def test_printer(printer_id):
    """Print the printer's test document."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    record = _printers.get(printer_id)
    if not record:
        return jsonify({'success': False, 'error': 'Printer not found'}), 404

    try:
        media = record.get_config().get_test_document()
    except ConfigurationError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return _print(record, media, 'test', 'Test Document')


@app.route('/api/printers/<printer_id>/print', methods=['POST'])
def print_to_printer(printer_id):
    """Submit a pre-encoded payload."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    record = _printers.get(printer_id)
    if not record:
        return jsonify({'success': False, 'error': 'Printer not found'}), 404

    data = request.get_json()
    if not data or not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body required'}), 400

    if data.get('payload_base64'):
        try:
            payload = base64.b64decode(data['payload_base64'])
        except ValueError:
            return jsonify({'success': False, 'error': 'payload_base64 is not valid base64'}), 400
    elif data.get('payload'):
        payload = data['payload']
    else:
        return jsonify({'success': False, 'error': 'payload or payload_base64 required'}), 400

    try:
        media_type = int(data.get('media_type'))
    except (TypeError, ValueError):
        return jsonify({'success': False, 'error': 'media_type (integer) required'}), 400

    media = RawDocument(
        payload,
        media_type,
        document_title=data.get('title'),
        content_type=data.get('content_type'),
    )

    return _print(record, media, 'print', data.get('document_name', 'Print Job'))


# =============================================================================
# Job History
# =============================================================================

@app.route('/api/jobs', methods=['GET'])
def list_jobs():
    """List recent jobs."""
    limit = request.args.get('limit', 50, type=int)
    printer_id = request.args.get('printer_id')

    jobs = _jobs
    if printer_id:
        jobs = [j for j in jobs if j.printer_id == printer_id]

    # Most recent first
    jobs = sorted(jobs, key=lambda j: j.created_at, reverse=True)[:limit]

    return jsonify({
        'success': True,
        'jobs': [j.to_dict() for j in jobs],
        'count': len(jobs)
    })


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    configure_logging()

    print("=" * 60)
    print("  Print Transport Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print(f"  Data: {DATA_DIR}")
    print(f"  Dummy mode: {_context.dummy_mode}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /health                          - Health check")
    print("    GET  /api/kinds                       - Printer kinds")
    print("    GET  /api/printers                    - List printers")
    print("    POST /api/printers                    - Add printer")
    print("    GET  /api/printers/{id}               - Get printer")
    print("    PUT  /api/printers/{id}               - Update printer")
    print("    DEL  /api/printers/{id}               - Delete printer")
    print("    POST /api/printers/{id}/test          - Print test document")
    print("    POST /api/printers/{id}/print         - Print payload")
    print("    GET  /api/jobs                        - Job history")
    print("=" * 60)

    # Load saved printers
    _load_printers()
    print(f"  Loaded {len(_printers)} printer(s) from storage")
    print("=" * 60)

    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
