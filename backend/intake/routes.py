"""
Flask Blueprint for the intake service.
Registers all /api/intake/* endpoints.
"""
import logging

from flask import Blueprint, jsonify, request
from extensions import limiter

from .extraction import parse_file
from .sheet_loader import SUPPORTED_EXTENSIONS, WorkbookDecodeError

logger = logging.getLogger(__name__)

intake_bp = Blueprint('intake', __name__, url_prefix='/api/intake')


@intake_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@intake_bp.route('/parse', methods=['POST'])
@limiter.limit("30 per minute;500 per day")
def parse_upload():
    """
    Upload one spreadsheet (multipart field `file`) and return its student records.

    Returns: { count, students: [StudentRecord dicts in sheet order] }
    """
    f = request.files.get('file')
    if not f or not f.filename:
        return jsonify({'error': 'No file uploaded'}), 400
    if not f.filename.lower().endswith(SUPPORTED_EXTENSIONS):
        return jsonify({'error': f'Only {", ".join(SUPPORTED_EXTENSIONS)} files supported'}), 400

    try:
        records = parse_file(f.read(), filename=f.filename)
    except WorkbookDecodeError as e:
        logger.error(f"Decode failed for {f.filename}: {e}")
        return jsonify({'error': f'Could not read {f.filename}: {str(e)}'}), 400
    except Exception as e:
        logger.error(f"Parse failed for {f.filename}: {e}")
        return jsonify({'error': f'Processing failed: {str(e)}'}), 500

    return jsonify({'count': len(records), 'students': [r.to_dict() for r in records]})
