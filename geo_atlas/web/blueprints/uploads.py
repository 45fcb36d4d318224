"""
File upload API: GEDCOM and CSV imports
"""

import logging

from flask import Blueprint, jsonify, request

from ...exceptions import UploadError
from ..context import get_services

logger = logging.getLogger(__name__)

uploads = Blueprint('uploads', __name__, url_prefix='/api/upload')


def uploaded_text() -> str:
    """Decode the multipart 'file' field as UTF-8, dropping a leading byte-order mark; undecodable bytes are replaced"""
    file = request.files.get('file')
    if file is None:
        raise UploadError("No file uploaded")
    return file.read().decode('utf-8-sig', errors='replace')


@uploads.route('/gedcom', methods=['POST'])
def upload_gedcom():
    """Import a GEDCOM file"""
    text = uploaded_text()
    try:
        result = get_services().pipeline().ingest_gedcom(text)
    except Exception as e:
        logger.error(f"GEDCOM processing error: {e}", exc_info=True)
        return jsonify({'message': 'Failed to process GEDCOM file'}), 500
    return jsonify({'message': 'GEDCOM file processed successfully', **result.counts()})


@uploads.route('/csv', methods=['POST'])
def upload_csv():
    """Import a CSV file with a header row"""
    text = uploaded_text()
    try:
        result = get_services().pipeline().ingest_csv(text)
    except UploadError:
        raise
    except Exception as e:
        logger.error(f"CSV processing error: {e}", exc_info=True)
        return jsonify({'message': 'Failed to process CSV file'}), 500
    return jsonify({'message': 'CSV file processed successfully', **result.counts()})
