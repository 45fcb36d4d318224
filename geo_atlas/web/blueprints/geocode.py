"""
Geocoding API
"""

from flask import Blueprint, jsonify

from ...exceptions import NotFoundError, ValidationError
from ..context import get_services
from .entities import json_body

geocode_bp = Blueprint('geocode', __name__, url_prefix='/api')


@geocode_bp.route('/geocode', methods=['POST'])
def geocode_address():
    """Resolve a free-text address to {lat, lng}"""
    address = json_body().get('address')
    if not address or not isinstance(address, str):
        raise ValidationError("Address is required")
    latlon = get_services().resolver.lookup(address)
    if latlon is None:
        raise NotFoundError("Location not found")
    return jsonify({'lat': latlon.lat, 'lng': latlon.lon})
