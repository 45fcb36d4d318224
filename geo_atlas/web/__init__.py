"""
geo_atlas web application: JSON API over the atlas services.
"""
from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from ..atlas_config import AtlasConfig
from ..geocode import Geocoder, NominatimGeocoder, PlaceResolver
from ..storage import AtlasStorage, MemoryStorage
from .blueprints.entities import entities
from .blueprints.geocode import geocode_bp
from .blueprints.stories import stories_bp
from .blueprints.uploads import uploads
from .context import EXTENSION_KEY, AtlasServices, get_services
from .error_handlers import register_error_handlers

logger = logging.getLogger(__name__)

__all__ = ['create_app', 'AtlasServices', 'get_services']


def create_app(config: Optional[AtlasConfig] = None, storage: Optional[AtlasStorage] = None,
               geocoder: Optional[Geocoder] = None) -> Flask:
    """
    Application factory.

    Args:
        config: Application configuration; the shipped YAML defaults when omitted.
        storage: Entity store; a new MemoryStorage when omitted.
        geocoder: Geocoding collaborator; a NominatimGeocoder built from config when omitted.
    """
    app = Flask(__name__)

    if config is None:
        config = AtlasConfig.from_yaml()
    if storage is None:
        storage = MemoryStorage()
    if geocoder is None:
        geocoder = NominatimGeocoder(
            user_agent=config.geocoder_user_agent,
            domain=config.geocoder_domain,
            timeout=config.geocoder_timeout,
            sleep_interval=config.geocoder_sleep_interval,
        )

    app.config['MAX_CONTENT_LENGTH'] = config.max_upload_bytes
    app.extensions[EXTENSION_KEY] = AtlasServices(
        config=config,
        storage=storage,
        resolver=PlaceResolver(geocoder),
    )

    # Register blueprints
    app.register_blueprint(entities)
    app.register_blueprint(uploads)
    app.register_blueprint(stories_bp)
    app.register_blueprint(geocode_bp)

    # Register error handlers
    register_error_handlers(app)

    logger.debug(f"Created geo_atlas app (max upload {config.max_upload_bytes} bytes)")
    return app
