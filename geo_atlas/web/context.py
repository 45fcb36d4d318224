"""
Per-application services shared by the blueprints
"""
from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from ..atlas_config import AtlasConfig
from ..geocode import PlaceResolver
from ..ingest import IngestionPipeline
from ..storage import AtlasStorage

EXTENSION_KEY = 'geo_atlas'


@dataclass
class AtlasServices:
    """
    Services owned by one Flask application.

    Attributes:
        config (AtlasConfig): Application configuration.
        storage (AtlasStorage): Entity store.
        resolver (PlaceResolver): Place resolver wrapping the geocoder collaborator.
    """
    config: AtlasConfig
    storage: AtlasStorage
    resolver: PlaceResolver

    def pipeline(self) -> IngestionPipeline:
        """A fresh ingestion pipeline; each upload owns its own run state."""
        return IngestionPipeline(self.storage, self.resolver)


def get_services() -> AtlasServices:
    """Services of the current application"""
    return current_app.extensions[EXTENSION_KEY]
