"""
Entity collection API: list, fetch, create, update and delete for every stored record type
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Type

from flask import Blueprint, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from ...exceptions import NotFoundError, ValidationError
from ...schema import (
    AtlasModel, AtlasProjectCreate, EventCreate, FamilyMemberCreate, GeopackageLayerCreate, LocationCreate,
    StoryCreate
)
from ..context import get_services

logger = logging.getLogger(__name__)

entities = Blueprint('entities', __name__, url_prefix='/api')


@dataclass(frozen=True)
class Collection:
    """
    One entity collection exposed over HTTP.

    Attributes:
        path (str): URL segment, e.g. 'family-members'.
        attribute (str): Repository attribute on the storage.
        create_cls (Type[AtlasModel]): Schema for create and update bodies.
        label (str): Human-readable singular name used in error messages.
    """
    path: str
    attribute: str
    create_cls: Type[AtlasModel]
    label: str


COLLECTIONS = (
    Collection('family-members', 'members', FamilyMemberCreate, 'family member'),
    Collection('locations', 'locations', LocationCreate, 'location'),
    Collection('events', 'events', EventCreate, 'event'),
    Collection('stories', 'stories', StoryCreate, 'story'),
    Collection('geopackage-layers', 'geopackage_layers', GeopackageLayerCreate, 'geopackage layer'),
    Collection('atlas-projects', 'atlas_projects', AtlasProjectCreate, 'atlas project'),
)


def json_body() -> Dict[str, Any]:
    """The request's JSON object, or an empty dict when the body is not one"""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def field_changes(create_cls: Type[AtlasModel], body: Dict[str, Any]) -> Dict[str, Any]:
    """Map a (camelCase or snake_case) partial body to field names; unknown keys are dropped"""
    names = {}
    for name, info in create_cls.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return {names[key]: value for key, value in body.items() if key in names}


def _repository(collection: Collection):
    return getattr(get_services().storage, collection.attribute)


def _get_or_404(collection: Collection, record_id: str):
    record = _repository(collection).get(record_id)
    if record is None:
        raise NotFoundError(f"{collection.label.capitalize()} not found")
    return record


def _register(collection: Collection) -> None:
    """Add the five routes of one collection to the blueprint"""
    endpoint = collection.attribute

    def list_records():
        return jsonify([record.to_json() for record in _repository(collection).list()])

    def get_record(record_id):
        return jsonify(_get_or_404(collection, record_id).to_json())

    def create_record():
        try:
            data = collection.create_cls.model_validate(json_body())
        except PydanticValidationError as e:
            logger.info(f"Rejected {collection.label}: {e.error_count()} validation errors")
            raise ValidationError(f"Invalid {collection.label} data") from e
        record = _repository(collection).create(data)
        return jsonify(record.to_json()), 201

    def update_record(record_id):
        record = _get_or_404(collection, record_id)
        try:
            merged = collection.create_cls.model_validate({
                **record.model_dump(), **field_changes(collection.create_cls, json_body())
            })
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {collection.label} data") from e
        updated = _repository(collection).update(record_id, merged.model_dump())
        return jsonify(updated.to_json())

    def delete_record(record_id):
        if not _repository(collection).delete(record_id):
            raise NotFoundError(f"{collection.label.capitalize()} not found")
        return '', 204

    base = f"/{collection.path}"
    entities.add_url_rule(base, f"list_{endpoint}", list_records, methods=['GET'])
    entities.add_url_rule(base, f"create_{endpoint}", create_record, methods=['POST'])
    entities.add_url_rule(f"{base}/<record_id>", f"get_{endpoint}", get_record, methods=['GET'])
    entities.add_url_rule(f"{base}/<record_id>", f"update_{endpoint}", update_record, methods=['PATCH'])
    entities.add_url_rule(f"{base}/<record_id>", f"delete_{endpoint}", delete_record, methods=['DELETE'])


for _collection in COLLECTIONS:
    _register(_collection)


@entities.route('/events/member/<member_id>', methods=['GET'])
def events_by_member(member_id):
    """Events of one family member"""
    events = get_services().storage.events_by_member(member_id)
    return jsonify([event.to_json() for event in events])


@entities.route('/events/location/<location_id>', methods=['GET'])
def events_by_location(location_id):
    """Events at one location"""
    events = get_services().storage.events_by_location(location_id)
    return jsonify([event.to_json() for event in events])
