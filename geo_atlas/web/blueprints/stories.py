"""
Story generation API
"""

import logging

from flask import Blueprint, jsonify
from pydantic import ValidationError as PydanticValidationError

from ...exceptions import ValidationError
from ...narrative import build_story
from ...schema import StoryCreate, StoryRequest
from ..context import get_services
from .entities import json_body

logger = logging.getLogger(__name__)

stories_bp = Blueprint('stories', __name__, url_prefix='/api/stories')

GENERATED_STORY_TITLE = "Generated Family Story"


@stories_bp.route('/generate', methods=['POST'])
def generate_story():
    """Narrate the selected events and store the result as a generated story"""
    try:
        selection = StoryRequest.model_validate(json_body())
    except PydanticValidationError as e:
        raise ValidationError("Invalid story request") from e
    services = get_services()
    storage = services.storage

    event_ids = set(selection.event_ids)
    member_ids = set(selection.member_ids)
    location_ids = set(selection.location_ids)
    content = build_story(
        [event for event in storage.events.list() if event.id in event_ids],
        [member for member in storage.members.list() if member.id in member_ids],
        [location for location in storage.locations.list() if location.id in location_ids],
        default_date=services.config.default_sort_date,
    )

    story = storage.stories.create(StoryCreate(
        title=GENERATED_STORY_TITLE,
        content=content,
        member_ids=selection.member_ids,
        event_ids=selection.event_ids,
        location_id=selection.location_ids[0] if selection.location_ids else None,
        is_generated=True,
    ))
    logger.info(f"Generated story {story.id} from {len(event_ids)} events")
    return jsonify(story.to_json()), 201
