"""Confluence endpoints: health, space and page listings, transcript upload."""

import logging

from flask import Blueprint, current_app, request

from ..confluence_client.confluence_service import ConfluenceService
from ..models import Transcript
from .responses import error_response, success_response

logger = logging.getLogger(__name__)

confluence_bp = Blueprint('confluence', __name__)

TRUE_VALUES = ('1', 'true', 'yes')


def _service() -> ConfluenceService:
    return current_app.extensions['meetscribe']['confluence']


@confluence_bp.get('/health')
def health():
    settings = current_app.extensions['meetscribe']['settings'].confluence
    missing = settings.missing_variables()
    if missing:
        return error_response(
            "Confluence is not fully configured",
            400,
            missingVariables=missing,
        )
    return success_response(
        message="Confluence integration is configured",
        baseUrl=settings.base_url,
        spaceKey=settings.space_key,
    )


@confluence_bp.get('/spaces')
def list_spaces():
    spaces = _service().list_spaces()
    logger.info(f"Listed {len(spaces)} spaces")
    return success_response(data=[space.to_dict() for space in spaces])


@confluence_bp.get('/spaces/<space_key>/pages')
def list_pages(space_key: str):
    parent_id = request.args.get('parentId') or None
    folders_only = request.args.get('foldersOnly', '').lower() in TRUE_VALUES

    pages = _service().list_pages(space_key, parent_id=parent_id, folders_only=folders_only)
    return success_response(data=[page.to_dict() for page in pages])


@confluence_bp.post('/upload')
def upload_transcript():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    transcript = Transcript.from_dict(body.get('transcript'))

    logger.info(
        f"Publishing transcript {transcript.id or '(no id)'} '{transcript.title}' "
        f"to space {body.get('spaceKey') or '(default)'} under {body.get('parentId') or '(root)'}"
    )
    page = _service().publish(
        transcript,
        space_key=body.get('spaceKey') or None,
        parent_id=body.get('parentId') or None,
    )
    return success_response(data=page.to_dict())
