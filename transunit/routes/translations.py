"""Translation grid routes: list, create, edit and delete translation units."""

from flask import Blueprint, request, jsonify, current_app
from transunit import db
from transunit.models import TransUnit
from transunit.services import get_trans_unit_manager, get_trans_unit_repository
from transunit.utils import token_required, parse_grid_filters
import logging

logger = logging.getLogger(__name__)

translations_bp = Blueprint('translations', __name__)


def _get_translations_payload(data):
    """Return the ``{locale: content}`` mapping of a request body, or None."""
    translations = (data or {}).get('translations', {})
    if not isinstance(translations, dict):
        return None
    if not all(isinstance(content, str) or content is None for content in translations.values()):
        return None
    return translations


@translations_bp.route('', methods=['GET'])
def get_trans_units():
    """Get one page of translation units for the managed locales.

    Query params:
    - rows: Page size (default: TRANSLATION_GRID_ROWS)
    - page: Page number (default: 1)
    - _search: Enable the domain/key filters
    - domain, key: Substring filters
    - sidx, sord: Sort column and direction (ASC/DESC)
    - <locale>: Substring filter on the content of that locale
    """
    try:
        locales = current_app.config['TRANSLATION_LOCALES']
        rows = request.args.get('rows', current_app.config['TRANSLATION_GRID_ROWS'], type=int)
        page = request.args.get('page', 1, type=int)
        filters = parse_grid_filters(request.args, locales)

        repository = get_trans_unit_repository()
        trans_units = repository.get_trans_unit_list(locales, rows, page, filters)
        total = repository.count(locales, filters)

        return jsonify({
            'translations': trans_units,
            'total': total,
            'page': page,
            'rows': rows
        }), 200
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@translations_bp.route('/domains', methods=['GET'])
def get_domains():
    """Get all domains with their number of units."""
    try:
        repository = get_trans_unit_repository()

        return jsonify({
            'domains': repository.get_all_domains(),
            'counts': dict(repository.count_by_domains())
        }), 200
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@translations_bp.route('', methods=['POST'])
@token_required
def create_trans_unit(current_user_id):
    """Create a translation unit, with optional initial translations."""
    try:
        data = request.get_json(silent=True) or {}

        if not data.get('key') or not data.get('domain'):
            return jsonify({'error': 'Missing required fields'}), 400

        translations = _get_translations_payload(data)
        if translations is None:
            return jsonify({'error': 'translations must map locales to strings'}), 400

        existing = TransUnit.query.filter_by(key=data['key'], domain=data['domain']).first()
        if existing:
            return jsonify({'error': 'Translation unit already exists', 'id': existing.id}), 409

        manager = get_trans_unit_manager()
        trans_unit = manager.create(data['key'], data['domain'])
        manager.update_translations_content(trans_unit, translations, flush=True)

        logger.info(f'User {current_user_id} created trans unit {trans_unit.domain}/{trans_unit.key}')

        return jsonify({
            'message': 'Translation unit created successfully',
            'trans_unit': trans_unit.to_dict()
        }), 201
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500


@translations_bp.route('/<int:trans_unit_id>', methods=['PUT'])
@token_required
def update_trans_unit(current_user_id, trans_unit_id):
    """Update the translations of a unit from the grid."""
    try:
        trans_unit = db.session.get(TransUnit, trans_unit_id)
        if not trans_unit:
            return jsonify({'error': 'Translation unit not found'}), 404

        translations = _get_translations_payload(request.get_json(silent=True))
        if translations is None:
            return jsonify({'error': 'translations must map locales to strings'}), 400

        get_trans_unit_manager().update_translations_content(trans_unit, translations, flush=True)

        logger.info(f'User {current_user_id} updated trans unit {trans_unit_id}')

        return jsonify({
            'message': 'Translation unit updated successfully',
            'trans_unit': trans_unit.to_dict()
        }), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500


@translations_bp.route('/<int:trans_unit_id>', methods=['DELETE'])
@token_required
def delete_trans_unit(current_user_id, trans_unit_id):
    """Delete a unit and all its translations."""
    trans_unit = db.session.get(TransUnit, trans_unit_id)
    if not trans_unit:
        return jsonify({'error': 'Translation unit not found'}), 404

    if not get_trans_unit_manager().delete(trans_unit):
        return jsonify({'error': 'Could not delete translation unit'}), 500

    logger.info(f'User {current_user_id} deleted trans unit {trans_unit_id}')

    return jsonify({'message': 'Translation unit deleted successfully'}), 200


@translations_bp.route('/<int:trans_unit_id>/<locale>', methods=['DELETE'])
@token_required
def delete_translation(current_user_id, trans_unit_id, locale):
    """Delete one locale's translation of a unit."""
    trans_unit = db.session.get(TransUnit, trans_unit_id)
    if not trans_unit:
        return jsonify({'error': 'Translation unit not found'}), 404

    if not trans_unit.has_translation(locale):
        return jsonify({'error': f'No {locale} translation for this unit'}), 404

    if not get_trans_unit_manager().delete_translation(trans_unit, locale):
        return jsonify({'error': 'Could not delete translation'}), 500

    logger.info(f'User {current_user_id} deleted {locale} translation of trans unit {trans_unit_id}')

    return jsonify({'message': 'Translation deleted successfully'}), 200
