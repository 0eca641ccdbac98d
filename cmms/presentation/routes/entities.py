"""
Entity routes
JSON CRUD, search, sort and CSV import endpoints for every entity kind.

Kinds are addressed by slug, e.g. /api/assets, /api/service-requests.
"""

from flask import Blueprint, Response, abort, jsonify, request
from werkzeug.utils import secure_filename
from cmms.business.core.entity_kinds import get_entity_kind
from cmms.business.core.entity_repository import EntityRepository
from cmms.business.core.errors import (
    BulkImportError, FetchError, PersistError, ValidationError
)
from cmms.business.core.list_view_model import ListViewModel
from cmms.utils.logger import get_logger

bp = Blueprint('entities', __name__)
logger = get_logger("cmms.routes.entities")


def _repository(kind_slug):
    try:
        kind = get_entity_kind(kind_slug)
    except KeyError:
        abort(404)
    return EntityRepository(kind)


def _error(message, status, **extra):
    body = {'error': message}
    body.update(extra)
    return jsonify(body), status


@bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return _error(e.message, 400, fields=e.fields)


@bp.errorhandler(PersistError)
def handle_persist_error(e):
    return _error(e.message, 404 if e.not_found else 409)


@bp.errorhandler(FetchError)
def handle_fetch_error(e):
    return _error(e.message, 502)


@bp.errorhandler(BulkImportError)
def handle_import_error(e):
    return _error(e.message, 400)


@bp.errorhandler(404)
def handle_not_found(e):
    return _error('Not found', 404)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


@bp.route('/<kind_slug>', methods=['GET'])
def list_entities(kind_slug):
    """
    List records of a kind.

    Query args:
        q: search text (capped result set); omitted lists everything
        filter: client-side substring filter over the loaded records
        sort, direction: client-side sort field and 'asc'/'desc'
    """
    repository = _repository(kind_slug)
    query = request.args.get('q')
    records = repository.search(query) if query is not None else repository.get_all()

    filter_text = request.args.get('filter')
    if filter_text:
        records = ListViewModel(records).filter_text(filter_text)

    view = ListViewModel.for_kind(repository.kind, records)
    sort_field = request.args.get('sort')
    try:
        if sort_field:
            records = view.sort_by(sort_field, request.args.get('direction', 'asc'))
        else:
            records = view.rows()
    except ValueError as e:
        return _error(str(e), 400)

    return jsonify(records)


@bp.route('/<kind_slug>/<record_id>', methods=['GET'])
def get_entity(kind_slug, record_id):
    record = _repository(kind_slug).get_by_id(record_id)
    if record is None:
        abort(404)
    return jsonify(record)


@bp.route('/<kind_slug>', methods=['POST'])
def create_entity(kind_slug):
    repository = _repository(kind_slug)
    record = repository.create(_json_body())
    return jsonify(record), 201


@bp.route('/<kind_slug>/<record_id>', methods=['PATCH'])
def update_entity(kind_slug, record_id):
    repository = _repository(kind_slug)
    record = repository.update(record_id, _json_body())
    return jsonify(record)


@bp.route('/<kind_slug>/<record_id>', methods=['DELETE'])
def delete_entity(kind_slug, record_id):
    _repository(kind_slug).delete(record_id)
    return '', 204


@bp.route('/<kind_slug>/import', methods=['POST'])
def import_entities(kind_slug):
    """Import a CSV upload (multipart field 'file') or a raw text body"""
    repository = _repository(kind_slug)
    upload = request.files.get('file')
    if upload is not None:
        source = secure_filename(upload.filename or '') or 'upload'
        payload = upload
    else:
        source = 'request body'
        payload = request.get_data()

    result = repository.import_csv(payload)
    logger.info(f"Imported {repository.kind.name} from {source}: {result.success} created, {result.errors} with errors")
    return jsonify(result.to_dict())


@bp.route('/<kind_slug>/import/sample.csv', methods=['GET'])
def import_sample(kind_slug):
    """Header-only CSV listing the columns an import must provide"""
    repository = _repository(kind_slug)
    header = repository.delimiter.join(repository.kind.required_fields)
    return Response(
        header + '\n',
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={repository.kind.slug}_sample.csv'}
    )
