from flask import Blueprint, jsonify, request
from scholarly.store import get_store
from scholarly.search import filter_hubs

bp = Blueprint('api', __name__, url_prefix='/api')


@bp.route('/hubs')
def list_hubs():
    query = request.args.get('q', '')
    hubs = filter_hubs(get_store().load(), query)
    return jsonify({'items': [h.to_summary() for h in hubs]})
