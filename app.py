"""Flask app for building and running SELECT queries from JSON."""

from flask import Flask, request, jsonify, Response
from werkzeug.exceptions import HTTPException
from typing import Any, Dict, Optional
import logging
from sqlconn import DbCon, QueryError, load_config
from sqlquery import json_select

logger = logging.getLogger(__name__)


def create_app(db: Optional[DbCon] = None) -> Flask:
    """Create the app around a connection holder (built from the environment if omitted)."""
    app = Flask(__name__)
    db = db if db is not None else DbCon.from_config()

    def get_payload() -> Dict[str, Any]:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValueError('Request body must be a JSON object')
        return payload

    @app.errorhandler(ValueError)
    @app.errorhandler(QueryError)
    def handle_query_error(e: Exception) -> Response:
        """Handle invalid payloads and failed statements with 400 response."""
        logger.warning(f'Rejected request: {e}')
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(Exception)
    def handle_general_error(e: Exception) -> Response:
        """Handle unexpected errors with 500 response."""
        if isinstance(e, HTTPException):
            return e
        logger.error(f'Server error: {e}')
        return jsonify({'error': 'Internal server error'}), 500

    @app.route('/query/select', methods=['POST'])
    def select_query():
        """Generate or execute SELECT query from JSON payload."""
        payload = get_payload()
        query = json_select(payload, db)
        if not payload.get('execute', False):
            return jsonify({'sql': query.build(), 'params': query.values})
        return jsonify({'result': query.rows()})

    @app.route('/queries', methods=['GET'])
    def query_log():
        """Statements executed so far with their elapsed milliseconds."""
        return jsonify(db.queries)

    return app


if __name__ == '__main__':
    cfg = load_config()
    logging.basicConfig(level=cfg.LOG_LEVEL.upper())
    create_app(DbCon.from_config(cfg)).run(debug=cfg.DEBUG)
