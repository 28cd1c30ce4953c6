"""
Todo API Routes

Flask Blueprint for the /todos REST endpoints.
"""

import logging
from flask import Blueprint, current_app, jsonify, request

from .schemas import ValidationError, validate_create, validate_update
from .store import TodoNotFound

# Create Blueprint
todo_bp = Blueprint('todos', __name__)
logger = logging.getLogger(__name__)


def init_routes(app, store):
    """
    Attach a TodoStore to an app and register the routes

    Args:
        app: Flask application
        store: TodoStore instance
    """
    app.extensions['todo_store'] = store
    app.register_blueprint(todo_bp)
    logger.info("Initialized todo routes")


def _store():
    return current_app.extensions['todo_store']


@todo_bp.errorhandler(TodoNotFound)
def handle_not_found(error):
    logger.warning(str(error))
    return jsonify({'error': str(error)}), 404


@todo_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    logger.warning(f"Rejected request: {error}")
    return jsonify({'error': 'Bad Request', 'details': error.details}), 400


@todo_bp.route('/todos', methods=['GET'])
def list_todos():
    """Get all todos"""
    return jsonify(_store().find_all())


@todo_bp.route('/todos/<int:todo_id>', methods=['GET'])
def get_todo(todo_id):
    """Get a single todo"""
    return jsonify(_store().find_one(todo_id))


@todo_bp.route('/todos', methods=['POST'])
def create_todo():
    """Add a new todo"""
    data = validate_create(request.get_json(silent=True))
    todo = _store().create(data['title'], data['description'])
    return jsonify(todo), 201


@todo_bp.route('/todos/<int:todo_id>', methods=['PATCH'])
def update_todo(todo_id):
    """Update title, description or completion state"""
    changes = validate_update(request.get_json(silent=True))
    return jsonify(_store().update(todo_id, changes))


@todo_bp.route('/todos/<int:todo_id>', methods=['DELETE'])
def delete_todo(todo_id):
    """Delete a todo"""
    _store().remove(todo_id)
    return jsonify({'message': f"Todo with ID {todo_id} has been deleted."})
