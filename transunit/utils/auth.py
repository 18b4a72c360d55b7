"""Bearer token authentication for the translation editing endpoints."""

from functools import wraps
from flask import request, jsonify, current_app
import jwt


def token_required(f):
    """
    Decorator to require a valid JWT token.

    Extracts the editor's user_id from the token and passes it as the first
    argument to the decorated function.

    Usage:
        @translations_bp.route('/<int:trans_unit_id>', methods=['PUT'])
        @token_required
        def update_trans_unit(current_user_id, trans_unit_id):
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        # Skip authentication in testing mode
        if current_app.config.get('TESTING'):
            return f(1, *args, **kwargs)

        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return jsonify({'error': 'Token is missing'}), 401

        try:
            # Support both "Bearer <token>" and raw token formats
            token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header
            payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
            current_user_id = payload['user_id']
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except (jwt.InvalidTokenError, KeyError):
            return jsonify({'error': 'Token is invalid'}), 401

        return f(current_user_id, *args, **kwargs)
    return decorated
