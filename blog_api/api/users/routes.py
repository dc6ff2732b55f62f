# blog_api/api/users/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from blog_api.api.users.schemas import (
    RegisterSchema,
    LoginSchema,
    UserEditSchema,
    UserPublicResponseSchema,
    LoginResponseSchema,
    RegisterResponseSchema,
)
from blog_api.core.errors import BlogError
from blog_api.core.security import current_caller
from blog_api.models.attachment import Attachment

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('/register', methods=['POST'])
def register():
    """Create an account. Responds 201 with a welcome message."""
    user_service = current_app.services['users']
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    result = user_service.register(data['name'], data['email'], data['password'], data['password2'])
    return jsonify(RegisterResponseSchema().dump(result)), 201

@users_bp.route('/login', methods=['POST'])
def login():
    user_service = current_app.services['users']
    data = LoginSchema().load(request.get_json(silent=True) or {})
    result = user_service.login(data['email'], data['password'])
    return jsonify(LoginResponseSchema().dump(result)), 200

@users_bp.route('/', methods=['GET'])
def get_authors():
    """Every author, without password hashes."""
    user_service = current_app.services['users']
    authors = user_service.get_authors()
    return jsonify(UserPublicResponseSchema(many=True).dump(authors)), 200

@users_bp.route('/<string:user_id>', methods=['GET'])
def get_user_profile(user_id: str):
    user_service = current_app.services['users']
    user_profile = user_service.get_user_profile(user_id)
    return jsonify(UserPublicResponseSchema().dump(user_profile)), 200

@users_bp.route('/change-avatar', methods=['POST'])
@jwt_required()
def change_avatar():
    """
    Replace the logged-in user's avatar with the uploaded 'avatar' file.
    """
    user_service = current_app.services['users']
    caller = current_caller()
    file = request.files.get('avatar')
    avatar = Attachment.from_file_storage(file) if file and file.filename else None
    try:
        updated_user = user_service.change_avatar(caller.id, avatar)
        return jsonify(UserPublicResponseSchema().dump(updated_user)), 200
    except BlogError:
        raise
    except Exception as e:
        logging.error(f"Error while changing avatar (user_id: {caller.id}): {e}", exc_info=True)
        return jsonify({"error_code": "AVATAR_UPDATE_FAILED", "message": "Avatar couldn't be changed."}), 500

@users_bp.route('/edit-user', methods=['PATCH'])
@jwt_required()
def edit_user():
    """
    Update the logged-in user's name, email and password.
    """
    user_service = current_app.services['users']
    caller = current_caller()
    data = UserEditSchema().load(request.get_json(silent=True) or {})
    updated_user = user_service.edit_user(
        caller.id, data['name'], data['email'], data['current_password'],
        data['new_password'], data['confirm_new_password']
    )
    return jsonify(UserPublicResponseSchema().dump(updated_user)), 200
