# blog_api/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from blog_api.api.posts.schemas import PostFormSchema, PostResponseSchema, MessageResponseSchema
from blog_api.core.errors import BlogError
from blog_api.core.security import current_caller
from blog_api.models.attachment import Attachment

posts_bp = Blueprint('posts_bp', __name__)

def _thumbnail_from_request():
    """The uploaded 'thumbnail' file as an Attachment, or None when the form has none."""
    file = request.files.get('thumbnail')
    if not file or not file.filename:
        return None
    return Attachment.from_file_storage(file)

@posts_bp.route('/', methods=['POST'])
@jwt_required()
def create_post():
    """
    Create a new post from a multipart form (title, category, description, thumbnail).
    - Responds 201 Created with the stored post.
    """
    post_service = current_app.services['posts']
    caller = current_caller()
    data = PostFormSchema().load(request.form.to_dict())
    try:
        new_post = post_service.create_post(
            data['title'], data['category'], data['description'],
            _thumbnail_from_request(), caller.id
        )
        return jsonify(PostResponseSchema().dump(new_post)), 201
    except BlogError:
        raise
    except Exception as e:
        logging.error(f"Error while creating post (user_id: {caller.id}): {e}", exc_info=True)
        return jsonify({"error_code": "POST_CREATION_FAILED", "message": "Post could not be created."}), 500

@posts_bp.route('/', methods=['GET'])
def get_posts():
    """All posts, most recently updated first."""
    post_service = current_app.services['posts']
    posts = post_service.get_posts()
    return jsonify(PostResponseSchema(many=True).dump(posts)), 200

@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    post_service = current_app.services['posts']
    post = post_service.get_post_by_id(post_id)
    return jsonify(PostResponseSchema().dump(post)), 200

@posts_bp.route('/<string:post_id>', methods=['PATCH'])
@jwt_required()
def update_post(post_id: str):
    """
    Edit a post (author only). A 'thumbnail' file in the form replaces the current image.
    """
    post_service = current_app.services['posts']
    caller = current_caller()
    data = PostFormSchema().load(request.form.to_dict())
    updated_post = post_service.update_post(
        post_id, data['title'], data['category'], data['description'],
        _thumbnail_from_request(), caller.id
    )
    return jsonify(PostResponseSchema().dump(updated_post)), 200

@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@jwt_required()
def delete_post(post_id: str):
    """
    Delete a post and its thumbnail (author only).
    """
    post_service = current_app.services['posts']
    caller = current_caller()
    message = post_service.delete_post(post_id, caller.id)
    return jsonify(MessageResponseSchema().dump({"message": message})), 200

@posts_bp.route('/categories/<string:category>', methods=['GET'])
def get_category_posts(category: str):
    post_service = current_app.services['posts']
    posts = post_service.get_posts_by_category(category)
    return jsonify(PostResponseSchema(many=True).dump(posts)), 200

@posts_bp.route('/users/<string:user_id>', methods=['GET'])
def get_user_posts(user_id: str):
    """Posts written by one author, newest first."""
    post_service = current_app.services['posts']
    posts = post_service.get_posts_by_creator(user_id)
    return jsonify(PostResponseSchema(many=True).dump(posts)), 200
