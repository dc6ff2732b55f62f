# blog_api/api/uploads/routes.py

from flask import Blueprint, current_app, send_from_directory

# Thumbnails and avatars are referenced from records by blob name and fetched from here.
uploads_bp = Blueprint('uploads', __name__)

@uploads_bp.route('/<path:name>', methods=['GET'])
def get_upload(name: str):
    """
    Serve a stored blob. Unknown names answer 404.
    """
    storage_service = current_app.services['storage']
    return send_from_directory(storage_service.upload_folder, name)
