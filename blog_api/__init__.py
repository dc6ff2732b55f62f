# blog_api/__init__.py

# =====================================================================================
# 1. Load environment variables (must run first)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from typing import Optional, Dict, Any

from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - Configuration and security
from blog_api.core.config import config_by_name
from blog_api.core.errors import BlogError
from blog_api.core.security import init_jwt

# - API blueprints
from blog_api.api.posts.routes import posts_bp
from blog_api.api.users.routes import users_bp
from blog_api.api.uploads.routes import uploads_bp

# - Service modules
from blog_api.services.firestore_service import FirestoreCollection
from blog_api.services.storage_service import StorageService
from blog_api.api.posts.services import PostService
from blog_api.api.users.services import UserService

def _firestore_collections(app: Flask) -> Dict[str, Any]:
    """Initialise the Firebase app once and return the collections the services use."""
    if not firebase_admin._apps:
        cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        firebase_admin.initialize_app(credentials.Certificate(cred_path))
    return {
        'users': FirestoreCollection('users'),
        'posts': FirestoreCollection('posts'),
    }

def create_app(config_name: Optional[str] = None,
               collections: Optional[Dict[str, Any]] = None,
               test_config: Optional[Dict[str, Any]] = None):
    """
    Flask application factory.

    :param config_name: key of config_by_name; defaults to FLASK_ENV or 'development'
    :param collections: document stores for 'users' and 'posts'; Firestore is used when omitted
    :param test_config: config values applied on top of the selected config class
    """
    # =====================================================================================
    # 3. Flask app and base configuration
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if test_config:
        app.config.update(test_config)
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. Extensions and external services
    # =====================================================================================
    init_jwt(app)

    if collections is None:
        collections = _firestore_collections(app)

    # =====================================================================================
    # 5. Build service instances and keep them on 'app.services' (dependency injection)
    # =====================================================================================
    app.services = {}

    # 5-1. Shared services other services depend on
    try:
        storage_instance = StorageService()
        storage_instance.init_app(app)
        app.services['storage'] = storage_instance
        logging.info("Storage service initialized successfully")
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    # 5-2. Domain services
    app.services['posts'] = PostService(
        posts=collections['posts'],
        users=collections['users'],
        storage_service=app.services['storage']
    )
    app.services['users'] = UserService(
        users=collections['users'],
        storage_service=app.services['storage']
    )

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(uploads_bp, url_prefix='/uploads')

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(BlogError)
    def handle_blog_error(err):
        if err.status_code >= 500:
            logging.error(f"{err.error_code}: {err.message}", exc_info=True)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        response = {"error_code": err.name.upper().replace(' ', '_'), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # Anything no other handler took care of
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "An unexpected server error occurred."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. Logging and return
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(
            level=getattr(logging, app.config['LOG_LEVEL'].upper(), logging.INFO),
            format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        )

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
