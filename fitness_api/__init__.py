from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .logger import configure_logging, register_request_logging
from models import storage  # DBStorage singleton (scoped_session)
from utils.tokens import TokenService

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Fitness Tracker API",
        "version": "1.0.0",
        "description": "REST API for users, attendance, workouts, workout plans and logged activities.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Tests build an isolated app (and a fresh database) per call.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))

    configure_logging(app)
    register_request_logging(app)

    # Signing secrets are read once here and handed to the service
    app.extensions["token_service"] = TokenService(
        access_secret=app.config["JWT_ACCESS_SECRET"],
        refresh_secret=app.config["JWT_REFRESH_SECRET"],
        access_expires=app.config["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=app.config["REFRESH_TOKEN_EXPIRES"],
        algorithm=app.config["JWT_ALGORITHM"],
    )

    storage.reload(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))

    # Cross-Origin Resource Sharing; cookies need credentials support
    origins = app.config.get("CORS_ORIGINS", "*")
    if origins != "*":
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .attendance import bp as attendance_bp
    from .users import bp as users_bp
    from .admin import bp as admin_bp
    from .workouts import bp as workouts_bp
    from .activities import bp as activities_bp
    from .workout_plans import bp as workout_plans_bp
    from .cli import register_commands

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/user")
    app.register_blueprint(attendance_bp, url_prefix="/user")
    app.register_blueprint(users_bp, url_prefix="/user")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(workouts_bp, url_prefix="/workout")
    app.register_blueprint(activities_bp, url_prefix="/activity")
    app.register_blueprint(workout_plans_bp, url_prefix="/workout-plan")
    register_commands(app)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Fitness Tracker API is running",
            "docs": "/apidocs/",
            "health": "/health",
        }, 200

    return app
