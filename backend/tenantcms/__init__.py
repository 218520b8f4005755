import os

from flask import Flask, current_app, send_file
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .errors import register_error_handlers
from .extensions import db, jwt, migrate


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    config = config_by_name[config_name]
    app.config.from_object(config)
    app.config.update(overrides)

    missing = [key for key in getattr(config, "REQUIRED_SETTINGS", ()) if not app.config.get(key)]
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from . import models  # noqa: F401  registers tables on db.metadata
    from .auth import tokens  # noqa: F401  registers the jwt callbacks
    from .api.v1 import v1_bp

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix=app.config["API_PREFIX"])
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (public)
    # -------------------------------------------------
    @app.route("/openapi/cms.yaml", methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "cms_openapi.yaml",
        )
        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/cms.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Tenant CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.info("tenantcms started with %s config", config_name)
    return app
