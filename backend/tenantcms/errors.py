from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from tenantcms.domain.errors import CMSError, InternalError


def register_error_handlers(app):
    @app.errorhandler(CMSError)
    def handle_cms_error(error):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s", type(error).__name__, error.message)
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": (error.name or "http_error").lower().replace(" ", "_"),
            "message": error.description,
        })
        response.status_code = error.code or 500
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled error")
        response = jsonify(InternalError().to_dict())
        response.status_code = 500
        return response
