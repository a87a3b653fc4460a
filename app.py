"""
SwiftCard API - Flask Application Entry Point.

Extracts contact and ID-card fields from OCR text and keeps a store of
scanned business cards.
"""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config, get_config
from api.routes import api_bp

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_INFO = {
    "name": "SwiftCard API",
    "version": "1.0.0",
    "description": "Extract business card and ID card fields from scanned text",
    "endpoints": {
        "health": "/api/health",
        "status": "/api/status",
        "profiles": "GET /api/profiles",
        "parse_text": "POST /api/parse-text",
        "process_image": "POST /api/process",
        "list_cards": "GET /api/cards",
        "create_card": "POST /api/cards",
        "scan_card": "POST /api/cards/scan",
        "card": "GET|PUT|DELETE /api/cards/<id>",
        "card_image": "POST /api/cards/<id>/image",
        "export": "GET /api/cards/export"
    }
}


def create_app(config_name: str = None) -> Flask:
    """Application factory for creating Flask app.
    
    Args:
        config_name: Configuration name (development, production, testing)
        
    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    
    # Load configuration
    config_class = get_config(config_name)
    config_class.init_app(app)
    
    # Enable CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })
    
    # Register blueprints
    app.register_blueprint(api_bp)
    
    @app.route("/")
    def index():
        """API information at the root."""
        return jsonify(API_INFO)
    
    @app.route("/api/info")
    def api_info():
        """API information endpoint."""
        return jsonify(API_INFO)
    
    # Favicon handler (prevents 404 errors from browsers)
    @app.route("/favicon.ico")
    def favicon():
        """Return empty response for favicon requests."""
        return "", 204
    
    # Global error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({
            "success": False,
            "error": "Not found"
        }), 404
    
    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle unsupported methods."""
        return jsonify({
            "success": False,
            "error": "Method not allowed"
        }), 405
    
    @app.errorhandler(413)
    def request_entity_too_large(error):
        """Handle file too large errors."""
        return jsonify({
            "success": False,
            "error": f"File too large. Maximum size: {Config.MAX_CONTENT_LENGTH // (1024*1024)}MB"
        }), 413
    
    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal error: {str(error)}")
        return jsonify({
            "success": False,
            "error": "Internal server error"
        }), 500
    
    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # HTTP errors keep their own status code
        if hasattr(error, 'code') and isinstance(error.code, int) and error.code < 500:
            return jsonify({
                "success": False,
                "error": getattr(error, "description", str(error))
            }), error.code
        logger.error(f"Uncaught exception: {str(error)}", exc_info=True)
        return jsonify({
            "success": False,
            "error": "An unexpected error occurred"
        }), 500
    
    logger.info(f"Application created with config: {config_class.__name__}")
    
    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    # Get port from environment or default to 5000
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("SWIFTCARD_DEBUG", "True").lower() == "true"
    
    logger.info(f"Starting server on port {port}, debug={debug}")
    
    app.run(
        host="0.0.0.0",
        port=port,
        debug=debug
    )
