"""
API routes for the SwiftCard service.

Flask REST API endpoints for field extraction and saved business cards.
"""

import logging
from typing import Optional

from flask import Blueprint, request, jsonify, send_file, send_from_directory

from swiftcard.editor import CardEditor
from swiftcard.exceptions import CardNotFoundError, UnknownProfileError
from swiftcard.export import export_cards_csv
from swiftcard.models import BusinessCard
from swiftcard.ocr import OCRExtractor
from swiftcard.parser import BUSINESS_CARD, available_profiles
from swiftcard.pipeline import CardScanPipeline
from swiftcard.repository import BusinessCardRepository
from swiftcard.storage import ImageStore
from config import Config

logger = logging.getLogger(__name__)

# Create Blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")

# Shared instances (lazy initialization)
_pipeline: Optional[CardScanPipeline] = None
_image_store: Optional[ImageStore] = None


def get_pipeline() -> CardScanPipeline:
    """Get or create pipeline instance.

    Returns:
        CardScanPipeline instance
    """
    global _pipeline

    if _pipeline is None:
        _pipeline = CardScanPipeline(
            ocr=OCRExtractor(
                languages=Config.OCR_LANGUAGES,
                gpu=Config.OCR_GPU,
                model_dir=Config.OCR_MODEL_DIR
            ),
            repository=BusinessCardRepository(),
            default_profile=Config.DEFAULT_PROFILE,
            drop_noise=Config.DROP_NOISE_LINES
        )
        logger.info("Pipeline initialized")

    return _pipeline


def get_image_store() -> ImageStore:
    """Get or create the card image store."""
    global _image_store

    if _image_store is None:
        _image_store = ImageStore(folder=Config.UPLOAD_FOLDER, base_url="/api/images")

    return _image_store


def get_editor() -> CardEditor:
    return CardEditor(get_pipeline().repository, get_image_store())


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed.

    Args:
        filename: Name of the file

    Returns:
        True if allowed, False otherwise
    """
    return Config.is_allowed_file(filename)


def _error(message: str, status: int):
    return jsonify({
        "success": False,
        "error": message
    }), status


def _uploaded_image():
    """Return (file, error_response) for the 'file' form field."""
    if "file" not in request.files:
        return None, _error("No file provided. Use 'file' field in form-data.", 400)

    file = request.files["file"]

    if file.filename == "":
        return None, _error("No file selected", 400)

    if not allowed_file(file.filename):
        return None, _error(
            f"File type not allowed. Allowed: {', '.join(sorted(Config.ALLOWED_EXTENSIONS))}", 400
        )

    return file, None


@api_bp.errorhandler(UnknownProfileError)
def handle_unknown_profile(error):
    return _error(f"{error.message}. Available: {', '.join(available_profiles())}", 400)


@api_bp.errorhandler(CardNotFoundError)
def handle_card_not_found(error):
    return _error(error.message, 404)


@api_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint.

    Returns:
        JSON with health status
    """
    return jsonify({
        "success": True,
        "status": "healthy",
        "message": "SwiftCard API is running",
        "version": "1.0.0"
    }), 200


@api_bp.route("/status", methods=["GET"])
def get_status():
    """Get API and pipeline status.

    Returns:
        JSON with status information
    """
    try:
        pipeline = get_pipeline()
        status = pipeline.get_status()

        return jsonify({
            "success": True,
            "data": {
                "api_status": "running",
                "pipeline_status": status
            }
        }), 200

    except Exception as e:
        logger.error(f"Error getting status: {str(e)}")
        return _error(str(e), 500)


@api_bp.route("/profiles", methods=["GET"])
def list_profiles():
    """List the available extraction profiles."""
    return jsonify({
        "success": True,
        "data": {
            "profiles": available_profiles(),
            "default": Config.DEFAULT_PROFILE
        }
    }), 200


@api_bp.route("/parse-text", methods=["POST"])
def parse_text():
    """Extract fields from already recognized text.

    Expects:
        JSON {"text": "<lines>" | ["line", ...], "profile": "business_card" | "id_card"}

    Returns:
        JSON with the extracted field mapping
    """
    data = request.get_json(silent=True)

    if not data:
        return _error("No JSON data provided", 400)

    if "text" not in data:
        return _error("Missing 'text' field", 400)

    text = data["text"]
    if text is not None and not isinstance(text, (str, list)):
        return _error("'text' must be a string or a list of lines", 400)

    result = get_pipeline().process_text(text, profile=data.get("profile"))
    return jsonify(result), 200


@api_bp.route("/process", methods=["POST"])
def process_image():
    """Run OCR on an uploaded card image and extract fields.

    Expects:
        - multipart/form-data with 'file' field
        - Optional query param: profile=business_card/id_card

    Returns:
        JSON with extracted fields
    """
    file, error = _uploaded_image()
    if error:
        return error

    profile = request.args.get("profile")

    try:
        logger.info(f"Processing uploaded file: {file.filename} (profile={profile})")
        result = get_pipeline().process_image(file.read(), profile=profile)
        return jsonify(result), 200 if result.get("success") else 422

    except UnknownProfileError:
        raise
    except Exception as e:
        logger.error(f"Error processing file: {str(e)}")
        return _error(str(e), 500)


@api_bp.route("/cards", methods=["GET"])
def list_cards():
    """List all saved business cards."""
    cards = get_pipeline().repository.list_all()
    return jsonify({
        "success": True,
        "data": {
            "cards": [card.to_dict() for card in cards],
            "count": len(cards)
        }
    }), 200


@api_bp.route("/cards", methods=["POST"])
def create_card():
    """Save a business card (new when no id is given)."""
    data = request.get_json(silent=True)

    if not data:
        return _error("No JSON data provided", 400)

    card = get_pipeline().repository.save(BusinessCard.from_dict(data))
    return jsonify({
        "success": True,
        "data": card.to_dict()
    }), 201


@api_bp.route("/cards/scan", methods=["POST"])
def scan_card():
    """Extract business-card fields from text and save them as a card.

    Expects:
        JSON {"text": "...", "id": "<optional existing card id>"}
    """
    data = request.get_json(silent=True)

    if not data or "text" not in data:
        return _error("Missing 'text' field", 400)

    pipeline = get_pipeline()
    result = pipeline.process_text(data["text"], profile=BUSINESS_CARD)

    editor = get_editor()
    if data.get("id"):
        if not editor.load(data["id"]).success:
            raise CardNotFoundError(data["id"])
    else:
        editor.new_card()
    card = editor.apply_extraction(result["fields"])

    if not (card.name or card.company or card.title):
        return jsonify({
            "success": False,
            "error": "No card details found in text",
            "fields": result["fields"]
        }), 422

    saved = editor.save()
    if not saved.success:
        return _error(saved.message, 500)

    return jsonify({
        "success": True,
        "data": saved.value.to_dict(),
        "fields": result["fields"]
    }), 201


@api_bp.route("/cards/export", methods=["GET"])
def export_cards():
    """Download all saved cards as CSV."""
    try:
        cards = get_pipeline().repository.list_all()
        path = export_cards_csv(cards, output_folder=Config.OUTPUT_FOLDER)
        return send_file(
            path.resolve(),
            mimetype="text/csv",
            as_attachment=True,
            download_name=path.name
        )

    except Exception as e:
        logger.error(f"Error exporting cards: {str(e)}")
        return _error(str(e), 500)


@api_bp.route("/cards/<card_id>", methods=["GET"])
def get_card(card_id: str):
    card = get_pipeline().repository.require(card_id)
    return jsonify({
        "success": True,
        "data": card.to_dict()
    }), 200


@api_bp.route("/cards/<card_id>", methods=["PUT"])
def update_card(card_id: str):
    """Edit name, company and title of a saved card."""
    data = request.get_json(silent=True)

    if not data:
        return _error("No JSON data provided", 400)

    editor = get_editor()
    if not editor.load(card_id).success:
        raise CardNotFoundError(card_id)

    changes = {k: str(data[k] or "") for k in BusinessCard.EDITABLE_FIELDS if k in data}
    editor.update(**changes)

    result = editor.save()
    if not result.success:
        return _error(result.message, 500)

    return jsonify({
        "success": True,
        "data": result.value.to_dict()
    }), 200


@api_bp.route("/cards/<card_id>", methods=["DELETE"])
def delete_card(card_id: str):
    if not get_pipeline().repository.delete(card_id):
        raise CardNotFoundError(card_id)
    return jsonify({
        "success": True,
        "message": f"Deleted {card_id}"
    }), 200


@api_bp.route("/cards/<card_id>/image", methods=["POST"])
def upload_card_image(card_id: str):
    """Attach an image to a saved card.

    Expects:
        multipart/form-data with 'file' field
    """
    file, error = _uploaded_image()
    if error:
        return error

    editor = get_editor()
    if not editor.load(card_id).success:
        raise CardNotFoundError(card_id)

    extension = file.filename.rsplit(".", 1)[1].lower()
    result = editor.attach_image(file.read(), extension)

    if not result.success:
        return jsonify({
            "success": False,
            "error": result.message,
            "messages": editor.messages
        }), 400

    return jsonify({
        "success": True,
        "data": result.value.to_dict(),
        "messages": editor.messages
    }), 200


@api_bp.route("/images/<path:filename>", methods=["GET"])
def get_image(filename: str):
    """Serve a stored card image."""
    store = get_image_store()
    if store.path_for(filename) is None:
        return _error("Image not found", 404)
    return send_from_directory(store.folder.resolve(), filename)
