"""
Submission Gateway — FastAPI app that re-validates and stores form data.

Endpoints:
    POST /submit-form   validate {schema, data} and store it if valid
    GET  /submissions   list stored submissions (schema omitted)
    GET  /health        liveness check

The engine runs in SERVER mode here; whatever the client checked is
checked again.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dynform import __version__
from dynform.config import Settings, get_settings
from dynform.serialization import SchemaError, fields_from_list
from dynform.storage import InMemorySubmissionStore, SubmissionStore
from dynform.validation import ValidationMode, validate_form


logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str, **extra: Any) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def create_app(
    store: Optional[SubmissionStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the gateway app.

    Args:
        store: Submission store; a fresh in-memory store if omitted
        settings: Application settings; environment settings if omitted
    """
    settings = settings or get_settings()
    store = store if store is not None else InMemorySubmissionStore()

    app = FastAPI(
        title=settings.app_name,
        description="Validates dynamic form submissions against their schema",
        version=__version__,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/submit-form")
    async def submit_form(request: Request):
        try:
            try:
                body = await request.json()
            except ValueError:
                return _failure(400, "Request body must be valid JSON")

            schema = body.get("schema") if isinstance(body, dict) else None
            data = body.get("data") if isinstance(body, dict) else None

            if not isinstance(schema, list):
                return _failure(400, "Schema is required and must be an array")
            if not isinstance(data, dict):
                return _failure(400, "Data is required and must be an object")

            try:
                fields = fields_from_list(schema)
            except SchemaError as e:
                return _failure(400, str(e))

            errors = validate_form(fields, data, ValidationMode.SERVER)
            if errors:
                logger.info("Submission rejected, invalid fields: %s", ", ".join(errors))
                return _failure(400, "Validation failed", errors=errors)

            submission = store.append(fields, data)
            logger.info("Submission %d accepted", submission.id)

            return {
                "success": True,
                "message": "Form submitted successfully",
                "submissionId": submission.id,
            }
        except Exception:
            logger.exception("Error processing form submission")
            return _failure(500, "Internal server error")

    @app.get("/submissions")
    async def list_submissions():
        return {
            "success": True,
            "submissions": [s.summary() for s in store.list()],
        }

    @app.get("/health")
    async def health():
        return {"status": "OK", "message": "Form API is running"}

    return app


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the gateway with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info("Server running at http://%s:%d", host, port)
    logger.info("Available endpoints:")
    logger.info("  POST /submit-form - Submit form data")
    logger.info("  GET /submissions - List all submissions")
    logger.info("  GET /health - Health check")
    uvicorn.run(create_app(settings=settings), host=host, port=port, log_level=settings.log_level.lower())
