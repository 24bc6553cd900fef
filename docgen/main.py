"""
FastAPI application for the document service.

This module provides the REST API endpoints that turn form-encoded tabular
data into downloadable CSV and XLSX documents.

API Endpoints:
    - GET /health: Health check
    - POST /csv: Generate a CSV document
    - POST /excel: Generate an XLSX document

Form fields ``data``, ``headers`` and ``styles`` carry JSON documents;
every other field is plain text.

Example:
    To run the server:
        uvicorn docgen.main:app

    Or programmatically:
        from docgen.main import run_server
        run_server(ServiceSettings(port=9000))
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated, Any

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Form, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import TypeAdapter, ValidationError

from docgen import __version__
from docgen.config import ServiceSettings
from docgen.exceptions.document_exceptions import (
    AuthenticationError,
    DocumentServiceError,
    InvalidFormDataError,
)
from docgen.models.document_models import (
    DelimitedRequest,
    ErrorResponse,
    GeneratedDocument,
    HealthResponse,
    SpreadsheetRequest,
    StyleSet,
)
from docgen.services.document_service import DocumentService

logger = logging.getLogger(__name__)

_ROWS_ADAPTER = TypeAdapter(list[list[Any]])
_HEADERS_ADAPTER = TypeAdapter(list[str])

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}

STATUS_CODE_MAP = {
    "UNAUTHORIZED": 401,
    "INVALID_DATA_FORMAT": 400,
    "INVALID_HEADERS_FORMAT": 400,
    "INVALID_STYLES_FORMAT": 400,
    "EMPTY_HEADERS": 400,
    "EMPTY_DATA": 400,
    "ROW_LENGTH_MISMATCH": 400,
    "INVALID_SHEET_NAME": 400,
    "STYLE_ERROR": 400,
    "PERMISSION_DENIED": 403,
    "WRITE_ERROR": 500,
    "SERIALIZATION_ERROR": 500,
}


def handle_document_error(error: DocumentServiceError) -> JSONResponse:
    """
    Convert DocumentServiceError to appropriate HTTP response.

    Args:
        error: The DocumentServiceError to convert.

    Returns:
        JSONResponse with appropriate status code and error details.
    """
    status_code = STATUS_CODE_MAP.get(error.error_code, 500)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            success=False,
            error_code=error.error_code,
            message=error.message,
            details=error.details,
        ).model_dump(),
    )


def get_service(request: Request) -> DocumentService:
    """
    Get the document service instance.

    Returns:
        The application's DocumentService.

    Raises:
        HTTPException: If the service is not initialized.
    """
    service = getattr(request.app.state, "document_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Document service is not initialized",
        )
    return service


async def require_api_key(
    request: Request,
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """
    Reject the request unless it carries the configured API key.

    Raises:
        AuthenticationError: If a key is configured and does not match.
    """
    settings: ServiceSettings = request.app.state.settings
    if settings.auth_enabled and x_api_key != settings.api_key:
        raise AuthenticationError()


def parse_form_json(raw: str | None, field: str, adapter: TypeAdapter) -> Any:
    """
    Decode a JSON form field.

    Args:
        raw: The raw form value.
        field: Field name used in the error code.
        adapter: TypeAdapter describing the expected shape.

    Returns:
        The decoded value.

    Raises:
        InvalidFormDataError: If the value is missing or malformed.
    """
    if raw is None:
        raise InvalidFormDataError(field=field, reason="field is required")
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise InvalidFormDataError(field=field, reason=str(e)) from e


def parse_auto_size(raw: str | None) -> bool:
    """
    Resolve the auto_size form field.

    Absent or empty means True. Values that are not a recognized boolean
    are ignored and leave auto-sizing off.
    """
    if raw is None or raw == "":
        return True
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        logger.warning("Ignoring unparseable auto_size value %r", raw)
    return False


def attachment(document: GeneratedDocument) -> Response:
    """Wrap a generated document in a download response."""
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
        },
    )


router = APIRouter(dependencies=[Depends(require_api_key)])


@router.get(
    "/health",
    tags=["System"],
    summary="Health check",
    response_model=HealthResponse,
)
async def health_check() -> HealthResponse:
    """
    Check the health status of the service.

    Returns:
        HealthResponse listing the available generators.
    """
    return HealthResponse(
        status="ok",
        services={
            "csv": "available",
            "excel": "available",
        },
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.post(
    "/csv",
    tags=["Documents"],
    summary="Generate a CSV document",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "The CSV document"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Missing or wrong API key"},
        500: {"model": ErrorResponse, "description": "Generation error"},
    },
)
async def generate_csv(
    service: Annotated[DocumentService, Depends(get_service)],
    data: Annotated[str | None, Form(description="JSON array of rows")] = None,
    headers: Annotated[str | None, Form(description="JSON array of header strings")] = None,
    filename: Annotated[str | None, Form(description="Download filename")] = None,
    delimiter: Annotated[str | None, Form(description="Single-character delimiter")] = None,
    encoding: Annotated[str | None, Form(description="Encoding label")] = None,
) -> Response:
    """
    Generate a CSV document from form-encoded tabular data.

    Returns:
        The CSV document as an attachment.
    """
    request = DelimitedRequest(
        rows=parse_form_json(data, "data", _ROWS_ADAPTER),
        headers=parse_form_json(headers, "headers", _HEADERS_ADAPTER),
        filename=filename,
        delimiter=delimiter,
        encoding=encoding,
    )

    try:
        document = service.generate_csv(request)
    except DocumentServiceError as e:
        logger.error("CSV generation error: %s", e)
        raise

    return attachment(document)


@router.post(
    "/excel",
    tags=["Documents"],
    summary="Generate an XLSX document",
    response_class=Response,
    responses={
        200: {
            "content": {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {}},
            "description": "The XLSX document",
        },
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Missing or wrong API key"},
        500: {"model": ErrorResponse, "description": "Generation error"},
    },
)
async def generate_excel(
    service: Annotated[DocumentService, Depends(get_service)],
    data: Annotated[str | None, Form(description="JSON array of rows")] = None,
    headers: Annotated[str | None, Form(description="JSON array of header strings")] = None,
    filename: Annotated[str | None, Form(description="Download filename")] = None,
    sheet_name: Annotated[str | None, Form(description="Sheet name")] = None,
    auto_size: Annotated[str | None, Form(description="Set a fixed column width")] = None,
    styles: Annotated[str | None, Form(description="JSON object of header/data styles")] = None,
) -> Response:
    """
    Generate an XLSX document from form-encoded tabular data.

    Returns:
        The XLSX document as an attachment.
    """
    style_set = None
    if styles:
        try:
            style_set = StyleSet.model_validate_json(styles)
        except ValidationError as e:
            raise InvalidFormDataError(field="styles", reason=str(e)) from e

    request = SpreadsheetRequest(
        rows=parse_form_json(data, "data", _ROWS_ADAPTER),
        headers=parse_form_json(headers, "headers", _HEADERS_ADAPTER),
        filename=filename,
        sheet_name=sheet_name,
        auto_size=parse_auto_size(auto_size),
        styles=style_set,
    )

    try:
        document = service.generate_excel(request)
    except DocumentServiceError as e:
        logger.error("Excel generation error: %s", e)
        raise

    return attachment(document)


def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings. Read from the environment if None.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or ServiceSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the document service on startup and drop it on shutdown."""
        app.state.document_service = DocumentService()
        if settings.auth_enabled:
            logger.info("API key authentication enabled")
        else:
            logger.info("Running in open access mode (no API key required)")
        yield
        app.state.document_service = None

    app = FastAPI(
        title="Document Generation Service",
        description="""
    Turns tabular data into downloadable documents.

    ## Formats

    - **CSV**: configurable single-character delimiter, minimal quoting
    - **XLSX**: single sheet, native cell types, header/data styles, fixed column widths
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DocumentServiceError)
    async def document_error_handler(request: Request, exc: DocumentServiceError) -> JSONResponse:
        return handle_document_error(exc)

    app.include_router(router)
    return app


app = create_app()


def run_server(settings: ServiceSettings | None = None) -> None:
    """
    Run the FastAPI server.

    Args:
        settings: Service settings. Read from the environment if None.

    Example:
        from docgen.main import run_server
        run_server(ServiceSettings(host="127.0.0.1", port=8080))
    """
    settings = settings or ServiceSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Document generation service starting on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run_server()
