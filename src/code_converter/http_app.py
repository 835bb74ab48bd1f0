"""FastAPI app exposing the conversion endpoint."""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import ConverterSettings
from .lifespan import lifespan_manager
from .models.requests import ConvertRequest, ConvertResponse
from .observability.logger import get_logger
from .services.conversion_service import CodeConversionService

logger = get_logger(__name__)

EMPTY_SOURCE_ERROR = "Source code cannot be empty"


def get_conversion_service(request: Request) -> CodeConversionService:
    service = getattr(request.app.state, "conversion_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="conversion_service_unavailable")
    return service


def create_app(settings: ConverterSettings | None = None) -> FastAPI:
    # CORS origins are read without provider validation; credentials are checked at startup.
    settings = settings or ConverterSettings()

    app = FastAPI(title="AI Code Converter Service", version="0.1.0", lifespan=lifespan_manager)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.post(
        "/api/convert",
        response_model=ConvertResponse,
        summary="Convert code between programming languages",
        responses={
            400: {"model": ConvertResponse, "description": "Source code is empty or missing"},
            500: {"model": ConvertResponse, "description": "Model endpoint failure or conversion error"},
        },
    )
    async def convert_code(
        payload: ConvertRequest,
        response: Response,
        service: CodeConversionService = Depends(get_conversion_service),
    ) -> ConvertResponse:
        logger.info(
            "conversion_requested",
            source_language=payload.sourceLanguage,
            target_language=payload.targetLanguage,
        )
        if not payload.has_source_code():
            logger.warning("conversion_rejected", reason="empty_source_code")
            response.status_code = status.HTTP_400_BAD_REQUEST
            return ConvertResponse.failure(EMPTY_SOURCE_ERROR)

        result = await service.convert(payload.to_domain())
        if not result.success:
            response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return ConvertResponse.from_result(result)

    return app


app = create_app()
