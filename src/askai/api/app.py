"""HTTP surface of the assistant service."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..auth import AccessTokenClaims, TokenIssuer
from ..chat import (
    ApplySuggestionRequest,
    ApplySuggestionResponse,
    AskAIRequest,
    AskAIResponse,
    ChatOrchestrator,
    ChatRequest,
    ChatResponse,
    CodeAssistant,
    SuggestionEngine,
)
from ..errors import AskAIError, AuthError

logger = logging.getLogger(__name__)

SERVICE_NAME = "askai-service"


class TokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    license_cert: Any = Field(default=None, alias="licenseCert")


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")


def create_app(
    token_issuer: TokenIssuer,
    orchestrator: ChatOrchestrator,
    assistant: CodeAssistant,
    suggestions: SuggestionEngine,
    cors_origins: list[str] | None = None,
    on_shutdown: Callable[[], Awaitable[None]] | None = None
) -> FastAPI:
    """Build the FastAPI application.

    Protected routes are served both at the root and under ``/v1``.

    Args:
        token_issuer: Issues and verifies bearer tokens
        orchestrator: Runs chat turns
        assistant: Answers ask-ai questions
        suggestions: Resolves stored suggestions
        cors_origins: Allowed CORS origins (default: all)
        on_shutdown: Coroutine releasing provider connections
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        if on_shutdown is not None:
            await on_shutdown()

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        req_id = uuid4().hex[:8]
        request.state.req_id = req_id
        start = time.perf_counter()
        auth = "present" if request.headers.get("authorization") else "absent"
        logger.info("[askai:%s] %s %s auth=%s", req_id, request.method, request.url.path, auth)
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("[askai:%s] -> %s %.0fms", req_id, response.status_code, elapsed_ms)
        return response

    def require_auth(authorization: str | None = Header(default=None)) -> AccessTokenClaims:
        return token_issuer.verify(TokenIssuer.bearer_token(authorization))

    _install_error_handlers(app)

    public = APIRouter()

    @public.post("/auth/token", response_model=TokenResponse, response_model_by_alias=True)
    async def issue_token(body: TokenRequest | None = None) -> TokenResponse:
        license_cert = body.license_cert if body else None
        token = token_issuer.issue(license_cert if isinstance(license_cert, str) else None)
        logger.info("issued access token")
        return TokenResponse(access_token=token)

    @public.get("/healthz")
    async def healthz() -> dict[str, bool]:
        return {"ok": True}

    @public.get("/")
    async def root() -> dict[str, Any]:
        return {"ok": True, "service": SERVICE_NAME}

    protected = APIRouter(dependencies=[Depends(require_auth)])

    @protected.post("/ask-ai", response_model=AskAIResponse)
    async def ask_ai(body: AskAIRequest | None = None) -> AskAIResponse:
        return await assistant.ask(body)

    @protected.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
    async def chat(body: ChatRequest | None = None) -> ChatResponse:
        return await orchestrator.respond(body)

    @protected.post("/chat/apply-suggestion", response_model=ApplySuggestionResponse)
    async def apply_suggestion(body: ApplySuggestionRequest | None = None) -> ApplySuggestionResponse:
        body = body or ApplySuggestionRequest()
        return suggestions.apply(body.session_id, body.suggestion_id)

    app.include_router(public)
    app.include_router(protected)
    app.include_router(protected, prefix="/v1")
    return app


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AskAIError)
    async def handle_service_error(request: Request, exc: AskAIError) -> JSONResponse:
        if isinstance(exc, AuthError):
            logger.info("[askai:%s] unauthorized", getattr(request.state, "req_id", "-"))
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{location}: {first.get('msg')}" if location else "Invalid request body"
        return JSONResponse(status_code=400, content={"code": 400, "message": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            content = {"code": 404, "message": "Not found", "path": request.url.path}
        else:
            content = {"code": exc.status_code, "message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content)
