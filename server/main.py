"""
server.main – FastAPI application entry point.

Builds the immutable Settings, the Gemini client, the prompt relay and the
panel assistant once, keeps them on ``app.state``, and registers the API
routes.

Start the server:
    uvicorn server.main:app --reload --port 8000
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from legal.assistant import LegalAssistant
from legal.errors    import InvalidInputError, RelayError
from legal.prompts   import SCENARIO_ROLES, TaskType
from legal.relay     import PromptRelay, RelayRequest, RelayResponse
from server.ai.gemini_client import GeminiClient
from server.config   import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ---------------------------------------------------------------------------
# Pydantic request / response models
# ---------------------------------------------------------------------------

class GeminiRequest(BaseModel):
    """Request body for /api/gemini."""
    type: str | None = Field(
        default=None,
        description="Task tag: simplify, chat, scenario, summary, keypoints, caseref, actions",
    )
    text: str | None = Field(default=None, description="Legal text or question")


class SimplifyRequest(BaseModel):
    text: str | None = Field(default=None, description="Legal text to simplify")


class ChatRequest(BaseModel):
    message:  str | None = Field(default=None, description="User question")
    document: str | None = Field(default=None, description="Optional uploaded document text")


class ScenarioRequest(BaseModel):
    scenario: str | None = Field(default=None, description="Free-text situation description")
    role:     str | None = Field(default=None, description="Caller's role, e.g. tenant")


class RelayAPIResponse(BaseModel):
    """{success, result} on success, {success, error} on failure."""
    success: bool
    result:  str | None = None
    error:   str | None = None


class TasksResponse(BaseModel):
    task_types:     list[str]
    scenario_roles: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _to_json(response: RelayResponse) -> JSONResponse:
    body = RelayAPIResponse(
        success=response.success, result=response.result, error=response.error
    )
    return JSONResponse(
        status_code=response.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def _run_panel(call: Awaitable[str]) -> JSONResponse:
    try:
        output = await call
    except InvalidInputError as exc:
        logger.info("Rejected panel request: %s", exc.message)
        return _to_json(RelayResponse.failed(exc))
    except RelayError as exc:
        logger.warning("Panel request failed (%s): %s", exc.__class__.__name__, exc.message)
        return _to_json(RelayResponse.failed(exc))
    return _to_json(RelayResponse.ok(output))


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Legal assistant relay starting (model=%s)", settings.gemini_model)
    if not settings.api_key_configured:
        logger.warning(
            "Gemini API key not configured. Set GEMINI_API_KEY in your "
            "environment or .env file; generation requests will fail until then."
        )
    yield
    logger.info("Legal assistant relay shutting down")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None, generator: Any = None) -> FastAPI:
    """
    Build the ASGI application.

    Args:
        settings   Configuration snapshot; read from the environment when None.
        generator  Object with ``async generate_content(prompt) -> str``;
                   a GeminiClient built from *settings* when None.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Legal Assistant – Prompt Relay API",
        version="1.0.0",
        description=(
            "Wraps legal text in task-specific prompt templates, relays it to "
            "a Gemini model, and returns the generated text."
        ),
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    relay = PromptRelay(settings, generator or GeminiClient.from_settings(settings))
    app.state.settings = settings
    app.state.relay = relay
    app.state.assistant = LegalAssistant(relay)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": f"Invalid request body: {detail}"},
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------

    @app.get("/api/health")
    async def health() -> dict[str, Any]:
        """Liveness probe; also reports whether a credential is configured."""
        return {
            "status": "ok",
            "model": settings.gemini_model,
            "configured": settings.api_key_configured,
        }

    @app.get("/api/tasks", response_model=TasksResponse)
    async def tasks() -> TasksResponse:
        """Recognised task tags and scenario-simulator roles."""
        return TasksResponse(
            task_types=[t.value for t in TaskType],
            scenario_roles=list(SCENARIO_ROLES),
        )

    @app.post("/api/gemini", response_model=RelayAPIResponse)
    async def gemini(payload: GeminiRequest) -> JSONResponse:
        """
        Relay {type, text} to the model.

        400 when text is missing or blank, 500 when the credential is not
        configured or the model call fails.  Unknown task types send the
        text as the literal prompt.
        """
        response = await relay.relay(RelayRequest(task_type=payload.type, text=payload.text))
        return _to_json(response)

    @app.post("/api/simplify", response_model=RelayAPIResponse)
    async def simplify(payload: SimplifyRequest) -> JSONResponse:
        """Policy-simplifier panel."""
        return await _run_panel(app.state.assistant.simplify(payload.text))

    @app.post("/api/chat", response_model=RelayAPIResponse)
    async def chat(payload: ChatRequest) -> JSONResponse:
        """Chat panel; an attached document is prefixed to the question."""
        return await _run_panel(app.state.assistant.chat(payload.message, payload.document))

    @app.post("/api/scenario", response_model=RelayAPIResponse)
    async def scenario(payload: ScenarioRequest) -> JSONResponse:
        """Scenario-simulator panel."""
        return await _run_panel(
            app.state.assistant.analyze_scenario(payload.scenario, payload.role)
        )

    return app


app = create_app()
