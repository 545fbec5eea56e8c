from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.schemas import ChatErrorResponse, ChatRequest, ChatResponse, ErrorBody
from config.settings import Settings, get_settings
from mentor.core.errors import FALLBACK_DETAIL, ProviderError, classify_error
from mentor.core.prompt import build_prompt
from mentor.llm import generator_factory


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("mentor")

MESSAGE_REQUIRED = "Message is required and must be a string"
KEY_NOT_CONFIGURED = "GEMINI_API_KEY is not configured"

app = FastAPI(title="Stackrealm Mentor Chat API", version="1.0.0")

# CORS: allow local frontend during development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    history_error = None
    for err in errors:
        loc = tuple(err.get("loc") or ())
        if err.get("type") == "json_invalid":
            return "Request body must be valid JSON"
        if len(loc) > 1 and loc[1] == "conversationHistory":
            if history_error is None:
                field = ".".join(str(part) for part in loc[1:])
                history_error = f"Invalid {field}: {err.get('msg')}"
            continue
        return MESSAGE_REQUIRED
    return history_error or MESSAGE_REQUIRED


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc.errors())
    logger.warning("Rejected chat request: %s", message)
    return JSONResponse(status_code=400, content=ErrorBody(error=message).model_dump())


@app.post(
    "/api/ai-chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorBody}, 500: {"model": ChatErrorResponse}},
)
def ai_chat(
    req: ChatRequest,
    settings: Settings = Depends(get_settings),
    make_generator=Depends(generator_factory),
):
    history = req.conversation_history or []
    logger.info(
        "Incoming chat: message_len=%s history_turns=%s",
        len(req.message),
        len(history),
    )

    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY is not set")
        return JSONResponse(
            status_code=500, content=ErrorBody(error=KEY_NOT_CONFIGURED).model_dump()
        )

    try:
        generator = make_generator(settings)
        prompt = build_prompt(req.message, history)
        logger.info("Sending to Gemini...")
        text = generator.generate(prompt)
    except Exception as e:
        detail = e.detail if isinstance(e, ProviderError) else (str(e) or FALLBACK_DETAIL)
        logger.exception("Detailed API error: %s", detail)
        body = ChatErrorResponse(error=detail, response=classify_error(detail))
        return JSONResponse(status_code=500, content=body.model_dump())

    logger.info("Gemini response received: %s...", text[:100])
    return ChatResponse(response=text)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
