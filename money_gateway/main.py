import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from money_gateway.ai.generator import GeminiGenerator, TextGenerator
from money_gateway.api.errors import register_exception_handlers
from money_gateway.api.generation import router as generation_router
from money_gateway.api.health import router as health_router
from money_gateway.api.payments import router as payments_router
from money_gateway.api.websocket import router as websocket_router
from money_gateway.config import Settings, get_settings
from money_gateway.services.dispatcher import NotificationDispatcher
from money_gateway.services.payments import RazorpayService
from money_gateway.services.streaming import StreamRelay

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Gateway starting...")

    if settings.payments_configured:
        logger.info("Razorpay configured (key id %s)", settings.razorpay_key_id)
    else:
        logger.warning("Razorpay keys not configured (payment endpoints will answer 500)")

    if settings.generator_configured:
        logger.info("Generation model: %s", settings.llm_model)
    else:
        logger.warning("GEMINI_API_KEY not configured (generation endpoints will answer 500)")

    yield

    logger.info("Gateway shutting down (%d listener(s) connected)", app.state.dispatcher.subscriber_count)


def create_app(
    settings: Optional[Settings] = None,
    payments: Optional[RazorpayService] = None,
    generator: Optional[TextGenerator] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are read once and shared by every service. Provider clients
    can be passed in to replace the real ones.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="Money Gateway", lifespan=lifespan)

    generator = generator or GeminiGenerator(settings)
    app.state.settings = settings
    app.state.dispatcher = NotificationDispatcher(queue_size=settings.notification_queue_size)
    app.state.payments = payments or RazorpayService(settings)
    app.state.generator = generator
    app.state.relay = StreamRelay(generator)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(payments_router)
    app.include_router(generation_router)
    app.include_router(websocket_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    uvicorn.run(
        "money_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
