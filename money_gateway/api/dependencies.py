"""
FastAPI dependencies.

Services are built once in create_app() and kept on app.state; these
functions hand them to the endpoints.
"""
from fastapi.requests import HTTPConnection

from money_gateway.ai.generator import TextGenerator
from money_gateway.config import Settings
from money_gateway.services.dispatcher import NotificationDispatcher
from money_gateway.services.payments import RazorpayService
from money_gateway.services.streaming import StreamRelay


def get_app_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings


def get_dispatcher(conn: HTTPConnection) -> NotificationDispatcher:
    return conn.app.state.dispatcher


def get_payments(conn: HTTPConnection) -> RazorpayService:
    return conn.app.state.payments


def get_generator(conn: HTTPConnection) -> TextGenerator:
    return conn.app.state.generator


def get_relay(conn: HTTPConnection) -> StreamRelay:
    return conn.app.state.relay
