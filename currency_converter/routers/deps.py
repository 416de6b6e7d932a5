from fastapi import Request

from currency_converter.core.config import Settings
from currency_converter.services.session import ConverterSession


def get_session(request: Request) -> ConverterSession:
    return request.app.state.session


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
