from .theme_service import ThemeService
from .theme_tokens import (
    ThemeTokens,
    available_theme_tokens,
    build_application_qss,
    build_preferences_page_qss,
    build_theme_tokens,
    tokens_signature,
)

__all__ = [
    "ThemeService",
    "ThemeTokens",
    "available_theme_tokens",
    "build_application_qss",
    "build_preferences_page_qss",
    "build_theme_tokens",
    "tokens_signature",
]
