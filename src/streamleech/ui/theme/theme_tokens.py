from __future__ import annotations

from dataclasses import asdict, dataclass
import hashlib
import json

from ...app_settings.defaults import AVAILABLE_THEMES, DEFAULT_THEME


def _normalize_hex(value: object, fallback: str) -> str:
    text = str(value or "").strip()
    if not text:
        return fallback
    if not text.startswith("#"):
        text = f"#{text}"
    if len(text) not in (4, 7):
        return fallback
    chars = text[1:]
    if len(text) == 4:
        chars = "".join(ch * 2 for ch in chars)
    if not all(ch in "0123456789abcdefABCDEF" for ch in chars):
        return fallback
    return f"#{chars.lower()}"


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    text = _normalize_hex(value, "#000000")
    return int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16)


def _rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#{:02x}{:02x}{:02x}".format(max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))


def _mix(a: str, b: str, t: float) -> str:
    ar, ag, ab = _hex_to_rgb(a)
    br, bg, bb = _hex_to_rgb(b)
    t = max(0.0, min(1.0, float(t)))
    return _rgb_to_hex(
        int(round(ar + (br - ar) * t)),
        int(round(ag + (bg - ag) * t)),
        int(round(ab + (bb - ab) * t)),
    )


def _relative_luma(color: str) -> float:
    r, g, b = _hex_to_rgb(color)
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0


def _contrast_fg(bg: str, *, dark: str = "#111111", light: str = "#ffffff", threshold: float = 0.58) -> str:
    return dark if _relative_luma(bg) >= threshold else light


@dataclass(frozen=True)
class ThemeTokens:
    theme_name: str
    dark_mode: bool
    accent: str
    text: str
    text_muted: str
    text_on_accent: str
    window_bg: str
    panel_bg: str
    input_bg: str
    button_bg: str
    border: str
    error: str
    radius_md: int
    radius_lg: int
    space_xs: int
    space_sm: int
    space_md: int
    input_height: int


_PALETTES: dict[str, dict[str, str]] = {
    "Dark": {"window_bg": "#1f2126", "text": "#e6e6e6", "accent": "#9146ff", "error": "#ff6b6b"},
    "Light": {"window_bg": "#f6f7fb", "text": "#1f2630", "accent": "#6441a5", "error": "#c62828"},
    "High Contrast": {"window_bg": "#000000", "text": "#ffffff", "accent": "#ffd400", "error": "#ff4040"},
}


def build_theme_tokens(theme_id: str) -> ThemeTokens:
    name = theme_id if theme_id in _PALETTES else DEFAULT_THEME
    palette = _PALETTES[name]
    window_bg = palette["window_bg"]
    text = palette["text"]
    accent = _normalize_hex(palette["accent"], "#9146ff")
    dark = _relative_luma(window_bg) < 0.5
    toward = "#ffffff" if dark else "#000000"
    return ThemeTokens(
        theme_name=name,
        dark_mode=dark,
        accent=accent,
        text=text,
        text_muted=_mix(text, window_bg, 0.45),
        text_on_accent=_contrast_fg(accent),
        window_bg=window_bg,
        panel_bg=_mix(window_bg, toward, 0.04),
        input_bg=_mix(window_bg, toward, 0.08),
        button_bg=_mix(window_bg, toward, 0.12),
        border=_mix(window_bg, toward, 0.22),
        error=_normalize_hex(palette["error"], "#ff0000"),
        radius_md=6,
        radius_lg=8,
        space_xs=4,
        space_sm=6,
        space_md=10,
        input_height=28,
    )


def available_theme_tokens() -> list[ThemeTokens]:
    return [build_theme_tokens(theme_id) for theme_id in AVAILABLE_THEMES]


def tokens_signature(tokens: ThemeTokens) -> str:
    payload = json.dumps(asdict(tokens), sort_keys=True)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


def build_application_qss(tokens: ThemeTokens) -> str:
    return f"""
        QWidget {{
            background: {tokens.window_bg};
            color: {tokens.text};
        }}
        QGroupBox {{
            border: 1px solid {tokens.border};
            border-radius: {tokens.radius_lg}px;
            margin-top: 10px;
            padding-top: {tokens.space_sm}px;
            background: {tokens.panel_bg};
        }}
        QGroupBox::title {{
            subcontrol-origin: margin;
            left: 10px;
            padding: 0 6px;
        }}
        QLineEdit, QSpinBox, QComboBox, QListWidget {{
            background: {tokens.input_bg};
            color: {tokens.text};
            border: 1px solid {tokens.border};
            border-radius: {tokens.radius_md}px;
            min-height: {tokens.input_height}px;
            selection-background-color: {tokens.accent};
            selection-color: {tokens.text_on_accent};
        }}
        QPushButton, QToolButton {{
            background: {tokens.button_bg};
            color: {tokens.text};
            border: 1px solid {tokens.border};
            border-radius: {tokens.radius_md}px;
            padding: {tokens.space_xs}px {tokens.space_md}px;
        }}
        QPushButton:hover, QToolButton:hover {{
            background: {tokens.accent};
            color: {tokens.text_on_accent};
            border: 1px solid {tokens.accent};
        }}
        QPushButton:disabled {{
            color: {tokens.text_muted};
        }}
    """


def build_preferences_page_qss(tokens: ThemeTokens) -> str:
    return f"""
        QLabel[role="error"] {{
            color: {tokens.error};
            font-weight: 600;
        }}
        QLineEdit[invalid="true"], QComboBox[invalid="true"], QSpinBox[invalid="true"] {{
            border: 1px solid {tokens.error};
        }}
        QLabel[role="hint"] {{
            color: {tokens.text_muted};
        }}
    """
