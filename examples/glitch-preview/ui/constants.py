"""Layout, color, and rendering constants."""
from __future__ import annotations

SCREEN_W = 1280
SCREEN_H = 800
LOG_H = 90
FPS = 60
SCROLL_STEP = 120.0

COLOR_BG = (10, 10, 14)
COLOR_LIGHT_BG = (225, 225, 232)
COLOR_SECTION = (40, 40, 55)
COLOR_TEXT = (200, 200, 200)
COLOR_TEXT_DIM = (120, 120, 130)
COLOR_ACCENT = (0, 255, 136)
COLOR_GLITCH = (255, 0, 85)
COLOR_CARD = (24, 24, 34)
COLOR_BAR_BG = (40, 40, 50)
COLOR_PARTICLE = (0, 255, 136, 120)
COLOR_GLYPH = (0, 160, 80)
COLOR_CURSOR = (0, 255, 136)
COLOR_LOG_BG = (18, 18, 25)

# Classes the pointer can click, in priority order.
CLICKABLE = ("service-btn", "quick-contact-btn", "floating-whatsapp-btn", "nav-link")

# Visual glitch classes and the tint drawn over their box.
GLITCH_TINTS: dict[str, tuple[int, int, int, int]] = {
    "glitch-active": (255, 0, 85, 60),
    "glitch-shake": (0, 200, 255, 50),
    "glitch-flicker": (255, 255, 255, 40),
    "glitch-distort": (255, 0, 255, 50),
}

LOG_COLORS: dict[str, tuple[int, int, int]] = {
    "open": (100, 220, 100),
    "theme": (200, 200, 100),
    "scroll": (130, 130, 140),
    "default": (170, 170, 170),
}
