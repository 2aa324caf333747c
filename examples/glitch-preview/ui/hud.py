"""HUD overlays: loading screen, feedback toasts and the hand-off log."""
from __future__ import annotations

import pygame

from pulse import Surface
from ui.constants import COLOR_ACCENT, COLOR_GLITCH, COLOR_LOG_BG, COLOR_TEXT_DIM, LOG_COLORS


def draw_loading(screen: pygame.Surface, surface: Surface, big_font) -> None:
    eid = surface.find("loading-screen")
    if eid is None or surface.has_class(eid, "hidden"):
        return
    screen.fill((0, 0, 0))
    text = big_font.render("LOADING...", True, COLOR_ACCENT)
    screen.blit(text, text.get_rect(center=screen.get_rect().center))


def draw_feedback(screen: pygame.Surface, surface: Surface, font) -> None:
    for eid in surface.query("form-feedback", "show"):
        color = COLOR_GLITCH if surface.has_class(eid, "form-feedback-error") else COLOR_ACCENT
        text = font.render(surface.get(eid).text, True, color)
        rect = text.get_rect(midtop=(screen.get_width() // 2, 80))
        pygame.draw.rect(screen, (0, 0, 0), rect.inflate(20, 10))
        screen.blit(text, rect)


def draw_floating_button(screen: pygame.Surface, surface: Surface, font) -> pygame.Rect | None:
    eid = surface.query_one("floating-whatsapp-btn", "show")
    if eid is None:
        return None
    w, h = screen.get_size()
    rect = pygame.Rect(w - 90, h - 90 - 100, 60, 60)
    pygame.draw.ellipse(screen, (37, 211, 102), rect)
    screen.blit(font.render("WA", True, (0, 0, 0)), rect.move(18, 22))
    return rect


class EventLogPanel:
    """Scrolling log of what the visitor did, newest at the bottom."""

    def __init__(self, max_entries: int = 6) -> None:
        self.max_entries = max_entries
        self.entries: list[tuple[str, str]] = []

    def add(self, text: str, kind: str = "default") -> None:
        self.entries.append((text, kind))
        del self.entries[:-self.max_entries]

    def draw(self, screen: pygame.Surface, font, y: int, height: int) -> None:
        rect = pygame.Rect(0, y, screen.get_width(), height)
        pygame.draw.rect(screen, COLOR_LOG_BG, rect)
        pygame.draw.line(screen, COLOR_TEXT_DIM, rect.topleft, rect.topright)
        for i, (text, kind) in enumerate(self.entries):
            color = LOG_COLORS.get(kind, LOG_COLORS["default"])
            screen.blit(font.render(text[:160], True, color), (8, y + 6 + i * 13))
