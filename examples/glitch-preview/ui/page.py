"""Draw the headless page surface with pygame primitives."""
from __future__ import annotations

import pygame

from pulse import Surface, Tag
from ui.constants import (
    COLOR_ACCENT,
    COLOR_BAR_BG,
    COLOR_CARD,
    COLOR_CURSOR,
    COLOR_GLYPH,
    COLOR_PARTICLE,
    COLOR_SECTION,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    GLITCH_TINTS,
)


def _percent(value: str, default: float = 0.0) -> float:
    try:
        return float(value.rstrip("%"))
    except (AttributeError, ValueError):
        return default


def _px(value: str, default: float = 0.0) -> float:
    try:
        return float(value.rstrip("px"))
    except (AttributeError, ValueError):
        return default


def _seconds(value: str, default: float = 0.0) -> float:
    try:
        return float(value.rstrip("s"))
    except (AttributeError, ValueError):
        return default


def screen_rect(surface: Surface, eid: int) -> pygame.Rect:
    el = surface.get(eid)
    y = el.top - surface.viewport.scroll_y
    return pygame.Rect(int(el.left), int(y), int(el.width), int(el.height))


def element_at(surface: Surface, x: float, y: float, classes: tuple[str, ...]) -> int | None:
    """Topmost element with one of ``classes`` under the point."""
    for cls in classes:
        for eid in reversed(surface.query(cls)):
            rect = screen_rect(surface, eid)
            if rect.width and rect.height and rect.collidepoint(x, y):
                return eid
    return None


def draw_sections(screen: pygame.Surface, surface: Surface, font: pygame.font.Font) -> None:
    for eid in surface.query(Tag("section")):
        rect = screen_rect(surface, eid)
        pygame.draw.rect(screen, COLOR_SECTION, rect, 1)
        label = font.render(f"#{surface.get(eid).html_id}", True, COLOR_TEXT_DIM)
        screen.blit(label, (rect.x + 6, rect.y + 4))


def draw_hero(screen: pygame.Surface, surface: Surface, big_font, font) -> None:
    title = surface.query_one("hero-title")
    if title is not None:
        for eid in surface.descendants(title, "glitch-text"):
            rect = screen_rect(surface, eid)
            text = big_font.render(surface.get(eid).text or " ", True, COLOR_ACCENT)
            screen.blit(text, text.get_rect(center=rect.center))
    for html_id in ("hero-subtitle", "hero-description"):
        eid = surface.find(html_id)
        if eid is None:
            continue
        rect = screen_rect(surface, eid)
        text = font.render(surface.get(eid).text, True, COLOR_TEXT)
        screen.blit(text, text.get_rect(midtop=(screen.get_width() // 2, rect.y)))
    stats = surface.query("stat-number")
    for i, eid in enumerate(stats):
        rect = screen_rect(surface, eid)
        x = screen.get_width() * (i + 1) // (len(stats) + 1)
        text = big_font.render(surface.get(eid).text, True, COLOR_ACCENT)
        screen.blit(text, text.get_rect(midtop=(x, rect.y)))


def draw_cards(screen: pygame.Surface, surface: Surface, font: pygame.font.Font) -> None:
    for eid in surface.query("service-card"):
        rect = screen_rect(surface, eid)
        if rect.bottom < 0 or rect.top > screen.get_height():
            continue
        visible = surface.has_class(eid, "animated")
        pygame.draw.rect(screen, COLOR_CARD, rect)
        pygame.draw.rect(screen, COLOR_ACCENT if visible else COLOR_SECTION, rect, 1)
        titles = surface.descendants(eid, "service-title")
        if titles:
            text = font.render(surface.get(titles[0]).text, True, COLOR_TEXT)
            screen.blit(text, (rect.x + 12, rect.y + 12))
    for eid in surface.query("service-btn"):
        rect = screen_rect(surface, eid)
        pygame.draw.rect(screen, COLOR_ACCENT, rect, 1)
        text = font.render(surface.get(eid).text, True, COLOR_ACCENT)
        screen.blit(text, text.get_rect(center=rect.center))
    for eid in surface.query("click-glitch"):
        parent = surface.get(eid).parent
        if parent is None:
            continue
        box = screen_rect(surface, parent)
        el = surface.get(eid)
        point = (box.x + int(_px(el.style.get("left", ""))), box.y + int(_px(el.style.get("top", ""))))
        pygame.draw.circle(screen, (255, 0, 85), point, 12, 2)


def draw_skills(screen: pygame.Surface, surface: Surface, font: pygame.font.Font) -> None:
    for eid in surface.query("skill-item"):
        rect = screen_rect(surface, eid)
        if rect.bottom < 0 or rect.top > screen.get_height():
            continue
        names = surface.descendants(eid, "skill-name")
        if names:
            screen.blit(font.render(surface.get(names[0]).text, True, COLOR_TEXT), (rect.x + 20, rect.y))
        bar = pygame.Rect(rect.x + 160, rect.y + 6, rect.width - 200, 10)
        pygame.draw.rect(screen, COLOR_BAR_BG, bar)
        progress = surface.descendants(eid, "skill-progress")
        if progress:
            width = _percent(surface.get(progress[0]).style.get("width", "0%"))
            fill = bar.copy()
            fill.width = int(bar.width * width / 100)
            pygame.draw.rect(screen, COLOR_ACCENT, fill)


def draw_ambient(screen: pygame.Surface, surface: Surface, small_font, now_ms: float) -> None:
    w, h = screen.get_size()
    layer = pygame.Surface((w, h), pygame.SRCALPHA)
    for eid in surface.query("particle"):
        style = surface.get(eid).style
        duration = _seconds(style.get("animation-duration", ""), 5.0) * 1000
        delay = _seconds(style.get("animation-delay", "")) * 1000
        progress = ((now_ms - delay) % duration) / duration if now_ms > delay else 0.0
        x = int(_percent(style.get("left", "0%")) * w / 100)
        pygame.draw.circle(layer, COLOR_PARTICLE, (x, int(h * (1 - progress))), 2)
    screen.blit(layer, (0, 0))
    for eid in surface.query("matrix-column"):
        style = surface.get(eid).style
        x = int(_percent(style.get("left", "0%")) * w / 100)
        duration = _seconds(style.get("animation-duration", ""), 10.0) * 1000
        offset = int((now_ms % duration) / duration * h) - h // 2
        for i, glyph in enumerate(surface.get(eid).text.split("\n")):
            screen.blit(small_font.render(glyph, True, COLOR_GLYPH), (x, offset + i * 12))


def draw_glitches(screen: pygame.Surface, surface: Surface) -> None:
    for cls, tint in GLITCH_TINTS.items():
        for eid in surface.query(cls):
            rect = screen_rect(surface, eid)
            if not rect.width or not rect.height:
                continue
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill(tint)
            screen.blit(overlay, rect.topleft)


def draw_cursor(screen: pygame.Surface, surface: Surface) -> None:
    for cls, radius in (("custom-cursor", 4), ("cursor-follower", 14)):
        eid = surface.query_one(cls)
        if eid is None:
            continue
        style = surface.get(eid).style
        if "left" not in style:
            continue
        point = (int(_px(style["left"])), int(_px(style["top"])))
        width = 0 if radius < 10 else 1
        if surface.has_class(eid, "cursor-hover"):
            radius *= 2
        pygame.draw.circle(screen, COLOR_CURSOR, point, radius, width)
