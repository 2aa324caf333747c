"""Glitch Preview - the portfolio page rendered live from the headless stage.

Runs the full page (content, theme, navigation, effects, contact flow) on a
pulse Stage and draws its surface with pygame. WhatsApp hand-offs are
printed to the log panel instead of opening a browser.

Controls:
  Mouse wheel   Scroll the page
  Up / Down     Scroll the page
  Left-click    Click a service button or the floating WhatsApp button
  T             Toggle the theme
  F             Submit the contact form with sample values
  E             Submit the contact form empty
  Space         Pause / Resume
  Escape        Quit
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pygame

from folio import LocalStore, PortfolioPage, load_local
from pulse import Stage, Viewport
from ui.constants import (
    CLICKABLE,
    COLOR_BG,
    COLOR_LIGHT_BG,
    FPS,
    LOG_H,
    SCREEN_H,
    SCREEN_W,
    SCROLL_STEP,
)
from ui.hud import EventLogPanel, draw_feedback, draw_floating_button, draw_loading
from ui.page import (
    draw_ambient,
    draw_cards,
    draw_cursor,
    draw_glitches,
    draw_hero,
    draw_sections,
    draw_skills,
    element_at,
)

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Glitch Preview - live portfolio page")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--data-dir", type=str, default=str(DEFAULT_DATA_DIR),
                   help="Directory with info.json, services.json and skills.json")
    p.add_argument("--reduced-motion", action="store_true", help="Prefer reduced motion")
    p.add_argument("--speed", type=float, default=1.0, help="Virtual time multiplier (default: 1)")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    view_h = SCREEN_H - LOG_H
    log_panel = EventLogPanel()

    def opener(url: str) -> None:
        log_panel.add(f"open {url}", "open")

    viewport = Viewport(width=SCREEN_W, height=view_h, prefers_reduced_motion=args.reduced_motion)
    page = PortfolioPage(
        stage=Stage(seed=args.seed, viewport=viewport),
        data=load_local(args.data_dir),
        store=LocalStore(),
        opener=opener,
    )
    page.start()
    stage = page.stage
    surface = stage.surface
    max_scroll = max(surface.get(eid).top + surface.get(eid).height for eid in page.sections.values())
    max_scroll = max(0.0, max_scroll - view_h)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Glitch Preview - pulse stage demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)
    small_font = pygame.font.SysFont("monospace", 10)
    big_font = pygame.font.SysFont("monospace", 36, bold=True)
    view = screen.subsurface(pygame.Rect(0, 0, SCREEN_W, view_h))

    paused = False
    budget_ms = 0.0
    floating_rect = None
    running = True

    def scroll_by(dy: float) -> None:
        y = min(max_scroll, max(0.0, surface.viewport.scroll_y + dy))
        stage.scroll_to(y)

    def submit(name: str, email: str, message: str) -> None:
        for html_id, value in (("name", name), ("contact-form-email", email), ("message", message)):
            eid = surface.find(html_id)
            if eid is not None:
                surface.set_text(eid, value)
        form = surface.find("contact-form")
        if form is not None:
            stage.submit(form)

    while running:
        dt_ms = clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_UP:
                    scroll_by(-SCROLL_STEP)
                elif event.key == pygame.K_DOWN:
                    scroll_by(SCROLL_STEP)
                elif event.key == pygame.K_t:
                    toggle = surface.find("theme-toggle")
                    if toggle is not None:
                        stage.click(toggle)
                        log_panel.add("theme toggled", "theme")
                elif event.key == pygame.K_f:
                    submit("Preview Visitor", "visitor@example.com", "Hello from the preview!")
                elif event.key == pygame.K_e:
                    submit("", "", "")

            elif event.type == pygame.MOUSEWHEEL:
                scroll_by(-event.y * SCROLL_STEP)

            elif event.type == pygame.MOUSEMOTION:
                stage.pointer_move(*event.pos)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, my = event.pos
                if floating_rect is not None and floating_rect.collidepoint(mx, my):
                    button = page.contact.floating_button
                    if button is not None:
                        stage.click(button, mx, my)
                    continue
                target = element_at(surface, mx, my, CLICKABLE)
                if target is not None:
                    el = surface.get(target)
                    stage.click(target, mx, my + surface.viewport.scroll_y)
                    log_panel.add(f"click {el.text or el.tag}", "default")

        # --- Advance virtual time ---
        if not paused:
            budget_ms += dt_ms * args.speed
            whole = int(budget_ms)
            if whole:
                stage.advance(whole)
                budget_ms -= whole

        # --- Render ---
        light = surface.has_class(surface.body, "light-theme")
        view.fill(COLOR_LIGHT_BG if light else COLOR_BG)
        draw_ambient(view, surface, small_font, stage.now_ms)
        draw_sections(view, surface, small_font)
        draw_hero(view, surface, big_font, font)
        draw_cards(view, surface, font)
        draw_skills(view, surface, font)
        draw_glitches(view, surface)
        floating_rect = draw_floating_button(view, surface, font)
        draw_feedback(view, surface, font)
        draw_cursor(view, surface)
        draw_loading(view, surface, big_font)
        log_panel.draw(screen, small_font, view_h, LOG_H)

        pygame.display.flip()

    stage.teardown()
    pygame.quit()
    print(f"Interactions recorded: {len(page.log)}")
    sys.exit()


if __name__ == "__main__":
    main()
