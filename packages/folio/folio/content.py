"""Page skeleton and content population from portfolio data."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pulse import ElementId, Surface

# (html id, top, height) of each page section, in document order.
SECTIONS: tuple[tuple[str, float, float], ...] = (
    ("home", 0.0, 800.0),
    ("about", 900.0, 700.0),
    ("services", 1700.0, 1000.0),
    ("skills", 2800.0, 1100.0),
    ("contact", 4000.0, 800.0),
)

NAV_LINKS = (
    ("home", "Home"),
    ("about", "About"),
    ("services", "Services"),
    ("skills", "Skills"),
    ("contact", "Contact"),
)

SOCIAL_PLATFORMS = (
    ("github", "🐙", "GitHub"),
    ("linkedin", "💼", "LinkedIn"),
    ("twitter", "🐦", "Twitter"),
    ("discord", "💬", "Discord"),
    ("telegram", "✈️", "Telegram"),
)

STAT_DEFAULTS = (("experience", "5+"), ("projects", "150"), ("clients", "85"))

CARD_COLUMNS = 3
CARD_SIZE = 380.0
CARD_GAP = 20.0
CATEGORY_HEIGHT = 320.0
SKILL_ROW_HEIGHT = 50.0


def _section_box(name: str) -> tuple[float, float]:
    for html_id, top, height in SECTIONS:
        if html_id == name:
            return top, height
    raise KeyError(name)


def build_page(surface: Surface) -> dict[str, ElementId]:
    """Create the static skeleton. Returns the sections by html id."""
    s = surface
    width = s.viewport.width

    loading = s.create("div", "loading-screen", html_id="loading-screen")
    s.create("div", "loading-text", "glitch-text", parent=loading, text="LOADING...")

    nav = s.create("nav", "navbar", html_id="navbar", width=width, height=70.0)
    s.create("button", "nav-toggle", parent=nav, html_id="nav-toggle")
    menu = s.create("ul", "nav-menu", parent=nav, html_id="nav-menu")
    for target, label in NAV_LINKS:
        item = s.create("li", "nav-item", parent=menu)
        s.create("a", "nav-link", parent=item, text=label, data={"href": f"#{target}"})
    toggle = s.create("button", "theme-toggle", parent=nav, html_id="theme-toggle")
    s.create("span", "theme-icon", parent=toggle)

    sections: dict[str, ElementId] = {}
    for html_id, top, height in SECTIONS:
        sections[html_id] = s.create(
            "section", html_id, html_id=html_id, top=top, width=width, height=height
        )

    home = sections["home"]
    title = s.create("h1", "hero-title", parent=home, top=200.0, width=width, height=80.0)
    s.create("span", "glitch-text", parent=title, top=200.0, width=width, height=80.0)
    s.create("p", "hero-subtitle", parent=home, html_id="hero-subtitle", top=300.0, height=30.0)
    s.create("p", "hero-description", parent=home, html_id="hero-description", top=340.0, height=30.0)
    stats = s.create("div", "hero-stats", parent=home, top=600.0, width=width, height=120.0)
    for html_id, default in STAT_DEFAULTS:
        s.create(
            "span", "stat-number", parent=stats, html_id=html_id, text=default,
            top=620.0, height=40.0,
        )
    floating = s.create("div", "floating-elements", parent=home)
    for speed in (1, 2, 3):
        s.create("div", "floating-element", parent=floating, data={"speed": speed})

    about_top, _ = _section_box("about")
    about = sections["about"]
    _header(s, about, "About Me", about_top)
    s.create("p", "about-bio", parent=about, html_id="about-bio", top=about_top + 150.0, height=120.0)
    details = s.create(
        "div", "about-details", parent=about, top=about_top + 300.0, width=width, height=300.0
    )
    for i, html_id in enumerate(("location", "email", "availability")):
        item = s.create(
            "div", "detail-item", parent=details, top=about_top + 300.0 + i * 100.0, height=90.0
        )
        s.create("span", "detail-value", parent=item, html_id=html_id)

    services_top, _ = _section_box("services")
    _header(s, sections["services"], "Services", services_top)
    s.create(
        "div", "services-grid", parent=sections["services"], html_id="services-grid",
        top=services_top + 150.0, width=width,
    )

    skills_top, _ = _section_box("skills")
    _header(s, sections["skills"], "Skills", skills_top)
    s.create(
        "div", "skills-container", parent=sections["skills"], html_id="skills-container",
        top=skills_top + 150.0, width=width,
    )

    contact_top, _ = _section_box("contact")
    contact = sections["contact"]
    _header(s, contact, "Get In Touch", contact_top)
    info = s.create("div", "contact-info", parent=contact, top=contact_top + 150.0)
    for i, (icon, html_id) in enumerate(
        (("📧", "contact-email"), ("📱", "contact-phone"), ("📍", "contact-location"))
    ):
        item = s.create(
            "div", "contact-item", parent=info,
            top=contact_top + 150.0 + i * 110.0, width=400.0, height=100.0,
        )
        s.create("div", "contact-icon", parent=item, text=icon)
        s.create("span", "contact-value", parent=item, html_id=html_id)
    s.create("div", "social-links", parent=info, html_id="social-links")

    form = s.create(
        "form", "contact-form", parent=contact, html_id="contact-form",
        top=contact_top + 150.0, left=width / 2, width=width / 2, height=500.0,
    )
    s.create("input", "form-input", parent=form, html_id="name", data={"field": "name"})
    s.create("input", "form-input", parent=form, html_id="contact-form-email", data={"field": "email"})
    s.create("select", "form-input", parent=form, html_id="service", data={"field": "service"})
    s.create("textarea", "form-input", parent=form, html_id="message", data={"field": "message"})
    s.create("button", "btn", "btn-primary", parent=form, text="Send via WhatsApp")
    return sections


def _header(surface: Surface, section: ElementId, title: str, top: float) -> ElementId:
    header = surface.create(
        "div", "section-header", parent=section, top=top + 40.0,
        width=surface.viewport.width, height=80.0,
    )
    surface.create("h2", "section-title", "glitch-text", parent=header, text=title)
    return header


def _set_text(surface: Surface, html_id: str, text: Any) -> None:
    eid = surface.find(html_id)
    if eid is not None:
        surface.set_text(eid, str(text))


def populate_info(surface: Surface, info: dict[str, Any] | None) -> None:
    if not info:
        return
    _set_text(surface, "hero-subtitle", info.get("title") or "")
    _set_text(surface, "hero-description", info.get("tagline") or "")
    for html_id, default in STAT_DEFAULTS:
        _set_text(surface, html_id, info.get(html_id) or default)
    for html_id in ("about-bio", "location", "email", "availability"):
        key = "bio" if html_id == "about-bio" else html_id
        _set_text(surface, html_id, info.get(key) or "")
    _set_text(surface, "contact-email", info.get("email") or "")
    _set_text(surface, "contact-phone", info.get("phone") or "")
    _set_text(surface, "contact-location", info.get("location") or "")
    populate_social_links(surface, info.get("social"))


def populate_social_links(surface: Surface, social: dict[str, str] | None) -> list[ElementId]:
    """One ``social-link`` per known platform present in ``social``."""
    container = surface.find("social-links")
    if not social or container is None:
        return []
    surface.clear_children(container)
    links = []
    for key, icon, label in SOCIAL_PLATFORMS:
        url = social.get(key)
        if not url:
            continue
        link = surface.create(
            "a", "social-link", "glitch-hover", parent=container,
            data={"href": url, "target": "_blank", "rel": "noopener noreferrer"},
        )
        surface.create("span", parent=link, text=icon)
        surface.create("span", parent=link, text=label)
        links.append(link)
    return links


def populate_services(surface: Surface, services: list[dict[str, Any]]) -> list[ElementId]:
    grid = surface.find("services-grid")
    if grid is None or not services:
        return []
    surface.clear_children(grid)
    grid_box = surface.get(grid)
    cards = []
    for i, service in enumerate(services):
        row, col = divmod(i, CARD_COLUMNS)
        card = surface.create(
            "div", "service-card", parent=grid,
            data={"service-id": service.get("id", "")},
            top=grid_box.top + row * (CARD_SIZE + CARD_GAP),
            left=col * (CARD_SIZE + CARD_GAP),
            width=CARD_SIZE, height=CARD_SIZE,
        )
        header = surface.create("div", "service-header", parent=card)
        surface.create("div", "service-icon", parent=header, text=service.get("icon", ""))
        surface.create("h3", "service-title", parent=header, text=service.get("name", ""))
        surface.create(
            "p", "service-description", parent=card, text=service.get("description", "")
        )
        features = surface.create("ul", "service-features", parent=card)
        for feature in service.get("features", []):
            surface.create("li", parent=features, text=feature)
        footer = surface.create("div", "service-footer", parent=card)
        surface.create("div", "service-price", parent=footer, text=service.get("price", ""))
        surface.create(
            "div", "service-delivery", parent=footer, text=service.get("deliveryTime", "")
        )
        surface.create(
            "button", "btn", "btn-primary", "glitch-btn", "service-btn", parent=card,
            text="Get Started", data={"service": service.get("name", "")},
            top=grid_box.top + row * (CARD_SIZE + CARD_GAP) + CARD_SIZE - 60.0,
            left=col * (CARD_SIZE + CARD_GAP) + 20.0, width=CARD_SIZE - 40.0, height=44.0,
        )
        cards.append(card)
    return cards


def populate_skills(surface: Surface, categories: list[dict[str, Any]]) -> list[ElementId]:
    container = surface.find("skills-container")
    if container is None or not categories:
        return []
    surface.clear_children(container)
    base = surface.get(container).top
    width = surface.viewport.width
    found = []
    for i, category in enumerate(categories):
        top = base + i * CATEGORY_HEIGHT
        cat = surface.create(
            "div", "skill-category", parent=container, top=top, width=width,
            height=CATEGORY_HEIGHT - 20.0,
        )
        surface.create("h3", "skill-category-title", parent=cat, text=category.get("name", ""))
        grid = surface.create("div", "skills-grid", parent=cat)
        for j, skill in enumerate(category.get("skills", [])):
            level = skill.get("level", 0)
            color = skill.get("color", "")
            item = surface.create(
                "div", "skill-item", parent=grid, data={"level": level},
                top=top + 50.0 + j * SKILL_ROW_HEIGHT, width=width / 2,
                height=SKILL_ROW_HEIGHT - 10.0,
            )
            surface.create(
                "div", "skill-icon", parent=item, text=skill.get("icon", ""),
                style={"color": color} if color else None,
            )
            info = surface.create("div", "skill-info", parent=item)
            surface.create("div", "skill-name", parent=info, text=skill.get("name", ""))
            bar = surface.create("div", "skill-bar", parent=info)
            style = {"width": "0%", "height": "100%"}
            if color:
                style["background-color"] = color
            surface.create("div", "skill-progress", parent=bar, style=style)
            surface.create("div", "skill-level", parent=item, text=f"{level}%")
        found.append(cat)
    return found


def populate_service_options(surface: Surface, services: list[dict[str, Any]]) -> None:
    select = surface.find("service")
    if select is None or not services:
        return
    surface.clear_children(select)
    surface.create("option", parent=select, text="Select a service", data={"value": ""})
    for service in services:
        name = service.get("name", "")
        surface.create("option", parent=select, text=name, data={"value": name})


def apply_animation_delays(surface: Surface) -> None:
    for i, card in enumerate(surface.query("service-card")):
        surface.set_style(card, animation_delay=f"{i * 0.1:g}s")
    for i, category in enumerate(surface.query("skill-category")):
        surface.set_style(category, animation_delay=f"{i * 0.2:g}s")


def init_floating_elements(surface: Surface) -> None:
    for i, element in enumerate(surface.query("floating-element")):
        try:
            speed = float(surface.get(element).data.get("speed") or 2)
        except ValueError:
            speed = 2.0
        if speed <= 0:
            speed = 2.0
        surface.set_style(
            element,
            animation_duration=f"{6 / speed:g}s",
            animation_delay=f"{i * 0.5:g}s",
        )
