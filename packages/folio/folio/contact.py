"""WhatsApp contact flow: service buttons, the contact form and quick contact."""
from __future__ import annotations

import logging
import re
import urllib.parse
import webbrowser
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from pulse import Throttle

if TYPE_CHECKING:
    from pulse import ElementId, Stage, Surface

    from folio.storage import InteractionLog

logger = logging.getLogger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"

# Characters encodeURIComponent leaves alone besides letters and digits.
URI_COMPONENT_SAFE = "-_.!~*'()"

QUICK_CONTACT_MESSAGE = (
    "Hi! I'd like to discuss a potential project. Are you available for a quick chat?"
)
VALIDATION_ERROR = "Please fill in all required fields."
SUCCESS_MESSAGE = "Message prepared! Opening WhatsApp..."

SERVICE_TEMPLATES: dict[str, str] = {
    "Discord Bot Development": (
        "Hi! I need a custom Discord bot. Can we discuss the features and pricing?"
    ),
    "Telegram Bot Solutions": (
        "Hello! I'm interested in developing a Telegram bot for my business."
    ),
    "Full-Stack Web Development": (
        "Hi! I need a website/web application developed. Can we talk about the requirements?"
    ),
    "Automation & Scripting": "Hello! I need some automation scripts. Can you help with this?",
    "API Development & Integration": (
        "Hi! I need API development services. Are you available to discuss?"
    ),
    "Custom Software Solutions": (
        "Hello! I have a custom software requirement. Can we schedule a discussion?"
    ),
}

FORM_FIELDS = ("name", "email", "service", "message")


def encode_uri_component(text: str) -> str:
    return urllib.parse.quote(text, safe=URI_COMPONENT_SAFE)


def clean_phone(phone: str) -> str:
    return re.sub(r"\D", "", phone)


def whatsapp_url(phone: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}{clean_phone(phone)}?text={encode_uri_component(message)}"


def service_message(service_name: str) -> str:
    return (
        f"Hi! I am interested in `{service_name}`. "
        "Could you please provide more details about this service?"
    )


def service_template(service_name: str) -> str:
    """Canned opener for a known service, a generic one otherwise."""
    return SERVICE_TEMPLATES.get(
        service_name,
        f"Hi! I am interested in {service_name}. Could you please provide more details?",
    )


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    service: str = ""
    message: str = ""

    def is_valid(self) -> bool:
        """Name, email and message are required; service is optional."""
        return bool(self.name and self.email and self.message)

    @classmethod
    def read(cls, surface: Surface, form_id: ElementId) -> ContactForm:
        """Collect field values from descendants carrying a ``field`` data key."""
        values: dict[str, str] = {}
        for eid in surface.descendants(form_id):
            field_name = surface.get(eid).data.get("field")
            if field_name in FORM_FIELDS:
                values[field_name] = surface.get(eid).text.strip()
        return cls(**values)


def contact_message(form: ContactForm) -> str:
    message = f"Hi! My name is `{form.name}`.\n\n"
    if form.service:
        message += f"I'm interested in: `{form.service}`\n\n"
    message += f"Message: `{form.message}` \n\n"
    message += f"Email: {form.email}"
    return message


class ContactFlow:
    """Hands visitors off to WhatsApp and records each hand-off.

    ``opener`` receives every URL to open; it defaults to a new browser
    tab. The contact form opens its URL ``open_delay_ms`` after a valid
    submit and resets ``reset_delay_ms`` after it. Error feedback is
    dismissed after ``reset_delay_ms`` as well.
    """

    def __init__(
        self,
        stage: Stage,
        phone: str,
        log: InteractionLog,
        opener: Callable[[str], Any] | None = None,
        open_delay_ms: float = 500.0,
        reset_delay_ms: float = 2_000.0,
        floating_threshold: float = 500.0,
        scroll_throttle_ms: float = 100.0,
    ) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("contact")
        self.phone = phone
        self.log = log
        self._opener = opener if opener is not None else webbrowser.open_new_tab
        self.open_delay_ms = open_delay_ms
        self.reset_delay_ms = reset_delay_ms
        self.floating_threshold = floating_threshold
        self._scroll_check = Throttle(self._timers, scroll_throttle_ms, self.update_floating)
        self._listeners: list[tuple[int, str, Callable[[str, dict[str, Any]], None]]] = []
        self._form: int | None = None
        self._floating: int | None = None
        self._started = False

    @property
    def floating_button(self) -> ElementId | None:
        return self._floating

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        for eid in self._surface.query("service-btn"):
            self._listen(eid, "click", self._on_service_click)
        self._form = self._surface.find("contact-form")
        if self._form is not None:
            self._listen(self._form, "submit", self._on_submit)
        self._add_quick_contact_buttons()
        self._add_floating_button()
        self._stage.events.subscribe("scroll", self._on_scroll)

    def _listen(self, eid: int, event_name: str, handler) -> None:
        self._stage.events.listen(eid, event_name, handler)
        self._listeners.append((eid, event_name, handler))

    def _add_quick_contact_buttons(self) -> None:
        for item in self._surface.query("contact-item"):
            icon = next(iter(self._surface.descendants(item, "contact-icon")), None)
            if icon is None or "📱" not in self._surface.get(icon).text:
                continue
            button = self._surface.create(
                "button", "btn", "btn-secondary", "quick-contact-btn",
                parent=item, text="Chat on WhatsApp",
            )
            self._listen(button, "click", self._on_quick_click)

    def _add_floating_button(self) -> None:
        self._floating = self._surface.create("div", "floating-whatsapp-btn")
        self._surface.create("div", "whatsapp-icon", parent=self._floating)
        self._surface.create("div", "whatsapp-tooltip", parent=self._floating, text="Chat with us!")
        self._listen(self._floating, "click", self._on_quick_click)

    # -- Handlers --

    def _on_service_click(self, event_name: str, data: dict[str, Any]) -> None:
        service = self._surface.get(data["target"]).data.get("service", "")
        self.open_for_service(service, data["target"])

    def _on_submit(self, event_name: str, data: dict[str, Any]) -> None:
        self.submit(data["target"])

    def _on_quick_click(self, event_name: str, data: dict[str, Any]) -> None:
        self.quick_contact()

    def _on_scroll(self, event_name: str, data: dict[str, Any]) -> None:
        self._scroll_check()

    # -- Flows --

    def _open(self, url: str) -> None:
        logger.debug("Opening %s", url)
        self._opener(url)

    def open_for_service(self, service_name: str, button: ElementId | None = None) -> str:
        url = whatsapp_url(self.phone, service_message(service_name))
        if button is not None and self._surface.exists(button):
            self._surface.set_style(button, animation="glitch-btn 0.3s ease-in-out")
            self._timers.set_timeout(300.0, partial(self._clear_animation, button))
        self._open(url)
        self.log.record("service", service_name)
        return url

    def quick_contact(self) -> str:
        url = whatsapp_url(self.phone, QUICK_CONTACT_MESSAGE)
        self._open(url)
        self.log.record("quick_contact", "general")
        return url

    def submit(self, form_id: ElementId) -> str | None:
        """Validate the form and schedule the WhatsApp hand-off.

        Returns the URL that will be opened, or None when a required
        field is empty.
        """
        form = ContactForm.read(self._surface, form_id)
        if not form.is_valid():
            feedback = self.show_feedback(form_id, VALIDATION_ERROR, "error")
            self._timers.set_timeout(
                self.reset_delay_ms, partial(self._surface.remove, feedback)
            )
            return None
        url = whatsapp_url(self.phone, contact_message(form))
        self.show_feedback(form_id, SUCCESS_MESSAGE, "success")
        self._timers.set_timeout(self.open_delay_ms, partial(self._open, url))
        self.log.record("contact_form", form.service or "general")
        self._timers.set_timeout(self.reset_delay_ms, partial(self._reset_form, form_id))
        return url

    def show_feedback(self, form_id: ElementId, message: str, kind: str) -> ElementId:
        self.hide_feedback(form_id)
        feedback = self._surface.create(
            "div", "form-feedback", f"form-feedback-{kind}", parent=form_id, text=message
        )
        self._timers.set_timeout(10.0, partial(self._show, feedback))
        return feedback

    def hide_feedback(self, form_id: ElementId) -> None:
        if not self._surface.exists(form_id):
            return
        for eid in self._surface.descendants(form_id, "form-feedback"):
            self._surface.remove(eid)

    def update_floating(self) -> None:
        if self._floating is None or not self._surface.exists(self._floating):
            return
        if self._surface.viewport.scroll_y > self.floating_threshold:
            self._surface.add_class(self._floating, "show")
        else:
            self._surface.remove_class(self._floating, "show")

    def _show(self, eid: ElementId) -> None:
        if self._surface.exists(eid):
            self._surface.add_class(eid, "show")

    def _clear_animation(self, eid: ElementId) -> None:
        if self._surface.exists(eid):
            self._surface.set_style(eid, animation="")

    def _reset_form(self, form_id: ElementId) -> None:
        if not self._surface.exists(form_id):
            return
        for eid in self._surface.descendants(form_id):
            if "field" in self._surface.get(eid).data:
                self._surface.set_text(eid, "")
        self.hide_feedback(form_id)

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.events.unsubscribe("scroll", self._on_scroll)
        for eid, event_name, handler in self._listeners:
            self._stage.events.unlisten(eid, event_name, handler)
        self._listeners.clear()
        if self._floating is not None:
            self._surface.remove(self._floating)
            self._floating = None
        self._started = False
