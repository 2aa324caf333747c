"""folio - Glitch portfolio site: data provider, page bootstrap and contact flow."""
from __future__ import annotations

from folio.config import SiteConfig
from folio.contact import (
    ContactFlow,
    ContactForm,
    contact_message,
    encode_uri_component,
    service_message,
    service_template,
    whatsapp_url,
)
from folio.data import FALLBACK_INFO, PortfolioData, load_local, load_portfolio, read_json_file
from folio.page import Navigation, PortfolioPage
from folio.storage import InteractionLog, LocalStore
from folio.theme import ThemeToggle

__all__ = [
    "SiteConfig",
    "PortfolioPage",
    "PortfolioData",
    "Navigation",
    "ThemeToggle",
    "ContactFlow",
    "ContactForm",
    "LocalStore",
    "InteractionLog",
    "FALLBACK_INFO",
    "load_portfolio",
    "load_local",
    "read_json_file",
    "contact_message",
    "encode_uri_component",
    "service_message",
    "service_template",
    "whatsapp_url",
]
