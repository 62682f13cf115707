"""Maps service names to icon identifiers (n8n SVGs or Phosphor classes)."""
from functools import lru_cache
from typing import Optional


DEFAULT_ICON = "ph-plug"

SERVICE_ICON_MAP: dict[str, str] = {
    # Email & Communication
    "gmail": "icons/gmail.svg",
    "outlook": "ph-envelope",
    "smtp": "ph-paper-plane-tilt",
    "email": "ph-envelope-simple",
    # Messaging & Chat
    "slack": "icons/slack.svg",
    "discord": "ph-discord-logo",
    "telegram": "ph-telegram-logo",
    "whatsapp": "ph-whatsapp-logo",
    "teams": "ph-microsoft-teams-logo",
    # Social Media
    "twitter": "ph-twitter-logo",
    "facebook": "ph-facebook-logo",
    "linkedin": "ph-linkedin-logo",
    "instagram": "ph-instagram-logo",
    # Cloud Storage & Data
    "google-sheets": "ph-table",
    "google-drive": "ph-google-drive-logo",
    "dropbox": "ph-dropbox-logo",
    "onedrive": "ph-folder-simple",
    "airtable": "ph-database",
    # Development & Tools
    "github": "ph-github-logo",
    "gitlab": "ph-gitlab-logo",
    "jira": "ph-kanban",
    "trello": "ph-trello-logo",
    "notion": "ph-note",
    "asana": "ph-check-square",
    # HTTP & APIs
    "http": "ph-plugs-connected",
    "webhook": "ph-webhook",
    "api": "ph-cloud-arrow-up",
    # CRM & Sales
    "salesforce": "ph-briefcase",
    "hubspot": "ph-user-circle-gear",
    "pipedrive": "ph-funnel",
    "zendesk": "ph-headset",
    # Payment & Finance
    "stripe": "ph-credit-card",
    "paypal": "ph-paypal-logo",
    "shopify": "ph-storefront",
    # AI & ML
    "openai": "ph-brain",
    "anthropic": "ph-robot",
    "ai": "ph-cpu",
}


class IconRegistry:
    """Service -> icon lookup with exact match first, then substring match."""

    def __init__(self, icons: Optional[dict[str, str]] = None):
        self._icons = dict(SERVICE_ICON_MAP if icons is None else icons)

    def get(self, service_id: str) -> str:
        normalized = service_id.lower().strip()
        if normalized in self._icons:
            return self._icons[normalized]

        for key, icon in self._icons.items():
            if key in normalized or normalized in key:
                return icon

        return DEFAULT_ICON

    def has_custom_icon(self, service_id: str) -> bool:
        return service_id.lower().strip() in self._icons

    def set_icon(self, service_id: str, icon: str) -> None:
        self._icons[service_id.lower().strip()] = icon


@lru_cache
def get_icon_registry() -> IconRegistry:
    """Process-wide registry with the built-in mappings."""
    return IconRegistry()


def get_service_icon(service_id: str) -> str:
    return get_icon_registry().get(service_id)


def has_custom_icon(service_id: str) -> bool:
    return get_icon_registry().has_custom_icon(service_id)
