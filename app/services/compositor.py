"""
Lease preview composition.

Every placeholder token is replaced: completed fields by their image,
pending ones by a clickable "Sign Here" / "Initial" stand-in carrying a
data-tab-id attribute that maps a click back to the field.
"""
from html import escape
from app.models.enums import TabKind
from app.services.placeholders import SignatureTab


TAB_ID_ATTRIBUTE = "data-tab-id"

IMAGE_HEIGHTS = {
    TabKind.SIGNATURE: 38,
    TabKind.INITIAL: 24,
}

STAND_IN_LABELS = {
    TabKind.SIGNATURE: "Sign Here",
    TabKind.INITIAL: "Initial",
}

# (background, text, border)
ACTIVE_COLORS = ("#8b5cf6", "#ffffff", "#7c3aed")
PENDING_COLORS = ("#fef3c7", "#92400e", "#f59e0b")


def render_field_image(tab: SignatureTab) -> str:
    style = (
        f"height: {IMAGE_HEIGHTS[tab.kind]}px; display: block; margin: 0 auto; "
        "position: relative; bottom: 2px;"
    )
    return f'<img src="{escape(tab.value)}" alt="{tab.kind.value}" style="{style}" />'


def render_stand_in(tab: SignatureTab, active: bool) -> str:
    background, color, border = ACTIVE_COLORS if active else PENDING_COLORS
    style = (
        "display: inline-flex; align-items: center; justify-content: center; "
        f"padding: 6px 16px; background: {background}; color: {color}; "
        f"border: 2px solid {border}; border-radius: 6px; font-size: 12px; "
        "font-weight: 600; cursor: pointer; white-space: nowrap; "
        "box-shadow: 0 2px 4px rgba(0,0,0,0.1);"
    )
    return (
        f'<span {TAB_ID_ATTRIBUTE}="{escape(tab.id)}" style="{style}">'
        f"{STAND_IN_LABELS[tab.kind]}</span>"
    )


def compose_lease_html(lease_html: str, tabs: list[SignatureTab], active_tab_id: str | None = None) -> str:
    if not lease_html:
        return ""

    html = lease_html
    for tab in tabs:
        if tab.completed and tab.value:
            replacement = render_field_image(tab)
        else:
            replacement = render_stand_in(tab, active=tab.id == active_tab_id)
        html = html.replace(tab.placeholder, replacement)
    return html


def tab_id_from_click(attributes: dict[str, str]) -> str | None:
    """Map the attributes of a clicked element in the preview to a field id."""
    return attributes.get(TAB_ID_ATTRIBUTE) or None
