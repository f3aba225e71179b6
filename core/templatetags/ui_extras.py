from django import template
from django.utils.html import format_html
from django.utils.safestring import mark_safe

register = template.Library()

BTN_VARIANTS = {
    "ghost": "text-gray-300 hover:text-white hover:bg-gray-900",
    "danger": "text-red-400 hover:text-red-300 hover:bg-gray-800",
    "toggle": "rounded-full border border-gray-700 bg-gray-950 p-0 shadow-md text-gray-300 hover:text-white hover:bg-gray-900",
}

NAV_LINK_BASE = "flex items-center rounded-lg text-sm transition-all text-gray-300 hover:bg-gray-900/50 hover:text-white"
NAV_LINK_ACTIVE = "bg-gray-900/50 text-white"
NAV_LINK_DISABLED = "cursor-not-allowed opacity-50 hover:bg-transparent"

# Lucide-Pfade, im Template als Inline-SVG ausgegeben.
ICONS = {
    "home": '<path d="m3 9 9-7 9 7v11a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/><path d="M9 22V12h6v10"/>',
    "layout-dashboard": '<rect width="7" height="9" x="3" y="3" rx="1"/><rect width="7" height="5" x="14" y="3" rx="1"/><rect width="7" height="9" x="14" y="12" rx="1"/><rect width="7" height="5" x="3" y="16" rx="1"/>',
    "bar-chart": '<path d="M3 3v18h18"/><path d="M18 17V9"/><path d="M13 17V5"/><path d="M8 17v-3"/>',
    "folder-open": '<path d="m6 14 1.5-2.9A2 2 0 0 1 9.24 10H20a2 2 0 0 1 1.94 2.5l-1.54 6a2 2 0 0 1-1.95 1.5H4a2 2 0 0 1-2-2V5a2 2 0 0 1 2-2h3.9a2 2 0 0 1 1.69.9l.81 1.2a2 2 0 0 0 1.67.9H18a2 2 0 0 1 2 2v2"/>',
    "clipboard-list": '<rect width="8" height="4" x="8" y="2" rx="1"/><path d="M16 4h2a2 2 0 0 1 2 2v14a2 2 0 0 1-2 2H6a2 2 0 0 1-2-2V6a2 2 0 0 1 2-2h2"/><path d="M12 11h4"/><path d="M12 16h4"/><path d="M8 11h.01"/><path d="M8 16h.01"/>',
    "book-open": '<path d="M2 3h6a4 4 0 0 1 4 4v14a3 3 0 0 0-3-3H2z"/><path d="M22 3h-6a4 4 0 0 0-4 4v14a3 3 0 0 1 3-3h7z"/>',
    "building": '<rect width="16" height="20" x="4" y="2" rx="2"/><path d="M9 22v-4h6v4"/><path d="M8 6h.01"/><path d="M16 6h.01"/><path d="M8 10h.01"/><path d="M16 10h.01"/>',
    "users": '<path d="M16 21v-2a4 4 0 0 0-4-4H6a4 4 0 0 0-4 4v2"/><circle cx="9" cy="7" r="4"/><path d="M22 21v-2a4 4 0 0 0-3-3.87"/><path d="M16 3.13a4 4 0 0 1 0 7.75"/>',
    "graduation-cap": '<path d="M22 10v6M2 10l10-5 10 5-10 5z"/><path d="M6 12v5c3 3 9 3 12 0v-5"/>',
    "award": '<circle cx="12" cy="8" r="6"/><path d="M15.477 12.89 17 22l-5-3-5 3 1.523-9.11"/>',
    "settings": '<circle cx="12" cy="12" r="3"/><path d="M12 1v6m0 10v6M4.22 4.22l4.24 4.24m7.08 7.08 4.24 4.24M1 12h6m10 0h6M4.22 19.78l4.24-4.24m7.08-7.08 4.24-4.24"/>',
    "log-out": '<path d="M9 21H5a2 2 0 0 1-2-2V5a2 2 0 0 1 2-2h4"/><path d="m16 17 5-5-5-5"/><path d="M21 12H9"/>',
    "menu": '<path d="M4 6h16"/><path d="M4 12h16"/><path d="M4 18h16"/>',
    "chevron-left": '<path d="m15 18-6-6 6-6"/>',
    "chevron-right": '<path d="m9 18 6-6-6-6"/>',
    "chevron-down": '<path d="m6 9 6 6 6-6"/>',
}


@register.simple_tag
def btn_classes(variant: str = "ghost") -> str:
    """Gibt die Tailwind-Klassen für die Button-Variante zurück."""
    return BTN_VARIANTS.get(variant, BTN_VARIANTS["ghost"])


@register.simple_tag
def nav_link_classes(item: dict, collapsed: bool = False) -> str:
    """Klassen für einen Navigationslink abhängig von Zustand und Modus."""
    classes = [NAV_LINK_BASE, "justify-center p-2" if collapsed else "gap-3 px-3 py-2"]
    if item.get("active"):
        classes.append(NAV_LINK_ACTIVE)
    if item.get("disabled"):
        classes.append(NAV_LINK_DISABLED)
    return " ".join(classes)


@register.simple_tag
def nav_icon(name: str, size: str = "h-4 w-4") -> str:
    """Rendert ein Icon als Inline-SVG; unbekannte Namen ergeben ein Quadrat."""
    paths = ICONS.get(name, '<rect width="18" height="18" x="3" y="3" rx="2"/>')
    return format_html(
        '<svg aria-hidden="true" xmlns="http://www.w3.org/2000/svg" class="{} flex-shrink-0" '
        'fill="none" viewBox="0 0 24 24" stroke="currentColor" stroke-width="2" '
        'stroke-linecap="round" stroke-linejoin="round">{}</svg>',
        size,
        mark_safe(paths),
    )
