import json
import logging
import time

from django.conf import settings
from django.contrib.auth import logout
from django.contrib.auth.decorators import login_required
from django.contrib.auth.models import User
from django.db import DatabaseError, connection
from django.db.models import Count, Q
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_POST

from .context_processors import SESSION_COLLAPSED, SESSION_OPEN_ITEMS, current_role, get_open_items
from .decorators import api_login_required, role_required
from .models import Collage, UserProfile
from .navigation import get_nav_key
from .roles import ADMIN_ROLES, ROLE_CHOICES, Role, parse_role
from .utils import get_member_collages, get_owned_collages, user_can_access_collage

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def home(request: HttpRequest) -> HttpResponse:
    """Öffentliche Startseite mit allen Collages."""
    collages = Collage.objects.all()
    return render(request, "core/home.html", {"collages": collages})


# --- Admin-Seiten -----------------------------------------------------------


@login_required
@role_required(*ADMIN_ROLES)
def admin_overview(request: HttpRequest) -> HttpResponse:
    """Dashboard mit Kennzahlen des Benutzers."""

    role = current_role(request)
    context = {
        "owned_count": Collage.objects.filter(created_by=request.user).count(),
        "member_count": Collage.objects.filter(members=request.user).count(),
    }
    if role in (Role.OWNER, Role.SUPERADMIN):
        context["collage_count"] = Collage.objects.count()
        context["user_count"] = User.objects.count()
    return render(request, "core/admin_overview.html", context)


def _visible_collages(request: HttpRequest):
    role = current_role(request)
    qs = Collage.objects.select_related("created_by")
    if role in (Role.OWNER, Role.SUPERADMIN):
        return qs.all()
    accessible = Collage.objects.filter(Q(created_by=request.user) | Q(members=request.user))
    return qs.filter(pk__in=accessible.values("pk"))


@login_required
@role_required(*ADMIN_ROLES)
def collage_list(request: HttpRequest) -> HttpResponse:
    """Listet die Collages, die der Benutzer verwalten darf."""

    collages = _visible_collages(request).annotate(member_total=Count("members", distinct=True))
    collage_type = request.GET.get("type")
    if collage_type:
        collages = collages.filter(type=collage_type)
    return render(
        request,
        "core/collage_list.html",
        {"collages": collages, "types": Collage.TYPE_CHOICES, "current_type": collage_type},
    )


@login_required
@role_required(*ADMIN_ROLES)
def collage_detail(request: HttpRequest, slug: str) -> HttpResponse:
    """Detailseite einer Collage."""

    collage = get_object_or_404(Collage, slug=slug)
    if not user_can_access_collage(request.user, collage, current_role(request)):
        return HttpResponse("Nicht berechtigt", status=403)
    return render(
        request,
        "core/collage_detail.html",
        {"collage": collage, "members": collage.members.all()},
    )


@login_required
@role_required(Role.OWNER)
def uni_config(request: HttpRequest) -> HttpResponse:
    """Übersicht der Universitätskonfiguration."""

    by_type = dict(Collage.objects.values_list("type").order_by().annotate(total=Count("id")))
    by_role = dict(UserProfile.objects.values_list("user_type").order_by().annotate(total=Count("id")))
    return render(
        request,
        "core/uni_config.html",
        {
            "collage_types": [(label, by_type.get(value, 0)) for value, label in Collage.TYPE_CHOICES],
            "user_roles": [(label, by_role.get(value, 0)) for value, label in ROLE_CHOICES],
        },
    )


@login_required
@role_required(Role.OWNER, Role.SUPERADMIN)
def user_list(request: HttpRequest) -> HttpResponse:
    """Benutzerverwaltung mit optionalem Rollenfilter."""

    users = User.objects.select_related("profile").order_by("username")
    role_filter = parse_role(request.GET.get("role"))
    if role_filter != Role.NONE:
        users = users.filter(profile__user_type=role_filter)
    return render(
        request,
        "core/user_list.html",
        {
            "users": users,
            "roles": ROLE_CHOICES,
            "current_role_filter": role_filter.value if role_filter != Role.NONE else "",
        },
    )


# --- JSON-API ---------------------------------------------------------------


@require_GET
@api_login_required
def owned_collages_api(request: HttpRequest) -> JsonResponse:
    """Collages, die der Benutzer angelegt hat."""
    return JsonResponse(get_owned_collages(request.user.pk), safe=False)


@require_GET
@api_login_required
def member_collages_api(request: HttpRequest) -> JsonResponse:
    """Collages, in denen der Benutzer Mitglied ist."""
    return JsonResponse(get_member_collages(request.user.pk), safe=False)


@require_POST
@api_login_required
@role_required(Role.OWNER)
def toggle_role_api(request: HttpRequest, user_id: int) -> JsonResponse:
    """Setzt die Rolle eines Benutzers.

    Erwartet ``{"role": "<ROLLE>"}`` als JSON-Body.
    """

    try:
        payload = json.loads(request.body or b"{}")
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    raw_role = payload.get("role")
    if not raw_role:
        return JsonResponse({"error": "Role is required"}, status=400)
    role = parse_role(raw_role)
    if role == Role.NONE:
        return JsonResponse({"error": "Invalid role"}, status=400)

    try:
        target = User.objects.select_related("profile").get(pk=user_id)
    except User.DoesNotExist:
        return JsonResponse({"error": "User not found"}, status=404)

    profile, _ = UserProfile.objects.get_or_create(user=target)
    if profile.user_type == role:
        return JsonResponse({"error": "User already has this role"}, status=400)

    profile.user_type = role
    profile.save(update_fields=["user_type"])
    logger.info(
        "Rolle von %s auf %s gesetzt",
        target.username,
        role.value,
        extra={"user_id": request.user.pk},
    )
    return JsonResponse({"message": "User role updated successfully"})


@require_GET
def health(request: HttpRequest) -> JsonResponse:
    """Einfacher Gesundheitscheck mit Datenbankverbindung und Kennzahlen."""

    start = time.monotonic()
    base = {
        "timestamp": timezone.now().isoformat(),
        "version": API_VERSION,
        "environment": "development" if settings.DEBUG else "production",
    }
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        stats = {
            "users": User.objects.count(),
            "colleges": Collage.objects.count(),
        }
    except DatabaseError as exc:
        logger.exception("Health check fehlgeschlagen")
        elapsed = round((time.monotonic() - start) * 1000)
        return JsonResponse(
            {
                **base,
                "status": "unhealthy",
                "responseTime": f"{elapsed}ms",
                "database": {"status": "disconnected", "error": str(exc)},
            },
            status=503,
        )

    elapsed = round((time.monotonic() - start) * 1000)
    return JsonResponse(
        {
            **base,
            "status": "healthy",
            "responseTime": f"{elapsed}ms",
            "database": {"status": "connected", "connection": "ok"},
            "stats": stats,
        }
    )


API_ENDPOINTS = {
    "health": {
        "/health/": {
            "method": "GET",
            "description": "Basic system health check with database connectivity and basic stats",
            "response": "Health status, response time, database status and statistics",
        },
    },
    "collages": {
        "/collages/owned/": {
            "method": "GET",
            "description": "Collages created by the current user",
            "response": "List of { name, slug, logoUrl }",
        },
        "/collages/member/": {
            "method": "GET",
            "description": "Collages the current user is a member of",
            "response": "List of { name, slug, logoUrl }",
        },
    },
    "users": {
        "/users/[id]/toggle-role/": {
            "method": "POST",
            "description": "Change the role of a user (OWNER only)",
            "body": "{ role: OWNER | SUPERADMIN | ADMIN | GUEST }",
            "response": "Success message",
        },
    },
    "docs": {
        "/docs/": {
            "method": "GET",
            "description": "This API description",
            "response": "API definition",
        },
    },
}


@require_GET
def api_docs(request: HttpRequest) -> JsonResponse:
    """Beschreibt die REST-Schnittstelle."""

    return JsonResponse(
        {
            "info": {
                "title": "College Management System API",
                "version": API_VERSION,
                "description": "API for managing colleges and their administrators",
                "timestamp": timezone.now().isoformat(),
            },
            "baseUrl": request.build_absolute_uri("/api"),
            "endpoints": API_ENDPOINTS,
        }
    )


# --- Sidebar-Zustand ----------------------------------------------------------


def _wants_json(request: HttpRequest) -> bool:
    return (
        request.headers.get("x-requested-with") == "XMLHttpRequest"
        or "application/json" in request.headers.get("accept", "")
    )


def _ui_state_response(request: HttpRequest, payload: dict) -> HttpResponse:
    """Antwortet AJAX-Aufrufern mit JSON, sonst per Redirect auf ``next``."""

    if _wants_json(request):
        return JsonResponse(payload)
    target = request.POST.get("next") or request.GET.get("next") or "/"
    if not url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        target = "/"
    return redirect(target)


@require_POST
@login_required
def toggle_sidebar(request: HttpRequest) -> HttpResponse:
    """Klappt die Desktop-Sidebar ein bzw. aus."""

    collapsed = not request.session.get(SESSION_COLLAPSED, False)
    request.session[SESSION_COLLAPSED] = collapsed
    return _ui_state_response(request, {"collapsed": collapsed})


@require_POST
@login_required
def toggle_nav_item(request: HttpRequest, key: str) -> HttpResponse:
    """Öffnet oder schließt die Unterpunkte eines Eintrags."""

    nav_key = get_nav_key(key)
    if nav_key is None:
        raise Http404("Unbekannter Navigationseintrag")
    open_items = get_open_items(request)
    open_items[nav_key.value] = not open_items.get(nav_key.value, False)
    request.session[SESSION_OPEN_ITEMS] = open_items
    return _ui_state_response(request, {"key": nav_key.value, "open": open_items[nav_key.value]})


@require_POST
def sign_out(request: HttpRequest) -> HttpResponse:
    """Meldet den Benutzer ab und leitet zur Startseite."""
    logout(request)
    return redirect("/")
