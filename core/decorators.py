from functools import wraps

from django.http import HttpResponseForbidden, JsonResponse

from .roles import Role, resolve_role


def role_required(*roles: Role):
    """Erlaubt den Zugriff nur für Benutzer mit einer der angegebenen Rollen."""

    allowed = frozenset(roles)

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            role = getattr(request, "user_role", None)
            if role is None:
                role = resolve_role(request.user)
            if role in allowed:
                return view_func(request, *args, **kwargs)
            return HttpResponseForbidden("Nicht berechtigt")

        return _wrapped

    return decorator


def api_login_required(view_func):
    """Wie ``login_required``, antwortet aber mit JSON und Status 401."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"error": "Nicht angemeldet"}, status=401)
        return view_func(request, *args, **kwargs)

    return _wrapped
