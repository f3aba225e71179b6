import logging

from django.db import DatabaseError

from .roles import Role, resolve_role

logger = logging.getLogger(__name__)


class UserRoleMiddleware:
    """Hinterlegt die Rolle des Benutzers als ``request.user_role``."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            request.user_role = resolve_role(request.user)
        except DatabaseError:
            logger.exception("Rolle konnte nicht ermittelt werden")
            request.user_role = Role.NONE
        response = self.get_response(request)
        return response
