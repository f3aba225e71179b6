from django.conf import settings
from django.db import models

from .roles import ROLE_CHOICES, Role


class UserProfile(models.Model):
    """Zusatzdaten eines Benutzers, insbesondere seine Rolle."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    user_type = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=Role.GUEST,
        help_text="Zugriffsstufe für die Admin-Oberfläche.",
    )
    image = models.URLField(blank=True)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.user} ({self.user_type})"


class Collage(models.Model):
    """Eine Hochschule (Collage) mit eigenem Auftritt."""

    TECHNICAL = "TECHNICAL"
    MEDICAL = "MEDICAL"
    ARTS = "ARTS"
    OTHER = "OTHER"

    TYPE_CHOICES = [
        (TECHNICAL, "Technical"),
        (MEDICAL, "Medical"),
        (ARTS, "Arts"),
        (OTHER, "Other"),
    ]

    name = models.CharField(max_length=200)
    slug = models.SlugField(unique=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=OTHER)
    logo_url = models.URLField(blank=True)
    theme = models.JSONField(default=dict, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_collages",
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="member_collages",
        blank=True,
        help_text="Benutzer, die diese Collage mitverwalten.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "pk"]

    def __str__(self) -> str:
        return self.name
