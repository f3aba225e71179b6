"""Seeding der initialen Daten per Management-Befehl."""

import secrets

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from core.models import Collage, UserProfile
from core.roles import Role

INITIAL_COLLAGES = [
    {"name": "Engineering", "slug": "engineering", "type": "TECHNICAL"},
    {"name": "Medicine", "slug": "medicine", "type": "MEDICAL"},
    {"name": "Fine Arts", "slug": "fine-arts", "type": "ARTS"},
]


def create_initial_data(stdout=None) -> dict[str, int]:
    """Legt den Owner-Benutzer und Beispiel-Collages an oder aktualisiert sie."""

    User = get_user_model()
    owner, created = User.objects.get_or_create(username="owner")
    if created:
        password = secrets.token_urlsafe(12)
        owner.is_staff = True
        owner.is_superuser = True
        owner.set_password(password)
        owner.save()
        if stdout is not None:
            stdout.write(f"Benutzer 'owner' erstellt. Passwort: {password}")
    profile, _ = UserProfile.objects.get_or_create(user=owner)
    if profile.user_type != Role.OWNER:
        profile.user_type = Role.OWNER
        profile.save(update_fields=["user_type"])

    new_collages = 0
    for data in INITIAL_COLLAGES:
        _, was_created = Collage.objects.update_or_create(
            slug=data["slug"],
            defaults={"name": data["name"], "type": data["type"], "created_by": owner},
        )
        new_collages += int(was_created)
    return {"users": int(created), "collages": new_collages}


class Command(BaseCommand):
    """Führt das Seeding der Startdaten aus."""

    def handle(self, **options):
        result = create_initial_data(self.stdout)
        self.stdout.write(
            self.style.SUCCESS(
                f"Initiale Daten wurden angelegt: users={result['users']}, collages={result['collages']}"
            )
        )
