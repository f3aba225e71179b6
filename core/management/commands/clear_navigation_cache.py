from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from core.collage_cache import invalidate, invalidate_many


class Command(BaseCommand):
    """Verwirft zwischengespeicherte Collages der Navigation.

    Standard: alle Benutzer. Mit ``--user`` nur den angegebenen Benutzer.
    """

    help = "Entfernt die zwischengespeicherten Collage-Listen der Sidebar."

    def add_arguments(self, parser) -> None:  # noqa: ANN001 - Argparser ist trivial
        parser.add_argument(
            "--user",
            type=int,
            dest="user_id",
            help="Nur den Eintrag dieses Benutzers (ID) löschen",
        )

    def handle(self, *args, **options) -> None:  # noqa: ANN001
        user_id = options.get("user_id")
        User = get_user_model()

        if user_id is not None:
            if not User.objects.filter(pk=user_id).exists():
                raise CommandError(f"Benutzer {user_id} existiert nicht")
            invalidate(user_id)
            self.stdout.write(self.style.SUCCESS(f"Navigation-Cache für Benutzer {user_id} geleert"))
            return

        user_ids = list(User.objects.values_list("pk", flat=True))
        invalidate_many(user_ids)
        self.stdout.write(self.style.SUCCESS(f"Navigation-Cache geleert: users={len(user_ids)}"))
