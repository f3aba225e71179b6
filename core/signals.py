import logging

from django.conf import settings
from django.db.models.signals import m2m_changed, post_save, pre_delete, pre_save
from django.dispatch import receiver

from . import collage_cache
from .models import Collage, UserProfile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def ensure_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """Legt für neue Benutzer ein Profil mit Standardrolle an."""
    if created:
        UserProfile.objects.get_or_create(user=instance)


def _affected_user_ids(collage: Collage) -> list[int]:
    ids = [collage.created_by_id, getattr(collage, "_previous_creator_id", None)]
    ids.extend(collage.members.values_list("pk", flat=True))
    return [uid for uid in ids if uid is not None]


@receiver(pre_save, sender=Collage)
def remember_previous_creator(sender, instance: Collage, **kwargs) -> None:
    """Merkt sich den bisherigen Ersteller, falls er neu zugewiesen wird."""
    previous = None
    if instance.pk is not None:
        previous = Collage.objects.filter(pk=instance.pk).values_list("created_by_id", flat=True).first()
    instance._previous_creator_id = previous


@receiver(post_save, sender=Collage)
@receiver(pre_delete, sender=Collage)
def invalidate_navigation_on_change(sender, instance: Collage, **kwargs) -> None:
    """Verwirft die Navigation von Ersteller, Vorbesitzer und Mitgliedern."""
    user_ids = _affected_user_ids(instance)
    collage_cache.invalidate_many(user_ids)
    logger.debug("Navigation für Collage %s verworfen: %s", instance.slug, user_ids)


@receiver(m2m_changed, sender=Collage.members.through)
def invalidate_navigation_on_members(sender, instance, action: str, pk_set, **kwargs) -> None:
    """Mitgliederänderungen betreffen die alten und neuen Mitglieder."""
    if action not in {"post_add", "post_remove", "pre_clear"}:
        return
    if isinstance(instance, Collage):
        user_ids = _affected_user_ids(instance)
        user_ids.extend(pk_set or ())
    else:
        user_ids = [instance.pk]
    collage_cache.invalidate_many(user_ids)
