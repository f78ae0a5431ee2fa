"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from eventbooking.handlers.views import EVENT_LIST_KEY, event_detail_key
from eventbooking.models import Event


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches once the transaction that saved or deleted an event commits.

    Dropping the keys earlier would let a concurrent reader repopulate them
    from the pre-commit state.
    """
    keys = [
        EVENT_LIST_KEY,
        event_detail_key(str(instance.pk)),
        event_detail_key(instance.slug),
    ]
    transaction.on_commit(lambda: cache.delete_many(keys))
