from __future__ import annotations

from django.db.models.signals import post_init
from django.dispatch import receiver

from assignable_values.models import AssignableValuesMixin


@receiver(post_init, dispatch_uid="assignable_values.apply_defaults")
def apply_assignable_defaults(sender, instance, **kwargs):
    if not isinstance(instance, AssignableValuesMixin):
        return
    instance.apply_assignable_defaults()
