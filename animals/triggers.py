# -*- mode: python -*-
from django.db.models.signals import m2m_changed, post_delete, post_save
from django.dispatch import receiver

from animals.models import Animal, Parent


def update_lineage(animal):
    """Update the cached coefficients of an animal and all of its descendents"""
    animal.update_inbreeding()
    animal.update_descendent_inbreeding()


@receiver(m2m_changed, sender=Animal.parents.through)
def update_inbreeding_on_parent_add(sender, instance, action, reverse, pk_set, **kwargs):
    """Update cached inbreeding coefficients when parents are added through the
    related managers. These insert Parent rows in bulk without sending
    post_save. Removals delete the rows one by one and are handled by
    update_inbreeding_on_parent_row_change.

    """
    if action != "post_add":
        return
    if not reverse:
        update_lineage(instance)
    elif pk_set:
        # parent.children was modified; pk_set holds the children
        for child in Animal.objects.filter(pk__in=pk_set):
            update_lineage(child)


@receiver([post_save, post_delete], sender=Parent)
def update_inbreeding_on_parent_row_change(sender, instance, **kwargs):
    """Update cached inbreeding coefficients when a Parent row is saved or
    deleted directly, or removed through the related managers"""
    # the child may already be gone if this is part of a cascade
    child = Animal.objects.filter(pk=instance.child_id).first()
    if child is not None:
        update_lineage(child)
