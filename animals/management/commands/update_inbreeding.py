# -*- mode: python -*-

from django.core.management.base import BaseCommand

from animals import inbreeding
from animals.conf import get_setting
from animals.models import Animal


class Command(BaseCommand):
    help = "Update cached inbreeding coefficients for animals with recorded parents"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Recalculate all coefficients, even if already cached",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report the coefficients that would change without saving them",
        )
        parser.add_argument(
            "--generations",
            type=int,
            default=None,
            help="Number of generations to trace back (default: ANIMALS_STORED_GENERATIONS)",
        )

    def handle(self, *args, **options):
        generations = options["generations"]
        if generations is None:
            generations = get_setting("STORED_GENERATIONS")
        queryset = Animal.objects.with_parents()
        if not options["force"]:
            queryset = queryset.filter(inbreeding_coefficient__isnull=True)
        total_count = queryset.count()
        if options["force"]:
            self.stdout.write(
                f"Recalculating inbreeding coefficients for all {total_count} animals with parents..."
            )
        else:
            self.stdout.write(
                f"Calculating missing inbreeding coefficients for {total_count} animals..."
            )

        if total_count == 0:
            self.stdout.write("No animals need inbreeding coefficient updates")
            return

        updated_count = 0
        for animal in queryset.select_related("species"):
            coefficient = inbreeding.calculate_inbreeding_coefficient(
                animal.uuid, Animal.objects.get_record, generations
            )
            if coefficient == animal.inbreeding_coefficient:
                continue
            updated_count += 1
            self.stdout.write(
                f"{animal}: {animal.inbreeding_coefficient} -> {coefficient}"
            )
            if not options["dry_run"]:
                animal.inbreeding_coefficient = coefficient
                animal.save(update_fields=["inbreeding_coefficient"])

        if options["dry_run"]:
            self.stdout.write(
                f"{updated_count} of {total_count} coefficients would change (dry run, nothing saved)"
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f"Updated inbreeding coefficients for {updated_count} of {total_count} animals"
                )
            )
