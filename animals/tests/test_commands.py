# -*- mode: python -*-
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from animals.models import Animal, Species


class UpdateInbreedingCommandTests(TestCase):
    fixtures = ("animal_colony_starter_kit",)

    def setUp(self):
        species = Species.objects.get(pk=1)
        self.sire = Animal.objects.create(species=species, sex=Animal.Sex.MALE)
        self.dam = Animal.objects.create(species=species, sex=Animal.Sex.FEMALE)
        self.son = Animal.objects.create_from_parents(
            sire=self.sire, dam=self.dam, sex=Animal.Sex.MALE
        )
        self.daughter = Animal.objects.create_from_parents(
            sire=self.sire, dam=self.dam, sex=Animal.Sex.FEMALE
        )
        self.inbred = Animal.objects.create_from_parents(sire=self.son, dam=self.daughter)
        # forget the values set by the triggers
        Animal.objects.update(inbreeding_coefficient=None)

    def call(self, *args):
        out = StringIO()
        call_command("update_inbreeding", *args, stdout=out)
        return out.getvalue()

    def coefficients(self):
        return {
            animal: animal.inbreeding_coefficient
            for animal in Animal.objects.all()
        }

    def test_fills_missing_coefficients(self):
        output = self.call()
        self.assertIn("Updated inbreeding coefficients for 3 of 3 animals", output)
        self.assertEqual(
            self.coefficients(),
            {
                self.sire: None,
                self.dam: None,
                self.son: 0.0,
                self.daughter: 0.0,
                self.inbred: 25.0,
            },
        )
        output = self.call()
        self.assertIn("No animals need inbreeding coefficient updates", output)

    def test_dry_run_does_not_save(self):
        output = self.call("--dry-run")
        self.assertIn("3 of 3 coefficients would change", output)
        self.assertTrue(all(value is None for value in self.coefficients().values()))

    def test_force_recalculates(self):
        self.call()
        Animal.objects.filter(pk=self.inbred.pk).update(inbreeding_coefficient=99.0)
        output = self.call("--force")
        self.assertIn("Updated inbreeding coefficients for 1 of 3 animals", output)
        self.inbred.refresh_from_db()
        self.assertEqual(self.inbred.inbreeding_coefficient, 25.0)

    def test_generations(self):
        self.call("--generations", "2")
        self.inbred.refresh_from_db()
        self.assertEqual(self.inbred.inbreeding_coefficient, 0.0)

    def test_reports_number_of_animals_to_update(self):
        output = self.call()
        self.assertIn("Calculating missing inbreeding coefficients for 3 animals", output)
        output = self.call("--force")
        self.assertIn("for all 3 animals with parents", output)

    def test_counts_animals_once(self):
        self.call()
        # nothing to update: a single count query
        with self.assertNumQueries(1):
            output = self.call()
        self.assertIn("for 0 animals", output)
