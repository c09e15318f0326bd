import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Species",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("common_name", models.CharField(max_length=45)),
                ("code", models.CharField(max_length=4, unique=True)),
            ],
            options={
                "verbose_name_plural": "species",
                "ordering": ("common_name",),
            },
        ),
        migrations.CreateModel(
            name="Animal",
            fields=[
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4,
                        primary_key=True,
                        serialize=False,
                        unique=True,
                    ),
                ),
                (
                    "sex",
                    models.CharField(
                        choices=[("M", "male"), ("F", "female"), ("U", "unknown")],
                        default="U",
                        max_length=2,
                    ),
                ),
                ("registered_name", models.CharField(blank=True, max_length=128)),
                ("created", models.DateTimeField(auto_now_add=True)),
                (
                    "inbreeding_coefficient",
                    models.FloatField(
                        blank=True,
                        help_text="cached inbreeding coefficient (percent); empty if not yet calculated",
                        null=True,
                    ),
                ),
                (
                    "species",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        to="animals.species",
                    ),
                ),
            ],
            options={
                "ordering": ("created",),
            },
        ),
        migrations.CreateModel(
            name="Parent",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="animals.animal",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="animals.animal",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["parent"], name="parent_idx"),
                    models.Index(fields=["child"], name="child_idx"),
                ],
                "unique_together": {("parent", "child")},
            },
        ),
        migrations.AddField(
            model_name="animal",
            name="parents",
            field=models.ManyToManyField(
                related_name="children",
                through="animals.Parent",
                through_fields=("child", "parent"),
                to="animals.animal",
            ),
        ),
    ]
