import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="GameModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("name", models.CharField(max_length=120)),
                ("type", models.CharField(max_length=64)),
                ("config", models.JSONField(default=dict)),
            ],
            options={"db_table": "game_models", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="SimulationResult",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("results", models.JSONField(default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "model",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="results",
                        to="simulation_results.gamemodel",
                    ),
                ),
            ],
            options={"db_table": "simulation_results", "ordering": ["-created_at"]},
        ),
    ]
