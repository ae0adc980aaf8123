import uuid

from django.db import models


class GameModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    name = models.CharField(max_length=120)
    type = models.CharField(max_length=64)
    config = models.JSONField(default=dict)

    class Meta:
        db_table = "game_models"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class SimulationResult(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    model = models.ForeignKey(GameModel, on_delete=models.CASCADE, related_name="results")
    results = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "simulation_results"
        ordering = ["-created_at"]
