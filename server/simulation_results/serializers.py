from __future__ import annotations

from rest_framework import serializers


class PlayerSerializer(serializers.Serializer):
    id = serializers.JSONField()
    name = serializers.CharField()


class GameModelRefSerializer(serializers.Serializer):
    name = serializers.CharField()
    type = serializers.CharField()
    players = PlayerSerializer(many=True)


class ResultRecordSerializer(serializers.Serializer):
    id = serializers.CharField()
    model_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    model = GameModelRefSerializer()
    rounds = serializers.SerializerMethodField()

    def get_rounds(self, record):
        return len(record.results)


class ResultDetailSerializer(ResultRecordSerializer):
    results = serializers.SerializerMethodField()

    def get_results(self, record):
        return record.raw_results()


class NotificationSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=["error", "success", "warning"])
    message = serializers.CharField()
    duration = serializers.IntegerField(allow_null=True)


class DeleteRequestSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(default=False)
