"""
Feedback — Serializers

@file feedback/serializers.py
"""

from rest_framework import serializers

from .models import Feedback

RATING_RANGE_ERROR = 'Rating must be between 1 and 5'


class FeedbackSubmitSerializer(serializers.Serializer):
    pharmacy_id = serializers.UUIDField()
    rating = serializers.IntegerField(
        min_value=1, max_value=5,
        error_messages={'min_value': RATING_RANGE_ERROR, 'max_value': RATING_RANGE_ERROR},
    )
    comment = serializers.CharField(max_length=2000)


class FeedbackReadSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)

    class Meta:
        model = Feedback
        fields = ['id', 'pharmacy', 'patient_name', 'rating', 'comment', 'status', 'created_at']
        read_only_fields = fields


class FeedbackModerationSerializer(FeedbackReadSerializer):
    """Admin queue row."""

    pharmacy_name = serializers.CharField(source='pharmacy.name', read_only=True)

    class Meta(FeedbackReadSerializer.Meta):
        fields = FeedbackReadSerializer.Meta.fields + ['patient', 'pharmacy_name']
        read_only_fields = fields


class ModerateFeedbackSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Feedback.StatusChoices.APPROVED, Feedback.StatusChoices.REMOVED],
        error_messages={'invalid_choice': "Status must be 'Approved' or 'Removed'"},
    )
