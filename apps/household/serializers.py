from rest_framework import serializers
from .models import Notice, Task, TaskStatus, Review


class NoticeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notice
        fields = ['id', 'message', 'author', 'author_name', 'created_at']
        read_only_fields = fields


class NoticeCreateSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000)


class TaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = [
            'id',
            'name',
            'assigned_to',
            'assigned_to_name',
            'due_date',
            'status',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TaskCreateSerializer(serializers.Serializer):
    """All three fields are required, as on the task form."""

    name = serializers.CharField(max_length=200)
    assigned_to = serializers.UUIDField()
    due_date = serializers.DateField()


class TaskFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)


class ReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ['id', 'author', 'author_name', 'rating', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    # Range is checked by the service
    rating = serializers.IntegerField()
    comment = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(required=False)
    comment = serializers.CharField(max_length=2000, required=False, allow_blank=True)


class ReviewFilterSerializer(serializers.Serializer):
    min_rating = serializers.IntegerField(min_value=1, max_value=5, required=False)


class RatingSummarySerializer(serializers.Serializer):
    average_rating = serializers.DecimalField(max_digits=3, decimal_places=2)
    review_count = serializers.IntegerField()
