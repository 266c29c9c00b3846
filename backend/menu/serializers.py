from rest_framework import serializers
from .models import Item


class ItemIssueSerializer(serializers.Serializer):
    code = serializers.CharField()
    field = serializers.CharField(allow_null=True)


class ItemValidationResultSerializer(serializers.Serializer):
    issues = ItemIssueSerializer(many=True)
    has_issues = serializers.BooleanField()
    is_publishable = serializers.BooleanField()


class ItemSerializer(serializers.ModelSerializer):
    has_image = serializers.BooleanField(read_only=True)

    class Meta:
        model = Item
        fields = [
            "id",
            "store",
            "category",
            "vat_group",
            "name",
            "price_cents",
            "has_image",
            "is_active",
        ]
        read_only_fields = fields


class SetItemActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
