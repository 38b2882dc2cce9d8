"""Serializers parsing the contact form fields posted to the handlers."""

import json
import logging

from rest_framework import serializers

from contact_relay.submission import LIST_ATTRIBUTE_FIELDS, NOTIFICATION_ATTRIBUTE_FIELDS, compact_attributes

logger = logging.getLogger(__name__)


class ContactSerializer(serializers.Serializer):
    """Core contact fields, `attribs` being a JSON encoded object of optional fields."""

    attribute_fields = NOTIFICATION_ATTRIBUTE_FIELDS

    email = serializers.CharField()
    name = serializers.CharField()
    attribs = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_attribs(self, value):
        """Decode the attributes and keep the known, non-empty ones."""
        if not value:
            return {}
        try:
            attributes = json.loads(value)
        except ValueError as err:
            raise serializers.ValidationError("attribs must be a JSON object.") from err
        if not isinstance(attributes, dict):
            raise serializers.ValidationError("attribs must be a JSON object.")
        return compact_attributes(attributes, self.attribute_fields)


class SubscribeSerializer(ContactSerializer):
    """Fields posted to the subscription handler."""

    attribute_fields = LIST_ATTRIBUTE_FIELDS

    l = serializers.ListField(child=serializers.CharField(), required=False, default=list)  # noqa: E741


class NotificationSerializer(ContactSerializer):
    """Fields posted to the notification handler."""

    def validate_attribs(self, value):
        """Fall back to no attributes when they cannot be decoded."""
        try:
            return super().validate_attribs(value)
        except serializers.ValidationError:
            logger.warning("Error parsing attributes, sending the notification without them")
            return {}
