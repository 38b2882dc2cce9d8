"""
Contact relay API handlers.

Both handlers answer with `{"success": bool, "error"?: str}` and never let an
exception escape: every failure is turned into a 400 or 500 response.
"""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from contact_relay.exceptions import (
    SUBSCRIPTION_ERROR_PREFIX,
    NotificationDeliveryError,
    ServiceNotConfiguredError,
    SubscriptionRejectedError,
)
from contact_relay.lists import list_resolver
from contact_relay.notification.backends import NotificationData
from contact_relay.notification.delivery import send_contact_notification
from contact_relay.subscription import subscription
from contact_relay.subscription.backends import SubscriberData

from .serializers import NotificationSerializer, SubscribeSerializer

logger = logging.getLogger(__name__)


def get_timeout():
    """Return the timeout applied to outbound API calls."""
    return getattr(settings, "CONTACT_RELAY_TIMEOUT", 10)


def failure(error, status_code):
    """Build a failure response."""
    return Response({"success": False, "error": error}, status=status_code)


class ContactHandlerView(APIView):
    """Base view for the public, unauthenticated contact form handlers."""

    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser]


class SubscribeView(ContactHandlerView):
    """
    Register a contact form submission in the mailing-list manager.

    POST /api/subscribe
    """

    list_resolver = list_resolver

    def post(self, request):
        """Subscribe the visitor to the requested lists."""
        serializer = SubscribeSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Invalid subscription request: %s", serializer.errors)
            return failure("Invalid submission", status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        try:
            subscriber = SubscriberData(
                email=data["email"],
                name=data["name"],
                list_ids=self.list_resolver.resolve_all(data["l"]),
                attributes=data["attribs"],
            )
            subscription.subscribe(subscriber, get_timeout())
        except SubscriptionRejectedError as err:
            return failure(f"{SUBSCRIPTION_ERROR_PREFIX} {err.detail}", status.HTTP_400_BAD_REQUEST)
        except ImproperlyConfigured:
            logger.exception("Subscription service not configured")
            return failure("Subscription service not configured", status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:  # noqa: BLE001
            logger.exception("Subscription handler error")
            return failure("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True})


class SendEmailView(ContactHandlerView):
    """
    Email the site owner about a contact form submission.

    POST /api/send-email
    """

    def post(self, request):
        """Render and send the notification email."""
        serializer = NotificationSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Invalid notification request: %s", serializer.errors)
            return failure("Invalid submission", status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        try:
            response = send_contact_notification(
                NotificationData(name=data["name"], email=data["email"], attributes=data["attribs"]),
                get_timeout(),
            )
        except (ServiceNotConfiguredError, ImproperlyConfigured):
            return failure("Email service not configured", status.HTTP_500_INTERNAL_SERVER_ERROR)
        except NotificationDeliveryError:
            return failure("Failed to send email notification", status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:  # noqa: BLE001
            logger.exception("Notification handler error")
            return failure("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "success": True,
                "message": "Email notification sent successfully",
                "emailId": response.get("id"),
            }
        )
