"""Contact relay API urls."""

from django.urls import path

from .views import SendEmailView, SubscribeView

urlpatterns = [
    path("api/subscribe", SubscribeView.as_view(), name="contact-relay-subscribe"),
    path("api/send-email", SendEmailView.as_view(), name="contact-relay-send-email"),
]
