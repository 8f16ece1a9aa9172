import pytest
import requests

from jobportal.core.errors import ClientValidationError
from jobportal.services.job_alert_service import (
    JobAlertSubscriptionForm,
    MessageType,
    UnsubscribeForm,
    subscribe,
    unsubscribe,
    validate_email,
)


def test_validate_email():
    assert validate_email("  Jane@Example.COM ") == "jane@example.com"
    with pytest.raises(ClientValidationError) as exc:
        validate_email("")
    assert exc.value.message == "Please enter your email address"
    with pytest.raises(ClientValidationError) as exc:
        validate_email("not-an-email")
    assert exc.value.message == "Please enter a valid email address"


def test_subscribe_normalizes_email(client, http_session, respond_ok):
    http_session.request.return_value = respond_ok()

    subscribe(client, " Jane@X.com ", 4)

    method, url = http_session.request.call_args[0]
    assert (method, url) == ("POST", "http://api.test/api/job-alerts/subscribe")
    assert http_session.request.call_args[1]["json"] == {"email": "jane@x.com", "category_id": 4}


def test_unsubscribe_prefers_token(client, http_session, respond_ok):
    http_session.request.return_value = respond_ok()

    unsubscribe(client, token="abc", email="j@x.co")

    assert http_session.request.call_args[1]["json"] == {"token": "abc"}


def test_unsubscribe_needs_token_or_email(client):
    with pytest.raises(ClientValidationError):
        unsubscribe(client)


def test_token_unsubscribe_succeeds(client, http_session, respond):
    http_session.request.return_value = respond(200, {"success": True, "message": "You have been unsubscribed."})
    form = UnsubscribeForm(client)

    assert form.unsubscribe_with_token("tok-1") is True

    assert form.has_unsubscribed is True
    assert form.message_type == MessageType.SUCCESS
    assert form.message == "You have been unsubscribed."
    assert http_session.request.call_args[1]["json"] == {"token": "tok-1"}


def test_token_unsubscribe_failure(client, http_session, respond):
    http_session.request.return_value = respond(400, {"success": False, "error": {"message": "Invalid token"}})
    form = UnsubscribeForm(client)

    assert form.unsubscribe_with_token("bad") is False
    assert form.has_unsubscribed is False
    assert form.message_type == MessageType.ERROR
    assert form.message == "Invalid token"


def test_invalid_email_rejected_before_network(client, http_session):
    form = UnsubscribeForm(client)

    assert form.unsubscribe_with_email("nope@") is False

    assert form.message == "Please enter a valid email address"
    assert form.message_type == MessageType.ERROR
    http_session.request.assert_not_called()


def test_email_unsubscribe_default_message(client, http_session, respond_ok):
    http_session.request.return_value = respond_ok()
    form = UnsubscribeForm(client)

    assert form.unsubscribe_with_email("Jane@X.com") is True
    assert form.message == "Successfully unsubscribed from all job alerts."
    assert http_session.request.call_args[1]["json"] == {"email": "jane@x.com"}


def test_subscription_form(client, http_session, respond_ok):
    http_session.request.return_value = respond_ok()
    form = JobAlertSubscriptionForm(3, "Engineering", client)

    assert form.subscribe("dev@x.io") is True
    assert form.message == "Successfully subscribed! Check your email for confirmation."
    assert http_session.request.call_args[1]["json"] == {"email": "dev@x.io", "category_id": 3}


def test_subscription_form_empty_email(client, http_session):
    form = JobAlertSubscriptionForm(3, "Engineering", client)

    assert form.subscribe("   ") is False
    assert form.message == "Please enter your email address"
    http_session.request.assert_not_called()


def test_subscription_network_failure(client, http_session):
    http_session.request.side_effect = requests.Timeout("timed out")
    form = JobAlertSubscriptionForm(3, "Engineering", client)

    assert form.subscribe("dev@x.io") is False
    assert form.message == "An error occurred. Please try again later."
    assert form.is_loading is False
