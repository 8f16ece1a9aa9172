"""Job-alert subscriptions: the REST calls and the two small forms around them."""
import logging
import re
from enum import Enum
from typing import Optional

from jobportal.core.errors import ClientValidationError, NetworkError, PortalError
from jobportal.schemas.envelope import ApiEnvelope
from jobportal.tools import endpoints
from jobportal.tools.api_client import ApiClient

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: Optional[str]) -> str:
    """Return the normalised address (trimmed, lowercased) or raise ClientValidationError."""
    value = (email or "").strip()
    if not value:
        raise ClientValidationError("Please enter your email address")
    if not EMAIL_RE.match(value):
        raise ClientValidationError("Please enter a valid email address")
    return value.lower()


def subscribe(client: ApiClient, email: str, category_id: int) -> ApiEnvelope:
    return client.post(
        endpoints.JOB_ALERTS_SUBSCRIBE,
        json={"email": email.strip().lower(), "category_id": category_id},
    )


def unsubscribe(client: ApiClient, token: Optional[str] = None, email: Optional[str] = None) -> ApiEnvelope:
    """Unsubscribe by the link token from an alert email, or by address."""
    if token:
        body = {"token": token}
    elif email:
        body = {"email": email.strip().lower()}
    else:
        raise ClientValidationError("Either an unsubscribe token or an email address is required")
    return client.post(endpoints.JOB_ALERTS_UNSUBSCRIBE, json=body)


class MessageType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class _AlertForm:
    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.message = ""
        self.message_type = MessageType.INFO
        self.is_loading = False

    def _report(self, message: str, message_type: MessageType) -> None:
        self.message = message
        self.message_type = message_type

    def _fail(self, error: PortalError, fallback: str) -> None:
        logger.error(f"{type(self).__name__}: {error.message}")
        if isinstance(error, NetworkError):
            self._report(fallback, MessageType.ERROR)
        else:
            self._report(error.message or fallback, MessageType.ERROR)


class UnsubscribeForm(_AlertForm):
    def __init__(self, client: Optional[ApiClient] = None):
        super().__init__(client)
        self.email = ""
        self.has_unsubscribed = False

    def unsubscribe_with_token(self, token: str) -> bool:
        self.is_loading = True
        self.message = ""
        try:
            envelope = unsubscribe(self.client, token=token)
        except PortalError as e:
            self._fail(e, "An error occurred. Please try manually with your email.")
            return False
        finally:
            self.is_loading = False
        self._report(envelope.message or "Successfully unsubscribed from job alerts.", MessageType.SUCCESS)
        self.has_unsubscribed = True
        return True

    def unsubscribe_with_email(self, email: str) -> bool:
        try:
            address = validate_email(email)
        except ClientValidationError as e:
            self._report(e.message, MessageType.ERROR)
            return False

        self.is_loading = True
        self.message = ""
        try:
            envelope = unsubscribe(self.client, email=address)
        except PortalError as e:
            self._fail(e, "An error occurred. Please try again later.")
            return False
        finally:
            self.is_loading = False
        self._report(envelope.message or "Successfully unsubscribed from all job alerts.", MessageType.SUCCESS)
        self.has_unsubscribed = True
        self.email = ""
        return True


class JobAlertSubscriptionForm(_AlertForm):
    def __init__(self, category_id: int, category_name: str, client: Optional[ApiClient] = None):
        super().__init__(client)
        self.category_id = category_id
        self.category_name = category_name
        self.email = ""

    def subscribe(self, email: str) -> bool:
        try:
            address = validate_email(email)
        except ClientValidationError as e:
            self._report(e.message, MessageType.ERROR)
            return False

        self.is_loading = True
        self.message = ""
        try:
            envelope = subscribe(self.client, address, self.category_id)
        except PortalError as e:
            self._fail(e, "An error occurred. Please try again later.")
            return False
        finally:
            self.is_loading = False
        self._report(
            envelope.message or "Successfully subscribed! Check your email for confirmation.",
            MessageType.SUCCESS,
        )
        self.email = ""
        return True
