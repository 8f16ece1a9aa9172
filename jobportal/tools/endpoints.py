"""Path builders for the Job Portal REST API (relative to ``{API_URL}/api``)."""
from typing import Union

Id = Union[int, str]


# Auth
AUTH_LOGIN = "/auth/login"
AUTH_REGISTER = "/auth/register"
AUTH_VERIFY_EMAIL = "/auth/verify-email"
AUTH_RESEND_OTP = "/auth/resend-otp"
AUTH_FORGOT_PASSWORD = "/auth/forgot-password"
AUTH_RESET_PASSWORD = "/auth/reset-password"
AUTH_PROFILE = "/auth/profile"

# Job alerts
JOB_ALERTS_SUBSCRIBE = "/job-alerts/subscribe"
JOB_ALERTS_UNSUBSCRIBE = "/job-alerts/unsubscribe"


def resumes() -> str:
    return "/resumes"


def resume(resume_id: Id) -> str:
    return f"/resumes/{resume_id}"


def personal_info(resume_id: Id) -> str:
    return f"/resumes/{resume_id}/personal-info"


def resume_items(resume_id: Id, segment: str) -> str:
    return f"/resumes/{resume_id}/{segment}"


def resume_item(resume_id: Id, segment: str, item_id: Id) -> str:
    return f"/resumes/{resume_id}/{segment}/{item_id}"


def cover_letters() -> str:
    return "/cover-letters"


def cover_letters_for_resume(resume_id: Id) -> str:
    return f"/cover-letters/resume/{resume_id}"


def cover_letter(cover_letter_id: Id) -> str:
    return f"/cover-letters/{cover_letter_id}"
