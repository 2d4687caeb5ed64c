# lms_backend/services/shares/mailer.py
from pathlib import Path

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from pydantic import SecretStr

from lms_backend.core.settings import settings

OTP_SUBJECT = "Your OTP verification code"


class MailerService:
    """Outbound system email (OTP codes, notices)."""

    def __init__(self):
        base_dir = Path(__file__).resolve().parent.parent.parent  # -> lms_backend/
        template_dir = base_dir / "templates" / "emails"

        self.conf = ConnectionConfig(
            MAIL_USERNAME=settings.MAIL_USERNAME,
            MAIL_PASSWORD=SecretStr(settings.MAIL_PASSWORD),
            MAIL_FROM=settings.MAIL_FROM,
            MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
            MAIL_PORT=settings.MAIL_PORT,
            MAIL_SERVER=settings.MAIL_SERVER,
            MAIL_STARTTLS=settings.MAIL_TLS,
            MAIL_SSL_TLS=settings.MAIL_SSL,
            USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
            VALIDATE_CERTS=settings.MAIL_VALIDATE_CERTS,
            TEMPLATE_FOLDER=template_dir,
        )
        self.fastmail = FastMail(self.conf)

    async def send_otp_email(self, email: str, code: str):
        message = MessageSchema(
            subject=OTP_SUBJECT,
            recipients=[email],
            template_body={
                "code": list(code),
                "expire_minutes": settings.OTP_EXPIRE_MINUTES,
            },
            subtype=MessageType.html,
        )
        await self.fastmail.send_message(message, template_name="otp_email.html")
        return {"message": f"OTP email sent to {email}"}


def get_mailer_service() -> MailerService:
    return MailerService()
