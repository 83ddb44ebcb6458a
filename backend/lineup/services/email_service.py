"""
Transactional email service using Resend.
All sends are no-ops when RESEND_API_KEY is not configured.
"""
import logging

from lineup.config import settings

logger = logging.getLogger(__name__)


async def send_email(to: str, subject: str, html_body: str) -> bool:
    """Send an email via Resend. Returns True on success."""
    if not settings.resend_enabled:
        logger.info(f"Email skipped (Resend not configured): to={to}, subject={subject}")
        return False

    import resend
    resend.api_key = settings.RESEND_API_KEY

    try:
        resend.Emails.send({
            "from": settings.RESEND_FROM_EMAIL,
            "to": [to],
            "subject": subject,
            "html": html_body,
        })
        logger.info(f"Email sent: to={to}, subject={subject}")
        return True
    except Exception as e:
        logger.error(f"Email send failed: {e}")
        return False


async def send_test_email(to: str, subject: str) -> bool:
    html = """
    <div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;" dir="rtl">
        <h2 style="color: #4f46e5;">Lineup email test</h2>
        <p>If you can read this, outgoing email from the lineup system works.</p>
    </div>
    """
    return await send_email(to, subject, html)
