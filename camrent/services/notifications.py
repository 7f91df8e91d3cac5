"""Email notifications via the Mailgun HTTP API. Best-effort: a failed send is logged and
never fails the request that triggered it."""
import html
import logging

import httpx

from camrent.config import get_settings
from camrent.models.inquiry import Inquiry
from camrent.models.property import Property

log = logging.getLogger("uvicorn.error")

MAILGUN_US_BASE = "https://api.mailgun.net"
MAILGUN_EU_BASE = "https://api.eu.mailgun.net"


def mailgun_configured() -> bool:
    s = get_settings()
    return bool(s.mailgun_api_key and s.mailgun_domain)


def _from_address(settings) -> str:
    domain = settings.mailgun_domain.lower()
    from_addr = settings.mailgun_from_email
    from_domain = from_addr.split("@")[-1].lower() if "@" in from_addr else ""
    if domain and from_domain != domain:
        # Mailgun drops mail whose sender domain differs from the sending domain
        from_addr = f"noreply@{domain}"
    return f"{settings.mailgun_from_name} <{from_addr}>"


def send_email(to_email: str, subject: str, html_content: str, text_content: str | None = None) -> bool:
    """Returns True when Mailgun accepted the message."""
    settings = get_settings()
    if not mailgun_configured():
        log.info("[Email] Mailgun not configured, skipping mail to %s (%s)", to_email, subject)
        return False
    base = (settings.mailgun_base_url or MAILGUN_US_BASE).rstrip("/")
    data = {
        "from": _from_address(settings),
        "to": to_email,
        "subject": subject,
        "text": text_content or "",
        "html": html_content or "",
    }
    auth = ("api", settings.mailgun_api_key)
    try:
        with httpx.Client(timeout=10.0) as client:
            r = client.post(f"{base}/v3/{settings.mailgun_domain}/messages", auth=auth, data=data)
            if r.status_code == 401 and base == MAILGUN_US_BASE:
                log.info("[Mailgun] 401 on the US endpoint, retrying on EU")
                r = client.post(f"{MAILGUN_EU_BASE}/v3/{settings.mailgun_domain}/messages", auth=auth, data=data)
    except httpx.HTTPError as e:
        log.warning("[Mailgun] Request failed: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False
    if 200 <= r.status_code < 300:
        log.info("[Mailgun] Sent: to=%s status=%s", to_email, r.status_code)
        return True
    log.warning("[Mailgun] API failed: status=%s to=%s body=%s", r.status_code, to_email, r.text[:500])
    return False


def send_inquiry_notification(landlord_email: str, prop_title: str, inquiry: dict) -> bool:
    """Tell a landlord about a new inquiry on one of their listings."""
    subject = f"[Camrent] New inquiry: {prop_title}"
    lines = [
        f"You have a new inquiry about \"{prop_title}\".",
        "",
        f"From: {inquiry['guest_name']} <{inquiry['guest_email']}>",
    ]
    if inquiry.get("guest_phone"):
        lines.append(f"Phone: {inquiry['guest_phone']}")
    if inquiry.get("check_in_date"):
        lines.append(f"Check-in: {inquiry['check_in_date']}")
    if inquiry.get("check_out_date"):
        lines.append(f"Check-out: {inquiry['check_out_date']}")
    lines.append(f"Guests: {inquiry.get('guests', 1)}")
    lines += ["", inquiry["message"]]
    text = "\n".join(lines)
    body = "<p>" + "<br>".join(html.escape(line) for line in lines) + "</p>"
    return send_email(landlord_email, subject, body, text_content=text)


def inquiry_notification_args(prop: Property, inquiry: Inquiry) -> tuple[str, str, dict]:
    """Plain values for a background send; ORM objects must not outlive the request session."""
    return (
        prop.landlord.email,
        prop.title,
        {
            "guest_name": inquiry.guest_name,
            "guest_email": inquiry.guest_email,
            "guest_phone": inquiry.guest_phone,
            "message": inquiry.message,
            "check_in_date": inquiry.check_in_date.date().isoformat() if inquiry.check_in_date else None,
            "check_out_date": inquiry.check_out_date.date().isoformat() if inquiry.check_out_date else None,
            "guests": inquiry.guests,
        },
    )
