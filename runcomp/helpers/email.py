import sys
from runcomp.config import RESEND_API_KEY, RESEND_FROM_EMAIL
import resend

if RESEND_API_KEY:
    resend.api_key = RESEND_API_KEY

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def send_login_code_via_email(email: str, code: str):
    """
    Send the 6-digit login code via Resend in production.

    - If RESEND_API_KEY is not set, just log to stderr (local dev).
    """
    # Dev / fallback path
    if not RESEND_API_KEY:
        print(f"[LOGIN CODE - DEV ONLY] {email} -> {code}", file=sys.stderr)
        return

    html = f"""
      <div style="font-family: system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 16px;">
        <p>Hey runner 👋</p>
        <p>Your Team Run Comp login code is:</p>
        <p style="font-size: 24px; font-weight: 700; letter-spacing: 4px; margin: 12px 0;">{code}</p>
        <p>This code will expire in 10 minutes. If you didn’t request this, you can ignore this email.</p>
      </div>
    """

    try:
        params = {
            "from": RESEND_FROM_EMAIL,
            "to": [email],
            "subject": "Your Team Run Comp login code",
            "html": html,
        }
        resend.Emails.send(params)
        print(f"[LOGIN CODE] Sent login code to {email}", file=sys.stderr)
    except Exception as e:
        # Don't crash the app if email fails; just log it.
        print(f"[LOGIN CODE] Failed to send via Resend: {e}", file=sys.stderr)
