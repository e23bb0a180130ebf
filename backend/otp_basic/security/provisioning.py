# backend/otp_basic/security/provisioning.py
from urllib.parse import quote, urlencode

from otp_basic.security.totp import DEFAULT_DIGITS, DEFAULT_INTERVAL

ALGORITHM = "SHA1"

# '@' stays readable in account labels (alice@acme.com); ':' must not, it
# separates issuer from account
_LABEL_SAFE = "@"


def build_totp_uri(
    secret: str,
    issuer: str,
    account_name: str,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_INTERVAL,
) -> str:
    """
    otpauth:// URI in the Key URI Format understood by authenticator apps.

    pyotp's provisioning_uri escapes '@' in the label and drops default
    parameters, so the URI is assembled here with every field explicit.
    """
    label = f"{quote(issuer, safe=_LABEL_SAFE)}:{quote(account_name, safe=_LABEL_SAFE)}"
    query = urlencode(
        {
            "secret": secret,
            "issuer": issuer,
            "algorithm": ALGORITHM,
            "digits": digits,
            "period": period,
        },
        quote_via=quote,
    )
    return f"otpauth://totp/{label}?{query}"
