"""
Opedia Blogs API — Input Sanitization
=======================================

What:  Text clean-up applied before anything is stored.
How:
    strip_html()       Blog titles/content and comment content. nh3 keeps its
                       default allow-list of harmless tags and drops the rest;
                       <script> and <style> elements lose their content too.
    escape_html()      User name and password. Entity-encodes the characters
                       & " ' < > / \\ ` so the value is inert in markup.
    normalize_email()  Canonical mailbox form: lower-cased, provider
                       sub-address tags removed, Gmail dots removed.
"""

from typing import Optional

import nh3

_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})

GMAIL_DOMAINS = {"gmail.com", "googlemail.com"}
ICLOUD_DOMAINS = {"icloud.com", "me.com"}
OUTLOOK_DOMAINS = {
    "hotmail.com", "hotmail.co.uk", "hotmail.fr", "hotmail.de", "hotmail.it",
    "live.com", "live.co.uk", "live.fr", "msn.com", "outlook.com",
    "outlook.co.uk", "outlook.fr", "outlook.de",
}
YAHOO_DOMAINS = {
    "yahoo.com", "yahoo.co.uk", "yahoo.fr", "yahoo.de", "yahoo.ca",
    "yahoo.co.in", "ymail.com", "rocketmail.com",
}
YANDEX_DOMAINS = {
    "yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru",
}


def strip_html(value: Optional[str]) -> str:
    """Remove disallowed markup. None becomes an empty string."""
    if value is None:
        return ""
    return nh3.clean(value)


def escape_html(value: str) -> str:
    return value.translate(_ESCAPES)


def normalize_email(email: str) -> str:
    """
    Canonicalize an already-validated address.

    Examples:
        "John.Doe+news@GoogleMail.com" → "johndoe@gmail.com"
        "Jane-promo@yahoo.com"         → "jane@yahoo.com"
        "Someone@Example.ORG"          → "someone@example.org"
    """
    local, _, domain = email.rpartition("@")
    domain = domain.lower()
    local = local.lower()

    if domain in GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in ICLOUD_DOMAINS or domain in OUTLOOK_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in YAHOO_DOMAINS:
        local = local.split("-", 1)[0]
    elif domain in YANDEX_DOMAINS:
        domain = "yandex.ru"

    return f"{local}@{domain}"
