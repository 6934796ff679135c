# server/launcher/utils/helpers.py

from urllib.parse import urlparse

FAVICON_SERVICE_URL = "https://icons.duckduckgo.com/ip3/{domain}.ico"


def extract_hostname(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def get_domain_name(url: str) -> str:
    hostname = extract_hostname(url)
    if not hostname:
        return url

    if hostname.startswith("www."):
        hostname = hostname[4:]

    return hostname


def get_favicon_url(url: str, service_url: str = FAVICON_SERVICE_URL) -> str:
    hostname = extract_hostname(url)
    if not hostname:
        return ""
    return service_url.format(domain=hostname)


def get_app_initials(name: str) -> str:
    words = [word for word in (name or "").split(" ") if word]
    return "".join(word[0] for word in words).upper()[:2]


def slugify_label(label: str) -> str:
    return "-".join(label.lower().split())
