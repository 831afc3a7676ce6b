"""Formatting utilities for slugs and log-safe contact details."""

import re


def slugify(text: str) -> str:
    """
    Convert text to URL-safe slug.

    Args:
        text: Text to convert

    Returns:
        URL-safe slug
    """
    text = text.lower()
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'[^a-z0-9-]', '', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def mask_email(email: str) -> str:
    """
    Mask email address for log lines.

    Returns:
        Masked email (e.g., "j***e@example.com")
    """
    if '@' not in email:
        return email

    local, domain = email.split('@', 1)

    if len(local) <= 2:
        masked_local = local[:1] + '*'
    else:
        masked_local = local[0] + '*' * (len(local) - 2) + local[-1]

    return f"{masked_local}@{domain}"
