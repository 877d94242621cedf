#!/usr/bin/env python3
"""
Print fresh secrets for a production .env file
"""
import secrets
import string

# Quotes, backslash, $ and # break .env parsing or shell expansion
PASSWORD_ALPHABET = "".join(
    ch for ch in string.ascii_letters + string.digits + string.punctuation if ch not in "'\"\\$#"
)


def random_password(length=24):
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def env_secrets():
    """
    Secret .env entries of the portal

    Returns:
        dict: JWT_SECRET (64 random bytes, URL-safe), ADMIN_PASSWORD, DB_PASSWORD
    """
    return {
        "JWT_SECRET": secrets.token_urlsafe(64),
        "ADMIN_PASSWORD": random_password(),
        "DB_PASSWORD": random_password(),
    }


if __name__ == "__main__":
    print("# Copy these values into your .env file")
    for name, value in env_secrets().items():
        print(f"{name}={value}")
