"""
Create the first admin account, or promote an existing user to admin.

    ENABLE_ADMIN_BOOTSTRAP=true ADMIN_BOOTSTRAP_CONFIRM=CREATE-FIRST-ADMIN \
    ADMIN_FIRST_NAME=Ada ADMIN_LAST_NAME=Admin ADMIN_EMAIL=... ADMIN_PASSWORD=... \
    python -m skillswap.scripts.bootstrap_admin

    python -m skillswap.scripts.bootstrap_admin --promote user@example.com
"""

import logging
import os
import re
import sys
from typing import Optional

from skillswap.crud import user as user_crud
from skillswap.database import SessionLocal
from skillswap import models
from skillswap.utils.security import get_password_hash

logger = logging.getLogger(__name__)

CONFIRM_PHRASE = "CREATE-FIRST-ADMIN"
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def _required_env(key: str) -> str:
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def _validate_password(password: str) -> None:
    if len(password) < 8:
        raise ValueError("ADMIN_PASSWORD must be at least 8 characters.")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("ADMIN_PASSWORD must be <= 72 bytes (bcrypt limit).")
    if not re.search(r"[A-Z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one lowercase letter.")
    if not re.search(r"\d", password):
        raise ValueError("ADMIN_PASSWORD must contain at least one digit.")


def bootstrap_admin(session_factory=SessionLocal) -> int:
    try:
        if not _is_truthy(os.getenv("ENABLE_ADMIN_BOOTSTRAP")):
            raise ValueError(
                "Bootstrap disabled. Set ENABLE_ADMIN_BOOTSTRAP=true to run."
            )
        confirm = _required_env("ADMIN_BOOTSTRAP_CONFIRM")
        if confirm != CONFIRM_PHRASE:
            raise ValueError(
                f"Invalid ADMIN_BOOTSTRAP_CONFIRM. Expected exact phrase: {CONFIRM_PHRASE}"
            )

        first_name = _required_env("ADMIN_FIRST_NAME")
        last_name = os.getenv("ADMIN_LAST_NAME", "").strip()
        email = _required_env("ADMIN_EMAIL").lower()
        password = _required_env("ADMIN_PASSWORD")

        if not EMAIL_RE.match(email):
            raise ValueError("ADMIN_EMAIL is not a valid email format.")
        _validate_password(password)

        db = session_factory()
        try:
            existing_admin_count = db.query(models.User).filter(
                models.User.is_admin.is_(True)
            ).count()
            if existing_admin_count > 0:
                raise ValueError(
                    "Admin bootstrap blocked: an admin already exists. "
                    "Use --promote <email> to grant admin to another user."
                )

            if user_crud.get_user_by_email(db, email):
                raise ValueError("ADMIN_EMAIL is already registered. Use --promote instead.")

            user_crud.create_user(
                db,
                email=email,
                password_hash=get_password_hash(password),
                first_name=first_name,
                last_name=last_name,
                is_admin=True,
            )
            db.commit()
            print(f"Admin created successfully: {email}")
            return 0
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    except Exception as exc:
        print(f"Admin bootstrap failed: {exc}", file=sys.stderr)
        return 1


def promote_admin(email: str, session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        user = user_crud.get_user_by_email(db, email)
        if not user:
            print(f'User with email "{email}" not found', file=sys.stderr)
            return 1
        if user.is_admin:
            print(f"{user.display_name} ({user.email}) is already an admin")
            return 0

        user.is_admin = True
        db.commit()
        logger.info("Promoted user_id=%s to admin", user.id)
        print(f"{user.display_name} ({user.email}) is now an admin")
        return 0
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--promote":
        if len(argv) != 2:
            print("Usage: python -m skillswap.scripts.bootstrap_admin --promote <email>", file=sys.stderr)
            return 1
        return promote_admin(argv[1])
    return bootstrap_admin()


if __name__ == "__main__":
    raise SystemExit(main())
