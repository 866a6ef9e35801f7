"""
Grant Admin Access Script
Adds a user to the admin_users table so they can open the admin analytics dashboard.
Needs SUPABASE_SERVICE_ROLE_KEY, since admin_users is not writable through RLS.

Usage:
    python -m app.scripts.grant_admin admin@example.com
    python -m app.scripts.grant_admin --user-id 3f1c...
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config import settings
from app.database.supabase_client import get_service_supabase
from supabase import Client
from typing import Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def find_user_id(supabase: Client, email: str) -> Optional[str]:
    """Look the user up by the e-mail stored on their profile"""
    result = supabase.table("profiles")\
        .select("id")\
        .eq("email", email)\
        .limit(1)\
        .execute()
    return result.data[0]["id"] if result.data else None


def grant_admin(supabase: Client, user_id: str, email: Optional[str] = None) -> bool:
    existing = supabase.table("admin_users")\
        .select("id")\
        .eq("id", user_id)\
        .execute()

    if existing.data:
        logger.info(f"User {user_id} is already an admin")
        return False

    supabase.table("admin_users").insert({
        "id": user_id,
        "email": email
    }).execute()
    logger.info(f"Granted admin access to {email or user_id}")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grant Elmora admin access")
    parser.add_argument("email", nargs="?", help="E-mail of the user to promote")
    parser.add_argument("--user-id", help="Auth user id (skips the e-mail lookup)")
    args = parser.parse_args(argv)

    if not args.email and not args.user_id:
        parser.error("provide an e-mail or --user-id")

    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to grant admin access")
        sys.exit(1)

    try:
        supabase = get_service_supabase()

        user_id = args.user_id or find_user_id(supabase, args.email)
        if not user_id:
            logger.error(f"No profile found for {args.email}")
            sys.exit(1)

        grant_admin(supabase, user_id, args.email)

    except Exception as e:
        logger.error(f"Error granting admin access: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
