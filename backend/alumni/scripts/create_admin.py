"""
Create Admin Script
===================
Creates an approved administrator account, or promotes an existing user
to admin (approving them and, if given, resetting their password).

Run with: python -m alumni.scripts.create_admin --email admin@kghs.com --password ... --name "Admin"
"""

import argparse
import asyncio
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alumni.core.database import get_session_local, init_db, close_db
from alumni.core.logging_config import logger
from alumni.core.security import get_password_hash
from alumni.models.user import User, UserRole


async def create_or_promote_admin(
    db: AsyncSession,
    email: str,
    password: Optional[str] = None,
    name: Optional[str] = None,
) -> Tuple[User, bool]:
    """Returns (user, created)"""
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if user:
        user.role = UserRole.ADMIN
        user.is_approved = True
        if password:
            user.hashed_password = get_password_hash(password)
        if name:
            user.name = name
        await db.commit()
        logger.info(f"[Admin] Promoted existing user {email} to admin")
        return user, False

    if not password:
        raise ValueError("A password is required to create a new admin")

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        name=name or "Administrator",
        role=UserRole.ADMIN,
        is_approved=True,
    )
    db.add(user)
    await db.commit()
    logger.info(f"[Admin] Created admin {email}")
    return user, True


async def main(email: str, password: Optional[str], name: Optional[str]):
    await init_db()
    session_local = get_session_local()
    try:
        async with session_local() as db:
            user, created = await create_or_promote_admin(db, email, password, name)
        print(f"{'Created' if created else 'Updated'} admin: {user.email}")
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote a KGHS Alumni admin")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Required when the user does not exist yet")
    parser.add_argument("--name")
    args = parser.parse_args()

    asyncio.run(main(args.email, args.password, args.name))
