# app/db/store.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateEmail
from app.db.models import Account, Story


async def create_account(
    s: AsyncSession, full_name: str, email: str, password_hash: str, profile_pic: str | None
) -> Account:
    """Inserta la cuenta (sin commit). El índice único de email decide los duplicados."""
    account = Account(full_name=full_name, email=email, password=password_hash, profile_pic=profile_pic)
    s.add(account)
    try:
        await s.flush()
    except IntegrityError as e:
        await s.rollback()
        raise DuplicateEmail() from e
    return account


async def get_account_by_email(s: AsyncSession, email: str) -> Account | None:
    return (await s.execute(select(Account).where(Account.email == email))).scalar_one_or_none()


async def get_account_by_id(s: AsyncSession, user_id: int) -> Account | None:
    return await s.get(Account, user_id)


async def add_story(s: AsyncSession, user_id: int, story: dict) -> Story:
    row = Story(user_id=user_id, stories=story)
    s.add(row)
    await s.commit()
    return row


async def list_stories(s: AsyncSession, user_id: int) -> list[dict]:
    res = await s.execute(select(Story).where(Story.user_id == user_id).order_by(Story.id))
    return [r.stories for r in res.scalars().all() if r.stories is not None]
