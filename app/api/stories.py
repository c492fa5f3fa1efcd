from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.envelope import envelope
from app.core.auth import current_user_id
from app.db.session import get_session
from app.db.store import add_story, list_stories

router = APIRouter()


class AddStoryInput(BaseModel):
    story: dict


@router.post("/add-story")
async def add_user_story(
    body: AddStoryInput,
    user_id: int = Depends(current_user_id),
    s: AsyncSession = Depends(get_session),
):
    # Se guarda tal cual, asociado solo al user_id del token
    await add_story(s, user_id, body.story)
    return envelope("Story added successfully")


@router.get("/get-story")
async def get_user_stories(user_id: int = Depends(current_user_id), s: AsyncSession = Depends(get_session)):
    stories = await list_stories(s, user_id)
    return envelope("Stories retrieved successfully", stories)
