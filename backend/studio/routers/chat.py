from fastapi import APIRouter, HTTPException

from ..schemas.chat import ChatIn, ChatOut
from ..services.chat import chat_with_ai

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatOut)
def chat(payload: ChatIn):
    message = payload.message.strip()
    if not message:
        raise HTTPException(400, "Message is required")
    return ChatOut(response=chat_with_ai(message))
