# backend/studio/services/chat.py
import logging

from openai import OpenAI

from ..config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful tattoo expert assistant. Provide concise, accurate information "
    "about tattoos, aftercare, and the tattooing process. Keep responses friendly but professional."
)
EMPTY_REPLY = "I'm sorry, I couldn't process that request."
FALLBACK_REPLY = "Sorry, I'm having trouble processing your request right now."

# Lazy-loaded OpenAI client
_client: OpenAI | None = None


def _get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def chat_with_ai(message: str) -> str:
    """
    Single-turn completion: fixed system prompt + the visitor's message.
    Never raises: configuration or API problems are logged and the visitor
    gets FALLBACK_REPLY.
    """
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set, chat answering with fallback")
        return FALLBACK_REPLY

    try:
        response = _get_client().chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            max_tokens=settings.CHAT_MAX_TOKENS,
        )
    except Exception:
        logger.exception("OpenAI API error")
        return FALLBACK_REPLY

    content = response.choices[0].message.content if response.choices else None
    return content or EMPTY_REPLY
