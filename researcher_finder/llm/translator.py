"""
LLM-based query translation.

The paper index is embedded from English text, so Japanese research
topics are translated before embedding. Queries without Japanese script
are passed through untouched.
"""

import logging
import re
from typing import Any, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import RunnableLambda, RunnableWithFallbacks
from langchain_groq import ChatGroq

from researcher_finder.core.config import Settings
from researcher_finder.llm.prompts import get_translation_prompt

logger = logging.getLogger(__name__)

# Hiragana, Katakana, CJK ideographs, half-width Katakana
_JAPANESE_SCRIPT = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uff66-\uff9f]")


def needs_translation(text: str) -> bool:
    """Whether the text contains Japanese script."""
    return bool(text and _JAPANESE_SCRIPT.search(text))


def _create_fallback_runnable(fallback_value: Any) -> RunnableLambda:
    """Create a runnable that returns a constant fallback value."""
    return RunnableLambda(lambda _: fallback_value)


class Translator:
    """
    Translates research topics into English using a Groq chat model.

    Without a Groq API key the translator is a stub that always returns None,
    and callers keep the original text.
    """

    def __init__(self, settings: Settings):
        self.chain: Optional[RunnableWithFallbacks] = None

        if not settings.llm_configured:
            logger.warning("GROQ_API_KEY not set, query translation disabled")
            return

        llm = ChatGroq(
            model=settings.GROQ_MODEL,
            api_key=settings.GROQ_API_KEY,
            temperature=settings.TRANSLATION_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        )
        base_chain = get_translation_prompt() | llm | StrOutputParser()
        self.chain = base_chain.with_fallbacks(
            [_create_fallback_runnable(None)],
            exceptions_to_handle=(Exception,),
        )

    async def translate(self, text: str) -> Optional[str]:
        """
        Translate `text` into English.

        Returns:
            The translation, or None if translation is unavailable or failed
        """
        if self.chain is None:
            return None

        result = await self.chain.ainvoke({"query": text})
        if result is None:
            logger.warning("Translation call failed")
            return None

        translated = result.strip().strip("「」\"")
        return translated or None
