"""
LLM-generated recommendation reasons.

For every recommended researcher the model is asked for three
(title, body) reasons in JSON. When the model is unavailable, fails or
replies without usable JSON, a templated default built from the author's
statistics is used instead.
"""

import logging
from typing import Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import RunnableLambda, RunnableWithFallbacks
from langchain_groq import ChatGroq

from researcher_finder.core.config import Settings
from researcher_finder.core.exceptions import MalformedUpstreamResponse
from researcher_finder.core.schemas import AggregatedAuthor, Justification
from researcher_finder.llm.justification import parse_justification
from researcher_finder.llm.prompts import get_reason_prompt
from researcher_finder.retrieval.formatter import format_result

logger = logging.getLogger(__name__)


def default_justification(author: AggregatedAuthor, language: str = "ja") -> Justification:
    """Templated reasons built only from the author's own record."""
    result = format_result(author)
    name = result.name
    institution = result.institution
    field = result.classified_field

    if language == "en":
        return Justification(
            reason_title_1="Relevant research field",
            reason_body_1=f"{name} works in {field} at {institution}, which matches the requested topic.",
            reason_title_2="Research track record",
            reason_body_2=(
                f"{result.paper_count} matching papers, {result.cited_by_count} citations "
                f"and an h-index of {result.h_index}."
            ),
            reason_title_3="Potential for collaboration",
            reason_body_3="Their published work suggests practical applications for the requested need.",
        )

    return Justification(
        reason_title_1="関連する研究分野",
        reason_body_1=f"{name}氏は{institution}で{field}の研究に取り組んでおり、ご要望のテーマと関連しています。",
        reason_title_2="研究実績",
        reason_body_2=(
            f"該当論文{result.paper_count}件、被引用数{result.cited_by_count}回、"
            f"h指数{result.h_index}の実績があります。"
        ),
        reason_title_3="活用可能性",
        reason_body_3="これまでの研究成果は、ご要望のニーズへの応用が期待できます。",
    )


class ReasonGenerator:
    """
    Generates recommendation reasons with a Groq chat model.

    Without a Groq API key the generator is a stub that returns None, and
    callers use `default_justification`.
    """

    def __init__(self, settings: Settings):
        self.llm: Optional[ChatGroq] = None

        if not settings.llm_configured:
            logger.warning("GROQ_API_KEY not set, recommendation reasons will use defaults")
            return

        self.llm = ChatGroq(
            model=settings.GROQ_MODEL,
            api_key=settings.GROQ_API_KEY,
            temperature=settings.REASON_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        )

    def _chain(self, language: str) -> RunnableWithFallbacks:
        base_chain = get_reason_prompt(language) | self.llm | StrOutputParser()
        return base_chain.with_fallbacks(
            [RunnableLambda(lambda _: None)],
            exceptions_to_handle=(Exception,),
        )

    async def generate(
        self,
        query: str,
        author: AggregatedAuthor,
        language: str = "ja",
    ) -> Optional[Justification]:
        """
        Ask the model why `author` fits `query`.

        Returns:
            Parsed reasons, or None if the model is unavailable or failed

        Raises:
            MalformedUpstreamResponse: If the reply contains no JSON object
        """
        if self.llm is None:
            return None

        result = format_result(author)
        text = await self._chain(language).ainvoke(
            {
                "query": query,
                "name": author.author_name or "N/A",
                "institution": author.institution or "N/A",
                "field": author.classified_field or "N/A",
                "paper_count": result.paper_count,
                "cited_by_count": result.cited_by_count,
                "h_index": result.h_index,
                "title": author.title or "N/A",
                "abstract": author.abstract or "N/A",
            }
        )
        if text is None:
            logger.warning(f"Reason generation failed for {result.name}")
            return None

        justification = parse_justification(text)
        if justification is None:
            raise MalformedUpstreamResponse(f"No JSON object in reply for {result.name}")
        return justification
