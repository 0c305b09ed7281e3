"""
Prompt templates for LLM interactions.

This module contains the prompt templates used for query translation and
for generating per-researcher recommendation reasons. The reason prompt
asks for a single JSON object so the reply can be parsed by
`llm.justification`.
"""

from langchain_core.prompts import ChatPromptTemplate

TRANSLATION_SYSTEM_PROMPT = (
    "You translate research topics into natural academic English. "
    "Keep technical terms precise. Reply with the translation only."
)

TRANSLATION_USER_PROMPT = (
    "以下の日本語の研究トピックを、専門用語を保ちつつ自然な英語に翻訳してください：\n"
    "「{query}」\n"
    "英訳："
)

_REASON_JSON_FORMAT = """{{
  "reason_title_1": "...",
  "reason_body_1": "...",
  "reason_title_2": "...",
  "reason_body_2": "...",
  "reason_title_3": "...",
  "reason_body_3": "..."
}}"""

REASON_PROMPT_JA = (
    """企業からの研究ニーズ:
「{query}」

対象研究者情報:
- 研究者名: {name}
- 所属: {institution}
- 研究分野: {field}
- 論文数: {paper_count}件
- 被引用数: {cited_by_count}回
- h指数: {h_index}

研究ポートフォリオ:
「{title}」

研究内容サマリー:
「{abstract}」

この研究者をおすすめする理由を3点挙げてください。
それぞれの理由について、400ワード程度で詳しく丁寧に解説してください。
特に企業のニーズとの関連性、研究実績の豊富さ、活用可能性、期待される効果について言及してください。

以下のフォーマットでJSON形式で出力してください。

"""
    + _REASON_JSON_FORMAT
)

REASON_PROMPT_EN = (
    """Research need from a company:
"{query}"

Researcher:
- Name: {name}
- Institution: {institution}
- Research field: {field}
- Papers: {paper_count}
- Citations: {cited_by_count}
- h-index: {h_index}

Representative paper:
"{title}"

Research summary:
"{abstract}"

Give three reasons to recommend this researcher. Explain each reason in
detail (about 400 words), covering relevance to the company's need, the
strength of the research record, applicability and expected impact.

Output a JSON object in exactly this format:

"""
    + _REASON_JSON_FORMAT
)


def get_translation_prompt() -> ChatPromptTemplate:
    """Prompt for translating a Japanese research topic into English."""
    return ChatPromptTemplate.from_messages(
        [
            ("system", TRANSLATION_SYSTEM_PROMPT),
            ("human", TRANSLATION_USER_PROMPT),
        ]
    )


def get_reason_prompt(language: str = "ja") -> ChatPromptTemplate:
    """Prompt for three recommendation reasons, in Japanese or English."""
    template = REASON_PROMPT_EN if language == "en" else REASON_PROMPT_JA
    return ChatPromptTemplate.from_messages([("human", template)])
