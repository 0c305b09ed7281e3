"""
LLM module for query translation and recommendation reasons.

This module handles interaction with large language models.

Key responsibilities:
- Translating Japanese research topics into English before embedding
- Generating three recommendation reasons per researcher
- Extracting the reasons' JSON from free-form model output
"""

from researcher_finder.llm.justification import extract_json_object, parse_justification
from researcher_finder.llm.reasoner import ReasonGenerator, default_justification
from researcher_finder.llm.translator import Translator, needs_translation

__all__ = [
    "Translator",
    "needs_translation",
    "ReasonGenerator",
    "default_justification",
    "extract_json_object",
    "parse_justification",
]
