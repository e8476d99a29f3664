"""Chat prompts for generating and reviewing grammar patterns."""

from __future__ import annotations

import json
from typing import Any

from .context import GenerationContext

GENERATION_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates Czech language grammar patterns "
    "for language learning. Always return your response as a valid JSON array, "
    "strictly adhering to the specified grammar requirements. The Czech and "
    "Russian fields are absolutely mandatory and must be provided for every "
    "pattern. Ensure all quotes within string values are properly escaped with "
    "a backslash (\\)."
)

REVIEW_SYSTEM_PROMPT = (
    "You are an expert Czech language teacher with deep knowledge of Czech "
    "grammar, including noun cases, verb conjugations, and other grammatical "
    "nuances. Your task is to review, correct, and enrich Czech language "
    "patterns with detailed grammatical information."
)

PATTERN_SHAPE = """{
  "czech": "Czech phrase",
  "russian": "Russian translation",
  "grammar": {
    "nounForm": "Exact name of the noun case used (if applicable, from the specified list)",
    "verbForm": "Exact verb person and tense used (if applicable, from the specified list)",
    "nounUsed": "The noun used in the phrase in its nominative form (if applicable)",
    "verbUsed": "The verb used in the phrase in its infinitive form (if applicable)",
    "adjectiveUsed": "The adjective used in the phrase in its basic form (if applicable)",
    "adverbUsed": "The adverb used in the phrase (if applicable)",
    "numeralUsed": "The numeral used in the phrase (if applicable)",
    "grammarNoteInCzech": "Brief grammar note in Czech",
    "grammarNoteInEnglish": "Brief grammar note in English",
    "grammarNoteInRussian": "Brief grammar note in Russian"
  }
}"""

REVIEWED_GRAMMAR_SHAPE = """"grammar": {
  "structure": "Overall grammatical structure of the phrase",
  "nouns": [
    {"word": "Used form", "baseForm": "Nominative singular", "case": "Case used", "plurality": "singular/plural"}
  ],
  "verbs": [
    {"word": "Used form", "infinitive": "Infinitive form", "conjugation": "Person and number", "tense": "Tense used"}
  ],
  "otherWords": [
    {"word": "Any other significant word", "type": "adjective/adverb/etc.", "grammaticalInfo": "Relevant grammatical information"}
  ]
}"""


def _to_json(value: Any, indent: int | None = None) -> str:
    return json.dumps(value, ensure_ascii=False, indent=indent, default=str)


def _listed(values: list[str], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def build_generation_messages(context: GenerationContext, count: int = 20) -> list[dict[str, str]]:
    """Messages asking for ``count`` new patterns."""
    requirements = context.requirements
    lines = [
        f"Generate {count} Czech language grammar patterns based on the following "
        "context and requirements:",
        "",
        _to_json(context.to_prompt_dict()),
        "",
        "STRICT REQUIREMENTS (must be followed exactly):",
        '- The "czech" and "russian" fields are MANDATORY for every pattern.',
        "- Ensure all quotes within string values are properly escaped with a backslash (\\).",
        "- Only use the following noun cases (sklonovani), with the exact names provided: "
        + _listed(requirements.noun_cases, "no specific cases provided, use common cases"),
        "- Only use the following verb persons: "
        + _listed(requirements.verb_persons, "no specific verb persons provided, use common forms"),
        "- Only use the following verb tenses: "
        + _listed(requirements.verb_tenses, "no specific verb tenses provided, use common tenses"),
        "Additional requirements:",
        "- Use words from the provided wordlist when possible.",
        "- Follow parameters from wordlistParameters.",
        "- Use common words suitable for A2 level Czech.",
        "- Each pattern should be a short phrase of 3-5 words commonly used by Czech "
        "speakers in everyday speech.",
        "- Provide a diverse set of patterns to practice the specified grammar construction.",
    ]
    if requirements.additional_prompt:
        lines.append(f"- {requirements.additional_prompt}")
    lines += [
        "",
        "Return the result as a JSON array of objects, each with the following structure:",
        PATTERN_SHAPE,
        "",
        'Only include fields in the "grammar" object that are relevant to the specific pattern.',
        "For nounUsed, always provide the nominative form of the noun.",
        "For verbUsed, always provide the infinitive form of the verb.",
    ]
    return [
        {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join(lines)},
    ]


def build_review_messages(patterns: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Messages asking to correct and enrich generated patterns."""
    content = "\n".join(
        [
            "Review, correct, and enrich the following Czech language patterns. For each pattern:",
            "1. Verify and correct the overall grammatical structure.",
            "2. For each noun found add its base form (nominative singular), the case "
            "used in the pattern and its plurality (singular or plural).",
            "3. For each verb found add its infinitive form, the conjugation (person "
            "and number) and the tense used.",
            "4. Ensure all other grammatical information is accurate and complete.",
            "",
            "Here are the patterns to review:",
            "",
            _to_json(patterns, indent=2),
            "",
            "IMPORTANT: Your response must be ONLY the corrected and enriched JSON array "
            "of patterns, with no text outside the JSON structure. Keep the czech and "
            "russian fields of every pattern.",
            "",
            "CRITICAL: 'nouns', 'verbs' and 'otherWords' must be arrays with one object "
            "per word. Example of the desired 'grammar' object:",
            REVIEWED_GRAMMAR_SHAPE,
        ]
    )
    return [
        {"role": "system", "content": REVIEW_SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]
