"""Prompt templates for domain generation."""

from typing import Sequence


PROMPT_SOURCE_LIMIT = 5
PROMPT_SUMMARY_LENGTH = 200

DOMAIN_PROMPT = """Generate a comprehensive skill tree structure for the domain: "{topic}"

Based on the following research sources, create a hierarchical structure with:
1. Domain name and description
2. 3-5 main categories
3. For each category, 3-5 subcategories
4. For each subcategory, 3-5 skills
5. For each skill, 3-5 microskills

Sources for reference:
{source_list}

Format your response as structured text that I can parse.
Include clear sections for Domain, Categories, Subcategories, Skills, and Microskills."""


def build_domain_prompt(topic: str, sources: Sequence) -> str:
    """
    Build the skill-tree generation prompt for a topic.

    Only the first few sources are listed, each with a shortened summary.
    Same inputs always give the same prompt.
    """
    return DOMAIN_PROMPT.format(topic=topic, source_list=_format_sources(sources))


def _format_sources(sources: Sequence) -> str:
    items = []
    for source in list(sources)[:PROMPT_SOURCE_LIMIT]:
        summary = (source.summary or "")[:PROMPT_SUMMARY_LENGTH]
        items.append(f"- {source.title}: {summary}")
    return "\n".join(items)
