"""Prompt registry — the step templates and their markdown prompts under prompts/."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

# Template name -> what the step produces. Every name needs a prompts/<name>.md.
TEMPLATES: dict[str, str] = {
    "debate": "agent debate log for a campaign brief",
    "content_generation": "one text per content format",
    "content_strategy": "7-day posting schedule",
    "revise": "revised text for one format",
    "translate": "translated text for one format",
    "optimize": "optimized text plus predicted performance",
    "brand_analysis": "brand profile from sample content",
    "brand_audit": "brand alignment score for one text",
    "flag_review": "moderation recommendation for a flagged version",
    "quality_audit": "quality score for a campaign",
    "campaign_memory": "insights from a user's past campaigns",
}

logger = logging.getLogger(__name__)


def prompt_path(template: str) -> Path:
    """Return the prompt file for ``template``.

    Raises ``ValueError`` for a name not in ``TEMPLATES``.
    """
    if template not in TEMPLATES:
        raise ValueError(f"Unknown prompt template '{template}'")
    return PROMPTS_DIR / f"{template}.md"


def missing_prompts() -> list[str]:
    """Registered templates whose prompt file is absent or empty."""
    missing = []
    for template in TEMPLATES:
        path = prompt_path(template)
        if not path.is_file() or not path.read_text(encoding="utf-8").strip():
            missing.append(template)
    return missing


@lru_cache(maxsize=len(TEMPLATES))
def load_prompt(template: str) -> str:
    """Load the markdown prompt for a registered generation step.

    Raises ``ValueError`` for an unregistered name and ``FileNotFoundError``
    if a registered prompt file is missing.
    """
    path = prompt_path(template)
    text = path.read_text(encoding="utf-8").strip()
    logger.debug("Prompt loaded — template=%s chars=%d", template, len(text))
    return text
