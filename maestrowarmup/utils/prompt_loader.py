"""
Prompt templates for MaestroWarmup.

Every Gemini call has a YAML file in the package prompts/ directory: a
``meta`` block, a ``user_template`` with {placeholders}, and for some
prompts extra keys (the warm-up prompt's per-activity guidance and its
attachment note).
"""

import copy
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


@lru_cache(maxsize=None)
def _read_prompt_file(file_path: Path) -> dict[str, Any]:
    with open(file_path, "r", encoding="utf-8") as f:
        prompt = yaml.safe_load(f)

    if not isinstance(prompt, dict) or "user_template" not in prompt:
        raise ValueError(f"Prompt template {file_path.name} has no user_template")
    return prompt


def load_prompt(name: str, prompts_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a prompt template by name.

    Files are parsed once per process; each call returns its own copy.

    Args:
        name: Prompt name without .yaml extension (e.g., "generate_warmup")
        prompts_dir: Optional custom prompts directory

    Raises:
        FileNotFoundError: If prompt file doesn't exist
        ValueError: If the file has no user_template
        yaml.YAMLError: If YAML parsing fails
    """
    file_path = (prompts_dir or PROMPTS_DIR) / f"{name}.yaml"
    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")
    return copy.deepcopy(_read_prompt_file(file_path))


def format_prompt(template: str, **kwargs) -> str:
    """Fill a template's {placeholders}; a missing value is reported by name."""
    try:
        return template.format(**kwargs)
    except KeyError as e:
        raise ValueError(f"No value given for prompt placeholder {e}") from e
