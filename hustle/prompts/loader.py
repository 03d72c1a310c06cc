"""
Utility functions for loading prompt templates by name
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .validation import validate_template_file
from .yaml_template import YAMLTemplateWrapper

logger = logging.getLogger(__name__)


def _templates_dir() -> Path:
    return Path(__file__).parent / "templates"


def _get_yaml_template_path(template_name: str) -> Optional[Path]:
    """Get the path to a YAML template file"""
    return _templates_dir() / f"{template_name}.yaml"


@lru_cache(maxsize=None)
def get_prompts(template_name: str) -> YAMLTemplateWrapper:
    """
    Load prompts for the named template

    Args:
        template_name (str): Template file stem under prompts/templates

    Returns:
        YAMLTemplateWrapper: wrapper exposing the formatted prompts

    Raises:
        ValueError: when the template is missing or fails validation
    """
    yaml_path = _get_yaml_template_path(template_name)
    if not yaml_path or not yaml_path.exists():
        raise ValueError(f"No prompts found for template: {template_name}")

    template, warnings = validate_template_file(str(yaml_path))
    if warnings:
        logger.warning(f"Template warnings for {template_name}: {warnings}")
    return YAMLTemplateWrapper(template)


def list_available_templates() -> dict:
    """
    List all available prompt templates

    Returns:
        dict: Template information keyed by template name
    """
    templates = {}
    templates_dir = _templates_dir()
    if not templates_dir.exists():
        return templates

    for yaml_file in sorted(templates_dir.glob("*.yaml")):
        template_name = yaml_file.stem
        try:
            template, warnings = validate_template_file(str(yaml_file))
            wrapper = YAMLTemplateWrapper(template)
            templates[template_name] = {
                'name': wrapper.name,
                'description': wrapper.description,
                'version': wrapper.version,
                'author': wrapper.author,
                'warnings': warnings,
                'path': str(yaml_file)
            }
        except ValueError as e:
            templates[template_name] = {
                'name': template_name,
                'description': 'Invalid template',
                'error': str(e),
                'path': str(yaml_file)
            }

    return templates


def validate_template(template_name: str) -> tuple[bool, list]:
    """
    Validate a specific template

    Returns:
        tuple: (is_valid, list_of_warnings_or_errors)
    """
    yaml_path = _get_yaml_template_path(template_name)
    if not yaml_path or not yaml_path.exists():
        return False, [f"Template file not found: {template_name}"]

    try:
        _, warnings = validate_template_file(str(yaml_path))
        return True, warnings
    except ValueError as e:
        return False, [str(e)]
