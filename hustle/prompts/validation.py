"""
Validation for YAML prompt templates
"""

from typing import Dict, List, Any, Optional
from pydantic import BaseModel, Field, field_validator
import yaml
from datetime import datetime

# Placeholders the hustle prompt must contain to receive the user's input
REQUIRED_PLACEHOLDERS = ("{user_skills}", "{target_amount}")


class PromptMetadata(BaseModel):
    """Metadata for a prompt template"""
    item_type: str = Field(..., description="Type of items generated (e.g., 'daily hustle ideas')")
    min_ideas: int = Field(5, ge=1, description="Minimum number of ideas the prompt asks for")
    max_websites: int = Field(3, ge=0, description="Maximum website suggestions requested per idea")


class PromptSet(BaseModel):
    """Prompts used for a single idea-generation request"""
    hustle: str = Field(..., description="Prompt that turns skills and a target amount into ideas")


class PromptTemplate(BaseModel):
    """Complete prompt template structure"""
    name: str = Field(..., description="Human-readable name of the template")
    description: str = Field(..., description="Description of what this template generates")
    version: str = Field(..., description="Template version (semantic versioning)")
    author: str = Field(..., description="Template author")
    created_date: str = Field(..., description="Creation date (YYYY-MM-DD)")

    metadata: PromptMetadata = Field(..., description="Template metadata")
    prompts: PromptSet = Field(..., description="Set of prompts")

    # Special requirements for this template type
    special_requirements: Optional[str] = Field(None, description="Special requirements for this template type")

    @field_validator('version')
    @classmethod
    def validate_version(cls, v):
        """Validate semantic versioning format"""
        parts = v.split('.')
        if len(parts) != 3:
            raise ValueError('Version must be in format X.Y.Z')
        for part in parts:
            if not part.isdigit():
                raise ValueError('Version parts must be numeric')
        return v

    @field_validator('created_date')
    @classmethod
    def validate_date(cls, v):
        """Validate date format"""
        try:
            datetime.strptime(v, '%Y-%m-%d')
            return v
        except ValueError:
            raise ValueError('Date must be in YYYY-MM-DD format')


class TemplateValidator:
    """Validates YAML prompt templates"""

    @staticmethod
    def load_and_validate(file_path: str) -> PromptTemplate:
        """Load and validate a YAML template file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax: {e}")
        except FileNotFoundError:
            raise ValueError(f"Template file not found: {file_path}")

        return TemplateValidator.validate_dict(data)

    @staticmethod
    def validate_dict(data: Dict[str, Any]) -> PromptTemplate:
        """Validate a template from a dictionary"""
        if not isinstance(data, dict):
            raise ValueError("Template validation failed: top level must be a mapping")
        try:
            return PromptTemplate(**data)
        except Exception as e:
            raise ValueError(f"Template validation failed: {e}")

    @staticmethod
    def check_prompt_interpolation(template: PromptTemplate) -> List[str]:
        """Check for potential interpolation issues in prompts"""
        warnings = []
        hustle_prompt = template.prompts.hustle

        for placeholder in REQUIRED_PLACEHOLDERS:
            if placeholder not in hustle_prompt:
                warnings.append(f"Hustle prompt missing {placeholder} placeholder")

        if '{requirements}' in hustle_prompt and not template.special_requirements:
            warnings.append("hustle references requirements but it's not defined")

        return warnings


def validate_template_file(file_path: str) -> tuple[PromptTemplate, List[str]]:
    """
    Validate a template file and return the template and any warnings

    Returns:
        tuple: (validated_template, list_of_warnings)
    """
    template = TemplateValidator.load_and_validate(file_path)
    warnings = TemplateValidator.check_prompt_interpolation(template)
    return template, warnings
