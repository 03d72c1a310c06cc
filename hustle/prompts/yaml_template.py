"""
YAML Template Wrapper - exposes a validated template as ready-to-format prompts
"""

from .validation import PromptTemplate


def format_amount(amount: float) -> str:
    """Render a dollar amount the way a person would type it: 3, 2.50"""
    amount = float(amount)
    if amount.is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


class YAMLTemplateWrapper:
    """
    Wrapper that gives module-like attribute access to a YAML template
    """

    def __init__(self, template: PromptTemplate):
        self.template = template
        self._setup_attributes()

    def _setup_attributes(self):
        """Set up module-like attributes from the template"""
        self.ITEM_TYPE = self.template.metadata.item_type
        self.MIN_IDEAS = self.template.metadata.min_ideas
        self.MAX_WEBSITES = self.template.metadata.max_websites
        self.HUSTLE_PROMPT = self._interpolate_prompt(self.template.prompts.hustle)

    def _interpolate_prompt(self, prompt_text: str) -> str:
        """
        Interpolate template-level settings into prompt text.
        User input placeholders are left for format_hustle_prompt.
        """
        result = prompt_text

        if self.template.special_requirements and '{requirements}' in result:
            result = result.replace('{requirements}', self.template.special_requirements.strip())

        result = result.replace('{min_ideas}', str(self.MIN_IDEAS))
        result = result.replace('{max_websites}', str(self.MAX_WEBSITES))
        return result

    def format_hustle_prompt(self, user_skills: str, target_amount: float) -> str:
        # str.replace rather than str.format: the prompt shows JSON examples with braces
        return (self.HUSTLE_PROMPT
                .replace('{user_skills}', user_skills)
                .replace('{target_amount}', format_amount(target_amount)))

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def description(self) -> str:
        return self.template.description

    @property
    def version(self) -> str:
        return self.template.version

    @property
    def author(self) -> str:
        return self.template.author

    def get_info(self) -> dict:
        """Get template information"""
        return {
            'name': self.template.name,
            'description': self.template.description,
            'version': self.template.version,
            'author': self.template.author,
            'created_date': self.template.created_date,
            'item_type': self.template.metadata.item_type,
            'min_ideas': self.template.metadata.min_ideas,
        }
