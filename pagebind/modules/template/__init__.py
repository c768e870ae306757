from .renderer import (
    TemplateRenderer,
    extract_paths,
    extract_variables,
    has_placeholders,
    render_template,
    to_text,
)

__all__ = [
    'TemplateRenderer', 'extract_paths', 'extract_variables',
    'has_placeholders', 'render_template', 'to_text'
]
