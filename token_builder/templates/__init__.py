"""Product templates: preset standards, blocks and metadata for common products."""

from .catalog import (
    ProductCategory,
    ProductTemplate,
    PRODUCT_CATEGORIES,
    TOKEN_TEMPLATES,
    list_templates,
    get_template,
    templates_for_product,
    apply_template,
)

__all__ = [
    "ProductCategory",
    "ProductTemplate",
    "PRODUCT_CATEGORIES",
    "TOKEN_TEMPLATES",
    "list_templates",
    "get_template",
    "templates_for_product",
    "apply_template",
]
