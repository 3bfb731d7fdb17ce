"""Project template use cases"""
from .list_templates import ListTemplates
from .create_template import CreateTemplate
from .duplicate_template import DuplicateTemplate
from .delete_template import DeleteTemplate
from .dtos import (
    CreateTemplateCommandDTO,
    DuplicateTemplateCommandDTO,
    TemplateResponseDTO,
    TemplateListResponseDTO,
)

__all__ = [
    "ListTemplates",
    "CreateTemplate",
    "DuplicateTemplate",
    "DeleteTemplate",
    "CreateTemplateCommandDTO",
    "DuplicateTemplateCommandDTO",
    "TemplateResponseDTO",
    "TemplateListResponseDTO",
]
