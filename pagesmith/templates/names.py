"""Page categories and the templates that render them."""

from __future__ import annotations

import enum
import typing as typ


class PageCategory(enum.Enum):
    """Kinds of documentation page, each rendered by exactly one template."""

    TOPIC = "Topic"
    NAMESPACE = "Namespace"
    CLASS = "Class"
    CLASS_WITH_MEMBERS = "ClassWithMembers"
    STRUCT = "Struct"
    STRUCT_WITH_MEMBERS = "StructWithMembers"
    INTERFACE = "Interface"
    INTERFACE_WITH_MEMBERS = "InterfaceWithMembers"
    ENUM = "Enum"
    DELEGATE = "Delegate"
    CONSTRUCTOR = "Constructor"
    CONSTRUCTOR_OVERLOADS = "ConstructorOverloads"
    FIELD = "Field"
    EVENT = "Event"
    PROPERTY = "Property"
    PROPERTY_OVERLOADS = "PropertyOverloads"
    METHOD = "Method"
    METHOD_OVERLOADS = "MethodOverloads"
    OPERATOR = "Operator"
    OPERATOR_OVERLOADS = "OperatorOverloads"


TEMPLATE_NAMES: typ.Final[dict[PageCategory, str]] = {
    PageCategory.TOPIC: "topic_page",
    PageCategory.NAMESPACE: "namespace_page",
    PageCategory.CLASS: "class_page",
    PageCategory.CLASS_WITH_MEMBERS: "class_members_page",
    PageCategory.STRUCT: "struct_page",
    PageCategory.STRUCT_WITH_MEMBERS: "struct_members_page",
    PageCategory.INTERFACE: "interface_page",
    PageCategory.INTERFACE_WITH_MEMBERS: "interface_members_page",
    PageCategory.ENUM: "enum_page",
    PageCategory.DELEGATE: "delegate_page",
    PageCategory.CONSTRUCTOR: "constructor_page",
    PageCategory.CONSTRUCTOR_OVERLOADS: "constructor_overloads_page",
    PageCategory.FIELD: "field_page",
    PageCategory.EVENT: "event_page",
    PageCategory.PROPERTY: "property_page",
    PageCategory.PROPERTY_OVERLOADS: "property_overloads_page",
    PageCategory.METHOD: "method_page",
    PageCategory.METHOD_OVERLOADS: "method_overloads_page",
    PageCategory.OPERATOR: "operator_page",
    PageCategory.OPERATOR_OVERLOADS: "operator_overloads_page",
}

# Content of the auto-generated API topic.
API_PAGE_CONTENT = "api"


def template_name_for(category: PageCategory) -> str:
    """Return the template name rendering pages of ``category``.

    Raises
    ------
    ValueError
        If ``category`` is not a :class:`PageCategory` member.
    """
    try:
        return TEMPLATE_NAMES[category]
    except (KeyError, TypeError):
        msg = f"Invalid documentation page category '{category}'."
        raise ValueError(msg) from None


__all__ = ["API_PAGE_CONTENT", "TEMPLATE_NAMES", "PageCategory", "template_name_for"]
