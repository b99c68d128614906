"""Documentation model entities consumed by the rendering pipeline.

The documentation model itself is produced elsewhere; this module only fixes
the shapes the templates and formatters rely on. Formatter dispatch is
structural: a value is formatted according to which of these classes its type
derives from, so richer model hierarchies can reuse the same formatters by
subclassing.
"""

from __future__ import annotations

import abc
import dataclasses as dc
import enum
import typing as typ
from xml.etree import ElementTree as ET  # noqa: N817

if typ.TYPE_CHECKING:
    from .context import DocumentationContext
    from .templates.writers import TextSink

_CODE_REFERENCE_PREFIXES: dict[str, str] = {
    "Namespace": "N",
    "Class": "T",
    "Struct": "T",
    "Interface": "T",
    "Enum": "T",
    "Delegate": "T",
    "Type": "T",
    "Constructor": "M",
    "Method": "M",
    "Operator": "M",
    "Property": "P",
    "Field": "F",
    "Event": "E",
}


class NameQualifier(enum.Enum):
    """How much of a member's ancestry is included in its display name."""

    NONE = "none"
    DECLARING_TYPE = "declaring_type"
    FULL = "full"


@dc.dataclass(slots=True)
class Comment:
    """A parsed documentation comment wrapping its XML content tree."""

    content: ET.Element

    @classmethod
    def parse(cls, xml: str) -> Comment:
        """Build a comment from an XML fragment such as ``<summary>...</summary>``."""
        return cls(ET.fromstring(xml))  # noqa: S314 - trusted doc comments


@dc.dataclass(slots=True)
class Member:
    """Reflected metadata for a type or type member.

    Attributes
    ----------
    name : str
        Simple name of the member (``"Render"``, ``"TemplateRenderer"``).
    kind : str
        Member category label such as ``"Class"``, ``"Method"`` or ``"Field"``.
    namespace : str
        Namespace containing the member or its outermost declaring type.
    declaring_type : Member, optional
        Type declaring this member; ``None`` for top-level types.
    """

    name: str
    kind: str
    namespace: str = ""
    declaring_type: Member | None = None

    @property
    def qualified_name(self) -> str:
        """Return the name prefixed by the chain of declaring types."""
        if self.declaring_type is None:
            return self.name
        return f"{self.declaring_type.qualified_name}.{self.name}"

    @property
    def full_name(self) -> str:
        """Return the namespace-qualified name."""
        if self.namespace:
            return f"{self.namespace}.{self.qualified_name}"
        return self.qualified_name

    @property
    def code_reference(self) -> str:
        """Return the ``X:Full.Name`` identifier used to look up member URLs."""
        prefix = _CODE_REFERENCE_PREFIXES.get(self.kind, "T")
        return f"{prefix}:{self.full_name}"


@dc.dataclass(slots=True)
class CustomAttribute:
    """A custom attribute instance applied to a member.

    Attributes
    ----------
    type : Member
        The attribute's type.
    constructor_arguments : list[object]
        Positional values passed to the attribute constructor.
    named_arguments : dict[str, object]
        Property or field assignments carried by the attribute instance.
    """

    type: Member
    constructor_arguments: list[object] = dc.field(default_factory=list)
    named_arguments: dict[str, object] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class MemberModel:
    """Documentation model of a member, bound to the context that documents it."""

    metadata: Member
    context: DocumentationContext

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def model_type(self) -> str:
        return self.metadata.kind


@dc.dataclass(slots=True)
class NamespaceModel:
    """Documentation model of a namespace."""

    name: str
    context: DocumentationContext
    types: list[MemberModel] = dc.field(default_factory=list)

    @property
    def model_type(self) -> str:
        return "Namespace"

    @property
    def code_reference(self) -> str:
        return f"N:{self.name}"


class TopicModel(abc.ABC):
    """A free-form documentation page that knows how to render its own content.

    Subclasses provide ``id`` and ``title`` attributes.
    """

    id: str
    title: str

    @property
    def name(self) -> str:
        return self.title

    @property
    def model_type(self) -> str:
        return "Topic"

    @abc.abstractmethod
    def render(self, writer: TextSink, context: DocumentationContext) -> None:
        """Write the topic content to ``writer`` in the context's output format."""


@dc.dataclass(slots=True)
class FileTopic:
    """A topic backed by a source file; ordering only needs its title and path."""

    title: str
    file_path: str


__all__ = [
    "Comment",
    "CustomAttribute",
    "FileTopic",
    "Member",
    "MemberModel",
    "NameQualifier",
    "NamespaceModel",
    "TopicModel",
]
