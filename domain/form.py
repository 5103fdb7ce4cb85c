"""
Domain: Webform structure and the server-side lock plan.

Webform elements are persisted as a nested mapping in the host's render-array
style: element keys map to dicts whose "#"-prefixed entries are properties
and whose other entries are child elements:

    {"contact": {"#type": "fieldset",
                 "first_name": {"#type": "textfield"},
                 "email": {"#type": "email"}}}

The tree is parsed once into FormElement values. The identity fields are then
resolved once into a FieldRegistry keyed by logical name, so nothing searches
the tree by name afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .errors import ConfigurationError
from .lock_rule import FieldMapping, HandlerSettings

# Element types that hold no user input and are never disabled themselves.
NON_INPUT_TYPES = frozenset({"markup", "container", "fieldset", "details", "hidden"})

# The host's submit buttons live under this key.
ACTIONS_KEY = "actions"


@dataclass(frozen=True, slots=True)
class FormElement:
    key: str
    type: str = ""
    children: Tuple["FormElement", ...] = ()

    @property
    def is_input(self) -> bool:
        return bool(self.type) and self.type not in NON_INPUT_TYPES

    def walk(self) -> Iterator["FormElement"]:
        """Yield this element and all descendants, depth first."""

        yield self
        for child in self.children:
            yield from child.walk()


def _parse_element(key: str, raw: Mapping[str, Any]) -> FormElement:
    children = tuple(
        _parse_element(str(child_key), child)
        for child_key, child in raw.items()
        if not str(child_key).startswith("#") and isinstance(child, Mapping)
    )
    return FormElement(key=key, type=str(raw.get("#type") or ""), children=children)


@dataclass(frozen=True, slots=True)
class FormDefinition:
    form_id: str
    elements: Tuple[FormElement, ...] = ()

    @staticmethod
    def from_mapping(form_id: str, elements: Optional[Mapping[str, Any]]) -> "FormDefinition":
        """Parse a persisted element tree. Property keys ("#...") are ignored at every level."""

        parsed = tuple(
            _parse_element(str(key), raw)
            for key, raw in (elements or {}).items()
            if not str(key).startswith("#") and isinstance(raw, Mapping)
        )
        return FormDefinition(form_id=form_id, elements=parsed)

    def walk(self) -> Iterator[FormElement]:
        for element in self.elements:
            yield from element.walk()

    def index(self) -> Dict[str, FormElement]:
        """Map element key -> element. First occurrence wins for duplicate keys."""

        found: Dict[str, FormElement] = {}
        for element in self.walk():
            found.setdefault(element.key, element)
        return found


@dataclass(frozen=True, slots=True)
class FieldRegistry:
    """The three identity elements of a form, resolved by logical name."""

    first_name: FormElement
    last_name: FormElement
    email: FormElement

    @staticmethod
    def resolve(form: FormDefinition, mapping: FieldMapping) -> "FieldRegistry":
        """
        Resolve the mapped identity fields against the form.

        Raises:
            ConfigurationError: if the mapping is incomplete or names an element
                the form does not have.
        """

        if not mapping.is_complete():
            raise ConfigurationError("Handler field mapping is incomplete")

        index = form.index()
        missing = [name for name in mapping.names() if name not in index]
        if missing:
            raise ConfigurationError(
                f"Mapped fields not found in webform '{form.form_id}': {', '.join(missing)}"
            )

        return FieldRegistry(
            first_name=index[mapping.first_name_field],
            last_name=index[mapping.last_name_field],
            email=index[mapping.email_field],
        )

    def keys(self) -> Tuple[str, str, str]:
        return (self.first_name.key, self.last_name.key, self.email.key)


def disabled_keys(form: FormDefinition, keep_enabled: Iterable[str]) -> Tuple[str, ...]:
    """
    Keys of every element a lock disables.

    Input elements are disabled; non-input wrappers are not but their children
    are visited. Kept elements are skipped together with their children. The
    actions element is left to be hidden rather than disabled.
    """

    keep = set(keep_enabled)
    keep.add(ACTIONS_KEY)
    result = []

    def visit(elements: Iterable[FormElement]) -> None:
        for element in elements:
            if element.key in keep:
                continue
            if element.is_input:
                result.append(element.key)
            visit(element.children)

    visit(form.elements)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class FormLockPlan:
    """What the host form layer must do for one render."""

    locked: bool
    message: str = ""
    disabled_keys: Tuple[str, ...] = ()
    hide_actions: bool = False

    @staticmethod
    def open() -> "FormLockPlan":
        return FormLockPlan(locked=False)

    @staticmethod
    def for_lock(form: FormDefinition, registry: FieldRegistry, message: str) -> "FormLockPlan":
        return FormLockPlan(
            locked=True,
            message=message,
            disabled_keys=disabled_keys(form, registry.keys()),
            hide_actions=True,
        )


@dataclass(frozen=True, slots=True)
class Webform:
    """A webform with its parsed elements and its activity lock handler, if any."""

    webform_id: str
    form: FormDefinition
    handler: Optional[HandlerSettings] = None
