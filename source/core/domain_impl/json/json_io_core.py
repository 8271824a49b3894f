"""JSON document pillar: parse, serialize and path-addressed replacement.

Every call parses its own snapshot of the document text and returns new text.
Parsed trees are never mutated; replacement rebuilds the containers along the
path and shares all other children.
"""

import json
from typing import Any

from core import constants as app_constants
from core.exceptions import InvalidPath, ParseError
from core.node_model import Index, Key, Path, to_path

# Sentinel for a final path segment that names an absent object property.
MISSING = object()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def parse_document(document_text: Any) -> Any:
    """Parse strict JSON text; raise ParseError with line/column context."""
    text = "" if document_text is None else str(document_text)
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(f"{exc.msg} (line {exc.lineno}, col {exc.colno})", exc.lineno, exc.colno) from exc
    except ValueError as exc:
        raise ParseError(str(exc)) from exc


def build_pretty_json_payload(data: Any) -> str:
    """Serialize a document tree the way every edit writes it back."""
    return json.dumps(data, indent=app_constants.JSON_INDENT, ensure_ascii=False, allow_nan=False)


def _invalid(path: Path, upto: int) -> InvalidPath:
    # Imported lazily: the view pillar imports this module.
    from core.domain_impl.json.json_view_core import format_path

    return InvalidPath(f"Invalid path: {format_path(path[: upto + 1])}", path[: upto + 1])


def child_value(container: Any, segment: Any) -> Any:
    """Return the child addressed by one segment, or MISSING when it does not resolve."""
    match segment:
        case Index(position=position):
            if isinstance(container, list) and position < len(container):
                return container[position]
        case Key(name=name):
            if isinstance(container, dict) and name in container:
                return container[name]
    return MISSING


def get_value(root_value: Any, path: Any) -> Any:
    """Resolve nested value from root by path; raise InvalidPath when any segment is absent."""
    use_path = to_path(path)
    value = root_value
    for idx, segment in enumerate(use_path):
        value = child_value(value, segment)
        if value is MISSING:
            raise _invalid(use_path, idx)
    return value


def resolve_target(root_value: Any, path: Any) -> Any:
    """Walk all segments but the last strictly, then look the last one up leniently.

    Returns MISSING when the final segment names an absent location.
    """
    use_path = to_path(path)
    if not use_path:
        return root_value
    parent = get_value(root_value, use_path[:-1])
    return child_value(parent, use_path[-1])


def _replaced(container: Any, segment: Any, new_value: Any, path: Path, depth: int) -> Any:
    match segment:
        case Key(name=name) if isinstance(container, dict):
            updated = dict(container)
            updated[name] = new_value
            return updated
        case Index(position=position) if isinstance(container, list) and position < len(container):
            updated = list(container)
            updated[position] = new_value
            return updated
    raise _invalid(path, depth)


def set_value(root_value: Any, path: Any, new_value: Any) -> Any:
    """Return a new tree with the addressed location replaced; root_value is left untouched."""
    use_path = to_path(path)
    if not use_path:
        return new_value

    def _rebuild(node: Any, depth: int) -> Any:
        segment = use_path[depth]
        if depth == len(use_path) - 1:
            return _replaced(node, segment, new_value, use_path, depth)
        child = child_value(node, segment)
        if child is MISSING:
            raise _invalid(use_path, depth)
        return _replaced(node, segment, _rebuild(child, depth + 1), use_path, depth)

    return _rebuild(root_value, 0)


def apply_edit(document_text: Any, path: Any, new_value: Any) -> str:
    """Replace the value at path inside the document text and return the new text."""
    root = parse_document(document_text)
    use_path = to_path(path)
    if not use_path:
        return build_pretty_json_payload(new_value)
    return build_pretty_json_payload(set_value(root, use_path, new_value))


__all__ = [name for name in globals() if not name.startswith("__")]
