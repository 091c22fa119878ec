"""
Segment route templates.

Templates use ``:name`` for parameters and ``[...]`` for optional parts,
e.g. ``/api/:resource[/:id]``. ``expand_segment_route`` turns a template into
the FastAPI paths it covers; ``assemble_route`` builds a concrete path.
"""
from __future__ import annotations

import itertools
import re
from typing import Any, List, Mapping, Tuple, Union
from urllib.parse import quote

_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

Part = Union[Tuple[str, str], Tuple[str, list]]


class InvalidArgumentError(ValueError):
    """Raised for malformed templates or missing route parameters."""


def parse_segment_route(template: str) -> List[Part]:
    parts, pos = _parse(template, 0, nested=False)
    if pos != len(template):
        raise InvalidArgumentError(f"Unbalanced ']' in route '{template}'")
    return parts


def _parse(template: str, pos: int, nested: bool):
    parts: List[Part] = []
    literal = ""
    while pos < len(template):
        char = template[pos]
        if char == "[":
            if literal:
                parts.append(("literal", literal))
                literal = ""
            sub, pos = _parse(template, pos + 1, nested=True)
            parts.append(("optional", sub))
            continue
        if char == "]":
            if not nested:
                return parts + ([("literal", literal)] if literal else []), pos
            if literal:
                parts.append(("literal", literal))
            return parts, pos + 1
        match = _PARAM.match(template, pos)
        if match:
            if literal:
                parts.append(("literal", literal))
                literal = ""
            parts.append(("param", match.group(1)))
            pos = match.end()
            continue
        literal += char
        pos += 1
    if nested:
        raise InvalidArgumentError(f"Unclosed '[' in route '{template}'")
    if literal:
        parts.append(("literal", literal))
    return parts, pos


def _variants(parts: List[Part]) -> List[str]:
    pieces: List[List[str]] = []
    for kind, value in parts:
        if kind == "literal":
            pieces.append([value])
        elif kind == "param":
            pieces.append(["{%s}" % value])
        else:
            pieces.append([""] + _variants(value))
    return ["".join(combo) for combo in itertools.product(*pieces)]


def expand_segment_route(template: str) -> List[str]:
    """Return every concrete FastAPI path a template matches, shortest first."""
    paths = []
    for path in _variants(parse_segment_route(template)):
        path = path or "/"
        if path not in paths:
            paths.append(path)
    return sorted(paths, key=len)


def _param_names(parts: List[Part]) -> List[str]:
    names = []
    for kind, value in parts:
        if kind == "param":
            names.append(value)
        elif kind == "optional":
            names.extend(_param_names(value))
    return names


def _assemble(parts: List[Part], params: Mapping[str, Any], optional: bool) -> str:
    out = ""
    for kind, value in parts:
        if kind == "literal":
            out += value
        elif kind == "param":
            if params.get(value) is None:
                if optional:
                    return ""
                raise InvalidArgumentError(f"Missing parameter '{value}'")
            out += quote(str(params[value]), safe="")
        else:
            names = _param_names(value)
            if all(params.get(name) is not None for name in names):
                out += _assemble(value, params, optional=True)
    return out


def assemble_route(template: str, params: Mapping[str, Any]) -> str:
    return _assemble(parse_segment_route(template), params, optional=False) or "/"
