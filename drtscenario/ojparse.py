"""Parser for JSON that keeps the order of map keys."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ojmodel import OJsonBool, OJsonList, OJsonMap, OJsonString

_WHITESPACE = frozenset(" \n\r\t")
_VALUE_TERMINATORS = frozenset("]},")


class OJsonParseError(ValueError):
    """Raised when the input is not valid ordered JSON."""


class _AnyValue:
    """Placeholder for a value whose kind is not known yet."""


@dataclass
class _SingleValue:
    chars: list[str] = field(default_factory=list)
    is_string: bool = False

    def finalize(self):
        text = "".join(self.chars)
        if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
            return OJsonString(text[1:-1])
        if text == "true":
            return OJsonBool(True)
        if text == "false":
            return OJsonBool(False)
        raise OJsonParseError("Invalid value: " + text)


@dataclass
class _MapState:
    current: OJsonMap = field(default_factory=OJsonMap)


@dataclass
class _MapEntryState:
    key_chars: list[str] = field(default_factory=list)
    stage: int = 0  # 0 = key, 1 = colon, 2 = value


@dataclass
class _ListState:
    items: OJsonList = field(default_factory=OJsonList)


def parse_ordered_json(data):
    """Parse JSON text or bytes into an ordered JSON tree.

    Only strings, booleans, lists and maps are accepted. String contents
    are kept verbatim; escape sequences are not interpreted.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OJsonParseError(f"input is not valid UTF-8: {exc}") from exc
    else:
        text = data

    stack: list = [_AnyValue()]
    pending = None

    for i, c in enumerate(text):
        reprocess = True
        while reprocess:
            reprocess = False

            if not stack:
                if c not in _WHITESPACE:
                    raise OJsonParseError("unexpected characters at the end")
                break

            state = stack[-1]

            if isinstance(state, _AnyValue):
                if pending is not None:
                    raise OJsonParseError("invalid state")
                if c in _WHITESPACE:
                    pass
                elif c == "{":
                    stack[-1] = _MapState()
                elif c == "[":
                    stack[-1] = _ListState()
                elif c in _VALUE_TERMINATORS:
                    raise OJsonParseError("misplaced character")
                else:
                    stack[-1] = _SingleValue()
                    reprocess = True

            elif isinstance(state, _SingleValue):
                if not state.chars:
                    state.is_string = c == '"'
                    state.chars.append(c)
                elif state.is_string:
                    state.chars.append(c)
                    if c == '"' and text[i - 1] != "\\":
                        stack.pop()
                        pending = state.finalize()
                elif c in _VALUE_TERMINATORS or c in _WHITESPACE:
                    stack.pop()
                    pending = state.finalize()
                    reprocess = True
                else:
                    state.chars.append(c)

            elif isinstance(state, _ListState):
                if pending is not None:
                    state.items.append(pending)
                    pending = None
                if c in _WHITESPACE:
                    pass
                elif c == "]":
                    pending = state.items
                    stack.pop()
                elif not state.items:
                    stack.append(_AnyValue())
                    reprocess = True
                elif c == ",":
                    stack.append(_AnyValue())

            elif isinstance(state, _MapState):
                if c in _WHITESPACE:
                    pass
                elif c == "}":
                    pending = state.current
                    stack.pop()
                elif c == ",":
                    stack.append(_MapEntryState())
                elif len(state.current) == 0:
                    stack.append(_MapEntryState())
                    reprocess = True
                else:
                    raise OJsonParseError("invalid map state")

            elif isinstance(state, _MapEntryState):
                if state.stage == 0:
                    if not state.key_chars:
                        if c in _WHITESPACE:
                            pass
                        elif c != '"':
                            raise OJsonParseError("map key must start with a quote")
                        else:
                            state.key_chars.append(c)
                    else:
                        state.key_chars.append(c)
                        if c == '"' and text[i - 1] != "\\":
                            state.stage = 1
                elif state.stage == 1:
                    if c in _WHITESPACE:
                        pass
                    elif c == ":":
                        state.stage = 2
                        stack.append(_AnyValue())
                    else:
                        raise OJsonParseError(
                            "invalid character in map definition, colon expected"
                        )
                else:
                    if pending is None:
                        raise OJsonParseError("missing value in map")
                    key = "".join(state.key_chars)
                    if len(key) < 2 or not (key.startswith('"') and key.endswith('"')):
                        raise OJsonParseError(
                            "map key should be a string enclosed in quotes"
                        )
                    stack.pop()
                    if not stack or not isinstance(stack[-1], _MapState):
                        raise OJsonParseError(
                            "map key value state, but no map state underneath"
                        )
                    stack[-1].current.put(key[1:-1], pending)
                    pending = None
                    reprocess = True

            else:
                raise OJsonParseError("invalid parser state")

    if stack:
        raise OJsonParseError("state stack should be empty at the end")

    return pending