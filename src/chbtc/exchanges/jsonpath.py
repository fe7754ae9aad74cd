# src/chbtc/exchanges/jsonpath.py
"""
응답 JSON 에서 점(.) 경로로 값을 꺼내고 타입을 맞추는 헬퍼.

CHBTC 는 같은 숫자를 엔드포인트에 따라 "123.4"(문자열) 또는 123.4(숫자)로 준다.
둘 다 허용하고, 없거나 변환이 안 되면 ParseError 로 호출 전체를 실패시킨다.
"""
from __future__ import annotations
from typing import Any, List

from chbtc.exchanges.errors import ParseError


def get_path(doc: Any, path: str) -> Any:
    """'ticker.buy', 'asks.0.1' 같은 경로. 숫자 세그먼트는 리스트 인덱스."""
    cur = doc
    for part in path.split("."):
        if isinstance(cur, dict):
            if part not in cur:
                raise ParseError(path, "missing field")
            cur = cur[part]
        elif isinstance(cur, list) and part.isdigit():
            idx = int(part)
            if idx >= len(cur):
                raise ParseError(path, f"index {idx} out of range (len={len(cur)})")
            cur = cur[idx]
        else:
            raise ParseError(path, f"cannot descend into {type(cur).__name__}")
    return cur


def to_float(value: Any, path: str) -> float:
    # bool 은 int 의 서브클래스라 먼저 걸러야 함
    if isinstance(value, bool) or value is None:
        raise ParseError(path, f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ParseError(path, f"not a number: {value!r}") from None
    raise ParseError(path, f"unexpected type {type(value).__name__}")


def to_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ParseError(path, f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ParseError(path, f"not an integer: {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ParseError(path, f"not an integer: {value!r}") from None
    raise ParseError(path, f"unexpected type {type(value).__name__}")


def to_str(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ParseError(path, f"not a string: {value!r}")


def get_float(doc: Any, path: str) -> float:
    return to_float(get_path(doc, path), path)


def get_int(doc: Any, path: str) -> int:
    return to_int(get_path(doc, path), path)


def get_str(doc: Any, path: str) -> str:
    return to_str(get_path(doc, path), path)


def get_list(doc: Any, path: str) -> List[Any]:
    value = get_path(doc, path) if path else doc
    if not isinstance(value, list):
        raise ParseError(path or "<root>", f"expected array, got {type(value).__name__}")
    return value
