"""
타입 참조 모듈
오버라이드 매칭과 파라미터 비교에 사용하는 타입 값 객체를 정의합니다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TypeKind(Enum):
    PRIMITIVE = "primitive"
    STRING = "string"
    STRING_HASH = "string_hash"
    ENUM = "enum"
    CLASS = "class"


@dataclass(frozen=True)
class JSBType:
    """해석된 타입 참조 (kind, name)이 같으면 같은 타입"""
    name: str
    kind: TypeKind

    @property
    def is_primitive(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE

    def __str__(self) -> str:
        return self.name


# 별칭 -> 정규 이름
PRIMITIVE_TYPES = {
    'bool': 'bool',
    'char': 'char',
    'signed char': 'char',
    'unsigned char': 'unsigned char',
    'short': 'short',
    'unsigned short': 'unsigned short',
    'int': 'int',
    'signed': 'int',
    'signed int': 'int',
    'unsigned': 'unsigned',
    'unsigned int': 'unsigned',
    'uint': 'unsigned',
    'long': 'long',
    'unsigned long': 'unsigned long',
    'float': 'float',
    'double': 'double',
}

STRING_TYPES = ('String', 'const char*', 'char*')
STRING_HASH_TYPES = ('StringHash',)


def strip_decorations(type_name: str) -> str:
    """'const Vector3&' -> 'Vector3' (const, &, * 제거)"""
    name = type_name.strip()
    if name in STRING_TYPES:
        return name
    name = name.replace('&', ' ').replace('*', ' ')
    parts = [p for p in name.split() if p != 'const']
    return ' '.join(parts)


def resolve_builtin_type(type_name: str) -> Optional[JSBType]:
    """프리미티브/문자열 타입 조회. 패키지 클래스/enum은 JSBPackage가 처리"""
    raw = ' '.join(type_name.replace('*', '* ').split()).replace(' *', '*')
    if raw in STRING_TYPES:
        return JSBType('String', TypeKind.STRING)

    name = strip_decorations(type_name)
    if name in PRIMITIVE_TYPES:
        return JSBType(PRIMITIVE_TYPES[name], TypeKind.PRIMITIVE)
    if name == 'String':
        return JSBType('String', TypeKind.STRING)
    if name in STRING_HASH_TYPES:
        return JSBType('StringHash', TypeKind.STRING_HASH)
    return None
