"""
함수 메타데이터 모듈
파서가 채워 넣는 멤버 함수 정보입니다. 역할 플래그와 이름이 프로퍼티 합성과
오버라이드 매칭에 사용됩니다.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .types import JSBType


GETTER_PREFIX = 'Get'
SETTER_PREFIX = 'Set'


@dataclass
class Parameter:
    """함수 파라미터 정보"""
    name: str
    type: JSBType
    is_const: bool = False
    is_reference: bool = False
    is_pointer: bool = False


@dataclass(eq=False)
class JSBFunction:
    """함수 정보"""
    name: str
    return_type: Optional[JSBType] = None  # None이면 void
    parameters: List[Parameter] = field(default_factory=list)
    is_constructor: bool = False
    is_destructor: bool = False
    is_static: bool = False
    is_getter: bool = False
    is_setter: bool = False
    skip: bool = False

    def detect_accessor_role(self):
        """
        이름 규칙으로 getter/setter 판별
        - GetX(): 파라미터 없음 + 반환값 있음 -> getter
        - SetX(v): 파라미터 1개 + void 반환 -> setter
        """
        self.is_getter = False
        self.is_setter = False

        if self.is_static or self.is_constructor or self.is_destructor:
            return self

        if len(self.name) <= len(GETTER_PREFIX):
            return self

        if (self.name.startswith(GETTER_PREFIX) and not self.parameters
                and self.return_type is not None):
            self.is_getter = True
        elif (self.name.startswith(SETTER_PREFIX) and len(self.parameters) == 1
                and self.return_type is None):
            self.is_setter = True

        return self

    @property
    def property_name(self) -> str:
        """GetX / SetX -> X"""
        if self.is_getter and self.name.startswith(GETTER_PREFIX):
            return self.name[len(GETTER_PREFIX):]
        if self.is_setter and self.name.startswith(SETTER_PREFIX):
            return self.name[len(SETTER_PREFIX):]
        return self.name

    def parameter_types(self) -> List[JSBType]:
        return [p.type for p in self.parameters]

    def matches_signature(self, types: Sequence[JSBType]) -> bool:
        """위치별 정확한 타입 일치 (암시적 변환 없음)"""
        return self.parameter_types() == list(types)

    def signature(self) -> str:
        """덤프용: Foo(int, String)"""
        params = ", ".join(str(p.type) for p in self.parameters)
        return f"{self.name}({params})"
