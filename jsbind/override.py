"""
함수 오버라이드 모듈
오버로드된 함수 중 노출할 하나를 이름 + 시그니처 문자열로 지정합니다.
"""

from typing import List, Optional, Protocol, Sequence

from .errors import UnresolvedTypeError
from .types import JSBType


class TypeResolver(Protocol):
    def resolve_type(self, type_name: str) -> Optional[JSBType]:
        ...


class JSBFunctionOverride:
    """사용자가 선택한 오버로드 (예: CreateChild(String, CreateMode, unsigned))"""

    def __init__(self, name: str, sig: Sequence[str]):
        self.name = name
        self.sig: List[str] = list(sig)
        self.types: List[JSBType] = []
        self.parsed = False

    def parse(self, resolver: TypeResolver):
        """
        시그니처 토큰을 타입 참조로 해석합니다. 이미 해석되었다면 아무것도 하지 않음

        Raises:
            UnresolvedTypeError: 토큰에 해당하는 타입이 없을 때 (types는 비어 있는 상태 유지)
        """
        if self.parsed:
            return

        types = []
        for token in self.sig:
            jtype = resolver.resolve_type(token)
            if jtype is None:
                raise UnresolvedTypeError(token, self.name)
            types.append(jtype)

        self.types = types
        self.parsed = True

    def __repr__(self) -> str:
        return f"JSBFunctionOverride({self.name}({', '.join(self.sig)}))"
