"""
바인딩 파이프라인 에러/진단 모듈
치명적인 구조 오류는 예외로, 클래스 단위 문제는 Diagnostic으로 수집합니다.
"""

from dataclasses import dataclass
from enum import Enum


class JSBindError(Exception):
    """jsbind 예외 최상위 클래스"""


class CyclicBaseClassError(JSBindError):
    """자기 자신 또는 자손을 베이스 클래스로 지정하려고 할 때"""

    def __init__(self, class_name: str, base_name: str):
        self.class_name = class_name
        self.base_name = base_name
        super().__init__(
            f"Cannot set {base_name} as base class of {class_name}: "
            f"would create an inheritance cycle"
        )


class PipelineOrderError(JSBindError):
    """Preprocess -> Process -> PostProcess 순서를 어긴 경우 (프로그래밍 오류)"""


class ClassFinalizedError(JSBindError):
    """PostProcess 이후 클래스를 수정하려고 할 때"""


class InvalidNumberArrayError(JSBindError, ValueError):
    """숫자 배열 힌트가 잘못된 경우 (음수 개수, 원소 타입 없음)"""


class UnresolvedTypeError(JSBindError):
    """오버라이드 시그니처의 타입 이름을 찾을 수 없을 때"""

    def __init__(self, type_name: str, override_name: str = ""):
        self.type_name = type_name
        self.override_name = override_name
        where = f" in override {override_name}" if override_name else ""
        super().__init__(f"Unknown type '{type_name}'{where}")


class DiagnosticKind(Enum):
    UNRESOLVED_TYPE = "unresolved-type"
    AMBIGUOUS_OVERLOAD = "ambiguous-overload"
    UNMATCHED_OVERRIDE = "unmatched-override"
    NO_CONSTRUCTOR = "no-constructor"
    DUPLICATE_ACCESSOR = "duplicate-accessor"
    PIPELINE_FAILURE = "pipeline-failure"


@dataclass
class Diagnostic:
    """클래스 처리 중 수집된 진단 정보 (치명적이지 않음)"""
    kind: DiagnosticKind
    class_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.class_name}: [{self.kind.value}] {self.message}"
