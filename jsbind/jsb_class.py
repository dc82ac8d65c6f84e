"""
바인딩 클래스 모듈
네이티브 클래스 하나의 메타데이터와 Preprocess -> Process -> PostProcess
해석 파이프라인을 담당합니다.
"""

from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from .errors import (
    ClassFinalizedError, CyclicBaseClassError, Diagnostic, DiagnosticKind,
    InvalidNumberArrayError, JSBindError, PipelineOrderError, UnresolvedTypeError,
)
from .function import JSBFunction
from .override import JSBFunctionOverride
from .property import JSBProperty, PropertySynthesizer

if TYPE_CHECKING:
    from .package import JSBHeader, JSBModule, JSBPackage


class PipelineState(Enum):
    INITIAL = 0
    PREPROCESSED = 1
    PROCESSED = 2
    FINALIZED = 3


class JSBClass:
    """바인딩 대상 네이티브 클래스"""

    def __init__(self, module: Optional['JSBModule'], name: str, native_name: str = ""):
        self.name = name
        self.native_name = native_name or name
        self.module = module
        self.header: Optional['JSBHeader'] = None

        self.functions: List[JSBFunction] = []
        self.overrides: List[JSBFunctionOverride] = []
        self.diagnostics: List[Diagnostic] = []

        self.state = PipelineState.INITIAL

        self._base_class: Optional['JSBClass'] = None
        self._skip_functions: Dict[str, bool] = {}
        self._synthesizer = PropertySynthesizer()

        self._is_abstract = False
        self._is_object = False
        self._has_properties = False

        # Vector3, Color 등은 숫자 배열로 마샬링
        self._number_array_elements = 0
        self._array_element_type = ""

    def __repr__(self) -> str:
        return f"JSBClass({self.name})"

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def get_name(self) -> str:
        return self.name

    def get_native_name(self) -> str:
        return self.native_name

    def get_header(self) -> Optional['JSBHeader']:
        return self.header

    def get_module(self) -> Optional['JSBModule']:
        return self.module

    def get_package(self) -> Optional['JSBPackage']:
        return self.module.package if self.module else None

    def is_abstract(self) -> bool:
        return self._is_abstract

    def is_object(self) -> bool:
        return self._is_object

    def has_properties(self) -> bool:
        return self._has_properties

    def is_number_array(self) -> bool:
        return self._number_array_elements != 0

    def get_number_array_elements(self) -> int:
        return self._number_array_elements

    def get_array_element_type(self) -> str:
        return self._array_element_type

    def is_finalized(self) -> bool:
        return self.state == PipelineState.FINALIZED

    def has_failed(self) -> bool:
        return any(d.kind == DiagnosticKind.PIPELINE_FAILURE for d in self.diagnostics)

    @property
    def properties(self) -> Dict[str, JSBProperty]:
        return self._synthesizer.properties

    def get_property_names(self) -> List[str]:
        return list(self.properties.keys())

    def get_property(self, name: str) -> Optional[JSBProperty]:
        return self.properties.get(name)

    def get_functions(self, include_skipped: bool = False) -> List[JSBFunction]:
        """노출할 함수 목록 (include_skipped=True면 원본 전체)"""
        if include_skipped:
            return list(self.functions)
        return [f for f in self.functions if not f.skip]

    def get_constructor(self) -> Optional[JSBFunction]:
        """사용 가능한 첫 생성자. 추상 클래스는 항상 None"""
        if self._is_abstract:
            return None

        for function in self.functions:
            if function.is_constructor and not function.skip:
                return function

        return None

    # ------------------------------------------------------------------
    # 베이스 클래스
    # ------------------------------------------------------------------

    def get_base_class(self) -> Optional['JSBClass']:
        return self._base_class

    def get_base_classes(self) -> List['JSBClass']:
        """조상 체인 (가까운 순서, 중복 없음)"""
        bases = []
        seen = {id(self)}
        current = self._base_class
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            bases.append(current)
            current = current._base_class
        return bases

    def set_base_class(self, base_class: Optional['JSBClass']):
        """
        직계 부모 지정. 자기 자신이나 자손을 부모로 지정하면 순환이 생기므로 거부

        Raises:
            CyclicBaseClassError: 순환 상속이 생기는 경우 (기존 링크는 유지)
        """
        self._check_mutable()

        if base_class is not None:
            if base_class is self or self in base_class.get_base_classes():
                raise CyclicBaseClassError(self.name, base_class.name)

        self._base_class = base_class

    # ------------------------------------------------------------------
    # 파서가 호출하는 변경 함수들
    # ------------------------------------------------------------------

    def set_abstract(self, value: bool = True):
        self._check_mutable()
        self._is_abstract = value

    def set_object(self, value: bool = True):
        self._check_mutable()
        self._is_object = value

    def set_header(self, header: 'JSBHeader'):
        self._check_mutable()
        self.header = header

    def set_number_array(self, elements: int, element_type: str):
        """고정 길이 숫자 배열 마샬링 힌트 (elements=0이면 해제)"""
        self._check_mutable()

        if elements < 0:
            raise InvalidNumberArrayError(f"{self.name}: negative array element count {elements}")
        if elements > 0 and not element_type:
            raise InvalidNumberArrayError(f"{self.name}: number array requires an element type")

        self._number_array_elements = elements
        self._array_element_type = element_type if elements else ""

    def set_skip_function(self, name: str, skip: bool = True):
        """이름이 같은 함수 모두에 skip 표시 (Preprocess에서 다시 적용됨)"""
        self._check_mutable()
        self._skip_functions[name] = skip
        for function in self.functions:
            if function.name == name:
                function.skip = skip

    def add_function(self, function: JSBFunction):
        self._check_mutable()
        self.functions.append(function)

    def add_function_override(self, override: JSBFunctionOverride):
        self._check_mutable()
        self.overrides.append(override)

    def add_property_function(self, function: JSBFunction) -> Optional[JSBProperty]:
        """getter/setter 함수를 프로퍼티에 연결 (같은 슬롯은 마지막 함수가 이김)"""
        self._check_mutable()

        replaced_before = len(self._synthesizer.replaced)
        prop = self._synthesizer.attach(function)
        if prop is None:
            return None

        for old, new in self._synthesizer.replaced[replaced_before:]:
            self.report(
                DiagnosticKind.DUPLICATE_ACCESSOR,
                f"property {prop.name}: {new.signature()} replaces {old.signature()}"
            )

        self._has_properties = True
        return prop

    # ------------------------------------------------------------------
    # 해석 파이프라인
    # ------------------------------------------------------------------

    def preprocess(self, resolver: Optional['JSBPackage'] = None):
        """skip 표시 적용 + 오버라이드 시그니처 해석"""
        self._require_state(PipelineState.INITIAL, "Preprocess")
        resolver = self._resolver(resolver)
        if resolver is None and self.overrides:
            raise JSBindError(f"{self.name}: no type resolver for function overrides")

        for function in self.functions:
            if function.name in self._skip_functions:
                function.skip = self._skip_functions[function.name]

        kept = []
        for override in self.overrides:
            try:
                override.parse(resolver)
            except UnresolvedTypeError as e:
                # 오버라이드를 버리면 해당 함수는 모든 오버로드가 노출됨
                self.report(DiagnosticKind.UNRESOLVED_TYPE, f"{e}, override dropped")
                continue
            kept.append(override)
        self.overrides = kept

        self.state = PipelineState.PREPROCESSED

    def process(self, resolver: Optional['JSBPackage'] = None):
        """오버로드 선택, 추상 생성자 제외, 프로퍼티 합성, 숫자 배열 힌트 적용"""
        self._require_state(PipelineState.PREPROCESSED, "Process")

        unparsed = [o for o in self.overrides if not o.parsed]
        if unparsed:
            raise PipelineOrderError(
                f"{self.name}: Process called with unparsed overrides {unparsed}"
            )

        resolver = self._resolver(resolver)

        # 잘못된 힌트는 함수/프로퍼티를 건드리기 전에 실패해야 함
        if not self.is_number_array() and resolver is not None:
            hint = resolver.get_number_array_hint(self.name)
            if hint:
                self.set_number_array(*hint)

        self._apply_overrides()

        for function in self.functions:
            if function.skip:
                continue

            if function.is_constructor:
                if self._is_abstract:
                    function.skip = True
                continue

            if function.is_getter or function.is_setter:
                self.add_property_function(function)

        if not self._is_object:
            if any(base.is_object() for base in self.get_base_classes()):
                self._is_object = True

        self.state = PipelineState.PROCESSED

    def postprocess(self):
        """최종 일관성 검사 후 클래스 고정"""
        self._require_state(PipelineState.PROCESSED, "PostProcess")

        self._has_properties = bool(self.properties)

        if (not self._is_abstract and not self.is_number_array()
                and self.get_constructor() is None):
            self.report(DiagnosticKind.NO_CONSTRUCTOR, "no usable constructor")

        self.state = PipelineState.FINALIZED

    def dump(self) -> str:
        from .dump import ClassDumper
        return ClassDumper().render(self)

    # ------------------------------------------------------------------
    # 내부 함수
    # ------------------------------------------------------------------

    def _function_key(self, function: JSBFunction) -> str:
        return self.name if function.is_constructor else function.name

    def _apply_overrides(self):
        """오버라이드와 정확히 일치하는 오버로드만 남기고 형제 오버로드는 skip"""
        chosen: Dict[str, List[JSBFunction]] = {}

        for override in self.overrides:
            matches = [
                f for f in self.functions
                if not f.skip and self._function_key(f) == override.name
                and f.matches_signature(override.types)
            ]

            if not matches:
                self.report(
                    DiagnosticKind.UNMATCHED_OVERRIDE,
                    f"override {override.name}({', '.join(override.sig)}) matches no function"
                )
                continue

            if len(matches) > 1:
                self.report(
                    DiagnosticKind.AMBIGUOUS_OVERLOAD,
                    f"override {override.name}({', '.join(override.sig)}) matches "
                    f"{len(matches)} functions, using the first"
                )

            chosen.setdefault(override.name, []).append(matches[0])

        for name, keep in chosen.items():
            for function in self.functions:
                if self._function_key(function) != name:
                    continue
                if not any(function is k for k in keep):
                    function.skip = True

    def _resolver(self, resolver):
        return resolver if resolver is not None else self.get_package()

    def _require_state(self, expected: PipelineState, phase: str):
        if self.state != expected:
            raise PipelineOrderError(
                f"{self.name}: {phase} requires state {expected.name}, "
                f"class is {self.state.name}"
            )

    def _check_mutable(self):
        if self.state == PipelineState.FINALIZED:
            raise ClassFinalizedError(f"{self.name} is finalized and cannot be modified")

    def report(self, kind: DiagnosticKind, message: str):
        diagnostic = Diagnostic(kind=kind, class_name=self.name, message=message)
        self.diagnostics.append(diagnostic)
        print(f"[JSBClass] Warning: {diagnostic}")
