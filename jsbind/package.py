"""
패키지/모듈/헤더 모듈
클래스 수명과 패키지 단위 이름 조회(클래스, 타입)를 담당합니다.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .config import BindingConfig
from .errors import DiagnosticKind, JSBindError
from .jsb_class import JSBClass
from .types import JSBType, TypeKind, resolve_builtin_type, strip_decorations


class JSBHeader:
    """클래스가 선언된 헤더 파일"""

    def __init__(self, module: 'JSBModule', file_path: Path):
        self.module = module
        self.file_path = Path(file_path)
        self.classes: List[JSBClass] = []

    def __repr__(self) -> str:
        return f"JSBHeader({self.file_path.as_posix()})"


class JSBModule:
    """패키지 안의 바인딩 모듈 (클래스 소유)"""

    def __init__(self, package: 'JSBPackage', name: str):
        self.package = package
        self.name = name
        self.headers: List[JSBHeader] = []
        self.classes: List[JSBClass] = []

    def get_package(self) -> 'JSBPackage':
        return self.package

    def add_header(self, file_path: Path) -> JSBHeader:
        header = JSBHeader(self, file_path)
        self.headers.append(header)
        return header

    def create_class(self, name: str, native_name: str = "",
                     header: Optional[JSBHeader] = None) -> JSBClass:
        """클래스 생성 후 모듈/패키지에 등록"""
        klass = JSBClass(self, name, native_name)
        if header is not None:
            klass.set_header(header)
            header.classes.append(klass)

        self.package.register_class(klass)
        self.classes.append(klass)
        return klass


class JSBPackage:
    """패키지 전체 클래스 레지스트리 + 타입 해석기"""

    def __init__(self, name: str, config: Optional[BindingConfig] = None):
        self.name = name
        self.config = config or BindingConfig()
        self.modules: List[JSBModule] = []
        self.enums: Dict[str, JSBType] = {}
        self._classes: Dict[str, JSBClass] = {}
        self._native_names: Dict[str, JSBClass] = {}

    def create_module(self, name: str) -> JSBModule:
        module = JSBModule(self, name)
        self.modules.append(module)
        return module

    def get_module(self, name: str) -> Optional[JSBModule]:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def register_class(self, klass: JSBClass):
        if klass.name in self._classes:
            raise JSBindError(f"Duplicate class {klass.name} in package {self.name}")
        if klass.native_name in self._native_names:
            other = self._native_names[klass.native_name]
            raise JSBindError(
                f"Duplicate native name {klass.native_name} for {klass.name} "
                f"(already used by {other.name}) in package {self.name}"
            )
        self._classes[klass.name] = klass
        self._native_names[klass.native_name] = klass

    def register_enum(self, name: str) -> JSBType:
        jtype = JSBType(name, TypeKind.ENUM)
        self.enums[name] = jtype
        return jtype

    def get_class(self, name: str) -> Optional[JSBClass]:
        """논리 이름 또는 네이티브 이름으로 클래스 조회"""
        return self._classes.get(name) or self._native_names.get(name)

    def get_classes(self) -> List[JSBClass]:
        return list(self._classes.values())

    def resolve_type(self, type_name: str) -> Optional[JSBType]:
        """프리미티브 -> 문자열 -> enum -> 클래스 순서로 타입 조회 (없으면 None)"""
        builtin = resolve_builtin_type(type_name)
        if builtin is not None:
            return builtin

        name = strip_decorations(type_name)
        if name in self.enums:
            return self.enums[name]

        klass = self.get_class(name)
        if klass is not None:
            return JSBType(klass.name, TypeKind.CLASS)

        return None

    def get_number_array_hint(self, class_name: str) -> Optional[Tuple[int, str]]:
        return self.config.number_arrays.get(class_name)

    def process_classes(self, classes: Optional[Iterable[JSBClass]] = None) -> List[JSBClass]:
        """
        클래스들을 베이스 -> 파생 순서로 하나씩 해석합니다.
        한 클래스의 실패는 기록만 하고 나머지 클래스 처리는 계속합니다.

        Returns:
            처리 순서대로 정렬된 클래스 리스트
        """
        ordered = self._dependency_order(classes if classes is not None else self.get_classes())

        failed = 0
        for klass in ordered:
            if klass.has_failed():
                # 로드 단계에서 구조 오류가 난 클래스는 해석하지 않음
                failed += 1
                continue

            try:
                klass.preprocess(self)
                klass.process(self)
                klass.postprocess()
            except JSBindError as e:
                failed += 1
                klass.report(DiagnosticKind.PIPELINE_FAILURE, str(e))

        with_diagnostics = sum(1 for k in ordered if k.diagnostics)
        print(f"[JSBPackage] Processed {len(ordered)} classes "
              f"({with_diagnostics} with diagnostics, {failed} failed)")

        return ordered

    @staticmethod
    def _dependency_order(classes: Iterable[JSBClass]) -> List[JSBClass]:
        """베이스 클래스가 먼저 오도록 정렬 (그 외에는 선언 순서 유지)"""
        classes = list(classes)
        selected = {id(k) for k in classes}
        ordered: List[JSBClass] = []
        visited = set()

        for klass in classes:
            chain = [klass] + klass.get_base_classes()
            for item in reversed(chain):
                if id(item) in selected and id(item) not in visited:
                    visited.add(id(item))
                    ordered.append(item)

        return ordered
