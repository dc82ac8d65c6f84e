"""
패키지 설명 로더
헤더 파서가 만든 JSON 설명을 읽어 JSBPackage / JSBModule / JSBClass를 구성합니다.
"""

import json
from pathlib import Path
from typing import List, Tuple

from .config import BindingConfig
from .errors import CyclicBaseClassError, DiagnosticKind, InvalidNumberArrayError
from .function import JSBFunction, Parameter
from .jsb_class import JSBClass
from .override import JSBFunctionOverride
from .package import JSBPackage
from .types import JSBType, TypeKind, strip_decorations


class PackageLoader:
    """JSON 패키지 설명 -> JSBPackage"""

    def load(self, json_path: Path) -> JSBPackage:
        """JSON 파일에서 패키지 로드"""
        data = json.loads(Path(json_path).read_text(encoding='utf-8'))
        return self.from_dict(data)

    def from_dict(self, data: dict) -> JSBPackage:
        """
        딕셔너리에서 패키지 구성

        1. 모든 클래스 생성 (파라미터 타입이 뒤에 선언된 클래스를 참조할 수 있도록)
        2. 베이스 클래스 연결
        3. 함수, 제외 목록, 오버라이드 추가
        """
        config = BindingConfig.from_dict(data)
        package = JSBPackage(data.get('name', 'Package'), config)

        for enum_name in data.get('enums', []):
            package.register_enum(enum_name)

        pending: List[Tuple[JSBClass, dict]] = []

        for module_data in data.get('modules', []):
            module = package.create_module(module_data['name'])
            module_header = None
            if module_data.get('header'):
                module_header = module.add_header(Path(module_data['header']))

            for class_data in module_data.get('classes', []):
                header = module_header
                if class_data.get('header'):
                    header = module.add_header(Path(class_data['header']))

                klass = module.create_class(
                    class_data['name'], class_data.get('native_name', ''), header
                )
                klass.set_abstract(
                    class_data.get('abstract', False) or klass.name in config.abstract_classes
                )
                klass.set_object(class_data.get('object', False))
                if class_data.get('number_array'):
                    try:
                        klass.set_number_array(*class_data['number_array'])
                    except InvalidNumberArrayError as e:
                        klass.report(DiagnosticKind.PIPELINE_FAILURE, str(e))

                pending.append((klass, class_data))

            print(f"[PackageLoader] Loaded module {module.name} ({len(module.classes)} classes)")

        for klass, class_data in pending:
            self._link_base_class(package, klass, class_data.get('base'))

        for klass, class_data in pending:
            for func_data in class_data.get('functions', []):
                klass.add_function(self._build_function(package, func_data))

            for func_name in config.get_excludes(klass.name):
                klass.set_skip_function(func_name)

            for func_name, signatures in config.get_overloads(klass.name).items():
                for sig in signatures:
                    klass.add_function_override(JSBFunctionOverride(func_name, sig))

        return package

    @staticmethod
    def _link_base_class(package: JSBPackage, klass: JSBClass, base_name):
        if not base_name:
            return

        base_class = package.get_class(base_name)
        if base_class is None:
            # 바인딩 대상이 아닌 베이스 (예: 외부 라이브러리 클래스)
            print(f"[PackageLoader] {klass.name}: base class {base_name} is not bound, ignored")
            return

        try:
            klass.set_base_class(base_class)
        except CyclicBaseClassError as e:
            klass.report(DiagnosticKind.PIPELINE_FAILURE, str(e))

    def _build_function(self, package: JSBPackage, data: dict) -> JSBFunction:
        name = data['name']

        return_name = data.get('return')
        return_type = None
        if return_name and return_name != 'void':
            return_type = self._resolve(package, return_name)

        parameters = []
        for i, param in enumerate(data.get('params', [])):
            if isinstance(param, str):
                type_name, param_name = param, f"arg{i}"
            else:
                type_name, param_name = param['type'], param.get('name', f"arg{i}")

            parameters.append(Parameter(
                name=param_name,
                type=self._resolve(package, type_name),
                is_const='const' in type_name.replace('*', ' ').replace('&', ' ').split(),
                is_reference='&' in type_name,
                is_pointer='*' in type_name,
            ))

        function = JSBFunction(
            name=name,
            return_type=return_type,
            parameters=parameters,
            is_constructor=data.get('constructor', False),
            is_destructor=data.get('destructor', False) or name.startswith('~'),
            is_static=data.get('static', False),
            skip=data.get('skip', False),
        )

        if 'getter' in data or 'setter' in data:
            # 명시된 역할이 이름 규칙보다 우선
            function.is_getter = data.get('getter', False)
            function.is_setter = data.get('setter', False)
        else:
            function.detect_accessor_role()

        return function

    @staticmethod
    def _resolve(package: JSBPackage, type_name: str) -> JSBType:
        """알 수 없는 타입은 이름만 가진 클래스 참조로 남김"""
        jtype = package.resolve_type(type_name)
        if jtype is None:
            jtype = JSBType(strip_decorations(type_name), TypeKind.CLASS)
        return jtype
