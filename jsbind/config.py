"""
바인딩 설정 모듈
숫자 배열 마샬링 힌트, 오버로드 선택, 제외 함수 목록을 관리합니다.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


# 클래스 이름 -> (원소 개수, 원소 타입)
NUMBER_ARRAY_HINTS: Dict[str, Tuple[int, str]] = {
    "Color": (4, "float"),
    "Vector2": (2, "float"),
    "Vector3": (3, "float"),
    "Vector4": (4, "float"),
    "Quaternion": (4, "float"),
    "IntVector2": (2, "int"),
    "IntRect": (4, "int"),
    "Rect": (4, "float"),
    "BoundingBox": (6, "float"),
}


@dataclass
class BindingConfig:
    """패키지 단위 바인딩 설정"""
    number_arrays: Dict[str, Tuple[int, str]] = field(
        default_factory=lambda: dict(NUMBER_ARRAY_HINTS)
    )
    # 클래스 -> 함수 -> 시그니처 목록
    overloads: Dict[str, Dict[str, List[List[str]]]] = field(default_factory=dict)
    # 클래스 -> 제외할 함수 이름
    excludes: Dict[str, List[str]] = field(default_factory=dict)
    abstract_classes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'BindingConfig':
        """패키지 설명 JSON의 설정 섹션을 기본값 위에 병합"""
        config = cls()

        for class_name, hint in data.get('number_arrays', {}).items():
            if hint is None:
                # null이면 기본 힌트 제거
                config.number_arrays.pop(class_name, None)
                continue
            elements, element_type = hint
            config.number_arrays[class_name] = (int(elements), str(element_type))

        for class_name, functions in data.get('overloads', {}).items():
            class_overloads = config.overloads.setdefault(class_name, {})
            for func_name, signatures in functions.items():
                # ["int", "String"] 하나만 적은 경우도 허용 ([]는 인자 없는 오버로드)
                if all(isinstance(s, str) for s in signatures):
                    signatures = [signatures]
                class_overloads.setdefault(func_name, []).extend(
                    list(sig) for sig in signatures
                )

        for class_name, names in data.get('excludes', {}).items():
            config.excludes.setdefault(class_name, []).extend(names)

        config.abstract_classes.extend(data.get('abstract_classes', []))

        return config

    def get_overloads(self, class_name: str) -> Dict[str, List[List[str]]]:
        return self.overloads.get(class_name, {})

    def get_excludes(self, class_name: str) -> List[str]:
        return self.excludes.get(class_name, [])
