"""
프로퍼티 합성 모듈
GetX / SetX 함수 쌍을 하나의 프로퍼티 X로 묶습니다.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .function import JSBFunction


@dataclass
class JSBProperty:
    """프로퍼티 정보 (getter/setter는 클래스 함수 목록을 참조만 함)"""
    name: str
    getter: Optional[JSBFunction] = None
    setter: Optional[JSBFunction] = None


class PropertySynthesizer:
    """
    getter/setter 관찰을 누적해서 프로퍼티 맵을 만듭니다.

    같은 슬롯에 다른 함수가 다시 들어오면 마지막 함수가 이깁니다.
    덮어쓴 경우는 replaced에 (이전 함수, 새 함수)로 기록됩니다.
    """

    def __init__(self):
        self.properties: Dict[str, JSBProperty] = {}
        self.replaced: List[Tuple[JSBFunction, JSBFunction]] = []

    def attach(self, function: JSBFunction) -> Optional[JSBProperty]:
        """함수를 프로퍼티 슬롯에 연결. getter/setter가 아니면 None"""
        if not function.is_getter and not function.is_setter:
            return None

        name = function.property_name
        prop = self.properties.get(name)
        if prop is None:
            prop = JSBProperty(name=name)
            self.properties[name] = prop

        if function.is_getter:
            if prop.getter is not None and prop.getter is not function:
                self.replaced.append((prop.getter, function))
            prop.getter = function
        else:
            if prop.setter is not None and prop.setter is not function:
                self.replaced.append((prop.setter, function))
            prop.setter = function

        return prop
