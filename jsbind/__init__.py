"""
jsbind - 네이티브 클래스 -> 스크립트 바인딩용 클래스 메타데이터 모델

네이티브 클래스 설명(이름, 베이스 클래스, 멤버 함수, 배열 마샬링 힌트)을 받아
Preprocess / Process / PostProcess 파이프라인으로 코드 생성 직전 상태까지 해석합니다.
"""

from .types import JSBType, TypeKind
from .function import JSBFunction, Parameter
from .override import JSBFunctionOverride
from .property import JSBProperty, PropertySynthesizer
from .jsb_class import JSBClass, PipelineState
from .package import JSBPackage, JSBModule, JSBHeader
from .config import BindingConfig, NUMBER_ARRAY_HINTS
from .loader import PackageLoader
from .dump import ClassDumper
from .errors import (
    JSBindError, CyclicBaseClassError, PipelineOrderError, ClassFinalizedError,
    InvalidNumberArrayError, UnresolvedTypeError, Diagnostic, DiagnosticKind,
)

__all__ = [
    'JSBType', 'TypeKind',
    'JSBFunction', 'Parameter',
    'JSBFunctionOverride',
    'JSBProperty', 'PropertySynthesizer',
    'JSBClass', 'PipelineState',
    'JSBPackage', 'JSBModule', 'JSBHeader',
    'BindingConfig', 'NUMBER_ARRAY_HINTS',
    'PackageLoader',
    'ClassDumper',
    'JSBindError', 'CyclicBaseClassError', 'PipelineOrderError', 'ClassFinalizedError',
    'InvalidNumberArrayError', 'UnresolvedTypeError', 'Diagnostic', 'DiagnosticKind',
]
