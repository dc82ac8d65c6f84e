"""
클래스 덤프 모듈
해석된 클래스 정보를 디버깅용 텍스트로 출력합니다.
"""

from jinja2 import Template

from .jsb_class import JSBClass


DUMP_TEMPLATE = """
Class: {{ cls.name }} ({{ cls.native_name }})
{%- if module %}
    Module: {{ module }}
{%- endif %}
{%- if header %}
    Header: {{ header }}
{%- endif %}
    State: {{ cls.state.name }}
    Abstract: {{ 'yes' if cls.is_abstract() else 'no' }}, Object: {{ 'yes' if cls.is_object() else 'no' }}
{%- if cls.is_number_array() %}
    NumberArray: {{ cls.get_number_array_elements() }} x {{ cls.get_array_element_type() }}
{%- endif %}
{%- if bases %}
    Bases: {{ bases | join(' -> ') }}
{%- endif %}
{%- if functions %}
    Functions:
    {%- for func in functions %}
        {{ func.signature() }}{% if func.is_constructor %} [constructor]{% endif %}{% if func.is_static %} [static]{% endif %}{% if func.skip %} [skipped]{% endif %}
    {%- endfor %}
{%- endif %}
{%- if properties %}
    Properties:
    {%- for prop in properties %}
        {{ prop.name }}: get={{ prop.getter.name if prop.getter else '-' }} set={{ prop.setter.name if prop.setter else '-' }}
    {%- endfor %}
{%- endif %}
{%- if cls.diagnostics %}
    Diagnostics:
    {%- for diag in cls.diagnostics %}
        [{{ diag.kind.value }}] {{ diag.message }}
    {%- endfor %}
{%- endif %}
"""


class ClassDumper:
    """JSBClass 덤프 생성기"""

    def __init__(self):
        self.template = Template(DUMP_TEMPLATE)

    def render(self, cls: JSBClass) -> str:
        module = cls.get_module()
        header = cls.get_header()
        return self.template.render(
            cls=cls,
            module=module.name if module else "",
            header=header.file_path.as_posix() if header else "",
            bases=[b.name for b in cls.get_base_classes()],
            functions=cls.get_functions(include_skipped=True),
            properties=list(cls.properties.values()),
        )
