"""
패키지 로더, 설정, 일괄 처리, CLI 테스트
"""

import json

import pytest

from jsbind import (
    BindingConfig, DiagnosticKind, JSBindError, JSBPackage, NUMBER_ARRAY_HINTS,
    PackageLoader, TypeKind,
)
from jsbind.__main__ import main


PACKAGE_DESCRIPTION = {
    "name": "Atomic",
    "enums": ["CreateMode"],
    "modules": [
        {
            "name": "Scene",
            "header": "Scene/Node.h",
            "classes": [
                {
                    "name": "Node",
                    "native_name": "Atomic::Node",
                    "base": "Animatable",
                    "functions": [
                        {"name": "Node", "constructor": True},
                        {"name": "CreateChild", "return": "Node*",
                         "params": ["const String&", "CreateMode", "unsigned"]},
                        {"name": "CreateChild", "return": "Node*",
                         "params": [{"type": "const String&", "name": "name"}]},
                        {"name": "GetPosition", "return": "const Vector3&"},
                        {"name": "SetPosition", "params": ["const Vector3&"]},
                        {"name": "GetScene", "return": "Scene*"},
                    ],
                },
                {
                    "name": "Animatable",
                    "base": "Serializable",
                    "abstract": True,
                    "functions": [],
                },
            ],
        },
        {
            "name": "Math",
            "classes": [
                {
                    "name": "Vector3",
                    "header": "Math/Vector3.h",
                    "functions": [
                        {"name": "GetX", "return": "float"},
                        {"name": "SetX", "params": ["float"]},
                    ],
                },
            ],
        },
    ],
    "overloads": {
        "Node": {"CreateChild": [["String", "CreateMode", "unsigned"]]},
    },
    "excludes": {
        "Node": ["GetScene"],
    },
}


class TestBindingConfig:

    def test_defaults(self):
        config = BindingConfig()
        assert config.number_arrays == NUMBER_ARRAY_HINTS
        assert config.number_arrays is not NUMBER_ARRAY_HINTS

    def test_from_dict_merges(self):
        config = BindingConfig.from_dict({
            "number_arrays": {"Matrix3": [9, "float"], "Color": None},
            "overloads": {"Node": {"Foo": ["int"], "Bar": [["int"], []], "Baz": []}},
            "excludes": {"Node": ["Remove"]},
            "abstract_classes": ["Component"],
        })

        assert config.number_arrays["Matrix3"] == (9, "float")
        assert "Color" not in config.number_arrays
        assert config.get_overloads("Node") == {
            "Foo": [["int"]], "Bar": [["int"], []], "Baz": [[]],
        }
        assert config.get_excludes("Node") == ["Remove"]
        assert config.get_excludes("Other") == []
        assert config.abstract_classes == ["Component"]


class TestPackageLoader:

    @pytest.fixture
    def package(self):
        return PackageLoader().from_dict(PACKAGE_DESCRIPTION)

    def test_structure(self, package):
        assert [m.name for m in package.modules] == ["Scene", "Math"]
        node = package.get_class("Atomic::Node")
        assert node is package.get_class("Node")
        assert node.get_module().name == "Scene"
        assert node.get_header().file_path.as_posix() == "Scene/Node.h"
        assert package.get_class("Vector3").get_header().file_path.as_posix() == "Math/Vector3.h"

    def test_base_linked_even_when_declared_later(self, package):
        node = package.get_class("Node")
        # Serializable은 바인딩 대상이 아니므로 체인에서 빠짐
        assert [b.name for b in node.get_base_classes()] == ["Animatable"]

    def test_parameter_types(self, package):
        node = package.get_class("Node")
        create_child = node.functions[1]
        assert [str(t) for t in create_child.parameter_types()] == ["String", "CreateMode", "unsigned"]
        assert create_child.parameters[0].is_const and create_child.parameters[0].is_reference
        assert create_child.return_type.kind == TypeKind.CLASS
        # 바인딩 대상이 아닌 타입도 이름으로 남음
        assert node.functions[5].return_type.name == "Scene"

    def test_accessor_roles_detected(self, package):
        node = package.get_class("Node")
        roles = {f.name: (f.is_getter, f.is_setter) for f in node.functions}
        assert roles["GetPosition"] == (True, False)
        assert roles["SetPosition"] == (False, True)
        assert roles["CreateChild"] == (False, False)

    def test_process_classes(self, package, capsys):
        ordered = package.process_classes()

        assert [k.name for k in ordered].index("Animatable") < [k.name for k in ordered].index("Node")
        assert all(k.is_finalized() for k in ordered)

        node = package.get_class("Node")
        exposed = [f.name for f in node.get_functions()]
        assert exposed == ["Node", "CreateChild", "GetPosition", "SetPosition"]
        assert len(node.get_constructor().parameters) == 0
        assert node.get_property_names() == ["Position"]
        assert node.diagnostics == []

        vector3 = package.get_class("Vector3")
        assert vector3.is_number_array()
        assert vector3.get_property("X").setter.name == "SetX"

        assert "[JSBPackage] Processed 3 classes" in capsys.readouterr().out

    def test_explicit_roles(self):
        data = {
            "modules": [{"name": "M", "classes": [{
                "name": "Light",
                "functions": [
                    {"name": "Light", "constructor": True},
                    {"name": "GetColor", "return": "int", "getter": False},
                    {"name": "Brightness", "return": "float", "getter": True},
                ],
            }]}],
        }
        package = PackageLoader().from_dict(data)
        package.process_classes()

        light = package.get_class("Light")
        assert light.get_property_names() == ["Brightness"]

    def test_load_file(self, tmp_path):
        path = tmp_path / "Atomic.json"
        path.write_text(json.dumps(PACKAGE_DESCRIPTION), encoding="utf-8")

        package = PackageLoader().load(path)
        assert package.name == "Atomic"
        assert package.resolve_type("CreateMode").kind == TypeKind.ENUM


class TestFailureIsolation:

    def test_one_failing_class_does_not_stop_others(self, make_function):
        package = JSBPackage("Atomic")
        module = package.create_module("Core")
        broken = module.create_class("Broken")
        ok = module.create_class("Ok")
        ok.add_function(make_function("Ok", is_constructor=True))

        # Preprocess를 이미 수행한 클래스 -> 다시 돌리면 PipelineOrderError
        broken.preprocess(package)

        package.process_classes()

        assert [d.kind for d in broken.diagnostics] == [DiagnosticKind.PIPELINE_FAILURE]
        assert broken.has_failed()
        assert ok.is_finalized()
        assert ok.diagnostics == []

    def test_bad_number_array_hint_isolated(self, capsys):
        data = {
            "modules": [{"name": "M", "classes": [
                {"name": "Bad", "functions": [{"name": "GetX", "return": "float"}]},
                {"name": "Ok", "functions": [{"name": "Ok", "constructor": True}]},
            ]}],
            "number_arrays": {"Bad": [3, ""]},
        }
        package = PackageLoader().from_dict(data)

        package.process_classes()

        bad, ok = package.get_class("Bad"), package.get_class("Ok")
        assert [d.kind for d in bad.diagnostics] == [DiagnosticKind.PIPELINE_FAILURE]
        assert "element type" in bad.diagnostics[0].message
        assert bad.properties == {}
        assert ok.is_finalized()
        assert ok.diagnostics == []
        assert "1 failed" in capsys.readouterr().out

    def test_bad_class_number_array_in_description(self):
        data = {
            "modules": [{"name": "M", "classes": [
                {"name": "Bad", "number_array": [-2, "float"]},
                {"name": "Ok", "functions": [{"name": "Ok", "constructor": True}]},
            ]}],
        }
        package = PackageLoader().from_dict(data)
        bad = package.get_class("Bad")
        assert bad.has_failed()

        package.process_classes()

        assert not bad.is_finalized()
        assert package.get_class("Ok").is_finalized()

    def test_duplicate_class_rejected(self, module):
        module.create_class("Node")
        with pytest.raises(JSBindError):
            module.create_class("Node")

    def test_duplicate_native_name_rejected(self, package, module):
        node = module.create_class("Node", "Atomic::Node")
        with pytest.raises(JSBindError):
            module.create_class("SceneNode", "Atomic::Node")

        assert package.get_class("Atomic::Node") is node
        assert package.get_class("SceneNode") is None
        assert [k.name for k in module.classes] == ["Node"]

    def test_cyclic_base_in_description(self):
        data = {
            "modules": [{"name": "M", "classes": [
                {"name": "A", "base": "B"},
                {"name": "B", "base": "A"},
            ]}],
        }
        package = PackageLoader().from_dict(data)
        b = package.get_class("B")
        assert b.has_failed()

        package.process_classes()

        a = package.get_class("A")
        assert a.is_finalized()
        assert not b.is_finalized()
        assert a.get_base_classes() == [b]


class TestCommandLine:

    def test_dump_selected_class(self, tmp_path, capsys):
        path = tmp_path / "Atomic.json"
        path.write_text(json.dumps(PACKAGE_DESCRIPTION), encoding="utf-8")

        assert main([str(path), "--class", "Vector3"]) == 0

        out = capsys.readouterr().out
        assert "Class: Vector3" in out
        assert "Class: Node" not in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "file not found" in capsys.readouterr().out

    def test_failure_exit_code(self, tmp_path):
        path = tmp_path / "cycle.json"
        path.write_text(json.dumps({
            "modules": [{"name": "M", "classes": [
                {"name": "A", "base": "B"},
                {"name": "B", "base": "A"},
            ]}],
        }), encoding="utf-8")

        assert main([str(path), "--quiet"]) == 1
